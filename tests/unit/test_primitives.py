"""
Unit tests for encoding helpers, salt and pepper generators and Hash.
"""

import pytest

from passforge.core.exceptions import FormatError, InvalidParametersError
from passforge.hashing.encoding import b64decode, b64encode, bcrypt_b64decode, bcrypt_b64encode
from passforge.hashing.hash import Hash
from passforge.hashing.salt import PepperGenerator, SaltGenerator
from passforge.hashing.scrypt import ScryptFunction


class TestBase64:
    """Tests for the standard base64 helpers."""

    def test_padding_optional(self):
        """Encoding can drop padding and decoding restores it."""
        assert b64encode(b"ab") == "YWI="
        assert b64encode(b"ab", padding=False) == "YWI"
        assert b64decode("YWI") == b"ab"
        assert b64decode("YWI=") == b"ab"

    def test_invalid_characters(self):
        """Characters outside the alphabet are a FormatError with context."""
        with pytest.raises(FormatError) as exc_info:
            b64decode("YW*=", algorithm="scrypt", field="salt")
        assert exc_info.value.context == {"algorithm": "scrypt", "field": "salt"}

    def test_impossible_length(self):
        """A length of 4n+1 cannot be base64."""
        with pytest.raises(FormatError):
            b64decode("YWJjZ")


class TestBcryptBase64:
    """Tests for bcrypt's base64 alphabet."""

    def test_zero_bytes(self):
        """Zero bytes encode to dots."""
        assert bcrypt_b64encode(bytes(16)) == "." * 22

    def test_alphabet(self):
        """bcrypt's alphabet starts with ./ then A-Z."""
        assert bcrypt_b64encode(b"\xff\xff\xff") == "9999"
        assert bcrypt_b64decode("9999") == b"\xff\xff\xff"

    def test_rejects_standard_symbols(self):
        """'+' is not part of bcrypt's alphabet."""
        with pytest.raises(FormatError):
            bcrypt_b64decode("ab+c")


class TestSaltGenerator:
    """Tests for SaltGenerator."""

    def test_default_length(self):
        """Salts are 64 bytes unless configured otherwise."""
        assert len(SaltGenerator().generate()) == 64
        assert len(SaltGenerator(16).generate()) == 16
        assert len(SaltGenerator(16).generate(32)) == 32

    def test_random(self):
        """Salts differ between calls."""
        generator = SaltGenerator()
        assert generator.generate() != generator.generate()

    @pytest.mark.parametrize("length", [0, -1])
    def test_non_positive_rejected(self, length):
        """Zero or negative lengths are invalid."""
        with pytest.raises(InvalidParametersError):
            SaltGenerator(length)
        with pytest.raises(InvalidParametersError):
            SaltGenerator().generate(length)


class TestPepperGenerator:
    """Tests for PepperGenerator."""

    def test_get(self):
        """The configured pepper is returned; empty means none."""
        assert PepperGenerator("spice").get() == "spice"
        assert PepperGenerator("").get() is None
        assert PepperGenerator().get() is None

    def test_generate(self):
        """New peppers have the requested length."""
        assert len(PepperGenerator.generate()) == 24
        assert len(PepperGenerator.generate(40)) == 40

    def test_repr_hides_pepper(self):
        """repr never shows the pepper."""
        assert "spice" not in repr(PepperGenerator("spice"))


class TestHash:
    """Tests for the Hash value object."""

    def test_equality(self):
        """Hashes are equal when artifact and salt match."""
        function = ScryptFunction(1024)
        first = function.hash("pw", b"salt-one")

        assert first == function.hash("pw", b"salt-one")
        assert first != function.hash("pw", b"salt-two")
        assert hash(first) == hash(function.hash("pw", b"salt-one"))

    def test_check(self):
        """Hash.check verifies with its own function and salt."""
        result = ScryptFunction(1024).hash("pw", b"salt-one", pepper="pep")

        assert result.check("pw", pepper="pep") is True
        assert result.check("pw") is False
        assert result.check(None) is False

    def test_immutable(self):
        """Fields cannot be reassigned."""
        result = ScryptFunction(1024).hash("pw")
        with pytest.raises(AttributeError):
            result.encoded = "x"

    def test_str_is_encoded(self):
        """str() gives the artifact."""
        result = ScryptFunction(1024).hash("pw")
        assert str(result) == result.encoded
        assert isinstance(result, Hash)
