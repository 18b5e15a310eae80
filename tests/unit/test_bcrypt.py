"""
Unit tests for the BCrypt hashing function.

Tests the modular crypt format, interoperability with the bcrypt
package, the 72-byte input limit and salt validation.
"""

import bcrypt
import pytest

from passforge.core.exceptions import FormatError, InvalidParametersError
from passforge.hashing.bcrypt import BcryptFunction
from passforge.hashing.encoding import bcrypt_b64encode
from passforge.hashing.pbkdf2 import CompressedPBKDF2Function

SALT = bytes(range(16))


class TestBcryptHash:
    """Tests for BcryptFunction.hash."""

    def test_format(self):
        """Artifacts are $2b$<rounds>$ followed by 53 characters."""
        result = BcryptFunction(4).hash("pw")

        assert result.encoded.startswith("$2b$04$")
        assert len(result.encoded) == 60
        assert len(result.salt) == 16
        assert len(result.raw) == 23

    def test_salt_is_embedded(self):
        """The supplied salt appears in bcrypt base64 after the cost."""
        result = BcryptFunction(4).hash("pw", SALT)

        assert result.salt == SALT
        assert result.encoded[7:29] == bcrypt_b64encode(SALT)

    def test_deterministic_with_salt(self):
        """The same password and salt give the same artifact."""
        assert BcryptFunction(4).hash("pw", SALT) == BcryptFunction(4).hash("pw", SALT)

    def test_readable_by_bcrypt_package(self):
        """The bcrypt package verifies passforge artifacts."""
        result = BcryptFunction(4).hash("pw")
        assert bcrypt.checkpw(b"pw", result.encoded.encode()) is True

    def test_minor_version_label(self):
        """The minor version is carried into the artifact."""
        result = BcryptFunction(4, "y").hash("pw")

        assert result.encoded.startswith("$2y$04$")
        assert BcryptFunction().check("pw", result.encoded) is True

    def test_wrong_salt_length_rejected(self):
        """BCrypt needs exactly 16 bytes of salt."""
        with pytest.raises(InvalidParametersError) as exc_info:
            BcryptFunction(4).hash("pw", bytes(64))
        assert exc_info.value.context["salt_length"] == 64

    @pytest.mark.parametrize("rounds", [3, 32])
    def test_rounds_out_of_range_rejected(self, rounds):
        """Rounds are limited to 4..31."""
        with pytest.raises(InvalidParametersError):
            BcryptFunction(rounds)

    def test_input_truncated_to_72_bytes(self):
        """Only the first 72 bytes of the password take part."""
        encoded = BcryptFunction(4).hash("a" * 72).encoded
        assert BcryptFunction(4).check("a" * 72 + "b", encoded) is True

    def test_required_memory(self):
        """Memory cost is constant."""
        assert BcryptFunction(4).required_memory_bytes == 4168


class TestBcryptCheck:
    """Tests for BcryptFunction.check."""

    def test_round_trip(self):
        """A password verifies against its own hash only."""
        encoded = BcryptFunction(4).hash("pw").encoded

        assert BcryptFunction(4).check("pw", encoded) is True
        assert BcryptFunction(4).check("other", encoded) is False

    def test_verifies_bcrypt_package_hash(self):
        """Hashes from the bcrypt package verify, whatever the configured cost."""
        hashed = bcrypt.hashpw(b"pw", bcrypt.gensalt(rounds=4)).decode()
        assert BcryptFunction(12).check("pw", hashed) is True

    def test_verifies_2a_hash(self):
        """$2a$ artifacts verify."""
        hashed = bcrypt.hashpw(b"pw", bcrypt.gensalt(rounds=4, prefix=b"2a")).decode()
        assert BcryptFunction().check("pw", hashed) is True

    def test_mismatched_explicit_salt_is_false(self):
        """An explicit salt other than the embedded one fails closed."""
        encoded = BcryptFunction(4).hash("pw", SALT).encoded

        assert BcryptFunction(4).check("pw", encoded, salt=bytes(16)) is False
        assert BcryptFunction(4).check("pw", encoded, salt=SALT) is True

    def test_foreign_artifact_is_false(self):
        """A scrypt hash is simply not a bcrypt match."""
        assert BcryptFunction(4).check("pw", "$s0$a0801$AAAA$AAAA") is False

    def test_sha224_compressed_pbkdf2_is_false(self):
        """A \$2\$ compressed PBKDF2 hash is another family, not a broken bcrypt hash."""
        encoded = CompressedPBKDF2Function("SHA224", 1000, 256).hash("pw", b"sha224-salt").encoded
        assert BcryptFunction(4).check("pw", encoded) is False

    def test_truncated_artifact_raises(self):
        """A bcrypt-prefixed artifact with missing characters is a FormatError."""
        encoded = BcryptFunction(4).hash("pw").encoded
        with pytest.raises(FormatError):
            BcryptFunction(4).check("pw", encoded[:-5])

    def test_rounds_in_artifact_out_of_range_raises(self):
        """A cost below 4 in the artifact is a FormatError."""
        encoded = BcryptFunction(4).hash("pw").encoded
        with pytest.raises(FormatError):
            BcryptFunction(4).check("pw", encoded.replace("$04$", "$03$", 1))


class TestBcryptFromEncoded:
    """Tests for BcryptFunction.from_encoded and embedded_salt."""

    def test_reads_cost_and_minor(self):
        """The function built from an artifact has its cost and minor version."""
        encoded = BcryptFunction(5, "a").hash("pw").encoded
        function = BcryptFunction.from_encoded(encoded)

        assert function.rounds == 5
        assert function.minor == "a"

    def test_embedded_salt(self):
        """The salt can be recovered from an artifact."""
        encoded = BcryptFunction(4).hash("pw", SALT).encoded
        assert BcryptFunction().embedded_salt(encoded) == SALT
