"""
PBKDF2 hashing functions.

``PBKDF2Function`` encodes only the derived key, so verification needs
the salt handed back in. ``CompressedPBKDF2Function`` is self-describing:
``$<code>$<iterations << 32 | length>$<base64 salt>$<base64 derived>``.
"""

from __future__ import annotations

import hashlib
import re

from ..core.exceptions import FormatError, InvalidParametersError
from ..core.models.params import CompressedPBKDF2Params, PBKDF2Params, build_params
from .base import HashingFunction, constant_time_equals
from .encoding import b64decode, b64encode
from .hash import Hash
from .salt import SaltGenerator

HMAC_DIGESTS: dict[str, str] = {
    "SHA1": "sha1",
    "SHA224": "sha224",
    "SHA256": "sha256",
    "SHA384": "sha384",
    "SHA512": "sha512",
}

# Identifier used in the compressed format
HMAC_CODES: dict[str, int] = {
    "SHA1": 1,
    "SHA224": 2,
    "SHA256": 3,
    "SHA384": 4,
    "SHA512": 5,
}

_CODE_TO_HMAC = {code: name for name, code in HMAC_CODES.items()}
_COMPRESSED_RE = re.compile(r"^\$([1-5])\$(\d{1,20})\$([^$]+)\$([^$]+)$")


class PBKDF2Function(HashingFunction):
    """PBKDF2-HMAC via ``hashlib.pbkdf2_hmac``; the salt is stored apart."""

    params_model: type[PBKDF2Params] = PBKDF2Params

    def __init__(
        self,
        hmac: str = "SHA512",
        iterations: int = 64000,
        length: int = 512,
        *,
        salt_generator: SaltGenerator | None = None,
    ) -> None:
        super().__init__(
            build_params(self.params_model, hmac=hmac, iterations=iterations, length=length),
            salt_generator,
        )

    @classmethod
    def from_params(cls, params: PBKDF2Params, salt_generator: SaltGenerator | None = None):
        return cls(params.hmac, params.iterations, params.length, salt_generator=salt_generator)

    @property
    def algorithm_name(self) -> str:
        return "pbkdf2"

    @property
    def hmac(self) -> str:
        return self._params.hmac

    @property
    def iterations(self) -> int:
        return self._params.iterations

    @property
    def length(self) -> int:
        """Derived key length in bits."""
        return self._params.length

    @property
    def required_memory_bytes(self) -> int:
        # HMAC state plus the output buffer
        return 1024 + self.length // 8

    def derive(self, data: bytes, salt: bytes) -> bytes:
        """Run PBKDF2 with this function's parameters."""
        return _pbkdf2(data, salt, self.hmac, self.iterations, self.length)

    def _derive(self, data: bytes, salt: bytes) -> Hash:
        derived = self.derive(data, salt)
        return Hash(encoded=b64encode(derived), raw=derived, salt=salt, function=self)

    def _verify(self, data: bytes, hashed: str, salt: bytes | None) -> bool:
        if salt is None:
            return False
        try:
            expected = b64decode(hashed, algorithm=self.algorithm_name, field="derived")
        except FormatError:
            return False
        computed = self.derive(data, salt)
        return constant_time_equals(computed, expected)


class CompressedPBKDF2Function(PBKDF2Function):
    """PBKDF2 with the algorithm, parameters and salt packed into the artifact."""

    params_model = CompressedPBKDF2Params

    @classmethod
    def from_encoded(cls, hashed: str) -> CompressedPBKDF2Function:
        """Build a function with the HMAC, iterations and length of an artifact."""
        hmac, iterations, length, _salt, _derived = _parse_compressed(hashed)
        return cls(hmac, iterations, length)

    @property
    def algorithm_name(self) -> str:
        return "compressed_pbkdf2"

    def _embedded_salt(self, hashed: str) -> bytes:
        return _parse_compressed(hashed)[3]

    def _derive(self, data: bytes, salt: bytes) -> Hash:
        derived = self.derive(data, salt)
        packed = self.iterations << 32 | self.length
        encoded = f"${HMAC_CODES[self.hmac]}${packed}${b64encode(salt)}${b64encode(derived)}"
        return Hash(encoded=encoded, raw=derived, salt=salt, function=self)

    def _verify(self, data: bytes, hashed: str, salt: bytes | None) -> bool:
        if not is_compressed_pbkdf2(hashed):
            return False
        hmac, iterations, length, embedded, derived = _parse_compressed(hashed)
        if salt is not None and salt != embedded:
            return False
        computed = _pbkdf2(data, embedded, hmac, iterations, length)
        return constant_time_equals(computed, derived)


def is_compressed_pbkdf2(hashed: str) -> bool:
    """Whether ``hashed`` carries the compressed PBKDF2 prefix ``$<1-5>$``."""
    return len(hashed) > 3 and hashed[0] == "$" and hashed[1] in "12345" and hashed[2] == "$"


def _parse_compressed(hashed: str) -> tuple[str, int, int, bytes, bytes]:
    match = _COMPRESSED_RE.match(hashed)
    if match is None:
        raise FormatError("Malformed compressed PBKDF2 hash", algorithm="compressed_pbkdf2")
    code, packed_text, salt_text, derived_text = match.groups()
    packed = int(packed_text)
    iterations = packed >> 32
    length = packed & 0xFFFFFFFF
    if iterations < 1 or length < 8 or length % 8 != 0:
        raise FormatError(
            "Parameter field out of range", algorithm="compressed_pbkdf2", field="params"
        )
    salt = b64decode(salt_text, algorithm="compressed_pbkdf2", field="salt")
    derived = b64decode(derived_text, algorithm="compressed_pbkdf2", field="derived")
    if len(derived) * 8 != length:
        raise FormatError(
            "Derived key does not match the declared length",
            algorithm="compressed_pbkdf2",
            field="derived",
        )
    return _CODE_TO_HMAC[int(code)], iterations, length, salt, derived


def _pbkdf2(data: bytes, salt: bytes, hmac: str, iterations: int, length: int) -> bytes:
    try:
        return hashlib.pbkdf2_hmac(HMAC_DIGESTS[hmac], data, salt, iterations, dklen=length // 8)
    except (ValueError, OverflowError) as e:
        raise InvalidParametersError(
            f"Invalid PBKDF2 parameters: {e}",
            algorithm="pbkdf2",
            context={"hmac": hmac, "iterations": iterations, "length": length},
            cause=e,
        ) from e
