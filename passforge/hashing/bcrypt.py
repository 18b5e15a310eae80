"""
BCrypt hashing function.

Artifacts use the modular crypt format
``$2<minor>$<rounds>$<22 chars of salt><31 chars of digest>``.
"""

from __future__ import annotations

import re

import bcrypt as _bcrypt

from ..core.exceptions import FormatError, InvalidParametersError
from ..core.models.params import BcryptParams, build_params
from .base import HashingFunction, constant_time_equals
from .encoding import bcrypt_b64decode, bcrypt_b64encode
from .hash import Hash
from .salt import SaltGenerator

SALT_LENGTH = 16
MAX_PASSWORD_BYTES = 72

# P-array plus four S-boxes of Blowfish state
REQUIRED_MEMORY = 4168

_BCRYPT_RE = re.compile(r"^\$2([aby])\$(\d\d)\$([./A-Za-z0-9]{22})([./A-Za-z0-9]{31})$")
_PREFIX_RE = re.compile(r"^\$2[aby]\$")


class BcryptFunction(HashingFunction):
    """BCrypt via the ``bcrypt`` package."""

    default_salt_length = SALT_LENGTH

    def __init__(
        self,
        rounds: int = 10,
        minor: str = "b",
        *,
        salt_generator: SaltGenerator | None = None,
    ) -> None:
        super().__init__(build_params(BcryptParams, rounds=rounds, minor=minor), salt_generator)

    @classmethod
    def from_params(cls, params: BcryptParams, salt_generator: SaltGenerator | None = None) -> BcryptFunction:
        return cls(params.rounds, params.minor, salt_generator=salt_generator)

    @classmethod
    def from_encoded(cls, hashed: str) -> BcryptFunction:
        """Build a function with the cost and minor version of an artifact."""
        minor, rounds, _salt, _digest = _parse(hashed)
        return cls(rounds, minor)

    @property
    def algorithm_name(self) -> str:
        return "bcrypt"

    @property
    def rounds(self) -> int:
        return self._params.rounds

    @property
    def minor(self) -> str:
        return self._params.minor

    @property
    def required_memory_bytes(self) -> int:
        return REQUIRED_MEMORY

    def accepts_salt(self, salt: bytes) -> bool:
        return len(salt) == SALT_LENGTH

    def _embedded_salt(self, hashed: str) -> bytes:
        _minor, _rounds, salt_text, _digest = _parse(hashed)
        return bcrypt_b64decode(salt_text, field="salt")

    def _derive(self, data: bytes, salt: bytes) -> Hash:
        if len(salt) != SALT_LENGTH:
            raise InvalidParametersError(
                f"BCrypt requires a {SALT_LENGTH}-byte salt",
                algorithm="bcrypt",
                context={"salt_length": len(salt)},
            )
        computed = _compute(data, self.rounds, bcrypt_b64encode(salt))
        digest = computed[-31:]
        encoded = f"$2{self.minor}${self.rounds:02d}${bcrypt_b64encode(salt)}{digest}"
        return Hash(
            encoded=encoded,
            raw=bcrypt_b64decode(digest, field="digest"),
            salt=salt,
            function=self,
        )

    def _verify(self, data: bytes, hashed: str, salt: bytes | None) -> bool:
        if not is_bcrypt(hashed):
            return False
        _minor, rounds, salt_text, digest = _parse(hashed)
        embedded = bcrypt_b64decode(salt_text, field="salt")
        if salt is not None and salt != embedded:
            return False
        computed = _compute(data, rounds, bcrypt_b64encode(embedded))
        return constant_time_equals(computed[-31:].encode("ascii"), digest.encode("ascii"))


def is_bcrypt(hashed: str) -> bool:
    """Whether ``hashed`` carries a bcrypt prefix (``$2a$``, ``$2b$`` or ``$2y$``)."""
    return _PREFIX_RE.match(hashed) is not None


def _parse(hashed: str) -> tuple[str, int, str, str]:
    match = _BCRYPT_RE.match(hashed)
    if match is None:
        raise FormatError("Malformed bcrypt hash", algorithm="bcrypt")
    minor, rounds_text, salt_text, digest = match.groups()
    rounds = int(rounds_text)
    if not 4 <= rounds <= 31:
        raise FormatError("bcrypt rounds out of range", algorithm="bcrypt", field="rounds")
    return minor, rounds, salt_text, digest


def _compute(data: bytes, rounds: int, salt_text: str) -> str:
    # $2a$, $2b$ and $2y$ agree for inputs of at most 72 bytes
    setting = f"$2b${rounds:02d}${salt_text}".encode("ascii")
    try:
        return _bcrypt.hashpw(data[:MAX_PASSWORD_BYTES], setting).decode("ascii")
    except ValueError as e:
        raise InvalidParametersError(
            f"bcrypt rejected the input: {e}",
            algorithm="bcrypt",
            context={"rounds": rounds},
            cause=e,
        ) from e
