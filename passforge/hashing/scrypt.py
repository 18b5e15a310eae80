"""
SCrypt hashing function.

Artifacts look like ``$s0$<params>$<base64 salt>$<base64 derived>`` where
``params`` is the hexadecimal value of ``log2(N) << 16 | r << 8 | p``.
"""

from __future__ import annotations

import hashlib
import re

from ..core.exceptions import FormatError, InvalidParametersError
from ..core.models.params import ScryptParams, build_params
from .base import HashingFunction, constant_time_equals
from .encoding import b64decode, b64encode
from .hash import Hash
from .salt import SaltGenerator

PREFIX = "$s0$"
DERIVED_KEY_LENGTH = 32

# hashlib refuses maxmem values that do not fit a C int
_MAX_MEM_LIMIT = 2**31 - 1

_HEX_RE = re.compile(r"^[0-9a-fA-F]{1,16}$")


def log2(n: int) -> int:
    """Integer log2 of a power of two, via bit scan."""
    return n.bit_length() - 1


def pack_params(work_factor: int, resources: int, parallelization: int) -> str:
    """Pack N, r and p into the hexadecimal parameter field."""
    return format(log2(work_factor) << 16 | resources << 8 | parallelization, "x")


def unpack_params(field: str) -> tuple[int, int, int]:
    """Inverse of pack_params: return (N, r, p)."""
    if not _HEX_RE.match(field):
        raise FormatError("Parameter field is not hexadecimal", algorithm="scrypt", field="params")
    value = int(field, 16)
    parallelization = value & 0xFF
    resources = (value >> 8) & 0xFF
    log_n = value >> 16
    if log_n < 1 or log_n > 62 or resources < 1 or parallelization < 1:
        raise FormatError("Parameter field out of range", algorithm="scrypt", field="params")
    return 1 << log_n, resources, parallelization


class ScryptFunction(HashingFunction):
    """SCrypt via ``hashlib.scrypt``."""

    def __init__(
        self,
        work_factor: int = 2 << 14,
        resources: int = 8,
        parallelization: int = 1,
        *,
        salt_generator: SaltGenerator | None = None,
    ) -> None:
        super().__init__(
            build_params(
                ScryptParams,
                work_factor=work_factor,
                resources=resources,
                parallelization=parallelization,
            ),
            salt_generator,
        )
        self._required_bytes = 128 * work_factor * resources * parallelization

    @classmethod
    def from_params(cls, params: ScryptParams, salt_generator: SaltGenerator | None = None) -> ScryptFunction:
        return cls(
            params.work_factor,
            params.resources,
            params.parallelization,
            salt_generator=salt_generator,
        )

    @classmethod
    def from_encoded(cls, hashed: str) -> ScryptFunction:
        """Build a function with the N, r and p stored in an artifact."""
        work_factor, resources, parallelization, _salt, _derived = _parse(hashed)
        return cls(work_factor, resources, parallelization)

    @property
    def algorithm_name(self) -> str:
        return "scrypt"

    @property
    def work_factor(self) -> int:
        return self._params.work_factor

    @property
    def resources(self) -> int:
        return self._params.resources

    @property
    def parallelization(self) -> int:
        return self._params.parallelization

    @property
    def required_memory_bytes(self) -> int:
        return self._required_bytes

    def _embedded_salt(self, hashed: str) -> bytes:
        return _parse(hashed)[3]

    def _derive(self, data: bytes, salt: bytes) -> Hash:
        derived = _scrypt(
            data,
            salt,
            self.work_factor,
            self.resources,
            self.parallelization,
            DERIVED_KEY_LENGTH,
        )
        params = pack_params(self.work_factor, self.resources, self.parallelization)
        encoded = f"{PREFIX}{params}${b64encode(salt)}${b64encode(derived)}"
        return Hash(encoded=encoded, raw=derived, salt=salt, function=self)

    def _verify(self, data: bytes, hashed: str, salt: bytes | None) -> bool:
        if not hashed.startswith(PREFIX):
            return False
        work_factor, resources, parallelization, embedded, derived = _parse(hashed)
        if salt is not None and salt != embedded:
            return False
        try:
            computed = _scrypt(data, embedded, work_factor, resources, parallelization, len(derived))
        except InvalidParametersError as e:
            raise FormatError(
                "Parameters stored in the hash are unusable", algorithm="scrypt", field="params", cause=e
            ) from e
        return constant_time_equals(computed, derived)


def _parse(hashed: str) -> tuple[int, int, int, bytes, bytes]:
    parts = hashed.split("$")
    if len(parts) != 5 or parts[0] != "" or parts[1] != "s0":
        raise FormatError("Malformed scrypt hash", algorithm="scrypt")
    work_factor, resources, parallelization = unpack_params(parts[2])
    salt = b64decode(parts[3], algorithm="scrypt", field="salt")
    derived = b64decode(parts[4], algorithm="scrypt", field="derived")
    if not salt or not derived:
        raise FormatError("Empty scrypt field", algorithm="scrypt")
    if _maxmem(work_factor, resources, parallelization) > _MAX_MEM_LIMIT:
        raise FormatError("Parameter field exceeds the memory limit", algorithm="scrypt", field="params")
    return work_factor, resources, parallelization, salt, derived


def _maxmem(n: int, r: int, p: int) -> int:
    # Scratch space: V is 128 * r * (N + 2) bytes, B is 128 * r * p bytes
    return 128 * r * (n + 2) + 128 * r * p + 1024 * 1024


def _scrypt(data: bytes, salt: bytes, n: int, r: int, p: int, dklen: int) -> bytes:
    context = {"salt_length": len(salt), "N": n, "r": r, "p": p}
    if not salt:
        raise InvalidParametersError("Salt must not be empty", algorithm="scrypt", context=context)
    maxmem = _maxmem(n, r, p)
    if maxmem > _MAX_MEM_LIMIT:
        raise InvalidParametersError(
            "Memory required by these parameters exceeds the platform limit",
            algorithm="scrypt",
            context=context,
        )
    try:
        return hashlib.scrypt(data, salt=salt, n=n, r=r, p=p, maxmem=maxmem, dklen=dklen)
    except (ValueError, MemoryError) as e:
        raise InvalidParametersError(
            f"Invalid scrypt parameters: {e}",
            algorithm="scrypt",
            context=context,
            cause=e,
        ) from e
