"""
Argon2 hashing function.

Artifacts use the PHC string format
``$argon2<type>$v=<version>$m=<memory>,t=<iterations>,p=<parallelism>$<salt>$<hash>``
with unpadded base64 fields.
"""

from __future__ import annotations

import re

from argon2.exceptions import HashingError
from argon2.low_level import Type, hash_secret_raw

from ..core.exceptions import FormatError, InvalidParametersError
from ..core.models.params import Argon2Params, build_params
from .base import HashingFunction, constant_time_equals
from .encoding import b64decode, b64encode
from .hash import Hash
from .salt import SaltGenerator

MIN_SALT_LENGTH = 8

TYPES: dict[str, Type] = {
    "d": Type.D,
    "i": Type.I,
    "id": Type.ID,
}

_PHC_RE = re.compile(
    r"^\$argon2(id|i|d)"
    r"(?:\$v=(\d+))?"
    r"\$m=(\d+),t=(\d+),p=(\d+)"
    r"\$([A-Za-z0-9+/]+)"
    r"\$([A-Za-z0-9+/]+)$"
)


class Argon2Function(HashingFunction):
    """Argon2 via ``argon2-cffi``'s low-level binding."""

    def __init__(
        self,
        memory: int = 15360,
        iterations: int = 2,
        parallelism: int = 1,
        output_length: int = 32,
        type: str = "id",
        version: int = 19,
        *,
        salt_generator: SaltGenerator | None = None,
    ) -> None:
        super().__init__(
            build_params(
                Argon2Params,
                memory=memory,
                iterations=iterations,
                parallelism=parallelism,
                output_length=output_length,
                type=type,
                version=version,
            ),
            salt_generator,
        )

    @classmethod
    def from_params(cls, params: Argon2Params, salt_generator: SaltGenerator | None = None) -> Argon2Function:
        return cls(
            params.memory,
            params.iterations,
            params.parallelism,
            params.output_length,
            params.type,
            params.version,
            salt_generator=salt_generator,
        )

    @classmethod
    def from_encoded(cls, hashed: str) -> Argon2Function:
        """Build a function with the parameters stored in an artifact."""
        params, _salt, _derived = _parse(hashed)
        return cls.from_params(params)

    @property
    def algorithm_name(self) -> str:
        return "argon2"

    @property
    def required_memory_bytes(self) -> int:
        return self._params.memory * 1024

    def accepts_salt(self, salt: bytes) -> bool:
        return len(salt) >= MIN_SALT_LENGTH

    def _embedded_salt(self, hashed: str) -> bytes:
        return _parse(hashed)[1]

    def _derive(self, data: bytes, salt: bytes) -> Hash:
        params = self._params
        derived = _argon2(data, salt, params)
        encoded = (
            f"$argon2{params.type}$v={params.version}"
            f"$m={params.memory},t={params.iterations},p={params.parallelism}"
            f"${b64encode(salt, padding=False)}${b64encode(derived, padding=False)}"
        )
        return Hash(encoded=encoded, raw=derived, salt=salt, function=self)

    def _verify(self, data: bytes, hashed: str, salt: bytes | None) -> bool:
        if not hashed.startswith("$argon2"):
            return False
        params, embedded, derived = _parse(hashed)
        if salt is not None and salt != embedded:
            return False
        try:
            computed = _argon2(data, embedded, params)
        except InvalidParametersError as e:
            raise FormatError(
                "Parameters stored in the hash are unusable", algorithm="argon2", field="params", cause=e
            ) from e
        return constant_time_equals(computed, derived)


def _parse(hashed: str) -> tuple[Argon2Params, bytes, bytes]:
    match = _PHC_RE.match(hashed)
    if match is None:
        raise FormatError("Malformed argon2 hash", algorithm="argon2")
    type_, version, memory, iterations, parallelism, salt_text, hash_text = match.groups()
    salt = b64decode(salt_text, algorithm="argon2", field="salt")
    derived = b64decode(hash_text, algorithm="argon2", field="hash")
    if len(salt) < MIN_SALT_LENGTH:
        raise FormatError("Salt shorter than 8 bytes", algorithm="argon2", field="salt")
    try:
        params = build_params(
            Argon2Params,
            memory=int(memory),
            iterations=int(iterations),
            parallelism=int(parallelism),
            output_length=len(derived),
            type=type_,
            version=int(version) if version is not None else 16,
        )
    except InvalidParametersError as e:
        raise FormatError("Parameter field out of range", algorithm="argon2", field="params", cause=e) from e
    return params, salt, derived


def _argon2(data: bytes, salt: bytes, params: Argon2Params) -> bytes:
    if len(salt) < MIN_SALT_LENGTH:
        raise InvalidParametersError(
            f"Argon2 requires a salt of at least {MIN_SALT_LENGTH} bytes",
            algorithm="argon2",
            context={"salt_length": len(salt)},
        )
    try:
        return hash_secret_raw(
            secret=data,
            salt=salt,
            time_cost=params.iterations,
            memory_cost=params.memory,
            parallelism=params.parallelism,
            hash_len=params.output_length,
            type=TYPES[params.type],
            version=params.version,
        )
    except HashingError as e:
        raise InvalidParametersError(
            f"Invalid argon2 parameters: {e}",
            algorithm="argon2",
            context=params.model_dump(exclude={"algorithm"}),
            cause=e,
        ) from e
