"""
Parameter models for the hashing functions.

Each family owns one frozen model. Together they form the closed
``AlgorithmParams`` union, discriminated on ``algorithm``, which is
what the finder dispatches over.
"""

from __future__ import annotations

from typing import Annotated, Any, ClassVar, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator, model_validator

from ..exceptions import InvalidParametersError

AlgorithmName = Literal[
    "bcrypt",
    "scrypt",
    "pbkdf2",
    "compressed_pbkdf2",
    "argon2",
    "message_digest",
]

ALGORITHM_NAMES: tuple[str, ...] = (
    "bcrypt",
    "scrypt",
    "pbkdf2",
    "compressed_pbkdf2",
    "argon2",
    "message_digest",
)

HmacAlgorithm = Literal["SHA1", "SHA224", "SHA256", "SHA384", "SHA512"]
DigestAlgorithm = Literal[
    "MD5",
    "SHA-1",
    "SHA-224",
    "SHA-256",
    "SHA-384",
    "SHA-512",
    "SHA3-256",
    "SHA3-512",
    "BLAKE3",
]


class ParamsModel(BaseModel):
    """Frozen parameter set; also used as a configuration section."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        use_enum_values=True,
    )


class BcryptParams(ParamsModel):
    """BCrypt cost (log2 rounds) and minor version."""

    algorithm: Literal["bcrypt"] = "bcrypt"
    rounds: int = Field(default=10, ge=4, le=31)
    minor: Literal["a", "b", "y"] = "b"


class ScryptParams(ParamsModel):
    """SCrypt work factor N, block size r and parallelization p."""

    # The primitive's own limit on r * p
    MAX_RP: ClassVar[int] = 1 << 30

    algorithm: Literal["scrypt"] = "scrypt"
    work_factor: int = 2 << 14
    resources: int = Field(default=8, ge=1, le=255)
    parallelization: int = Field(default=1, ge=1, le=255)

    @field_validator("work_factor")
    @classmethod
    def validate_work_factor(cls, v: int) -> int:
        """N must be a power of two greater than one."""
        if v < 2 or v & (v - 1) != 0:
            raise ValueError(f"work_factor must be a power of two >= 2, got {v}")
        return v

    @model_validator(mode="after")
    def validate_rp(self) -> ScryptParams:
        if self.resources * self.parallelization >= self.MAX_RP:
            raise ValueError("resources * parallelization must be < 2^30")
        return self


class PBKDF2Params(ParamsModel):
    """PBKDF2 HMAC variant, iteration count and output length in bits."""

    algorithm: Literal["pbkdf2"] = "pbkdf2"
    hmac: HmacAlgorithm = "SHA512"
    iterations: int = Field(default=64000, ge=1, lt=1 << 31)
    length: int = Field(default=512, ge=8, lt=1 << 31)

    @field_validator("length")
    @classmethod
    def validate_length(cls, v: int) -> int:
        if v % 8 != 0:
            raise ValueError(f"length is expressed in bits and must be a multiple of 8, got {v}")
        return v


class CompressedPBKDF2Params(PBKDF2Params):
    """PBKDF2 parameters for the self-describing compressed encoding."""

    algorithm: Literal["compressed_pbkdf2"] = "compressed_pbkdf2"  # type: ignore[assignment]


class Argon2Params(ParamsModel):
    """Argon2 memory (KiB), passes, lanes, output length, type and version."""

    algorithm: Literal["argon2"] = "argon2"
    memory: int = Field(default=15360, ge=8)
    iterations: int = Field(default=2, ge=1)
    parallelism: int = Field(default=1, ge=1, lt=1 << 24)
    output_length: int = Field(default=32, ge=4)
    type: Literal["d", "i", "id"] = "id"
    version: Literal[16, 19] = 19

    @model_validator(mode="after")
    def validate_memory(self) -> Argon2Params:
        if self.memory < 8 * self.parallelism:
            raise ValueError("memory must be at least 8 KiB per lane")
        return self


class MessageDigestParams(ParamsModel):
    """Plain digest name and where the salt goes relative to the password."""

    algorithm: Literal["message_digest"] = "message_digest"
    digest: DigestAlgorithm = "SHA-512"
    salt_option: Literal["prepend", "append"] = "append"


AlgorithmParams = Annotated[
    Union[
        BcryptParams,
        ScryptParams,
        PBKDF2Params,
        CompressedPBKDF2Params,
        Argon2Params,
        MessageDigestParams,
    ],
    Field(discriminator="algorithm"),
]

_params_adapter: TypeAdapter[Any] = TypeAdapter(AlgorithmParams)


def build_params(model: type[ParamsModel], **values: Any) -> Any:
    """Validate ``values`` into ``model``, raising InvalidParametersError on failure.

    The offending values are attached to the error context.
    """
    try:
        return model(**values)
    except ValidationError as e:
        algorithm = model.model_fields["algorithm"].default
        raise InvalidParametersError(
            f"Invalid {algorithm} parameters: {_first_error(e)}",
            algorithm=algorithm,
            context=dict(values),
            cause=e,
        ) from e


def parse_params(data: dict[str, Any]) -> Any:
    """Validate a mapping carrying an ``algorithm`` tag into its parameter model."""
    try:
        return _params_adapter.validate_python(data)
    except ValidationError as e:
        raise InvalidParametersError(
            f"Invalid parameters: {_first_error(e)}",
            algorithm=data.get("algorithm"),
            context={k: v for k, v in data.items() if k != "algorithm"},
            cause=e,
        ) from e


def _first_error(e: ValidationError) -> str:
    errors = e.errors()
    if not errors:
        return str(e)
    err = errors[0]
    loc = ".".join(str(p) for p in err.get("loc", ()))
    return f"{loc}: {err.get('msg')}" if loc else str(err.get("msg"))
