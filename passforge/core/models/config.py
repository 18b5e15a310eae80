"""
Configuration models.

Provides Pydantic models for passforge configuration with validation.
Algorithm sections reuse the parameter models from ``params``.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .params import (
    AlgorithmName,
    Argon2Params,
    BcryptParams,
    MessageDigestParams,
    PBKDF2Params,
    ScryptParams,
)

LogLevel = Literal["debug", "info", "warning", "error"]


class ConfigBaseModel(BaseModel):
    """Base model for config sections with relaxed strict mode for TOML loading."""

    model_config = ConfigDict(
        strict=False,  # Allow coercion from TOML types
        validate_assignment=True,
        extra="ignore",  # Ignore unknown fields in config files
        populate_by_name=True,
        use_enum_values=True,
        revalidate_instances="never",
    )


class SaltConfig(ConfigBaseModel):
    """Salt generation configuration section."""

    length: int = Field(default=64, ge=1, le=1024)


class LoggingConfig(ConfigBaseModel):
    """Logging configuration section."""

    level: LogLevel = "warning"
    console: bool = False
    file: bool = False


class PassforgeConfig(ConfigBaseModel):
    """Complete passforge configuration.

    This model represents the full configuration with all sections.
    It can be loaded from TOML files or constructed programmatically.
    """

    default_algorithm: AlgorithmName = "bcrypt"
    pepper: str | None = None
    salt: SaltConfig = Field(default_factory=SaltConfig)
    bcrypt: BcryptParams = Field(default_factory=BcryptParams)
    scrypt: ScryptParams = Field(default_factory=ScryptParams)
    pbkdf2: PBKDF2Params = Field(default_factory=PBKDF2Params)
    argon2: Argon2Params = Field(default_factory=Argon2Params)
    message_digest: MessageDigestParams = Field(default_factory=MessageDigestParams)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("pepper", mode="before")
    @classmethod
    def empty_pepper_is_none(cls, v: str | None) -> str | None:
        """Treat an empty pepper as no pepper."""
        if v == "":
            return None
        return v

    def get(self, key: str, default: Any = None) -> Any:
        """Get config value by dot-notation key.

        Args:
            key: Dot-notation key (e.g., 'scrypt.work_factor')
            default: Default value if key not found

        Returns:
            Config value or default
        """
        parts = key.split(".")
        obj: Any = self
        for part in parts:
            if isinstance(obj, BaseModel) and part in type(obj).model_fields:
                obj = getattr(obj, part)
            elif isinstance(obj, dict) and part in obj:
                obj = obj[part]
            else:
                return default
        return obj

    def to_dict(self) -> dict[str, Any]:
        """Convert config to a nested dict, leaving out algorithm tags."""
        return self.model_dump(exclude={name: {"algorithm"} for name in _ALGORITHM_SECTIONS})


_ALGORITHM_SECTIONS = ("bcrypt", "scrypt", "pbkdf2", "argon2", "message_digest")
