"""
Pydantic models for passforge.

Parameter models for each hash family and the configuration sections
built from them.
"""

from .config import LoggingConfig, PassforgeConfig, SaltConfig
from .params import (
    ALGORITHM_NAMES,
    AlgorithmParams,
    Argon2Params,
    BcryptParams,
    CompressedPBKDF2Params,
    MessageDigestParams,
    ParamsModel,
    PBKDF2Params,
    ScryptParams,
    build_params,
    parse_params,
)

__all__ = [
    "ALGORITHM_NAMES",
    "AlgorithmParams",
    "Argon2Params",
    "BcryptParams",
    "CompressedPBKDF2Params",
    "LoggingConfig",
    "MessageDigestParams",
    "PBKDF2Params",
    "ParamsModel",
    "PassforgeConfig",
    "SaltConfig",
    "ScryptParams",
    "build_params",
    "parse_params",
]
