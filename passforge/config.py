"""Configuration loading and inspection for passforge."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from .core.models.params import ALGORITHM_NAMES
from .core.settings import load_settings

# Config keys shown by `passforge config list`
CONFIGURABLE_KEYS: dict[str, dict[str, Any]] = {
    "default_algorithm": {
        "type": str,
        "default": "bcrypt",
        "description": f"Family used by with_default() ({', '.join(ALGORITHM_NAMES)})",
    },
    "pepper": {
        "type": str,
        "default": None,
        "description": "Secret prepended to every password by add_pepper()",
    },
    "salt.length": {
        "type": int,
        "default": 64,
        "description": "Length in bytes of generated salts",
    },
    "bcrypt.rounds": {
        "type": int,
        "default": 10,
        "description": "BCrypt log2 cost (4-31)",
    },
    "bcrypt.minor": {
        "type": str,
        "default": "b",
        "description": "BCrypt minor version (a, b, y)",
    },
    "scrypt.work_factor": {
        "type": int,
        "default": 32768,
        "description": "SCrypt CPU/memory cost N (power of two)",
    },
    "scrypt.resources": {
        "type": int,
        "default": 8,
        "description": "SCrypt block size r",
    },
    "scrypt.parallelization": {
        "type": int,
        "default": 1,
        "description": "SCrypt parallelization p",
    },
    "pbkdf2.hmac": {
        "type": str,
        "default": "SHA512",
        "description": "PBKDF2 HMAC digest (SHA1, SHA224, SHA256, SHA384, SHA512)",
    },
    "pbkdf2.iterations": {
        "type": int,
        "default": 64000,
        "description": "PBKDF2 iteration count",
    },
    "pbkdf2.length": {
        "type": int,
        "default": 512,
        "description": "PBKDF2 derived key length in bits",
    },
    "argon2.memory": {
        "type": int,
        "default": 15360,
        "description": "Argon2 memory cost in KiB",
    },
    "argon2.iterations": {
        "type": int,
        "default": 2,
        "description": "Argon2 time cost",
    },
    "argon2.parallelism": {
        "type": int,
        "default": 1,
        "description": "Argon2 lanes",
    },
    "argon2.output_length": {
        "type": int,
        "default": 32,
        "description": "Argon2 hash length in bytes",
    },
    "argon2.type": {
        "type": str,
        "default": "id",
        "description": "Argon2 variant (d, i, id)",
    },
    "argon2.version": {
        "type": int,
        "default": 19,
        "description": "Argon2 version (16 or 19)",
    },
    "message_digest.digest": {
        "type": str,
        "default": "SHA-512",
        "description": "Digest of the message digest family (e.g. SHA-256, BLAKE3)",
    },
    "message_digest.salt_option": {
        "type": str,
        "default": "append",
        "description": "Where the salt goes (prepend, append)",
    },
    "logging.level": {
        "type": str,
        "default": "warning",
        "description": "Log level (debug, info, warning, error)",
    },
    "logging.console": {
        "type": bool,
        "default": False,
        "description": "Output debug logs to stderr",
    },
    "logging.file": {
        "type": bool,
        "default": False,
        "description": "Output debug logs to ~/.passforge/passforge.log",
    },
}


def _get_nested(d: dict, key: str, default=None):
    """Get a nested key like 'scrypt.work_factor'."""
    for part in key.split("."):
        if isinstance(d, dict) and part in d:
            d = d[part]
        else:
            return default
    return d


def load_config(config_path: Path | None = None, start_dir: str | None = None) -> dict:
    """
    Load configuration from file and environment.

    Args:
        config_path: Explicit path to config file
        start_dir: Directory to start searching from (if config_path not given)

    Returns:
        Configuration dict with defaults applied
    """
    settings = load_settings(config_path=config_path, start_dir=start_dir)
    return settings.to_dict()


def config_get(key: str, start_dir: str | None = None, config_path: Path | None = None):
    """Get a config value."""
    config = load_config(config_path=config_path, start_dir=start_dir)
    return _get_nested(config, key)


def config_list():
    """List all configurable keys with descriptions."""
    return CONFIGURABLE_KEYS
