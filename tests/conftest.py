"""
Shared pytest fixtures for passforge tests.

This module provides:
- isolated_environment: Runs every test in an empty directory with no
  PASSFORGE_* variables and resets the process-wide finder and logger
- finder / peppered_finder: Finders configured with cheap parameters
- cheap_config_file: A .passforge/config.toml with the same cheap parameters
"""

import os
from pathlib import Path

import pytest

from passforge.core.models.config import PassforgeConfig
from passforge.hashing.finder import AlgorithmFinder, reset_default_finder
from passforge.services.logging import set_logger

# Low costs keep the suite fast; never use these in production
CHEAP_PARAMS = {
    "bcrypt": {"rounds": 4},
    "scrypt": {"work_factor": 1024, "resources": 8, "parallelization": 1},
    "pbkdf2": {"hmac": "SHA256", "iterations": 1000, "length": 256},
    "argon2": {"memory": 64, "iterations": 1, "parallelism": 1},
}

CHEAP_CONFIG_TOML = """\
[bcrypt]
rounds = 4

[scrypt]
work_factor = 1024

[pbkdf2]
hmac = "SHA256"
iterations = 1000
length = 256

[argon2]
memory = 64
iterations = 1
"""

PEPPER = "s3cr3t-pepper"


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Keep configuration and global state from leaking between tests."""
    for name in list(os.environ):
        if name.startswith("PASSFORGE_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    reset_default_finder()
    yield
    reset_default_finder()
    set_logger(None)


@pytest.fixture
def cheap_config() -> PassforgeConfig:
    return PassforgeConfig(**CHEAP_PARAMS)


@pytest.fixture
def finder(cheap_config: PassforgeConfig) -> AlgorithmFinder:
    return AlgorithmFinder(cheap_config)


@pytest.fixture
def peppered_finder() -> AlgorithmFinder:
    return AlgorithmFinder(PassforgeConfig(pepper=PEPPER, **CHEAP_PARAMS))


@pytest.fixture
def cheap_config_file(tmp_path: Path) -> Path:
    """Write .passforge/config.toml with cheap parameters and return its path."""
    config_dir = tmp_path / ".passforge"
    config_dir.mkdir(exist_ok=True)
    config_path = config_dir / "config.toml"
    config_path.write_text(CHEAP_CONFIG_TOML)
    return config_path
