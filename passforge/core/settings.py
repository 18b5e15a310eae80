"""
Pydantic Settings for passforge configuration.

Provides settings loading from TOML files, environment variables, and defaults.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

try:
    import tomllib
except ImportError:
    import tomli as tomllib

from pydantic import ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from .exceptions import ConfigFileError, ConfigurationError
from .models.config import PassforgeConfig


def _get_logger():
    from ..services.logging import get_logger

    return get_logger()


def find_config_file(start_dir: str | None = None) -> Path | None:
    """
    Find .passforge/config.toml by walking up from start_dir (or cwd).

    Returns:
        Path to config file, or None if not found.
    """
    start = Path(start_dir) if start_dir else Path.cwd()

    for parent in [start, *list(start.parents)]:
        config_path = parent / ".passforge" / "config.toml"
        if config_path.exists():
            return config_path

        # Also check for pyproject.toml with [tool.passforge] section
        pyproject = parent / "pyproject.toml"
        if pyproject.exists():
            try:
                with open(pyproject, "rb") as f:
                    data = tomllib.load(f)
                if "tool" in data and "passforge" in data["tool"]:
                    return pyproject
            except tomllib.TOMLDecodeError as e:
                _get_logger().debug("Failed to parse pyproject.toml at %s: %s", pyproject, e)
            except OSError as e:
                _get_logger().debug("Failed to read pyproject.toml at %s: %s", pyproject, e)

    return None


class TomlConfigSource(PydanticBaseSettingsSource):
    """Custom settings source that loads from TOML config files."""

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        config_path: Path | None = None,
        start_dir: str | None = None,
    ):
        super().__init__(settings_cls)
        self._config_path = config_path
        self._start_dir = start_dir
        self._data: dict[str, Any] | None = None
        self.config_file: str | None = None
        self.config_error: str | None = None

    def _load_toml(self) -> dict[str, Any]:
        """Load and cache TOML data."""
        if self._data is not None:
            return self._data

        self._data = {}

        path = self._config_path
        if path is None:
            path = find_config_file(self._start_dir)

        if path is None:
            return self._data

        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)

            # Handle pyproject.toml vs .passforge/config.toml
            if path.name == "pyproject.toml":
                data = data.get("tool", {}).get("passforge", {})

            self._data = data
            self.config_file = str(path)

        except tomllib.TOMLDecodeError as e:
            _get_logger().warning("Failed to parse config file %s: %s", path, e)
            self.config_error = f"Failed to parse config file {path}: {e}"
        except OSError as e:
            _get_logger().warning("Failed to read config file %s: %s", path, e)
            self.config_error = f"Failed to read config file {path}: {e}"

        return self._data

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Get field value from TOML data."""
        data = self._load_toml()
        field_value = data.get(field_name)
        return field_value, field_name, False

    def __call__(self) -> dict[str, Any]:
        """Return all TOML data for settings initialization."""
        return self._load_toml()


class PassforgeSettings(BaseSettings, PassforgeConfig):
    """Passforge configuration settings with TOML and environment variable support.

    Fields and their defaults come from PassforgeConfig.

    Priority (highest to lowest):
    1. Explicit init values
    2. Environment variables (PASSFORGE_<section>__<field>)
    3. TOML config file (.passforge/config.toml or pyproject.toml [tool.passforge])
    4. Model defaults
    """

    model_config = {
        "env_prefix": "PASSFORGE_",
        "env_nested_delimiter": "__",
        "extra": "ignore",
    }

    # Internal fields (not from config)
    _config_file: str | None = None
    _config_error: str | None = None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources to add TOML loading.

        Note: the TOML location cannot be passed through here, so
        load_settings() sets it on a module-level variable.
        """
        toml_source = TomlConfigSource(
            settings_cls,
            config_path=_current_config_path,
            start_dir=_current_start_dir,
        )
        return (
            init_settings,
            env_settings,
            toml_source,
        )

    @property
    def config_file(self) -> str | None:
        """Path of the TOML file the settings were read from, if any."""
        return self._config_file

    @property
    def config_error(self) -> str | None:
        """Error raised while reading the TOML file, if any."""
        return self._config_error

    def to_config(self) -> PassforgeConfig:
        """Return the settings as a plain PassforgeConfig."""
        return PassforgeConfig.model_validate(self.model_dump())

    def to_dict(self) -> dict[str, Any]:
        """Convert settings to a nested dict."""
        result = self.to_config().to_dict()
        if self._config_file:
            result["_config_file"] = self._config_file
        if self._config_error:
            result["_config_error"] = self._config_error
        return result


# Module-level variables for passing to settings_customise_sources
_current_config_path: Path | None = None
_current_start_dir: str | None = None


def load_settings(
    config_path: Path | None = None,
    start_dir: str | None = None,
    *,
    strict: bool = False,
    **overrides: Any,
) -> PassforgeSettings:
    """Load passforge settings from config file and environment.

    Args:
        config_path: Explicit path to config file
        start_dir: Directory to start searching from (if config_path not given)
        strict: Raise ConfigFileError instead of falling back to defaults
            when the config file cannot be read
        **overrides: Explicit values, highest priority

    Returns:
        PassforgeSettings instance with all sources merged

    Raises:
        ConfigurationError: If a configured value is invalid
        ConfigFileError: If strict and the config file cannot be read
    """
    global _current_config_path, _current_start_dir

    _current_config_path = config_path
    _current_start_dir = start_dir

    try:
        try:
            settings = PassforgeSettings(**overrides)
        except ValidationError as e:
            errors = e.errors()
            key = ".".join(str(p) for p in errors[0]["loc"]) if errors else None
            raise ConfigurationError(
                f"Invalid configuration: {errors[0]['msg'] if errors else e}",
                key=key,
                cause=e,
            ) from e

        # Copy internal fields from TOML source
        toml_source = TomlConfigSource(PassforgeSettings, config_path, start_dir)
        toml_source()
        settings._config_file = toml_source.config_file
        settings._config_error = toml_source.config_error

        if strict and settings._config_error:
            raise ConfigFileError(
                settings._config_error,
                file_path=str(config_path) if config_path else None,
            )

        return settings
    finally:
        _current_config_path = None
        _current_start_dir = None
