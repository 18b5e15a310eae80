"""
Unit tests for settings loading.

Tests verify:
- Model defaults apply when nothing is configured
- .passforge/config.toml and pyproject.toml [tool.passforge] are found
- Environment variables override the TOML file
- Invalid values surface as ConfigurationError
"""

from pathlib import Path

import pytest

from passforge.core.exceptions import ConfigFileError, ConfigurationError
from passforge.core.models.config import PassforgeConfig
from passforge.core.settings import PassforgeSettings, find_config_file, load_settings


def write_config(base: Path, content: str) -> Path:
    config_dir = base / ".passforge"
    config_dir.mkdir(exist_ok=True)
    path = config_dir / "config.toml"
    path.write_text(content)
    return path


class TestDefaults:
    """Tests for settings without any configuration source."""

    def test_model_defaults(self, tmp_path):
        """Defaults match the documented values."""
        settings = load_settings(start_dir=str(tmp_path))

        assert settings.default_algorithm == "bcrypt"
        assert settings.pepper is None
        assert settings.salt.length == 64
        assert settings.bcrypt.rounds == 10
        assert settings.scrypt.work_factor == 32768
        assert settings.pbkdf2.iterations == 64000
        assert settings.argon2.memory == 15360
        assert settings.config_file is None

    def test_overrides(self, tmp_path):
        """Explicit values have the highest priority."""
        settings = load_settings(start_dir=str(tmp_path), pepper="explicit")
        assert settings.pepper == "explicit"

    def test_same_fields_as_config_model(self, tmp_path):
        """Settings share their fields and defaults with PassforgeConfig."""
        settings = load_settings(start_dir=str(tmp_path))

        assert set(PassforgeSettings.model_fields) == set(PassforgeConfig.model_fields)
        assert settings.to_config() == PassforgeConfig()


class TestTomlSource:
    """Tests for TOML configuration files."""

    def test_config_toml(self, tmp_path):
        """.passforge/config.toml is read."""
        path = write_config(
            tmp_path,
            'default_algorithm = "scrypt"\n\n[scrypt]\nwork_factor = 1024\n',
        )

        settings = load_settings(start_dir=str(tmp_path))

        assert settings.default_algorithm == "scrypt"
        assert settings.scrypt.work_factor == 1024
        assert settings.scrypt.resources == 8
        assert settings.config_file == str(path)

    def test_found_from_subdirectory(self, tmp_path):
        """The config file is found by walking up."""
        path = write_config(tmp_path, "[bcrypt]\nrounds = 5\n")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)

        assert find_config_file(str(nested)) == path
        assert load_settings(start_dir=str(nested)).bcrypt.rounds == 5

    def test_pyproject_section(self, tmp_path):
        """[tool.passforge] in pyproject.toml is read."""
        (tmp_path / "pyproject.toml").write_text(
            '[project]\nname = "app"\n\n[tool.passforge.argon2]\nmemory = 64\n'
        )

        settings = load_settings(start_dir=str(tmp_path))

        assert settings.argon2.memory == 64
        assert settings.config_file == str(tmp_path / "pyproject.toml")

    def test_pyproject_without_section_ignored(self, tmp_path):
        """A pyproject.toml without [tool.passforge] is not a config file."""
        (tmp_path / "pyproject.toml").write_text('[project]\nname = "app"\n')
        assert find_config_file(str(tmp_path)) is None

    def test_explicit_path(self, tmp_path):
        """An explicit config path is used as is."""
        path = tmp_path / "custom.toml"
        path.write_text("[pbkdf2]\niterations = 1000\n")

        assert load_settings(config_path=path).pbkdf2.iterations == 1000

    def test_empty_pepper_is_none(self, tmp_path):
        """An empty pepper means no pepper."""
        write_config(tmp_path, 'pepper = ""\n')
        assert load_settings(start_dir=str(tmp_path)).pepper is None

    def test_invalid_value_raises(self, tmp_path):
        """A non-power-of-two work factor is a configuration error."""
        write_config(tmp_path, "[scrypt]\nwork_factor = 1000\n")

        with pytest.raises(ConfigurationError) as exc_info:
            load_settings(start_dir=str(tmp_path))
        assert exc_info.value.context["key"].startswith("scrypt")

    def test_unknown_algorithm_raises(self, tmp_path):
        """An unknown default family is a configuration error."""
        write_config(tmp_path, 'default_algorithm = "md4crypt"\n')

        with pytest.raises(ConfigurationError):
            load_settings(start_dir=str(tmp_path))

    def test_broken_toml_falls_back(self, tmp_path):
        """An unparsable file is recorded and defaults are used."""
        write_config(tmp_path, "[scrypt\nwork_factor = \n")

        settings = load_settings(start_dir=str(tmp_path))

        assert settings.scrypt.work_factor == 32768
        assert settings.config_error is not None

    def test_broken_toml_strict_raises(self, tmp_path):
        """strict=True turns an unparsable file into ConfigFileError."""
        write_config(tmp_path, "[scrypt\n")

        with pytest.raises(ConfigFileError):
            load_settings(start_dir=str(tmp_path), strict=True)


class TestEnvironmentSource:
    """Tests for PASSFORGE_* environment variables."""

    def test_nested_variable(self, tmp_path, monkeypatch):
        """Sections are addressed with a double underscore."""
        monkeypatch.setenv("PASSFORGE_SCRYPT__WORK_FACTOR", "2048")
        assert load_settings(start_dir=str(tmp_path)).scrypt.work_factor == 2048

    def test_environment_beats_toml(self, tmp_path, monkeypatch):
        """Environment variables override the file."""
        write_config(tmp_path, 'pepper = "from-file"\n\n[bcrypt]\nrounds = 5\n')
        monkeypatch.setenv("PASSFORGE_PEPPER", "from-env")

        settings = load_settings(start_dir=str(tmp_path))

        assert settings.pepper == "from-env"
        assert settings.bcrypt.rounds == 5

    def test_to_dict_hides_tags(self, tmp_path):
        """to_dict() leaves out the internal algorithm tags."""
        data = load_settings(start_dir=str(tmp_path)).to_dict()

        assert "algorithm" not in data["scrypt"]
        assert data["scrypt"]["work_factor"] == 32768
