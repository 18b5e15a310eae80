"""
Unit tests for the configuration helpers used by the CLI.
"""

from passforge.config import CONFIGURABLE_KEYS, config_get, config_list, load_config
from passforge.core.models.config import PassforgeConfig


class TestConfigurableKeys:
    """Tests for CONFIGURABLE_KEYS."""

    def test_defaults_match_models(self):
        """Documented defaults agree with the Pydantic models."""
        config = PassforgeConfig()
        for key, info in CONFIGURABLE_KEYS.items():
            assert config.get(key) == info["default"], key

    def test_keys_exist(self):
        """Every documented key resolves in the loaded config."""
        loaded = load_config()
        for key in CONFIGURABLE_KEYS:
            section, _, field = key.partition(".")
            assert section in loaded
            if field:
                assert field in loaded[section]

    def test_config_list(self):
        """config_list returns the documented keys."""
        assert config_list() is CONFIGURABLE_KEYS


class TestConfigGet:
    """Tests for config_get."""

    def test_default_value(self, tmp_path):
        """Unconfigured keys return their default."""
        assert config_get("scrypt.work_factor", start_dir=str(tmp_path)) == 32768

    def test_configured_value(self, cheap_config_file, tmp_path):
        """Configured keys return the file value."""
        assert config_get("bcrypt.rounds", start_dir=str(tmp_path)) == 4

    def test_explicit_path(self, cheap_config_file):
        """A config path can be given explicitly."""
        assert config_get("argon2.memory", config_path=cheap_config_file) == 64

    def test_unknown_key(self, tmp_path):
        """Unknown keys return None."""
        assert config_get("scrypt.nothing", start_dir=str(tmp_path)) is None
