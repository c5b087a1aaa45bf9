"""Tests for configuration loading and validation."""

import pytest

from service_registry.config import (
    ConfigurationLoader,
    ConfigurationManager,
    Settings,
)
from service_registry.errors import ConfigurationError


class TestConfigurationLoader:
    """Test suite for ConfigurationLoader."""

    def test_load_yaml(self, tmp_path):
        """Test loading a YAML mapping."""
        path = tmp_path / "config.yaml"
        path.write_text("logging:\n  level: DEBUG\n")

        assert ConfigurationLoader().load_yaml(path) == {"logging": {"level": "DEBUG"}}

    def test_empty_file(self, tmp_path):
        """Test an empty file loads as an empty mapping."""
        path = tmp_path / "config.yaml"
        path.write_text("")

        assert ConfigurationLoader().load_yaml(path) == {}

    def test_missing_file(self, tmp_path):
        """Test a missing file is a configuration error."""
        with pytest.raises(ConfigurationError, match="not found"):
            ConfigurationLoader().load_yaml(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        """Test malformed YAML is a configuration error."""
        path = tmp_path / "config.yaml"
        path.write_text("logging: [unclosed\n")

        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            ConfigurationLoader().load_yaml(path)

    def test_non_mapping(self, tmp_path):
        """Test a top-level list is rejected."""
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ConfigurationError, match="mapping"):
            ConfigurationLoader().load_yaml(path)

    def test_merge_configs(self):
        """Test deep merging with override precedence."""
        base = {"logging": {"level": "INFO", "sink": "stderr"}, "registry": {}}
        override = {"logging": {"level": "DEBUG"}}

        merged = ConfigurationLoader().merge_configs(base, override)

        assert merged == {"logging": {"level": "DEBUG", "sink": "stderr"}, "registry": {}}
        assert base["logging"]["level"] == "INFO"


class TestConfigurationManager:
    """Test suite for ConfigurationManager."""

    def test_defaults(self):
        """Test settings without file or environment."""
        settings = ConfigurationManager(environ={}).load_settings()

        assert settings == Settings()
        assert settings.logging.enabled is False
        assert settings.logging.level == "INFO"
        assert settings.registry.qualify_method_names is False

    def test_file_settings(self, tmp_path):
        """Test settings loaded from a file."""
        path = tmp_path / "config.yaml"
        path.write_text(
            "logging:\n"
            "  enabled: true\n"
            "  level: debug\n"
            "registry:\n"
            "  qualify_method_names: true\n"
        )

        settings = ConfigurationManager(path, environ={}).load_settings()

        assert settings.logging.enabled is True
        assert settings.logging.level == "DEBUG"
        assert settings.registry.qualify_method_names is True

    def test_environment_overrides_file(self, tmp_path):
        """Test environment variables win over the file."""
        path = tmp_path / "config.yaml"
        path.write_text("logging:\n  level: INFO\n  sink: stderr\n")
        environ = {
            "SERVICE_REGISTRY_LOGGING__LEVEL": "WARNING",
            "SERVICE_REGISTRY_REGISTRY__QUALIFY_METHOD_NAMES": "true",
            "UNRELATED": "ignored",
        }

        manager = ConfigurationManager(path, environ=environ)
        settings = manager.load_settings()

        assert settings.logging.level == "WARNING"
        assert settings.logging.sink == "stderr"
        assert settings.registry.qualify_method_names is True
        assert "unrelated" not in manager.load_configuration()

    def test_os_environment(self, monkeypatch):
        """Test overrides are read from os.environ by default."""
        monkeypatch.setenv("SERVICE_REGISTRY_LOGGING__ENABLED", "true")

        settings = ConfigurationManager().load_settings()

        assert settings.logging.enabled is True

    def test_convert_env_value(self):
        """Test environment values are converted to scalars."""
        manager = ConfigurationManager(environ={})

        assert manager._convert_env_value("TRUE") is True
        assert manager._convert_env_value("false") is False
        assert manager._convert_env_value("3") == 3
        assert manager._convert_env_value("0.5") == 0.5
        assert manager._convert_env_value("stdout") == "stdout"

    def test_invalid_value(self):
        """Test validation failures become configuration errors."""
        environ = {"SERVICE_REGISTRY_LOGGING__LEVEL": "LOUD"}

        with pytest.raises(ConfigurationError) as exc_info:
            ConfigurationManager(environ=environ).load_settings()

        assert exc_info.value.context.technical_details["field_path"] == "logging.level"

    def test_unknown_key(self, tmp_path):
        """Test unknown settings are rejected."""
        path = tmp_path / "config.yaml"
        path.write_text("registry:\n  strict: true\n")

        with pytest.raises(ConfigurationError):
            ConfigurationManager(path, environ={}).load_settings()

    def test_unrelated_prefixed_variables_ignored(self):
        """Test prefixed variables outside known sections do not break loading."""
        environ = {
            "SERVICE_REGISTRY_URL": "https://registry.internal:5000",
            "SERVICE_REGISTRY_TOKEN__VALUE": "secret",
            "SERVICE_REGISTRY_LOGGING__SINK": "stdout",
        }
        manager = ConfigurationManager(environ=environ)

        settings = manager.load_settings()

        assert settings.logging.sink == "stdout"
        assert set(manager.load_configuration()) == {"logging"}

    def test_unknown_key_in_known_section_from_environment(self):
        """Test typos inside a known section are still rejected."""
        environ = {"SERVICE_REGISTRY_LOGGING__LEVL": "DEBUG"}

        with pytest.raises(ConfigurationError) as exc_info:
            ConfigurationManager(environ=environ).load_settings()

        assert exc_info.value.context.technical_details["field_path"] == "logging.levl"

    def test_override_of_scalar_section(self, tmp_path):
        """Test an override below a scalar value is rejected."""
        path = tmp_path / "config.yaml"
        path.write_text("logging: verbose\n")
        environ = {"SERVICE_REGISTRY_LOGGING__LEVEL": "DEBUG"}

        with pytest.raises(ConfigurationError):
            ConfigurationManager(path, environ=environ).load_configuration()

    def test_get_config(self, tmp_path):
        """Test dot-notation lookups."""
        path = tmp_path / "config.yaml"
        path.write_text("logging:\n  sink: stdout\n")
        manager = ConfigurationManager(path, environ={})

        assert manager.get_config("logging.sink") == "stdout"
        assert manager.get_config("logging.level", "INFO") == "INFO"
        assert manager.get_config("missing.key") is None

    def test_reload(self, tmp_path):
        """Test reload picks up file changes."""
        path = tmp_path / "config.yaml"
        path.write_text("logging:\n  level: INFO\n")
        manager = ConfigurationManager(path, environ={})
        assert manager.get_config("logging.level") == "INFO"

        path.write_text("logging:\n  level: ERROR\n")
        assert manager.get_config("logging.level") == "INFO"
        assert manager.reload()["logging"]["level"] == "ERROR"
