"""Configuration management for the service registry.

Configuration is loaded in increasing priority from:
1. An optional YAML file
2. Environment variables prefixed with ``SERVICE_REGISTRY_``
"""

import copy
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import ValidationError
from loguru import logger

from ..errors import ConfigurationError
from .loader import ConfigurationLoader
from .settings import Settings

ENV_PREFIX = "SERVICE_REGISTRY_"
ENV_NESTING = "__"


class ConfigurationManager:
    """Loads, merges and validates registry configuration."""

    def __init__(
        self,
        config_path: Optional[Union[str, Path]] = None,
        *,
        env_prefix: str = ENV_PREFIX,
        environ: Optional[Mapping[str, str]] = None,
    ):
        """Initialize configuration manager.

        Args:
            config_path: YAML configuration file, optional
            env_prefix: Prefix of environment variable overrides
            environ: Environment to read, defaults to ``os.environ``
        """
        self.loader = ConfigurationLoader()
        self.config_path = Path(config_path) if config_path else None
        self.env_prefix = env_prefix
        self._environ = environ

        self._config_cache: Optional[Dict[str, Any]] = None

    def load_configuration(self) -> Dict[str, Any]:
        """Load the merged configuration dictionary."""
        if self._config_cache is not None:
            return self._config_cache

        config: Dict[str, Any] = {}

        if self.config_path is not None:
            file_config = self.loader.load_yaml(self.config_path)
            config = self.loader.merge_configs(config, file_config)
            logger.debug(f"Loaded configuration from {self.config_path}")

        config = self._apply_env_overrides(config)

        self._config_cache = config
        return config

    def load_settings(self) -> Settings:
        """Load and validate settings.

        Raises:
            ConfigurationError: If the configuration does not validate
        """
        config = self.load_configuration()
        try:
            return Settings.model_validate(config)
        except ValidationError as e:
            first = e.errors()[0]
            field_path = ".".join(str(part) for part in first["loc"])
            raise ConfigurationError(
                f"Invalid configuration at {field_path}: {first['msg']}",
                config_path=self.config_path,
                field_path=field_path,
                invalid_value=first.get("input"),
                cause=e,
            ) from e

    def _apply_env_overrides(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Apply environment variable overrides.

        ``SERVICE_REGISTRY_LOGGING__LEVEL=DEBUG`` sets ``logging.level``.
        """
        config = copy.deepcopy(config)
        environ = self._environ if self._environ is not None else os.environ

        for key, value in environ.items():
            if not key.startswith(self.env_prefix):
                continue

            config_path = key[len(self.env_prefix):].lower().split(ENV_NESTING)
            # Other tools share the prefix, e.g. SERVICE_REGISTRY_URL
            if config_path[0] not in Settings.model_fields:
                logger.debug(f"Ignoring environment variable {key}: no '{config_path[0]}' section")
                continue

            current = config
            for path_part in config_path[:-1]:
                section = current.setdefault(path_part, {})
                if not isinstance(section, dict):
                    raise ConfigurationError(
                        f"Environment variable {key} overrides a non-mapping value",
                        field_path=".".join(config_path),
                    )
                current = section

            current[config_path[-1]] = self._convert_env_value(value)

        return config

    def _convert_env_value(self, value: str) -> Union[str, int, float, bool]:
        """Convert environment variable string to appropriate type."""
        if value.lower() in ("true", "false"):
            return value.lower() == "true"

        try:
            return int(value)
        except ValueError:
            pass

        try:
            return float(value)
        except ValueError:
            pass

        return value

    def get_config(self, key: str, default: Any = None) -> Any:
        """Get configuration value by dot-notation key."""
        current: Any = self.load_configuration()
        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return default
            current = current[part]
        return current

    def reload(self) -> Dict[str, Any]:
        """Drop the cached configuration and load it again."""
        self._config_cache = None
        return self.load_configuration()
