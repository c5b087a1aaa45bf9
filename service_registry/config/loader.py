"""Configuration loading utilities."""

import copy
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from ..errors import ConfigurationError

try:
    from yaml import CSafeLoader as YamlLoader
except ImportError:
    from yaml import SafeLoader as YamlLoader


class ConfigurationLoader:
    """Utility class for loading configuration files."""

    def load_yaml(self, path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from YAML file.

        Args:
            path: Path to YAML file

        Returns:
            Configuration dictionary

        Raises:
            ConfigurationError: If the file is missing, invalid, or not a mapping
        """
        path = Path(path)
        if not path.exists():
            raise ConfigurationError(
                f"Configuration file not found: {path}",
                config_path=path,
            )

        try:
            with open(path, "r", encoding="utf-8") as f:
                content = yaml.load(f, Loader=YamlLoader) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in {path}: {e}",
                config_path=path,
                cause=e,
            ) from e

        if not isinstance(content, dict):
            raise ConfigurationError(
                f"Configuration file must contain a mapping: {path}",
                config_path=path,
            )

        return content

    def merge_configs(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Deep-merge two configuration dictionaries, ``override`` winning."""
        result = copy.deepcopy(base)

        for key, value in override.items():
            if (key in result and
                    isinstance(result[key], dict) and
                    isinstance(value, dict)):
                result[key] = self.merge_configs(result[key], value)
            else:
                result[key] = copy.deepcopy(value)

        return result
