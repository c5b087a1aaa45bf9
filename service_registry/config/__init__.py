"""Configuration for the service registry.

This module provides:
- YAML configuration loading with deep merging
- Environment variable overrides
- Validated settings models
"""

from .loader import ConfigurationLoader
from .manager import ENV_PREFIX, ConfigurationManager
from .settings import LoggingSettings, RegistrySettings, Settings

__all__ = [
    "ConfigurationLoader",
    "ConfigurationManager",
    "ENV_PREFIX",
    "Settings",
    "LoggingSettings",
    "RegistrySettings",
]
