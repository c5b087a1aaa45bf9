"""Application bootstrap for the service registry.

Run before importing modules that declare registry classes, so that the
binding table settings apply to every ``@register`` call:

```python
from service_registry import bootstrap

bootstrap("service-registry.yaml")
from myapp.services import AppRegistry
```
"""

from pathlib import Path
from typing import Optional, Union

from loguru import logger

from .config import ConfigurationManager, Settings
from .di import get_binding_table
from .logging_config import configure_logging


def bootstrap(
    config_path: Optional[Union[str, Path]] = None,
    settings: Optional[Settings] = None,
) -> Settings:
    """Load settings, configure logging and apply binding table settings.

    Args:
        config_path: YAML configuration file, ignored when ``settings`` is given
        settings: Settings to apply instead of loading them

    Returns:
        The applied settings

    Raises:
        ConfigurationError: If the configuration is invalid, or if method name
            qualification changes after bindings were recorded
    """
    if settings is None:
        settings = ConfigurationManager(config_path).load_settings()

    configure_logging(settings.logging)
    get_binding_table().qualify_method_names = settings.registry.qualify_method_names

    logger.debug("Service registry bootstrap complete")
    return settings
