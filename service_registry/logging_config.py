"""loguru sink setup for the service registry.

Registry logs are disabled at import. ``configure_logging`` enables them
for one sink, or disables them again.
"""

import sys
from typing import Optional

from loguru import logger

from .config.settings import LoggingSettings

PACKAGE = "service_registry"

# Handler added by the last configure_logging call
_handler_id: Optional[int] = None
_default_handler_removed = False


def configure_logging(settings: LoggingSettings) -> Optional[int]:
    """Route registry logs to the configured sink, replacing the previous one.

    Args:
        settings: Logging settings

    Returns:
        Id of the added loguru handler, or None when logging is disabled
    """
    global _handler_id, _default_handler_removed

    if _handler_id is not None:
        logger.remove(_handler_id)
        _handler_id = None

    if not settings.enabled:
        logger.disable(PACKAGE)
        return None

    # loguru's stderr handler would duplicate every record at DEBUG level
    if not _default_handler_removed:
        try:
            logger.remove(0)
        except ValueError:
            pass  # already removed by the application
        _default_handler_removed = True

    if settings.sink == "stderr":
        sink = sys.stderr
    elif settings.sink == "stdout":
        sink = sys.stdout
    else:
        sink = settings.sink

    file_sink = isinstance(sink, str)
    _handler_id = logger.add(
        sink,
        format=settings.format,
        level=settings.level,
        colorize=not file_sink,
        filter=PACKAGE,
        backtrace=True,
        diagnose=False,
    )
    logger.enable(PACKAGE)
    logger.debug(f"Logging to {settings.sink} at {settings.level}")
    return _handler_id
