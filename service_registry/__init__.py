"""Declarative dependency-injection container.

Factory methods on a ``ServiceRegistry`` subclass are declared with
``@register``; other objects declare fields with ``resolve`` that look the
service up on first read.
"""

from loguru import logger

from .bootstrap import bootstrap
from .di import (
    Binding,
    BindingTable,
    Disposable,
    Injectable,
    Resolved,
    ServiceRegistry,
    clear_registry,
    get_active_registry,
    get_binding_table,
    register,
    reset_registry,
    resolve,
    service_key,
)
from .errors import (
    ConfigurationError,
    DisposalError,
    DuplicateKeyError,
    DuplicateMethodError,
    NotReadyError,
    ServiceNotFoundError,
    ServiceRegistryError,
)

# Silent until configure_logging or bootstrap enables registry logs
logger.disable(__name__)

__version__ = "0.1.0"

__all__ = [
    "ServiceRegistry",
    "register",
    "resolve",
    "Resolved",
    "Injectable",
    "Disposable",
    "Binding",
    "BindingTable",
    "service_key",
    "get_binding_table",
    "get_active_registry",
    "clear_registry",
    "reset_registry",
    "bootstrap",
    "ServiceRegistryError",
    "DuplicateMethodError",
    "DuplicateKeyError",
    "NotReadyError",
    "ServiceNotFoundError",
    "DisposalError",
    "ConfigurationError",
]
