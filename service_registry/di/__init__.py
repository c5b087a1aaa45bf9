"""Dependency injection for the service registry.

This module provides:
- A process-wide binding table filled at class definition time
- ``@register`` for eager and lazy factory methods
- ``resolve`` for fields looked up on first read
- ``ServiceRegistry`` to create, look up and dispose services
"""

from .decorators import Resolved, register, resolve
from .protocols import Disposable, Injectable
from .registry import ServiceRegistry, get_active_registry, reset_registry
from .table import (
    DEFAULT_NAME,
    Binding,
    BindingTable,
    clear_registry,
    get_binding_table,
    service_key,
)

__all__ = [
    # Registry
    "ServiceRegistry",
    "get_active_registry",
    "reset_registry",

    # Declarations
    "register",
    "resolve",
    "Resolved",

    # Bindings
    "Binding",
    "BindingTable",
    "DEFAULT_NAME",
    "service_key",
    "get_binding_table",
    "clear_registry",

    # Service capabilities
    "Injectable",
    "Disposable",
]
