"""Error types for the service registry.

This module provides:
- A base error carrying rich context and an error code
- Declaration-time errors (duplicate method names and keys)
- Resolution-time errors (registry not ready, service not found)
- Teardown and configuration errors
"""

from .base import ErrorContext, ErrorGroup, ServiceRegistryError
from .types import (
    ConfigurationError,
    DisposalError,
    DuplicateKeyError,
    DuplicateMethodError,
    NotReadyError,
    ServiceNotFoundError,
)

__all__ = [
    # Base classes
    "ServiceRegistryError",
    "ErrorContext",
    "ErrorGroup",
    # Declaration time
    "DuplicateMethodError",
    "DuplicateKeyError",
    # Resolution time
    "NotReadyError",
    "ServiceNotFoundError",
    # Teardown and configuration
    "DisposalError",
    "ConfigurationError",
]
