"""Specific error types raised by the registration and resolution layers."""

from __future__ import annotations

from pathlib import Path
from typing import Any, List, Optional

from .base import ErrorGroup, ServiceRegistryError


class DuplicateMethodError(ServiceRegistryError, ValueError):
    """A factory method name was declared twice."""

    def __init__(self, method_name: str, *, key: Optional[str] = None, **kwargs: Any):
        kwargs.setdefault("recoverable", False)
        super().__init__(
            f"Service factory method '{method_name}' already registered.",
            **kwargs,
        )
        self.method_name = method_name
        self.key = key

        self.context.add_technical_detail("method_name", method_name)
        if key:
            self.context.add_technical_detail("key", key)
        self.with_suggestion(
            "Factory method names are global across registry classes; rename the method"
        )


class DuplicateKeyError(ServiceRegistryError, ValueError):
    """Two factory methods resolve to the same service key."""

    def __init__(self, key: str, *, method_name: Optional[str] = None, **kwargs: Any):
        kwargs.setdefault("recoverable", False)
        owner, _, name = key.partition("::")
        super().__init__(
            f"Service name '{name}' for '{owner}' type is already registered. "
            "Use a different name.",
            **kwargs,
        )
        self.key = key
        self.method_name = method_name

        self.context.add_technical_detail("key", key)
        if method_name:
            self.context.add_technical_detail("method_name", method_name)
        self.with_suggestion(f"Pass name=... to register a second '{owner}' service")


class NotReadyError(ServiceRegistryError, RuntimeError):
    """A resolved field was read before any registry was installed."""

    def __init__(self, key: str, **kwargs: Any):
        kwargs.setdefault("recoverable", False)
        super().__init__(
            f"Resolve Error: '{key}' cannot be accessed before ServiceRegistry is ready.",
            **kwargs,
        )
        self.key = key
        self.context.add_technical_detail("key", key)
        self.with_suggestion("Construct and initialize a ServiceRegistry before reading the field")


class ServiceNotFoundError(ServiceRegistryError, LookupError):
    """Neither an instance nor a pending factory exists for a key."""

    def __init__(self, key: str, **kwargs: Any):
        kwargs.setdefault("recoverable", False)
        super().__init__(
            f"ServiceRegistry Error: No instance found for '{key}'.",
            **kwargs,
        )
        self.key = key
        self.context.add_technical_detail("key", key)


class DisposalError(ErrorGroup):
    """One or more disposal hooks raised during teardown."""

    def __init__(self, failures: List[BaseException], *, keys: Optional[List[str]] = None, **kwargs: Any):
        super().__init__(
            f"{len(failures)} service(s) failed to dispose",
            failures,
            **kwargs,
        )
        self.keys = keys or []
        if self.keys:
            self.context.add_technical_detail("keys", self.keys)


class ConfigurationError(ServiceRegistryError):
    """Configuration-related errors."""

    def __init__(
        self,
        message: str,
        *,
        config_path: Optional[Path] = None,
        field_path: Optional[str] = None,
        invalid_value: Any = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)

        if config_path:
            self.context.add_technical_detail("config_path", str(config_path))
        if field_path:
            self.context.add_technical_detail("field_path", field_path)
        if invalid_value is not None:
            self.context.add_technical_detail("invalid_value", str(invalid_value))
