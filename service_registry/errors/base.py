"""Base error classes for the service registry."""

from __future__ import annotations

import traceback
from datetime import datetime
from typing import Any, Dict, Iterator, List, Optional, TypeVar

from loguru import logger
from pydantic import BaseModel, Field


class ErrorContext(BaseModel):
    """Details attached to a registry error."""

    timestamp: datetime = Field(default_factory=datetime.now)
    user_message: Optional[str] = None
    technical_details: Dict[str, Any] = Field(default_factory=dict)
    suggestions: List[str] = Field(default_factory=list)
    related_errors: List[Dict[str, Any]] = Field(default_factory=list)

    def add_suggestion(self, suggestion: str) -> None:
        self.suggestions.append(suggestion)

    def add_technical_detail(self, key: str, value: Any) -> None:
        self.technical_details[key] = value

    def add_related_error(self, error: BaseException) -> None:
        """Record an underlying exception by type and message."""
        self.related_errors.append({
            "type": type(error).__name__,
            "message": "".join(traceback.format_exception_only(type(error), error)).strip(),
        })


T = TypeVar("T", bound="ServiceRegistryError")


class ServiceRegistryError(Exception):
    """Base exception for registry, binding and configuration failures.

    Every error carries a code derived from its class name, a recoverable
    flag and an ``ErrorContext``. Construction logs the error through loguru,
    at CRITICAL for unrecoverable errors.
    """

    def __init__(
        self,
        message: str,
        *,
        context: Optional[ErrorContext] = None,
        cause: Optional[BaseException] = None,
        error_code: Optional[str] = None,
        recoverable: bool = True,
    ):
        """Initialize the error.

        Args:
            message: Human-readable error message
            context: Details to attach, a fresh context when omitted
            cause: Exception this error wraps
            error_code: Code for programmatic handling, derived from the
                class name when omitted
            recoverable: Whether the caller can retry or correct the input
        """
        super().__init__(message)
        self.message = message
        self.context = context or ErrorContext()
        self.cause = cause
        self.error_code = error_code or self._generate_error_code()
        self.recoverable = recoverable

        self.context.user_message = message
        if cause is not None:
            self.context.add_related_error(cause)

        self._log_error()

    def __str__(self) -> str:
        return self.message

    def _generate_error_code(self) -> str:
        # DuplicateKeyError -> DUPLICATE_KEY
        name = self.__class__.__name__
        if name.endswith("Error"):
            name = name[: -len("Error")]
        parts: List[str] = []
        for i, char in enumerate(name):
            if i > 0 and char.isupper() and name[i - 1].islower():
                parts.append("_")
            parts.append(char.upper())
        return "".join(parts)

    def _log_error(self) -> None:
        bound = logger.bind(
            error_code=self.error_code,
            recoverable=self.recoverable,
            details=self.context.technical_details,
        )
        if self.recoverable:
            bound.error(self.message)
        else:
            bound.critical(self.message)

    def with_context(self: T, **kwargs: Any) -> T:
        """Attach technical details and return the error."""
        for key, value in kwargs.items():
            self.context.add_technical_detail(key, value)
        return self

    def with_suggestion(self: T, suggestion: str) -> T:
        """Attach a hint for fixing the error and return it."""
        self.context.add_suggestion(suggestion)
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Serializable form of the error."""
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "recoverable": self.recoverable,
            "context": self.context.model_dump(mode="json"),
            "cause": str(self.cause) if self.cause else None,
        }


class ErrorGroup(ServiceRegistryError):
    """Several failures reported as one error."""

    def __init__(self, message: str, errors: List[BaseException], **kwargs: Any):
        super().__init__(message, **kwargs)
        self.errors = list(errors)

        for error in self.errors:
            self.context.add_related_error(error)

    def __iter__(self) -> Iterator[BaseException]:
        return iter(self.errors)

    def __len__(self) -> int:
        return len(self.errors)
