"""
Structured error types for logship.

Errors raised by the collaborators around the delivery pipeline (metadata
resolution, log retrieval, transports and configuration) carry a category, a
retry hint and a small context record so they can be logged as structured
events instead of bare strings.

Manifesto:
    - **Typed Error Hierarchy:** Different error types for different stages
    - **Explicit Retry Semantics:** Each error knows if it's retryable
    - **Rich Context:** Errors carry build and endpoint metadata for logging
    - **Error Chaining:** Preserve original exceptions while adding context

Architecture:
    ::

        ┌──────────────────────────────────────────────────────────┐
        │                      LogShipError                        │
        │  (category, retryable, retry_after, context, cause)      │
        ├──────────────────────────────────────────────────────────┤
        │  TransientError                 ConfigError              │
        │  (retryable=True)               (CONFIG)                 │
        │       │                         │                        │
        │  NetworkError                   InvalidConfigError       │
        │  TransportError                                          │
        └──────────────────────────────────────────────────────────┘

Examples:
    >>> error = TransportError("intake returned 503", retry_after=30)
    >>> error.retryable
    True
    >>> error.with_context(url="https://logs.example.com").context.url
    'https://logs.example.com'

Tags:
    error-handling, exception-hierarchy, retry-logic, error-context, logship

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories for classification and routing."""

    NETWORK = "NETWORK"
    TRANSPORT = "TRANSPORT"
    RETRIEVAL = "RETRIEVAL"
    CONFIG = "CONFIG"
    INTERNAL = "INTERNAL"
    UNKNOWN = "UNKNOWN"


@dataclass
class ErrorContext:
    """
    Structured metadata context for errors.

    Typed fields cover the identifiers every log-shipping error can be tied
    to; anything else goes into ``metadata``.

    Attributes:
        job_name: Name of the job the build belongs to
        build_number: Build number within the job
        transport: Name of the transport that failed
        url: Endpoint that was being accessed
        http_status: HTTP status code if applicable
        metadata: Additional key-value pairs
    """

    job_name: str | None = None
    build_number: str | None = None
    transport: str | None = None
    url: str | None = None
    http_status: int | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["job_name", "build_number", "transport", "url", "http_status"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class LogShipError(Exception):
    """
    Base exception for all logship errors.

    Subclasses set ``default_category`` and ``default_retryable`` to give
    sensible defaults for their stage of the pipeline.

    Examples:
        >>> error = LogShipError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>
        >>> error.to_dict()["retryable"]
        False
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL
    default_retryable: bool = False

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        retryable: bool | None = None,
        retry_after: int | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.retryable = retryable if retryable is not None else self.default_retryable
        self.retry_after = retry_after
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> LogShipError:
        """
        Add context to this error (fluent API).

        Usage:
            raise TransportError("Failed").with_context(
                transport="http",
                url="https://logs.example.com/v1/input",
            )
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
            "retryable": self.retryable,
        }
        if self.retry_after is not None:
            result["retry_after"] = self.retry_after
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# TRANSIENT ERRORS (Usually Retryable)
# =============================================================================


class TransientError(LogShipError):
    """Temporary error that may succeed on a later attempt."""

    default_category = ErrorCategory.NETWORK
    default_retryable = True


class NetworkError(TransientError):
    """Connection-level failure reaching the intake endpoint."""

    default_category = ErrorCategory.NETWORK


class TransportError(TransientError):
    """The intake endpoint rejected or failed a delivery."""

    default_category = ErrorCategory.TRANSPORT


# =============================================================================
# CONFIGURATION ERRORS (Never Retryable)
# =============================================================================


class ConfigError(LogShipError):
    """Configuration error."""

    default_category = ErrorCategory.CONFIG
    default_retryable = False


class InvalidConfigError(ConfigError):
    """Configuration value is invalid."""

    def __init__(self, key: str, value: Any, message: str | None = None):
        msg = message or f"Invalid value for {key}: {value!r}"
        super().__init__(msg)
        self.key = key
        self.value = value


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def is_retryable(error: Exception) -> bool:
    """Check if an error is retryable."""
    if isinstance(error, LogShipError):
        return error.retryable
    return isinstance(error, (ConnectionError, TimeoutError))


def categorize_error(error: Exception) -> ErrorCategory:
    """Get the category of an error."""
    if isinstance(error, LogShipError):
        return error.category
    if isinstance(error, ConnectionError):
        return ErrorCategory.NETWORK
    if isinstance(error, OSError):
        return ErrorCategory.RETRIEVAL
    if isinstance(error, (KeyError, ValueError)):
        return ErrorCategory.CONFIG
    return ErrorCategory.UNKNOWN


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "LogShipError",
    "TransientError",
    "NetworkError",
    "TransportError",
    "ConfigError",
    "InvalidConfigError",
    "is_retryable",
    "categorize_error",
]
