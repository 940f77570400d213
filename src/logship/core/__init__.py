"""
logship core: error hierarchy, collaborator protocols and settings.
"""

from logship.core.errors import (
    ConfigError,
    ErrorCategory,
    ErrorContext,
    InvalidConfigError,
    LogShipError,
    NetworkError,
    TransientError,
    TransportError,
    categorize_error,
    is_retryable,
)
from logship.core.protocols import (
    EnvironmentSource,
    ErrorSink,
    ExecutionUnit,
    HostLocator,
    LogTransport,
    MetadataProvider,
)
from logship.core.settings import LogShipSettings, get_settings, parse_tags

__all__ = [
    # Errors
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
    # Protocols
    "ExecutionUnit",
    "EnvironmentSource",
    "MetadataProvider",
    "HostLocator",
    "LogTransport",
    "ErrorSink",
    # Settings
    "LogShipSettings",
    "get_settings",
    "parse_tags",
]
