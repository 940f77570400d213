"""
Transport data classes.

Defines the result type every transport returns. The LogTransport protocol
itself lives in logship.core.protocols next to the other collaborators.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any


class TransportType(str, Enum):
    """Transport types."""

    HTTP = "http"
    CONSOLE = "console"  # For development/dry runs


@dataclass
class DeliveryResult:
    """Result of one delivery attempt."""

    transport_name: str
    success: bool
    lines: int = 0
    message: str | None = None
    response: dict[str, Any] | None = None
    error: Exception | None = None
    delivered_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def ok(cls, transport_name: str, lines: int = 0, message: str | None = None, **kwargs: Any) -> DeliveryResult:
        return cls(transport_name=transport_name, success=True, lines=lines, message=message, **kwargs)

    @classmethod
    def fail(cls, transport_name: str, error: Exception, lines: int = 0) -> DeliveryResult:
        return cls(
            transport_name=transport_name,
            success=False,
            lines=lines,
            error=error,
            message=str(error),
        )
