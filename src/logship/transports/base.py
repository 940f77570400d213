"""
Transport base class.

Provides common functionality for transport implementations:
- Naming and type classification
- Enable/disable
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from logship.metadata.bundle import BuildMetadata
from logship.transports.protocol import DeliveryResult, TransportType


class BaseTransport(ABC):
    """
    Base class for log transports.

    Subclasses implement ``_send``; ``deliver`` handles the disabled case
    and empty batches so no transport ever sends an empty payload.
    """

    def __init__(self, name: str, transport_type: TransportType, *, enabled: bool = True):
        self._name = name
        self._transport_type = transport_type
        self._enabled = enabled

    @property
    def name(self) -> str:
        return self._name

    @property
    def transport_type(self) -> TransportType:
        return self._transport_type

    @property
    def enabled(self) -> bool:
        return self._enabled

    def enable(self) -> None:
        """Enable the transport."""
        self._enabled = True

    def disable(self) -> None:
        """Disable the transport."""
        self._enabled = False

    def deliver(self, lines: Sequence[str], metadata: BuildMetadata) -> DeliveryResult:
        """Deliver lines with their metadata."""
        if not self._enabled:
            return DeliveryResult(
                transport_name=self._name,
                success=False,
                message="Transport disabled",
            )
        if not lines:
            return DeliveryResult.ok(self._name, lines=0, message="Nothing to deliver")
        return self._send(list(lines), metadata)

    @abstractmethod
    def _send(self, lines: list[str], metadata: BuildMetadata) -> DeliveryResult:
        ...
