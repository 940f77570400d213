"""Log transports: deliver line batches, with build metadata, to a backend."""

from logship.transports.base import BaseTransport
from logship.transports.console import ConsoleTransport
from logship.transports.http import HttpLogTransport
from logship.transports.protocol import DeliveryResult, TransportType

__all__ = [
    "BaseTransport",
    "ConsoleTransport",
    "DeliveryResult",
    "HttpLogTransport",
    "TransportType",
]
