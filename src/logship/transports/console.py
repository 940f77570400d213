"""Console transport for development and dry runs."""

from __future__ import annotations

import sys
from typing import TextIO

from logship.metadata.bundle import BuildMetadata
from logship.transports.base import BaseTransport
from logship.transports.protocol import DeliveryResult, TransportType


class ConsoleTransport(BaseTransport):
    """
    Prints each line to a text stream, prefixed with the build it belongs to.

    ``stream`` defaults to stdout at construction time.
    """

    def __init__(self, name: str = "console", *, stream: TextIO | None = None, enabled: bool = True):
        super().__init__(name, TransportType.CONSOLE, enabled=enabled)
        self._stream = stream if stream is not None else sys.stdout

    @staticmethod
    def _prefix(metadata: BuildMetadata) -> str:
        job = metadata.job_name or "build"
        if metadata.build_number:
            return f"[{job}#{metadata.build_number}]"
        return f"[{job}]"

    def _send(self, lines: list[str], metadata: BuildMetadata) -> DeliveryResult:
        prefix = self._prefix(metadata)
        for line in lines:
            print(f"{prefix} {line}", file=self._stream)
        self._stream.flush()
        return DeliveryResult.ok(self._name, lines=len(lines))
