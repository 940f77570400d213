"""Line sequences handed to a transport, tagged with where they came from."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum


class PayloadOrigin(str, Enum):
    """Where a payload's lines came from."""

    BUILD_LOG = "build_log"
    DIAGNOSTIC = "diagnostic"


@dataclass(frozen=True)
class LogPayload:
    """
    Ordered lines to deliver.

    Real log content and the diagnostic substitute sent when the log could
    not be read share this type, so both go through the same delivery call.
    """

    lines: tuple[str, ...]
    origin: PayloadOrigin = PayloadOrigin.BUILD_LOG

    @classmethod
    def from_log(cls, lines: Iterable[str]) -> LogPayload:
        return cls(tuple(lines), PayloadOrigin.BUILD_LOG)

    @classmethod
    def diagnostic(cls, message: str) -> LogPayload:
        """Split a diagnostic message on newlines into a payload."""
        return cls(tuple(message.split("\n")), PayloadOrigin.DIAGNOSTIC)

    @property
    def is_diagnostic(self) -> bool:
        return self.origin is PayloadOrigin.DIAGNOSTIC

    def __len__(self) -> int:
        return len(self.lines)
