"""
Test support utilities for logship tests.

Fakes for the delivery pipeline's collaborators that are shared across
test modules and used by the fixtures in conftest.py.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from logship.metadata import BuildMetadata
from logship.transports import DeliveryResult


class FakeBuild:
    """In-memory build: returns a fixed log, or raises from fetch_log."""

    def __init__(
        self,
        lines: Sequence[str] = (),
        *,
        error: Exception | None = None,
        env: dict[str, str] | None = None,
    ):
        self.lines = list(lines)
        self.error = error
        self.env = env if env is not None else {"JOB_NAME": "etl.nightly", "BUILD_NUMBER": "42"}
        self.fetch_calls: list[int] = []

    def fetch_log(self, max_lines: int) -> list[str]:
        self.fetch_calls.append(max_lines)
        if self.error is not None:
            raise self.error
        return self.lines[-max_lines:] if max_lines else []

    def environment(self, listener: Any) -> dict[str, str]:
        return dict(self.env)


class RecordingTransport:
    """Transport that records every delivery."""

    name = "recording"

    def __init__(self, success: bool = True):
        self.success = success
        self.deliveries: list[tuple[list[str], BuildMetadata]] = []

    def deliver(self, lines: Sequence[str], metadata: BuildMetadata) -> DeliveryResult:
        self.deliveries.append((list(lines), metadata))
        if self.success:
            return DeliveryResult.ok(self.name, lines=len(lines))
        return DeliveryResult.fail(self.name, RuntimeError("backend down"))


class StaticProvider:
    """Metadata provider returning a fixed bundle (or None)."""

    def __init__(self, metadata: BuildMetadata | None):
        self.metadata = metadata
        self.calls: list[tuple[Any, Any]] = []

    def resolve(self, build: Any, listener: Any) -> BuildMetadata | None:
        self.calls.append((build, listener))
        return self.metadata


class FailingSink:
    """Error sink whose write raises."""

    def __init__(self, error: Exception | None = None):
        self.error = error or OSError("sink closed")
        self.flushed = False

    def write(self, data: bytes) -> int:
        raise self.error

    def flush(self) -> None:
        self.flushed = True
