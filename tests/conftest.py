"""
Shared pytest fixtures and configuration for logship tests.

This module provides:
- Settings cache and logging-context cleanup for test isolation
- A recording transport, a byte error sink and sample metadata
- A LogsWriter factory wired to the fakes in tests._support
"""

import io
import sys
from pathlib import Path
from typing import Any, Generator

import pytest

# Ensure logship package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from logship.core.settings import clear_settings_cache
from logship.delivery import LogsWriter
from logship.framework.logging import clear_context
from logship.metadata import BuildMetadata
from tests._support import FakeBuild, RecordingTransport, StaticProvider


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Mark every test without an explicit marker as a unit test."""
    for item in items:
        markers = {mark.name for mark in item.iter_markers()}
        if "unit" not in markers:
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def _isolate_state(monkeypatch) -> Generator[None, None, None]:
    """Reset cached settings and log context; keep LOGSHIP_* env out of tests."""
    import os

    for key in list(os.environ):
        if key.startswith("LOGSHIP_"):
            monkeypatch.delenv(key, raising=False)
    clear_settings_cache()
    clear_context()
    yield
    clear_settings_cache()
    clear_context()


# =============================================================================
# Delivery Fixtures
# =============================================================================


@pytest.fixture
def metadata() -> BuildMetadata:
    return BuildMetadata(
        job_name="etl.nightly",
        build_number="42",
        hostname="agent-1",
        tags={"job": "etl.nightly", "env": "test"},
    )


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def error_sink() -> io.BytesIO:
    return io.BytesIO()


@pytest.fixture
def make_writer(transport, error_sink, metadata):
    """Factory building a LogsWriter around a FakeBuild.

    Usage:
        writer = make_writer(FakeBuild(error=OSError("gone")))
    """

    def _make(build: Any = None, *, provider: Any = None, **kwargs: Any) -> LogsWriter:
        if build is None:
            build = FakeBuild(["build started", "step 1 ok"])
        kwargs.setdefault("transport", transport)
        return LogsWriter(
            build,
            kwargs.pop("error_sink", error_sink),
            kwargs.pop("listener", None),
            kwargs.pop("encoding", "utf-8"),
            metadata_provider=provider or StaticProvider(metadata),
            **kwargs,
        )

    return _make
