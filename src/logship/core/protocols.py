"""
Canonical protocol definitions for logship.

Every collaborator of the delivery pipeline is described here as a
structural protocol, so the pipeline depends on shape rather than on a
particular build system, metadata source or log backend.

Architecture:
    ::

        protocols.py
        ├── ExecutionUnit      — a build whose log can be fetched
        ├── EnvironmentSource  — a build that can report its environment
        ├── MetadataProvider   — resolves a BuildMetadata bundle for a build
        ├── HostLocator        — resolves the hosting service's root URL
        ├── LogTransport       — delivers line sequences to a backend
        └── ErrorSink          — byte-oriented diagnostic output

    Consumers:
        delivery/writer.py, metadata/provider.py, metadata/host.py,
        transports/*, execution/local.py

Guardrails:
    ❌ DON'T: Add implementation logic to protocol classes
    ✅ DO: Keep protocols pure contracts; implementations live in their packages
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from logship.metadata.bundle import BuildMetadata
    from logship.transports.protocol import DeliveryResult


@runtime_checkable
class ExecutionUnit(Protocol):
    """A running or completed build that owns accumulated log output."""

    def fetch_log(self, max_lines: int) -> list[str]:
        """
        Return up to ``max_lines`` of the most recent log lines, oldest first.

        Raises:
            OSError: The log store could not be read.
        """
        ...


@runtime_checkable
class EnvironmentSource(Protocol):
    """A build that can describe the environment it runs in."""

    def environment(self, listener: Any) -> Mapping[str, str]:
        """
        Return the build's environment variables.

        Raises:
            OSError: The environment could not be read.
            InterruptedError: Resolution was interrupted.
        """
        ...


@runtime_checkable
class MetadataProvider(Protocol):
    """Resolves the metadata bundle attached to every delivered line."""

    def resolve(self, build: Any, listener: Any) -> BuildMetadata | None:
        ...


@runtime_checkable
class HostLocator(Protocol):
    """Resolves the root URL of the service hosting the builds."""

    def root_url(self) -> str:
        """Return the root URL, or an empty string when it is unknown."""
        ...


@runtime_checkable
class LogTransport(Protocol):
    """
    Delivers ordered log lines plus metadata to a logging backend.

    Delivery failures are reported through the returned DeliveryResult,
    never raised.
    """

    @property
    def name(self) -> str:
        ...

    def deliver(self, lines: Sequence[str], metadata: BuildMetadata) -> DeliveryResult:
        ...


@runtime_checkable
class ErrorSink(Protocol):
    """Byte-oriented output used for diagnostics (stderr by default)."""

    def write(self, data: bytes, /) -> Any:
        ...

    def flush(self) -> Any:
        ...


__all__ = [
    "ExecutionUnit",
    "EnvironmentSource",
    "MetadataProvider",
    "HostLocator",
    "LogTransport",
    "ErrorSink",
]
