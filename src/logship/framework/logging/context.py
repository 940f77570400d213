"""
Logging context management using contextvars.

Build-aware context that automatically attaches to every log entry, so a
delivery failure logged deep inside a transport still carries the job and
build number it belongs to.

Design choice: contextvars
- Thread-safe and asyncio-compatible
- No need to pass context through every function
- Clean integration with structlog processors
"""

from contextvars import ContextVar
from dataclasses import asdict, dataclass
from typing import Any

import structlog


@dataclass
class LogContext:
    """
    Build context attached to all log entries.

    Build identifiers:
        job: Job name (e.g., "etl.nightly")
        build_number: Build number within the job
        build_id: Build identifier reported by the build system

    Execution metadata:
        node: Node or agent the build runs on
    """

    job: str | None = None
    build_number: str | None = None
    build_id: str | None = None

    node: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict."""
        return {k: v for k, v in asdict(self).items() if v is not None}

    def merge(self, **kwargs) -> "LogContext":
        """Create new context with merged values."""
        current = asdict(self)
        current.update({k: v for k, v in kwargs.items() if v is not None and k in current})
        return LogContext(**current)


_log_context: ContextVar[LogContext] = ContextVar("log_context")  # noqa: B039


def get_context() -> LogContext:
    """Get the current log context."""
    return _log_context.get(LogContext())


def set_context(
    job: str | None = None,
    build_number: str | None = None,
    build_id: str | None = None,
    node: str | None = None,
) -> LogContext:
    """
    Set the current log context.

    This replaces the current context. Use bind_context() to add to existing.
    """
    ctx = LogContext(job=job, build_number=build_number, build_id=build_id, node=node)
    _log_context.set(ctx)
    return ctx


def bind_context(**kwargs) -> LogContext:
    """Merge values into the current context."""
    updated = get_context().merge(**kwargs)
    _log_context.set(updated)
    return updated


def clear_context() -> None:
    """Clear the current context (reset to empty)."""
    _log_context.set(LogContext())


def add_context_processor(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """
    Structlog processor that adds build context to every log entry.

    Registered in configure_logging(); explicit keys on the event win.
    """
    for key, value in get_context().to_dict().items():
        if key not in event_dict:
            event_dict[key] = value
    return event_dict


def get_logger(name: str | None = None) -> Any:
    """Get a structured logger (typically ``get_logger(__name__)``)."""
    return structlog.get_logger(name)
