"""
Logging configuration.

Single entry point for configuring structured logging. Configuration is read
from arguments or environment variables:

- LOGSHIP_LOG_LEVEL: DEBUG | INFO | WARNING | ERROR (default: INFO)
- LOGSHIP_LOG_FORMAT: json | console (default: console)
- LOGSHIP_LOG_JOB_DEBUG: comma-separated job names that always log at DEBUG

Usage:
    from logship.framework.logging import configure_logging
    configure_logging()

    # Or with explicit settings
    configure_logging(level="DEBUG", format="json")
"""

import logging
import os
import sys
from typing import Any, Literal

import structlog
from structlog.types import Processor

from logship.framework.logging.context import add_context_processor, get_context

_configured = False


def configure_logging(
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] | None = None,
    format: Literal["json", "console"] | None = None,
    job_debug: list[str] | None = None,
    force: bool = False,
) -> None:
    """
    Configure structured logging for the process.

    Called once at startup (CLI entry, plugin load). Subsequent calls are
    no-ops unless force=True.

    Args:
        level: Log level (overrides LOGSHIP_LOG_LEVEL)
        format: Output format (overrides LOGSHIP_LOG_FORMAT)
        job_debug: Job names for verbose debug logging
        force: Reconfigure even if already configured
    """
    global _configured

    if _configured and not force:
        return

    log_level = (level or os.environ.get("LOGSHIP_LOG_LEVEL", "INFO")).upper()
    log_format = (format or os.environ.get("LOGSHIP_LOG_FORMAT", "console")).lower()

    debug_jobs = job_debug
    if debug_jobs is None:
        env_jobs = os.environ.get("LOGSHIP_LOG_JOB_DEBUG", "")
        debug_jobs = [j.strip() for j in env_jobs.split(",") if j.strip()]

    processors: list[Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        add_context_processor,
        structlog.processors.format_exc_info,
        structlog.processors.StackInfoRenderer(),
    ]

    if debug_jobs:
        processors.insert(0, _make_job_filter(debug_jobs, log_level))
    else:
        processors.insert(0, structlog.stdlib.filter_by_level)

    if log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=True,
                exception_formatter=structlog.dev.plain_traceback,
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # With a job filter the processor decides, so stdlib must let DEBUG through.
    stdlib_level = logging.DEBUG if debug_jobs else getattr(logging, log_level)
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=stdlib_level,
        force=True,
    )
    logging.getLogger("logship").setLevel(stdlib_level)

    _configured = True


def _make_job_filter(debug_jobs: list[str], default_level: str):
    """
    Create a processor that enables DEBUG for specific jobs.

    Listed jobs always pass; others are filtered at the default level.
    """
    default_level_num = getattr(logging, default_level)

    def job_debug_filter(
        logger: Any,
        method_name: str,
        event_dict: dict,
    ) -> dict:
        job = event_dict.get("job") or get_context().job
        level = event_dict.get("level", method_name)
        level_num = getattr(logging, level.upper(), logging.DEBUG)

        if job and any(j in job for j in debug_jobs):
            return event_dict

        if level_num < default_level_num:
            raise structlog.DropEvent

        return event_dict

    return job_debug_filter


def is_debug_enabled() -> bool:
    """Check if DEBUG level logging is enabled."""
    return logging.getLogger().isEnabledFor(logging.DEBUG)


def is_configured() -> bool:
    """Check if logging has been configured."""
    return _configured
