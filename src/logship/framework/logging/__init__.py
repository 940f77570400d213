"""
logship logging - structured, build-aware logging.

Usage:
    from logship.framework.logging import configure_logging, get_logger, set_context

    configure_logging()
    log = get_logger(__name__)

    set_context(job="etl.nightly", build_number="42")
    log.info("delivery.sent", lines=120)
"""

from logship.framework.logging.config import configure_logging, is_configured, is_debug_enabled
from logship.framework.logging.context import (
    LogContext,
    add_context_processor,
    bind_context,
    clear_context,
    get_context,
    get_logger,
    set_context,
)

__all__ = [
    # Configuration
    "configure_logging",
    "is_configured",
    "is_debug_enabled",
    # Context
    "get_logger",
    "set_context",
    "clear_context",
    "get_context",
    "bind_context",
    "LogContext",
    "add_context_processor",
]
