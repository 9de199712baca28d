"""Observability components: structured logging."""

from recyclehub.observability.logging import (
    bind_context,
    clear_context,
    get_logger,
    logger,
    setup_logging,
)


__all__ = [
    "bind_context",
    "clear_context",
    "get_logger",
    "logger",
    "setup_logging",
]
