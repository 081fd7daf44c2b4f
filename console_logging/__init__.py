"""Public API for the console's structured logging library."""

from __future__ import annotations

from .config import LoggingSettings, configure_settings, get_settings, load_settings
from .logger import (
    configure_manager,
    flush_loggers,
    get_context,
    get_logger,
    logger_context,
    pop_context,
    push_context,
    reset_loggers,
)
from .metrics import get_metrics

__all__ = [
    "configure",
    "get_logger",
    "logger_context",
    "flush_loggers",
    "LoggingSettings",
    "load_settings",
    "get_settings",
    "get_metrics",
    "push_context",
    "pop_context",
    "get_context",
]


def configure(settings: LoggingSettings | None = None, **overrides) -> LoggingSettings:
    """Configure the logging library and start background workers."""

    resolved = configure_settings(settings, **overrides)
    configure_manager(resolved)

    return resolved
