"""Structured logging configuration.

This module initializes a structlog logger with a stable JSON format
so every pipeline event lands as one machine-readable log line.
"""

from __future__ import annotations

from typing import Any

import structlog

_CONFIGURED = False


def get_logger(name: str) -> Any:
    """Return a module logger instance.

    Args:
        name: Logger name, usually __name__.

    Returns:
        A structlog logger with structured output.
    """
    _configure_structlog()
    return structlog.get_logger(name)


def _configure_structlog() -> None:
    """Install shared structlog processors once per process."""
    global _CONFIGURED
    if _CONFIGURED:
        return
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(sort_keys=True),
        ],
        cache_logger_on_first_use=True,
    )
    _CONFIGURED = True
