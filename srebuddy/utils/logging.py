"""Structured logging configuration for SreBuddy."""

from __future__ import annotations

import logging
import sys

import structlog


def configure_logging(level: int = logging.WARNING) -> None:
    """Configure structlog for SreBuddy.

    At DEBUG level every classification, parse and match decision is logged
    with its context. At WARNING level and above only degraded paths
    (missing corpus, composition faults) are reported.

    Log lines go to stderr so that prompts and documents written to stdout
    stay clean.

    Args:
        level: Standard logging level (e.g., logging.DEBUG, logging.INFO).
    """
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def level_from_name(name: str) -> int:
    """Translate a level name such as ``"debug"`` into a logging level."""
    level = logging.getLevelName(name.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {name}")
    return level


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a named structlog logger."""
    return structlog.get_logger(name)  # type: ignore[no-any-return]
