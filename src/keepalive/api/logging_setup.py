"""Logging configuration shared by the API server and the CLI."""

from __future__ import annotations

import logging
from typing import TextIO

import structlog

_LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def resolve_level(name: str | None, default: int = logging.INFO) -> int:
    """Translate a level name such as ``"debug"`` into a logging level."""
    if not name:
        return default
    return _LOG_LEVELS.get(name.strip().upper(), default)


def configure_logging(level: int | str = logging.INFO, stream: TextIO | None = None) -> None:
    """Configure stdlib logging and structlog with the same level.

    Args:
        level: Level number or name (e.g. ``"WARNING"``).
        stream: Where log lines go; structlog writes to stdout when
            omitted. The CLI passes stderr so relay lines on stdout stay
            machine-readable.
    """
    log_level = resolve_level(level) if isinstance(level, str) else level
    logging.basicConfig(level=log_level, format="%(message)s", stream=stream)
    logging.getLogger().setLevel(log_level)
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.PrintLoggerFactory(file=stream),
    )
