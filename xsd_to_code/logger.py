"""
Status stream for the generator.

All modules log through the package logger; the CLI decides where the
records go and at which level.
"""

from __future__ import annotations

import logging

logger = logging.getLogger("xsd_to_code")

LOG_LEVELS = {"DEBUG", "INFO", "WARN", "WARNING", "ERROR", "CRITICAL"}


def set_logging_level(level: str | int) -> None:
    """Set the logging level of the package logger."""
    if isinstance(level, str):
        _level = level.strip().upper()
        if _level not in LOG_LEVELS:
            raise ValueError(f"{level!r} is not a valid loglevel")
        logger.setLevel(getattr(logging, _level))
    else:
        logger.setLevel(level)


def get_loglevel(verbosity: int) -> int:
    """Map a -v count to a logging level."""
    if verbosity <= 0:
        return logging.WARNING
    elif verbosity == 1:
        return logging.INFO
    return logging.DEBUG
