"""Logging setup. Everything goes to stderr so stdout stays protocol-clean."""

from __future__ import annotations

import logging
import sys


def configure_logging(level: int | str = "INFO") -> logging.Logger:
    """Configure root logging to stderr.

    Returns the ``quizgrader`` package logger.
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(
        "%(asctime)s %(levelname)s %(name)s: %(message)s",
    ))
    if isinstance(level, str):
        level = level.upper()
    logging.basicConfig(level=level, handlers=[handler], force=True)
    return logging.getLogger("quizgrader")
