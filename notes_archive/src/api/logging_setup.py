"""Logging configuration for the note archive."""

from __future__ import annotations

import logging
import sys

LOGGER_NAME = "src.api"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


# PUBLIC_INTERFACE
def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Attach a stream handler to the application logger (once)."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)

    logger.debug("Logging initialized. level=%s", logging.getLevelName(level))
    return logger
