"""Shared logger for the solver packages."""

from __future__ import annotations

import logging
import os
from typing import Optional, Union

LOGGER_NAME = "csp"
LOG_LEVEL_ENV = "CSP_LOG_LEVEL"


def get_logger() -> logging.Logger:
    """
    Return the logger used across `src.csp` and `src.utils`.

    A stream handler is attached on first use; the level comes from the
    CSP_LOG_LEVEL environment variable and defaults to WARNING.
    """
    logger = logging.getLogger(LOGGER_NAME)

    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] [%(name)s] %(message)s"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(os.environ.get(LOG_LEVEL_ENV, "WARNING").upper())

    return logger


def set_log_level(level: Optional[Union[str, int]]) -> None:
    """Override the shared logger's level, e.g. from a CLI flag."""
    if level is None:
        return
    if isinstance(level, str):
        level = level.upper()
    get_logger().setLevel(level)
