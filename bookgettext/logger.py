"""Logging setup. Diagnostics go to stderr; stdout carries the book."""

import logging
import os
import sys

LOG_ENV_VAR = "BOOKGETTEXT_LOG"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "off": logging.CRITICAL + 1,
}


def _get_log_level() -> int:
    mode = os.environ.get(LOG_ENV_VAR, "warning").strip().lower()
    return _LEVELS.get(mode, logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    logger.setLevel(_get_log_level())

    # Prevent duplicate handlers if logger already configured
    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
