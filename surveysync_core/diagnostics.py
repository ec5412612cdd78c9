"""Logging setup shared by the CLI and the HTTP server."""

import logging
import os

PACKAGE_LOGGER = "surveysync_core"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def _default_level() -> int:
    return logging.DEBUG if os.getenv("SURVEYSYNC_DEBUG", "false").lower() == "true" else logging.INFO


def get_logger(name: str) -> logging.Logger:
    """Logger for an entry point.

    The package logger gets a single stream handler on first use; every
    module logger below it (``logging.getLogger(__name__)``) shares it.
    SURVEYSYNC_DEBUG=true selects DEBUG, otherwise INFO.
    """
    package = logging.getLogger(PACKAGE_LOGGER)
    if not package.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package.addHandler(handler)
        package.setLevel(_default_level())
        package.propagate = False
    return logging.getLogger(name)


def set_level(level: str) -> None:
    """Apply a level name (DEBUG/INFO/ERROR) to every package logger."""
    logging.getLogger(PACKAGE_LOGGER).setLevel(getattr(logging, level.upper(), logging.INFO))
