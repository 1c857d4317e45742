"""Process-wide logging setup."""

from __future__ import annotations

import contextlib
import logging

from ..config.logging import APP_LOG_LEVEL, APP_LOG_FORMAT
from .context import install_log_context


def configure_logging() -> None:
    """Initialize root logging configuration once per process."""
    install_log_context()
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(level=APP_LOG_LEVEL, format=APP_LOG_FORMAT)
    else:
        root_logger.setLevel(APP_LOG_LEVEL)
        for handler in root_logger.handlers:
            with contextlib.suppress(Exception):
                handler.setLevel(APP_LOG_LEVEL)
                handler.setFormatter(logging.Formatter(APP_LOG_FORMAT))

    logging.getLogger("gateway").setLevel(APP_LOG_LEVEL)


__all__ = ["configure_logging"]
