"""Logging helpers and context utilities."""

from .context import log_context, set_log_context, reset_log_context, install_log_context
from .setup import configure_logging

__all__ = [
    "configure_logging",
    "install_log_context",
    "log_context",
    "reset_log_context",
    "set_log_context",
]
