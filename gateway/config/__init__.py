"""Aggregator of configuration modules.

Values are read once from the environment at import time. A ``.env`` file in
the working directory is loaded first so local deployments can keep the
backend credential out of the shell.

This module re-exports the config API from smaller modules:
- server: listen address and WebSocket route
- model: backend model, system prompt and credential
- timeouts: generation timeout
- websocket: idle watchdog and close codes
- logging: log level and format
"""

from dotenv import load_dotenv

load_dotenv()

from .server import HOST, PORT, WS_PATH  # noqa: E402
from .model import MODEL, SYSTEM_PROMPT, GEMINI_API_KEY  # noqa: E402
from .timeouts import GEN_TIMEOUT_S  # noqa: E402
from .websocket import (  # noqa: E402
    WS_IDLE_TIMEOUT_S,
    WS_WATCHDOG_TICK_S,
    WS_CLOSE_IDLE_CODE,
    WS_CLOSE_IDLE_REASON,
)
from .logging import APP_LOG_LEVEL, APP_LOG_FORMAT  # noqa: E402


__all__ = [
    "HOST",
    "PORT",
    "WS_PATH",
    "MODEL",
    "SYSTEM_PROMPT",
    "GEMINI_API_KEY",
    "GEN_TIMEOUT_S",
    "WS_IDLE_TIMEOUT_S",
    "WS_WATCHDOG_TICK_S",
    "WS_CLOSE_IDLE_CODE",
    "WS_CLOSE_IDLE_REASON",
    "APP_LOG_LEVEL",
    "APP_LOG_FORMAT",
]
