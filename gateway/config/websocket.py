"""WebSocket-specific runtime configuration values.

WS_IDLE_TIMEOUT_S: Close a connection after this many seconds without an
    inbound frame while no reply is streaming. Bounds the lifetime of
    abandoned connections and with it the in-memory history they hold.

WS_WATCHDOG_TICK_S: How often the idle watchdog looks at the connection.

WS_CLOSE_IDLE_CODE / WS_CLOSE_IDLE_REASON: Close frame sent on idle timeout
    (4000+ is the application-defined range of RFC 6455).
"""

from __future__ import annotations

import os

WS_IDLE_TIMEOUT_S = float(os.getenv("WS_IDLE_TIMEOUT_S", "600"))  # 10 minutes
WS_WATCHDOG_TICK_S = float(os.getenv("WS_WATCHDOG_TICK_S", "5"))

WS_CLOSE_IDLE_CODE = int(os.getenv("WS_CLOSE_IDLE_CODE", "4000"))
WS_CLOSE_IDLE_REASON = os.getenv("WS_CLOSE_IDLE_REASON", "idle_timeout")

__all__ = [
    "WS_IDLE_TIMEOUT_S",
    "WS_WATCHDOG_TICK_S",
    "WS_CLOSE_IDLE_CODE",
    "WS_CLOSE_IDLE_REASON",
]
