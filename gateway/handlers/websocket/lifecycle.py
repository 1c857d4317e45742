"""Idle watchdog for one client connection.

A connection is idle when no inbound frame has arrived for
``WS_IDLE_TIMEOUT_S`` seconds and its session is not streaming a reply. The
watchdog then closes the socket with ``WS_CLOSE_IDLE_CODE``. That ends the
receive loop in the manager, which tears the session down and drops its
history.

Usage:
    lifecycle = WebSocketLifecycle(websocket, is_busy=lambda: session.is_generating)
    lifecycle.start()
    # for every inbound frame:
    lifecycle.touch()
    # on teardown:
    await lifecycle.stop()
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable

from fastapi import WebSocket

from ...config.websocket import (
    WS_CLOSE_IDLE_CODE,
    WS_CLOSE_IDLE_REASON,
    WS_IDLE_TIMEOUT_S,
    WS_WATCHDOG_TICK_S,
)
from .disconnects import is_expected_disconnect

logger = logging.getLogger(__name__)


def _never_busy() -> bool:
    return False


class WebSocketLifecycle:
    """Closes a connection that has gone quiet.

    Args:
        websocket: Connection to close on idle timeout.
        is_busy: Returns True while a reply is streaming; the idle clock
            restarts from the moment it turns False.
        idle_timeout_s: Quiet seconds before the connection is closed.
        tick_s: How often the watchdog checks.
        close_code: Close code sent on idle timeout.
    """

    def __init__(
        self,
        websocket: WebSocket,
        *,
        is_busy: Callable[[], bool] = _never_busy,
        idle_timeout_s: float = WS_IDLE_TIMEOUT_S,
        tick_s: float = WS_WATCHDOG_TICK_S,
        close_code: int = WS_CLOSE_IDLE_CODE,
    ) -> None:
        self._ws = websocket
        self._is_busy = is_busy
        self._idle_timeout_s = idle_timeout_s
        self._tick_s = tick_s
        self._close_code = close_code
        self._last_activity = time.monotonic()
        self._task: asyncio.Task | None = None
        self.timed_out = False

    def touch(self) -> None:
        """Record an inbound frame."""
        self._last_activity = time.monotonic()

    def idle_seconds(self) -> float:
        return time.monotonic() - self._last_activity

    def start(self) -> None:
        if self._task is None:
            self._task = asyncio.create_task(self._watch(), name="ws-idle-watchdog")

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        await asyncio.wait({task})

    async def _watch(self) -> None:
        while True:
            await asyncio.sleep(self._tick_s)
            if self._is_busy():
                # A streaming reply counts as activity
                self.touch()
                continue
            if self.idle_seconds() < self._idle_timeout_s:
                continue
            self.timed_out = True
            logger.info("WebSocket idle for %.1fs; closing connection", self.idle_seconds())
            await self._close()
            return

    async def _close(self) -> None:
        try:
            await self._ws.close(code=self._close_code, reason=WS_CLOSE_IDLE_REASON)
        except Exception as exc:  # noqa: BLE001
            if not is_expected_disconnect(exc):
                logger.warning("Idle close failed", exc_info=exc)


__all__ = ["WebSocketLifecycle"]
