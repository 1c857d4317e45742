"""Unit tests for the idle watchdog."""

from __future__ import annotations

import asyncio

from gateway.config.websocket import WS_CLOSE_IDLE_CODE, WS_CLOSE_IDLE_REASON
from gateway.handlers.websocket.lifecycle import WebSocketLifecycle


class _Socket:
    def __init__(self, close_error: Exception | None = None) -> None:
        self.closes: list[tuple[int, str]] = []
        self._close_error = close_error

    async def close(self, *, code: int, reason: str) -> None:
        if self._close_error is not None:
            raise self._close_error
        self.closes.append((code, reason))


def _watchdog(ws: _Socket, **kwargs) -> WebSocketLifecycle:
    return WebSocketLifecycle(ws, idle_timeout_s=0.03, tick_s=0.005, **kwargs)


def test_quiet_connection_is_closed_with_idle_code() -> None:
    async def _run() -> None:
        ws = _Socket()
        lifecycle = _watchdog(ws)
        lifecycle.start()
        await asyncio.sleep(0.08)
        await lifecycle.stop()

        assert lifecycle.timed_out
        assert ws.closes == [(WS_CLOSE_IDLE_CODE, WS_CLOSE_IDLE_REASON)]

    asyncio.run(_run())


def test_inbound_frames_keep_connection_open() -> None:
    async def _run() -> None:
        ws = _Socket()
        lifecycle = _watchdog(ws)
        lifecycle.start()
        for _ in range(10):
            await asyncio.sleep(0.01)
            lifecycle.touch()
        await lifecycle.stop()

        assert not lifecycle.timed_out
        assert ws.closes == []

    asyncio.run(_run())


def test_streaming_reply_counts_as_activity_then_idle_clock_restarts() -> None:
    async def _run() -> None:
        ws = _Socket()
        generating = True
        lifecycle = _watchdog(ws, is_busy=lambda: generating)
        lifecycle.start()

        # Reply outlasts the idle timeout several times over
        await asyncio.sleep(0.1)
        assert ws.closes == []

        generating = False
        await asyncio.sleep(0.01)
        assert ws.closes == []

        await asyncio.sleep(0.08)
        await lifecycle.stop()
        assert lifecycle.timed_out
        assert ws.closes == [(WS_CLOSE_IDLE_CODE, WS_CLOSE_IDLE_REASON)]

    asyncio.run(_run())


def test_idle_close_on_vanished_socket_is_quiet() -> None:
    async def _run() -> None:
        ws = _Socket(close_error=RuntimeError("WebSocket is not connected."))
        lifecycle = _watchdog(ws)
        lifecycle.start()
        await asyncio.sleep(0.08)
        await lifecycle.stop()

        assert lifecycle.timed_out

    asyncio.run(_run())


def test_stop_is_safe_before_start_and_twice() -> None:
    async def _run() -> None:
        lifecycle = _watchdog(_Socket())
        await lifecycle.stop()
        lifecycle.start()
        await lifecycle.stop()
        await lifecycle.stop()
        assert not lifecycle.timed_out

    asyncio.run(_run())
