"""Primary WebSocket connection handler orchestration.

This module is the entry point for every client connection:

1. Connection Setup:
   - Accept the handshake
   - A fresh Session with empty history
   - Idle watchdog

2. Message Routing:
   - Every inbound frame goes through the codec; frames that do not decode
     are dropped silently and the connection stays open
   - Decoded events go to the session, whose outbound events are encoded and
     written back to the socket

3. Cleanup:
   - Any in-flight generation is cancelled (first, so a cancelled handler
     still stops the backend stream)
   - The watchdog is stopped and the session with its history discarded

Inbound types:
    hello        - no-op (auth hook)
    user_message - start a generation
    tool_invoke  - reserved, ignored
"""

from __future__ import annotations

import functools
import logging
import uuid
from collections.abc import Awaitable, Callable

from fastapi import WebSocket

from ...generation import GenerationClient, get_generation_client
from ...logging import reset_log_context, set_log_context
from ...messages import decode_frame
from ..session import Session
from .disconnects import is_expected_disconnect
from .helpers import receive_frame, send_event
from .lifecycle import WebSocketLifecycle

logger = logging.getLogger(__name__)

ClientGetter = Callable[[], Awaitable[GenerationClient]]


async def _message_loop(
    ws: WebSocket,
    session: Session,
    lifecycle: WebSocketLifecycle,
) -> None:
    while True:
        raw = await receive_frame(ws)
        if raw is None:
            return
        lifecycle.touch()
        event = decode_frame(raw)
        if event is None:
            continue
        logger.debug("WS recv: %s", type(event).__name__)
        await session.handle(event)


async def _teardown(session: Session | None, lifecycle: WebSocketLifecycle | None) -> None:
    # Both close() and stop() cancel their task before their first await
    try:
        if session is not None:
            await session.close()
    finally:
        if lifecycle is not None:
            await lifecycle.stop()


async def handle_websocket_connection(
    ws: WebSocket,
    *,
    client_getter: ClientGetter | None = None,
) -> None:
    """Serve one client connection until it closes.

    Args:
        ws: The incoming WebSocket connection from FastAPI.
        client_getter: Returns the generation client to use; defaults to the
            process-wide client.
    """
    await ws.accept()

    connection_id = uuid.uuid4().hex[:12]
    tokens = set_log_context(connection_id=connection_id)
    session: Session | None = None
    lifecycle: WebSocketLifecycle | None = None
    logger.info("WebSocket connection accepted")

    try:
        client = await (client_getter or get_generation_client)()
        session = Session(
            client,
            functools.partial(send_event, ws),
            session_id=connection_id,
        )
        lifecycle = WebSocketLifecycle(ws, is_busy=lambda: session.is_generating)
        lifecycle.start()
        await _message_loop(ws, session, lifecycle)
    except Exception as exc:  # noqa: BLE001
        if not is_expected_disconnect(exc):
            logger.exception("WebSocket error")
    finally:
        try:
            await _teardown(session, lifecycle)
        finally:
            logger.info(
                "WebSocket connection closed idle_timeout=%s",
                bool(lifecycle and lifecycle.timed_out),
            )
            reset_log_context(tokens)


__all__ = ["handle_websocket_connection"]
