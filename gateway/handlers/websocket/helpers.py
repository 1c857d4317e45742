"""WebSocket send/receive utilities.

Sends never raise on a vanished client: they return False so the session can
stop streaming instead of unwinding through an exception.
"""

from __future__ import annotations

import logging

from fastapi import WebSocket

from ...messages import OutboundEvent, encode_event
from .disconnects import is_expected_disconnect

logger = logging.getLogger(__name__)


async def safe_send_text(ws: WebSocket, text: str) -> bool:
    """Send text to the client, returning False if the socket is gone."""
    try:
        await ws.send_text(text)
    except Exception as exc:
        if not is_expected_disconnect(exc):
            raise
        logger.info("WebSocket disconnected while sending %s chars", len(text))
        return False
    return True


async def send_event(ws: WebSocket, event: OutboundEvent) -> bool:
    """Encode and send one outbound event."""
    return await safe_send_text(ws, encode_event(event))


async def receive_frame(ws: WebSocket) -> str | bytes | None:
    """Receive the next text or binary frame; None once the client is gone."""
    message = await ws.receive()
    if message.get("type") == "websocket.disconnect":
        return None
    text = message.get("text")
    if text is not None:
        return text
    return message.get("bytes")


__all__ = ["safe_send_text", "send_event", "receive_frame"]
