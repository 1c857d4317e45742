"""Frame codec for the gateway wire protocol.

Each frame is one JSON object with a ``type`` discriminant. Decoding is a
strict tagged parse that fails closed: anything that does not match a known
event shape decodes to ``None`` and the caller drops it. No error is sent back
for garbage and the connection stays open; this mirrors the lenient contract
clients were built against.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from .inbound import Hello, InboundEvent, ToolInvoke, UserMessage
from .outbound import AssistantDelta, AssistantDone, ErrorEvent, OutboundEvent, ToolMessage

logger = logging.getLogger(__name__)


def decode_frame(raw: str | bytes) -> InboundEvent | None:
    """Parse one inbound frame, returning None for anything unusable."""

    data = _load_object(raw)
    if data is None:
        return None

    msg_type = data.get("type")
    if not isinstance(msg_type, str):
        logger.debug("codec: dropping frame without string 'type'")
        return None

    if msg_type == "hello":
        return Hello()
    if msg_type == "user_message":
        return _decode_user_message(data)
    if msg_type == "tool_invoke":
        payload = {key: value for key, value in data.items() if key != "type"}
        return ToolInvoke(payload=payload)

    logger.debug("codec: ignoring unknown message type %r", msg_type)
    return None


def encode_event(event: OutboundEvent) -> str:
    """Serialize an outbound event to a text frame."""

    return json.dumps(_event_payload(event), ensure_ascii=False)


def _load_object(raw: str | bytes) -> dict[str, Any] | None:
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = bytes(raw).decode("utf-8")
        except UnicodeDecodeError:
            logger.debug("codec: dropping non-UTF-8 frame")
            return None
    try:
        data = json.loads(raw)
    except (TypeError, ValueError):
        logger.debug("codec: dropping non-JSON frame len=%s", len(raw or ""))
        return None
    if not isinstance(data, dict):
        logger.debug("codec: dropping non-object frame")
        return None
    return data


def _decode_user_message(data: dict[str, Any]) -> UserMessage | None:
    text = data.get("text")
    if not isinstance(text, str):
        logger.debug("codec: dropping user_message without string 'text'")
        return None
    conversation_id = data.get("conversationId")
    if conversation_id is not None and not isinstance(conversation_id, str):
        logger.debug("codec: dropping user_message with non-string 'conversationId'")
        return None
    return UserMessage(text=text, conversation_id=conversation_id)


def _event_payload(event: OutboundEvent) -> dict[str, Any]:
    if isinstance(event, AssistantDelta):
        return {"type": "assistant_delta", "delta": event.delta}
    if isinstance(event, AssistantDone):
        payload: dict[str, Any] = {"type": "assistant_done", "messageId": event.message_id}
        if event.conversation_id is not None:
            payload["conversationId"] = event.conversation_id
        return payload
    if isinstance(event, ToolMessage):
        return {"type": "tool_message", "name": event.name, "content": event.content}
    if isinstance(event, ErrorEvent):
        return {"type": "error", "message": event.message}
    raise TypeError(f"Unsupported outbound event: {type(event).__name__}")


__all__ = ["decode_frame", "encode_event"]
