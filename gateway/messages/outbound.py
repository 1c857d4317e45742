"""Typed server-to-client events."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AssistantDelta:
    """One streamed fragment of the assistant reply."""

    delta: str


@dataclass(frozen=True, slots=True)
class AssistantDone:
    """Terminal event of a successful generation."""

    message_id: str
    conversation_id: str | None = None


@dataclass(frozen=True, slots=True)
class ToolMessage:
    """Rule-based tool output emitted after a reply completes."""

    name: str
    content: str


@dataclass(frozen=True, slots=True)
class ErrorEvent:
    """Terminal event of a failed or rejected request."""

    message: str


OutboundEvent = AssistantDelta | AssistantDone | ToolMessage | ErrorEvent


__all__ = [
    "AssistantDelta",
    "AssistantDone",
    "ToolMessage",
    "ErrorEvent",
    "OutboundEvent",
]
