"""Typed client-to-server events.

Wire mapping:
    {"type": "hello"}                                       -> Hello
    {"type": "user_message", "text": ..., "conversationId": ...} -> UserMessage
    {"type": "tool_invoke", ...}                            -> ToolInvoke
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class Hello:
    """Connection greeting; reserved for a future auth check."""


@dataclass(frozen=True, slots=True)
class UserMessage:
    """A user utterance that triggers one generation."""

    text: str
    conversation_id: str | None = None


@dataclass(frozen=True, slots=True)
class ToolInvoke:
    """Direct tool invocation; reserved and not acted upon."""

    payload: dict[str, Any] = field(default_factory=dict)


InboundEvent = Hello | UserMessage | ToolInvoke


__all__ = ["Hello", "UserMessage", "ToolInvoke", "InboundEvent"]
