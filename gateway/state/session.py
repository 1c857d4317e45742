"""Session-scoped dataclasses for per-connection state.

Turn:
    One utterance in the conversation, either the user's message or the
    aggregated model reply. Frozen once appended.

RequestState:
    Lifecycle of the single generation a session may run at a time.

SessionState:
    Container for all per-connection mutable data: the ordered turn history
    and the in-flight request bookkeeping. Lives exactly as long as the
    connection and is never persisted.
"""

from __future__ import annotations

import asyncio
import enum
import time
from dataclasses import dataclass, field
from typing import Literal

Role = Literal["user", "model"]


@dataclass(frozen=True, slots=True)
class Turn:
    """One utterance in the running conversation.

    Attributes:
        role: ``"user"`` for client messages, ``"model"`` for backend replies.
        text: The full utterance text.
    """

    role: Role
    text: str


class RequestState(str, enum.Enum):
    """Generation lifecycle: idle -> generating -> idle.

    COMPLETED, FAILED and CANCELLED are outcomes; a finished request leaves
    one of them in ``SessionState.last_outcome``.
    """

    IDLE = "idle"
    GENERATING = "generating"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass
class SessionState:
    """Container for all mutable session-scoped data.

    Attributes:
        session_id: Identifier used for logging (the connection id).
        history: Chronologically ordered turns. The backend receives all of
            it on every request.
        request_state: Where the current request is in its lifecycle.
        task: The running generation task, used to cancel it on teardown.
            None when idle.
        active_request_id: Id of the in-flight generation, for log
            correlation. None when idle.
        last_outcome: How the most recent request ended. None before the
            first one finishes.
        completed_requests: Count of generations that reached assistant_done.
        created_at: Monotonic timestamp when the session was created.
    """

    session_id: str
    history: list[Turn] = field(default_factory=list)
    request_state: RequestState = RequestState.IDLE
    task: asyncio.Task | None = None
    active_request_id: str | None = None
    last_outcome: RequestState | None = None
    completed_requests: int = 0
    created_at: float = field(default_factory=time.monotonic)

    @property
    def is_generating(self) -> bool:
        return self.request_state is RequestState.GENERATING

    def duration_s(self) -> float:
        return time.monotonic() - self.created_at


__all__ = ["Role", "Turn", "RequestState", "SessionState"]
