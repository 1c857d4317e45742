"""Request and task tracking for a session.

A session runs its generation as an asyncio.Task so the connection keeps
reading frames (and notices a disconnect) while fragments stream. These
helpers register that task, report whether one is running and cancel it on
teardown.
"""

from __future__ import annotations

import asyncio
import logging

from ...state import RequestState, SessionState

logger = logging.getLogger(__name__)


def begin_request(state: SessionState, request_id: str) -> None:
    state.request_state = RequestState.GENERATING
    state.active_request_id = request_id


def finish_request(state: SessionState, outcome: RequestState) -> None:
    """Record how the request ended and return the session to idle."""
    state.last_outcome = outcome
    logger.debug("session: request %s %s", state.active_request_id, outcome.value)
    state.request_state = RequestState.IDLE
    state.active_request_id = None


def track_task(state: SessionState, task: asyncio.Task) -> None:
    """Register the generation task with auto-cleanup on completion."""
    state.task = task

    def _clear_task(completed: asyncio.Task) -> None:
        if state.task is completed:
            state.task = None
        if completed.cancelled():
            return
        exc = completed.exception()
        if exc is not None:
            logger.error(
                "session: generation task crashed session_id=%s",
                state.session_id,
                exc_info=exc,
            )

    task.add_done_callback(_clear_task)


def has_running_task(state: SessionState | None) -> bool:
    return bool(state and state.task and not state.task.done())


async def cancel_running_task(state: SessionState) -> bool:
    """Cancel the in-flight generation and wait for it to unwind.

    Returns:
        True if a running task was cancelled.
    """
    task = state.task
    if task is None or task.done():
        return False
    logger.info("session: cancelling generation req_id=%s", state.active_request_id)
    task.cancel()
    await asyncio.wait({task})
    return True


__all__ = [
    "begin_request",
    "finish_request",
    "track_task",
    "has_running_task",
    "cancel_running_task",
]
