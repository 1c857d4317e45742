"""Conversation history helpers.

History is an append-only list of turns. The backend receives the whole of it
on every request, oldest first, with no trimming or summarization.
"""

from __future__ import annotations

from ...state import SessionState, Turn


def append_user_turn(state: SessionState, text: str) -> Turn:
    turn = Turn(role="user", text=text)
    state.history.append(turn)
    return turn


def append_model_turn(state: SessionState, text: str) -> Turn:
    turn = Turn(role="model", text=text)
    state.history.append(turn)
    return turn


def prompt_turns(state: SessionState) -> list[Turn]:
    """Snapshot of the full history to send to the backend."""
    return list(state.history)


__all__ = ["append_user_turn", "append_model_turn", "prompt_turns"]
