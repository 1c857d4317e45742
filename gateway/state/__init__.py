"""Centralized state dataclasses for the gateway."""

from .session import RequestState, SessionState, Turn
from .stream import RelayState

__all__ = [
    "RelayState",
    "RequestState",
    "SessionState",
    "Turn",
]
