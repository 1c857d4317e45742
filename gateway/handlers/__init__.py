"""Connection and session handlers."""

from .session import Session
from .websocket import handle_websocket_connection

__all__ = [
    "Session",
    "handle_websocket_connection",
]
