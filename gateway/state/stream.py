"""Relay-related dataclasses."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class RelayState:
    """Internal state for relaying one generation to the client."""

    request_id: str
    assistant_text: str = ""
    fragments: int = 0
    interrupted: bool = False


__all__ = ["RelayState"]
