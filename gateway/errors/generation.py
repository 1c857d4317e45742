"""Generation failure exception.

A generation stream either ends normally or raises exactly one
GenerationError. Backend SDK errors, network faults and timeouts are all
wrapped into it so the session deals with a single failure type.
"""

from __future__ import annotations


class GenerationError(Exception):
    """Terminal failure of a streamed generation.

    Attributes:
        reason: Human-readable description forwarded to the client.
        category: Coarse label from classify_error (timeout, auth, ...).
    """

    def __init__(self, reason: str, *, category: str = "unknown") -> None:
        super().__init__(reason)
        self.reason = reason
        self.category = category


__all__ = ["GenerationError"]
