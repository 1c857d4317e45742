"""Exception classification helpers for log labels."""

from __future__ import annotations

import asyncio

from .generation import GenerationError

# Substrings of backend error messages, checked in order
_MESSAGE_CATEGORIES: tuple[tuple[str, str], ...] = (
    ("api key", "auth"),
    ("permission", "auth"),
    ("unauthenticated", "auth"),
    ("401", "auth"),
    ("403", "auth"),
    ("quota", "rate_limit"),
    ("resource_exhausted", "rate_limit"),
    ("rate limit", "rate_limit"),
    ("429", "rate_limit"),
)

ERROR_CATEGORIES: tuple[tuple[type[BaseException], str], ...] = (
    (asyncio.CancelledError, "cancelled"),
    (TimeoutError, "timeout"),
    (ConnectionError, "connection"),
    (OSError, "connection"),
)


def classify_error(exc: BaseException) -> str:
    """Map an exception to a log-friendly category label."""

    if isinstance(exc, GenerationError):
        return exc.category
    for cls, label in ERROR_CATEGORIES:
        if isinstance(exc, cls):
            return label
    message = str(exc).lower()
    for fragment, label in _MESSAGE_CATEGORIES:
        if fragment in message:
            return label
    return "unknown"


__all__ = ["ERROR_CATEGORIES", "classify_error"]
