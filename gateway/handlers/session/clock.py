"""Rule-based clock tool.

After a reply completes, a user message that mentions time or date (English
or Thai) gets an extra ``clock.now`` tool message carrying the current UTC
time. This is keyed on the user's text only, never on the model's reply.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone

CLOCK_TOOL_NAME = "clock.now"

_CLOCK_PATTERN = re.compile(r"(?:time|date|เวลา|วันที่)", re.IGNORECASE)


def mentions_clock(text: str) -> bool:
    """Return True when the text asks about the time or date."""
    return bool(_CLOCK_PATTERN.search(text or ""))


def utc_now_iso(now: datetime | None = None) -> str:
    """Format a UTC timestamp as ISO-8601 with millisecond precision and ``Z``.

    Args:
        now: Timestamp to format; defaults to the current time.

    Returns:
        A string such as ``2024-01-15T14:30:00.000Z``.
    """
    moment = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


__all__ = ["CLOCK_TOOL_NAME", "mentions_clock", "utc_now_iso"]
