"""Per-connection session protocol."""

from .clock import CLOCK_TOOL_NAME, mentions_clock, utc_now_iso
from .session import BUSY_MESSAGE, MODEL_ERROR_PREFIX, Session

__all__ = [
    "BUSY_MESSAGE",
    "CLOCK_TOOL_NAME",
    "MODEL_ERROR_PREFIX",
    "Session",
    "mentions_clock",
    "utc_now_iso",
]
