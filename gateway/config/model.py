"""Generative backend configuration.

The credential is optional at startup: a missing ``GEMINI_API_KEY`` is logged
as a warning by the server and every generation then fails with a model error
instead of the process refusing to start.
"""

import os


MODEL = os.getenv("MODEL", "gemini-1.5-flash")
SYSTEM_PROMPT = os.getenv(
    "SYSTEM_PROMPT",
    "You are a helpful AI assistant inside a Flutter app. "
    "Answer clearly, use markdown for code, and be concise.",
)
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY", "")


__all__ = ["MODEL", "SYSTEM_PROMPT", "GEMINI_API_KEY"]
