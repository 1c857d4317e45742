"""Centralized exception classes for the gateway.

Organization:
    - generation.py: Backend generation failures (the single terminal failure
      a generation stream can raise)
    - classify.py: Exception-to-label mapping for logs
"""

from .classify import classify_error
from .generation import GenerationError

__all__ = [
    "GenerationError",
    "classify_error",
]
