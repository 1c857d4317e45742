"""Abstract base class for generation clients."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Sequence

from ..state import Turn


class GenerationClient(ABC):
    """Backend capability: turns in, text fragments out.

    Implementations are shared by every session, so they must not keep
    per-request state on the instance.
    """

    @abstractmethod
    def stream(self, turns: Sequence[Turn]) -> AsyncIterator[str]:
        """Stream reply fragments for the conversation, oldest turn first.

        Fragments are yielded in backend emission order. Backend failures are
        raised from the iterator; closing the iterator releases the backend
        request.
        """

    async def aclose(self) -> None:
        """Release client-wide resources. Override when the SDK needs it."""


__all__ = ["GenerationClient"]
