"""Gemini backend adapter built on the google-genai SDK."""

from __future__ import annotations

import contextlib
import logging
from collections.abc import AsyncIterator, Sequence

from google import genai
from google.genai import types

from ..errors import GenerationError
from ..state import Turn
from .base import GenerationClient

logger = logging.getLogger(__name__)


class GeminiGenerationClient(GenerationClient):
    """Streams replies from a Gemini model.

    The SDK client is created on first use: a missing API key must not stop
    the server from starting, it only fails each generation.
    """

    def __init__(self, *, model: str, system_prompt: str, api_key: str | None) -> None:
        self.model = model
        self.system_prompt = system_prompt
        self._api_key = api_key or None
        self._client: genai.Client | None = None
        self._config = types.GenerateContentConfig(
            system_instruction=system_prompt or None,
        )

    async def stream(self, turns: Sequence[Turn]) -> AsyncIterator[str]:
        client = self._get_client()
        response = await client.aio.models.generate_content_stream(
            model=self.model,
            contents=to_contents(turns),
            config=self._config,
        )
        try:
            async for chunk in response:
                text = chunk.text
                if text:
                    yield text
        finally:
            aclose = getattr(response, "aclose", None)
            if aclose is not None:
                with contextlib.suppress(Exception):
                    await aclose()

    async def aclose(self) -> None:
        client = self._client
        self._client = None
        if client is None:
            return
        with contextlib.suppress(Exception):
            await client.aio.aclose()
        logger.info("gemini client closed model=%s", self.model)

    def _get_client(self) -> genai.Client:
        if self._client is not None:
            return self._client
        if not self._api_key:
            raise GenerationError("GEMINI_API_KEY is not configured", category="auth")
        self._client = genai.Client(api_key=self._api_key)
        return self._client


def to_contents(turns: Sequence[Turn]) -> list[types.Content]:
    """Map conversation turns to Gemini content parts, preserving order."""
    return [
        types.Content(role=turn.role, parts=[types.Part(text=turn.text)])
        for turn in turns
    ]


__all__ = ["GeminiGenerationClient", "to_contents"]
