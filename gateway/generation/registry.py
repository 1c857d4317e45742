"""Process-wide generation client.

One client is built from the startup configuration and shared read-only by
every session.
"""

from __future__ import annotations

import logging

from ..config import GEMINI_API_KEY, MODEL, SYSTEM_PROMPT
from .base import GenerationClient
from .gemini import GeminiGenerationClient
from .singleton import AsyncSingleton

logger = logging.getLogger(__name__)


class _GenerationClientSingleton(AsyncSingleton[GenerationClient]):
    async def _create_instance(self) -> GenerationClient:
        if not GEMINI_API_KEY:
            logger.warning("GEMINI_API_KEY is not set; generations will fail until it is configured")
        logger.info("generation client: model=%s", MODEL)
        return GeminiGenerationClient(
            model=MODEL,
            system_prompt=SYSTEM_PROMPT,
            api_key=GEMINI_API_KEY,
        )


_client_singleton = _GenerationClientSingleton()


async def get_generation_client() -> GenerationClient:
    """Return the shared generation client, creating it on first use."""
    return await _client_singleton.get()


async def shutdown_generation_client() -> None:
    """Close the shared generation client (server shutdown)."""
    await _client_singleton.shutdown()


__all__ = ["get_generation_client", "shutdown_generation_client"]
