"""Generation client adapters.

A generation client turns an ordered sequence of turns into a lazy sequence
of text fragments. The stream either ends normally or raises a single
GenerationError; cancelling the consuming task stops the backend stream.

Usage:
    from gateway.generation import GenerationStream, get_generation_client

    client = await get_generation_client()
    async for fragment in GenerationStream(client, turns, request_id="r1"):
        print(fragment)
"""

from .base import GenerationClient
from .gemini import GeminiGenerationClient
from .registry import get_generation_client, shutdown_generation_client
from .stream import GenerationStream

__all__ = [
    "GenerationClient",
    "GeminiGenerationClient",
    "GenerationStream",
    "get_generation_client",
    "shutdown_generation_client",
]
