"""Async-safe lazy singleton used for the shared generation client.

Usage:
    class MyClientSingleton(AsyncSingleton[MyClient]):
        async def _create_instance(self) -> MyClient:
            return MyClient(...)

    singleton = MyClientSingleton()
    client = await singleton.get()
    await singleton.shutdown()
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from typing import Generic, TypeVar

T = TypeVar("T")


class AsyncSingleton(ABC, Generic[T]):
    """Lazily created, lock-protected shared instance."""

    def __init__(self) -> None:
        self._instance: T | None = None
        self._lock = asyncio.Lock()

    @abstractmethod
    async def _create_instance(self) -> T:
        """Create the singleton instance. Called once under lock."""
        ...

    async def _shutdown_instance(self, instance: T) -> None:
        """Shutdown the instance. Override for custom cleanup."""
        if hasattr(instance, "aclose"):
            await instance.aclose()  # type: ignore[union-attr]

    async def get(self) -> T:
        """Get the singleton instance, creating it if needed."""
        if self._instance is not None:
            return self._instance

        async with self._lock:
            if self._instance is not None:
                return self._instance

            self._instance = await self._create_instance()
            return self._instance

    async def shutdown(self) -> None:
        """Shutdown and clear the singleton instance."""
        if self._instance is None:
            return

        async with self._lock:
            instance = self._instance
            if instance is None:
                return

            await self._shutdown_instance(instance)
            self._instance = None

    @property
    def is_initialized(self) -> bool:
        return self._instance is not None


__all__ = ["AsyncSingleton"]
