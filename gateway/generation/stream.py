"""Streaming controller shared by every generation.

GenerationStream wraps a client's raw fragment iterator with:

- a hard deadline for the whole generation (GEN_TIMEOUT_S, 0 disables)
- failure wrapping: any backend exception becomes one GenerationError
- cleanup: the backend iterator is closed on completion, failure, timeout
  and cancellation, so nothing keeps generating after a disconnect
- start / first fragment / end logging
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import time
from collections.abc import AsyncGenerator, AsyncIterator, Sequence

from ..config import GEN_TIMEOUT_S
from ..errors import GenerationError, classify_error
from ..state import Turn
from .base import GenerationClient

logger = logging.getLogger(__name__)


class GenerationStream:
    """Timeout-bounded, failure-normalizing view over one generation."""

    def __init__(
        self,
        client: GenerationClient,
        turns: Sequence[Turn],
        *,
        request_id: str,
        timeout_s: float = GEN_TIMEOUT_S,
        name: str = "chat",
    ) -> None:
        self._client = client
        self._turns = tuple(turns)
        self._request_id = request_id
        self._timeout_s = float(timeout_s)
        self._name = name
        self._chars = 0
        self._ttfb_ms: float | None = None

    def __aiter__(self) -> AsyncGenerator[str, None]:
        return self.iter_text()

    async def iter_text(self) -> AsyncGenerator[str, None]:
        start = time.perf_counter()
        loop = asyncio.get_running_loop()
        deadline = loop.time() + self._timeout_s if self._timeout_s > 0 else None
        logger.info(
            "%s_stream: start req_id=%s turns=%s timeout_s=%.2f",
            self._name,
            self._request_id,
            len(self._turns),
            self._timeout_s,
        )

        iterator: AsyncIterator[str] | None = None
        try:
            iterator = aiter(self._client.stream(self._turns))
            while True:
                try:
                    fragment = await _next_fragment(iterator, deadline)
                except StopAsyncIteration:
                    break
                if not fragment:
                    continue
                self._chars += len(fragment)
                self._record_ttfb_if_needed(start)
                yield fragment
        except asyncio.CancelledError:
            logger.info("%s_stream: cancelled req_id=%s", self._name, self._request_id)
            raise
        except GenerationError as exc:
            logger.warning(
                "%s_stream: failed req_id=%s category=%s reason=%s",
                self._name,
                self._request_id,
                exc.category,
                exc.reason,
            )
            raise
        except TimeoutError as exc:
            logger.warning("%s_stream: timeout req_id=%s", self._name, self._request_id)
            raise GenerationError(
                f"generation timed out after {self._timeout_s:g}s",
                category="timeout",
            ) from exc
        except Exception as exc:  # noqa: BLE001 - normalized into GenerationError
            category = classify_error(exc)
            logger.warning(
                "%s_stream: backend error req_id=%s category=%s error=%s",
                self._name,
                self._request_id,
                category,
                exc,
            )
            raise GenerationError(str(exc) or type(exc).__name__, category=category) from exc
        finally:
            if iterator is not None:
                await _close_iterator(iterator)
            logger.info(
                "%s_stream: end req_id=%s total_len=%s ms=%.1f",
                self._name,
                self._request_id,
                self._chars,
                (time.perf_counter() - start) * 1000.0,
            )

    def _record_ttfb_if_needed(self, start: float) -> None:
        if self._ttfb_ms is not None:
            return
        self._ttfb_ms = (time.perf_counter() - start) * 1000.0
        logger.info(
            "%s_stream: first fragment req_id=%s ttfb_ms=%.1f",
            self._name,
            self._request_id,
            self._ttfb_ms,
        )


async def _next_fragment(iterator: AsyncIterator[str], deadline: float | None) -> str:
    # Scoped to one step so the deadline never fires while the consumer holds a fragment
    async with asyncio.timeout_at(deadline):
        return await anext(iterator)


async def _close_iterator(iterator: AsyncIterator[str]) -> None:
    aclose = getattr(iterator, "aclose", None)
    if aclose is None:
        return
    with contextlib.suppress(Exception):
        await aclose()


__all__ = ["GenerationStream"]
