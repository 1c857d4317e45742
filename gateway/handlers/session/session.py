"""Session state machine for one client connection.

A Session owns the conversation history of a single connection and turns
inbound events into outbound events:

    hello         -> nothing (reserved for an auth check)
    user_message  -> assistant_delta* then assistant_done | error,
                     then an optional clock.now tool_message
    tool_invoke   -> nothing (reserved)

Request lifecycle: idle -> generating -> idle, with the outcome (completed,
failed or cancelled) kept in ``state.last_outcome``. At most
one generation runs at a time. A user_message that arrives while one is
running is rejected with an error event and does not touch history.

History rules:
    - the user turn is appended as soon as a request is accepted
    - the model turn (all fragments concatenated) is appended only when the
      stream completes; a failed request leaves just its user turn behind

The generation runs as a task owned by the session so the connection keeps
reading frames while fragments stream; ``close()`` cancels it.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import uuid
from collections.abc import Awaitable, Callable

from ...config import GEN_TIMEOUT_S
from ...errors import GenerationError
from ...generation import GenerationClient, GenerationStream
from ...logging import log_context
from ...messages import (
    AssistantDelta,
    AssistantDone,
    ErrorEvent,
    Hello,
    InboundEvent,
    OutboundEvent,
    ToolInvoke,
    ToolMessage,
    UserMessage,
)
from ...state import RelayState, RequestState, SessionState, Turn
from .clock import CLOCK_TOOL_NAME, mentions_clock, utc_now_iso
from .history import append_model_turn, append_user_turn, prompt_turns
from .requests import begin_request, cancel_running_task, finish_request, track_task

logger = logging.getLogger(__name__)

# Sends one event to the client; returns False once the client is gone
EmitFn = Callable[[OutboundEvent], Awaitable[bool]]

BUSY_MESSAGE = "A response is already being generated; wait for it to finish."
MODEL_ERROR_PREFIX = "Model error: "


class Session:
    """Per-connection protocol driver.

    Args:
        client: Shared generation client (read-only across sessions).
        emit: Coroutine that delivers an outbound event to this client.
        session_id: Identifier used in logs; random when omitted.
        timeout_s: Per-generation deadline passed to GenerationStream.
        clock: Returns the ISO-8601 timestamp used by the clock tool.
    """

    def __init__(
        self,
        client: GenerationClient,
        emit: EmitFn,
        *,
        session_id: str | None = None,
        timeout_s: float = GEN_TIMEOUT_S,
        clock: Callable[[], str] = utc_now_iso,
    ) -> None:
        self._client = client
        self._emit = emit
        self._timeout_s = timeout_s
        self._clock = clock
        self.state = SessionState(session_id=session_id or uuid.uuid4().hex)
        self._closed = False

    @property
    def session_id(self) -> str:
        return self.state.session_id

    @property
    def history(self) -> tuple[Turn, ...]:
        return tuple(self.state.history)

    @property
    def is_generating(self) -> bool:
        return self.state.is_generating

    async def handle(self, event: InboundEvent) -> None:
        """Dispatch one decoded inbound event."""
        if self._closed:
            return
        if isinstance(event, UserMessage):
            await self._handle_user_message(event)
        elif isinstance(event, Hello):
            # TODO: validate a client token here once the gateway issues them
            logger.debug("session: hello session_id=%s", self.session_id)
        elif isinstance(event, ToolInvoke):
            logger.info("session: tool_invoke ignored session_id=%s", self.session_id)

    async def join(self) -> None:
        """Wait until the in-flight generation (if any) has finished."""
        task = self.state.task
        if task is not None and not task.done():
            await asyncio.wait({task})

    async def close(self) -> None:
        """Tear down the session, cancelling any in-flight generation."""
        self._closed = True
        cancelled = await cancel_running_task(self.state)
        logger.info(
            "session: closed session_id=%s turns=%s completed=%s cancelled_inflight=%s duration_s=%.1f",
            self.session_id,
            len(self.state.history),
            self.state.completed_requests,
            cancelled,
            self.state.duration_s(),
        )

    # ------------------------------------------------------------------ #
    # user_message
    # ------------------------------------------------------------------ #
    async def _handle_user_message(self, message: UserMessage) -> None:
        if self.state.is_generating:
            logger.info("session: busy, rejecting user_message session_id=%s", self.session_id)
            await self._emit(ErrorEvent(message=BUSY_MESSAGE))
            return

        request_id = uuid.uuid4().hex
        append_user_turn(self.state, message.text)
        begin_request(self.state, request_id)
        logger.info(
            "session: user_message accepted req_id=%s len(text)=%s turns=%s",
            request_id,
            len(message.text),
            len(self.state.history),
        )
        task = asyncio.create_task(
            self._run_request(message, request_id),
            name=f"generation-{request_id}",
        )
        track_task(self.state, task)

    async def _run_request(self, message: UserMessage, request_id: str) -> None:
        relay = RelayState(request_id=request_id)
        outcome = RequestState.FAILED
        with log_context(request_id=request_id, conversation_id=message.conversation_id):
            try:
                try:
                    await self._relay_fragments(relay)
                except GenerationError as exc:
                    await self._emit(ErrorEvent(message=f"{MODEL_ERROR_PREFIX}{exc.reason}"))
                    return
                except asyncio.CancelledError:
                    outcome = RequestState.CANCELLED
                    raise
                if relay.interrupted:
                    logger.info("session: client gone mid-stream req_id=%s", request_id)
                    outcome = RequestState.CANCELLED
                    return
                outcome = RequestState.COMPLETED
                await self._complete(message, relay)
            finally:
                finish_request(self.state, outcome)

    async def _relay_fragments(self, relay: RelayState) -> None:
        stream = GenerationStream(
            self._client,
            prompt_turns(self.state),
            request_id=relay.request_id,
            timeout_s=self._timeout_s,
        )
        async with contextlib.aclosing(stream.iter_text()) as fragments:
            async for fragment in fragments:
                if not fragment:
                    continue
                relay.assistant_text += fragment
                relay.fragments += 1
                if not await self._emit(AssistantDelta(delta=fragment)):
                    relay.interrupted = True
                    return

    async def _complete(self, message: UserMessage, relay: RelayState) -> None:
        message_id = uuid.uuid4().hex
        delivered = await self._emit(
            AssistantDone(message_id=message_id, conversation_id=message.conversation_id)
        )
        append_model_turn(self.state, relay.assistant_text)
        self.state.completed_requests += 1
        logger.info(
            "session: assistant_done message_id=%s fragments=%s len(reply)=%s",
            message_id,
            relay.fragments,
            len(relay.assistant_text),
        )
        if delivered and mentions_clock(message.text):
            await self._emit(ToolMessage(name=CLOCK_TOOL_NAME, content=self._clock()))


__all__ = ["BUSY_MESSAGE", "MODEL_ERROR_PREFIX", "EmitFn", "Session"]
