"""Main FastAPI server for the streaming chat gateway.

It provides:

- REST endpoints for health checks (/healthz, /)
- WebSocket endpoint for chat sessions (WS_PATH, default /stream)
- Generation client warm-up on startup and cleanup on shutdown

Server Lifecycle:
    1. On startup: build the shared generation client (warns when the
       credential is missing; the server still starts)
    2. Accept WebSocket connections on WS_PATH
    3. Run one session per connection
    4. On shutdown: close the generation client

Example:
    Run directly with uvicorn:
        $ uvicorn gateway.server:app --host 0.0.0.0 --port 8787

    Or through the package entry point:
        $ python -m gateway
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, WebSocket
from fastapi.responses import ORJSONResponse

from .config import MODEL, PORT, WS_PATH
from .generation import get_generation_client, shutdown_generation_client
from .handlers import handle_websocket_connection
from .logging import configure_logging

logger = logging.getLogger(__name__)

configure_logging()


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    """Build the shared generation client before serving traffic."""
    await get_generation_client()
    logger.info("gateway ready: ws path=%s port=%s model=%s", WS_PATH, PORT, MODEL)
    try:
        yield
    finally:
        await shutdown_generation_client()


app = FastAPI(default_response_class=ORJSONResponse, lifespan=lifespan)


def _health_payload() -> dict:
    return {
        "status": "ok",
        "model": MODEL,
    }


@app.get("/")
async def root():
    """Root endpoint for load balancer health checks."""
    return _health_payload()


@app.get("/healthz")
async def healthz():
    """Health check endpoint."""
    return _health_payload()


@app.websocket(WS_PATH)
async def websocket_endpoint(websocket: WebSocket):
    """Chat session endpoint."""
    await handle_websocket_connection(websocket)
