"""End-to-end tests for the WebSocket session endpoint."""

from __future__ import annotations

import json
import time

import pytest
from fastapi import FastAPI, WebSocket
from fastapi.testclient import TestClient

from gateway.config import MODEL
from gateway.generation import GenerationClient
from gateway.handlers.websocket import handle_websocket_connection
from tests.helpers import BlockingClient, ScriptedClient


def _app(client: GenerationClient) -> FastAPI:
    app = FastAPI()

    async def _getter() -> GenerationClient:
        return client

    @app.websocket("/stream")
    async def _endpoint(websocket: WebSocket):
        await handle_websocket_connection(websocket, client_getter=_getter)

    return app


def test_user_message_streams_deltas_and_done() -> None:
    client = ScriptedClient(["Hi", " there"])
    with TestClient(_app(client)) as http, http.websocket_connect("/stream") as ws:
        ws.send_text("{not json")
        ws.send_text(json.dumps({"type": "hello"}))
        ws.send_text(json.dumps({"type": "bogus"}))
        ws.send_text(json.dumps({"type": "user_message", "text": "Hello", "conversationId": "c1"}))

        assert ws.receive_json() == {"type": "assistant_delta", "delta": "Hi"}
        assert ws.receive_json() == {"type": "assistant_delta", "delta": " there"}
        done = ws.receive_json()
        assert done["type"] == "assistant_done"
        assert done["conversationId"] == "c1"
        assert done["messageId"]


def test_second_message_sees_previous_exchange() -> None:
    client = ScriptedClient(["one"], ["two"])
    with TestClient(_app(client)) as http, http.websocket_connect("/stream") as ws:
        ws.send_text(json.dumps({"type": "user_message", "text": "first"}))
        assert ws.receive_json()["type"] == "assistant_delta"
        assert ws.receive_json()["type"] == "assistant_done"

        ws.send_text(json.dumps({"type": "user_message", "text": "second"}))
        assert ws.receive_json() == {"type": "assistant_delta", "delta": "two"}
        assert ws.receive_json()["type"] == "assistant_done"

    assert [turn.text for turn in client.calls[1]] == ["first", "one", "second"]


def test_time_question_gets_clock_tool_message() -> None:
    client = ScriptedClient(["It's noon."])
    with TestClient(_app(client)) as http, http.websocket_connect("/stream") as ws:
        ws.send_text(json.dumps({"type": "user_message", "text": "What time is it?"}))

        assert ws.receive_json()["type"] == "assistant_delta"
        assert ws.receive_json()["type"] == "assistant_done"
        tool = ws.receive_json()
        assert tool["type"] == "tool_message"
        assert tool["name"] == "clock.now"
        assert tool["content"].endswith("Z")


def test_backend_failure_is_sent_as_error_and_connection_survives() -> None:
    client = ScriptedClient([RuntimeError("backend down")], ["recovered"])
    with TestClient(_app(client)) as http, http.websocket_connect("/stream") as ws:
        ws.send_text(json.dumps({"type": "user_message", "text": "Hello"}))
        assert ws.receive_json() == {"type": "error", "message": "Model error: backend down"}

        ws.send_text(json.dumps({"type": "user_message", "text": "again"}))
        assert ws.receive_json() == {"type": "assistant_delta", "delta": "recovered"}
        assert ws.receive_json()["type"] == "assistant_done"


def test_each_connection_starts_with_empty_history() -> None:
    client = ScriptedClient(["a"], ["b"])
    app = _app(client)
    with TestClient(app) as http:
        for text in ("first", "second"):
            with http.websocket_connect("/stream") as ws:
                ws.send_text(json.dumps({"type": "user_message", "text": text}))
                ws.receive_json()
                ws.receive_json()

    assert [turn.text for turn in client.calls[1]] == ["second"]


@pytest.fixture
def server_app(monkeypatch):
    from gateway import server
    from gateway.handlers.websocket import manager

    client = ScriptedClient(["ok"])

    async def _getter() -> GenerationClient:
        return client

    monkeypatch.setattr(server, "get_generation_client", _getter)
    monkeypatch.setattr(manager, "get_generation_client", _getter)
    return server.app


def test_healthz_reports_model(server_app) -> None:
    with TestClient(server_app) as http:
        for path in ("/", "/healthz"):
            payload = http.get(path).json()
            assert payload == {"status": "ok", "model": MODEL}


def test_server_stream_route(server_app) -> None:
    from gateway.config import WS_PATH

    with TestClient(server_app) as http, http.websocket_connect(WS_PATH) as ws:
        ws.send_text(json.dumps({"type": "user_message", "text": "Hello"}))
        assert ws.receive_json() == {"type": "assistant_delta", "delta": "ok"}
        assert ws.receive_json()["type"] == "assistant_done"


def _wait_for(condition, timeout_s: float = 2.0) -> bool:
    deadline = time.monotonic() + timeout_s
    while time.monotonic() < deadline:
        if condition():
            return True
        time.sleep(0.01)
    return condition()


def test_disconnect_mid_stream_stops_backend_stream() -> None:
    client = BlockingClient("first")
    with TestClient(_app(client)) as http:
        with http.websocket_connect("/stream") as ws:
            ws.send_text(json.dumps({"type": "user_message", "text": "Hello"}))
            assert ws.receive_json() == {"type": "assistant_delta", "delta": "first"}
            assert _wait_for(client.started.is_set)

        assert _wait_for(lambda: client.closed)
        assert client.cancelled
        assert not client.release.is_set()


def test_concurrent_connections_each_get_a_session() -> None:
    client = ScriptedClient(["a"], ["b"], ["c"])
    with TestClient(_app(client)) as http:
        with (
            http.websocket_connect("/stream") as first,
            http.websocket_connect("/stream") as second,
            http.websocket_connect("/stream") as third,
        ):
            for ws, text in ((first, "one"), (second, "two"), (third, "three")):
                ws.send_text(json.dumps({"type": "user_message", "text": text}))
                assert ws.receive_json()["type"] == "assistant_delta"
                assert ws.receive_json()["type"] == "assistant_done"

    assert [[turn.text for turn in call] for call in client.calls] == [["one"], ["two"], ["three"]]
