"""Unit tests for inbound frame decoding."""

from __future__ import annotations

import json

from gateway.messages import Hello, ToolInvoke, UserMessage, decode_frame


def test_hello_decodes() -> None:
    assert decode_frame('{"type": "hello"}') == Hello()


def test_hello_ignores_extra_payload() -> None:
    assert decode_frame(json.dumps({"type": "hello", "token": 123})) == Hello()


def test_user_message_with_conversation_id() -> None:
    event = decode_frame(json.dumps({"type": "user_message", "text": "Hello", "conversationId": "c1"}))
    assert event == UserMessage(text="Hello", conversation_id="c1")


def test_user_message_without_conversation_id() -> None:
    event = decode_frame(json.dumps({"type": "user_message", "text": "Hi"}))
    assert event == UserMessage(text="Hi", conversation_id=None)


def test_type_must_match_exactly() -> None:
    assert decode_frame(json.dumps({"type": " USER_MESSAGE ", "text": "Hi"})) is None
    assert decode_frame(json.dumps({"type": "Hello"})) is None
    assert decode_frame(json.dumps({"type": "tool_invoke "})) is None


def test_bytes_frame_decodes() -> None:
    raw = json.dumps({"type": "user_message", "text": "สวัสดี"}, ensure_ascii=False).encode("utf-8")
    assert decode_frame(raw) == UserMessage(text="สวัสดี")


def test_tool_invoke_keeps_payload() -> None:
    event = decode_frame(json.dumps({"type": "tool_invoke", "name": "clock.now"}))
    assert event == ToolInvoke(payload={"name": "clock.now"})


def test_invalid_json_is_dropped() -> None:
    assert decode_frame("{bad json") is None


def test_empty_frame_is_dropped() -> None:
    assert decode_frame("") is None


def test_non_utf8_bytes_are_dropped() -> None:
    assert decode_frame(b"\xff\xfe\x00") is None


def test_non_object_is_dropped() -> None:
    assert decode_frame("[1, 2]") is None
    assert decode_frame('"hello"') is None


def test_missing_type_is_dropped() -> None:
    assert decode_frame(json.dumps({"text": "Hello"})) is None


def test_non_string_type_is_dropped() -> None:
    assert decode_frame(json.dumps({"type": 7})) is None


def test_unknown_type_is_dropped() -> None:
    assert decode_frame(json.dumps({"type": "start", "text": "Hello"})) is None


def test_user_message_without_text_is_dropped() -> None:
    assert decode_frame(json.dumps({"type": "user_message"})) is None


def test_user_message_with_non_string_text_is_dropped() -> None:
    assert decode_frame(json.dumps({"type": "user_message", "text": 42})) is None


def test_user_message_with_non_string_conversation_id_is_dropped() -> None:
    frame = json.dumps({"type": "user_message", "text": "Hi", "conversationId": 5})
    assert decode_frame(frame) is None
