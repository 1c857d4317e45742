"""Shared fakes for gateway tests."""

from .fakes import BlockingClient, EventRecorder, ScriptedClient

__all__ = ["BlockingClient", "EventRecorder", "ScriptedClient"]
