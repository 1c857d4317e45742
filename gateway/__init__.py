"""Streaming chat gateway: WebSocket clients in, Gemini fragments out."""

__version__ = "0.1.0"
