"""Listen address and route configuration."""

import os


HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8787"))
WS_PATH = os.getenv("WS_PATH", "/stream")


__all__ = ["HOST", "PORT", "WS_PATH"]
