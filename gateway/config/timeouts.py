"""Generation timeout configuration."""

import os


# Hard timeout for one streamed generation in seconds (0 disables)
GEN_TIMEOUT_S = float(os.getenv("GEN_TIMEOUT_S", "60"))


__all__ = ["GEN_TIMEOUT_S"]
