"""Base shared constants for provider adapters.

Central location to avoid scattering magic strings and default numbers.

Security
--------
This module contains only generic sentinel strings and numeric defaults.
There are no credentials or tokens embedded.

# pragma: allowlist secret
"""
from __future__ import annotations

# Missing credential sentinel
MISSING_API_KEY_ERROR = "missing_api_key"  # pragma: allowlist secret - generic placeholder string, not a real secret

# Default HTTP timeout (seconds) applied to transport clients unless overridden
DEFAULT_HTTP_TIMEOUT = 600.0

# Sampling temperature sent with every chat completion request
DEFAULT_TEMPERATURE = 0

# Malformed stream chunks tolerated before the stream is treated as broken
MAX_MALFORMED_CHUNKS = 1

__all__ = [
    "MISSING_API_KEY_ERROR",
    "DEFAULT_HTTP_TIMEOUT",
    "DEFAULT_TEMPERATURE",
    "MAX_MALFORMED_CHUNKS",
]
