"""conduit_providers.config.defaults
==================================

Central place for small, stable default values used across the
conduit_providers package and its CLI. These defaults can be overridden via
environment variables or external configuration.

This module avoids importing from other provider packages to prevent circular
dependencies. Only plain constants live here.
"""

from __future__ import annotations

# ---- CLI Defaults ----
# Provider selected by the CLI when none is specified.
PROVIDER_CLI_DEFAULT_PROVIDER = "nousresearch"
# System prompt used by ``run`` when ``--system`` is omitted.
PROVIDER_CLI_DEFAULT_SYSTEM_PROMPT = "You are a helpful assistant."

# ---- Provider-specific defaults ----
NOUSRESEARCH_DEFAULT_BASE_URL = "https://inference-api.nousresearch.com/v1"

DEEPSEEK_DEFAULT_BASE_URL = "https://api.deepseek.com/v1"

# ---- Retry defaults (per provider, overridable via the ``retry`` section) ----
RETRY_DEFAULT_MAX_ATTEMPTS = 3
RETRY_DEFAULT_DELAY_BASE = 1.0
RETRY_DEFAULT_MAX_DELAY = 10.0


__all__ = [
    "PROVIDER_CLI_DEFAULT_PROVIDER",
    "PROVIDER_CLI_DEFAULT_SYSTEM_PROMPT",
    "NOUSRESEARCH_DEFAULT_BASE_URL",
    "DEEPSEEK_DEFAULT_BASE_URL",
    "RETRY_DEFAULT_MAX_ATTEMPTS",
    "RETRY_DEFAULT_DELAY_BASE",
    "RETRY_DEFAULT_MAX_DELAY",
]
