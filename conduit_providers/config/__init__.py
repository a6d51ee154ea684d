"""Unified configuration layer for providers.

Goals
-----
* Centralize defaults (base URLs, retry policy).
* Merge sources in a predictable order:
    1. Built-in defaults
    2. Optional external config file (JSON or YAML) pointed to by PROVIDERS_CONFIG_FILE
    3. Environment variables (e.g. NOUSRESEARCH_MODEL, NOUSRESEARCH_API_KEY)
    4. In-code overrides passed to helper
* Provide a single call site: ``get_provider_config(provider: str)``.
* Keep zero hard dependency on PyYAML (load YAML only if available).

Environment Variable Conventions
--------------------------------
<PROVIDER>_MODEL, <PROVIDER>_API_KEY, <PROVIDER>_BASE_URL
e.g. NOUSRESEARCH_MODEL, DEEPSEEK_BASE_URL. API keys also honor the aliases
listed in :mod:`conduit_providers.config.env`.

External Config File (Optional)
-------------------------------
If PROVIDERS_CONFIG_FILE is set to a path, we attempt to load JSON first.
If that fails and PyYAML is installed, attempt YAML. Structure example:

```
nousresearch:
  model: Hermes-4-70B
  retry:
    max_attempts: 5
    delay_base: 0.5
deepseek:
  model: deepseek-reasoner
```

Public API
----------
* get_provider_config(provider: str, overrides: dict | None = None) -> dict
* get_model(provider: str) -> str | None
* reset_config_cache() -> None
"""
from __future__ import annotations

import copy
import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

from ..base.errors import ConfigurationError, ErrorCode
from .defaults import (
    DEEPSEEK_DEFAULT_BASE_URL,
    NOUSRESEARCH_DEFAULT_BASE_URL,
    RETRY_DEFAULT_DELAY_BASE,
    RETRY_DEFAULT_MAX_ATTEMPTS,
    RETRY_DEFAULT_MAX_DELAY,
)
from .env import is_placeholder, resolve_provider_key

try:  # Optional YAML support
    import yaml  # type: ignore
except ImportError:  # pragma: no cover
    yaml = None  # type: ignore

CONFIG_FILE_ENV = "PROVIDERS_CONFIG_FILE"
DOTENV_FILE_ENV = "DOTENV_FILE"


# -------------------- Defaults --------------------

_RETRY_DEFAULTS: Dict[str, Any] = {
    "max_attempts": RETRY_DEFAULT_MAX_ATTEMPTS,
    "delay_base": RETRY_DEFAULT_DELAY_BASE,
    "max_delay": RETRY_DEFAULT_MAX_DELAY,
}

DEFAULTS: Dict[str, Dict[str, Any]] = {
    "nousresearch": {"base_url": NOUSRESEARCH_DEFAULT_BASE_URL, "retry": dict(_RETRY_DEFAULTS)},
    "deepseek": {"base_url": DEEPSEEK_DEFAULT_BASE_URL, "retry": dict(_RETRY_DEFAULTS)},
}


ENV_FIELD_MAP = {
    "model": "MODEL",
    "api_key": "API_KEY",  # pragma: allowlist secret - env suffix name, not a secret
    "base_url": "BASE_URL",
}


_FILE_CACHE: Optional[Dict[str, Any]] = None
_DOTENV_LOADED = False


def _load_dotenv_once() -> None:
    """Lightweight .env loader (no external dependency).

    Parses KEY=VALUE lines, ignoring comments and blank lines. Safe to call
    multiple times. Overrides existing environment variables only if their
    current values appear to be placeholders (e.g., contain 'placeholder').
    """
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    path = os.getenv(DOTENV_FILE_ENV, ".env")
    if not os.path.isfile(path):
        _DOTENV_LOADED = True
        return
    try:
        with open(path, "r", encoding="utf-8") as fh:
            for line in fh:
                line = line.strip()
                if not line or line.startswith("#"):
                    continue
                if line.startswith("export "):
                    line = line[len("export "):]
                if "=" not in line:
                    continue
                k, v = line.split("=", 1)
                k = k.strip()
                v = v.strip().strip('"').strip("'")
                if k and (k not in os.environ or is_placeholder(os.environ.get(k))):
                    os.environ[k] = v
    finally:
        _DOTENV_LOADED = True


def _parse_config_text(text: str, path: Path) -> Any:
    try:
        return json.loads(text)
    except ValueError as json_err:
        if yaml is None:
            raise ConfigurationError(
                code=ErrorCode.CONFIGURATION,
                message=f"config file {path} is not valid JSON and PyYAML is not installed: {json_err}",
                provider="config",
            ) from json_err
    try:
        return yaml.safe_load(text) or {}
    except yaml.YAMLError as yaml_err:
        raise ConfigurationError(
            code=ErrorCode.CONFIGURATION,
            message=f"config file {path} is neither valid JSON nor YAML: {yaml_err}",
            provider="config",
        ) from yaml_err


def _load_external_config() -> Dict[str, Any]:
    """Load and cache the optional external config file.

    Raises:
        ConfigurationError: when the file exists but cannot be parsed or its
            top level is not a mapping.
    """
    global _FILE_CACHE
    if _FILE_CACHE is not None:
        return _FILE_CACHE
    path = os.getenv(CONFIG_FILE_ENV)
    if not path:
        _FILE_CACHE = {}
        return _FILE_CACHE
    p = Path(path).expanduser()
    if not p.exists():
        _FILE_CACHE = {}
        return _FILE_CACHE
    data = _parse_config_text(p.read_text(encoding="utf-8"), p)
    if not isinstance(data, dict):
        raise ConfigurationError(
            code=ErrorCode.CONFIGURATION,
            message=f"config file {p} must contain a mapping of provider sections",
            provider="config",
        )
    _FILE_CACHE = data
    return data


def _env_overrides(provider: str) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    prefix = provider.upper()
    for field, suffix in ENV_FIELD_MAP.items():
        val = os.getenv(f"{prefix}_{suffix}")
        if val:
            out[field] = val
    if "api_key" not in out:
        key, _ = resolve_provider_key(provider)
        if key:
            out["api_key"] = key
    return out


def _merge(cfg: Dict[str, Any], section: Dict[str, Any]) -> None:
    """Shallow merge, except nested ``retry`` mappings which merge key-wise."""
    for k, v in section.items():
        if k == "retry" and isinstance(v, dict) and isinstance(cfg.get("retry"), dict):
            cfg["retry"] = {**cfg["retry"], **v}
        else:
            cfg[k] = v


def get_provider_config(provider: str, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return merged configuration for a provider.

    Merge order (later wins): defaults -> external config -> env vars -> overrides
    """
    _load_dotenv_once()
    name = (provider or "").lower().strip()
    cfg: Dict[str, Any] = copy.deepcopy(DEFAULTS.get(name, {}))

    file_cfg = _load_external_config().get(name)
    if isinstance(file_cfg, dict):
        _merge(cfg, file_cfg)

    _merge(cfg, _env_overrides(name))

    if overrides:
        _merge(cfg, {k: v for k, v in overrides.items() if v is not None})

    return cfg


def get_model(provider: str) -> Optional[str]:
    return get_provider_config(provider).get("model")


def reset_config_cache() -> None:
    """Forget the cached config file and .env state (tests and reloads)."""
    global _FILE_CACHE, _DOTENV_LOADED
    _FILE_CACHE = None
    _DOTENV_LOADED = False


__all__ = [
    "get_provider_config",
    "get_model",
    "reset_config_cache",
    "DEFAULTS",
    "CONFIG_FILE_ENV",
]
