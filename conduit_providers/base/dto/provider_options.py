"""Typed options object for provider adapter construction.

Purpose
-------
Capture the values an adapter needs at construction time: the API key and an
optional model identifier. The base URL is fixed per provider and therefore
not part of the options. Instances are immutable once handed to an adapter.

External dependencies
---------------------
- Pydantic v2 ``BaseModel`` for validation and `.model_dump()` convenience.

Failure modes
-------------
- A missing API key is *not* a validation error here; adapters reject it with
  :class:`~conduit_providers.base.errors.AuthenticationError` before any
  network call so ``get_model()`` keeps working without credentials.
- Blank strings are normalized to ``None``.
"""
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProviderOptions(BaseModel):
    """Provider adapter construction options.

    Attributes
    ----------
    api_key:
        Credential string sent as a bearer token.
    model_id:
        Requested model identifier; unknown or absent identifiers resolve to
        the provider default via ``get_model()``.
    extra:
        Free-form provider-specific configuration bag (for example the
        ``retry`` section from the provider config).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    api_key: Optional[str] = Field(default=None, alias="apiKey", repr=False)
    model_id: Optional[str] = Field(default=None, alias="modelId")
    extra: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("api_key", "model_id", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value.strip() if isinstance(value, str) else value

    @classmethod
    def from_config(cls, cfg: Mapping[str, Any]) -> "ProviderOptions":
        """Build options from a merged provider config mapping."""
        extra = {k: v for k, v in cfg.items() if k not in {"api_key", "model"}}
        return cls(api_key=cfg.get("api_key"), model_id=cfg.get("model"), extra=extra)


__all__ = ["ProviderOptions"]
