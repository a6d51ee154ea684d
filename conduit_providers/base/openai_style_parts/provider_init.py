"""Initialization dataclass for OpenAI-style providers.

Encapsulates the fixed, per-provider facts used by ``BaseOpenAIStyleProvider``.
No I/O occurs here; this is a pure data container.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

from ..models import ModelInfo


@dataclass(frozen=True)
class _ProviderInit:
    """Initialization bundle for ``BaseOpenAIStyleProvider``.

    Attributes:
        provider_name: Canonical provider key (e.g., ``nousresearch``).
        display_name: Human-readable name used in error messages.
        base_url: Fixed OpenAI-compatible API base URL.
        default_model_id: Identifier ``get_model()`` falls back to; must be a
            key of ``models``.
        models: Static model mapping for this provider.
        logger_name: Structured logger name (e.g., ``providers.nousresearch``).
        temperature: Sampling temperature sent with every request.
    """

    provider_name: str
    display_name: str
    base_url: str
    default_model_id: str
    models: Mapping[str, ModelInfo]
    logger_name: str
    temperature: Optional[float] = 0

    def __post_init__(self) -> None:
        if self.default_model_id not in self.models:
            raise ValueError(f"default model {self.default_model_id!r} missing from {self.provider_name} model mapping")


__all__ = ["_ProviderInit"]
