"""
ModelInfo DTO describing a provider model.

Entries live in static per-provider mappings and are looked up, never
mutated at runtime.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ModelInfo:
    """Descriptive metadata for a single model.

    Attributes:
        max_tokens: Maximum completion tokens the model will produce.
        context_window: Maximum context window size in tokens.
        supports_images: Whether image parts may be sent.
        supports_prompt_cache: Whether the backend offers prompt caching.
        input_price / output_price: USD per million tokens.
        cache_read_price: USD per million cached input tokens, when the
            backend discounts prompt cache hits.
        description: Human-friendly summary.
        capabilities: Opaque map of further capability flags.
    """

    max_tokens: Optional[int] = None
    context_window: Optional[int] = None
    supports_images: bool = False
    supports_prompt_cache: bool = False
    input_price: Optional[float] = None
    output_price: Optional[float] = None
    cache_read_price: Optional[float] = None
    description: Optional[str] = None
    capabilities: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation of the entry."""
        return asdict(self)


@dataclass(frozen=True)
class ResolvedModel:
    """Result of ``get_model()``: a known identifier and its metadata."""

    id: str
    info: ModelInfo

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "info": self.info.to_dict()}


__all__ = [
    "ModelInfo",
    "ResolvedModel",
]
