"""Provider interface protocols (one class per module)."""

from .has_default_model import HasDefaultModel
from .llm_provider import LLMProvider

__all__ = ["LLMProvider", "HasDefaultModel"]
