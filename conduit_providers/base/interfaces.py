"""
Provider interface public surface.

Re-exports the one-class-per-file protocols under
``conduit_providers.base.interfaces_parts``.
"""

from .interfaces_parts.has_default_model import HasDefaultModel
from .interfaces_parts.llm_provider import LLMProvider

__all__ = ["LLMProvider", "HasDefaultModel"]
