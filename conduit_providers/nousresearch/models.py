"""Static model mapping for the NousResearch inference API.

Entries are looked up by ``NousResearchProvider.get_model()`` and never
mutated at runtime. Prices are USD per million tokens.
"""

from __future__ import annotations

from typing import Dict

from ..base.models import ModelInfo

NOUSRESEARCH_DEFAULT_MODEL = "Hermes-4-405B"

NOUSRESEARCH_MODELS: Dict[str, ModelInfo] = {
    "Hermes-4-405B": ModelInfo(
        max_tokens=8192,
        context_window=128_000,
        supports_images=False,
        supports_prompt_cache=False,
        input_price=0.09,
        output_price=0.37,
        description="Hermes 4 405B, the frontier hybrid-reasoning model built on Llama 3.1 405B.",
    ),
    "Hermes-4-70B": ModelInfo(
        max_tokens=8192,
        context_window=128_000,
        supports_images=False,
        supports_prompt_cache=False,
        input_price=0.05,
        output_price=0.2,
        description="Hermes 4 70B, a hybrid-reasoning model built on Llama 3.1 70B.",
    ),
}

__all__ = ["NOUSRESEARCH_DEFAULT_MODEL", "NOUSRESEARCH_MODELS"]
