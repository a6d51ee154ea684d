"""Static model mapping for the Deepseek API.

Prices are USD per million tokens; ``input_price`` is the cache-miss rate.
"""

from __future__ import annotations

from typing import Dict

from ..base.models import ModelInfo

DEEPSEEK_DEFAULT_MODEL = "deepseek-chat"

DEEPSEEK_MODELS: Dict[str, ModelInfo] = {
    "deepseek-chat": ModelInfo(
        max_tokens=8_000,
        context_window=128_000,
        supports_images=False,
        supports_prompt_cache=True,
        input_price=0.56,
        output_price=1.68,
        cache_read_price=0.07,
        description="DeepSeek-V3 chat model (non-thinking mode).",
    ),
    "deepseek-reasoner": ModelInfo(
        max_tokens=64_000,
        context_window=128_000,
        supports_images=False,
        supports_prompt_cache=True,
        input_price=0.56,
        output_price=1.68,
        cache_read_price=0.07,
        description="DeepSeek reasoning model; streams reasoning_content ahead of the answer.",
        capabilities={"reasoning": True},
    ),
}

__all__ = ["DEEPSEEK_DEFAULT_MODEL", "DEEPSEEK_MODELS"]
