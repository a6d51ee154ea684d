"""DeepseekProvider adapter using the OpenAI-compatible Chat Completions API.

Shares streaming, retry and logging with ``BaseOpenAIStyleProvider`` and only
overrides usage translation: Deepseek reports prompt cache hits as a
top-level ``prompt_cache_hit_tokens`` field.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Optional

from ..base.http import TransportContext
from ..base.openai_style_parts import BaseOpenAIStyleProvider, _ProviderInit
from ..base.openai_style_parts.style_helpers import translate_usage
from ..base.resilience.retry import RetryConfig
from ..base.streaming import UsageEvent
from ..config.defaults import DEEPSEEK_DEFAULT_BASE_URL
from .models import DEEPSEEK_DEFAULT_MODEL, DEEPSEEK_MODELS

_INIT = _ProviderInit(
    provider_name="deepseek",
    display_name="Deepseek",
    base_url=DEEPSEEK_DEFAULT_BASE_URL,
    default_model_id=DEEPSEEK_DEFAULT_MODEL,
    models=DEEPSEEK_MODELS,
    logger_name="providers.deepseek",
)


def _int_field(usage: Any, name: str) -> Optional[int]:
    value = usage.get(name) if isinstance(usage, dict) else getattr(usage, name, None)
    if value is None and not isinstance(usage, dict):
        extra = getattr(usage, "model_extra", None) or {}
        value = extra.get(name)
    return value if isinstance(value, int) and not isinstance(value, bool) else None


class DeepseekProvider(BaseOpenAIStyleProvider):
    """Deepseek provider built on the OpenAI-style base class."""

    def __init__(
        self,
        options=None,
        *,
        api_key: Optional[str] = None,
        model_id: Optional[str] = None,
        transport: Optional[TransportContext] = None,
        retry_config: Optional[RetryConfig] = None,
    ) -> None:
        super().__init__(
            _INIT,
            options,
            api_key=api_key,
            model_id=model_id,
            transport=transport,
            retry_config=retry_config,
        )

    def _translate_usage(self, usage: Any) -> UsageEvent:
        """Report ``prompt_cache_hit_tokens`` as cache reads."""
        event = translate_usage(usage)
        hit = _int_field(usage, "prompt_cache_hit_tokens")
        if not hit:
            return event
        return replace(event, cache_read_tokens=hit)
