"""NousResearchProvider adapter using the OpenAI-compatible Chat Completions API.

All streaming, retry and logging behavior is inherited from
``BaseOpenAIStyleProvider``; this module only pins the NousResearch base URL,
the static model mapping and the provider name.
"""

from __future__ import annotations

from typing import Optional

from ..base.http import TransportContext
from ..base.openai_style_parts import BaseOpenAIStyleProvider, _ProviderInit
from ..base.resilience.retry import RetryConfig
from ..config.defaults import NOUSRESEARCH_DEFAULT_BASE_URL
from .models import NOUSRESEARCH_DEFAULT_MODEL, NOUSRESEARCH_MODELS

_INIT = _ProviderInit(
    provider_name="nousresearch",
    display_name="NousResearch",
    base_url=NOUSRESEARCH_DEFAULT_BASE_URL,
    default_model_id=NOUSRESEARCH_DEFAULT_MODEL,
    models=NOUSRESEARCH_MODELS,
    logger_name="providers.nousresearch",
)


class NousResearchProvider(BaseOpenAIStyleProvider):
    """NousResearch (Hermes models) provider built on the OpenAI-style base class."""

    def __init__(
        self,
        options=None,
        *,
        api_key: Optional[str] = None,
        model_id: Optional[str] = None,
        transport: Optional[TransportContext] = None,
        retry_config: Optional[RetryConfig] = None,
    ) -> None:
        """Initialize the provider.

        Args:
            options: ``ProviderOptions`` or ``{"apiKey": ..., "modelId": ...}``.
            api_key: API key when ``options`` is omitted.
            model_id: Requested model; unknown ids fall back to ``Hermes-4-405B``.
            transport: Explicit transport; defaults to the process-wide one.
            retry_config: Explicit retry policy.
        """
        super().__init__(
            _INIT,
            options,
            api_key=api_key,
            model_id=model_id,
            transport=transport,
            retry_config=retry_config,
        )
