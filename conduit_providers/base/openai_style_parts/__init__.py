"""Split modules for OpenAI-style provider base abstractions.

One class per file; re-exports provide a stable import surface.
"""

from .base import BaseOpenAIStyleProvider
from .client_protocol import _ChatCompletionsClient
from .provider_init import _ProviderInit
from .style_helpers import (
    MalformedChunkError,
    build_stream_params,
    convert_to_openai_messages,
    price_usage,
    translate_openai_chunk,
    translate_usage,
)

__all__ = [
    "BaseOpenAIStyleProvider",
    "_ChatCompletionsClient",
    "_ProviderInit",
    "MalformedChunkError",
    "build_stream_params",
    "convert_to_openai_messages",
    "price_usage",
    "translate_openai_chunk",
    "translate_usage",
]
