"""
Providers Base Package

Exports provider-agnostic contracts, DTOs, the event vocabulary and the
provider factory for use within the providers layer.

Layout:
- Interfaces: normalized provider boundaries
- Models (DTOs): conversation input and static model metadata
- Streaming: normalized text/reasoning/usage events
- Factory: lazy creation of provider adapters by canonical name
"""

from .dto import ProviderOptions
from .errors import (
    AuthenticationError,
    BackendError,
    ConfigurationError,
    ErrorCode,
    ProtocolError,
    ProviderError,
    TransportError,
)
from .factory import ProviderFactory, UnknownProviderError
from .interfaces import HasDefaultModel, LLMProvider
from .models import (
    ContentPart,
    ContentPartType,
    ConversationInput,
    Message,
    ModelInfo,
    ResolvedModel,
    Role,
)
from .streaming import (
    ReasoningEvent,
    StreamEvent,
    StreamMetrics,
    StreamSummary,
    TextEvent,
    UsageEvent,
    finalize_stream,
    summarize_events,
)

__all__ = [
    # Models
    "Role",
    "ContentPartType",
    "ContentPart",
    "Message",
    "ConversationInput",
    "ModelInfo",
    "ResolvedModel",
    "ProviderOptions",
    # Errors
    "ErrorCode",
    "ProviderError",
    "ConfigurationError",
    "AuthenticationError",
    "TransportError",
    "BackendError",
    "ProtocolError",
    # Interfaces
    "LLMProvider",
    "HasDefaultModel",
    # Factory
    "ProviderFactory",
    "UnknownProviderError",
    # Streaming
    "TextEvent",
    "ReasoningEvent",
    "UsageEvent",
    "StreamEvent",
    "StreamSummary",
    "summarize_events",
    "StreamMetrics",
    "finalize_stream",
]
