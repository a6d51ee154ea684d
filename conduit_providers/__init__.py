"""conduit_providers package

Uniform streaming interface over OpenAI-compatible LLM backends, with every
outbound call routed through one proxy- and certificate-aware transport.

Public API (re-exported):
    - Version: ``__version__``
    - Factory: :func:`create`, :class:`ProviderFactory`
    - Transport: :func:`init_transport`, :func:`get_transport`
    - Events: :class:`TextEvent`, :class:`ReasoningEvent`, :class:`UsageEvent`
    - Conversation input: :class:`Message`, :class:`ContentPart`
    - Exceptions: :class:`ProviderError` and its kind subclasses, :class:`ErrorCode`

Typical use::

    from conduit_providers import Message, create, init_transport

    init_transport()
    provider = create("nousresearch")
    for event in provider.create_message("You are helpful", [Message("user", "hi")]):
        ...
"""

from .base.dto import ProviderOptions
from .base.errors import (
    AuthenticationError,
    BackendError,
    ConfigurationError,
    ErrorCode,
    ProtocolError,
    ProviderError,
    TransportError,
)
from .base.factory import ProviderFactory, UnknownProviderError
from .base.http import TransportContext, get_transport, init_transport
from .base.interfaces import HasDefaultModel, LLMProvider
from .base.models import ContentPart, Message, ModelInfo, ResolvedModel
from .base.resilience.retry import RetryConfig, retry_stream
from .base.streaming import ReasoningEvent, StreamEvent, TextEvent, UsageEvent, summarize_events

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "create",
    "ProviderFactory",
    "UnknownProviderError",
    "ProviderOptions",
    "TransportContext",
    "init_transport",
    "get_transport",
    "LLMProvider",
    "HasDefaultModel",
    "Message",
    "ContentPart",
    "ModelInfo",
    "ResolvedModel",
    "TextEvent",
    "ReasoningEvent",
    "UsageEvent",
    "StreamEvent",
    "summarize_events",
    "RetryConfig",
    "retry_stream",
    "ErrorCode",
    "ProviderError",
    "ConfigurationError",
    "AuthenticationError",
    "TransportError",
    "BackendError",
    "ProtocolError",
]


def create(provider_name: str, **kwargs):
    """Instantiate a provider adapter via :class:`ProviderFactory`.

    Parameters
    ----------
    provider_name:
        Canonical provider name (``"nousresearch"`` or ``"deepseek"``).
    **kwargs:
        Forwarded to :meth:`ProviderFactory.create` (``options``,
        ``transport``, ``retry_config`` or config overrides such as
        ``api_key`` and ``model``).

    Raises
    ------
    UnknownProviderError
        For unknown providers or constructor argument errors.
    ConfigurationError
        When the provider configuration file cannot be parsed.
    """
    return ProviderFactory.create(provider_name, **kwargs)
