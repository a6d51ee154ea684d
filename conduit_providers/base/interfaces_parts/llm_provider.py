"""LLMProvider Protocol (single-class module).

Defines the streaming contract every provider adapter satisfies.
"""

from __future__ import annotations

from typing import Iterator, Protocol, runtime_checkable

from ..models import ConversationInput, ResolvedModel
from ..streaming import StreamEvent


@runtime_checkable
class LLMProvider(Protocol):
    """Minimal interface for Large Language Model providers.

    Implementations translate conversation history into their wire format and
    inbound deltas into :data:`StreamEvent` values, never leaking SDK objects
    upstream. New backends are added by implementing this protocol.
    """

    @property
    def provider_name(self) -> str:
        """Canonical provider identifier, e.g., ``"nousresearch"``."""
        ...

    def create_message(self, system_prompt: str, history: ConversationInput) -> Iterator[StreamEvent]:
        """Start a new backend request and lazily yield its events.

        Errors propagate as :class:`~conduit_providers.base.errors.ProviderError`
        subclasses once any retries are exhausted; a failed request never looks
        like an empty successful stream.
        """
        ...

    def get_model(self) -> ResolvedModel:
        """Return the configured model when known, else the provider default."""
        ...
