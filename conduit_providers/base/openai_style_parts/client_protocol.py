"""Protocol definition for OpenAI-style chat completions clients.

Purpose:
- Describe the minimal client surface required by ``BaseOpenAIStyleProvider``
  without tying the base class to a concrete SDK implementation, so tests and
  alternative SDKs can supply any object with this shape.

External dependencies:
- None (typing only).
"""

from __future__ import annotations

from typing import Any, Iterable, Protocol


class _ChatCompletionsClient(Protocol):
    """Protocol describing an OpenAI-compatible chat completions client.

    Implementations expose ``chat.completions.create(**params)`` returning,
    for ``stream=True``, an iterable of chunks with
    ``choices[0].delta.content`` and an optional ``usage``; and ``close()``
    releasing the underlying connection pool.
    """

    class _ChatNS(Protocol):  # pragma: no cover - structural hint only
        class _CompletionsNS(Protocol):
            def create(self, **params: Any) -> Iterable[Any]:  # noqa: D401 - SDK parity
                """Start a chat completion request."""
                ...

        completions: _CompletionsNS

    chat: _ChatNS

    def close(self) -> None: ...


__all__ = ["_ChatCompletionsClient"]
