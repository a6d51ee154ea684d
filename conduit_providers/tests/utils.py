"""Shared testing utilities: a scripted OpenAI-compatible backend.

Exports:
    - sse_body / sse_response: encode chunks as a server-sent-event stream.
    - delta_chunk / usage_chunk: build chat.completion.chunk payloads.
    - FakeBackend: records requests and replays canned responses.
    - MockTransportContext: native-mode transport routed to a FakeBackend.
"""
from __future__ import annotations

import json
from typing import Any, Callable, Dict, Iterable, List, Optional

import httpx

from conduit_providers.base.http import MODE_NATIVE, TransportContext


def sse_body(chunks: Iterable[Any], *, done: bool = True) -> bytes:
    """Encode ``chunks`` as a server-sent-event stream of ``data:`` lines."""
    lines = []
    for chunk in chunks:
        data = chunk if isinstance(chunk, str) else json.dumps(chunk)
        lines.append(f"data: {data}\n\n")
    if done:
        lines.append("data: [DONE]\n\n")
    return "".join(lines).encode("utf-8")


def delta_chunk(content: Optional[str] = None, reasoning: Optional[str] = None) -> Dict[str, Any]:
    delta: Dict[str, Any] = {}
    if content is not None:
        delta["content"] = content
    if reasoning is not None:
        delta["reasoning_content"] = reasoning
    return {
        "id": "chatcmpl-1",
        "object": "chat.completion.chunk",
        "created": 0,
        "model": "m",
        "choices": [{"index": 0, "delta": delta, "finish_reason": None}],
    }


def usage_chunk(prompt_tokens: int, completion_tokens: int, **extra: Any) -> Dict[str, Any]:
    usage = {
        "prompt_tokens": prompt_tokens,
        "completion_tokens": completion_tokens,
        "total_tokens": prompt_tokens + completion_tokens,
        **extra,
    }
    return {
        "id": "chatcmpl-1",
        "object": "chat.completion.chunk",
        "created": 0,
        "model": "m",
        "choices": [],
        "usage": usage,
    }


class FakeBackend:
    """Records requests and answers each with the next canned response.

    Responses are ``httpx.Response`` objects or callables taking the request;
    a request beyond the scripted ones fails the test.
    """

    def __init__(self, *responses: Callable[[httpx.Request], httpx.Response] | httpx.Response) -> None:
        self._responses = list(responses)
        self.requests: List[httpx.Request] = []

    @property
    def calls(self) -> int:
        return len(self.requests)

    def bodies(self) -> List[Dict[str, Any]]:
        return [json.loads(r.content) for r in self.requests]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._responses:
            raise AssertionError(f"unexpected request #{self.calls} to {request.url}")
        nxt = self._responses.pop(0)
        return nxt(request) if callable(nxt) else nxt


def sse_response(chunks: Iterable[Any], **kwargs: Any) -> httpx.Response:
    return httpx.Response(
        200,
        headers={"content-type": "text/event-stream"},
        content=sse_body(chunks, **kwargs),
    )


class MockTransportContext(TransportContext):
    """Native-mode transport whose clients talk to a :class:`FakeBackend`."""

    def __init__(self, backend: FakeBackend) -> None:
        super().__init__(mode=MODE_NATIVE)
        self.backend = backend
        self.clients_created = 0

    def create_client(self, **extra: Any) -> httpx.Client:
        self.clients_created += 1
        return super().create_client(transport=httpx.MockTransport(self.backend.handler), **extra)
