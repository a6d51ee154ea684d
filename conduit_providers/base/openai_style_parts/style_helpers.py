"""
Helper utilities for OpenAI-style Chat Completions providers.

Purpose:
- Translate conversation history into OpenAI ``messages``.
- Assemble streaming request parameters.
- Translate streamed chunks into normalized stream events.

External dependencies:
- None at runtime; chunks may be SDK objects (attribute access) or plain
  mappings decoded from JSON, both are accepted.

Failure semantics:
- ``translate_openai_chunk`` raises :class:`MalformedChunkError` for chunk
  shapes it cannot interpret. Callers decide whether to skip or abort.
"""

from __future__ import annotations

import json
from dataclasses import replace
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..models import ContentPart, Message, ModelInfo
from ..streaming import ReasoningEvent, StreamEvent, TextEvent, UsageEvent


class MalformedChunkError(ValueError):
    """A streamed chunk did not have the OpenAI chunk shape."""


_MISSING = object()


def _field(obj: Any, name: str, default: Any = None) -> Any:
    """Read ``name`` from a mapping or an attribute-style object."""
    if obj is None:
        return default
    if isinstance(obj, Mapping):
        return obj.get(name, default)
    value = getattr(obj, name, _MISSING)
    if value is _MISSING:
        extra = getattr(obj, "model_extra", None)
        if isinstance(extra, Mapping):
            return extra.get(name, default)
        return default
    return value


# ----- outbound -----


def _image_url(part: ContentPart) -> Dict[str, Any]:
    data = part.data or {}
    if url := data.get("url"):
        return {"type": "image_url", "image_url": {"url": url}}
    media_type = data.get("media_type", "image/png")
    return {"type": "image_url", "image_url": {"url": f"data:{media_type};base64,{data.get('data', '')}"}}


def _tool_result_text(content: Any) -> str:
    if content is None:
        return ""
    if isinstance(content, str):
        return content
    if isinstance(content, Sequence):
        texts = []
        for item in content:
            if isinstance(item, ContentPart):
                texts.append(item.text or "")
            elif isinstance(item, Mapping) and item.get("type") == "text":
                texts.append(str(item.get("text", "")))
        return "\n".join(texts)
    return str(content)


def _convert_user(parts: List[ContentPart]) -> List[Dict[str, Any]]:
    """Tool results become ``tool`` messages placed before the user's own parts."""
    out: List[Dict[str, Any]] = []
    rest: List[Dict[str, Any]] = []
    for part in parts:
        if part.type == "tool_result":
            data = part.data or {}
            out.append(
                {
                    "role": "tool",
                    "tool_call_id": data.get("tool_use_id", ""),
                    "content": _tool_result_text(data.get("content")),
                }
            )
        elif part.type == "image":
            rest.append(_image_url(part))
        elif part.type == "text":
            rest.append({"type": "text", "text": part.text or ""})
    if rest:
        out.append({"role": "user", "content": rest})
    return out


def _convert_assistant(parts: List[ContentPart]) -> Dict[str, Any]:
    texts = [p.text or "" for p in parts if p.type == "text"]
    tool_calls = []
    for p in parts:
        if p.type != "tool_use":
            continue
        data = p.data or {}
        tool_calls.append(
            {
                "id": data.get("id", ""),
                "type": "function",
                "function": {"name": data.get("name", ""), "arguments": json.dumps(data.get("input", {}))},
            }
        )
    msg: Dict[str, Any] = {"role": "assistant", "content": "\n".join(texts) if texts else None}
    if tool_calls:
        msg["tool_calls"] = tool_calls
    return msg


def convert_to_openai_messages(history: Sequence[Message]) -> List[Dict[str, Any]]:
    """Translate conversation history into OpenAI chat ``messages``.

    Plain-string content passes through unchanged. Structured user content
    yields ``tool`` messages for tool results followed by one user message with
    text/image parts; structured assistant content yields one message with the
    joined text and any ``tool_calls``.
    """
    out: List[Dict[str, Any]] = []
    for msg in history:
        if isinstance(msg.content, str):
            out.append({"role": msg.role, "content": msg.content})
        elif msg.role == "assistant":
            out.append(_convert_assistant(msg.content))
        else:
            out.extend(_convert_user(msg.content))
    return out


def build_stream_params(model: str, messages: List[Dict[str, Any]], temperature: Optional[float]) -> Dict[str, Any]:
    """Assemble parameters for a streaming chat completion with usage reporting."""
    params: Dict[str, Any] = {
        "model": model,
        "messages": messages,
        "stream": True,
        "stream_options": {"include_usage": True},
    }
    if temperature is not None:
        params["temperature"] = temperature
    return params


# ----- inbound -----


def _optional_text(value: Any, name: str) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    raise MalformedChunkError(f"{name} is {type(value).__name__}, expected string")


def _token_count(usage: Any, name: str) -> int:
    value = _field(usage, name)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedChunkError(f"usage.{name} is {type(value).__name__}, expected int")
    return value


def translate_usage(usage: Any) -> UsageEvent:
    """Build a :class:`UsageEvent`; absent counts default to 0."""
    details = _field(usage, "prompt_tokens_details")
    cached = _field(details, "cached_tokens")
    return UsageEvent(
        input_tokens=_token_count(usage, "prompt_tokens"),
        output_tokens=_token_count(usage, "completion_tokens"),
        cache_read_tokens=cached if isinstance(cached, int) and cached else None,
    )


def price_usage(event: UsageEvent, info: Optional[ModelInfo]) -> UsageEvent:
    """Return ``event`` with ``total_cost`` filled from the model's prices.

    Cached input tokens are billed at ``cache_read_price`` when the model lists
    one. Events are returned unchanged when input or output prices are unknown.
    """
    if info is None or info.input_price is None or info.output_price is None:
        return event
    cache_price = info.cache_read_price
    cached = (event.cache_read_tokens or 0) if cache_price is not None else 0
    uncached = max(event.input_tokens - cached, 0)
    cost = uncached * info.input_price + cached * (cache_price or 0.0) + event.output_tokens * info.output_price
    return replace(event, total_cost=cost / 1_000_000)


def translate_openai_chunk(chunk: Any, usage_translator=translate_usage) -> List[StreamEvent]:
    """Translate one streamed chunk into zero or more events.

    Order within a chunk: text, reasoning, usage. Empty deltas produce nothing.

    Raises:
        MalformedChunkError: when ``choices``/``delta``/``usage`` have an
            unexpected shape.
    """
    if chunk is None or isinstance(chunk, (str, bytes, int, float, list)):
        raise MalformedChunkError(f"chunk is {type(chunk).__name__}, expected object")
    events: List[StreamEvent] = []
    choices = _field(chunk, "choices")
    if choices is not None and (not isinstance(choices, Sequence) or isinstance(choices, (str, bytes))):
        raise MalformedChunkError(f"choices is {type(choices).__name__}, expected list")
    delta = _field(choices[0], "delta") if choices else None
    if delta is not None and isinstance(delta, (str, bytes, int, float, list)):
        raise MalformedChunkError(f"delta is {type(delta).__name__}, expected object")
    if delta is not None:
        content = _optional_text(_field(delta, "content"), "delta.content")
        if content:
            events.append(TextEvent(content))
        reasoning = _optional_text(_field(delta, "reasoning_content"), "delta.reasoning_content")
        if reasoning:
            events.append(ReasoningEvent(reasoning))
    usage = _field(chunk, "usage")
    if usage is not None:
        if isinstance(usage, (str, bytes, int, float, list)):
            raise MalformedChunkError(f"usage is {type(usage).__name__}, expected object")
        events.append(usage_translator(usage))
    return events


__all__ = [
    "MalformedChunkError",
    "convert_to_openai_messages",
    "build_stream_params",
    "translate_usage",
    "price_usage",
    "translate_openai_chunk",
]
