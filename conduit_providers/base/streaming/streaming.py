"""Normalized stream event vocabulary shared by every provider adapter.

Adapters translate vendor chunks into exactly three event kinds:

- :class:`TextEvent`: an incremental answer-text delta.
- :class:`ReasoningEvent`: an incremental delta on a distinct "thinking"
  channel, only when the backend has one.
- :class:`UsageEvent`: token counts reported by the backend.

Events are emitted in backend order and never for an empty delta. They are
call-scoped values; nothing here holds provider state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Literal, Optional, Union


@dataclass(frozen=True)
class TextEvent:
    """Incremental text delta (only the newly produced fragment)."""

    content: str
    type: Literal["text"] = field(default="text", init=False)


@dataclass(frozen=True)
class ReasoningEvent:
    """Incremental reasoning delta from a backend's separate thinking channel."""

    content: str
    type: Literal["reasoning"] = field(default="reasoning", init=False)


@dataclass(frozen=True)
class UsageEvent:
    """Token usage reported on a chunk.

    ``cache_read_tokens`` is filled only by backends that report cache hits.
    ``total_cost`` is USD, priced from the model's static entry when it lists
    prices.
    """

    input_tokens: int = 0
    output_tokens: int = 0
    cache_read_tokens: Optional[int] = None
    total_cost: Optional[float] = None
    type: Literal["usage"] = field(default="usage", init=False)

    def to_dict(self) -> dict:
        out = {"input_tokens": self.input_tokens, "output_tokens": self.output_tokens}
        for name in ("cache_read_tokens", "total_cost"):
            value = getattr(self, name)
            if value is not None:
                out[name] = value
        return out


StreamEvent = Union[TextEvent, ReasoningEvent, UsageEvent]


@dataclass
class StreamSummary:
    """Aggregate view over a consumed event sequence."""

    text: str = ""
    reasoning: str = ""
    input_tokens: int = 0
    output_tokens: int = 0
    total_cost: Optional[float] = None
    events: int = 0
    usage_reports: List[UsageEvent] = field(default_factory=list)


def summarize_events(events: Iterable[StreamEvent]) -> StreamSummary:
    """Consume ``events`` and accumulate them into a :class:`StreamSummary`.

    Text and reasoning deltas are concatenated in order. Usage totals take the
    most recent report, since backends report cumulative counts.
    """
    text_parts: List[str] = []
    reasoning_parts: List[str] = []
    summary = StreamSummary()
    for ev in events:
        summary.events += 1
        if isinstance(ev, TextEvent):
            text_parts.append(ev.content)
        elif isinstance(ev, ReasoningEvent):
            reasoning_parts.append(ev.content)
        elif isinstance(ev, UsageEvent):
            summary.usage_reports.append(ev)
            summary.input_tokens = ev.input_tokens
            summary.output_tokens = ev.output_tokens
            summary.total_cost = ev.total_cost
    summary.text = "".join(text_parts)
    summary.reasoning = "".join(reasoning_parts)
    return summary


__all__ = [
    "TextEvent",
    "ReasoningEvent",
    "UsageEvent",
    "StreamEvent",
    "StreamSummary",
    "summarize_events",
]
