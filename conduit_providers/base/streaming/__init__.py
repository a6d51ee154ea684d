"""Streaming package for provider layer.

Exposes the normalized event vocabulary, per-call metrics and the finalize
helper under a single namespace.
"""

from .streaming import (
    ReasoningEvent,
    StreamEvent,
    StreamSummary,
    TextEvent,
    UsageEvent,
    summarize_events,
)
from .streaming_metrics import StreamMetrics
from .streaming_finalize import finalize_stream

__all__ = [
    "TextEvent",
    "ReasoningEvent",
    "UsageEvent",
    "StreamEvent",
    "StreamSummary",
    "summarize_events",
    "StreamMetrics",
    "finalize_stream",
]
