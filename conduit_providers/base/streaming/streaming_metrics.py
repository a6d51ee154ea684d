"""Streaming metrics data structures.

Isolated within the streaming package to keep orchestration code small and cohesive.
"""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .streaming import ReasoningEvent, StreamEvent, TextEvent, UsageEvent


@dataclass
class StreamMetrics:
    """Collected metrics for a single ``create_message`` invocation.

    Attributes:
        emitted: Number of events handed to the caller.
        text_events / reasoning_events: Per-kind counts.
        input_tokens / output_tokens: Last usage report seen, if any.
        malformed_chunks: Chunks skipped because of an unexpected shape.
        time_to_first_event_ms: Latency until the first emitted event.
        total_duration_ms: Wall time from request start to finalize.
    """

    emitted: int = 0
    text_events: int = 0
    reasoning_events: int = 0
    input_tokens: Optional[int] = None
    output_tokens: Optional[int] = None
    malformed_chunks: int = 0
    time_to_first_event_ms: Optional[float] = None
    total_duration_ms: Optional[float] = None
    started_at: float = field(default_factory=time.perf_counter, repr=False)

    def record(self, event: StreamEvent) -> None:
        """Account for an event that is about to be yielded."""
        if self.emitted == 0:
            self.time_to_first_event_ms = (time.perf_counter() - self.started_at) * 1000.0
        self.emitted += 1
        if isinstance(event, TextEvent):
            self.text_events += 1
        elif isinstance(event, ReasoningEvent):
            self.reasoning_events += 1
        elif isinstance(event, UsageEvent):
            self.input_tokens = event.input_tokens
            self.output_tokens = event.output_tokens

    def finish(self) -> None:
        self.total_duration_ms = (time.perf_counter() - self.started_at) * 1000.0

    def tokens(self) -> Optional[Dict[str, Any]]:
        if self.input_tokens is None and self.output_tokens is None:
            return None
        return {"input": self.input_tokens, "output": self.output_tokens}


__all__ = ["StreamMetrics"]
