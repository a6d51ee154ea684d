"""Finalize stream helper.

Located within the streaming package to localize normalized logging of the
per-call metrics once a stream ends, whichever way it ends.
"""
from __future__ import annotations

import logging
from typing import Optional

from ..errors import ProviderError
from ..logging import LogContext, normalized_log_event
from .streaming_metrics import StreamMetrics


def finalize_stream(
    *,
    logger: logging.Logger,
    ctx: LogContext,
    metrics: StreamMetrics,
    error: Optional[BaseException] = None,
    cancelled: bool = False,
) -> None:
    """Stamp the duration on ``metrics`` and emit one ``stream.finalize`` event."""
    metrics.finish()
    error_code: Optional[str] = None
    if isinstance(error, ProviderError):
        error_code = error.code.value
    elif error is not None:
        error_code = "unknown"
    if error is not None:
        outcome = "error"
    elif cancelled:
        outcome = "cancelled"
    else:
        outcome = "completed"
    normalized_log_event(
        logger,
        "stream.finalize",
        ctx,
        phase="finalize",
        emitted=metrics.emitted,
        tokens=metrics.tokens(),
        error_code=error_code,
        level=logging.WARNING if error is not None else logging.INFO,
        outcome=outcome,
        text_events=metrics.text_events,
        reasoning_events=metrics.reasoning_events,
        malformed_chunks=metrics.malformed_chunks or None,
        time_to_first_event_ms=metrics.time_to_first_event_ms,
        total_duration_ms=metrics.total_duration_ms,
        error=str(error) if error is not None else None,
    )


__all__ = ["finalize_stream"]
