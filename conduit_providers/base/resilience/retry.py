"""Retry policy for streaming provider calls.

``retry_stream`` composes explicitly around a zero-argument callable that
returns an iterator of events::

    events = retry_stream(lambda: adapter_raw_call(), config)

Policy:
- Only errors whose code is in ``retryable_codes`` are retried.
- A call is retried only while it has emitted nothing. Once the first event
  has been handed to the caller, any failure is terminal and propagates, so
  output is never duplicated or interleaved.
- Exponential backoff ``min(delay_base * 2**attempt, max_delay)``; a
  ``retry_after`` advertised by the backend replaces the computed delay
  (still capped at ``max_delay``).
- The final error carries ``attempts``.
"""
from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, Optional, Protocol, TypeVar

from ..errors import TRANSIENT_CODES, ErrorCode, ProviderError, wrap_exception

T = TypeVar("T")


class AttemptLogger(Protocol):  # pragma: no cover - structural protocol
    def __call__(
        self,
        *,
        attempt: int,
        max_attempts: int,
        delay: float | None,
        error: ProviderError | None,
    ) -> None: ...


@dataclass(frozen=True)
class RetryConfig:
    max_attempts: int = 3
    delay_base: float = 1.0
    max_delay: float = 10.0
    retryable_codes: tuple[ErrorCode, ...] = TRANSIENT_CODES
    attempt_logger: AttemptLogger | None = None

    def delays(self) -> Iterable[float]:
        for attempt in range(self.max_attempts - 1):
            yield min(self.delay_base * (2**attempt), self.max_delay)

    def delay_for(self, computed: float, error: ProviderError) -> float:
        if error.retry_after is not None:
            return min(error.retry_after, self.max_delay)
        return computed


DEFAULT_RETRY_CONFIG = RetryConfig()


def _close(stream: object) -> None:
    close = getattr(stream, "close", None)
    if callable(close):
        close()


def retry_stream(
    call: Callable[[], Iterable[T]],
    config: RetryConfig = DEFAULT_RETRY_CONFIG,
    *,
    provider: str = "unknown",
    model: Optional[str] = None,
) -> Iterator[T]:
    """Lazily run ``call`` with retries and yield its items.

    Nothing happens until the first ``next()``. Non-``ProviderError``
    exceptions are normalized with :func:`wrap_exception` (using ``provider``
    and ``model``) before classification. The inner iterator is closed on
    every exit path, including the caller abandoning the stream early.
    """
    schedule = list(config.delays()) + [None]  # final attempt has delay None
    for attempt, delay in enumerate(schedule):
        emitted = False
        stream: Optional[Iterable[T]] = None
        try:
            stream = call()
            for item in stream:
                emitted = True
                yield item
        except Exception as exc:
            err = wrap_exception(exc, provider=provider, model=model)
            err.attempts = attempt + 1
            will_retry = (not emitted) and delay is not None and err.code in config.retryable_codes
            wait = config.delay_for(delay, err) if will_retry else None
            if config.attempt_logger:
                config.attempt_logger(
                    attempt=attempt,
                    max_attempts=config.max_attempts,
                    delay=wait,
                    error=err,
                )
            if not will_retry:
                if err is exc:
                    raise
                raise err from exc
            time.sleep(wait)
            continue
        finally:
            if stream is not None:
                _close(stream)
        if config.attempt_logger:
            config.attempt_logger(
                attempt=attempt,
                max_attempts=config.max_attempts,
                delay=None,
                error=None,
            )
        return


__all__ = [
    "AttemptLogger",
    "RetryConfig",
    "DEFAULT_RETRY_CONFIG",
    "retry_stream",
]
