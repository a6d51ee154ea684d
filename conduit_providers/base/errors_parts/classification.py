"""
Error classification helpers mapping exceptions to normalized ErrorCode values.

Implements HTTP status extraction, status-to-code mapping, transport failure
detection for ``httpx`` and the OpenAI SDK, and legacy message-based
heuristics as a fallback to maintain compatibility with various provider SDKs.
"""
from __future__ import annotations

import asyncio
import time
from email.utils import parsedate_to_datetime
from typing import Dict, Iterator, Optional

import httpx
import openai

from .error_code import ErrorCode, TRANSIENT_CODES
from .provider_error import (
    BackendError,
    ProviderError,
    TransportError,
)


def _extract_status(exc: BaseException) -> Optional[int]:
    """Attempt to extract an HTTP status code from a provider exception.

    Supported attribute shapes (checked in order):
    - ``exc.status_code``
    - ``exc.status``
    - ``exc.response.status_code``
    Returns ``None`` if no valid status can be found.
    """
    for attr in ("status_code", "status"):
        val = getattr(exc, attr, None)
        if isinstance(val, int) and 100 <= val < 600:
            return val
    # httpx raises on touching ``.response`` of a request-level error
    if isinstance(exc, httpx.RequestError):
        return None
    resp = getattr(exc, "response", None)
    if resp is not None:
        sc = getattr(resp, "status_code", None)
        if isinstance(sc, int) and 100 <= sc < 600:
            return sc
    return None


_HTTP_STATUS_MAP: Dict[int, ErrorCode] = {
    400: ErrorCode.VALIDATION,
    401: ErrorCode.AUTH,
    403: ErrorCode.AUTH,
    404: ErrorCode.NOT_FOUND,
    408: ErrorCode.TIMEOUT,
    409: ErrorCode.CONFLICT,
    422: ErrorCode.VALIDATION,
    429: ErrorCode.RATE_LIMIT,
    500: ErrorCode.SERVER_ERROR,
    502: ErrorCode.TRANSIENT,
    503: ErrorCode.UNAVAILABLE,
    504: ErrorCode.TIMEOUT,
}


def _status_to_code(status: int) -> Optional[ErrorCode]:
    if status in _HTTP_STATUS_MAP:
        return _HTTP_STATUS_MAP[status]
    if status >= 500:
        return ErrorCode.SERVER_ERROR
    return None


def _heuristic_from_message(msg: str) -> Optional[ErrorCode]:  # pragma: no cover - simple mapping
    """Legacy substring heuristic mapping for non-HTTP exceptions."""
    PATTERN_GROUPS = (
        (ErrorCode.RATE_LIMIT, ("rate", "limit")),
        (ErrorCode.TIMEOUT, ("timeout",)),
        (ErrorCode.TIMEOUT, ("timed out",)),
        (ErrorCode.AUTH, ("auth",)),
        (ErrorCode.AUTH, ("api key",)),
        (ErrorCode.AUTH, ("unauthorized",)),
        (ErrorCode.AUTH, ("forbidden",)),
        (ErrorCode.UNSUPPORTED, ("unsupported",)),
        (ErrorCode.UNSUPPORTED, ("not supported",)),
        (ErrorCode.NOT_FOUND, ("not found",)),
        (ErrorCode.NOT_FOUND, ("does not exist",)),
        (ErrorCode.CONFLICT, ("conflict",)),
        (ErrorCode.CONFLICT, ("already exists",)),
        (ErrorCode.UNAVAILABLE, ("unavailable",)),
        (ErrorCode.UNAVAILABLE, ("temporarily down",)),
        (ErrorCode.VALIDATION, ("validation",)),
        (ErrorCode.VALIDATION, ("invalid",)),
        (ErrorCode.VALIDATION, ("malformed",)),
        (ErrorCode.SERVER_ERROR, ("server error",)),
        (ErrorCode.SERVER_ERROR, ("internal error",)),
        (ErrorCode.TRANSIENT, ("connection reset",)),
    )
    for code, patterns in PATTERN_GROUPS:
        if code is ErrorCode.RATE_LIMIT and patterns == ("rate", "limit"):
            if all(p in msg for p in patterns):
                return code
            continue
        if any(p in msg for p in patterns):
            return code
    return None


def _cause_chain(exc: BaseException) -> Iterator[BaseException]:
    """Yield ``exc`` followed by its ``__cause__``/``__context__`` ancestors."""
    seen: set[int] = set()
    cur: Optional[BaseException] = exc
    while cur is not None and id(cur) not in seen:
        seen.add(id(cur))
        yield cur
        cur = getattr(cur, "__cause__", None) or getattr(cur, "__context__", None)


def _is_timeout(exc: BaseException) -> bool:
    if isinstance(exc, (TimeoutError, asyncio.TimeoutError, httpx.TimeoutException)):
        return True
    return isinstance(exc, openai.APITimeoutError)


def _is_connection_failure(exc: BaseException) -> bool:
    if isinstance(exc, (httpx.TransportError, ConnectionError)):
        return True
    return isinstance(exc, openai.APIConnectionError)


def is_transport_failure(exc: BaseException) -> bool:
    """Return True when ``exc`` (or its cause chain) failed below the HTTP layer."""
    return any(_is_timeout(e) or _is_connection_failure(e) for e in _cause_chain(exc))


def classify_exception(exc: BaseException) -> ErrorCode:
    """Classify an exception into a normalized :class:`ErrorCode`.

    Precedence:
        1. ProviderError passthrough.
        2. Timeout exceptions (sync/async, httpx, SDK).
        3. HTTP status mapping (unmapped 5xx count as server errors).
        4. Legacy substring heuristics.
        5. Connection-level failures (reset, refused, proxy) as ``TRANSIENT``.
        6. ``UNKNOWN`` fallback.
    """
    if isinstance(exc, ProviderError):
        return exc.code
    if any(_is_timeout(e) for e in _cause_chain(exc)):
        return ErrorCode.TIMEOUT
    status = _extract_status(exc)
    if status is not None:
        mapped = _status_to_code(status)
        if mapped is not None:
            return mapped
    for e in _cause_chain(exc):
        if code := _heuristic_from_message(str(e).lower()):
            return code
    if is_transport_failure(exc):
        return ErrorCode.TRANSIENT
    return ErrorCode.UNKNOWN


def _parse_retry_after(exc: BaseException) -> Optional[float]:
    """Read ``retry-after-ms`` / ``retry-after`` from an HTTP error response."""
    if isinstance(exc, httpx.RequestError):
        return None
    resp = getattr(exc, "response", None)
    headers = getattr(resp, "headers", None)
    if headers is None:
        return None
    raw_ms = headers.get("retry-after-ms")
    if raw_ms:
        try:
            return max(float(raw_ms) / 1000.0, 0.0)
        except ValueError:
            pass
    raw = headers.get("retry-after")
    if not raw:
        return None
    try:
        return max(float(raw), 0.0)
    except ValueError:
        pass
    try:
        when = parsedate_to_datetime(raw)
    except (TypeError, ValueError):
        return None
    return max(when.timestamp() - time.time(), 0.0)


def wrap_exception(exc: BaseException, *, provider: str, model: Optional[str] = None) -> ProviderError:
    """Convert an arbitrary exception into the matching :class:`ProviderError` kind.

    Backend answers (an HTTP status is present) become :class:`BackendError`;
    failures below HTTP become :class:`TransportError`; anything else is a
    plain :class:`ProviderError` carrying the classified code.
    """
    if isinstance(exc, ProviderError):
        return exc
    code = classify_exception(exc)
    status = _extract_status(exc)
    if status is not None:
        cls = BackendError
    elif is_transport_failure(exc):
        cls = TransportError
    else:
        cls = ProviderError
    err = cls(
        code=code,
        message=str(exc) or exc.__class__.__name__,
        provider=provider,
        model=model,
        retryable=code in TRANSIENT_CODES,
        raw=exc if isinstance(exc, Exception) else None,
        status_code=status,
        retry_after=_parse_retry_after(exc),
    )
    err.__cause__ = exc
    return err


__all__ = [
    "classify_exception",
    "wrap_exception",
    "is_transport_failure",
    "_extract_status",
    "_HTTP_STATUS_MAP",
]
