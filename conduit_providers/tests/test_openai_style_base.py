"""Adapter tests for BaseOpenAIStyleProvider against a scripted backend.

Covers:
- Request shape (URL, auth header, messages, temperature, usage reporting).
- Lazy missing-key failure before any client or request exists.
- Model resolution fallback.
- Retry before the first event, terminal failure after it.
- Malformed chunk tolerance and structured stream logs.
"""

from __future__ import annotations

from typing import Iterator, List

import httpx
import pytest

from conduit_providers.base.errors import (
    AuthenticationError,
    BackendError,
    ErrorCode,
    ProtocolError,
    TransportError,
)
from conduit_providers.base.models import Message
from conduit_providers.base.streaming import ReasoningEvent, TextEvent, UsageEvent
from conduit_providers.deepseek import DeepseekProvider
from conduit_providers.nousresearch import NOUSRESEARCH_DEFAULT_MODEL, NousResearchProvider
from conduit_providers.tests.utils import delta_chunk, sse_body, sse_response, usage_chunk

HISTORY = [Message("user", "Say hello")]
# Hermes-4-405B lists $0.09 input and $0.37 output per million tokens.
HERMES_5_IN_2_OUT = pytest.approx((5 * 0.09 + 2 * 0.37) / 1_000_000)


def _nous(transport, **kwargs) -> NousResearchProvider:
    kwargs.setdefault("api_key", "sk-test")
    return NousResearchProvider(transport=transport, **kwargs)


def _error(status: int, **headers) -> httpx.Response:
    return httpx.Response(status, headers=headers, json={"error": {"message": f"status {status}"}})


class _BreaksAfterFirstEvent(httpx.SyncByteStream):
    def __iter__(self) -> Iterator[bytes]:
        yield sse_body([delta_chunk("He")], done=False)
        raise httpx.ReadError("connection reset by peer")


class _TrackedBody(httpx.SyncByteStream):
    """SSE body delivered one event per read; records whether it was closed."""

    def __init__(self) -> None:
        self.closed = False

    def __iter__(self) -> Iterator[bytes]:
        yield sse_body([delta_chunk("He")], done=False)
        yield sse_body([delta_chunk("llo"), usage_chunk(5, 2)])

    def close(self) -> None:
        self.closed = True


def test_streams_text_then_usage_and_sends_expected_request(make_backend):
    backend, transport = make_backend(
        sse_response([delta_chunk("He"), delta_chunk("llo"), usage_chunk(5, 2)])
    )
    provider = _nous(transport)

    events = list(provider.create_message("Be terse.", HISTORY))

    assert events == [TextEvent("He"), TextEvent("llo"), UsageEvent(5, 2, total_cost=HERMES_5_IN_2_OUT)]  # nosec B101
    assert backend.calls == 1  # nosec B101
    request = backend.requests[0]
    assert str(request.url) == "https://inference-api.nousresearch.com/v1/chat/completions"  # nosec B101
    assert request.headers["Authorization"] == "Bearer sk-test"  # nosec B101
    body = backend.bodies()[0]
    assert body["model"] == NOUSRESEARCH_DEFAULT_MODEL  # nosec B101
    assert body["temperature"] == 0  # nosec B101
    assert body["stream"] is True  # nosec B101
    assert body["stream_options"] == {"include_usage": True}  # nosec B101
    assert body["messages"] == [  # nosec B101
        {"role": "system", "content": "Be terse."},
        {"role": "user", "content": "Say hello"},
    ]


def test_reasoning_channel_is_kept_separate(make_backend):
    backend, transport = make_backend(
        sse_response([delta_chunk(reasoning="thinking"), delta_chunk("answer")])
    )
    events = list(_nous(transport).create_message("s", HISTORY))
    assert events == [ReasoningEvent("thinking"), TextEvent("answer")]  # nosec B101


def test_missing_key_fails_on_first_next_without_network(make_backend):
    backend, transport = make_backend()
    provider = NousResearchProvider(transport=transport)

    stream = provider.create_message("s", HISTORY)
    with pytest.raises(AuthenticationError) as ei:
        next(stream)

    assert ei.value.code is ErrorCode.AUTH  # nosec B101
    assert "missing_api_key" in str(ei.value)  # nosec B101
    assert backend.calls == 0  # nosec B101
    assert transport.clients_created == 0  # nosec B101


@pytest.mark.parametrize(
    ("requested", "expected"),
    [("Hermes-4-70B", "Hermes-4-70B"), ("gpt-unknown", NOUSRESEARCH_DEFAULT_MODEL), (None, NOUSRESEARCH_DEFAULT_MODEL)],
)
def test_get_model_falls_back_to_default(requested, expected):
    resolved = NousResearchProvider(model_id=requested).get_model()
    assert resolved.id == expected  # nosec B101
    assert resolved.info.context_window > 0  # nosec B101


def test_unknown_model_requests_the_default(make_backend):
    backend, transport = make_backend(sse_response([delta_chunk("ok")]))
    list(_nous(transport, model_id="not-a-model").create_message("s", HISTORY))
    assert backend.bodies()[0]["model"] == NOUSRESEARCH_DEFAULT_MODEL  # nosec B101


def test_unavailable_before_first_event_is_retried_once(make_backend, no_sleep, log_events):
    backend, transport = make_backend(
        _error(503),
        sse_response([delta_chunk("He"), delta_chunk("llo"), usage_chunk(5, 2)]),
    )

    events = list(_nous(transport).create_message("s", HISTORY))

    assert events == [TextEvent("He"), TextEvent("llo"), UsageEvent(5, 2, total_cost=HERMES_5_IN_2_OUT)]  # nosec B101
    assert backend.calls == 2  # nosec B101
    assert no_sleep == [1.0]  # nosec B101
    retries = [e for e in log_events if e["event"] == "retry.attempt" and e.get("error_code")]
    assert len(retries) == 1  # nosec B101
    assert retries[0]["error_code"] == "unavailable"  # nosec B101
    assert retries[0]["attempt"] == 1  # nosec B101
    assert retries[0]["provider"] == "nousresearch"  # nosec B101


def test_failure_after_first_event_is_terminal(make_backend, no_sleep):
    backend, transport = make_backend(
        httpx.Response(200, headers={"content-type": "text/event-stream"}, stream=_BreaksAfterFirstEvent())
    )

    received: List[str] = []
    with pytest.raises(TransportError) as ei:
        for event in _nous(transport).create_message("s", HISTORY):
            received.append(event.content)

    assert received == ["He"]  # nosec B101
    assert backend.calls == 1  # nosec B101
    assert ei.value.code is ErrorCode.TRANSIENT  # nosec B101
    assert ei.value.attempts == 1  # nosec B101
    assert no_sleep == []  # nosec B101


def test_rejected_credentials_are_not_retried(make_backend, no_sleep):
    backend, transport = make_backend(_error(401))

    with pytest.raises(BackendError) as ei:
        list(_nous(transport).create_message("s", HISTORY))

    assert ei.value.code is ErrorCode.AUTH  # nosec B101
    assert ei.value.status_code == 401  # nosec B101
    assert ei.value.attempts == 1  # nosec B101
    assert backend.calls == 1  # nosec B101


def test_exhausted_retries_report_attempts(make_backend, no_sleep):
    backend, transport = make_backend(_error(500), _error(502), _error(503))

    with pytest.raises(BackendError) as ei:
        list(_nous(transport).create_message("s", HISTORY))

    assert backend.calls == 3  # nosec B101
    assert ei.value.attempts == 3  # nosec B101
    assert no_sleep == [1.0, 2.0]  # nosec B101


def test_single_malformed_chunk_is_skipped_and_logged(make_backend, log_events):
    backend, transport = make_backend(
        sse_response([delta_chunk("He"), {"choices": "bad"}, delta_chunk("llo")])
    )

    events = list(_nous(transport).create_message("s", HISTORY))

    assert events == [TextEvent("He"), TextEvent("llo")]  # nosec B101
    protocol = [e for e in log_events if e["event"] == "stream.protocol_error"]
    assert len(protocol) == 1  # nosec B101
    assert protocol[0]["error_code"] == "protocol"  # nosec B101
    assert protocol[0]["level"] == "WARNING"  # nosec B101


def test_repeated_malformed_chunks_abort_the_stream(make_backend, no_sleep):
    backend, transport = make_backend(
        sse_response([delta_chunk("He"), {"choices": "bad"}, {"choices": "worse"}, delta_chunk("llo")])
    )

    received: List[str] = []
    with pytest.raises(ProtocolError) as ei:
        for event in _nous(transport).create_message("s", HISTORY):
            received.append(event.content)

    assert received == ["He"]  # nosec B101
    assert ei.value.code is ErrorCode.PROTOCOL  # nosec B101
    assert backend.calls == 1  # nosec B101


def test_undecodable_chunk_is_a_protocol_error(make_backend, no_sleep):
    backend, transport = make_backend(sse_response(["{not json"]))

    with pytest.raises(ProtocolError):
        list(_nous(transport).create_message("s", HISTORY))
    assert backend.calls == 1  # nosec B101


def test_finalize_event_reports_outcome_and_tokens(make_backend, log_events):
    backend, transport = make_backend(sse_response([delta_chunk("Hi"), usage_chunk(5, 2)]))

    list(_nous(transport).create_message("s", HISTORY))

    start = [e for e in log_events if e["event"] == "stream.start"]
    final = [e for e in log_events if e["event"] == "stream.finalize"]
    assert len(start) == 1 and len(final) == 1  # nosec B101
    assert start[0]["messages"] == 2  # nosec B101
    assert start[0]["call_id"] == final[0]["call_id"]  # nosec B101
    assert final[0]["outcome"] == "completed"  # nosec B101
    assert final[0]["emitted"] == 2  # nosec B101
    assert final[0]["tokens"] == {"input": 5, "output": 2}  # nosec B101
    assert final[0]["structured"] is True  # nosec B101


def test_consumer_closing_early_closes_the_response_and_logs_cancelled(make_backend, log_events):
    body = _TrackedBody()
    backend, transport = make_backend(
        httpx.Response(200, headers={"content-type": "text/event-stream"}, stream=body)
    )

    stream = _nous(transport).create_message("s", HISTORY)
    assert next(stream) == TextEvent("He")  # nosec B101
    stream.close()

    final = [e for e in log_events if e["event"] == "stream.finalize"]
    assert [e["outcome"] for e in final] == ["cancelled"]  # nosec B101
    assert body.closed  # nosec B101
    assert backend.calls == 1  # nosec B101


def test_client_is_created_once_and_reused(make_backend):
    backend, transport = make_backend(sse_response([delta_chunk("a")]), sse_response([delta_chunk("b")]))
    provider = _nous(transport)

    first = list(provider.create_message("s", HISTORY))
    second = list(provider.create_message("s", HISTORY + [Message("assistant", "a"), Message("user", "again")]))

    assert first == [TextEvent("a")] and second == [TextEvent("b")]  # nosec B101
    assert backend.calls == 2  # nosec B101
    assert transport.clients_created == 1  # nosec B101
    assert len(backend.bodies()[1]["messages"]) == 4  # nosec B101
    provider.close()


def test_empty_deltas_yield_no_events(make_backend):
    backend, transport = make_backend(sse_response([delta_chunk(""), delta_chunk()]))
    assert list(_nous(transport).create_message("s", HISTORY)) == []  # nosec B101


def test_deepseek_reports_prompt_cache_hits(make_backend):
    backend, transport = make_backend(
        sse_response([delta_chunk("ok"), usage_chunk(10, 3, prompt_cache_hit_tokens=6, prompt_cache_miss_tokens=4)])
    )
    provider = DeepseekProvider(api_key="sk-ds", transport=transport)

    events = list(provider.create_message("s", HISTORY))

    # 4 uncached input at 0.56, 6 cache hits at 0.07, 3 output at 1.68 per million.
    expected_cost = pytest.approx((4 * 0.56 + 6 * 0.07 + 3 * 1.68) / 1_000_000)
    assert events[-1] == UsageEvent(10, 3, cache_read_tokens=6, total_cost=expected_cost)  # nosec B101
    assert str(backend.requests[0].url) == "https://api.deepseek.com/v1/chat/completions"  # nosec B101
    assert backend.bodies()[0]["model"] == "deepseek-chat"  # nosec B101


def test_explicit_retry_config_is_honored(make_backend, no_sleep):
    from conduit_providers.base.resilience.retry import RetryConfig

    backend, transport = make_backend(_error(429, **{"retry-after": "2"}), _error(429))
    provider = _nous(transport, retry_config=RetryConfig(max_attempts=2, delay_base=0.5))

    with pytest.raises(BackendError) as ei:
        list(provider.create_message("s", HISTORY))

    assert ei.value.code is ErrorCode.RATE_LIMIT  # nosec B101
    assert no_sleep == [2.0]  # nosec B101
    assert backend.calls == 2  # nosec B101
