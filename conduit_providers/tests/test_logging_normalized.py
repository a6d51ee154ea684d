"""Focused tests for conduit_providers.base.logging.

Covers:
- _parse_level string parsing
- _coerce_tokens stability
- normalized_log_event emits required keys
- JsonFormatter output and logger hierarchy
"""
from __future__ import annotations

import io
import json
import logging
import sys

from conduit_providers.base.log_support import JsonFormatter, LogContext
from conduit_providers.base.logging import (
    BASE_LOGGER_NAME,
    REQUIRED_NORMALIZED_KEYS,
    _coerce_tokens,  # type: ignore[attr-defined]
    _parse_level,  # type: ignore[attr-defined]
    configure_logger,
    get_logger,
    normalized_log_event,
)
from conduit_providers.base.streaming import UsageEvent


class _ListHandler(logging.Handler):
    """Capture log records into a list for assertions."""

    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.messages: list[str] = []

    def emit(self, record: logging.LogRecord) -> None:  # pragma: no cover - exercised via tests
        self.messages.append(record.getMessage())


def test_parse_level_variants():
    assert _parse_level(None) == logging.INFO  # nosec B101
    assert _parse_level("debug") == logging.DEBUG  # nosec B101
    assert _parse_level("WARN") == logging.WARNING  # nosec B101
    assert _parse_level("unknown", default=logging.ERROR) == logging.ERROR  # nosec B101


def test_coerce_tokens_shapes():
    assert _coerce_tokens(None) is None  # nosec B101
    assert _coerce_tokens({"input": 1}) == {"input": 1}  # nosec B101
    assert _coerce_tokens(UsageEvent(1, 2)) == {"input_tokens": 1, "output_tokens": 2}  # nosec B101
    assert _coerce_tokens(7) == {"value": "7"}  # nosec B101


def test_child_loggers_nest_under_base():
    child = get_logger("providers.nousresearch")
    assert child.name == f"{BASE_LOGGER_NAME}.providers.nousresearch"  # nosec B101
    assert child.propagate  # nosec B101
    assert get_logger(BASE_LOGGER_NAME).propagate is False  # nosec B101
    assert get_logger(child.name) is child  # nosec B101


def test_normalized_event_has_required_keys():
    logger = get_logger("tests.normalized")
    handler = _ListHandler()
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    try:
        normalized_log_event(
            logger,
            "stream.start",
            LogContext(provider="nousresearch", model="Hermes-4-405B", extra={"call": None}),
            phase="start",
            temperature=0,
        )
    finally:
        logger.removeHandler(handler)

    payload = json.loads(handler.messages[0])
    for key in REQUIRED_NORMALIZED_KEYS:
        if key == "error_code":
            continue
        assert key in payload  # nosec B101
    assert "error_code" not in payload  # nosec B101
    assert payload["event"] == "stream.start"  # nosec B101
    assert payload["provider"] == "nousresearch"  # nosec B101
    assert payload["temperature"] == 0  # nosec B101
    assert "call" not in payload  # nosec B101


def test_extra_fields_never_overwrite_normalized_values():
    logger = get_logger("tests.overwrite")
    handler = _ListHandler()
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    try:
        normalized_log_event(logger, "x", phase="retry", attempt=2, error_code="timeout", emitted=0)
    finally:
        logger.removeHandler(handler)
    payload = json.loads(handler.messages[0])
    assert payload["attempt"] == 2  # nosec B101
    assert payload["error_code"] == "timeout"  # nosec B101
    assert payload["emitted"] == 0  # nosec B101


def test_json_formatter_hoists_structured_message():
    record = logging.LogRecord("conduit.x", logging.WARNING, __file__, 1, json.dumps({"event": "e", "n": 1}), (), None)
    record.request_id = "abc"
    out = json.loads(JsonFormatter().format(record))
    assert out["event"] == "e" and out["n"] == 1  # nosec B101
    assert out["level"] == "WARNING"  # nosec B101
    assert out["logger"] == "conduit.x"  # nosec B101
    assert out["request_id"] == "abc"  # nosec B101
    assert "msg" not in out  # nosec B101


def test_json_formatter_keeps_plain_messages():
    record = logging.LogRecord("conduit", logging.INFO, __file__, 1, "hello %s", ("world",), None)
    assert json.loads(JsonFormatter().format(record))["msg"] == "hello world"  # nosec B101


def test_configure_logger_sets_level_and_file_handler(tmp_path):
    base = get_logger()
    previous = base.level
    log_file = tmp_path / "logs" / "conduit.log"
    try:
        configure_logger(level="error", file_path=str(log_file))
        assert base.level == logging.ERROR  # nosec B101
        base.error(json.dumps({"event": "to-file"}))
        for h in base.handlers:
            h.flush()
        assert json.loads(log_file.read_text().splitlines()[0])["event"] == "to-file"  # nosec B101
    finally:
        configure_logger(level=previous, file_path=None)


def test_console_handler_follows_replaced_stderr(monkeypatch):
    first = io.StringIO()
    monkeypatch.setattr(sys, "stderr", first)
    get_logger()
    first.close()

    second = io.StringIO()
    monkeypatch.setattr(sys, "stderr", second)
    base = get_logger()
    base.error(json.dumps({"event": "after-swap"}))
    for h in base.handlers:
        h.flush()

    assert "after-swap" in second.getvalue()  # nosec B101
