"""Pytest configuration for the conduit_providers test suite.

Every test runs with a scrubbed environment (no proxy, CA, credential or
config-file variables) and a fresh process transport, so results never depend
on the machine running them.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, Iterator, List

import pytest

from conduit_providers.base.http import reset_transport
from conduit_providers.base.logging import BASE_LOGGER_NAME, get_logger
from conduit_providers.config import reset_config_cache
from conduit_providers.tests.utils import FakeBackend, MockTransportContext

_SCRUBBED_ENV = (
    "http_proxy",
    "HTTP_PROXY",
    "https_proxy",
    "HTTPS_PROXY",
    "no_proxy",
    "NO_PROXY",
    "all_proxy",
    "ALL_PROXY",
    "CONDUIT_HOST_MANAGED_PROXY",
    "CONDUIT_EXTRA_CA_CERTS",
    "SSL_CERT_FILE",
    "REQUESTS_CA_BUNDLE",
    "CONDUIT_LOG_LEVEL",
    "PROVIDERS_CONFIG_FILE",
    "NOUSRESEARCH_API_KEY",
    "NOUS_API_KEY",
    "NOUSRESEARCH_MODEL",
    "NOUSRESEARCH_BASE_URL",
    "DEEPSEEK_API_KEY",
    "DEEPSEEK_MODEL",
    "DEEPSEEK_BASE_URL",
)


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Scrub transport/credential variables and reset process-wide caches."""
    for name in _SCRUBBED_ENV:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("DOTENV_FILE", str(tmp_path / "absent.env"))
    reset_config_cache()
    reset_transport()
    yield
    reset_transport()
    reset_config_cache()


@pytest.fixture()
def no_sleep(monkeypatch: pytest.MonkeyPatch) -> List[float]:
    """Replace the retry backoff sleep with a recorder."""
    from conduit_providers.base.resilience import retry as retry_mod

    slept: List[float] = []
    monkeypatch.setattr(retry_mod.time, "sleep", slept.append)
    return slept


class _ListHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.events: List[Dict[str, Any]] = []

    def emit(self, record: logging.LogRecord) -> None:
        try:
            payload = json.loads(record.getMessage())
        except ValueError:
            payload = {"msg": record.getMessage()}
        payload.setdefault("level", record.levelname)
        self.events.append(payload)


@pytest.fixture()
def log_events() -> Iterator[List[Dict[str, Any]]]:
    """Collect structured events emitted under the ``conduit`` logger."""
    base = get_logger(BASE_LOGGER_NAME)
    handler = _ListHandler()
    previous = base.level
    base.addHandler(handler)
    base.setLevel(logging.DEBUG)
    try:
        yield handler.events
    finally:
        base.removeHandler(handler)
        base.setLevel(previous)


@pytest.fixture()
def make_backend() -> Callable[..., tuple]:
    """Return a factory producing ``(backend, transport)`` pairs."""

    def _make(*responses) -> tuple:
        backend = FakeBackend(*responses)
        return backend, MockTransportContext(backend)

    return _make
