"""Process-wide network transport for every outbound provider call.

Purpose:
    Resolve the host's proxy and certificate-trust configuration exactly once
    and expose it as a single :class:`TransportContext`. Adapters and any other
    HTTP user obtain ``httpx`` clients from it (directly, via
    :func:`create_httpx_client`, or through :func:`get_httpx_settings`) so no
    request bypasses the configured proxy or CA bundle.

Selection policy:
    - ``native``: when ``CONDUIT_HOST_MANAGED_PROXY`` is truthy the host
      process already applies its own proxy/CA configuration; clients use
      httpx's default environment handling, unmodified.
    - ``env_proxy``: otherwise the proxy variables are read explicitly
      (see :mod:`.proxy_env`) and installed as transport mounts on every
      client, together with the verifying ``SSLContext`` from :mod:`.certs`.

    Selection never logs (logging may not be configured yet) and never catches
    proxy problems: a broken or unsupported proxy surfaces as an ordinary
    ``httpx.ProxyError`` on the first request. Proxy changes require a restart.

Lifecycle & cleanup:
    - :func:`init_transport` is idempotent; :func:`get_transport` initializes
      lazily on first access. The context is read-only afterwards and safe to
      share across threads.
    - Pooled clients from :meth:`TransportContext.client` are cached per
      purpose and closed at interpreter exit via ``atexit``.
"""

from __future__ import annotations

import atexit
import os
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Mapping, Optional

import httpx

from ..constants import DEFAULT_HTTP_TIMEOUT
from ..errors import ConfigurationError, ErrorCode
from .certs import build_ssl_context, resolve_ca_bundle
from .proxy_env import ProxySettings, build_mounts, read_proxy_environment, redact_proxy_url

HOST_MANAGED_ENV = "CONDUIT_HOST_MANAGED_PROXY"

MODE_NATIVE = "native"
MODE_ENV_PROXY = "env_proxy"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class TransportContext:
    """Resolved transport configuration shared by the whole process.

    Attributes:
        mode: ``"native"`` or ``"env_proxy"``.
        proxies: Proxy settings captured at startup (empty in native mode).
        ca_bundle: Extra CA bundle path handed to the TLS layer, if any.
        ssl_context: Verifying context used for direct and proxied connections.
    """

    mode: str
    proxies: ProxySettings = field(default_factory=ProxySettings)
    ca_bundle: Optional[str] = None
    ssl_context: Any = None
    _clients: Dict[str, httpx.Client] = field(default_factory=dict, init=False, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, init=False, repr=False)

    @classmethod
    def from_environment(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        *,
        host_managed: Optional[bool] = None,
    ) -> "TransportContext":
        """Select and build the transport from ``environ`` (defaults to ``os.environ``).

        Raises:
            ConfigurationError: when the configured CA bundle cannot be loaded.
        """
        env = os.environ if environ is None else environ
        if host_managed is None:
            host_managed = (env.get(HOST_MANAGED_ENV) or "").strip().lower() in _TRUTHY
        if host_managed:
            return cls(mode=MODE_NATIVE)

        ca_bundle = resolve_ca_bundle(env)
        try:
            ssl_context = build_ssl_context(ca_bundle)
        except (OSError, ValueError) as e:
            raise ConfigurationError(
                code=ErrorCode.CONFIGURATION,
                message=f"cannot load CA bundle {ca_bundle}: {e}",
                provider="transport",
            ) from e
        return cls(
            mode=MODE_ENV_PROXY,
            proxies=read_proxy_environment(env),
            ca_bundle=ca_bundle,
            ssl_context=ssl_context,
        )

    # ----- client settings -----

    def httpx_settings(self) -> Dict[str, Any]:
        """Return keyword arguments that route an ``httpx.Client`` through this transport.

        Each call builds fresh mount transports; a client owns and closes the
        transports it was given.
        """
        if self.mode == MODE_NATIVE:
            return {"trust_env": True}
        return {
            "mounts": build_mounts(self.proxies, self.ssl_context),
            "verify": self.ssl_context,
            "trust_env": False,
        }

    def create_client(self, **extra: Any) -> httpx.Client:
        """Create a new ``httpx.Client`` merging ``extra`` with the transport settings.

        Transport settings take precedence so callers cannot route around the
        proxy; ``timeout`` defaults to ``DEFAULT_HTTP_TIMEOUT``.
        """
        options: Dict[str, Any] = {"timeout": DEFAULT_HTTP_TIMEOUT}
        options.update(extra)
        options.update(self.httpx_settings())
        return httpx.Client(**options)

    def client(self, purpose: str = "default") -> httpx.Client:
        """Return a pooled client for ``purpose``, creating it on first use."""
        existing = self._clients.get(purpose)
        if existing is not None and not existing.is_closed:
            return existing
        with self._lock:
            existing = self._clients.get(purpose)
            if existing is not None and not existing.is_closed:
                return existing
            created = self.create_client()
            self._clients[purpose] = created
            return created

    # ----- fetch-style helpers -----

    def fetch(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Issue a request through the pooled ``fetch`` client and read the body."""
        return self.client("fetch").request(method, url, **kwargs)

    @contextmanager
    def stream(self, method: str, url: str, **kwargs: Any) -> Iterator[httpx.Response]:
        """Issue a streaming request; the response is closed when the block exits."""
        with self.client("stream").stream(method, url, **kwargs) as response:
            yield response

    # ----- introspection & cleanup -----

    def describe(self) -> Dict[str, Any]:
        """Return a log-safe summary (credentials redacted)."""
        return {
            "mode": self.mode,
            "http_proxy": redact_proxy_url(self.proxies.http_proxy),
            "https_proxy": redact_proxy_url(self.proxies.https_proxy),
            "no_proxy": list(self.proxies.no_proxy),
            "ca_bundle": self.ca_bundle,
        }

    def close(self) -> None:
        """Close every pooled client."""
        with self._lock:
            clients = list(self._clients.values())
            self._clients.clear()
        for c in clients:
            c.close()


_TRANSPORT: Optional[TransportContext] = None
_INIT_LOCK = threading.Lock()


def init_transport(environ: Optional[Mapping[str, str]] = None, *, host_managed: Optional[bool] = None) -> TransportContext:
    """Initialize the process-wide transport once and return it.

    Later calls return the existing context unchanged, whatever their
    arguments; call this during application bootstrap to pin the environment.
    """
    global _TRANSPORT
    if _TRANSPORT is not None:
        return _TRANSPORT
    with _INIT_LOCK:
        if _TRANSPORT is None:
            _TRANSPORT = TransportContext.from_environment(environ, host_managed=host_managed)
        return _TRANSPORT


def get_transport() -> TransportContext:
    """Return the process-wide transport, initializing it lazily."""
    return _TRANSPORT if _TRANSPORT is not None else init_transport()


def reset_transport() -> None:
    """Close and forget the process-wide transport (test support only)."""
    global _TRANSPORT
    with _INIT_LOCK:
        current, _TRANSPORT = _TRANSPORT, None
    if current is not None:
        current.close()


def fetch(method: str, url: str, **kwargs: Any) -> httpx.Response:
    """Module-level shortcut for ``get_transport().fetch(...)``."""
    return get_transport().fetch(method, url, **kwargs)


@contextmanager
def stream(method: str, url: str, **kwargs: Any) -> Iterator[httpx.Response]:
    """Module-level shortcut for ``get_transport().stream(...)``."""
    with get_transport().stream(method, url, **kwargs) as response:
        yield response


def get_httpx_settings() -> Dict[str, Any]:
    """Return the ``httpx.Client`` keyword fragment for the process transport."""
    return get_transport().httpx_settings()


def create_httpx_client(**extra: Any) -> httpx.Client:
    """Create an ``httpx.Client`` routed through the process transport."""
    return get_transport().create_client(**extra)


def _cleanup_at_exit() -> None:
    """atexit hook to ensure pooled clients are closed on interpreter exit."""
    if _TRANSPORT is not None:
        _TRANSPORT.close()


atexit.register(_cleanup_at_exit)

__all__ = [
    "TransportContext",
    "HOST_MANAGED_ENV",
    "MODE_NATIVE",
    "MODE_ENV_PROXY",
    "init_transport",
    "get_transport",
    "reset_transport",
    "fetch",
    "stream",
    "get_httpx_settings",
    "create_httpx_client",
]
