"""Proxy environment resolution for the shared transport.

Purpose:
    Read the standard proxy variables once and turn them into ``httpx``
    transport mounts. The result routes ``http://`` and ``https://`` traffic
    through the configured proxies and sends every no-proxy host direct.

Supported variables (lower-case wins over upper-case, as curl does):
    - ``http_proxy`` / ``HTTP_PROXY``
    - ``https_proxy`` / ``HTTPS_PROXY``
    - ``no_proxy`` / ``NO_PROXY`` (comma-separated hosts, ``*`` disables proxying)

Unsupported:
    SOCKS proxies, PAC discovery and interactive credential prompts. A proxy
    URL that is unsupported or cannot be parsed is mounted on a
    :class:`RefusingTransport`, so requests fail on first use instead of
    silently going out unproxied.

This module must not log: it runs before logging is configured.
"""

from __future__ import annotations

import ipaddress
import ssl
from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Tuple

import httpx

SUPPORTED_PROXY_SCHEMES = ("http", "https")


@dataclass(frozen=True)
class ProxySettings:
    """Proxy configuration captured from the environment at startup."""

    http_proxy: Optional[str] = None
    https_proxy: Optional[str] = None
    no_proxy: Tuple[str, ...] = ()

    @property
    def bypass_all(self) -> bool:
        return "*" in self.no_proxy

    @property
    def configured(self) -> bool:
        return bool(self.http_proxy or self.https_proxy)


def _read_pair(environ: Mapping[str, str], name: str) -> Optional[str]:
    for key in (name.lower(), name.upper()):
        value = environ.get(key)
        if value and value.strip():
            return value.strip()
    return None


def read_proxy_environment(environ: Mapping[str, str]) -> ProxySettings:
    """Capture the proxy-related variables from ``environ``."""
    raw_no_proxy = _read_pair(environ, "no_proxy") or ""
    hosts = tuple(h.strip() for h in raw_no_proxy.split(",") if h.strip())
    return ProxySettings(
        http_proxy=_read_pair(environ, "http_proxy"),
        https_proxy=_read_pair(environ, "https_proxy"),
        no_proxy=hosts,
    )


class RefusingTransport(httpx.BaseTransport):
    """Transport that fails every request with a :class:`httpx.ProxyError`.

    Mounted in place of a proxy that cannot be honoured so traffic never
    degrades to a direct connection.
    """

    def __init__(self, reason: str) -> None:
        self.reason = reason

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        raise httpx.ProxyError(self.reason, request=request)


def redact_proxy_url(url: Optional[str]) -> Optional[str]:
    """Hide credentials embedded in a proxy URL."""
    if not url or "@" not in url:
        return url
    scheme, sep, rest = url.partition("://")
    if not sep:
        scheme, rest = "", url
    host = rest.rsplit("@", 1)[1]
    return f"{scheme}://***@{host}" if scheme else f"***@{host}"


def _normalize_proxy_url(url: str) -> str:
    return url if "://" in url else f"http://{url}"


def build_proxy_transport(url: str, verify: ssl.SSLContext) -> httpx.BaseTransport:
    """Return a transport tunnelling through ``url`` or refusing when unusable."""
    normalized = _normalize_proxy_url(url)
    scheme = normalized.split("://", 1)[0].lower()
    if scheme.startswith("socks"):
        return RefusingTransport(f"unsupported proxy scheme '{scheme}' in {redact_proxy_url(url)}")
    if scheme not in SUPPORTED_PROXY_SCHEMES:
        return RefusingTransport(f"invalid proxy URL {redact_proxy_url(url)}: unknown scheme '{scheme}'")
    try:
        proxy = httpx.Proxy(normalized)
    except (ValueError, httpx.InvalidURL) as e:
        return RefusingTransport(f"invalid proxy URL {redact_proxy_url(url)}: {e}")
    return httpx.HTTPTransport(proxy=proxy, verify=verify)


def _no_proxy_pattern(host: str) -> Optional[str]:
    """Translate a no-proxy entry into an ``httpx`` mount pattern.

    CIDR ranges cannot be expressed as mount patterns and are ignored, which
    keeps those hosts on the proxy rather than guessing.
    """
    if "://" in host:
        return host
    if "/" in host:
        return None
    bare = host.lstrip("*").lstrip(".")
    if not bare:
        return None
    candidate = bare.strip("[]")
    try:
        ip = ipaddress.ip_address(candidate)
    except ValueError:
        ip = None
    if ip is not None:
        return f"all://[{candidate}]" if ip.version == 6 else f"all://{candidate}"
    if bare.lower() == "localhost":
        return f"all://{bare}"
    return f"all://*{bare}"


def build_mounts(settings: ProxySettings, verify: ssl.SSLContext) -> Dict[str, Optional[httpx.BaseTransport]]:
    """Build a fresh ``mounts`` mapping for an ``httpx.Client``.

    A ``None`` value tells httpx to use the client's default (direct)
    transport for that pattern. Transports are created per call because a
    client closes its mounted transports when it is closed.
    """
    if settings.bypass_all or not settings.configured:
        return {}
    mounts: Dict[str, Optional[httpx.BaseTransport]] = {}
    if settings.http_proxy:
        mounts["http://"] = build_proxy_transport(settings.http_proxy, verify)
    if settings.https_proxy:
        mounts["https://"] = build_proxy_transport(settings.https_proxy, verify)
    for host in settings.no_proxy:
        pattern = _no_proxy_pattern(host)
        if pattern is not None:
            mounts[pattern] = None
    return mounts


__all__ = [
    "ProxySettings",
    "RefusingTransport",
    "read_proxy_environment",
    "build_proxy_transport",
    "build_mounts",
    "redact_proxy_url",
    "SUPPORTED_PROXY_SCHEMES",
]
