"""HTTP transport package for providers.

Re-exports the process-wide transport surface. Every outbound request in the
package goes through a client obtained from here.
"""

from .client import (
    HOST_MANAGED_ENV,
    MODE_ENV_PROXY,
    MODE_NATIVE,
    TransportContext,
    create_httpx_client,
    fetch,
    get_httpx_settings,
    get_transport,
    init_transport,
    reset_transport,
    stream,
)
from .proxy_env import ProxySettings, RefusingTransport, read_proxy_environment

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
    "ProxySettings",
    "RefusingTransport",
    "read_proxy_environment",
]
