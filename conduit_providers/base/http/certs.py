"""Certificate trust for the shared transport.

The TLS context trusts the operating system store, the ``certifi`` bundle
httpx ships with, and one extra PEM bundle named by the host environment
(for corporate MITM proxies and self-signed internal services). The bundle is
handed to the TLS layer as a path; it is never parsed here.
"""

from __future__ import annotations

import os
import ssl
from typing import Mapping, Optional

import certifi

# First present wins.
CA_BUNDLE_ENV_VARS = ("CONDUIT_EXTRA_CA_CERTS", "SSL_CERT_FILE", "REQUESTS_CA_BUNDLE")


def resolve_ca_bundle(environ: Mapping[str, str]) -> Optional[str]:
    """Return the extra CA bundle path configured in ``environ``, if any."""
    for name in CA_BUNDLE_ENV_VARS:
        value = environ.get(name)
        if value and value.strip():
            return os.path.expanduser(value.strip())
    return None


def build_ssl_context(ca_bundle: Optional[str] = None) -> ssl.SSLContext:
    """Create the verifying ``SSLContext`` used by every outbound request.

    Raises:
        FileNotFoundError / ssl.SSLError: when ``ca_bundle`` is unreadable.
    """
    ctx = ssl.create_default_context()
    ctx.load_verify_locations(cafile=certifi.where())
    if ca_bundle:
        if os.path.isdir(ca_bundle):
            ctx.load_verify_locations(capath=ca_bundle)
        else:
            ctx.load_verify_locations(cafile=ca_bundle)
    return ctx


__all__ = ["CA_BUNDLE_ENV_VARS", "resolve_ca_bundle", "build_ssl_context"]
