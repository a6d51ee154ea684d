"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `conduit_providers.base.errors` for the stable surface.
"""

from .error_code import ErrorCode, TRANSIENT_CODES
from .provider_error import (
    AuthenticationError,
    BackendError,
    ConfigurationError,
    ProtocolError,
    ProviderError,
    TransportError,
)
from .classification import classify_exception, is_transport_failure, wrap_exception

__all__ = [
    "ErrorCode",
    "TRANSIENT_CODES",
    "ProviderError",
    "ConfigurationError",
    "AuthenticationError",
    "TransportError",
    "BackendError",
    "ProtocolError",
    "classify_exception",
    "is_transport_failure",
    "wrap_exception",
]
