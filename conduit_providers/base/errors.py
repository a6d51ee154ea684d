"""Unified provider error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``conduit_providers.base.errors_parts`` to maintain a stable import path while
enforcing the one-class-per-file governance rule.
"""

from .errors_parts.error_code import ErrorCode, TRANSIENT_CODES
from .errors_parts.provider_error import (
    AuthenticationError,
    BackendError,
    ConfigurationError,
    ProtocolError,
    ProviderError,
    TransportError,
)
from .errors_parts.classification import (
    classify_exception,
    is_transport_failure,
    wrap_exception,
)

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
