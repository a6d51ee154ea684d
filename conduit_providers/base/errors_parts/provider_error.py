"""
Structured provider error exception types.

Wraps provider-specific exceptions with a normalized `ErrorCode` for consistent
handling, retry logic, and structured logging. The subclasses name the failure
kind (configuration, transport, backend, protocol) so callers can branch on
``except`` clauses instead of inspecting codes.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass
class ProviderError(Exception):
    """Represents a structured provider error with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message suitable for logging.
        provider: Provider key where the error originated (e.g., ``"nousresearch"``).
        model: Optional model name associated with the failure.
        retryable: Hint for upstream retry logic (not authoritative).
        raw: Optional original exception for diagnostics.
        status_code: HTTP status when the backend answered with one.
        retry_after: Seconds the backend asked us to wait, if advertised.
        attempts: Number of attempts made before the error surfaced; set by
            the retry policy.
    """

    code: ErrorCode
    message: str
    provider: str
    model: Optional[str] = None
    retryable: bool = False
    raw: Optional[Exception] = None
    status_code: Optional[int] = None
    retry_after: Optional[float] = None
    attempts: int = 1

    def __str__(self) -> str:
        """Return a compact string combining provider, model, code, and message."""
        text = f"{self.provider}:{self.model or '-'} {self.code.value}: {self.message}"
        if self.status_code is not None:
            text += f" (status {self.status_code})"
        if self.attempts > 1:
            text += f" after {self.attempts} attempts"
        return text


class ConfigurationError(ProviderError):
    """Invalid or missing local configuration; raised before any network I/O."""


class AuthenticationError(ConfigurationError):
    """No usable API key could be resolved for the provider."""


class TransportError(ProviderError):
    """DNS, connect, proxy, TLS or timeout failure below the HTTP layer."""


class BackendError(ProviderError):
    """The backend answered with a non-2xx status."""


class ProtocolError(ProviderError):
    """A streamed chunk did not have the expected shape."""


__all__ = [
    "ProviderError",
    "ConfigurationError",
    "AuthenticationError",
    "TransportError",
    "BackendError",
    "ProtocolError",
]
