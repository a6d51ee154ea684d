"""Data transfer objects used at the adapter boundary."""

from .provider_options import ProviderOptions

__all__ = ["ProviderOptions"]
