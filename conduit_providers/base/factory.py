"""Provider Factory utilities.

Purpose
-------
Centralize provider-agnostic creation of adapter instances implementing the
``LLMProvider`` interface. Adapters are imported lazily using ``importlib`` to
avoid heavy imports at module import time and to keep side effects out of the
factory layer.

External dependencies
---------------------
- Standard library only (``importlib``). Provider adapters themselves depend
  on the ``openai`` SDK but are imported on demand.

Timeout and fallback semantics
------------------------------
- No timeouts are introduced here. The factory performs no retries or
  fallbacks; it either returns an instance or raises a clear error.

Scope
-----
Supported providers: ``nousresearch`` and ``deepseek``.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, Mapping, Optional, Tuple, Type

from .dto import ProviderOptions


class UnknownProviderError(Exception):
    """Raised when a provider cannot be resolved or initialized.

    Failure modes include:
    - The provider name is not registered in the factory mapping.
    - The provider module cannot be imported or the adapter class is missing.
    - The adapter constructor rejected its arguments.
    """


class ProviderFactory:
    """Create provider adapters based on a canonical name (e.g., ``"nousresearch"``).

    Design notes
    ------------
    - Uses ``importlib.import_module`` for explicit import semantics.
    - Options come from :func:`conduit_providers.config.get_provider_config`
      unless the caller passes explicit ``options``; keyword overrides
      (``api_key``, ``model``/``model_id``, ``base_url``, ``retry``) are merged
      on top of the config.
    """

    # Map canonical provider names to import paths and class names
    _PROVIDERS: Dict[str, Dict[str, str]] = {
        "nousresearch": {"module": "conduit_providers.nousresearch.client", "class": "NousResearchProvider"},
        "deepseek": {"module": "conduit_providers.deepseek.client", "class": "DeepseekProvider"},
    }

    @classmethod
    def create(
        cls,
        provider: str,
        *,
        options: Optional[ProviderOptions] = None,
        **kwargs: Any,
    ) -> Any:
        """Create a provider adapter instance.

        Parameters
        ----------
        provider:
            Canonical provider name (e.g., ``"nousresearch"``).
        options:
            Explicit :class:`ProviderOptions`; when omitted, options are built
            from the merged provider configuration.
        **kwargs:
            ``transport`` and ``retry_config`` are forwarded to the adapter;
            any other key is treated as a config override.

        Returns
        -------
        Any
            Instance implementing ``LLMProvider``.

        Raises
        ------
        UnknownProviderError
            If provider is unknown, the adapter module fails to import, the
            adapter class is missing, or the adapter constructor rejects its
            arguments.
        """
        name = (provider or "").lower().strip()
        klass = cls._resolve_class(name, provider)

        adapter_kwargs = {k: kwargs.pop(k) for k in ("transport", "retry_config") if k in kwargs}
        if options is None:
            options = cls._options_from_config(name, kwargs)

        try:
            return klass(options, **adapter_kwargs)
        except TypeError as exc:
            raise UnknownProviderError(
                f"Invalid arguments for '{provider}' adapter constructor: {exc}"
            ) from exc

    @classmethod
    def supported(cls) -> Tuple[str, ...]:
        """Return the tuple of supported canonical provider names."""
        return tuple(cls._PROVIDERS.keys())

    @classmethod
    def _resolve_class(cls, name: str, provider: str) -> Type:
        spec = cls._PROVIDERS.get(name)
        if not spec:
            raise UnknownProviderError(
                f"Unknown provider '{provider}' (supported: {', '.join(cls.supported())})"
            )
        module_path, class_name = spec["module"], spec["class"]
        try:
            mod = import_module(module_path)
        except ImportError as exc:  # pragma: no cover - import failure path
            raise UnknownProviderError(
                f"Failed to import module '{module_path}' for provider '{provider}': {exc}"
            ) from exc
        try:
            return getattr(mod, class_name)
        except AttributeError as exc:
            raise UnknownProviderError(
                f"Adapter class '{class_name}' not found in '{module_path}' for provider '{provider}'"
            ) from exc

    @staticmethod
    def _options_from_config(name: str, overrides: Mapping[str, Any]) -> ProviderOptions:
        """Merge config sources and keyword overrides into ``ProviderOptions``."""
        from ..config import get_provider_config

        normalized: Dict[str, Any] = dict(overrides)
        if "model_id" in normalized:
            normalized["model"] = normalized.pop("model_id")
        return ProviderOptions.from_config(get_provider_config(name, normalized))


def create_provider(provider: str, **kwargs: Any) -> Any:
    """Compatibility helper that delegates to :meth:`ProviderFactory.create`."""
    return ProviderFactory.create(provider, **kwargs)


__all__ = ["ProviderFactory", "UnknownProviderError", "create_provider"]
