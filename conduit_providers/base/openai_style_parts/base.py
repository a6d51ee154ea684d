"""BaseOpenAIStyleProvider implementation.

Purpose:
- Provide a reusable base class for providers exposing an OpenAI-compatible
  Chat Completions streaming interface. Subclasses supply a ``_ProviderInit``
  (name, base URL, static model mapping, default model) and may override the
  usage translation hook.

External dependencies:
- ``openai`` SDK client, handed an ``httpx.Client`` from the process-wide
  :class:`~conduit_providers.base.http.TransportContext` so every request
  honors the configured proxy and CA bundle. SDK-level retries are disabled;
  :func:`~conduit_providers.base.resilience.retry.retry_stream` owns retries.

Failure semantics:
- Missing API key raises :class:`AuthenticationError` on the first ``next()``
  of ``create_message`` before any client or request is created.
- The first malformed chunk of a stream is logged and skipped; the next one
  raises :class:`ProtocolError`.
- Failures after the first emitted event are terminal (no retry).
"""

from __future__ import annotations

import json
import logging
import threading
from dataclasses import replace
from typing import Any, Dict, Iterator, List, Mapping, Optional, Union

from openai import OpenAI

from ..constants import MAX_MALFORMED_CHUNKS, MISSING_API_KEY_ERROR
from ..dto import ProviderOptions
from ..errors import AuthenticationError, ConfigurationError, ErrorCode, ProtocolError, ProviderError
from ..http import TransportContext, get_transport
from ..logging import LogContext, get_logger, normalized_log_event
from ..models import ConversationInput, ModelInfo, ResolvedModel
from ..resilience.retry import RetryConfig, retry_stream
from ..streaming import StreamEvent, StreamMetrics, UsageEvent, finalize_stream
from .client_protocol import _ChatCompletionsClient
from .provider_init import _ProviderInit
from .style_helpers import (
    MalformedChunkError,
    build_stream_params,
    convert_to_openai_messages,
    price_usage,
    translate_openai_chunk,
    translate_usage,
)
from ...config import get_provider_config

OptionsLike = Union[ProviderOptions, Mapping[str, Any], None]


def _coerce_options(options: OptionsLike, api_key: Optional[str], model_id: Optional[str]) -> ProviderOptions:
    if options is None:
        return ProviderOptions(api_key=api_key, model_id=model_id)
    if isinstance(options, ProviderOptions):
        return options
    return ProviderOptions.model_validate(dict(options))


class BaseOpenAIStyleProvider:
    """Reusable base class for OpenAI-compatible providers.

    Satisfies :class:`~conduit_providers.base.interfaces.LLMProvider` and
    :class:`~conduit_providers.base.interfaces.HasDefaultModel`. The client
    handle is created lazily on first use and cached for the adapter's
    lifetime; it is never shared between adapter instances.
    """

    def __init__(
        self,
        init: _ProviderInit,
        options: OptionsLike = None,
        *,
        api_key: Optional[str] = None,
        model_id: Optional[str] = None,
        transport: Optional[TransportContext] = None,
        retry_config: Optional[RetryConfig] = None,
    ) -> None:
        """Initialize a provider with shared configuration.

        Parameters:
            init: Fixed provider facts (name, base URL, models, logger name).
            options: ``ProviderOptions`` or a mapping accepted by it
                (``{"apiKey": ..., "modelId": ...}``). When omitted, the
                ``api_key``/``model_id`` keywords are used.
            transport: Transport to issue requests through; defaults to the
                process-wide context on first use.
            retry_config: Explicit retry policy; defaults to the provider's
                ``retry`` config section.
        """
        self._init = init
        self._options = _coerce_options(options, api_key, model_id)
        self._transport = transport
        self._retry_config = retry_config
        self._logger = get_logger(init.logger_name)
        self._client: Optional[_ChatCompletionsClient] = None
        self._client_lock = threading.Lock()

    # ----- identity & models -----
    @property
    def provider_name(self) -> str:
        """Return the canonical provider name (e.g., ``nousresearch``)."""
        return self._init.provider_name

    @property
    def options(self) -> ProviderOptions:
        return self._options

    @property
    def models(self) -> Mapping[str, ModelInfo]:
        return self._init.models

    def default_model(self) -> str:
        """Return the provider's designated default model identifier."""
        return self._init.default_model_id

    def get_model(self) -> ResolvedModel:
        """Return the configured model if it is known, else the default one.

        Never raises: unknown or absent identifiers resolve to the default.
        """
        model_id = self._options.model_id
        if model_id and model_id in self._init.models:
            return ResolvedModel(id=model_id, info=self._init.models[model_id])
        default_id = self._init.default_model_id
        return ResolvedModel(id=default_id, info=self._init.models[default_id])

    # ----- client handle -----
    def _base_url(self) -> str:
        return self._options.extra.get("base_url") or self._init.base_url

    def _make_client(self, api_key: str) -> _ChatCompletionsClient:
        """Create the SDK client bound to the shared transport."""
        transport = self._transport or get_transport()
        return OpenAI(
            api_key=api_key,
            base_url=self._base_url(),
            http_client=transport.create_client(),
            max_retries=0,
        )

    def _ensure_client(self) -> _ChatCompletionsClient:
        """Return the cached client, creating it on first use.

        Raises:
            AuthenticationError: when no API key is configured.
            ConfigurationError: when the SDK rejects the client configuration.
        """
        if self._client is not None:
            return self._client
        api_key = self._options.api_key
        if not api_key:
            raise AuthenticationError(
                code=ErrorCode.AUTH,
                message=f"{self._init.display_name} {MISSING_API_KEY_ERROR}",
                provider=self.provider_name,
                model=self.get_model().id,
            )
        with self._client_lock:
            if self._client is None:
                try:
                    self._client = self._make_client(api_key)
                except ProviderError:
                    raise
                except Exception as e:  # noqa: BLE001 - any SDK construction failure is a config problem
                    raise ConfigurationError(
                        code=ErrorCode.CONFIGURATION,
                        message=f"error creating {self._init.display_name} client: {e}",
                        provider=self.provider_name,
                        model=self.get_model().id,
                    ) from e
            return self._client

    def close(self) -> None:
        """Release the client handle and its connection pool."""
        with self._client_lock:
            client, self._client = self._client, None
        if client is not None:
            client.close()

    # ----- streaming -----
    def create_message(self, system_prompt: str, history: ConversationInput) -> Iterator[StreamEvent]:
        """Stream one completion for ``history`` as normalized events.

        Every call issues a new backend request. The returned iterator is
        lazy; closing it early closes the underlying HTTP stream.
        """
        model = self.get_model()
        ctx = LogContext.for_call(self.provider_name, model.id)
        client = self._ensure_client()
        messages: List[Dict[str, Any]] = [{"role": "system", "content": system_prompt}]
        messages.extend(convert_to_openai_messages(history))
        params = build_stream_params(model.id, messages, self._init.temperature)

        self._log_stream_start(ctx, params)
        metrics = StreamMetrics()
        events = retry_stream(
            lambda: self._stream_once(client, params, ctx, metrics),
            self._build_retry_config(ctx),
            provider=self.provider_name,
            model=model.id,
        )
        error: Optional[BaseException] = None
        completed = False
        try:
            for event in events:
                metrics.record(event)
                yield event
            completed = True
        except Exception as e:
            error = e
            raise
        finally:
            events.close()
            finalize_stream(
                logger=self._logger,
                ctx=ctx,
                metrics=metrics,
                error=error,
                cancelled=not completed and error is None,
            )

    def _stream_once(
        self,
        client: _ChatCompletionsClient,
        params: Dict[str, Any],
        ctx: LogContext,
        metrics: StreamMetrics,
    ) -> Iterator[StreamEvent]:
        """Issue a single streaming request and translate its chunks."""
        stream = client.chat.completions.create(**params)
        info = self.models.get(params["model"])
        malformed = 0
        try:
            for chunk in stream:
                try:
                    translated = translate_openai_chunk(chunk, self._translate_usage)
                except MalformedChunkError as e:
                    malformed += 1
                    metrics.malformed_chunks += 1
                    if malformed > MAX_MALFORMED_CHUNKS:
                        raise ProtocolError(
                            code=ErrorCode.PROTOCOL,
                            message=f"repeated malformed stream chunk: {e}",
                            provider=self.provider_name,
                            model=params["model"],
                        ) from e
                    normalized_log_event(
                        self._logger,
                        "stream.protocol_error",
                        ctx,
                        phase="stream",
                        emitted=metrics.emitted,
                        tokens=None,
                        error_code=ErrorCode.PROTOCOL.value,
                        level=logging.WARNING,
                        detail=str(e),
                    )
                    continue
                for event in translated:
                    yield price_usage(event, info) if isinstance(event, UsageEvent) else event
        except json.JSONDecodeError as e:
            raise ProtocolError(
                code=ErrorCode.PROTOCOL,
                message=f"undecodable stream chunk: {e}",
                provider=self.provider_name,
                model=params["model"],
            ) from e
        finally:
            close = getattr(stream, "close", None)
            if callable(close):
                close()

    def _translate_usage(self, usage: Any) -> UsageEvent:
        """Map a backend usage object to a :class:`UsageEvent`; override for vendor fields."""
        return translate_usage(usage)

    # ----- helpers -----
    def _log_stream_start(self, ctx: LogContext, params: Dict[str, Any]) -> None:
        normalized_log_event(
            self._logger,
            "stream.start",
            ctx,
            phase="start",
            attempt=None,
            emitted=None,
            tokens=None,
            temperature=params.get("temperature"),
            messages=len(params["messages"]),
        )

    def _retry_settings(self) -> Mapping[str, Any]:
        section = self._options.extra.get("retry")
        if section is None:
            section = get_provider_config(self.provider_name).get("retry")
        return section if isinstance(section, Mapping) else {}

    def _build_retry_config(self, ctx: LogContext) -> RetryConfig:
        def _attempt_logger(*, attempt: int, max_attempts: int, delay, error: ProviderError | None):  # type: ignore[override]
            normalized_log_event(
                self._logger,
                "retry.attempt",
                ctx,
                phase="retry",
                attempt=attempt + 1,
                max_attempts=max_attempts,
                delay=delay,
                error_code=(error.code.value if error else None),
                will_retry=bool(error and delay is not None),
                level=logging.WARNING if error else logging.DEBUG,
                tokens=None,
                emitted=None,
            )

        if self._retry_config is not None:
            if self._retry_config.attempt_logger is None:
                return replace(self._retry_config, attempt_logger=_attempt_logger)
            return self._retry_config

        raw = self._retry_settings()
        defaults = RetryConfig()
        try:
            return RetryConfig(
                max_attempts=int(raw.get("max_attempts", defaults.max_attempts)),
                delay_base=float(raw.get("delay_base", defaults.delay_base)),
                max_delay=float(raw.get("max_delay", defaults.max_delay)),
                attempt_logger=_attempt_logger,
            )
        except (TypeError, ValueError) as e:
            raise ConfigurationError(
                code=ErrorCode.CONFIGURATION,
                message=f"invalid retry settings for {self.provider_name}: {e}",
                provider=self.provider_name,
            ) from e


__all__ = ["BaseOpenAIStyleProvider"]
