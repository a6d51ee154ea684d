"""CLI action handlers.

Purpose
-------
Subcommand handlers for the conduit-providers CLI, keeping the entrypoint
minimal. This module has no top-level side effects and is safe to import in
tests.

Fallback & Error Semantics
--------------------------
- ``run --dry-run``, ``transport`` and ``models`` perform no network I/O.
- Errors are written as JSON to stderr. Exit code ``2`` marks configuration
  problems (unknown provider, missing API key, unreadable config or CA
  bundle); ``1`` marks request failures after retries.
"""

from __future__ import annotations

import argparse
import dataclasses
import sys
from typing import Any, Dict, Iterable, Iterator, Optional

from ...base.errors import ConfigurationError, ProviderError
from ...base.factory import ProviderFactory, UnknownProviderError
from ...base.http import get_transport
from ...base.models import Message
from ...base.streaming import ReasoningEvent, StreamEvent, TextEvent, UsageEvent, summarize_events
from ...config.env import get_env_var_candidates
from .cli_utils import print_json


def _error(payload: Dict[str, Any]) -> None:
    print_json(payload, stream=sys.stderr, indent=None)


def _provider_error_payload(err: ProviderError) -> Dict[str, Any]:
    return {
        "error": err.message,
        "kind": type(err).__name__,
        "code": err.code.value,
        "provider": err.provider,
        "model": err.model,
        "status_code": err.status_code,
        "attempts": err.attempts,
    }


def report_provider_error(err: ProviderError) -> None:
    """Write a JSON description of ``err`` to stderr."""
    _error(_provider_error_payload(err))


def instantiate_adapter(provider: str, model: Optional[str] = None) -> Any:
    """Instantiate an adapter from merged config with an optional model override.

    Raises:
        UnknownProviderError: for unknown providers.
        ConfigurationError: when the provider config file is unreadable.
    """
    return ProviderFactory.create(provider, model=model)


def plan_run(*, provider: str, model: Optional[str], prompt: Optional[str]) -> Dict[str, Any]:
    """Compute a dry-run execution plan for a provider call without I/O.

    Returns
    -------
    Dict[str, Any]
        JSON-serializable summary of the intended call (no network access).
    """
    adapter = instantiate_adapter(provider, model)
    resolved = adapter.get_model()
    return {
        "provider": provider,
        "model": resolved.id,
        "model_known": model is None or model == resolved.id,
        "prompt_preview": (f"{prompt[:64]}..." if (prompt and len(prompt) > 64) else prompt),
        "api_key_present": bool(adapter.options.api_key),
        "api_key_env": list(get_env_var_candidates(provider)),
        "transport": get_transport().describe(),
    }


def _event_dict(event: StreamEvent) -> Dict[str, Any]:
    if isinstance(event, UsageEvent):
        return {"type": event.type, **event.to_dict()}
    return dataclasses.asdict(event)


def _echo(events: Iterable[StreamEvent], *, as_json: bool) -> Iterator[StreamEvent]:
    """Print each event as it arrives and pass it through unchanged."""
    for event in events:
        if as_json:
            print_json(_event_dict(event), indent=None)
        elif isinstance(event, TextEvent):
            sys.stdout.write(event.content)
            sys.stdout.flush()
        elif isinstance(event, ReasoningEvent):
            sys.stderr.write(event.content)
            sys.stderr.flush()
        yield event


def handle_run(args: argparse.Namespace) -> int:
    """Stream one completion for ``--prompt`` and print its events.

    Text deltas go to stdout, reasoning deltas to stderr, and a usage line is
    printed to stderr once the stream completes. With ``--json`` every event
    is printed to stdout as one JSON object per line.
    """
    try:
        if args.dry_run:
            print_json(plan_run(provider=args.provider, model=args.model, prompt=args.prompt))
            return 0
        adapter = instantiate_adapter(args.provider, args.model)
    except UnknownProviderError as e:
        _error({"error": str(e)})
        return 2
    except ConfigurationError as e:
        report_provider_error(e)
        return 2

    history = [Message(role="user", content=args.prompt)]
    try:
        summary = summarize_events(
            _echo(adapter.create_message(args.system, history), as_json=args.json)
        )
    except ConfigurationError as e:
        payload = _provider_error_payload(e)
        if not adapter.options.api_key:
            payload["set_one_of_env"] = list(get_env_var_candidates(args.provider))
        _error(payload)
        return 2
    except ProviderError as e:
        if not args.json:
            sys.stdout.write("\n")
        report_provider_error(e)
        return 1
    finally:
        adapter.close()

    if not args.json:
        sys.stdout.write("\n")
        sys.stdout.flush()
        line = (
            f"[{adapter.get_model().id}] input_tokens={summary.input_tokens} "
            f"output_tokens={summary.output_tokens}"
        )
        if summary.total_cost is not None:
            line += f" cost_usd={summary.total_cost:.6f}"
        print(line, file=sys.stderr)
    return 0


def handle_transport(args: argparse.Namespace) -> int:
    """Print the process transport summary (proxies redacted)."""
    print_json(get_transport().describe())
    return 0


def handle_models(args: argparse.Namespace) -> int:
    """Print the default model and static model mapping for ``--provider``."""
    try:
        adapter = instantiate_adapter(args.provider)
    except UnknownProviderError as e:
        _error({"error": str(e)})
        return 2
    except ConfigurationError as e:
        report_provider_error(e)
        return 2
    print_json(
        {
            "provider": adapter.provider_name,
            "default": adapter.default_model(),
            "configured": adapter.get_model().id,
            "models": {model_id: info.to_dict() for model_id, info in adapter.models.items()},
        }
    )
    return 0


__all__ = [
    "handle_run",
    "handle_transport",
    "handle_models",
    "plan_run",
    "instantiate_adapter",
    "report_provider_error",
]
