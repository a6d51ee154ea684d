"""CLI parser construction for conduit-providers.

This module wires subparsers but contains no execution logic. Subcommand
handlers live in ``cli_actions`` to keep files small and testable.
"""

from __future__ import annotations

import argparse

from ...base.factory import ProviderFactory
from ...config.defaults import PROVIDER_CLI_DEFAULT_PROVIDER, PROVIDER_CLI_DEFAULT_SYSTEM_PROMPT
from .cli_utils import parse_verbosity


def _verbosity(value: str) -> str:
    level = parse_verbosity(value)
    if level is None:
        raise argparse.ArgumentTypeError(f"invalid log level: {value!r}")
    return level


def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level CLI parser and subcommands.

    Returns
    -------
    argparse.ArgumentParser
        Configured parser with ``run``, ``transport`` and ``models`` subcommands.

    This function performs no side effects and wires only argument shapes.
    """
    p = argparse.ArgumentParser(
        prog="conduit-providers",
        description="Stream completions through proxy-aware provider adapters",
    )
    p.add_argument(
        "--log-level",
        type=_verbosity,
        default=None,
        help="Log verbosity for structured logs on stderr (debug, info, warning, error, quiet)",
    )
    sub = p.add_subparsers(dest="cmd")

    providers = list(ProviderFactory.supported())

    # run
    p_run = sub.add_parser("run", help="Stream one completion and print its events")
    p_run.add_argument("--provider", default=PROVIDER_CLI_DEFAULT_PROVIDER, choices=providers)
    p_run.add_argument("--model", default=None)
    p_run.add_argument("--system", default=PROVIDER_CLI_DEFAULT_SYSTEM_PROMPT)
    p_run.add_argument("--prompt", required=True)
    p_run.add_argument("--json", action="store_true", help="Emit one JSON object per event")
    p_run.add_argument("--dry-run", action="store_true", help="Print the resolved plan without network I/O")

    # transport
    sub.add_parser("transport", help="Print the resolved network transport (credentials redacted)")

    # models
    p_models = sub.add_parser("models", help="Print the static model mapping for a provider")
    p_models.add_argument("--provider", default=PROVIDER_CLI_DEFAULT_PROVIDER, choices=providers)

    return p
