"""conduit-providers CLI (package entrypoint).

This package wires argument parsing to action handlers kept in small, focused
modules. It performs no provider logic directly.

Public API re-exports:
- ``main``: CLI entrypoint callable
"""

from __future__ import annotations

import os
import sys
from typing import Optional

from ...base.errors import ConfigurationError
from ...base.http import init_transport
from ...base.logging import LOG_LEVEL_ENV, configure_logger
from .cli_actions import handle_models, handle_run, handle_transport, report_provider_error
from .cli_parser import build_parser

_DEFAULT_CLI_LOG_LEVEL = "WARNING"


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entrypoint.

    Parameters
    ----------
    argv: Optional[list[str]]
        Argument vector; when ``None`` uses ``sys.argv[1:]``.

    Returns
    -------
    int
        Process exit code (0 success, 2 configuration error, 1 other failure).
    """
    p = build_parser()
    args = p.parse_args(list(sys.argv[1:] if argv is None else argv))
    if args.cmd is None:
        p.print_help(sys.stderr)
        return 2

    # Transport first: its selection must happen before logging is configured.
    try:
        init_transport()
    except ConfigurationError as e:
        report_provider_error(e)
        return 2
    configure_logger(level=args.log_level or os.getenv(LOG_LEVEL_ENV) or _DEFAULT_CLI_LOG_LEVEL)

    if args.cmd == "transport":
        return handle_transport(args)
    if args.cmd == "models":
        return handle_models(args)
    return handle_run(args)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
