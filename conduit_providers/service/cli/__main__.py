"""Run the CLI as a module.

    python -m conduit_providers.service.cli run --prompt "Say hello"
    python -m conduit_providers.service.cli transport
"""

from __future__ import annotations

from . import main

if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
