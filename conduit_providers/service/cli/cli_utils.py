# -*- coding: utf-8 -*-
"""Utility helpers shared by the CLI subcommands.

Functions
---------
- ``parse_verbosity(value)``: Map user strings and synonyms to a canonical
  logging level name.
- ``print_json(data)``: Write one JSON document to stdout.
"""

from __future__ import annotations

import json
import sys
from typing import Any, Optional, TextIO


def parse_verbosity(value: str) -> Optional[str]:
    """Parse a user-provided verbosity string into a canonical level.

    Accepted values (case-insensitive):
    - Canonical: DEBUG, INFO, WARNING, ERROR, CRITICAL
    - Synonyms: verbose->DEBUG; warn->WARNING; err/quiet->ERROR;
      crit/silent->CRITICAL

    Returns ``None`` for unknown values.
    """
    v = value.strip().lower()
    mapping = {
        "debug": "DEBUG",
        "verbose": "DEBUG",
        "info": "INFO",
        "warning": "WARNING",
        "warn": "WARNING",
        "error": "ERROR",
        "err": "ERROR",
        "quiet": "ERROR",
        "critical": "CRITICAL",
        "crit": "CRITICAL",
        "silent": "CRITICAL",
    }
    return mapping.get(v)


def print_json(data: Any, *, stream: Optional[TextIO] = None, indent: Optional[int] = 2) -> None:
    """Write ``data`` as JSON followed by a newline."""
    out = stream or sys.stdout
    out.write(json.dumps(data, ensure_ascii=False, indent=indent, default=str))
    out.write("\n")
    out.flush()


__all__ = ["parse_verbosity", "print_json"]
