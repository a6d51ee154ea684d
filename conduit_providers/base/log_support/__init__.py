"""Logging support: the JSON formatter and per-call context."""

from .json_formatter import JsonFormatter, ISO
from .logging_context import LogContext, new_call_id

__all__ = ["JsonFormatter", "ISO", "LogContext", "new_call_id"]
