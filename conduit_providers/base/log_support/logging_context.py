"""Per-call logging context for provider stream events.

:class:`LogContext` carries the fields every event of one ``create_message``
call shares: provider, resolved model and a short call id that ties
``stream.start``, ``retry.attempt`` and ``stream.finalize`` together.
"""
from __future__ import annotations

import uuid
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional


def new_call_id() -> str:
    return uuid.uuid4().hex[:12]


@dataclass
class LogContext:
    """Structured context for provider logging events."""

    provider: Optional[str] = None
    model: Optional[str] = None
    call_id: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def for_call(cls, provider: str, model: str, **extra: Any) -> "LogContext":
        """Return a context stamped with a fresh call id."""
        return cls(provider=provider, model=model, call_id=new_call_id(), extra=dict(extra))

    def to_dict(self) -> Dict[str, Any]:
        """Flatten into event fields; ``extra`` keys are merged and ``None`` values dropped."""
        data = asdict(self)
        extra = data.pop("extra", {}) or {}
        data.update({k: v for k, v in extra.items() if v is not None})
        return {k: v for k, v in data.items() if v is not None}


__all__ = ["LogContext", "new_call_id"]
