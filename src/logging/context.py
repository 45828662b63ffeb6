# src/logging/context.py - v1
"""Contextual logging support: attach query_id and fingerprint to log records."""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any

# Set per orchestrated call; asyncio tasks each see their own copy.
_query_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "query_id", default=None
)
_fingerprint: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "fingerprint", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    query_id: str | None = None
    fingerprint: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        query_id=_query_id.get(),
        fingerprint=_fingerprint.get(),
    )


def set_query_context(query_id: str, fingerprint: str | None = None) -> None:
    """Set query-level context (called once per orchestrated call)."""
    _query_id.set(query_id)
    _fingerprint.set(fingerprint)


def clear_context() -> None:
    """Reset all context variables."""
    _query_id.set(None)
    _fingerprint.set(None)
