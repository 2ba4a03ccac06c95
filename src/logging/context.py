# src/logging/context.py - v3
"""Contextual logging support: attach batch_id and item_name to log records."""

from __future__ import annotations

import contextvars
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

# Set per batch run; item_name is set per item. Concurrent item tasks each
# run in a copied context, so item names never leak between siblings.
_batch_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "batch_id", default=None
)
_item_name: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "item_name", default=None
)


@dataclass(frozen=True)
class LogContext:
    """Immutable snapshot of current logging context."""

    batch_id: str | None = None
    item_name: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    return LogContext(batch_id=_batch_id.get(), item_name=_item_name.get())


def set_batch_context(batch_id: str) -> None:
    """Set batch-level context and reset any stale item name."""
    _batch_id.set(batch_id)
    _item_name.set(None)


def set_item_context(item_name: str | None) -> None:
    _item_name.set(item_name)


def clear_context() -> None:
    _batch_id.set(None)
    _item_name.set(None)


@contextmanager
def batch_context(batch_id: str) -> Iterator[None]:
    """Scope batch_id (and a fresh item_name) to a block, then restore the caller's values."""
    batch_token = _batch_id.set(batch_id)
    item_token = _item_name.set(None)
    try:
        yield
    finally:
        _item_name.reset(item_token)
        _batch_id.reset(batch_token)


@contextmanager
def item_context(item_name: str) -> Iterator[None]:
    token = _item_name.set(item_name)
    try:
        yield
    finally:
        _item_name.reset(token)
