# src/batch/transforms.py - v1
"""Per-item transforms: turn a validated item into a ProcessedResult.

A transform is any callable taking an Item and returning a ProcessedResult,
either directly or as an awaitable. The default transform copies the
item's fields and stamps the processing instant.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from datetime import datetime, timezone
from typing import Any, Union

from pydantic import ValidationError

from itembatch.core.models import Item, ProcessedResult

ItemTransform = Callable[[Item], Union[ProcessedResult, Awaitable[ProcessedResult]]]
Clock = Callable[[], datetime]


class TransformError(Exception):
    """Raised when a transform cannot produce a ProcessedResult for an item."""


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def normalize_item(item: Item, clock: Clock = utc_now) -> ProcessedResult:
    """Default transform: copy name/type/size and stamp the current instant.

    The clock is read here, when this item is transformed, not when the
    batch started.
    """
    return ProcessedResult(
        name=item.name,
        type=item.type,
        size=item.size,
        timestamp=clock().isoformat(),
    )


def make_normalizer(clock: Clock) -> Callable[[Item], ProcessedResult]:
    """Build a default transform bound to a specific clock (useful in tests)."""

    def _normalize(item: Item) -> ProcessedResult:
        return normalize_item(item, clock=clock)

    return _normalize


def coerce_item(raw: Any) -> Item:
    """Return raw as an Item, validating mappings and attribute objects.

    Raises:
        TransformError: If raw does not have a valid item shape.
    """
    if isinstance(raw, Item):
        return raw
    try:
        if isinstance(raw, Mapping):
            return Item.model_validate(dict(raw))
        return Item.model_validate(raw, from_attributes=True)
    except ValidationError as exc:
        raise TransformError(describe_error(exc)) from exc


def describe_error(exc: BaseException) -> str:
    """Human-readable, single-line description of an item-level error."""
    if isinstance(exc, ValidationError):
        parts = []
        for err in exc.errors():
            loc = ".".join(str(p) for p in err.get("loc", ())) or "item"
            parts.append(f"{loc}: {err.get('msg', 'invalid')}")
        return "invalid item: " + "; ".join(parts)
    message = str(exc).strip()
    return message or type(exc).__name__
