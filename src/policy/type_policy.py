# src/policy/type_policy.py - v1
"""Supported-type policy: decides which declared item categories are processed.

The set of categories is configuration, fixed at construction and never
mutated, so one policy can be shared by concurrent batches without locking.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from itembatch.config.settings import Settings

DEFAULT_SUPPORTED_TYPES: frozenset[str] = frozenset({"image", "document", "code"})


class UnsupportedTypeError(ValueError):
    """Raised when an item's declared category is not in the supported set."""

    def __init__(self, item_type: Any) -> None:
        self.item_type = item_type
        super().__init__(f"unsupported type: {item_type}")


class TypePolicy:
    """Membership check over a fixed set of supported categories."""

    def __init__(self, supported_types: Iterable[str] = DEFAULT_SUPPORTED_TYPES) -> None:
        self._supported: frozenset[str] = frozenset(supported_types)

    @classmethod
    def from_settings(cls, settings: Settings) -> TypePolicy:
        """Build a policy from the comma-separated supported_types setting."""
        return cls(settings.supported_types_list)

    @property
    def supported_types(self) -> frozenset[str]:
        return self._supported

    def is_supported(self, item_type: Any) -> bool:
        """Return True if item_type is a supported category.

        Total over any input: non-strings and the empty string are simply
        unsupported.
        """
        return isinstance(item_type, str) and item_type in self._supported

    def check(self, item_type: Any) -> None:
        """Raise UnsupportedTypeError if item_type is not supported."""
        if not self.is_supported(item_type):
            raise UnsupportedTypeError(item_type)

    def __repr__(self) -> str:
        return f"TypePolicy({sorted(self._supported)!r})"
