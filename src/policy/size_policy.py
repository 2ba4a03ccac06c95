# src/policy/size_policy.py - v2
"""Optional per-item size limit, applied after the type and shape checks."""

from __future__ import annotations


class ItemTooLargeError(ValueError):
    """Raised when an item's declared size exceeds the configured limit."""

    def __init__(self, size: int, limit: int) -> None:
        self.size = size
        self.limit = limit
        super().__init__(f"size exceeds limit: {size} > {limit}")


class SizePolicy:
    """Reject items whose declared size is above max_bytes.

    Applied to validated Items, so size is always a non-negative int.
    """

    def __init__(self, max_bytes: int) -> None:
        if max_bytes <= 0:
            raise ValueError("max_bytes must be > 0")
        self._max_bytes = max_bytes

    @property
    def max_bytes(self) -> int:
        return self._max_bytes

    def check(self, size: int) -> None:
        if size > self._max_bytes:
            raise ItemTooLargeError(size, self._max_bytes)
