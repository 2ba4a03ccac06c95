# tests/unit/policy/test_size_policy.py - v1
"""Tests for policy/size_policy.py."""

from __future__ import annotations

import pytest

from itembatch.policy.size_policy import ItemTooLargeError, SizePolicy


class TestSizePolicy:
    def test_at_limit_passes(self):
        SizePolicy(100).check(100)

    def test_over_limit_raises(self):
        with pytest.raises(ItemTooLargeError, match="size exceeds limit: 101 > 100") as exc_info:
            SizePolicy(100).check(101)
        assert exc_info.value.size == 101
        assert exc_info.value.limit == 100

    @pytest.mark.parametrize("limit", [0, -5])
    def test_invalid_limit(self, limit):
        with pytest.raises(ValueError, match="max_bytes"):
            SizePolicy(limit)
