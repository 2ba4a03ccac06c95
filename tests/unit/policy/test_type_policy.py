# tests/unit/policy/test_type_policy.py - v1
"""Tests for policy/type_policy.py."""

from __future__ import annotations

import pytest

from itembatch.config.settings import Settings
from itembatch.policy.type_policy import DEFAULT_SUPPORTED_TYPES, TypePolicy, UnsupportedTypeError


class TestIsSupported:
    @pytest.mark.parametrize("item_type", ["image", "document", "code"])
    def test_default_types_supported(self, item_type):
        assert TypePolicy().is_supported(item_type) is True

    @pytest.mark.parametrize("item_type", ["binary", "", "IMAGE", " image", None, 3, ["image"]])
    def test_everything_else_unsupported(self, item_type):
        assert TypePolicy().is_supported(item_type) is False

    def test_repeated_calls_agree(self):
        policy = TypePolicy()
        assert {policy.is_supported("image") for _ in range(50)} == {True}
        assert {policy.is_supported("binary") for _ in range(50)} == {False}

    def test_injected_types_replace_defaults(self):
        policy = TypePolicy(["audio", "video"])
        assert policy.is_supported("audio")
        assert not policy.is_supported("image")

    def test_empty_policy_rejects_all(self):
        assert TypePolicy([]).is_supported("image") is False


class TestSupportedTypes:
    def test_default_set(self):
        assert TypePolicy().supported_types == DEFAULT_SUPPORTED_TYPES

    def test_caller_list_is_copied(self):
        types = ["image"]
        policy = TypePolicy(types)
        types.append("binary")
        assert not policy.is_supported("binary")

    def test_set_is_frozen(self):
        assert isinstance(TypePolicy().supported_types, frozenset)

    def test_from_settings(self):
        settings = Settings(_env_file=None, supported_types="image, audio ,")
        policy = TypePolicy.from_settings(settings)
        assert policy.supported_types == frozenset({"image", "audio"})


class TestCheck:
    def test_supported_passes(self):
        TypePolicy().check("code")

    def test_unsupported_raises_with_reason(self):
        with pytest.raises(UnsupportedTypeError, match="unsupported type: binary") as exc_info:
            TypePolicy().check("binary")
        assert exc_info.value.item_type == "binary"
        assert isinstance(exc_info.value, ValueError)
