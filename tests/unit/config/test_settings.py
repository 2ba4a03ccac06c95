# tests/unit/config/test_settings.py - v1
"""Tests for config/settings.py: typed Settings and validation rules."""

from __future__ import annotations

from pathlib import Path

import pytest

from itembatch.config.settings import ConfigurationError, Settings, load_settings


class TestSettingsDefaults:
    def test_default_policy(self):
        s = Settings(_env_file=None)
        assert s.supported_types_list == ["image", "document", "code"]
        assert s.max_item_size_bytes is None

    def test_default_execution(self):
        s = Settings(_env_file=None)
        assert s.max_concurrency == 1
        assert s.scan_recursive is True

    def test_default_logging(self):
        s = Settings(_env_file=None)
        assert s.log_level == "INFO"
        assert s.log_format == "text"
        assert s.log_file is None


class TestSettingsParsing:
    def test_supported_types_trimmed(self):
        s = Settings(_env_file=None, supported_types=" image , ,audio ")
        assert s.supported_types_list == ["image", "audio"]

    def test_log_level_case_insensitive(self):
        assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"

    def test_env_file(self, tmp_path: Path):
        env = tmp_path / ".env"
        env.write_text("SUPPORTED_TYPES=video\nMAX_CONCURRENCY=8\n")
        s = Settings(_env_file=env)
        assert s.supported_types_list == ["video"]
        assert s.max_concurrency == 8

    def test_env_var(self, monkeypatch):
        monkeypatch.setenv("MAX_ITEM_SIZE_BYTES", "2048")
        assert Settings(_env_file=None).max_item_size_bytes == 2048


class TestSettingsValidation:
    def test_empty_supported_types(self):
        with pytest.raises(ConfigurationError, match="SUPPORTED_TYPES"):
            Settings(_env_file=None, supported_types=" , ")

    def test_concurrency_below_one(self):
        with pytest.raises(ConfigurationError, match="MAX_CONCURRENCY"):
            Settings(_env_file=None, max_concurrency=0)

    def test_non_positive_size_limit(self):
        with pytest.raises(ConfigurationError, match="MAX_ITEM_SIZE_BYTES"):
            Settings(_env_file=None, max_item_size_bytes=0)

    def test_errors_are_combined(self):
        with pytest.raises(ConfigurationError) as exc_info:
            Settings(_env_file=None, max_concurrency=0, log_retention=-1)
        assert "MAX_CONCURRENCY" in str(exc_info.value)
        assert "LOG_RETENTION" in str(exc_info.value)

    def test_invalid_log_format(self):
        with pytest.raises(ValueError):
            Settings(_env_file=None, log_format="xml")


class TestLoadSettings:
    def test_overrides(self):
        s = load_settings(_env_file=None, max_concurrency=3)
        assert s.max_concurrency == 3
