# tests/unit/logging/test_logger.py - v1
"""Tests for logging/logger.py: logger factory and formatters."""

from __future__ import annotations

import io
import json
import logging
import sys

from itembatch.logging.context import set_batch_context, set_item_context
from itembatch.logging.logger import JsonFormatter, TextFormatter, get_logger, setup_logging


def _record(msg: str = "Hello", level: int = logging.INFO) -> logging.LogRecord:
    return logging.LogRecord(
        name="test", level=level, pathname="", lineno=0, msg=msg, args=(), exc_info=None,
    )


class TestJsonFormatter:
    def test_format_basic(self):
        parsed = json.loads(JsonFormatter().format(_record()))
        assert parsed["level"] == "INFO"
        assert parsed["message"] == "Hello"
        assert "timestamp" in parsed
        assert "context" not in parsed

    def test_format_with_context(self):
        set_batch_context("batch1")
        set_item_context("a.png")
        parsed = json.loads(JsonFormatter().format(_record("test msg")))
        assert parsed["context"] == {"batch_id": "batch1", "item_name": "a.png"}

    def test_format_extra_data(self):
        record = _record()
        record.data = {"items": 3}
        parsed = json.loads(JsonFormatter().format(record))
        assert parsed["data"] == {"items": 3}

    def test_format_exception(self):
        try:
            raise RuntimeError("bad")
        except RuntimeError:
            record = _record()
            record.exc_info = sys.exc_info()
        parsed = json.loads(JsonFormatter().format(record))
        assert "RuntimeError: bad" in parsed["exception"]


class TestTextFormatter:
    def test_format_basic(self):
        output = TextFormatter().format(_record("Hello text"))
        assert "Hello text" in output
        assert "INFO" in output

    def test_format_with_context(self):
        set_batch_context("batch9")
        set_item_context("b.exe")
        output = TextFormatter().format(_record("failed"))
        assert "[batch9]" in output
        assert "(b.exe)" in output


class TestGetLogger:
    def test_returns_namespaced_logger(self):
        assert get_logger("test_module").name == "itembatch.test_module"


class TestSetupLogging:
    def test_setup_json(self):
        stream = io.StringIO()
        root = setup_logging(level="DEBUG", log_format="json", stream=stream)
        assert root.level == logging.DEBUG
        get_logger("unit").debug("json line")
        assert json.loads(stream.getvalue().strip())["message"] == "json line"

    def test_setup_text(self):
        root = setup_logging(level="info", log_format="text", stream=io.StringIO())
        assert root.level == logging.INFO
        assert isinstance(root.handlers[0].formatter, TextFormatter)

    def test_reinit_does_not_duplicate_handlers(self):
        setup_logging(stream=io.StringIO())
        root = setup_logging(stream=io.StringIO())
        assert len(root.handlers) == 1

    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "logs" / "itembatch.log"
        root = setup_logging(log_format="json", log_file=log_file, stream=io.StringIO())
        get_logger("unit").warning("to file")
        for handler in root.handlers:
            handler.flush()
        assert "to file" in log_file.read_text()
        assert len(root.handlers) == 2
        setup_logging(stream=io.StringIO())
