# tests/unit/logging/test_logger.py - v2
"""Tests for logging/logger.py - logger factory and formatters."""

from __future__ import annotations

import json
import logging

from docquery.logging.context import clear_context, set_query_context
from docquery.logging.logger import JsonFormatter, TextFormatter, get_logger, setup_logging


def _record(msg: str = "Hello") -> logging.LogRecord:
    return logging.LogRecord(
        name="test", level=logging.INFO, pathname="", lineno=0,
        msg=msg, args=(), exc_info=None,
    )


class TestJsonFormatter:
    def setup_method(self):
        clear_context()

    def teardown_method(self):
        clear_context()

    def test_format_basic(self):
        parsed = json.loads(JsonFormatter().format(_record()))
        assert parsed["level"] == "INFO"
        assert parsed["message"] == "Hello"
        assert "timestamp" in parsed
        assert "query_id" not in parsed
        assert "fingerprint" not in parsed

    def test_format_with_context(self):
        set_query_context("q123", "abcdef")
        parsed = json.loads(JsonFormatter().format(_record("test msg")))
        assert parsed["query_id"] == "q123"
        assert parsed["fingerprint"] == "abcdef"

    def test_query_id_without_fingerprint(self):
        set_query_context("q7")
        parsed = json.loads(JsonFormatter().format(_record()))
        assert parsed["query_id"] == "q7"
        assert "fingerprint" not in parsed

    def test_format_extra_data(self):
        record = _record()
        record.data = {"questions": 3}
        parsed = json.loads(JsonFormatter().format(record))
        assert parsed["data"] == {"questions": 3}


class TestTextFormatter:
    def teardown_method(self):
        clear_context()

    def test_format_basic(self):
        output = TextFormatter().format(_record("Hello text"))
        assert "Hello text" in output
        assert "INFO" in output

    def test_includes_query_id(self):
        set_query_context("q999")
        assert "[q999]" in TextFormatter().format(_record())


class TestGetLogger:
    def test_returns_logger(self):
        assert get_logger("test_module").name == "docquery.test_module"


class TestSetupLogging:
    def teardown_method(self):
        logging.getLogger("docquery").handlers.clear()

    def test_json_console(self):
        setup_logging(level="DEBUG", log_format="json")
        root = logging.getLogger("docquery")
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JsonFormatter)

    def test_no_duplicate_handlers(self):
        setup_logging()
        setup_logging()
        assert len(logging.getLogger("docquery").handlers) == 1

    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "logs" / "docquery.log"
        setup_logging(log_format="text", log_file=log_file)
        get_logger("file_test").info("written")
        for handler in logging.getLogger("docquery").handlers:
            handler.flush()
        assert "written" in log_file.read_text(encoding="utf-8")
