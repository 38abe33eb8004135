# tests/unit/logging/test_logger.py — v1
"""Tests for logging/logger.py — logger factory and formatters."""

from __future__ import annotations

import json
import logging
import sys

import pytest

from cnchar_data.logging.context import set_command_context, source_file_context
from cnchar_data.logging.logger import (
    JsonFormatter,
    TextFormatter,
    get_logger,
    parse_size,
    rotating_file_handler,
    setup_logging,
)


def _record(msg: str = "Hello", level: int = logging.INFO) -> logging.LogRecord:
    return logging.LogRecord(
        name="test", level=level, pathname="", lineno=0,
        msg=msg, args=(), exc_info=None,
    )


class TestJsonFormatter:
    def test_format_basic(self):
        parsed = json.loads(JsonFormatter().format(_record()))
        assert parsed["level"] == "INFO"
        assert parsed["message"] == "Hello"
        assert "timestamp" in parsed
        assert "context" not in parsed

    def test_format_with_context(self):
        set_command_context("voice")
        with source_file_context("hello.mp3"):
            parsed = json.loads(JsonFormatter().format(_record()))
        assert parsed["context"] == {"command": "voice", "source_file": "hello.mp3"}

    def test_non_ascii_kept(self):
        output = JsonFormatter().format(_record("Processed 一.json"))
        assert "一.json" in output


class TestTextFormatter:
    def test_format_basic(self):
        output = TextFormatter().format(_record("Hello text"))
        assert "Hello text" in output
        assert "INFO" in output

    def test_format_with_context(self):
        set_command_context("draw")
        with source_file_context("a.json"):
            output = TextFormatter().format(_record())
        assert "[draw]" in output
        assert "(a.json)" in output


class TestGetLogger:
    def test_returns_logger(self):
        assert get_logger("test_module").name == "cnchar_data.test_module"


class TestSetupLogging:
    def test_setup_json(self):
        setup_logging(level="DEBUG", log_format="json")
        root = logging.getLogger("cnchar_data")
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JsonFormatter)

    def test_setup_text(self):
        setup_logging(level="INFO", log_format="text")
        root = logging.getLogger("cnchar_data")
        assert root.level == logging.INFO
        assert isinstance(root.handlers[0].formatter, TextFormatter)

    def test_reinit_no_duplicate_handlers(self):
        setup_logging()
        setup_logging()
        assert len(logging.getLogger("cnchar_data").handlers) == 1

    def test_with_file(self, tmp_path):
        log_file = tmp_path / "logs" / "run.log"
        setup_logging(log_file=log_file)
        root = logging.getLogger("cnchar_data")
        assert len(root.handlers) == 2
        assert log_file.parent.is_dir()
        for handler in root.handlers[1:]:
            handler.close()
        root.handlers.clear()


class TestParseSize:
    @pytest.mark.parametrize("raw,expected", [
        ("10MB", 10 * 1024**2),
        ("512KB", 512 * 1024),
        ("1GB", 1024**3),
        ("10mb", 10 * 1024**2),
        (" 2 MB ", 2 * 1024**2),
    ])
    def test_valid(self, raw: str, expected: int):
        assert parse_size(raw) == expected

    @pytest.mark.parametrize("raw", ["10bytes", "", "MB", "1.5MB"])
    def test_invalid(self, raw: str):
        with pytest.raises(ValueError, match="Invalid size"):
            parse_size(raw)


class TestRotatingFileHandler:
    def test_limits(self, tmp_path):
        handler = rotating_file_handler(tmp_path / "run.log", rotation="1MB", retention=3)
        assert handler.maxBytes == 1024 * 1024
        assert handler.backupCount == 3
        handler.close()

    def test_creates_parent_dirs(self, tmp_path):
        handler = rotating_file_handler(str(tmp_path / "a" / "b" / "run.log"))
        assert (tmp_path / "a" / "b").is_dir()
        handler.close()


class TestExceptionFormatting:
    def test_json_includes_traceback(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = logging.LogRecord(
                name="test", level=logging.ERROR, pathname="", lineno=0,
                msg="failed", args=(), exc_info=sys.exc_info(),
            )
        parsed = json.loads(JsonFormatter().format(record))
        assert "RuntimeError: boom" in parsed["exception"]
