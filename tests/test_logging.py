"""Tests for structured JSON logging."""

import json
import logging
import os

from scanfix.core.logging import JSONFormatter, setup_logging


def _record(**kwargs):
    defaults = dict(
        name="scanfix.test",
        level=logging.INFO,
        pathname="test.py",
        lineno=1,
        msg="test",
        args=(),
        exc_info=None,
    )
    defaults.update(kwargs)
    return logging.LogRecord(**defaults)


def test_json_formatter_produces_valid_json():
    line = JSONFormatter().format(_record(msg="hello %s", args=("world",)))
    data = json.loads(line)
    assert data["level"] == "INFO"
    assert data["logger"] == "scanfix.test"
    assert data["msg"] == "hello world"
    assert "ts" in data


def test_json_formatter_includes_scan_extras():
    record = _record()
    record.scan_id = "job-1"  # type: ignore[attr-defined]
    record.generation = 3  # type: ignore[attr-defined]
    data = json.loads(JSONFormatter().format(record))
    assert data["scan_id"] == "job-1"
    assert data["generation"] == 3
    assert "file_name" not in data


def test_json_formatter_includes_exception():
    try:
        raise ValueError("boom")
    except ValueError:
        import sys

        record = _record(level=logging.ERROR, msg="failed", exc_info=sys.exc_info())
    data = json.loads(JSONFormatter().format(record))
    assert "ValueError: boom" in data["exc"]


def test_setup_logging_uses_log_level_env(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    setup_logging()
    assert logging.getLogger().level == logging.DEBUG


def test_setup_logging_defaults_to_info():
    os.environ.pop("LOG_LEVEL", None)
    setup_logging()
    assert logging.getLogger().level == logging.INFO


def test_setup_logging_quiets_httpx():
    setup_logging()
    assert logging.getLogger("httpx").level == logging.WARNING


def test_log_output_is_json(capsys):
    setup_logging()
    logging.getLogger("test.structured").info("test message")
    captured = capsys.readouterr()
    data = json.loads(captured.out.strip())
    assert data["msg"] == "test message"
