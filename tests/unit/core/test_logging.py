"""Unit tests for core/logging.py"""

import json
import logging
from pathlib import Path

from noteguard.core.logging import (
    MASK,
    JSONFormatter,
    SensitiveDataFilter,
    _loggable_path,
    build_logging_config,
    get_log_level,
    get_logger,
)


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("noteguard.test", logging.INFO, __file__, 1, "hello %s", ("world",), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_sensitive_fields_are_masked():
    record = _record(content="my diary", share_token="abc", note_id="n-1", password=None)

    assert SensitiveDataFilter().filter(record) is True
    assert record.content == MASK
    assert record.share_token == MASK
    assert record.note_id == "n-1"
    assert record.password is None


def test_json_formatter_includes_extra():
    record = _record(note_id="n-1")
    payload = json.loads(JSONFormatter().format(record))

    assert payload["message"] == "hello world"
    assert payload["level"] == "INFO"
    assert payload["extra"] == {"note_id": "n-1"}


def test_share_tokens_are_hidden_in_paths():
    assert _loggable_path("/api/notes/share/secret-token") == f"/api/notes/share/{MASK}"
    assert _loggable_path("/api/notes/123/share") == "/api/notes/123/share"
    assert _loggable_path("/api/notes/") == "/api/notes/"


def test_console_only_without_log_dir():
    config = build_logging_config()
    assert set(config["handlers"]) == {"console"}
    assert config["loggers"]["noteguard"]["handlers"] == ["console"]
    assert config["handlers"]["console"]["filters"] == ["sensitive"]


def test_file_handlers_with_log_dir(tmp_path: Path):
    config = build_logging_config(tmp_path)
    assert config["handlers"]["file"]["filename"] == str(tmp_path / "noteguard.log")
    assert config["handlers"]["error_file"]["level"] == "ERROR"
    assert config["loggers"]["noteguard"]["handlers"] == ["console", "file", "error_file"]


def test_log_level_parsing():
    assert get_log_level("debug") == logging.DEBUG
    assert get_log_level("not-a-level") == logging.INFO


def test_get_logger_is_namespaced():
    assert get_logger("http").name == "noteguard.http"
