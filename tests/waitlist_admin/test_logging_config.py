from __future__ import annotations

import json
import logging

import pytest
from pythonjsonlogger import jsonlogger

from waitlist_admin.logging_config import configure_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    werkzeug = logging.getLogger("werkzeug")
    handlers, level, werkzeug_level = list(root.handlers), root.level, werkzeug.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
    werkzeug.setLevel(werkzeug_level)


def test_json_format_is_default(restore_root_logger, monkeypatch):
    monkeypatch.delenv("WAITLIST_ADMIN_LOG_FORMAT", raising=False)
    configure_logging()

    handlers = restore_root_logger.handlers
    assert len(handlers) == 1
    assert isinstance(handlers[0].formatter, jsonlogger.JsonFormatter)


def test_json_records_use_short_keys(restore_root_logger):
    configure_logging(force_format="json")
    record = logging.LogRecord("waitlist_admin.demo", logging.WARNING, __file__, 1, "moved %d", (3,), None)

    payload = json.loads(restore_root_logger.handlers[0].formatter.format(record))

    assert payload["level"] == "WARNING"
    assert payload["logger"] == "waitlist_admin.demo"
    assert payload["message"] == "moved 3"


def test_plain_format_from_env(restore_root_logger, monkeypatch):
    monkeypatch.setenv("WAITLIST_ADMIN_LOG_FORMAT", "plain")
    configure_logging(level=logging.DEBUG)

    handler = restore_root_logger.handlers[0]
    assert not isinstance(handler.formatter, jsonlogger.JsonFormatter)
    assert restore_root_logger.level == logging.DEBUG


def test_force_format_wins_over_env(restore_root_logger, monkeypatch):
    monkeypatch.setenv("WAITLIST_ADMIN_LOG_FORMAT", "plain")
    configure_logging(force_format="json")
    assert isinstance(restore_root_logger.handlers[0].formatter, jsonlogger.JsonFormatter)


@pytest.mark.parametrize(("raw", "expected"), [("debug", logging.DEBUG), ("nonsense", logging.INFO)])
def test_level_from_env(restore_root_logger, monkeypatch, raw, expected):
    monkeypatch.setenv("WAITLIST_ADMIN_LOG_LEVEL", raw)
    configure_logging()
    assert restore_root_logger.level == expected


def test_dev_server_access_log_is_quieted(restore_root_logger):
    configure_logging(level=logging.DEBUG)
    assert logging.getLogger("werkzeug").level == logging.WARNING
