"""
Tests for experiment_picker/utils/logging.py.

What we test
------------
_JsonFormatter:
  - One JSON object per line with ts / level / logger / msg.
  - ``extra=`` fields appear at the top level; private attributes do not.
  - Exception info is rendered under ``exc``.

configure_logging():
  - Applies the configured level to the root logger and its handlers.
  - Console handler writes to stderr.
  - Creates the log file (and missing parent directories) when log_file is set.
  - JSON vs. plain-text formatter selection, including engine rule extras.
"""

from __future__ import annotations

import json
import logging
import sys

import pytest

from experiment_picker.config import LoggingConfig
from experiment_picker.engine.recommender import get_recommendation
from experiment_picker.models.answers import Answers
from experiment_picker.taxonomy.answer_taxonomy import Role
from experiment_picker.utils.logging import (
    LOG_FORMAT,
    _JsonFormatter,
    configure_logging,
)


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    saved_handlers = root.handlers[:]
    saved_level = root.level
    yield
    for handler in root.handlers:
        if handler not in saved_handlers:
            handler.close()
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)


def _record(msg: str = "hello %s", args=("world",), **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "experiment_picker.test", logging.INFO, __file__, 1, msg, args, None
    )
    for key, val in extra.items():
        setattr(record, key, val)
    return record


def _root_handlers() -> list[logging.Handler]:
    return logging.getLogger().handlers


# ── JSON formatter ────────────────────────────────────────────────────────────


class TestJsonFormatter:
    def test_line_shape(self):
        line = _JsonFormatter().format(_record())
        assert "\n" not in line
        payload = json.loads(line)
        assert set(payload) == {"ts", "level", "logger", "msg"}
        assert payload["level"] == "INFO"
        assert payload["logger"] == "experiment_picker.test"
        assert payload["msg"] == "hello world"
        assert payload["ts"].endswith("Z")

    def test_extra_fields_at_top_level(self):
        payload = json.loads(
            _JsonFormatter().format(_record(rule="legal_flex_override", role="participant"))
        )
        assert payload["rule"] == "legal_flex_override"
        assert payload["role"] == "participant"

    def test_private_attributes_skipped(self):
        payload = json.loads(_JsonFormatter().format(_record(_internal="x")))
        assert "_internal" not in payload

    def test_enum_extra_serialised_as_value(self):
        payload = json.loads(_JsonFormatter().format(_record(role=Role.REGULATOR)))
        assert payload["role"] == "regulator"

    def test_exception_rendered(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = logging.LogRecord(
                "experiment_picker.test", logging.ERROR, __file__, 1, "failed", None,
                sys.exc_info(),
            )
        payload = json.loads(_JsonFormatter().format(record))
        assert "RuntimeError: boom" in payload["exc"]


# ── configure_logging ─────────────────────────────────────────────────────────


class TestConfigureLogging:
    def test_applies_level(self):
        configure_logging(LoggingConfig(level="debug"))
        assert logging.getLogger().level == logging.DEBUG
        assert all(h.level == logging.DEBUG for h in _root_handlers())

    def test_console_on_stderr_only_without_log_file(self):
        configure_logging(LoggingConfig())
        handlers = _root_handlers()
        assert len(handlers) == 1
        assert isinstance(handlers[0], logging.StreamHandler)
        assert handlers[0].stream is sys.stderr
        assert logging.getLogger().level == logging.WARNING

    def test_plain_text_formatter_by_default(self):
        configure_logging(LoggingConfig())
        formatter = _root_handlers()[0].formatter
        assert not isinstance(formatter, _JsonFormatter)
        assert formatter._fmt == LOG_FORMAT

    def test_json_formatter_selected(self):
        configure_logging(LoggingConfig(json_format=True))
        assert all(isinstance(h.formatter, _JsonFormatter) for h in _root_handlers())

    def test_creates_log_file_and_parents(self, tmp_path):
        log_file = tmp_path / "logs" / "nested" / "picker.log"
        configure_logging(LoggingConfig(level="INFO", log_file=str(log_file)))
        file_handlers = [h for h in _root_handlers() if isinstance(h, logging.FileHandler)]
        assert len(file_handlers) == 1
        assert file_handlers[0].level == logging.INFO
        assert log_file.parent.is_dir()
        assert log_file.exists()

    def test_engine_rule_written_as_json_line(self, tmp_path):
        log_file = tmp_path / "picker.log"
        configure_logging(
            LoggingConfig(level="DEBUG", log_file=str(log_file), json_format=True)
        )
        get_recommendation(Role.PARTICIPANT, Answers(need_legal_flex="yes"))
        for handler in _root_handlers():
            handler.flush()

        lines = [
            json.loads(line)
            for line in log_file.read_text(encoding="utf-8").splitlines()
        ]
        rule_lines = [line for line in lines if "rule" in line]
        assert len(rule_lines) == 1
        entry = rule_lines[0]
        assert entry["rule"] == "legal_flex_override"
        assert entry["role"] == "participant"
        assert entry["level"] == "DEBUG"
        assert entry["logger"] == "experiment_picker.engine.recommender"

    def test_messages_below_level_not_written(self, tmp_path):
        log_file = tmp_path / "picker.log"
        configure_logging(LoggingConfig(level="WARNING", log_file=str(log_file)))
        get_recommendation(Role.PARTICIPANT, Answers(need_legal_flex="yes"))
        for handler in _root_handlers():
            handler.flush()
        assert log_file.read_text(encoding="utf-8") == ""
