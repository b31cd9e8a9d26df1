"""Tests for session logging and LogContext."""

import logging

import pytest

from linelint.logger import LogContext, get_logger, reset_session, session_log_file
from linelint.rule_engine import RuleEngine


class TestGetLogger:
    """Test logger lookup and handler setup."""

    def test_module_loggers_live_under_linelint(self):
        assert get_logger("linelint.config").name == "linelint.config"
        assert get_logger("tools").name == "linelint.tools"
        assert get_logger("linelint.config") is get_logger("linelint.config")

    def test_handlers_attached_once(self):
        get_logger("linelint.a")
        get_logger("linelint.b")
        root = logging.getLogger("linelint")
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0], logging.FileHandler)

    def test_writes_session_file(self):
        get_logger("linelint.cli").info("session marker")
        with open(session_log_file(), encoding="utf-8") as f:
            assert "session marker" in f.read()

    def test_verbose_adds_console_handler(self, monkeypatch):
        reset_session()
        monkeypatch.setenv("LINELINT_VERBOSE", "1")
        get_logger()
        assert len(logging.getLogger("linelint").handlers) == 2

    def test_reset_session_removes_handlers(self):
        get_logger()
        reset_session()
        assert logging.getLogger("linelint").handlers == []


class TestLogContext:
    """Test timing and failure records."""

    def test_fields_in_messages(self, caplog):
        caplog.set_level(logging.DEBUG, logger="linelint")
        logger = get_logger("linelint.test")
        with LogContext(logger, "validate", rule="line_length", file="A.swift"):
            pass

        messages = [r.getMessage() for r in caplog.records]
        assert messages[0] == "[validate] rule=line_length file=A.swift started"
        assert messages[1].startswith("[validate] rule=line_length file=A.swift completed in ")

    def test_exception_logged_and_raised(self, caplog):
        caplog.set_level(logging.DEBUG, logger="linelint")
        logger = get_logger("linelint.test")
        with pytest.raises(OSError, match="disk full"):
            with LogContext(logger, "correct", file="B.swift"):
                raise OSError("disk full")

        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert len(errors) == 1
        assert errors[0].getMessage().startswith("[correct] file=B.swift failed after ")
        assert errors[0].exc_info[0] is OSError

    def test_engine_logs_rule_and_file(self, tmp_path, caplog):
        caplog.set_level(logging.DEBUG, logger="linelint")
        path = tmp_path / "A.swift"
        path.write_text("x" * 130 + "\n", encoding="utf-8")

        engine = RuleEngine(parallel=False)
        engine.load_builtin_rules({})
        engine.check_file(str(path))

        assert f"[validate] rule=line_length file={path} started" in caplog.messages
