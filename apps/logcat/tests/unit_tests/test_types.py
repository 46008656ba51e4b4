"""
Unit tests for the core data model: Severity, LogRecord and LogHook.
"""

from __future__ import annotations

import logging

import pytest

from logcat.types import VERBOSE_LEVEL, LogHook, LogRecord, Severity


class TestSeverity:
    """Severity to sink operation and stdlib level mapping"""

    @pytest.mark.parametrize(
        ("severity", "method"),
        [
            (Severity.VERBOSE, "v"),
            (Severity.DEBUG, "d"),
            (Severity.INFO, "i"),
            (Severity.WARN, "w"),
            (Severity.ERROR, "e"),
            (Severity.FATAL, "wtf"),
        ],
    )
    def test_each_severity_has_one_sink_method(self, severity: Severity, method: str) -> None:
        assert severity.sink_method == method

    def test_level_numbers_follow_stdlib(self) -> None:
        assert Severity.VERBOSE.levelno == VERBOSE_LEVEL
        assert Severity.WARN.levelno == logging.WARNING
        assert Severity.FATAL.levelno == logging.CRITICAL

    @pytest.mark.parametrize(
        ("levelno", "expected"),
        [
            (0, Severity.VERBOSE),
            (VERBOSE_LEVEL, Severity.VERBOSE),
            (logging.DEBUG, Severity.DEBUG),
            (15, Severity.DEBUG),
            (logging.INFO, Severity.INFO),
            (logging.WARNING, Severity.WARN),
            (logging.ERROR, Severity.ERROR),
            (logging.CRITICAL, Severity.FATAL),
            (99, Severity.FATAL),
        ],
    )
    def test_from_levelno_rounds_down(self, levelno: int, expected: Severity) -> None:
        assert Severity.from_levelno(levelno) is expected


class TestLogRecord:
    """LogRecord mutability and suppression"""

    def test_defaults(self) -> None:
        record = LogRecord(Severity.INFO, "hello", "tag")
        assert record.error is None
        assert record.origin is None
        assert not record.suppressed

    @pytest.mark.parametrize("message", [None, ""])
    def test_empty_or_absent_message_is_suppressed(self, message) -> None:
        record = LogRecord(Severity.INFO, "hello", "tag")
        record.message = message
        assert record.suppressed

    def test_whitespace_message_is_not_suppressed(self) -> None:
        assert not LogRecord(Severity.INFO, "  ", "tag").suppressed


class TestLogHook:
    """LogHook instances are callable"""

    def test_call_delegates_to_hook(self) -> None:
        class Upper(LogHook):
            def hook(self, record: LogRecord) -> None:
                record.message = (record.message or "").upper()

        record = LogRecord(Severity.INFO, "hello", "tag")
        Upper()(record)
        assert record.message == "HELLO"

    def test_hook_is_abstract(self) -> None:
        with pytest.raises(TypeError):
            LogHook()  # type: ignore[abstract]
