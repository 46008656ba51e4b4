"""
Log sink abstractions and concrete implementations.

A sink performs the actual write of one line. It exposes one operation per
severity (``v``, ``d``, ``i``, ``w``, ``e``, ``wtf``), each taking
``(tag, message, error)``.
"""

from __future__ import annotations

import logging
import sys
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Optional

import orjson
import structlog

from .config import LogCatSettings, SinkName
from .formatters import ConsoleFormatter, format_error
from .types import VERBOSE_LEVEL, Severity

STDLIB_TAG_ATTR = "logcat_tag"


def orjson_dumps(v: Any, *, default: Any = None) -> str:
    """Fast JSON serialization using orjson."""
    return orjson.dumps(v, default=default, option=orjson.OPT_UTC_Z | orjson.OPT_NAIVE_UTC).decode()


# =============================================================================
# Sink Abstraction (Strategy Pattern)
# =============================================================================


class BaseSink(ABC):
    """Abstract base class for log sinks."""

    @abstractmethod
    def v(self, tag: str, message: str, error: Optional[BaseException] = None) -> None: ...

    @abstractmethod
    def d(self, tag: str, message: str, error: Optional[BaseException] = None) -> None: ...

    @abstractmethod
    def i(self, tag: str, message: str, error: Optional[BaseException] = None) -> None: ...

    @abstractmethod
    def w(self, tag: str, message: str, error: Optional[BaseException] = None) -> None: ...

    @abstractmethod
    def e(self, tag: str, message: str, error: Optional[BaseException] = None) -> None: ...

    @abstractmethod
    def wtf(self, tag: str, message: str, error: Optional[BaseException] = None) -> None: ...

    def emit(self, severity: Severity, tag: str, message: str, error: Optional[BaseException] = None) -> None:
        """Route to the operation matching ``severity``."""
        getattr(self, severity.sink_method)(tag, message, error)

    def close(self) -> None:
        """Release resources held by the sink."""


class LevelSink(BaseSink):
    """Sink whose six operations share one writer keyed by severity."""

    @abstractmethod
    def write(self, severity: Severity, tag: str, message: str, error: Optional[BaseException]) -> None:
        ...

    def v(self, tag: str, message: str, error: Optional[BaseException] = None) -> None:
        self.write(Severity.VERBOSE, tag, message, error)

    def d(self, tag: str, message: str, error: Optional[BaseException] = None) -> None:
        self.write(Severity.DEBUG, tag, message, error)

    def i(self, tag: str, message: str, error: Optional[BaseException] = None) -> None:
        self.write(Severity.INFO, tag, message, error)

    def w(self, tag: str, message: str, error: Optional[BaseException] = None) -> None:
        self.write(Severity.WARN, tag, message, error)

    def e(self, tag: str, message: str, error: Optional[BaseException] = None) -> None:
        self.write(Severity.ERROR, tag, message, error)

    def wtf(self, tag: str, message: str, error: Optional[BaseException] = None) -> None:
        self.write(Severity.FATAL, tag, message, error)


class StdioSink(LevelSink):
    """Standard I/O sink with configurable format.

    Args:
        fmt: Output format - "console" (colored human-readable) or "json"
        stream: Output stream (default: stderr)
    """

    def __init__(self, fmt: str = "console", stream: Any = None):
        self._fmt = fmt
        self._stream = stream or sys.stderr

    def write(self, severity: Severity, tag: str, message: str, error: Optional[BaseException]) -> None:
        if self._fmt == "json":
            event: dict[str, Any] = {
                "timestamp": datetime.now(timezone.utc),
                "level": severity.value,
                "tag": tag,
                "message": message,
            }
            if error is not None:
                event["error"] = format_error(error)
            output = orjson_dumps(event)
        else:
            use_color = bool(getattr(self._stream, "isatty", lambda: False)())
            output = ConsoleFormatter.format(severity, tag, message, error, use_color=use_color)

        self._stream.write(output + "\n")
        self._stream.flush()


class StructlogSink(LevelSink):
    """Forwards each call to a structlog logger bound to the tag."""

    _METHODS = {
        Severity.VERBOSE: "debug",
        Severity.DEBUG: "debug",
        Severity.INFO: "info",
        Severity.WARN: "warning",
        Severity.ERROR: "error",
        Severity.FATAL: "critical",
    }

    def write(self, severity: Severity, tag: str, message: str, error: Optional[BaseException]) -> None:
        logger = structlog.get_logger(tag=tag)
        kw: dict[str, Any] = {"severity": severity.value}
        if error is not None:
            kw["exc_info"] = error
        getattr(logger, self._METHODS[severity])(message, **kw)


class StdlibSink(LevelSink):
    """Forwards each call to ``logging.getLogger(tag)``."""

    def __init__(self) -> None:
        logging.addLevelName(VERBOSE_LEVEL, "VERBOSE")

    def write(self, severity: Severity, tag: str, message: str, error: Optional[BaseException]) -> None:
        logging.getLogger(tag).log(
            severity.levelno,
            message,
            exc_info=error,
            extra={STDLIB_TAG_ATTR: tag},
        )


def create_sink(settings: LogCatSettings) -> BaseSink:
    """Build the sink named by ``settings.sink``."""
    if settings.sink == SinkName.STRUCTLOG:
        return StructlogSink()
    if settings.sink == SinkName.STDLIB:
        return StdlibSink()
    ConsoleFormatter.configure(
        timestamp_format=settings.console_timestamp_format,
        level_width=settings.console_level_width,
        tag_width=settings.console_tag_width,
        separator=settings.console_separator,
    )
    return StdioSink(fmt=settings.format.value)
