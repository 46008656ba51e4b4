"""
Interceptors for capturing standard library and third-party logs.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from .core import LogCat, get_logcat
from .location import CallSite, Origin
from .sinks import STDLIB_TAG_ATTR
from .types import Severity


class LogCatHandler(logging.Handler):
    """
    Redirect standard library logging records into a LogCat instance.
    This lets third-party logs pass through the same hooks, chunking and sink.
    """

    def __init__(self, logcat: Optional[LogCat] = None, level: int = logging.NOTSET):
        super().__init__(level)
        self._logcat = logcat

    @property
    def logcat(self) -> LogCat:
        return self._logcat or get_logcat()

    def emit(self, record: logging.LogRecord) -> None:
        try:
            # Records written by StdlibSink would loop straight back here
            if hasattr(record, STDLIB_TAG_ATTR):
                return

            msg = record.getMessage()
            error = record.exc_info[1] if record.exc_info else None

            # The stdlib record already knows its call site; frame 0 stands in
            # for the logging module itself.
            origin = Origin(
                frames=(
                    CallSite("logging", 0),
                    CallSite(record.filename, record.lineno, record.funcName),
                )
            )
            self.logcat.dispatch(
                Severity.from_levelno(record.levelno),
                msg,
                self._simplify_logger_name(record.name),
                error,
                origin,
            )
        except Exception:
            self.handleError(record)

    @staticmethod
    def _simplify_logger_name(name: str) -> str:
        """
        Simplify a logger name for use as a tag.

        Rules:
        - "" or "root" -> "stdlib"
        - "uvicorn.access" -> "uvicorn.access"
        - Other -> keep last 2 parts
        """
        if not name or name == "root":
            return "stdlib"

        parts = name.split(".")
        if len(parts) <= 2:
            return name
        return ".".join(parts[-2:])


def intercept_stdlib_logging(
    logcat: Optional[LogCat] = None,
    loggers: Iterable[str] = (),
    level: int = logging.NOTSET,
) -> LogCatHandler:
    """Route the root logger (and detach handlers of the named loggers) into LogCat."""
    handler = LogCatHandler(logcat)

    root_logger = logging.getLogger()
    root_logger.handlers = [h for h in root_logger.handlers if not isinstance(h, LogCatHandler)]
    root_logger.addHandler(handler)
    if level:
        root_logger.setLevel(level)

    # Named loggers lose their own handlers and propagate to root instead
    for name in loggers:
        lg = logging.getLogger(name)
        lg.handlers = []
        lg.propagate = True

    return handler
