"""
LogCat: a severity-keyed logging facade.

Each call passes through:
- hooks: ordered interceptors that may rewrite or drop the record
- location: " (file:line)" of the calling code
- chunking: messages over 3800 characters are split into contiguous parts
- sink: stdio (console/json), structlog, or stdlib logging

Library: structlog + orjson, configured via pydantic-settings.
"""

from .config import LogCatSettings
from .core import (
    LogCat,
    add_hook,
    configure,
    d,
    e,
    fatal,
    get_logcat,
    i,
    json,
    remove_hook,
    set_debug,
    v,
    w,
    wtf,
)
from .location import CAPTURE, CallSite, Origin
from .sinks import BaseSink, StdioSink, StdlibSink, StructlogSink
from .types import LogHook, LogRecord, Severity

__all__ = [
    "CAPTURE",
    "BaseSink",
    "CallSite",
    "LogCat",
    "LogCatSettings",
    "LogHook",
    "LogRecord",
    "Origin",
    "Severity",
    "StdioSink",
    "StdlibSink",
    "StructlogSink",
    "add_hook",
    "configure",
    "d",
    "e",
    "fatal",
    "get_logcat",
    "i",
    "json",
    "remove_hook",
    "set_debug",
    "v",
    "w",
    "wtf",
]
