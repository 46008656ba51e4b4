"""
Core types shared across the logging pipeline.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable, Optional, Union

if TYPE_CHECKING:
    from .location import Origin


VERBOSE_LEVEL = 5


class Severity(str, Enum):
    """Log severity. Each member maps to exactly one sink operation."""

    VERBOSE = "verbose"
    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"
    FATAL = "fatal"

    @property
    def sink_method(self) -> str:
        return _SINK_METHODS[self]

    @property
    def levelno(self) -> int:
        return _LEVEL_NUMBERS[self]

    @classmethod
    def from_levelno(cls, levelno: int) -> "Severity":
        """Map a stdlib logging level number to the closest severity at or below it."""
        for severity in sorted(cls, key=lambda s: s.levelno, reverse=True):
            if levelno >= severity.levelno:
                return severity
        return cls.VERBOSE


_SINK_METHODS = {
    Severity.VERBOSE: "v",
    Severity.DEBUG: "d",
    Severity.INFO: "i",
    Severity.WARN: "w",
    Severity.ERROR: "e",
    Severity.FATAL: "wtf",
}

_LEVEL_NUMBERS = {
    Severity.VERBOSE: VERBOSE_LEVEL,
    Severity.DEBUG: logging.DEBUG,
    Severity.INFO: logging.INFO,
    Severity.WARN: logging.WARNING,
    Severity.ERROR: logging.ERROR,
    Severity.FATAL: logging.CRITICAL,
}


@dataclass
class LogRecord:
    """A single log call on its way through the hook chain.

    Hooks may overwrite ``message``, ``tag`` or ``error``. Setting ``message``
    to ``None`` or ``""`` drops the record.
    """

    severity: Severity
    message: Optional[str]
    tag: str
    error: Optional[BaseException] = None
    origin: Optional["Origin"] = None

    @property
    def suppressed(self) -> bool:
        return not self.message


class LogHook(ABC):
    """Interceptor that may rewrite or suppress a record before emission."""

    @abstractmethod
    def hook(self, record: LogRecord) -> None:
        ...

    def __call__(self, record: LogRecord) -> None:
        self.hook(record)


HookLike = Union[LogHook, Callable[[LogRecord], None]]
