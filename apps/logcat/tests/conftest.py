import os
import threading
import typing as t
from dataclasses import dataclass

import pytest
import structlog

from logcat import core
from logcat.core import LogCat
from logcat.sinks import LevelSink
from logcat.types import Severity


@dataclass(frozen=True)
class SinkCall:
    method: str
    tag: str
    message: str
    error: t.Optional[BaseException] = None


class RecordingSink(LevelSink):
    """Sink that keeps every call in order, for assertions."""

    def __init__(self) -> None:
        self.calls: list[SinkCall] = []
        self._lock = threading.Lock()
        self.closed = False

    def write(self, severity: Severity, tag: str, message: str, error: t.Optional[BaseException]) -> None:
        with self._lock:
            self.calls.append(SinkCall(severity.sink_method, tag, message, error))

    def close(self) -> None:
        self.closed = True

    @property
    def messages(self) -> list[str]:
        return [call.message for call in self.calls]


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def logcat(sink: RecordingSink) -> LogCat:
    """LogCat without location annotation, so messages compare exactly."""
    return LogCat(sink, trace_enabled=False)


@pytest.fixture
def traced_logcat(sink: RecordingSink) -> LogCat:
    return LogCat(sink, trace_enabled=True)


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch):
    """Keep LOGCAT_* variables and the default instance out of every test."""
    for key in list(os.environ):
        if key.startswith("LOGCAT_"):
            monkeypatch.delenv(key)
    monkeypatch.setattr(core, "_default", None)
    yield
    structlog.reset_defaults()
