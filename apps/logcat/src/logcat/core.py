"""
Dispatcher: the public logging entry points and the default instance.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from typing import Any, Optional

import structlog
from pydantic import ValidationError
from structlog.typing import EventDict, WrappedLogger

from .chunking import MAX_CHUNK_LENGTH, Chunker
from .config import DEFAULT_TAG, LogCatSettings, LogFormat, SinkName
from .formatters import format_json
from .hooks import HookChain
from .location import CAPTURE, Locator, Origin, annotate, caller_site, resolve_origin
from .sinks import BaseSink, StdioSink, create_sink, orjson_dumps
from .types import HookLike, LogRecord, Severity

logger = logging.getLogger(__name__)


class LogCat:
    """Logging facade.

    Every call runs: hooks → location annotation → chunking → sink. A call
    never raises; any fault along the way drops the message instead.

    Args:
        sink: Destination for emitted lines (default: ``StdioSink()``)
        enabled: Master switch; when False every call is a no-op
        tag: Default tag for calls that pass ``tag=None``
        trace_enabled: Append `` (file:line)`` of the calling code
        max_chunk_length: Longest message handed to the sink in one call
        locator: Picks the call site out of a captured ``Origin``
    """

    def __init__(
        self,
        sink: BaseSink | None = None,
        *,
        enabled: bool = True,
        tag: str = DEFAULT_TAG,
        trace_enabled: bool = True,
        max_chunk_length: int = MAX_CHUNK_LENGTH,
        locator: Locator = caller_site,
    ):
        self.sink = sink or StdioSink()
        self.enabled = enabled
        self.tag = tag
        self.trace_enabled = trace_enabled
        self.locator = locator
        self.hooks = HookChain()
        self._chunker = Chunker(max_length=max_chunk_length)

    @classmethod
    def from_settings(cls, settings: LogCatSettings | None = None, *, sink: BaseSink | None = None) -> "LogCat":
        settings = settings or LogCatSettings()
        return cls(
            sink or create_sink(settings),
            enabled=settings.enabled,
            tag=settings.tag,
            trace_enabled=settings.trace_enabled,
            max_chunk_length=settings.max_chunk_length,
        )

    # =========================================================================
    # Configuration
    # =========================================================================

    def set_debug(self, enabled: bool, tag: Optional[str] = None) -> None:
        """
        Args:
            enabled: Whether logging is on
            tag: New default tag; None keeps the current one
        """
        self.enabled = enabled
        if tag is not None:
            self.tag = tag

    def add_hook(self, hook: HookLike) -> None:
        self.hooks.add(hook)

    def remove_hook(self, hook: HookLike) -> None:
        self.hooks.remove(hook)

    # =========================================================================
    # Entry Points
    # =========================================================================

    def v(self, message: Optional[str], tag: Optional[str] = None, error: Optional[BaseException] = None, origin: Any = CAPTURE) -> None:
        self._log(Severity.VERBOSE, message, tag, error, origin)

    def d(self, message: Optional[str], tag: Optional[str] = None, error: Optional[BaseException] = None, origin: Any = CAPTURE) -> None:
        self._log(Severity.DEBUG, message, tag, error, origin)

    def i(self, message: Optional[str], tag: Optional[str] = None, error: Optional[BaseException] = None, origin: Any = CAPTURE) -> None:
        self._log(Severity.INFO, message, tag, error, origin)

    def w(self, message: Optional[str], tag: Optional[str] = None, error: Optional[BaseException] = None, origin: Any = CAPTURE) -> None:
        self._log(Severity.WARN, message, tag, error, origin)

    def e(self, message: Optional[str], tag: Optional[str] = None, error: Optional[BaseException] = None, origin: Any = CAPTURE) -> None:
        self._log(Severity.ERROR, message, tag, error, origin)

    def fatal(self, message: Optional[str], tag: Optional[str] = None, error: Optional[BaseException] = None, origin: Any = CAPTURE) -> None:
        self._log(Severity.FATAL, message, tag, error, origin)

    wtf = fatal

    def log(
        self,
        severity: Severity,
        message: Optional[str],
        tag: Optional[str] = None,
        error: Optional[BaseException] = None,
        origin: Any = CAPTURE,
    ) -> None:
        """Log at an explicit severity."""
        self._log(severity, message, tag, error, origin)

    def json(
        self,
        message: Optional[str],
        tag: Optional[str] = None,
        url: Optional[str] = None,
        severity: Severity = Severity.INFO,
        origin: Any = CAPTURE,
    ) -> None:
        """
        Log a JSON payload, pretty-printed with 2-space indentation.

        Args:
            message: JSON text; unparseable text is logged as "Parse json error"
            tag: Log tag
            url: Optional label (typically the request URL) printed on the line above
            severity: Log severity
        """
        self._json(message, tag, url, severity, origin)

    def _log(self, severity: Severity, message: Optional[str], tag: Optional[str], error: Optional[BaseException], origin: Any, depth: int = 1) -> None:
        if not self.enabled or message is None:
            return
        self.dispatch(severity, message, tag, error, resolve_origin(origin, self.trace_enabled, skip=depth))

    def _json(self, message: Optional[str], tag: Optional[str], url: Optional[str], severity: Severity, origin: Any, depth: int = 1) -> None:
        if not self.enabled or message is None:
            return
        origin = resolve_origin(origin, self.trace_enabled, skip=depth)

        if not message.strip():
            self.dispatch(severity, url if url and url.strip() else message, tag, origin=origin)
            return

        self.dispatch(severity, format_json(message, url), tag, origin=origin)

    # =========================================================================
    # Pipeline
    # =========================================================================

    def dispatch(
        self,
        severity: Severity,
        message: Optional[str],
        tag: Optional[str] = None,
        error: Optional[BaseException] = None,
        origin: Optional[Origin] = None,
    ) -> None:
        """Run one record through hooks, annotation, chunking and the sink."""
        if not self.enabled or message is None:
            return

        record = LogRecord(severity, message, self.tag if tag is None else tag, error, origin)
        try:
            self._emit(record)
        except Exception:
            pass  # Fail silently to avoid breaking the application

    def _emit(self, record: LogRecord) -> None:
        if not self.hooks.apply(record):
            return

        message = record.message or ""
        if self.trace_enabled:
            message = annotate(message, record.origin, self.locator)

        self._chunker.emit(message, lambda chunk: self.sink.emit(record.severity, record.tag, chunk, record.error))


# =============================================================================
# Structlog Processors
# =============================================================================


def add_timestamp(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Add ISO 8601 timestamp to log event."""
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def rename_event_key(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Rename 'event' to 'message'."""
    if "event" in event_dict:
        event_dict["message"] = event_dict.pop("event")
    return event_dict


def configure_structlog(fmt: LogFormat = LogFormat.CONSOLE, level: int = logging.NOTSET) -> None:
    """Configure structlog processors and factory for ``StructlogSink`` output."""
    shared_processors: list[Any] = [
        structlog.stdlib.add_log_level,
        add_timestamp,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if fmt == LogFormat.JSON:
        renderer: Any = structlog.processors.JSONRenderer(serializer=orjson_dumps)
        shared_processors.insert(2, rename_event_key)
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


# =============================================================================
# Default Instance
# =============================================================================

_default: LogCat | None = None
_default_lock = threading.Lock()


def get_logcat() -> LogCat:
    """Return the process-wide default instance, creating it from settings on first use."""
    global _default
    if _default is None:
        error: ValidationError | None = None
        with _default_lock:
            if _default is None:
                try:
                    _default = LogCat.from_settings()
                except ValidationError as exc:
                    _default = LogCat()
                    error = exc
        # Reported outside the lock: an intercepting handler may log back into get_logcat()
        if error is not None:
            logger.warning("Invalid LOGCAT_* settings, falling back to defaults: %s", error)
    return _default


def configure(settings: LogCatSettings | None = None, *, sink: BaseSink | None = None) -> LogCat:
    """
    Replace the default instance.

    Args:
        settings: Initial configuration (default: loaded from LOGCAT_* environment)
        sink: Sink override; when omitted the sink is built from ``settings.sink``
    """
    global _default
    settings = settings or LogCatSettings()
    if sink is None and settings.sink == SinkName.STRUCTLOG and settings.configure_structlog:
        configure_structlog(settings.format)

    instance = LogCat.from_settings(settings, sink=sink)
    with _default_lock:
        previous, _default = _default, instance
    if previous is not None and previous.sink is not instance.sink:
        previous.sink.close()

    if settings.intercept_stdlib:
        # Import interceptors here to avoid circular imports
        from .interceptors import intercept_stdlib_logging

        intercept_stdlib_logging(instance)
    return instance


# Module-level entry points bound to the default instance. Each one is the
# frame-0 entry point of its captured origin.


def set_debug(enabled: bool, tag: Optional[str] = None) -> None:
    get_logcat().set_debug(enabled, tag)


def add_hook(hook: HookLike) -> None:
    get_logcat().add_hook(hook)


def remove_hook(hook: HookLike) -> None:
    get_logcat().remove_hook(hook)


def v(message: Optional[str], tag: Optional[str] = None, error: Optional[BaseException] = None, origin: Any = CAPTURE) -> None:
    get_logcat()._log(Severity.VERBOSE, message, tag, error, origin)


def d(message: Optional[str], tag: Optional[str] = None, error: Optional[BaseException] = None, origin: Any = CAPTURE) -> None:
    get_logcat()._log(Severity.DEBUG, message, tag, error, origin)


def i(message: Optional[str], tag: Optional[str] = None, error: Optional[BaseException] = None, origin: Any = CAPTURE) -> None:
    get_logcat()._log(Severity.INFO, message, tag, error, origin)


def w(message: Optional[str], tag: Optional[str] = None, error: Optional[BaseException] = None, origin: Any = CAPTURE) -> None:
    get_logcat()._log(Severity.WARN, message, tag, error, origin)


def e(message: Optional[str], tag: Optional[str] = None, error: Optional[BaseException] = None, origin: Any = CAPTURE) -> None:
    get_logcat()._log(Severity.ERROR, message, tag, error, origin)


def fatal(message: Optional[str], tag: Optional[str] = None, error: Optional[BaseException] = None, origin: Any = CAPTURE) -> None:
    get_logcat()._log(Severity.FATAL, message, tag, error, origin)


wtf = fatal


def json(
    message: Optional[str],
    tag: Optional[str] = None,
    url: Optional[str] = None,
    severity: Severity = Severity.INFO,
    origin: Any = CAPTURE,
) -> None:
    get_logcat()._json(message, tag, url, severity, origin)
