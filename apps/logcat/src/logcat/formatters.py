"""
Payload and line formatters.

- JSON payloads: parsed into a small tagged variant and pretty-printed.
- Console lines: fixed-width, optionally colored, for the stdio sink.
"""

from __future__ import annotations

import traceback
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional, Union

import orjson

from .types import Severity

PARSE_JSON_ERROR = "Parse json error"

# =============================================================================
# JSON Payloads
# =============================================================================


@dataclass(frozen=True)
class JsonObject:
    value: dict

    def pretty_print(self) -> str:
        return orjson.dumps(self.value, option=orjson.OPT_INDENT_2).decode()


@dataclass(frozen=True)
class JsonArray:
    value: list

    def pretty_print(self) -> str:
        return orjson.dumps(self.value, option=orjson.OPT_INDENT_2).decode()


@dataclass(frozen=True)
class JsonScalar:
    value: Any

    def pretty_print(self) -> str:
        # Strings print bare, everything else in its JSON spelling (true, null, 1.5).
        if isinstance(self.value, str):
            return self.value
        return orjson.dumps(self.value).decode()


@dataclass(frozen=True)
class JsonParseError:
    def pretty_print(self) -> str:
        return PARSE_JSON_ERROR


JsonValue = Union[JsonObject, JsonArray, JsonScalar, JsonParseError]


def parse_json(text: str) -> JsonValue:
    """Parse ``text`` as a single JSON document."""
    try:
        value = orjson.loads(text)
    except orjson.JSONDecodeError:
        return JsonParseError()

    if isinstance(value, dict):
        return JsonObject(value)
    if isinstance(value, list):
        return JsonArray(value)
    return JsonScalar(value)


def format_json(text: str, url: Optional[str] = None) -> str:
    """Pretty-print a JSON payload, optionally headed by a URL line.

    Unparseable input becomes ``PARSE_JSON_ERROR``; the original text is not kept.
    """
    payload = parse_json(text).pretty_print()
    if url and url.strip():
        payload = f"{url}\n{payload}"
    return payload


# =============================================================================
# Console Formatter (Aligned Columns)
# =============================================================================

COLORS = {
    "reset": "\033[0m",
    "dim": "\033[2m",
    "timestamp": "\033[90m",
    "tag": "\033[35m",
}


def colorize(text: str, color: str) -> str:
    """Apply ANSI color to text."""
    return f"{COLORS.get(color, '')}{text}{COLORS['reset']}"


def format_error(error: BaseException) -> str:
    return "".join(traceback.format_exception(type(error), error, error.__traceback__)).rstrip()


class ConsoleFormatter:
    """Renders one sink call as a human-readable line (fixed width, right-aligned)."""

    _RESET = "\x1b[0m"
    _LEVEL_COLORS = {
        Severity.VERBOSE: "\x1b[37m",
        Severity.DEBUG: "\x1b[36m",
        Severity.INFO: "\x1b[32m",
        Severity.WARN: "\x1b[33m",
        Severity.ERROR: "\x1b[31m",
        Severity.FATAL: "\x1b[1;31m",
    }

    TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
    LEVEL_WIDTH = 7
    TAG_WIDTH = 24
    SEPARATOR = " | "

    @classmethod
    def configure(
        cls,
        *,
        timestamp_format: str | None = None,
        level_width: int | None = None,
        tag_width: int | None = None,
        separator: str | None = None,
    ) -> None:
        """Configure alignment and rendering parameters."""
        if timestamp_format:
            cls.TIMESTAMP_FORMAT = timestamp_format
        if level_width:
            cls.LEVEL_WIDTH = level_width
        if tag_width:
            cls.TAG_WIDTH = tag_width
        if separator is not None:
            cls.SEPARATOR = separator

    @staticmethod
    def _fit_right(text: str, width: int) -> str:
        if width <= 0:
            return text
        if len(text) > width:
            if width <= 3:
                text = text[-width:]
            else:
                text = "..." + text[-(width - 3) :]
        return f"{text:>{width}}"

    @classmethod
    def _colorize_level(cls, text: str, severity: Severity, use_color: bool) -> str:
        if not use_color:
            return text
        return f"{cls._LEVEL_COLORS[severity]}{text}{cls._RESET}"

    @staticmethod
    def _maybe_color(text: str, color: str, use_color: bool) -> str:
        if not use_color:
            return text
        return colorize(text, color)

    @classmethod
    def format(
        cls,
        severity: Severity,
        tag: str,
        message: str,
        error: BaseException | None = None,
        *,
        timestamp: datetime | None = None,
        use_color: bool = True,
    ) -> str:
        """Format a single sink call into an aligned line."""
        stamp = (timestamp or datetime.now()).strftime(cls.TIMESTAMP_FORMAT)
        level_text = cls._colorize_level(cls._fit_right(severity.name, cls.LEVEL_WIDTH), severity, use_color)

        line = "".join(
            [
                cls._maybe_color(stamp, "timestamp", use_color),
                cls.SEPARATOR,
                level_text,
                cls.SEPARATOR,
                cls._maybe_color(cls._fit_right(tag, cls.TAG_WIDTH), "tag", use_color),
                cls.SEPARATOR,
                message,
            ]
        )
        if error is not None:
            line = f"{line}\n{cls._maybe_color(format_error(error), 'dim', use_color)}"
        return line
