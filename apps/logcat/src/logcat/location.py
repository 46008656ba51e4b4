"""
Call-site capture for location annotation.

An ``Origin`` is a snapshot of the call stack taken inside a logging entry
point, innermost frame first: frame 0 is the entry point itself and frame 1
is the code that called it.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from typing import Any, Callable, Optional

_MAX_FRAMES = 32


@dataclass(frozen=True)
class CallSite:
    file_name: str
    line_number: int
    function: str = ""

    def __str__(self) -> str:
        return f"{self.file_name}:{self.line_number}"


@dataclass(frozen=True)
class Origin:
    frames: tuple[CallSite, ...]

    @classmethod
    def capture(cls, skip: int = 0, limit: int = _MAX_FRAMES) -> "Origin":
        """Snapshot the stack starting at the function that calls ``capture``."""
        try:
            frame = sys._getframe(1 + skip)
        except ValueError:
            return cls(frames=())

        frames = []
        while frame is not None and len(frames) < limit:
            code = frame.f_code
            frames.append(CallSite(os.path.basename(code.co_filename), frame.f_lineno, code.co_name))
            frame = frame.f_back
        return cls(frames=tuple(frames))

    def frame(self, index: int) -> Optional[CallSite]:
        if 0 <= index < len(self.frames):
            return self.frames[index]
        return None


class _Capture:
    """Sentinel default: capture the caller's stack at the entry point."""

    _instance: Optional["_Capture"] = None

    def __new__(cls) -> "_Capture":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "CAPTURE"


CAPTURE = _Capture()

Locator = Callable[[Origin], Optional[CallSite]]


def resolve_origin(origin: Any, trace_enabled: bool, skip: int = 0) -> Optional[Origin]:
    """Turn an entry point's ``origin`` argument into an ``Origin`` or None.

    ``skip`` counts the frames between the caller of this function and the
    public entry point, so that frame 0 of a captured origin is always the
    entry point.
    """
    if origin is CAPTURE:
        return Origin.capture(skip=1 + skip) if trace_enabled else None
    return origin


def caller_site(origin: Origin) -> Optional[CallSite]:
    """Default locator: the caller of the logging entry point."""
    return origin.frame(1)


def annotate(message: str, origin: Optional[Origin], locator: Locator = caller_site) -> str:
    """Append ``" (file:line)"`` when the origin has a caller frame."""
    if origin is None:
        return message
    site = locator(origin)
    if site is None:
        return message
    return f"{message} ({site})"
