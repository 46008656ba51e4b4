"""
Message chunking for sinks with a per-line length limit.

Over-length messages are cut at raw character offsets and emitted as a
contiguous sequence under a process-wide lock, so two concurrent long
messages never interleave their chunks at the sink.
"""

from __future__ import annotations

import threading
from typing import Callable

MAX_CHUNK_LENGTH = 3800

# Shared by every LogCat instance in the process.
_CHUNK_LOCK = threading.Lock()


def split_message(message: str, max_length: int = MAX_CHUNK_LENGTH) -> list[str]:
    """Split ``message`` into consecutive slices of at most ``max_length`` characters."""
    if max_length <= 0:
        raise ValueError("max_length must be positive")
    if len(message) <= max_length:
        return [message]
    return [message[start : start + max_length] for start in range(0, len(message), max_length)]


class Chunker:
    """Emits a message through ``write`` either directly or as locked chunks."""

    def __init__(self, max_length: int = MAX_CHUNK_LENGTH, lock: threading.Lock | None = None):
        if max_length <= 0:
            raise ValueError("max_length must be positive")
        self.max_length = max_length
        self._lock = lock or _CHUNK_LOCK

    def emit(self, message: str, write: Callable[[str], None]) -> int:
        """Write ``message`` and return the number of sink calls made."""
        if len(message) <= self.max_length:
            write(message)
            return 1

        with self._lock:
            chunks = split_message(message, self.max_length)
            for chunk in chunks:
                write(chunk)
        return len(chunks)
