"""
Hook chain: ordered interceptors applied to every record before emission.
"""

from __future__ import annotations

import threading
from typing import Iterator

from .types import HookLike, LogRecord


class HookChain:
    """Copy-on-write list of hooks.

    Writers swap in a new tuple under a lock; dispatch iterates whatever
    tuple was current when it started, so concurrent add/remove never
    invalidates an in-flight iteration.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._hooks: tuple[HookLike, ...] = ()

    def add(self, hook: HookLike) -> None:
        with self._lock:
            self._hooks = self._hooks + (hook,)

    def remove(self, hook: HookLike) -> None:
        with self._lock:
            hooks = list(self._hooks)
            try:
                hooks.remove(hook)
            except ValueError:
                return
            self._hooks = tuple(hooks)

    def clear(self) -> None:
        with self._lock:
            self._hooks = ()

    def apply(self, record: LogRecord) -> bool:
        """Run every hook in registration order.

        Returns False as soon as a hook empties the message; later hooks
        are not invoked for that record.
        """
        for hook in self._hooks:
            hook(record)
            if record.suppressed:
                return False
        return True

    def __iter__(self) -> Iterator[HookLike]:
        return iter(self._hooks)

    def __len__(self) -> int:
        return len(self._hooks)

    def __contains__(self, hook: object) -> bool:
        return hook in self._hooks
