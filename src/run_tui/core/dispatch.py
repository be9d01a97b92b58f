"""UI-update hand-off.

Every background thread reaches the UI thread through ``Dispatcher.post``; it
is the only way widget state gets mutated.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from collections import deque
from typing import Callable, Protocol

log = logging.getLogger(__name__)

Callback = Callable[[], None]


class Dispatcher(Protocol):
    def post(self, callback: Callback) -> None: ...


class AppDispatcher:
    """Queue callbacks onto a running Textual app's message loop.

    Must be built on the UI thread (e.g. in ``on_mount``) so it can capture the
    running loop. ``post`` never blocks the caller.
    """

    def __init__(self, app) -> None:
        self._app = app
        self._loop = asyncio.get_running_loop()

    def post(self, callback: Callback) -> None:
        try:
            self._loop.call_soon_threadsafe(self._app.call_later, callback)
        except RuntimeError:
            # loop already closed: the app has exited and there is nothing left to paint
            log.debug("dropping UI update after shutdown: %r", callback)


class ImmediateDispatcher:
    """Run callbacks inline on the posting thread."""

    def post(self, callback: Callback) -> None:
        callback()


class QueueDispatcher:
    """Collect callbacks until a test drains them, standing in for the UI thread."""

    def __init__(self) -> None:
        self._pending: deque[Callback] = deque()
        self._cond = threading.Condition()

    def post(self, callback: Callback) -> None:
        with self._cond:
            self._pending.append(callback)
            self._cond.notify_all()

    @property
    def pending(self) -> int:
        with self._cond:
            return len(self._pending)

    def wait_for(self, count: int = 1, timeout: float = 2.0) -> bool:
        with self._cond:
            return self._cond.wait_for(lambda: len(self._pending) >= count, timeout)

    def drain(self) -> int:
        ran = 0
        while True:
            with self._cond:
                if not self._pending:
                    return ran
                callback = self._pending.popleft()
            callback()
            ran += 1
