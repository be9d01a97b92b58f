"""Follow a log filter: a bounded backlog first, then periodic polling."""

from __future__ import annotations

import logging
import queue
import threading
from datetime import datetime, timezone
from itertools import islice
from typing import Callable, Iterator, Optional, Protocol

from ..models.logs import LogEntry, Order, format_timestamp
from .context import Context
from .dispatch import Dispatcher

log = logging.getLogger(__name__)

BACKLOG_SIZE = 50
POLL_INTERVAL = 2.0

_DONE = object()


class LogSource(Protocol):
    def entries(self, filter: str, order: Order, limit: Optional[int] = None,
                ctx: Optional[Context] = None) -> Iterator[LogEntry]: ...


class LogTailPoller:
    """Stream entries matching ``filter`` to ``on_entry`` on the UI thread.

    The backlog is the newest ``backlog_size`` entries, delivered oldest
    first. After that the source is polled every ``poll_interval`` seconds for
    entries newer than the last one seen. Poll failures are logged and retried
    on the next tick; a backlog failure goes to ``on_error`` and ends the tail.
    Nothing is delivered once ``cancel`` has been called.
    """

    def __init__(self, source: LogSource, filter: str, dispatcher: Dispatcher,
                 on_entry: Callable[[LogEntry], None],
                 on_error: Optional[Callable[[BaseException], None]] = None,
                 backlog_size: int = BACKLOG_SIZE, poll_interval: float = POLL_INTERVAL) -> None:
        self.source = source
        self.filter = filter
        self.backlog_size = backlog_size
        self.poll_interval = poll_interval
        self._dispatcher = dispatcher
        self._on_entry = on_entry
        self._on_error = on_error
        self._context = Context()
        self._queue: queue.Queue = queue.Queue()
        self._lock = threading.Lock()
        self._last: Optional[str] = None
        self._last_ts: Optional[datetime] = None
        self._threads: list[threading.Thread] = []

    @property
    def cancelled(self) -> bool:
        return self._context.cancelled

    @property
    def last_timestamp(self) -> Optional[datetime]:
        with self._lock:
            return self._last_ts

    def start(self) -> None:
        self._threads = [
            threading.Thread(target=self._stream, name="logtail-fetch", daemon=True),
            threading.Thread(target=self._pump, name="logtail-pump", daemon=True),
        ]
        for thread in self._threads:
            thread.start()

    def cancel(self) -> None:
        self._context.cancel()

    def join(self, timeout: Optional[float] = None) -> None:
        for thread in self._threads:
            thread.join(timeout)

    def poll_filter(self) -> str:
        with self._lock:
            since = self._last
        clause = f'timestamp > "{since}"'
        if not self.filter:
            return clause
        return f"{self.filter} AND {clause}"

    def _stream(self) -> None:
        ctx = self._context
        try:
            try:
                backlog = list(islice(
                    self.source.entries(self.filter, Order.NEWEST_FIRST, limit=self.backlog_size, ctx=ctx),
                    self.backlog_size,
                ))
            except Exception as e:
                if not ctx.cancelled:
                    log.warning("log backlog failed for %r: %s", self.filter, e)
                    self._report(e)
                return

            if not backlog:
                now = datetime.now(timezone.utc)
                self._advance(now, format_timestamp(now))
            for entry in reversed(backlog):
                self._push(entry)

            while not ctx.wait(self.poll_interval):
                try:
                    for entry in self.source.entries(self.poll_filter(), Order.OLDEST_FIRST, ctx=ctx):
                        if ctx.cancelled:
                            break
                        self._push(entry)
                except Exception as e:
                    log.debug("log poll failed, retrying: %s", e)
        finally:
            self._queue.put(_DONE)

    def _advance(self, ts: datetime, text: str) -> None:
        with self._lock:
            if self._last_ts is None or ts >= self._last_ts:
                self._last_ts = ts
                self._last = text

    def _push(self, entry: LogEntry) -> None:
        self._advance(entry.timestamp, entry.filter_timestamp)
        self._queue.put(entry)

    def _pump(self) -> None:
        while True:
            item = self._queue.get()
            if item is _DONE:
                return
            if self._context.cancelled:
                continue
            self._dispatcher.post(lambda item=item: self._deliver(item))

    def _deliver(self, entry: LogEntry) -> None:
        if self._context.cancelled:
            return
        self._on_entry(entry)

    def _report(self, error: BaseException) -> None:
        if self._on_error is None:
            return

        def deliver() -> None:
            if not self._context.cancelled:
                self._on_error(error)

        self._dispatcher.post(deliver)
