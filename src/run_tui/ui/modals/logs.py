from __future__ import annotations

from typing import Optional

from textual.app import ComposeResult
from textual.containers import Vertical
from textual.widgets import Log, Static

from ...core.dispatch import Dispatcher
from ...core.logtail import LogSource, LogTailPoller
from ...core.navigation import Navigator
from ...models.logs import LogEntry
from .base import NavModal


class LogsModal(NavModal):
    """Tails one resource's logs until the modal closes."""

    def __init__(self, navigator: Navigator, dispatcher: Dispatcher, source: LogSource, filter: str,
                 title: str) -> None:
        super().__init__(navigator, "modal-logs")
        self.dispatcher = dispatcher
        self.source = source
        self.filter = filter
        self.title_text = title
        self.poller: Optional[LogTailPoller] = None

    def compose(self) -> ComposeResult:
        with Vertical(classes="dialog wide"):
            yield Static(self.title_text, classes="dialog-title", markup=False)
            yield Log(id="log-lines", highlight=False)

    def on_mount(self) -> None:
        self.poller = LogTailPoller(self.source, self.filter, self.dispatcher, self._write, self._fail)
        self.poller.start()

    def on_unmount(self) -> None:
        self.stop()

    def stop(self) -> None:
        if self.poller is not None:
            self.poller.cancel()

    def _write(self, entry: LogEntry) -> None:
        self.query_one(Log).write_line(entry.format_line())

    def _fail(self, error: BaseException) -> None:
        self.query_one(Log).write_line(f"Error: {error}")
