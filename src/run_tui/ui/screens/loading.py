from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Center, Middle
from textual.screen import Screen
from textual.widgets import Static

LOGO = r"""
 ____              _____ _   _ ___
|  _ \ _   _ _ __ |_   _| | | |_ _|
| |_) | | | | '_ \  | | | | | || |
|  _ <| |_| | | | | | | | |_| || |
|_| \_\\__,_|_| |_| |_|  \___/|___|
"""


class LoadingScreen(Screen):
    """Startup curtain; keys are ignored until the first load finishes."""

    def compose(self) -> ComposeResult:
        with Middle():
            with Center():
                yield Static(LOGO, id="logo", markup=False)
            with Center():
                yield Static("", id="loading-status", markup=False)

    def paint(self, text: str) -> None:
        status = self.query("#loading-status")
        if status:
            status.first(Static).update(text)

    def on_key(self, event) -> None:
        event.stop()
        event.prevent_default()
