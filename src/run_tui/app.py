from __future__ import annotations

from typing import Optional

from textual.app import App

from .core.dispatch import AppDispatcher
from .core.runner import TaskRunner
from .session import Session
from .ui.screens.main import MainScreen

CSS = """
#header { background: $primary; color: $text; padding: 0 1; }
#hints { color: $text-muted; padding: 0 1; }
#pages { height: 1fr; }
.page-title { text-style: bold; padding: 0 1; }
.summary { padding: 1; border: round $primary; height: auto; }
#busy { color: $warning; padding: 0 1; height: auto; }
#status { color: $error; padding: 0 1; height: auto; }
#footer { color: $text-muted; padding: 0 1; }
#logo { color: $primary; }
NavModal { align: center middle; }
.dialog { width: 70; height: auto; max-height: 90%; border: thick $primary; background: $surface; padding: 1 2; }
.dialog.wide { width: 95%; height: 90%; }
.dialog-title { text-style: bold; margin-bottom: 1; }
.dialog .buttons { height: auto; margin-top: 1; }
#log-lines { height: 1fr; }
#picker-options { height: 20; }
#scale-status { height: auto; color: $warning; }
"""


class RunTui(App):
    CSS = CSS
    ENABLE_COMMAND_PALETTE = False
    BINDINGS = [("ctrl+c", "quit", "Quit")]

    def __init__(self, session: Session) -> None:
        super().__init__()
        self.session = session
        self.runner: Optional[TaskRunner] = None

    def on_mount(self) -> None:
        # the dispatcher captures the running loop, so it is built here and not in __init__
        self.runner = TaskRunner(AppDispatcher(self))
        self.push_screen(MainScreen(self.session, self.runner, self.runner.dispatcher))
