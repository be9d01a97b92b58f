from __future__ import annotations

from textual import events
from textual.screen import ModalScreen

from ...core.navigation import Modal, Navigator


class NavModal(ModalScreen):
    """Modal whose escape goes back through the navigator so the caller page reloads."""

    BINDINGS = [("escape", "close", "Close")]

    def __init__(self, navigator: Navigator, modal_id: str) -> None:
        super().__init__(id=modal_id)
        self.navigator = navigator
        self.modal_id = modal_id

    @property
    def is_open(self) -> bool:
        return self.navigator.mode == Modal(self.modal_id)

    def on_key(self, event: events.Key) -> None:
        # global shortcuts stay live over a modal; everything else falls through to the bindings
        if self.navigator.route_key(event.key) is None:
            event.stop()
            event.prevent_default()

    def action_close(self) -> None:
        if self.is_open:
            self.navigator.close_modal()
