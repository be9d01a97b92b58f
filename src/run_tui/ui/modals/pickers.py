from __future__ import annotations

from typing import Callable, List, Optional, Tuple

from textual.app import ComposeResult
from textual.containers import Vertical
from textual.widgets import Input, OptionList, Static
from textual.widgets.option_list import Option

from ... import regions
from ...core.navigation import Navigator
from ...models.projects import Project
from .base import NavModal

Choice = Tuple[str, str]


class PickerModal(NavModal):
    def __init__(self, navigator: Navigator, modal_id: str, title: str, choices: List[Choice],
                 current: str, on_pick: Callable[[str], None], allow_custom: bool = False) -> None:
        super().__init__(navigator, modal_id)
        self.allow_custom = allow_custom
        self.title_text = title
        self.choices = choices
        self.current = current
        self.on_pick = on_pick

    def compose(self) -> ComposeResult:
        with Vertical(classes="dialog"):
            yield Static(self.title_text, classes="dialog-title", markup=False)
            yield Input(placeholder="Filter", id="picker-filter")
            yield OptionList(*self._options(""), id="picker-options")

    def on_mount(self) -> None:
        self.query_one(Input).focus()

    def _options(self, text: str) -> List[Option]:
        text = text.lower()
        options = []
        for value, label in self.choices:
            if text and text not in label.lower():
                continue
            marker = "* " if value == self.current else "  "
            options.append(Option(marker + label, id=value))
        return options

    def _first(self) -> Optional[str]:
        options = self.query_one(OptionList)
        if options.option_count == 0:
            return None
        return options.get_option_at_index(0).id

    def on_input_changed(self, event: Input.Changed) -> None:
        options = self.query_one(OptionList)
        options.clear_options()
        options.add_options(self._options(event.value))

    def on_input_submitted(self, event: Input.Submitted) -> None:
        value = self._first()
        if value is None and self.allow_custom:
            value = event.value.strip() or None
        if value is not None:
            self._pick(value)

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        self._pick(event.option.id)

    def _pick(self, value: str) -> None:
        if not self.is_open:
            return
        self.on_pick(value)
        self.navigator.close_modal()


def region_picker(navigator: Navigator, current: str, on_pick: Callable[[str], None]) -> PickerModal:
    choices = [(regions.ALL, "All regions")] + [(r, r) for r in regions.REGIONS]
    return PickerModal(navigator, "modal-regions", "Regions", choices, current, on_pick)


def project_picker(navigator: Navigator, projects: List[Project], current: str,
                   on_pick: Callable[[str], None]) -> PickerModal:
    choices = [(p.project_id, p.label) for p in sorted(projects, key=lambda p: p.project_id)]
    return PickerModal(navigator, "modal-projects", "Projects", choices, current, on_pick, allow_custom=True)
