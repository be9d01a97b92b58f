"""Scale forms. Each runs its own mutation with its own spinner and a two minute budget."""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import Button, Input, Label, Select, Static

from ...core.context import Context
from ...core.dispatch import Dispatcher
from ...core.indicator import BusyIndicator
from ...core.navigation import Navigator
from ...errors import ScaleValidationError
from ...models.services import Service
from ...models.workerpools import WorkerPool
from ...services.ports import ServicePort, WorkerPoolPort
from ...services.scaling import validate_service_scale, validate_workerpool_scale
from .base import NavModal

log = logging.getLogger(__name__)

MUTATION_TIMEOUT = 120.0
IN_PROGRESS = "Operation in progress... (Please wait)"


class ScaleModal(NavModal):
    def __init__(self, navigator: Navigator, modal_id: str, dispatcher: Dispatcher) -> None:
        super().__init__(navigator, modal_id)
        self.indicator = BusyIndicator(dispatcher, self._paint)
        self.busy = False

    def _paint(self, text: str) -> None:
        if self.is_attached:
            self.query_one("#scale-status", Static).update(text)

    def on_unmount(self) -> None:
        self.indicator.stop()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "cancel":
            self.action_close()
        elif event.button.id == "apply":
            self.apply()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self.apply()

    def apply(self) -> None:
        if self.busy:
            return
        try:
            work = self.build_work()
        except ScaleValidationError as e:
            self._paint(f"Error: {e}")
            return
        self.busy = True
        self.indicator.start(IN_PROGRESS)
        self.navigator.runner.run(work, self._done, slot=self.modal_id, timeout=MUTATION_TIMEOUT)

    def build_work(self) -> Callable[[Context], Any]:
        raise NotImplementedError

    def _done(self, result: Any, error: Optional[BaseException]) -> None:
        self.busy = False
        if error is not None:
            log.warning("%s failed: %s", self.modal_id, error)
            self.indicator.stop(f"Error: {error}")
            return
        self.indicator.stop()
        if self.is_open:
            self.navigator.close_modal()


class ScaleServiceModal(ScaleModal):
    def __init__(self, navigator: Navigator, dispatcher: Dispatcher, services: ServicePort,
                 service: Service) -> None:
        super().__init__(navigator, "scale-service", dispatcher)
        self.services = services
        self.service = service

    def compose(self) -> ComposeResult:
        scaling = self.service.scaling
        mode = "Manual" if scaling is not None and scaling.is_manual else "Automatic"

        def count(value: Optional[int]) -> str:
            return str(value or 0)

        with Vertical(classes="dialog"):
            yield Static(f"Scale service {self.service.short_name} ({self.service.region})",
                         classes="dialog-title", markup=False)
            yield Label("Mode")
            yield Select([("Manual", "Manual"), ("Automatic", "Automatic")], value=mode, allow_blank=False,
                         id="mode")
            yield Label("Manual instances")
            yield Input(count(scaling.manual_instance_count if scaling else None), id="manual")
            yield Label("Min instances")
            yield Input(count(scaling.min_instance_count if scaling else None), id="min")
            yield Label("Max instances (empty for no limit)")
            yield Input(str(scaling.max_instance_count) if scaling and scaling.max_instance_count else "", id="max")
            yield Static("", id="scale-status", markup=False)
            with Horizontal(classes="buttons"):
                yield Button("Apply", id="apply", variant="primary")
                yield Button("Cancel", id="cancel")

    def on_mount(self) -> None:
        self._toggle(self.query_one("#mode", Select).value)

    def on_select_changed(self, event: Select.Changed) -> None:
        self._toggle(event.value)

    def _toggle(self, mode: Any) -> None:
        manual = mode == "Manual"
        self.query_one("#manual", Input).disabled = not manual
        self.query_one("#min", Input).disabled = manual
        self.query_one("#max", Input).disabled = manual

    def build_work(self) -> Callable[[Context], Any]:
        scale = validate_service_scale(
            self.query_one("#mode", Select).value,
            self.query_one("#manual", Input).value,
            self.query_one("#min", Input).value,
            self.query_one("#max", Input).value,
        )
        s = self.service

        def work(ctx: Context) -> Service:
            return self.services.update_scaling(s.project, s.region, s.short_name, scale.min_count,
                                                scale.max_count, scale.manual, ctx)

        return work


class ScaleWorkerPoolModal(ScaleModal):
    def __init__(self, navigator: Navigator, dispatcher: Dispatcher, workerpools: WorkerPoolPort,
                 pool: WorkerPool) -> None:
        super().__init__(navigator, "scale-workerpool", dispatcher)
        self.workerpools = workerpools
        self.pool = pool

    def compose(self) -> ComposeResult:
        with Vertical(classes="dialog"):
            yield Static(f"Scale worker pool {self.pool.short_name} ({self.pool.region})",
                         classes="dialog-title", markup=False)
            yield Label("Instances")
            yield Input(str(self.pool.instance_count), id="count")
            yield Static("", id="scale-status", markup=False)
            with Horizontal(classes="buttons"):
                yield Button("Apply", id="apply", variant="primary")
                yield Button("Cancel", id="cancel")

    def build_work(self) -> Callable[[Context], Any]:
        count = validate_workerpool_scale(self.query_one("#count", Input).value)
        p = self.pool

        def work(ctx: Context) -> WorkerPool:
            return self.workerpools.update_scaling(p.project, p.region, p.short_name, count, ctx)

        return work
