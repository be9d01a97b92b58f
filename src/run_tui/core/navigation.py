"""Page/modal switching and page-scoped key routing for the main screen."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Protocol, Union

from .indicator import BusyIndicator
from .runner import TaskHandle, TaskRunner, Work

log = logging.getLogger(__name__)

VIEW_SLOT = "view"

Action = Callable[[], None]


@dataclass(frozen=True)
class NavFrame:
    current: Optional[str] = None
    previous: Optional[str] = None


@dataclass(frozen=True)
class Base:
    pass


@dataclass(frozen=True)
class Modal:
    modal_id: str


Mode = Union[Base, Modal]


@dataclass
class Page:
    page_id: str
    render: Callable[[Any], None]
    # reads the page's own selection state at switch time; None means nothing to fetch
    work: Optional[Work] = None
    keys: dict[str, Action] = field(default_factory=dict)
    hints: str = ""
    message: str = "Loading..."


class ViewHost(Protocol):
    def show_page(self, page_id: str) -> None: ...
    def mount_modal(self, modal_id: str, view: Any) -> None: ...
    def remove_modal(self, modal_id: str) -> None: ...
    def show_hints(self, hints: str) -> None: ...
    def set_loading(self, loading: bool) -> None: ...
    def lift_curtain(self) -> None: ...
    def show_error(self, message: str) -> None: ...
    def clear_error(self) -> None: ...


class Navigator:
    def __init__(self, host: ViewHost, runner: TaskRunner, indicator: BusyIndicator) -> None:
        self.host = host
        self.runner = runner
        self.indicator = indicator
        self.frame = NavFrame()
        self.mode: Mode = Base()
        self.ready = False
        self._pages: dict[str, Page] = {}
        self._globals: dict[str, Action] = {}
        self._on_close: Optional[Action] = None
        # token of the run_busy call whose message the spinner is showing
        self._busy_owner: Optional[object] = None

    def add_page(self, page: Page) -> None:
        self._pages[page.page_id] = page

    def page(self, page_id: str) -> Page:
        return self._pages[page_id]

    def bind_global(self, key: str, action: Action) -> None:
        self._globals[key] = action

    @property
    def current_page(self) -> Optional[Page]:
        return self._pages.get(self.frame.current)

    def boot(self, work: Work, page_id: str, message: str = "Loading...") -> TaskHandle:
        """Run the startup load behind the curtain, then show ``page_id``.

        Keys are swallowed until this completes. A failed startup still opens
        the page so the user can pick another project or region.
        """
        self.indicator.start(message)

        def done(result: Any, error: Optional[BaseException]) -> None:
            self.indicator.stop()
            self.ready = True
            self.host.lift_curtain()
            self._show(page_id)
            if error is not None:
                log.warning("startup load failed: %s", error)
                self.host.show_error(str(error))
                return
            self._pages[page_id].render(result)

        return self.runner.run(work, done, slot=VIEW_SLOT)

    def switch_to(self, page_id: str) -> Optional[TaskHandle]:
        page = self._pages[page_id]
        if isinstance(self.mode, Modal):
            self._dismiss_modal()
        self._show(page_id)
        if page.work is None:
            return None
        return self.run_busy(page.work, page.render, page.message)

    def run_busy(self, work: Work, on_success: Callable[[Any], None], message: str,
                 *, slot: str = VIEW_SLOT, timeout: Optional[float] = None) -> TaskHandle:
        """Run ``work`` with the spinner up; errors land in the status line.

        On failure the previously rendered data stays on screen. Only the most
        recently started call owns the spinner; an older call finishing, in any
        slot, leaves it running for the newer one.
        """
        owner = object()
        self._busy_owner = owner
        self.host.set_loading(True)
        self.indicator.start(message)

        def done(result: Any, error: Optional[BaseException]) -> None:
            if self._busy_owner is owner:
                self._busy_owner = None
                self.indicator.stop()
                self.host.set_loading(False)
            if error is not None:
                log.warning("%s failed: %s", message.rstrip(". "), error)
                self.host.show_error(str(error))
                return
            self.host.clear_error()
            on_success(result)

        return self.runner.run(work, done, slot=slot, timeout=timeout)

    def open_modal(self, modal_id: str, view: Any, on_close: Optional[Action] = None) -> bool:
        if isinstance(self.mode, Modal):
            log.debug("ignoring %s: %s already open", modal_id, self.mode.modal_id)
            return False
        self.frame = NavFrame(current=modal_id, previous=self.frame.current)
        self.mode = Modal(modal_id)
        self._on_close = on_close
        self.host.mount_modal(modal_id, view)
        return True

    def close_modal(self) -> None:
        if not isinstance(self.mode, Modal):
            return
        previous = self.frame.previous
        self._dismiss_modal()
        if previous in self._pages:
            self.switch_to(previous)

    def route_key(self, key: str) -> Optional[str]:
        """Dispatch ``key``; returns it unchanged when nothing consumed it."""
        if not self.ready:
            return None
        action = self._globals.get(key)
        if action is None and isinstance(self.mode, Base):
            page = self.current_page
            if page is not None:
                action = page.keys.get(key)
        if action is None:
            return key
        action()
        return None

    def _show(self, page_id: str) -> None:
        self.frame = NavFrame(current=page_id, previous=self.frame.current)
        page = self._pages[page_id]
        self.host.show_page(page_id)
        self.host.show_hints(page.hints)

    def _dismiss_modal(self) -> None:
        if not isinstance(self.mode, Modal):
            return
        modal_id = self.mode.modal_id
        on_close, self._on_close = self._on_close, None
        self.mode = Base()
        self.frame = NavFrame(current=self.frame.previous, previous=modal_id)
        self.host.remove_modal(modal_id)
        if on_close is not None:
            on_close()
