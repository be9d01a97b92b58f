from __future__ import annotations

import logging
import webbrowser
from concurrent.futures import ThreadPoolExecutor
from typing import Any, List, Optional

from textual import events
from textual.app import ComposeResult
from textual.screen import Screen
from textual.widgets import ContentSwitcher, Static

from ...console import RELEASE_NOTES, console_url
from ...core.context import Context
from ...core.dispatch import Dispatcher
from ...core.indicator import BusyIndicator
from ...core.navigation import Navigator, Page
from ...core.runner import TaskRunner
from ...services import cloudlogging
from ...services.resources import ResourceList
from ...session import Session
from .. import pages
from ..modals.dns import DnsRecordsModal
from ..modals.logs import LogsModal
from ..modals.pickers import project_picker, region_picker
from ..modals.scale import MUTATION_TIMEOUT, ScaleServiceModal, ScaleWorkerPoolModal
from ..widgets import ResourceTable
from .loading import LoadingScreen

log = logging.getLogger(__name__)

GLOBAL_HINTS = ("<ctrl+s> Services  <ctrl+b> Jobs  <ctrl+w> Worker pools  <ctrl+d> Domains  "
                "<ctrl+p> Project  <ctrl+r> Region  <ctrl+o> Console  <ctrl+l> Release notes")


class MainScreen(Screen):
    """Header, the page switcher and the status lines; hosts the navigator."""

    def __init__(self, session: Session, runner: TaskRunner, dispatcher: Dispatcher) -> None:
        super().__init__()
        self.session = session
        self.dispatcher = dispatcher
        backend = session.backend
        self.services_page = pages.ServicesPage(
            session, ResourceList("services", backend.services.list_in_partition, runner))
        self.jobs_page = pages.JobsPage(
            session, ResourceList("jobs", backend.jobs.list_in_partition, runner))
        self.workerpools_page = pages.WorkerPoolsPage(
            session, ResourceList("workerpools", backend.workerpools.list_in_partition, runner))
        self.domainmappings_page = pages.DomainMappingsPage(
            session, ResourceList("domainmappings", backend.domainmappings.list_in_partition, runner))
        self.service_dashboard = pages.ServiceDashboard(session)
        self.job_dashboard = pages.JobDashboard(session)
        self.curtain: Optional[LoadingScreen] = None
        self.indicator = BusyIndicator(dispatcher, self._paint_busy)
        self.navigator = Navigator(self, runner, self.indicator)

    def compose(self) -> ComposeResult:
        yield Static("", id="header", markup=False)
        yield Static("", id="hints", markup=False)
        with ContentSwitcher(initial=pages.ServicesPage.PAGE_ID, id="pages"):
            yield self.services_page
            yield self.jobs_page
            yield self.workerpools_page
            yield self.domainmappings_page
            yield self.service_dashboard
            yield self.job_dashboard
        yield Static("", id="busy", markup=False)
        yield Static("", id="status", markup=False)
        yield Static(GLOBAL_HINTS, id="footer", markup=False)

    def on_mount(self) -> None:
        self._register_pages()
        self._bind_globals()
        self.curtain = LoadingScreen()
        self.app.push_screen(self.curtain)
        self.navigator.boot(self._startup, pages.ServicesPage.PAGE_ID)

    # startup

    def _startup(self, ctx: Context) -> List[Any]:
        session = self.session
        session.resolve()
        self.indicator.set_context("Projects...")
        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="startup") as pool:
            projects = pool.submit(session.backend.projects.list, ctx)
            services = pool.submit(self.services_page.fetch, ctx)
            try:
                session.projects = projects.result()
            except Exception as e:
                log.warning("could not list projects: %s", e)
            self.indicator.set_context("Services...")
            return services.result()

    def _register_pages(self) -> None:
        nav = self.navigator
        for page, keys in (
            (self.services_page, {
                "enter": self.open_service_dashboard, "r": self.reload,
                "l": self.open_logs, "s": self.open_scale,
            }),
            (self.jobs_page, {
                "enter": self.open_job_dashboard, "r": self.reload,
                "l": self.open_logs, "x": self.execute_job,
            }),
            (self.workerpools_page, {
                "r": self.reload, "l": self.open_logs, "s": self.open_scale,
            }),
            (self.domainmappings_page, {
                "enter": self.open_dns_records, "r": self.reload, "o": self.open_domain,
            }),
        ):
            nav.add_page(Page(page.PAGE_ID, page.show_records, page.fetch, keys, page.HINTS,
                              f"Loading {page.TITLE.lower()}..."))
        nav.add_page(Page(
            pages.ServiceDashboard.PAGE_ID, self.service_dashboard.show_records, self.service_dashboard.fetch,
            {"escape": lambda: nav.switch_to(pages.ServicesPage.PAGE_ID), "r": self.reload,
             "l": self.open_logs, "s": self.open_scale},
            pages.ServiceDashboard.HINTS, "Loading service...",
        ))
        nav.add_page(Page(
            pages.JobDashboard.PAGE_ID, self.job_dashboard.show_records, self.job_dashboard.fetch,
            {"escape": lambda: nav.switch_to(pages.JobsPage.PAGE_ID), "r": self.reload,
             "l": self.open_logs, "x": self.execute_job},
            pages.JobDashboard.HINTS, "Loading job...",
        ))

    def _bind_globals(self) -> None:
        nav = self.navigator
        nav.bind_global("ctrl+s", lambda: nav.switch_to(pages.ServicesPage.PAGE_ID))
        nav.bind_global("ctrl+b", lambda: nav.switch_to(pages.JobsPage.PAGE_ID))
        nav.bind_global("ctrl+w", lambda: nav.switch_to(pages.WorkerPoolsPage.PAGE_ID))
        nav.bind_global("ctrl+d", lambda: nav.switch_to(pages.DomainMappingsPage.PAGE_ID))
        nav.bind_global("ctrl+p", self.pick_project)
        nav.bind_global("ctrl+r", self.pick_region)
        nav.bind_global("ctrl+o", self.open_console)
        nav.bind_global("ctrl+l", lambda: webbrowser.open(RELEASE_NOTES))

    def on_key(self, event: events.Key) -> None:
        if self.navigator.route_key(event.key) is None:
            event.stop()
            event.prevent_default()

    # ViewHost

    def show_page(self, page_id: str) -> None:
        self.query_one("#pages", ContentSwitcher).current = page_id
        self.query_one("#header", Static).update(self.session.title)
        self.query_one(f"#{page_id}").query_one(ResourceTable).focus()

    def mount_modal(self, modal_id: str, view: Any) -> None:
        self.app.push_screen(view)

    def remove_modal(self, modal_id: str) -> None:
        if self.app.screen.id == modal_id:
            self.app.pop_screen()

    def show_hints(self, hints: str) -> None:
        self.query_one("#hints", Static).update(hints)

    def set_loading(self, loading: bool) -> None:
        busy = self.query_one("#busy", Static)
        busy.display = loading
        if not loading:
            busy.update("")

    def lift_curtain(self) -> None:
        if self.curtain is not None and self.app.screen is self.curtain:
            self.app.pop_screen()
        self.curtain = None

    def show_error(self, message: str) -> None:
        self.query_one("#status", Static).update(f"Error: {message}")

    def clear_error(self) -> None:
        self.query_one("#status", Static).update("")

    def _paint_busy(self, text: str) -> None:
        if self.curtain is not None:
            self.curtain.paint(text)
        else:
            self.query_one("#busy", Static).update(text)

    # actions

    @property
    def current_view(self) -> Any:
        return self.query_one(f"#{self.navigator.frame.current}")

    def reload(self) -> None:
        self.navigator.switch_to(self.navigator.frame.current)

    def open_service_dashboard(self) -> None:
        service = self.services_page.selected
        if service is not None:
            self.service_dashboard.target = service
            self.navigator.switch_to(pages.ServiceDashboard.PAGE_ID)

    def open_job_dashboard(self) -> None:
        job = self.jobs_page.selected
        if job is not None:
            self.job_dashboard.target = job
            self.navigator.switch_to(pages.JobDashboard.PAGE_ID)

    def open_logs(self) -> None:
        page = self.current_view
        record = page.selected
        if record is None:
            return
        if isinstance(page, (pages.ServicesPage, pages.ServiceDashboard)):
            filter = cloudlogging.service_filter(record.short_name, record.region)
        elif isinstance(page, (pages.JobsPage, pages.JobDashboard)):
            filter = cloudlogging.job_filter(record.short_name, record.region)
        else:
            filter = cloudlogging.workerpool_filter(record.short_name, record.region)
        modal = LogsModal(self.navigator, self.dispatcher, self.session.backend.logs(record.project),
                          filter, f"Logs: {record.short_name} ({record.region})")
        self.navigator.open_modal(modal.modal_id, modal, on_close=modal.stop)

    def open_scale(self) -> None:
        page = self.current_view
        record = page.selected
        if record is None:
            return
        backend = self.session.backend
        if isinstance(page, pages.WorkerPoolsPage):
            modal = ScaleWorkerPoolModal(self.navigator, self.dispatcher, backend.workerpools, record)
        else:
            modal = ScaleServiceModal(self.navigator, self.dispatcher, backend.services, record)
        self.navigator.open_modal(modal.modal_id, modal)

    def execute_job(self) -> None:
        job = self.current_view.selected
        if job is None:
            return
        jobs = self.session.backend.jobs
        self.navigator.run_busy(
            lambda ctx: jobs.execute(job.project, job.region, job.short_name, ctx),
            lambda ref: self.reload(),
            f"Executing {job.short_name}...",
            slot="execute-job", timeout=MUTATION_TIMEOUT,
        )

    def open_dns_records(self) -> None:
        mapping = self.domainmappings_page.selected
        if mapping is not None:
            modal = DnsRecordsModal(self.navigator, mapping)
            self.navigator.open_modal(modal.modal_id, modal)

    def open_domain(self) -> None:
        mapping = self.domainmappings_page.selected
        if mapping is not None:
            webbrowser.open(f"https://{mapping.name}")

    def open_console(self) -> None:
        page = self.current_view
        selected = page.selected
        selection = (selected.short_name, selected.region) if selected is not None else None
        webbrowser.open(console_url(self.navigator.frame.current, self.session.project, selection))

    def pick_project(self) -> None:
        modal = project_picker(self.navigator, self.session.projects, self.session.project, self._set_project)
        self.navigator.open_modal(modal.modal_id, modal)

    def pick_region(self) -> None:
        modal = region_picker(self.navigator, self.session.region, self._set_region)
        self.navigator.open_modal(modal.modal_id, modal)

    def _set_project(self, project_id: str) -> None:
        self.session.project = project_id
        self.session.remember()

    def _set_region(self, region: str) -> None:
        self.session.region = region
        self.session.remember()
