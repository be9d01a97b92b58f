"""The main screen's pages: one list per resource kind plus two dashboards."""

from __future__ import annotations

from typing import Any, List, Optional, Tuple

from textual.app import ComposeResult
from textual.containers import Vertical
from textual.widgets import Static

from ..core.context import Context
from ..models.jobs import Execution, Job
from ..models.services import Revision, Service
from ..services.resources import ResourceList
from ..session import Session
from . import widgets


class ListPage(Vertical):
    PAGE_ID = ""
    TITLE = ""
    HINTS = ""
    COLUMNS: Tuple[str, ...] = ()
    ROW = staticmethod(widgets.service_row)

    def __init__(self, session: Session, resources: ResourceList) -> None:
        super().__init__(id=self.PAGE_ID)
        self.session = session
        self.resources = resources

    def compose(self) -> ComposeResult:
        yield Static(self.TITLE, classes="page-title", markup=False)
        yield widgets.ResourceTable(self.COLUMNS, self.ROW)

    @property
    def table(self) -> widgets.ResourceTable:
        return self.query_one(widgets.ResourceTable)

    @property
    def selected(self) -> Any:
        return self.table.selected

    def fetch(self, ctx: Context) -> List[Any]:
        return self.resources.list(self.session.project, self.session.region, ctx)

    def show_records(self, records: List[Any]) -> None:
        self.table.load(records)


class ServicesPage(ListPage):
    PAGE_ID = "services-list"
    TITLE = "Services"
    HINTS = "<enter> Dashboard  <r> Refresh  <l> Logs  <s> Scale"
    COLUMNS = widgets.SERVICE_COLUMNS
    ROW = staticmethod(widgets.service_row)


class JobsPage(ListPage):
    PAGE_ID = "jobs-list"
    TITLE = "Jobs"
    HINTS = "<enter> Dashboard  <r> Refresh  <l> Logs  <x> Execute"
    COLUMNS = widgets.JOB_COLUMNS
    ROW = staticmethod(widgets.job_row)


class WorkerPoolsPage(ListPage):
    PAGE_ID = "workerpools-list"
    TITLE = "Worker pools"
    HINTS = "<r> Refresh  <l> Logs  <s> Scale"
    COLUMNS = widgets.WORKERPOOL_COLUMNS
    ROW = staticmethod(widgets.workerpool_row)


class DomainMappingsPage(ListPage):
    PAGE_ID = "domainmappings-list"
    TITLE = "Domain mappings"
    HINTS = "<enter> DNS records  <r> Refresh  <o> Open"
    COLUMNS = widgets.DOMAINMAPPING_COLUMNS
    ROW = staticmethod(widgets.domainmapping_row)


def service_summary(s: Service) -> str:
    lines = [
        f"Service: {s.short_name}    Region: {s.region}    Project: {s.project}",
        f"URL: {s.uri or '-'}",
        f"Last deployed by: {s.modified_by or '-'} ({widgets.age(s.update_time)})",
        f"Latest revision: {s.latest_revision or '-'}",
    ]
    if s.scaling is not None:
        lines.append(f"Scaling: {s.scaling.describe()}")
    return "\n".join(lines)


def job_summary(j: Job) -> str:
    return "\n".join([
        f"Job: {j.short_name}    Region: {j.region}    Project: {j.project}",
        f"Executions: {j.execution_count}    Last run: {widgets.age(j.last_run)}",
        f"Created by: {j.creator or '-'}",
    ])


class ServiceDashboard(Vertical):
    PAGE_ID = "service-dashboard"
    HINTS = "<esc> Back  <r> Refresh  <l> Logs  <s> Scale"

    def __init__(self, session: Session) -> None:
        super().__init__(id=self.PAGE_ID)
        self.session = session
        self.target: Optional[Service] = None

    def compose(self) -> ComposeResult:
        yield Static("", id="service-summary", classes="summary", markup=False)
        yield widgets.ResourceTable(widgets.REVISION_COLUMNS, widgets.revision_table(None),
                                    sort_key=widgets.by_created, newest_first=True)

    @property
    def selected(self) -> Optional[Service]:
        return self.target

    def fetch(self, ctx: Context) -> Tuple[Service, List[Revision]]:
        t = self.target
        services = self.session.backend.services
        service = services.get(t.project, t.region, t.short_name, ctx)
        return service, services.list_revisions(service, ctx)

    def show_records(self, result: Tuple[Service, List[Revision]]) -> None:
        service, revisions = result
        self.target = service
        self.query_one("#service-summary", Static).update(service_summary(service))
        table = self.query_one(widgets.ResourceTable)
        table.format_row = widgets.revision_table(service)
        table.load(revisions)


class JobDashboard(Vertical):
    PAGE_ID = "job-dashboard"
    HINTS = "<esc> Back  <r> Refresh  <l> Logs  <x> Execute"

    def __init__(self, session: Session) -> None:
        super().__init__(id=self.PAGE_ID)
        self.session = session
        self.target: Optional[Job] = None

    def compose(self) -> ComposeResult:
        yield Static("", id="job-summary", classes="summary", markup=False)
        yield widgets.ResourceTable(widgets.EXECUTION_COLUMNS, widgets.execution_row,
                                    sort_key=widgets.by_created, newest_first=True)

    @property
    def selected(self) -> Optional[Job]:
        return self.target

    def fetch(self, ctx: Context) -> Tuple[Job, List[Execution]]:
        t = self.target
        jobs = self.session.backend.jobs
        job = jobs.get(t.project, t.region, t.short_name, ctx)
        return job, jobs.list_executions(job, ctx)

    def show_records(self, result: Tuple[Job, List[Execution]]) -> None:
        job, executions = result
        self.target = job
        self.query_one("#job-summary", Static).update(job_summary(job))
        self.query_one(widgets.ResourceTable).load(executions)
