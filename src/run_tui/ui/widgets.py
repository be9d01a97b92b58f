from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable, List, Optional, Sequence, Tuple

from textual.widgets import DataTable

from ..models.domainmappings import DomainMapping, ResourceRecord
from ..models.jobs import Execution, Job
from ..models.services import Revision, Service
from ..models.workerpools import WorkerPool


def age(ts: Optional[datetime], now: Optional[datetime] = None) -> str:
    if ts is None:
        return "-"
    now = now or datetime.now(timezone.utc)
    seconds = int((now - ts).total_seconds())
    if seconds < 60:
        return f"{max(seconds, 0)}s ago"
    if seconds < 3600:
        return f"{seconds // 60}m ago"
    if seconds < 86400:
        return f"{seconds // 3600}h ago"
    return f"{seconds // 86400}d ago"


def service_row(s: Service) -> Tuple[str, ...]:
    scaling = s.scaling.describe() if s.scaling else "-"
    return (s.short_name, s.region, s.uri or "-", s.modified_by or "-", age(s.update_time), scaling)


def job_row(j: Job) -> Tuple[str, ...]:
    return (j.short_name, j.region, str(j.execution_count), age(j.last_run), j.creator or "-")


def workerpool_row(w: WorkerPool) -> Tuple[str, ...]:
    return (w.short_name, w.region, str(w.instance_count), w.modified_by or "-", age(w.update_time))


def domainmapping_row(d: DomainMapping) -> Tuple[str, ...]:
    ready = {True: "yes", False: "no"}.get(d.ready, "-")
    return (d.name, d.region, d.route_name or "-", ready, age(d.create_time))


def execution_row(e: Execution) -> Tuple[str, ...]:
    tasks = f"{e.succeeded_count}/{e.task_count}"
    return (e.short_name, e.status, tasks, age(e.start_time), age(e.completion_time))


def record_row(r: ResourceRecord) -> Tuple[str, ...]:
    return (r.name or "@", r.type, r.rrdata)


def by_name(record: Any) -> Tuple[str, str]:
    return getattr(record, "short_name", ""), getattr(record, "region", "")


def by_created(record: Any) -> datetime:
    return record.create_time or datetime.min.replace(tzinfo=timezone.utc)


class ResourceTable(DataTable):
    """Row-per-record table that remembers which record each row is."""

    def __init__(self, columns: Sequence[str], row: Callable[[Any], Tuple[str, ...]],
                 sort_key: Callable[[Any], Any] = by_name, newest_first: bool = False, **kwargs) -> None:
        super().__init__(cursor_type="row", zebra_stripes=True, **kwargs)
        self._column_labels = tuple(columns)
        self.format_row = row
        self.record_key = sort_key
        self.newest_first = newest_first
        self.records: List[Any] = []

    def on_mount(self) -> None:
        self._ensure_columns()

    def _ensure_columns(self) -> None:
        if not self.columns:
            self.add_columns(*self._column_labels)

    def load(self, records: Sequence[Any]) -> None:
        self._ensure_columns()
        # fan-out order is arbitrary, so rows are always sorted
        self.records = sorted(records, key=self.record_key, reverse=self.newest_first)
        self.clear()
        for record in self.records:
            self.add_row(*self.format_row(record))

    @property
    def selected(self) -> Optional[Any]:
        if 0 <= self.cursor_row < len(self.records):
            return self.records[self.cursor_row]
        return None


def revision_table(service: Optional[Service]) -> Callable[[Revision], Tuple[str, ...]]:
    traffic = {}
    if service is not None:
        traffic = {t.revision.rsplit("/", 1)[-1]: t.percent for t in service.traffic_statuses if t.revision}

    def row(r: Revision) -> Tuple[str, ...]:
        percent = traffic.get(r.short_name)
        return (r.short_name, f"{percent}%" if percent is not None else "-", r.modified_by or "-",
                age(r.create_time))

    return row


SERVICE_COLUMNS = ("Name", "Region", "URL", "Last deployed by", "Deployed", "Scaling")
JOB_COLUMNS = ("Name", "Region", "Executions", "Last run", "Created by")
WORKERPOOL_COLUMNS = ("Name", "Region", "Instances", "Last deployed by", "Deployed")
DOMAINMAPPING_COLUMNS = ("Domain", "Region", "Mapped to", "Ready", "Created")
REVISION_COLUMNS = ("Revision", "Traffic", "Deployed by", "Created")
EXECUTION_COLUMNS = ("Execution", "Status", "Tasks", "Started", "Completed")
RECORD_COLUMNS = ("Name", "Type", "Data")
