"""In-memory backends for tests and ``--demo``."""

from __future__ import annotations

import re
import threading
from datetime import datetime, timedelta, timezone
from typing import Dict, Iterable, Iterator, List, Optional, Set, Tuple

from ..core.context import Context
from ..errors import ApiError
from ..models.common import resource_name
from ..models.domainmappings import DomainMapping, ResourceRecord
from ..models.jobs import Execution, ExecutionRef, Job
from ..models.logs import LogEntry, Order
from ..models.projects import Project
from ..models.services import Revision, Service, ServiceScaling
from ..models.workerpools import WorkerPool, WorkerPoolScaling
from .backend import Backend

_SINCE = re.compile(r'timestamp > "([^"]+)"')


class _Regional:
    """Records keyed by region; regions in ``failing`` raise like an unreachable endpoint."""

    def __init__(self, records: Iterable = (), failing: Iterable[str] = ()):
        self._records: Dict[str, list] = {}
        self.failing: Set[str] = set(failing)
        self.mutations: List[Tuple] = []
        self._lock = threading.Lock()
        for record in records:
            self.add(record)

    def add(self, record) -> None:
        with self._lock:
            self._records.setdefault(record.region, []).append(record)

    def _check(self, region: str) -> None:
        if region in self.failing:
            raise ApiError(503, f"region {region} unavailable")

    def list_in_partition(self, project: str, region: str, ctx: Optional[Context] = None) -> list:
        self._check(region)
        with self._lock:
            return [r for r in self._records.get(region, []) if r.project == project]

    def get(self, project: str, region: str, name: str, ctx: Optional[Context] = None):
        for record in self.list_in_partition(project, region, ctx):
            if record.short_name == name:
                return record
        raise ApiError(404, f"{name} not found in {region}")

    def _replace(self, old, new) -> None:
        with self._lock:
            records = self._records[old.region]
            records[records.index(old)] = new


class MemoryServices(_Regional):
    def __init__(self, records: Iterable[Service] = (), failing: Iterable[str] = (),
                 revisions: Optional[Dict[str, List[Revision]]] = None):
        super().__init__(records, failing)
        self._revisions = revisions or {}

    def list_revisions(self, service: Service, ctx: Optional[Context] = None) -> List[Revision]:
        return list(self._revisions.get(service.name, []))

    def update_scaling(self, project: str, region: str, name: str, min_count: int = 0, max_count: int = 0,
                       manual: int = 0, ctx: Optional[Context] = None) -> Service:
        service = self.get(project, region, name, ctx)
        if manual > 0:
            scaling = ServiceScaling(scaling_mode="MANUAL", manual_instance_count=manual)
        else:
            scaling = ServiceScaling(scaling_mode="AUTOMATIC", min_instance_count=min_count,
                                     max_instance_count=max_count)
        updated = service.model_copy(update={"scaling": scaling})
        self._replace(service, updated)
        self.mutations.append(("scale", name, min_count, max_count, manual))
        return updated


class MemoryJobs(_Regional):
    def __init__(self, records: Iterable[Job] = (), failing: Iterable[str] = (),
                 executions: Optional[Dict[str, List[Execution]]] = None):
        super().__init__(records, failing)
        self._executions = executions or {}

    def list_executions(self, job: Job, ctx: Optional[Context] = None) -> List[Execution]:
        return list(self._executions.get(job.name, []))

    def execute(self, project: str, region: str, name: str, ctx: Optional[Context] = None) -> ExecutionRef:
        job = self.get(project, region, name, ctx)
        self.mutations.append(("execute", name))
        ref = ExecutionRef(name=f"{job.name}/executions/{name}-{len(self.mutations):05d}",
                           create_time=datetime.now(timezone.utc))
        self._replace(job, job.model_copy(update={
            "execution_count": job.execution_count + 1,
            "latest_created_execution": ref,
        }))
        return ref


class MemoryWorkerPools(_Regional):
    def update_scaling(self, project: str, region: str, name: str, count: int,
                       ctx: Optional[Context] = None) -> WorkerPool:
        pool = self.get(project, region, name, ctx)
        updated = pool.model_copy(update={"scaling": WorkerPoolScaling(manual_instance_count=count)})
        self._replace(pool, updated)
        self.mutations.append(("scale", name, count))
        return updated


class MemoryDomainMappings(_Regional):
    pass


class MemoryProjects:
    def __init__(self, projects: Iterable[Project] = ()):
        self.projects = list(projects)

    def list(self, ctx: Optional[Context] = None) -> List[Project]:
        return list(self.projects)


class MemoryLogSource:
    """Entries kept sorted by time; understands the ``timestamp > "..."`` clause only."""

    def __init__(self, entries: Iterable[LogEntry] = ()):
        self._entries = sorted(entries, key=lambda e: e.timestamp)
        self._lock = threading.Lock()
        self.filters: List[str] = []

    def append(self, entry: LogEntry) -> None:
        with self._lock:
            self._entries.append(entry)
            self._entries.sort(key=lambda e: e.timestamp)

    def entries(self, filter: str, order: Order, limit: Optional[int] = None,
                ctx: Optional[Context] = None) -> Iterator[LogEntry]:
        with self._lock:
            self.filters.append(filter)
            selected = list(self._entries)
        match = _SINCE.search(filter)
        if match:
            since = LogEntry(timestamp=match.group(1)).timestamp
            selected = [e for e in selected if e.timestamp > since]
        if order is Order.NEWEST_FIRST:
            selected.reverse()
        if limit is not None:
            selected = selected[:limit]
        return iter(selected)


def demo_backend(project: str = "demo-project") -> Backend:
    now = datetime.now(timezone.utc)

    def name(region: str, collection: str, short: str) -> str:
        return resource_name(project, region, collection, short)

    services = [
        Service(name=name("europe-west1", "services", "frontend"), uri="https://frontend-demo.a.run.app",
                creator="alice@example.com", update_time=now - timedelta(hours=3),
                latest_ready_revision=name("europe-west1", "services", "frontend") + "/revisions/frontend-00042-abc",
                scaling=ServiceScaling(scaling_mode="AUTOMATIC", min_instance_count=1, max_instance_count=10)),
        Service(name=name("us-central1", "services", "api"), uri="https://api-demo.a.run.app",
                creator="bob@example.com", last_modifier="carol@example.com", update_time=now - timedelta(days=2),
                latest_ready_revision=name("us-central1", "services", "api") + "/revisions/api-00007-xyz",
                scaling=ServiceScaling(scaling_mode="MANUAL", manual_instance_count=3)),
    ]
    jobs = [
        Job(name=name("europe-west1", "jobs", "nightly-export"), creator="alice@example.com",
            update_time=now - timedelta(days=1), execution_count=12),
    ]
    pools = [
        WorkerPool(name=name("us-central1", "workerPools", "queue-consumer"), creator="bob@example.com",
                   update_time=now - timedelta(hours=6), scaling=WorkerPoolScaling(manual_instance_count=2)),
    ]
    mappings = [
        DomainMapping(name="www.example.com", project=project, region="europe-west1", route_name="frontend",
                      ready=True, records=[ResourceRecord(type="CNAME", rrdata="ghs.googlehosted.com.")]),
    ]
    logs = MemoryLogSource(
        LogEntry(timestamp=now - timedelta(seconds=10 * i), payload=f"GET /healthz 200 ({i})")
        for i in range(20)
    )
    return Backend(
        services=MemoryServices(services),
        jobs=MemoryJobs(jobs),
        workerpools=MemoryWorkerPools(pools),
        domainmappings=MemoryDomainMappings(mappings),
        projects=MemoryProjects([Project(project_id=project, display_name="Demo project")]),
        logs=lambda _project: logs,
    )
