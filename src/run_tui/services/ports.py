"""What the UI needs from each backend; production clients and in-memory fakes both satisfy these."""

from __future__ import annotations

from typing import List, Optional, Protocol

from ..core.context import Context
from ..core.logtail import LogSource
from ..models.domainmappings import DomainMapping
from ..models.jobs import Execution, ExecutionRef, Job
from ..models.projects import Project
from ..models.services import Revision, Service
from ..models.workerpools import WorkerPool


class ServicePort(Protocol):
    def list_in_partition(self, project: str, region: str, ctx: Optional[Context] = None) -> List[Service]: ...
    def get(self, project: str, region: str, name: str, ctx: Optional[Context] = None) -> Service: ...
    def list_revisions(self, service: Service, ctx: Optional[Context] = None) -> List[Revision]: ...
    def update_scaling(self, project: str, region: str, name: str, min_count: int = 0, max_count: int = 0,
                       manual: int = 0, ctx: Optional[Context] = None) -> Service: ...


class JobPort(Protocol):
    def list_in_partition(self, project: str, region: str, ctx: Optional[Context] = None) -> List[Job]: ...
    def get(self, project: str, region: str, name: str, ctx: Optional[Context] = None) -> Job: ...
    def list_executions(self, job: Job, ctx: Optional[Context] = None) -> List[Execution]: ...
    def execute(self, project: str, region: str, name: str, ctx: Optional[Context] = None) -> ExecutionRef: ...


class WorkerPoolPort(Protocol):
    def list_in_partition(self, project: str, region: str, ctx: Optional[Context] = None) -> List[WorkerPool]: ...
    def get(self, project: str, region: str, name: str, ctx: Optional[Context] = None) -> WorkerPool: ...
    def update_scaling(self, project: str, region: str, name: str, count: int,
                       ctx: Optional[Context] = None) -> WorkerPool: ...


class DomainMappingPort(Protocol):
    def list_in_partition(self, project: str, region: str, ctx: Optional[Context] = None) -> List[DomainMapping]: ...


class ProjectPort(Protocol):
    def list(self, ctx: Optional[Context] = None) -> List[Project]: ...


class LogSourceFactory(Protocol):
    def __call__(self, project: str) -> LogSource: ...
