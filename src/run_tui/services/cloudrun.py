"""Cloud Run Admin API v2 clients, one per resource kind."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from ..core.context import Context
from ..models.common import resource_name
from ..models.domainmappings import DomainMapping
from ..models.jobs import Execution, ExecutionRef, Job
from ..models.projects import Project
from ..models.services import Revision, Service
from ..models.workerpools import WorkerPool
from .http import ApiClient

log = logging.getLogger(__name__)

RUN_URL = "https://run.googleapis.com"
RESOURCE_MANAGER_URL = "https://cloudresourcemanager.googleapis.com"
# v1 domain mappings are only served from regional endpoints
DOMAINS_URL = "https://{region}-run.googleapis.com"

OUTPUT_ONLY = (
    "uid", "generation", "createTime", "updateTime", "deleteTime", "expireTime",
    "creator", "lastModifier", "reconciling", "observedGeneration",
    "terminalCondition", "conditions", "latestReadyRevision", "latestCreatedRevision",
    "trafficStatuses", "uri", "urls",
)


def writable(resource: Dict[str, Any]) -> Dict[str, Any]:
    # etag stays for optimistic concurrency
    return {k: v for k, v in resource.items() if k not in OUTPUT_ONLY}


class _RunClient:
    collection = ""

    def __init__(self, api: ApiClient):
        self.api = api

    def _parent(self, project: str, region: str) -> str:
        return f"/v2/projects/{project}/locations/{region}/{self.collection}"

    def _name(self, project: str, region: str, name: str) -> str:
        return resource_name(project, region, self.collection, name)


class ServiceClient(_RunClient):
    collection = "services"

    def list_in_partition(self, project: str, region: str, ctx: Optional[Context] = None) -> List[Service]:
        items = self.api.list_all(self._parent(project, region), "services", ctx)
        return [Service.model_validate(item) for item in items]

    def get(self, project: str, region: str, name: str, ctx: Optional[Context] = None) -> Service:
        return Service.model_validate(self.api.get(f"/v2/{self._name(project, region, name)}", ctx))

    def list_revisions(self, service: Service, ctx: Optional[Context] = None) -> List[Revision]:
        items = self.api.list_all(f"/v2/{service.name}/revisions", "revisions", ctx)
        return [Revision.model_validate(item) for item in items]

    def update_scaling(self, project: str, region: str, name: str, min_count: int = 0, max_count: int = 0,
                       manual: int = 0, ctx: Optional[Context] = None) -> Service:
        """Switch to manual scaling when ``manual`` > 0, automatic otherwise."""
        path = f"/v2/{self._name(project, region, name)}"
        body = writable(self.api.get(path, ctx))
        if manual > 0:
            body["scaling"] = {"scalingMode": "MANUAL", "manualInstanceCount": manual}
        else:
            scaling: Dict[str, Any] = {"scalingMode": "AUTOMATIC", "minInstanceCount": min_count}
            if max_count:
                scaling["maxInstanceCount"] = max_count
            body["scaling"] = scaling
        log.info("scaling service %s/%s: %s", region, name, body["scaling"])
        op = self.api.patch(path, body, ctx)
        return Service.model_validate(self.api.wait_operation(op, ctx))


class JobClient(_RunClient):
    collection = "jobs"

    def list_in_partition(self, project: str, region: str, ctx: Optional[Context] = None) -> List[Job]:
        items = self.api.list_all(self._parent(project, region), "jobs", ctx)
        return [Job.model_validate(item) for item in items]

    def get(self, project: str, region: str, name: str, ctx: Optional[Context] = None) -> Job:
        return Job.model_validate(self.api.get(f"/v2/{self._name(project, region, name)}", ctx))

    def list_executions(self, job: Job, ctx: Optional[Context] = None) -> List[Execution]:
        items = self.api.list_all(f"/v2/{job.name}/executions", "executions", ctx)
        return [Execution.model_validate(item) for item in items]

    def execute(self, project: str, region: str, name: str, ctx: Optional[Context] = None) -> ExecutionRef:
        """Start an execution; returns as soon as the operation is accepted."""
        op = self.api.post(f"/v2/{self._name(project, region, name)}:run", ctx=ctx)
        log.info("started job %s/%s: %s", region, name, op.get("name"))
        return ExecutionRef.model_validate(op.get("metadata") or {"name": op.get("name", "")})


class WorkerPoolClient(_RunClient):
    collection = "workerPools"

    def list_in_partition(self, project: str, region: str, ctx: Optional[Context] = None) -> List[WorkerPool]:
        items = self.api.list_all(self._parent(project, region), "workerPools", ctx)
        return [WorkerPool.model_validate(item) for item in items]

    def get(self, project: str, region: str, name: str, ctx: Optional[Context] = None) -> WorkerPool:
        return WorkerPool.model_validate(self.api.get(f"/v2/{self._name(project, region, name)}", ctx))

    def update_scaling(self, project: str, region: str, name: str, count: int,
                       ctx: Optional[Context] = None) -> WorkerPool:
        path = f"/v2/{self._name(project, region, name)}"
        body = writable(self.api.get(path, ctx))
        body["scaling"] = {"manualInstanceCount": count}
        log.info("scaling worker pool %s/%s to %d", region, name, count)
        op = self.api.patch(path, body, ctx, updateMask="scaling")
        return WorkerPool.model_validate(self.api.wait_operation(op, ctx))


class DomainMappingClient:
    def __init__(self, token: str, transport: Optional[httpx.BaseTransport] = None):
        self.token = token
        self.transport = transport

    def list_in_partition(self, project: str, region: str, ctx: Optional[Context] = None) -> List[DomainMapping]:
        api = ApiClient(DOMAINS_URL.format(region=region), self.token, transport=self.transport)
        try:
            body = api.get(f"/apis/domains.cloudrun.com/v1/namespaces/{project}/domainmappings", ctx)
        finally:
            api.close()
        return [DomainMapping.from_api(item, region) for item in body.get("items", [])]


class ProjectClient:
    def __init__(self, api: ApiClient):
        self.api = api

    def list(self, ctx: Optional[Context] = None) -> List[Project]:
        items = self.api.list_all("/v3/projects:search", "projects", ctx)
        return [Project.model_validate(item) for item in items if item.get("state", "ACTIVE") == "ACTIVE"]
