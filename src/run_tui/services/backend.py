from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import httpx

from .cloudlogging import LOGGING_URL, CloudLoggingSource
from .cloudrun import (RESOURCE_MANAGER_URL, RUN_URL, DomainMappingClient, JobClient, ProjectClient,
                       ServiceClient, WorkerPoolClient)
from .http import ApiClient
from .ports import DomainMappingPort, JobPort, LogSourceFactory, ProjectPort, ServicePort, WorkerPoolPort


@dataclass
class Backend:
    services: ServicePort
    jobs: JobPort
    workerpools: WorkerPoolPort
    domainmappings: DomainMappingPort
    projects: ProjectPort
    logs: LogSourceFactory


def production_backend(token: str, transport: Optional[httpx.BaseTransport] = None) -> Backend:
    run = ApiClient(RUN_URL, token, transport=transport)
    logging_api = ApiClient(LOGGING_URL, token, transport=transport)
    return Backend(
        services=ServiceClient(run),
        jobs=JobClient(run),
        workerpools=WorkerPoolClient(run),
        domainmappings=DomainMappingClient(token, transport=transport),
        projects=ProjectClient(ApiClient(RESOURCE_MANAGER_URL, token, transport=transport)),
        logs=lambda project: CloudLoggingSource(logging_api, project),
    )
