from __future__ import annotations

from typing import Iterator, Optional

from ..core.context import Context
from ..models.logs import LogEntry, Order
from .http import ApiClient

LOGGING_URL = "https://logging.googleapis.com"
PAGE_SIZE = 1000


def service_filter(name: str, region: str) -> str:
    return (f'resource.type="cloud_run_revision" AND resource.labels.service_name="{name}" '
            f'AND resource.labels.location="{region}"')


def job_filter(name: str, region: str) -> str:
    return (f'resource.type="cloud_run_job" AND resource.labels.job_name="{name}" '
            f'AND resource.labels.location="{region}"')


def workerpool_filter(name: str, region: str) -> str:
    return (f'resource.type="cloud_run_worker_pool" AND resource.labels.worker_pool_name="{name}" '
            f'AND resource.labels.location="{region}"')


class CloudLoggingSource:
    """entries:list for one project, yielded lazily page by page."""

    def __init__(self, api: ApiClient, project: str):
        self.api = api
        self.project = project

    def entries(self, filter: str, order: Order, limit: Optional[int] = None,
                ctx: Optional[Context] = None) -> Iterator[LogEntry]:
        body = {
            "resourceNames": [f"projects/{self.project}"],
            "filter": filter,
            "orderBy": order.value,
            "pageSize": min(limit, PAGE_SIZE) if limit else PAGE_SIZE,
        }
        yielded = 0
        while True:
            page = self.api.post("/v2/entries:list", body, ctx)
            for item in page.get("entries", []):
                yield LogEntry.from_api(item)
                yielded += 1
                if limit is not None and yielded >= limit:
                    return
            token = page.get("nextPageToken")
            if not token:
                return
            body["pageToken"] = token
