"""Cloud console deep links for ctrl+o."""

from __future__ import annotations

from typing import Optional, Tuple
from urllib.parse import quote

CONSOLE = "https://console.cloud.google.com"
RELEASE_NOTES = "https://cloud.google.com/run/docs/release-notes"

_LISTS = {
    "services-list": "/run/services",
    "jobs-list": "/run/jobs",
    "workerpools-list": "/run/workerpools",
    "domainmappings-list": "/run/domains",
}

_DETAILS = {
    "services-list": "/run/detail/{region}/{name}/metrics",
    "service-dashboard": "/run/detail/{region}/{name}/revisions",
    "jobs-list": "/run/jobs/details/{region}/{name}/executions",
    "job-dashboard": "/run/jobs/details/{region}/{name}/executions",
    "workerpools-list": "/run/workerpools/details/{region}/{name}",
}


def console_url(page_id: Optional[str], project: str, selection: Optional[Tuple[str, str]] = None) -> str:
    """Link for the selected (name, region) if the page has a detail view, else the page's list."""
    query = f"?project={quote(project)}"
    if selection is not None and page_id in _DETAILS:
        name, region = selection
        return CONSOLE + _DETAILS[page_id].format(region=region, name=name) + query
    return CONSOLE + _LISTS.get(page_id or "", "/run") + query
