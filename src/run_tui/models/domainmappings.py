from __future__ import annotations

from typing import Any, Optional

from .common import RunModel, Timestamp


class ResourceRecord(RunModel):
    name: Optional[str] = None
    type: str
    rrdata: str


class DomainMapping(RunModel):
    """Domain mappings only exist on the v1 (Knative-style) API."""

    name: str
    project: str = ""
    region: str = ""
    route_name: str = ""
    create_time: Optional[Timestamp] = None
    ready: Optional[bool] = None
    mapped_route: str = ""
    records: list[ResourceRecord] = []

    @property
    def short_name(self) -> str:
        return self.name

    @classmethod
    def from_api(cls, item: dict[str, Any], region: str) -> "DomainMapping":
        metadata = item.get("metadata", {})
        spec = item.get("spec", {})
        status = item.get("status", {})
        ready = None
        for condition in status.get("conditions", []):
            if condition.get("type") == "Ready":
                ready = condition.get("status") == "True"
        labels = metadata.get("labels", {})
        return cls(
            name=metadata.get("name", ""),
            project=metadata.get("namespace", ""),
            region=labels.get("cloud.googleapis.com/location", region),
            route_name=spec.get("routeName", ""),
            create_time=metadata.get("creationTimestamp"),
            ready=ready,
            mapped_route=status.get("mappedRouteName", ""),
            records=status.get("resourceRecords", []),
        )
