from __future__ import annotations

from typing import Literal, Optional

from .common import Resource, RunModel

ScalingMode = Literal["AUTOMATIC", "MANUAL"]


class ServiceScaling(RunModel):
    min_instance_count: Optional[int] = None
    max_instance_count: Optional[int] = None
    scaling_mode: Optional[ScalingMode] = None
    manual_instance_count: Optional[int] = None

    @property
    def is_manual(self) -> bool:
        return self.scaling_mode == "MANUAL"

    def describe(self) -> str:
        if self.is_manual:
            return f"manual ({self.manual_instance_count or 0})"
        return f"auto ({self.min_instance_count or 0}-{self.max_instance_count or 0})"


class TrafficStatus(RunModel):
    type: Optional[str] = None
    revision: Optional[str] = None
    percent: int = 0
    tag: Optional[str] = None
    uri: Optional[str] = None


class Service(Resource):
    description: Optional[str] = None
    uri: Optional[str] = None
    urls: list[str] = []
    ingress: Optional[str] = None
    latest_ready_revision: Optional[str] = None
    latest_created_revision: Optional[str] = None
    traffic_statuses: list[TrafficStatus] = []
    scaling: Optional[ServiceScaling] = None

    @property
    def latest_revision(self) -> str:
        return (self.latest_ready_revision or "").rsplit("/", 1)[-1]


class Revision(Resource):
    service: Optional[str] = None
    max_instance_request_concurrency: Optional[int] = None
    timeout: Optional[str] = None
    service_account: Optional[str] = None
