from __future__ import annotations

from typing import Optional

from .common import Resource, RunModel


class WorkerPoolScaling(RunModel):
    manual_instance_count: Optional[int] = None


class WorkerPool(Resource):
    description: Optional[str] = None
    latest_ready_revision: Optional[str] = None
    scaling: Optional[WorkerPoolScaling] = None

    @property
    def instance_count(self) -> int:
        if self.scaling is None:
            return 0
        return self.scaling.manual_instance_count or 0
