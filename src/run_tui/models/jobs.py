from __future__ import annotations

from datetime import datetime
from typing import Optional

from .common import Resource, RunModel, Timestamp


class ExecutionRef(RunModel):
    name: str
    create_time: Optional[Timestamp] = None
    completion_time: Optional[Timestamp] = None

    @property
    def short_name(self) -> str:
        return self.name.rsplit("/", 1)[-1]


class Job(Resource):
    execution_count: int = 0
    latest_created_execution: Optional[ExecutionRef] = None

    @property
    def last_run(self) -> Optional[datetime]:
        if self.latest_created_execution is None:
            return None
        return self.latest_created_execution.create_time


class Execution(Resource):
    job: Optional[str] = None
    start_time: Optional[Timestamp] = None
    completion_time: Optional[Timestamp] = None
    task_count: int = 0
    running_count: int = 0
    succeeded_count: int = 0
    failed_count: int = 0
    cancelled_count: int = 0

    @property
    def status(self) -> str:
        if self.completion_time is None:
            return "Running"
        if self.failed_count or self.cancelled_count:
            return "Failed"
        return "Succeeded"
