from __future__ import annotations

from typing import Callable, Generic, List, Optional, Sequence, TypeVar

from ..core.aggregate import fetch_partitioned
from ..core.context import Context
from ..core.runner import OnComplete, TaskHandle, TaskRunner

R = TypeVar("R")

ListOne = Callable[[str, str, Optional[Context]], Sequence[R]]


class ResourceList(Generic[R]):
    """List one resource kind for a project, over one region or all of them."""

    def __init__(self, kind: str, list_one: ListOne, runner: TaskRunner):
        self.kind = kind
        self.list_one = list_one
        self.runner = runner

    @property
    def slot(self) -> str:
        return f"{self.kind}-list"

    def list(self, project: str, region: str, ctx: Optional[Context] = None) -> List[R]:
        return fetch_partitioned(region, lambda partition: self.list_one(project, partition, ctx))

    def reload(self, project: str, region: str, on_complete: OnComplete) -> TaskHandle:
        return self.runner.run(lambda ctx: self.list(project, region, ctx), on_complete, slot=self.slot)
