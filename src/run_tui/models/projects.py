from __future__ import annotations

from typing import Optional

from .common import RunModel


class Project(RunModel):
    project_id: str
    display_name: Optional[str] = None
    state: Optional[str] = None

    @property
    def label(self) -> str:
        if self.display_name and self.display_name != self.project_id:
            return f"{self.project_id} ({self.display_name})"
        return self.project_id
