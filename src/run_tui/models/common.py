from __future__ import annotations

import re
from datetime import datetime
from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict
from pydantic.alias_generators import to_camel

_FRACTION = re.compile(r"\.(\d{6})\d+")


def trim_fraction(value: Any) -> Any:
    """The API reports nanoseconds; datetime holds microseconds."""
    if isinstance(value, str):
        return _FRACTION.sub(r".\1", value)
    return value


Timestamp = Annotated[datetime, BeforeValidator(trim_fraction)]


class RunModel(BaseModel):
    model_config = ConfigDict(extra="ignore", from_attributes=True, populate_by_name=True, alias_generator=to_camel)


def resource_name(project: str, region: str, collection: str, name: str) -> str:
    return f"projects/{project}/locations/{region}/{collection}/{name}"


class Condition(RunModel):
    type: str
    state: Optional[str] = None
    message: Optional[str] = None
    last_transition_time: Optional[Timestamp] = None


class Resource(RunModel):
    """Anything addressed as projects/{p}/locations/{r}/{collection}/{id}."""

    name: str
    uid: Optional[str] = None
    create_time: Optional[Timestamp] = None
    update_time: Optional[Timestamp] = None
    creator: Optional[str] = None
    last_modifier: Optional[str] = None
    labels: dict[str, str] = {}
    conditions: list[Condition] = []

    def _part(self, index: int) -> str:
        parts = self.name.split("/")
        return parts[index] if len(parts) == 6 else ""

    @property
    def short_name(self) -> str:
        return self.name.rsplit("/", 1)[-1]

    @property
    def project(self) -> str:
        return self._part(1)

    @property
    def region(self) -> str:
        return self._part(3)

    @property
    def modified_by(self) -> str:
        return self.last_modifier or self.creator or ""

    @property
    def ready(self) -> Optional[bool]:
        for condition in self.conditions:
            if condition.type == "Ready":
                return condition.state == "CONDITION_SUCCEEDED"
        return None
