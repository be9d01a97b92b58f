from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError

from .errors import ConfigError

log = logging.getLogger(__name__)

FILENAME = ".run.yaml"


def config_path() -> Path:
    return Path.home() / FILENAME


class Config(BaseModel):
    """Last project and region picked in the UI."""

    model_config = ConfigDict(extra="ignore")

    project: str = ""
    region: str = ""

    @classmethod
    def load(cls) -> "Config":
        path = config_path()
        if not path.exists():
            return cls()
        try:
            data = yaml.safe_load(path.read_text())
        except yaml.YAMLError as e:
            raise ConfigError(f"{path}: cannot unmarshal config: {e}") from e
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError(f"{path}: cannot unmarshal {type(data).__name__} into config")
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"{path}: cannot unmarshal config: {e}") from e

    def save(self) -> None:
        config_path().write_text(yaml.safe_dump(self.model_dump(), default_flow_style=False))
