from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List

from . import regions
from .auth import Info, discover_info
from .config import Config
from .errors import ConfigError
from .models.projects import Project
from .services.backend import Backend

log = logging.getLogger(__name__)


@dataclass
class Session:
    """Everything the screens share: who, where, and what to talk to."""

    backend: Backend
    project: str = ""
    region: str = ""
    user: str = "Guest"
    projects: List[Project] = field(default_factory=list)
    # demo sessions never read or write the user's gcloud/run config
    demo: bool = False

    def resolve(self) -> None:
        """Fill in project and region: options > ~/.run.yaml > gcloud > defaults."""
        info = Info() if self.demo else discover_info()
        config = Config()
        if not self.demo:
            try:
                config = Config.load()
            except ConfigError as e:
                log.warning("ignoring config: %s", e)
        self.user = info.user
        self.project = self.project or config.project or info.project
        self.region = self.region or config.region or info.region
        if not regions.is_valid(self.region):
            log.warning("unknown region %r, showing all regions", self.region)
            self.region = regions.ALL

    def remember(self) -> None:
        if self.demo:
            return
        try:
            Config(project=self.project, region=self.region).save()
        except OSError as e:
            log.warning("could not save config: %s", e)

    @property
    def title(self) -> str:
        return f"{self.user} | project: {self.project} | region: {self.region}"
