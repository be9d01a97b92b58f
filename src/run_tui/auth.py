"""Account, project and token discovery from the gcloud SDK."""

from __future__ import annotations

import configparser
import logging
import os
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from . import regions
from .errors import CredentialsError

log = logging.getLogger(__name__)

TOKEN_ENV = "CLOUDSDK_AUTH_ACCESS_TOKEN"


@dataclass
class Info:
    user: str = "Guest"
    project: str = "None"
    region: str = regions.ALL


def gcloud_config_dir() -> Path:
    env = os.environ.get("CLOUDSDK_CONFIG")
    if env:
        return Path(env)
    return Path.home() / ".config" / "gcloud"


def active_configuration(base: Path) -> str:
    try:
        name = (base / "active_config").read_text().strip()
    except OSError:
        return "default"
    return name or "default"


def discover_info() -> Info:
    info = Info()
    base = gcloud_config_dir()
    path = base / "configurations" / f"config_{active_configuration(base)}"
    parser = configparser.ConfigParser(comment_prefixes=("#", ";"), interpolation=None)
    try:
        parser.read(path)
    except configparser.Error as e:
        log.warning("ignoring unreadable gcloud config %s: %s", path, e)
        return info
    info.user = parser.get("core", "account", fallback="") or info.user
    info.project = parser.get("core", "project", fallback="") or info.project
    info.region = parser.get("run", "region", fallback="") or info.region
    return info


def access_token(explicit: Optional[str] = None) -> str:
    if explicit:
        return explicit
    env = os.environ.get(TOKEN_ENV)
    if env:
        return env
    gcloud = shutil.which("gcloud")
    if gcloud is None:
        raise CredentialsError(f"no access token: pass --token, set {TOKEN_ENV} or install gcloud")
    try:
        out = subprocess.run([gcloud, "auth", "print-access-token"], capture_output=True, text=True,
                             check=True, timeout=30)
    except (subprocess.CalledProcessError, subprocess.TimeoutExpired) as e:
        stderr = getattr(e, "stderr", "") or ""
        raise CredentialsError(f"gcloud auth print-access-token failed: {stderr.strip() or e}") from e
    token = out.stdout.strip()
    if not token:
        raise CredentialsError("gcloud returned an empty access token")
    return token
