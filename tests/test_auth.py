import subprocess

import pytest

from run_tui import auth, regions
from run_tui.errors import CredentialsError


@pytest.fixture
def gcloud_dir(tmp_path, monkeypatch):
    (tmp_path / "configurations").mkdir()
    monkeypatch.setenv("CLOUDSDK_CONFIG", str(tmp_path))
    return tmp_path


def write_config(base, name, text):
    (base / "configurations" / f"config_{name}").write_text(text)


def test_default_configuration(gcloud_dir):
    write_config(gcloud_dir, "default", """
[core]
account = default@example.com
project = default-project

[run]
region = us-west1
""")
    info = auth.discover_info()

    assert info == auth.Info("default@example.com", "default-project", "us-west1")


def test_active_configuration(gcloud_dir):
    write_config(gcloud_dir, "default", "[core]\naccount = default@example.com\n")
    write_config(gcloud_dir, "custom", """
[core]
account = custom@example.com
project = custom-project
# Comment
; Another comment

[run]
region = europe-west1
""")
    (gcloud_dir / "active_config").write_text("custom\n")

    info = auth.discover_info()

    assert info == auth.Info("custom@example.com", "custom-project", "europe-west1")


def test_defaults_when_empty(gcloud_dir):
    write_config(gcloud_dir, "default", "")

    assert auth.discover_info() == auth.Info("Guest", "None", regions.ALL)


def test_defaults_when_missing(gcloud_dir):
    assert auth.discover_info() == auth.Info()


def test_unreadable_config_falls_back(gcloud_dir):
    write_config(gcloud_dir, "default", "account = nobody\n")

    assert auth.discover_info() == auth.Info()


def test_explicit_token_wins(monkeypatch):
    monkeypatch.setenv(auth.TOKEN_ENV, "from-env")
    assert auth.access_token("explicit") == "explicit"


def test_env_token(monkeypatch):
    monkeypatch.setenv(auth.TOKEN_ENV, "from-env")
    assert auth.access_token() == "from-env"


def test_gcloud_token(monkeypatch):
    monkeypatch.delenv(auth.TOKEN_ENV, raising=False)
    monkeypatch.setattr(auth.shutil, "which", lambda name: "/usr/bin/gcloud")

    def run(cmd, **kwargs):
        assert cmd == ["/usr/bin/gcloud", "auth", "print-access-token"]
        return subprocess.CompletedProcess(cmd, 0, stdout="ya29.token\n", stderr="")

    monkeypatch.setattr(auth.subprocess, "run", run)
    assert auth.access_token() == "ya29.token"


def test_gcloud_failure(monkeypatch):
    monkeypatch.delenv(auth.TOKEN_ENV, raising=False)
    monkeypatch.setattr(auth.shutil, "which", lambda name: "/usr/bin/gcloud")

    def run(cmd, **kwargs):
        raise subprocess.CalledProcessError(1, cmd, stderr="not logged in")

    monkeypatch.setattr(auth.subprocess, "run", run)
    with pytest.raises(CredentialsError, match="not logged in"):
        auth.access_token()


def test_no_gcloud(monkeypatch):
    monkeypatch.delenv(auth.TOKEN_ENV, raising=False)
    monkeypatch.setattr(auth.shutil, "which", lambda name: None)

    with pytest.raises(CredentialsError, match="--token"):
        auth.access_token()
