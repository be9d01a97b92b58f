import pytest

from run_tui import regions
from run_tui.config import Config
from run_tui.services.memory import demo_backend
from run_tui.session import Session


@pytest.fixture
def env(tmp_path, monkeypatch):
    home = tmp_path / "home"
    gcloud = tmp_path / "gcloud"
    home.mkdir()
    (gcloud / "configurations").mkdir(parents=True)
    (gcloud / "configurations" / "config_default").write_text(
        "[core]\naccount = me@example.com\nproject = gcloud-project\n[run]\nregion = us-east1\n")
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("CLOUDSDK_CONFIG", str(gcloud))
    return home


def test_gcloud_fills_gaps(env):
    session = Session(demo_backend())
    session.resolve()

    assert (session.user, session.project, session.region) == ("me@example.com", "gcloud-project", "us-east1")


def test_config_file_beats_gcloud(env):
    Config(project="saved-project", region="europe-west1").save()
    session = Session(demo_backend())
    session.resolve()

    assert (session.project, session.region) == ("saved-project", "europe-west1")


def test_options_beat_everything(env):
    Config(project="saved-project", region="europe-west1").save()
    session = Session(demo_backend(), project="cli-project", region=regions.ALL)
    session.resolve()

    assert (session.project, session.region) == ("cli-project", regions.ALL)


def test_corrupted_config_is_ignored(env):
    (env / ".run.yaml").write_text("region: us-central1\ninvalid-yaml")
    session = Session(demo_backend())
    session.resolve()

    assert session.project == "gcloud-project"


def test_unknown_region_falls_back_to_all(env):
    Config(region="mars-north1").save()
    session = Session(demo_backend())
    session.resolve()

    assert session.region == regions.ALL


def test_remember_persists_choice(env):
    session = Session(demo_backend(), project="p1", region="asia-east1")
    session.remember()

    assert Config.load() == Config(project="p1", region="asia-east1")


def test_demo_session_leaves_config_alone(env):
    session = Session(demo_backend(), project="demo-project", demo=True)
    session.resolve()
    session.remember()

    assert (session.user, session.region) == ("Guest", regions.ALL)
    assert not (env / ".run.yaml").exists()
