from typer.testing import CliRunner

from run_tui import __version__, cli

runner = CliRunner()


def test_version():
    result = runner.invoke(cli.app, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_invalid_region_rejected():
    result = runner.invoke(cli.app, ["--region", "mars-north1", "--demo"])

    assert result.exit_code == 2


def test_demo_builds_session(monkeypatch):
    launched = []

    class FakeApp:
        def __init__(self, session):
            launched.append(session)

        def run(self):
            pass

    monkeypatch.setattr(cli, "RunTui", FakeApp)
    result = runner.invoke(cli.app, ["--demo", "--region", "all"])

    assert result.exit_code == 0, result.output
    session = launched[0]
    assert session.demo
    assert session.project == "demo-project"
    assert session.region == "all"


def test_missing_credentials(monkeypatch):
    launched = []
    monkeypatch.delenv("CLOUDSDK_AUTH_ACCESS_TOKEN", raising=False)
    monkeypatch.delenv("RUN_TUI_TOKEN", raising=False)
    monkeypatch.setattr("run_tui.auth.shutil.which", lambda name: None)
    monkeypatch.setattr(cli, "RunTui", launched.append)

    result = runner.invoke(cli.app, [])

    assert result.exit_code == 1
    assert "no access token" in result.output
    assert launched == []
