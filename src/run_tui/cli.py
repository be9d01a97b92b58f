from __future__ import annotations

from typing import Optional

import typer

from . import __version__, regions
from .app import RunTui
from .auth import access_token
from .errors import CredentialsError
from .logsetup import setup_logger
from .services.backend import production_backend
from .services.memory import demo_backend
from .session import Session

app = typer.Typer(add_completion=False)


def _version(value: bool) -> None:
    if value:
        typer.echo(f"run-tui {__version__}")
        raise typer.Exit()


def _region(value: Optional[str]) -> Optional[str]:
    if value is not None and not regions.is_valid(value):
        raise typer.BadParameter(f"unknown region {value!r} (use '{regions.ALL}' or one of: {', '.join(regions.REGIONS)})")
    return value


@app.command(help="Browse Cloud Run services, jobs, worker pools and domain mappings.")
def run(
    project: str = typer.Option("", "--project", "-p", help="Project ID (default: ~/.run.yaml, then gcloud)."),
    region: Optional[str] = typer.Option(None, "--region", "-r", callback=_region,
                                         help=f"Region, or '{regions.ALL}'."),
    token: Optional[str] = typer.Option(None, "--token", envvar="RUN_TUI_TOKEN", help="OAuth access token."),
    log_file: str = typer.Option("", "--log-file", help="Write logs to this file."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
    demo: bool = typer.Option(False, "--demo", help="Use built-in sample data instead of the Cloud Run API."),
    version: bool = typer.Option(False, "--version", callback=_version, is_eager=True, help="Show the version."),
):
    setup_logger(log_file, verbose)
    if demo:
        session = Session(demo_backend(project or "demo-project"), project=project or "demo-project",
                          region=region or "", demo=True)
    else:
        try:
            backend = production_backend(access_token(token))
        except CredentialsError as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(code=1)
        session = Session(backend, project=project, region=region or "")
    RunTui(session).run()


def main():
    app()


if __name__ == "__main__":
    main()
