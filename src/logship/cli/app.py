"""
Root Typer application for the logship CLI.

Usage::

    logship ship build.log --job etl.nightly --build-number 42
    logship ship build.log --max-lines 200 --dry-run
"""

from __future__ import annotations

import os
from pathlib import Path

import pydantic
import typer
from typer import Typer

app = Typer(
    name="logship",
    help="Ship build logs to a log-ingestion endpoint.",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        from importlib.metadata import PackageNotFoundError
        from importlib.metadata import version as pkg_version

        try:
            v = pkg_version("logship")
        except PackageNotFoundError:
            from logship import __version__ as v
        typer.echo(f"logship {v}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """logship CLI: ship the log of a finished or running build."""


@app.command("ship")
def ship(
    log_file: Path = typer.Argument(..., help="Path to the build log"),
    max_lines: int | None = typer.Option(None, "--max-lines", "-n", help="Lines to ship (negative = all)"),
    job: str | None = typer.Option(None, "--job", "-j", help="Job name (defaults to $JOB_NAME)"),
    build_number: str | None = typer.Option(None, "--build-number", "-b", help="Build number (defaults to $BUILD_NUMBER)"),
    intake_url: str | None = typer.Option(None, "--intake-url", help="Override LOGSHIP_INTAKE_URL"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print lines instead of sending them"),
) -> None:
    """Ship a build log with metadata taken from the environment."""
    from logship.core.errors import ConfigError
    from logship.core.settings import get_settings
    from logship.delivery import LogsWriter
    from logship.execution import LocalBuild
    from logship.framework.logging import configure_logging
    from logship.metadata import EnvironmentMetadataProvider, SettingsHostLocator
    from logship.transports import ConsoleTransport, HttpLogTransport

    try:
        settings = get_settings()
    except pydantic.ValidationError as e:
        typer.echo(f"Error: invalid configuration: {e}", err=True)
        raise typer.Exit(code=2)

    configure_logging(level=settings.log_level.upper(), format=settings.log_format.lower())

    build = LocalBuild(
        log_file,
        name=job,
        number=build_number,
        environment=os.environ,
        encoding=settings.encoding,
    )

    try:
        if dry_run:
            transport = ConsoleTransport()
        elif intake_url:
            transport = HttpLogTransport.from_settings(settings, intake_url=intake_url)
        else:
            transport = HttpLogTransport.from_settings(settings)
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2)

    try:
        writer = LogsWriter(
            build,
            encoding=settings.encoding,
            transport=transport,
            metadata_provider=EnvironmentMetadataProvider(global_tags=settings.parsed_global_tags),
            host_locator=SettingsHostLocator(settings),
        )
        writer.write_build_log(settings.max_lines if max_lines is None else max_lines)
    except (OSError, ConfigError) as e:
        typer.echo(f"Error: could not start log delivery: {e}", err=True)
        raise typer.Exit(code=1)
    finally:
        if isinstance(transport, HttpLogTransport):
            transport.close()

    if writer.is_connection_broken():
        raise typer.Exit(code=1)
