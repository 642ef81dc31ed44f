"""Weather Records CLI application.

This module provides the command-line interface for the weather records
backend: serving the HTTP API, listing and exporting stored records, and
configuration utilities.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, Final, Optional

import typer
import yaml
from pydantic import ValidationError

from weatherrec.export import Exporter, ExportFormat
from weatherrec.records import JsonRecordStore, RecordError, RecordService
from weatherrec.settings import UserSettings
from weatherrec.utils.formatting import format_temperature

# ── CLI setup ────────────────────────────────────────────────────────────────
app = typer.Typer(help="Weather Records CLI", add_completion=False)
records_app = typer.Typer(help="Stored weather records")
config_app = typer.Typer(help="Config helpers")
app.add_typer(records_app, name="records")
app.add_typer(config_app, name="config")

logger: Final = logging.getLogger(__name__)  # Will be "weatherrec.cli"

# Options shared by several commands
CONFIG_OPTION = typer.Option(None, "--config", "-c", exists=True, dir_okay=False)
DEBUG_OPTION = typer.Option(False, "--debug", help="Enable debug logging")
HOST_OPTION = typer.Option(None, "--host", help="Override the configured bind address")
PORT_OPTION = typer.Option(None, "--port", "-p", help="Override the configured port")
OUTPUT_OPTION = typer.Option(None, "--output", "-o", dir_okay=False, help="Write to file")
FORMAT_ARGUMENT = typer.Argument(..., help="json, csv, xml or markdown")
DST_ARGUMENT = typer.Argument(..., help="Output config.yaml")


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )


def _load_settings(config: Optional[Path]) -> UserSettings:
    try:
        return UserSettings.discover(config)
    except (FileNotFoundError, RuntimeError) as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc


def _fail(exc: RecordError) -> typer.Exit:
    typer.secho(exc.message, fg=typer.colors.RED, err=True)
    return typer.Exit(code=1)


@app.command()
def serve(
    config: Optional[Path] = CONFIG_OPTION,
    host: Optional[str] = HOST_OPTION,
    port: Optional[int] = PORT_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Run the HTTP API server."""
    import uvicorn

    from weatherrec.web import create_app

    _configure_logging(debug)
    settings = _load_settings(config)
    api = create_app(settings)
    uvicorn.run(
        api,
        host=host or settings.host,
        port=port or settings.port,
        log_level="debug" if debug else "info",
    )


@app.command("export")
def export_records(
    export_format: str = FORMAT_ARGUMENT,
    output: Optional[Path] = OUTPUT_OPTION,
    config: Optional[Path] = CONFIG_OPTION,
) -> None:
    """Export stored records to a file or stdout."""
    settings = _load_settings(config)
    exporter = Exporter(JsonRecordStore(settings.database_path))
    try:
        result = exporter.export(ExportFormat.parse(export_format))
    except RecordError as exc:
        raise _fail(exc) from exc

    if output is None:
        typer.echo(result.content, nl=False)
        return
    try:
        output.write_text(result.content, encoding="utf-8")
    except OSError as exc:
        typer.secho(f"Unable to write {output}: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc
    typer.secho(f"Exported to {output}", fg=typer.colors.GREEN)


# ───────────────────────── records sub-commands ──────────────────────────────
@records_app.command("list")
def list_records(config: Optional[Path] = CONFIG_OPTION) -> None:
    """Print one line per stored record."""
    settings = _load_settings(config)
    service = RecordService(JsonRecordStore(settings.database_path))
    try:
        records = service.list()
    except RecordError as exc:
        raise _fail(exc) from exc

    if not records:
        typer.echo("No records stored.")
        return
    for r in records:
        typer.echo(
            f"{r.id}  {r.location}  {r.start_date} to {r.end_date}  "
            f"{format_temperature(r.temperature)}"
        )


# ───────────────────────── config sub-commands ───────────────────────────────
@config_app.command("validate")
def validate_config(file: Path):
    """Validate a YAML config file against the schema."""
    try:
        UserSettings.load(file)
        typer.echo("✅ Config valid")
    except (FileNotFoundError, RuntimeError) as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc


@config_app.command("wizard")
def wizard(dst: Path = DST_ARGUMENT):
    """Interactive prompt to create a config file."""
    typer.echo("Interactive config builder - press Enter for defaults.")

    while True:
        data: dict[str, Any] = {
            "api_key": typer.prompt(
                "OpenWeatherMap API key (blank for demo mode)",
                default="",
                show_default=False,
                hide_input=True,
            ),
            "units": typer.prompt("Units [metric|imperial|standard]", default="metric"),
            "database_path": typer.prompt("Record store file", default="database.json"),
            "port": int(typer.prompt("Port", default="3001")),
        }
        try:
            cfg = UserSettings(**data)
            break  # valid → exit loop
        except ValidationError as err:
            typer.secho("\nConfig error(s):", fg=typer.colors.RED, err=True)
            for e in err.errors():
                typer.secho(f"  • {e['loc'][0]} - {e['msg']}", fg=typer.colors.RED, err=True)
            typer.echo("Please re-enter the values.\n")

    dst.write_text(
        yaml.safe_dump(cfg.model_dump(mode="json"), sort_keys=False), encoding="utf-8"
    )
    typer.secho(f"Config written to {dst}", fg=typer.colors.GREEN)


def main() -> None:
    """Console script entry point."""
    try:
        app()
    except KeyboardInterrupt:
        sys.exit(0)


# ───────────────────────── module entrypoint ────────────────────────────────
if __name__ == "__main__":
    main()
