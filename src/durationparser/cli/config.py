"""Utility commands to inspect the resolved durationparser configuration."""
from __future__ import annotations

import json
from pathlib import Path

import typer

from ..config import get_settings
from ..parsers import InvalidConfigurationError, UNIT_ALIASES

__all__ = ["app"]

app = typer.Typer(
    help="Inspect parser defaults and unit aliases.",
    add_completion=False,
)


@app.command("show")
def show_settings(
    config_file: Path = typer.Option(
        None,
        "--config-file",
        exists=True,
        dir_okay=False,
        readable=True,
        help="TOML/YAML configuration to use instead of environment variables.",
    ),
    refresh: bool = typer.Option(
        False,
        "--refresh",
        help="Ignore the cache and rebuild settings from environment variables or file.",
    ),
) -> None:
    """Print the resolved settings as JSON."""

    try:
        settings = get_settings(refresh=refresh, config_file=config_file)
    except InvalidConfigurationError as exc:
        typer.echo(json.dumps({"error": str(exc)}, indent=2, ensure_ascii=False), err=True)
        raise typer.Exit(code=2) from exc
    typer.echo(json.dumps(settings.as_dict(), indent=2, ensure_ascii=False))


@app.command("units")
def show_units() -> None:
    """Print the unit alias table as JSON (unit -> aliases)."""

    grouped: dict[str, list[str]] = {}
    for alias, unit in UNIT_ALIASES.items():
        grouped.setdefault(unit.name.lower(), []).append(alias)
    typer.echo(json.dumps(grouped, indent=2, ensure_ascii=False))
