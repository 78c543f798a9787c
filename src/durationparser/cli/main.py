import typer

from .._version import __version__
from .config import app as config_app
from .parse import multiple_command, parse_command, prefixed_command


__all__ = ["app", "run"]


app = typer.Typer(help="Parse human-typed durations into exact time spans", add_completion=False)


@app.callback(invoke_without_command=True)
def version_callback(
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", help="Show durationparser version and exit", is_eager=True),
) -> None:
    """Handle global options before any sub-command executes."""

    if version:
        typer.echo(f"durationparser {__version__}")
        raise typer.Exit()
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


app.command("parse", help="Parse the first duration of a text.")(parse_command)
app.command("multiple", help="Parse every duration of a text.")(multiple_command)
app.command("prefixed", help="Parse durations introduced by keyword labels.")(prefixed_command)
app.add_typer(config_app, name="config")


def run() -> None:
    """Entry point compatible with ``python -m durationparser.cli.main`` and console scripts."""

    from typer.main import get_command

    cli = get_command(app)
    cli()


if __name__ == "__main__":  # pragma: no cover
    run()
