"""Main CLI application for cellfmt."""

from __future__ import annotations

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from cellfmt import __version__
from cellfmt.config import get_settings

app = typer.Typer(
    name="cellfmt",
    help="Build and preview spreadsheet custom format codes.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"cellfmt {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False, "--version", "-V", help="Show version.", callback=version_callback, is_eager=True
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """cellfmt: Build spreadsheet custom format codes from settings."""
    level = logging.DEBUG if verbose else get_settings().log_level_value
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


# Import and register commands
from cellfmt.cli.conditional_cmd import conditional  # noqa: E402
from cellfmt.cli.datetime_cmd import datetime_format  # noqa: E402
from cellfmt.cli.number_cmd import number  # noqa: E402
from cellfmt.cli.validate_cmd import validate_code  # noqa: E402

app.command("number")(number)
app.command("datetime")(datetime_format)
app.command("conditional")(conditional)
app.command("validate")(validate_code)


def main() -> None:
    """Entry point for the CLI."""
    app()
