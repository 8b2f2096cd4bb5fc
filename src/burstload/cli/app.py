"""Main Typer application — entry point for the ``burstload`` CLI."""

from __future__ import annotations

import typer

from burstload import __version__
from burstload.cli.run import run_cmd

app = typer.Typer(
    name="burstload",
    help="Fire a fixed number of HTTP GET requests at a URL and report the results.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.command("run", help="Run a load test against a single URL.")(run_cmd)


def _version_callback(value: bool) -> None:
    """Print version and exit.

    Args:
        value: True if --version was passed.
    """
    if value:
        typer.echo(f"burstload {__version__}")
        raise typer.Exit


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """burstload — fire a fixed number of GET requests and report."""
