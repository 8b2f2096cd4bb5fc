"""``burstload run`` — fire a fixed number of GET requests and report."""

from __future__ import annotations

import logging

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from burstload._internal.config import load_settings, validate_config
from burstload._internal.errors import BurstloadError, ConfigError
from burstload._internal.logging import setup_logging
from burstload.cli.report import render_report
from burstload.engine.runner import LoadTestRunner

console = Console(stderr=True)


def run_cmd(
    url: str = typer.Option(
        "",
        "--url",
        "-u",
        help="URL of the service to test (required).",
    ),
    requests: int = typer.Option(
        0,
        "--requests",
        "-n",
        help="Total number of requests to make (required).",
    ),
    concurrency: int = typer.Option(
        0,
        "--concurrency",
        "-c",
        help="Number of concurrent requests (required).",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose (DEBUG) logging.",
    ),
    json_logs: bool = typer.Option(
        False,
        "--json-logs",
        help="Emit logs as one JSON object per line.",
    ),
) -> None:
    """Send REQUESTS GET requests to URL using CONCURRENCY workers."""
    setup_logging(
        level=logging.DEBUG if verbose else logging.WARNING,
        json_format=json_logs,
    )

    try:
        config = validate_config(url, requests, concurrency)
        settings = load_settings()
    except ConfigError as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    console.print(
        Panel(
            f"[bold]URL:[/bold]            {escape(config.url)}\n"
            f"[bold]Total Requests:[/bold] {config.requests}\n"
            f"[bold]Concurrency:[/bold]    {config.concurrency}",
            title="Starting load test...",
            border_style="cyan",
        )
    )

    try:
        with console.status("Sending requests..."):
            report = LoadTestRunner(config, settings=settings).run()
    except BurstloadError as exc:
        console.print(f"[red]Load test failed:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    render_report(report, console)
