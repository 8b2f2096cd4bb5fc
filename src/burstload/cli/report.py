"""Terminal rendering of a finished ``Report``."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.table import Table

if TYPE_CHECKING:
    from rich.console import Console

    from burstload.metrics.models import Report


def format_duration(seconds: float) -> str:
    """Render a duration with a unit that keeps the number readable.

    Args:
        seconds: Duration in seconds.

    Returns:
        A string such as ``"850µs"``, ``"12.34ms"`` or ``"1.503s"``.
    """
    if seconds < 0.001:
        return f"{seconds * 1_000_000:.0f}µs"
    if seconds < 1.0:
        return f"{seconds * 1000:.2f}ms"
    return f"{seconds:.3f}s"


def _summary_table(report: Report) -> Table:
    table = Table(
        title="Load Test Report",
        show_header=True,
        header_style="bold green",
        expand=True,
    )
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")

    table.add_row("Total execution time", format_duration(report.total_time))
    table.add_row("Total requests made", str(report.total_requests))
    table.add_row("Successful requests (HTTP 200)", str(report.success_count))
    if report.error_count > 0:
        table.add_row("Failed requests (errors)", f"[red]{report.error_count}[/red]")

    if report.total_requests > 0:
        table.add_row("Average request time", format_duration(report.average_request_time))
        table.add_row("Requests per second", f"{report.requests_per_second:.2f}")
        table.add_row("Mean request latency", format_duration(report.mean_latency))

    return table


def _status_table(report: Report) -> Table:
    table = Table(
        title="HTTP Status Code Distribution",
        show_header=True,
        header_style="bold cyan",
        expand=True,
    )
    table.add_column("Status")
    table.add_column("Requests", justify="right")
    table.add_column("Share", justify="right")

    for code, percentage in report.status_percentages().items():
        table.add_row(str(code), str(report.status_codes[code]), f"{percentage:.1f}%")

    return table


def render_report(report: Report, console: Console) -> None:
    """Print the report to ``console``.

    The status code breakdown is omitted when no requests were made.

    Args:
        report: Finalized report.
        console: Rich console to print to.
    """
    console.print(_summary_table(report))
    if report.total_requests > 0 and report.status_codes:
        console.print()
        console.print(_status_table(report))
