"""Basic GET run — the simplest programmatic use of burstload.

Equivalent to:

    burstload run --url http://localhost:8080/ --requests 200 --concurrency 10
"""

from __future__ import annotations

from rich.console import Console

from burstload import run, validate_config
from burstload._internal.logging import setup_logging
from burstload.cli.report import render_report


def main() -> None:
    """Hit the root endpoint 200 times with 10 workers and print the report."""
    setup_logging()
    config = validate_config("http://localhost:8080/", requests=200, concurrency=10)
    render_report(run(config), Console())


if __name__ == "__main__":
    main()
