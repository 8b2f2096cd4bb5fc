"""burstload — fire a fixed number of HTTP GET requests and report the results."""

from __future__ import annotations

from burstload._internal.config import Config, Settings, load_settings, validate_config
from burstload.engine.runner import LoadTestRunner, run
from burstload.metrics.models import Report, Result

__version__ = "0.1.0"

__all__ = [
    "Config",
    "LoadTestRunner",
    "Report",
    "Result",
    "Settings",
    "load_settings",
    "run",
    "validate_config",
]
