"""Run configuration and environment settings for burstload."""

from __future__ import annotations

import os
from dataclasses import dataclass
from urllib.parse import urlsplit

from burstload._internal.errors import ConfigError

DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class Config:
    """A validated load test configuration.

    Build instances with ``validate_config``; the engine assumes
    ``0 < concurrency <= requests`` already holds.

    Attributes:
        url: Target URL, requested verbatim with GET.
        requests: Total number of requests to issue.
        concurrency: Number of workers issuing requests in parallel.
    """

    url: str
    requests: int
    concurrency: int


@dataclass(frozen=True)
class Settings:
    """Engine settings that do not vary between runs.

    Attributes:
        request_timeout: Total timeout applied to every request, in seconds.
    """

    request_timeout: float = DEFAULT_TIMEOUT


def validate_config(url: str, requests: int, concurrency: int) -> Config:
    """Check raw command-line values and build a ``Config``.

    Args:
        url: Target URL.
        requests: Total request count.
        concurrency: Worker count.

    Returns:
        The validated Config.

    Raises:
        ConfigError: If any value is missing or out of range.
    """
    if not url:
        msg = "URL is required. Use --url flag"
        raise ConfigError(msg)

    msg = f"URL must be an http or https URL, got: {url!r}"
    try:
        parts = urlsplit(url)
    except ValueError:
        raise ConfigError(msg) from None
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise ConfigError(msg)

    if requests <= 0:
        msg = "requests must be greater than 0. Use --requests flag"
        raise ConfigError(msg)

    if concurrency <= 0:
        msg = "concurrency must be greater than 0. Use --concurrency flag"
        raise ConfigError(msg)

    if concurrency > requests:
        msg = "concurrency cannot be greater than total requests"
        raise ConfigError(msg)

    return Config(url=url, requests=requests, concurrency=concurrency)


def load_settings() -> Settings:
    """Load engine settings from environment variables with defaults.

    Environment variables:
        BURSTLOAD_TIMEOUT: Request timeout in seconds (default: 30.0).

    Returns:
        Populated Settings instance.

    Raises:
        ConfigError: If an environment variable has an invalid value.
    """
    timeout_str = os.environ.get("BURSTLOAD_TIMEOUT", str(DEFAULT_TIMEOUT))

    try:
        timeout = float(timeout_str)
    except ValueError:
        msg = f"BURSTLOAD_TIMEOUT must be a number, got: {timeout_str!r}"
        raise ConfigError(msg) from None

    if timeout <= 0:
        msg = f"BURSTLOAD_TIMEOUT must be positive, got: {timeout}"
        raise ConfigError(msg)

    return Settings(request_timeout=timeout)
