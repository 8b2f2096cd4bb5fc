"""Custom exception hierarchy for burstload."""

from __future__ import annotations


class BurstloadError(Exception):
    """Base exception for all burstload errors.

    All custom exceptions in burstload inherit from this class, making it
    easy to catch any burstload-specific error with a single except clause.
    """


class ConfigError(BurstloadError):
    """Raised when configuration is invalid or missing.

    Examples:
        - The target URL is empty or not an http(s) URL.
        - The request count or concurrency is out of range.
        - An environment variable has an invalid value.
    """


class EngineError(BurstloadError):
    """Raised when the engine breaks one of its own bookkeeping rules.

    Request failures never raise this; they are counted in the report.

    Examples:
        - A dispatcher is asked to dispatch a second time.
        - The result stream closes with fewer or more results than tokens.
    """
