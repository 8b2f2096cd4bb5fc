"""Shared type aliases for burstload."""

from __future__ import annotations

# HTTP status code -> number of responses carrying it.
StatusCounts = dict[int, int]

# Elapsed wall-clock time in seconds.
Seconds = float
