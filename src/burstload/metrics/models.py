"""Result and report dataclasses for burstload."""

from __future__ import annotations

from dataclasses import dataclass, field

from burstload._internal.types import Seconds, StatusCounts

__all__ = [
    "Report",
    "Result",
]

SUCCESS_STATUS = 200


@dataclass(frozen=True)
class Result:
    """Outcome of one request attempt.

    Exactly one of ``status_code`` and ``error`` is set: a response with any
    status (including 4xx/5xx) is a status code, a failure to complete the
    exchange at all is an error.

    Attributes:
        status_code: HTTP status of the response, None if the request failed.
        duration: Seconds spent on the request/response exchange.
        error: ``"ExceptionType: message"`` if the request failed.
    """

    status_code: int | None = None
    duration: Seconds = 0.0
    error: str | None = None

    def __post_init__(self) -> None:
        if self.error is not None and self.status_code is not None:
            msg = "a failed request cannot carry a status code"
            raise ValueError(msg)
        if self.error is None and self.status_code is None:
            msg = "a result needs either a status code or an error"
            raise ValueError(msg)
        if self.duration < 0:
            msg = f"duration must be >= 0, got: {self.duration}"
            raise ValueError(msg)

    @property
    def is_error(self) -> bool:
        """Return True if the request failed at the transport level."""
        return self.error is not None


@dataclass
class Report:
    """Aggregate statistics of a finished load test.

    Only the aggregator mutates a report, and only while the run is in
    progress. Once ``total_time`` is stamped the report is read-only.

    Attributes:
        total_time: Wall-clock duration of the whole run, in seconds.
        total_requests: Number of results folded into the report.
        status_codes: Response count per HTTP status code.
        success_count: Responses with status 200.
        error_count: Requests that failed without a response.
        latency_sum: Sum of per-request durations, in seconds.
    """

    total_time: Seconds = 0.0
    total_requests: int = 0
    status_codes: StatusCounts = field(default_factory=dict)
    success_count: int = 0
    error_count: int = 0
    latency_sum: Seconds = 0.0

    @property
    def average_request_time(self) -> Seconds:
        """Total run time divided by the number of requests."""
        if self.total_requests == 0:
            return 0.0
        return self.total_time / self.total_requests

    @property
    def requests_per_second(self) -> float:
        """Overall throughput of the run."""
        if self.total_requests == 0 or self.total_time <= 0:
            return 0.0
        return self.total_requests / self.total_time

    @property
    def mean_latency(self) -> Seconds:
        """Arithmetic mean of the individual request durations."""
        if self.total_requests == 0:
            return 0.0
        return self.latency_sum / self.total_requests

    def status_percentages(self) -> dict[int, float]:
        """Share of all requests per status code, in percent.

        Empty when no requests were made, so callers can skip the
        breakdown instead of dividing by zero.
        """
        if self.total_requests == 0:
            return {}
        return {
            code: count / self.total_requests * 100
            for code, count in sorted(self.status_codes.items())
        }
