"""Single-writer aggregation of request results into a ``Report``.

The ``ResultAggregator`` is the only code that mutates a ``Report``. It
runs on the orchestrator's thread and reads worker output from one
thread-safe queue, so no increment is ever lost to a race.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from burstload._internal.errors import EngineError
from burstload._internal.logging import get_logger
from burstload.engine.protocol import WorkerDone
from burstload.metrics.models import SUCCESS_STATUS, Report

if TYPE_CHECKING:
    import queue

    from burstload.metrics.models import Result

logger = get_logger("metrics.aggregator")


class ResultAggregator:
    """Folds ``Result`` values into a ``Report``.

    The fold only adds to counters, so the final report does not depend on
    the order in which results arrive.

    Attributes:
        expected: Number of results the run must produce.
    """

    def __init__(self, expected: int) -> None:
        """Initialize the aggregator with an empty report.

        Args:
            expected: Number of tokens dispatched, one result each.
        """
        self.expected = expected
        self._report = Report()
        self._finalized = False

    @property
    def consumed(self) -> int:
        """Return the number of results folded so far."""
        return self._report.total_requests

    def fold(self, result: Result) -> None:
        """Apply one result to the report.

        Args:
            result: Outcome of a single request.

        Raises:
            EngineError: If the report has already been finalized.
        """
        if self._finalized:
            msg = "cannot fold into a finalized report"
            raise EngineError(msg)

        report = self._report
        report.total_requests += 1
        report.latency_sum += result.duration

        if result.is_error:
            report.error_count += 1
            return

        code = result.status_code
        report.status_codes[code] = report.status_codes.get(code, 0) + 1  # type: ignore[index]
        if code == SUCCESS_STATUS:
            report.success_count += 1

    def consume(
        self,
        results: queue.Queue[Result | WorkerDone],
        workers: int,
    ) -> None:
        """Fold results from the queue until every worker has finished.

        The stream is closed once ``workers`` ``WorkerDone`` markers have
        arrived. At that point the number of folded results must equal
        ``expected``.

        Args:
            results: Queue shared with the worker pool.
            workers: Number of workers writing to the queue.

        Raises:
            EngineError: If the stream closes with a different number of
                results than expected.
        """
        remaining = workers
        failed: list[WorkerDone] = []

        while remaining > 0:
            item = results.get()
            if isinstance(item, WorkerDone):
                remaining -= 1
                if item.error_message is not None:
                    failed.append(item)
                continue
            self.fold(item)

        for done in failed:
            logger.warning("Worker %d failed: %s", done.worker_id, done.error_message)

        if self.consumed != self.expected:
            msg = (
                f"result stream closed after {self.consumed} results, "
                f"expected {self.expected}"
            )
            raise EngineError(msg)

    def finalize(self, total_time: float) -> Report:
        """Stamp the run duration and hand the report off.

        Args:
            total_time: Wall-clock seconds from start to full completion.

        Returns:
            The finished report. It must not be modified afterwards.
        """
        self._report.total_time = total_time
        self._finalized = True
        return self._report
