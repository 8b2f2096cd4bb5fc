"""Top-level load test orchestrator."""

from __future__ import annotations

import queue
import time
from typing import TYPE_CHECKING

from burstload._internal.config import Settings
from burstload._internal.logging import get_logger
from burstload.engine.dispatcher import WorkDispatcher
from burstload.engine.pool import WorkerPool
from burstload.metrics.aggregator import ResultAggregator

if TYPE_CHECKING:
    from burstload._internal.config import Config
    from burstload.engine.protocol import WorkerDone
    from burstload.metrics.models import Report, Result

logger = get_logger("engine.runner")


class LoadTestRunner:
    """Orchestrates one load test run.

    Wires together the dispatcher, the worker pool and the aggregator.
    ``run()`` blocks until every dispatched request has been accounted for
    and returns the finished ``Report``.

    Attributes:
        config: The validated run configuration.
        settings: Engine settings such as the request timeout.
    """

    def __init__(self, config: Config, *, settings: Settings | None = None) -> None:
        """Initialize the runner.

        Args:
            config: Validated configuration; ``0 < concurrency <= requests``
                is assumed to hold.
            settings: Engine settings. Defaults to ``Settings()``.
        """
        self.config = config
        self.settings = settings or Settings()

    def run(self) -> Report:
        """Execute the load test and return the report.

        Individual request failures never abort the run; they are counted
        in ``Report.error_count``.

        Returns:
            The finalized Report covering exactly ``config.requests`` results.

        Raises:
            EngineError: If the result stream does not account for every
                dispatched token.
        """
        config = self.config
        logger.info(
            "Starting load test: url=%s, requests=%d, concurrency=%d",
            config.url,
            config.requests,
            config.concurrency,
        )

        start_time = time.monotonic()

        results: queue.Queue[Result | WorkerDone] = queue.Queue()
        dispatcher = WorkDispatcher(config.requests)
        pool = WorkerPool(
            url=config.url,
            concurrency=config.concurrency,
            dispatcher=dispatcher,
            results=results,
            timeout=self.settings.request_timeout,
        )
        aggregator = ResultAggregator(expected=config.requests)

        dispatcher.dispatch()
        pool.start()
        try:
            aggregator.consume(results, workers=config.concurrency)
        finally:
            pool.join()

        report = aggregator.finalize(time.monotonic() - start_time)

        logger.info(
            "Load test completed: duration=%.2fs, total_requests=%d, "
            "success=%d, errors=%d, rps=%.1f",
            report.total_time,
            report.total_requests,
            report.success_count,
            report.error_count,
            report.requests_per_second,
        )
        return report


def run(config: Config, *, settings: Settings | None = None) -> Report:
    """Run a load test described by ``config`` and return its report.

    Args:
        config: Validated run configuration.
        settings: Optional engine settings.

    Returns:
        The finalized Report.
    """
    return LoadTestRunner(config, settings=settings).run()
