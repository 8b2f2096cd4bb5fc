"""Fixed-size pool of worker threads, each with its own event loop."""

from __future__ import annotations

import asyncio
import sys
import threading
from collections.abc import Callable
from typing import TYPE_CHECKING

from burstload._internal.config import DEFAULT_TIMEOUT
from burstload._internal.logging import get_logger
from burstload.engine.executor import RequestExecutor
from burstload.engine.protocol import WorkerDone

if TYPE_CHECKING:
    import queue

    from burstload.engine.dispatcher import WorkDispatcher
    from burstload.metrics.models import Result

logger = get_logger("engine.pool")

LoopFactory = Callable[[], asyncio.AbstractEventLoop]


def _uvloop_factory() -> LoopFactory | None:
    """Return uvloop's loop constructor if available.

    Falls back to the default asyncio event loop on Windows or if uvloop
    is not installed.
    """
    if sys.platform == "win32":
        return None

    try:
        import uvloop
    except ImportError:
        logger.debug("uvloop not available, using default asyncio event loop")
        return None

    return uvloop.new_event_loop


class WorkerPool:
    """Runs ``concurrency`` symmetric workers against a single URL.

    Every worker is an OS thread running its own asyncio loop and its own
    ``RequestExecutor``, so at most ``concurrency`` requests are in flight
    at once and they proceed in parallel. Workers only claim tokens, send
    requests and publish results; they never touch the report.

    Each worker puts exactly one ``Result`` per claimed token on the results
    queue, followed by a single ``WorkerDone`` marker when it exits.

    Attributes:
        url: Target URL every worker requests.
        concurrency: Number of worker threads.
        timeout: Per-request timeout shared by all workers.
    """

    def __init__(
        self,
        url: str,
        concurrency: int,
        dispatcher: WorkDispatcher,
        results: queue.Queue[Result | WorkerDone],
        *,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialize the pool.

        Args:
            url: Target URL.
            concurrency: Number of workers to spawn.
            dispatcher: Source of work tokens.
            results: Queue receiving results and end-of-stream markers.
            timeout: Per-request timeout in seconds.
        """
        self.url = url
        self.concurrency = concurrency
        self.timeout = timeout
        self._dispatcher = dispatcher
        self._results = results
        self._loop_factory = _uvloop_factory()
        self._threads: list[threading.Thread] = []
        # One slot per worker, written only by that worker's thread
        self._processed: list[int] = [0] * concurrency

    @property
    def is_alive(self) -> bool:
        """Return True if any worker thread is still running."""
        return any(t.is_alive() for t in self._threads)

    @property
    def thread_names(self) -> list[str]:
        """Return the names of the spawned worker threads."""
        return [t.name for t in self._threads]

    def start(self) -> None:
        """Spawn all worker threads."""
        for worker_id in range(self.concurrency):
            thread = threading.Thread(
                target=self._run_worker,
                args=(worker_id,),
                name=f"burstload-worker-{worker_id}",
                daemon=True,
            )
            self._threads.append(thread)

        for thread in self._threads:
            thread.start()
        logger.debug("Started %d workers against %s", self.concurrency, self.url)

    def join(self) -> None:
        """Wait for every worker thread to exit."""
        for thread in self._threads:
            thread.join()
        logger.debug("All workers exited")

    def _run_worker(self, worker_id: int) -> None:
        """Thread target: drain tokens, then publish the end marker."""
        error_message: str | None = None

        try:
            with asyncio.Runner(loop_factory=self._loop_factory) as runner:
                runner.run(self._drain(worker_id))
        except Exception as exc:
            error_message = f"{type(exc).__name__}: {exc}"
            logger.exception("Worker %d: failed", worker_id)
        finally:
            self._results.put(
                WorkerDone(
                    worker_id=worker_id,
                    processed=self._processed[worker_id],
                    error_message=error_message,
                )
            )

    async def _drain(self, worker_id: int) -> None:
        """Claim tokens until the dispatcher is exhausted.

        Counts every published result in the worker's slot, so the count
        stays accurate if a later request raises.

        Args:
            worker_id: Index of this worker's slot and log identifier.
        """
        async with RequestExecutor(timeout=self.timeout) as executor:
            while self._dispatcher.claim() is not None:
                result = await executor.execute(self.url)
                self._results.put(result)
                self._processed[worker_id] += 1

        logger.debug(
            "Worker %d: processed %d requests", worker_id, self._processed[worker_id]
        )
