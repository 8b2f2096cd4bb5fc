"""Message types passed between the dispatcher, workers and the aggregator."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class WorkToken:
    """One obligation to send a single request.

    Attributes:
        sequence: Position in dispatch order. Identity only; workers may
            claim tokens in any order.
    """

    sequence: int


@dataclass(frozen=True)
class WorkerDone:
    """End-of-stream marker a worker puts on the results queue when it exits.

    Attributes:
        worker_id: Identifier of the worker that finished.
        processed: Number of tokens the worker claimed and turned into results.
        error_message: Description of the failure if the worker crashed.
    """

    worker_id: int
    processed: int
    error_message: str | None = None
