"""Bounded work token dispatch for the worker pool."""

from __future__ import annotations

import queue

from burstload._internal.errors import EngineError
from burstload._internal.logging import get_logger
from burstload.engine.protocol import WorkToken

logger = get_logger("engine.dispatcher")

# Put on the queue after the last token; never handed to a worker.
_CLOSED = object()


class WorkDispatcher:
    """Emits a fixed number of ``WorkToken``s and then closes.

    Tokens live in a thread-safe queue sized to the total, so dispatching
    never blocks. Closure is a single sentinel placed after the last
    token: a claimer that draws it puts it back before returning, so every
    worker sees the channel as exhausted.

    Attributes:
        total: Number of tokens this dispatcher emits.
    """

    def __init__(self, total: int) -> None:
        """Initialize the dispatcher.

        Args:
            total: Number of tokens to emit. Zero emits nothing and closes.
        """
        if total < 0:
            msg = f"token total must be >= 0, got: {total}"
            raise EngineError(msg)
        self.total = total
        self._queue: queue.Queue[object] = queue.Queue(maxsize=total + 1)
        self._dispatched = 0
        self._closed = False

    @property
    def dispatched(self) -> int:
        """Return the number of tokens emitted so far."""
        return self._dispatched

    @property
    def closed(self) -> bool:
        """Return True once all tokens were emitted and the channel closed."""
        return self._closed

    def dispatch(self) -> None:
        """Emit every token, then signal exhaustion.

        Raises:
            EngineError: If called more than once.
        """
        if self._closed:
            msg = "dispatcher has already been closed"
            raise EngineError(msg)

        for sequence in range(self.total):
            self._queue.put_nowait(WorkToken(sequence=sequence))
            self._dispatched += 1

        self._queue.put_nowait(_CLOSED)
        self._closed = True
        logger.debug("Dispatched %d tokens", self._dispatched)

    def claim(self) -> WorkToken | None:
        """Take one token, waiting for dispatch if needed.

        Returns:
            The claimed token, or None once the channel is exhausted.
        """
        item = self._queue.get()
        if item is _CLOSED:
            self._queue.put_nowait(_CLOSED)
            return None
        return item  # type: ignore[return-value]
