"""Timed single-request execution over an aiohttp session."""

from __future__ import annotations

import time

import aiohttp

from burstload._internal.config import DEFAULT_TIMEOUT
from burstload._internal.logging import get_logger
from burstload.metrics.models import Result

logger = get_logger("engine.executor")


class RequestExecutor:
    """Sends GET requests and turns each one into a ``Result``.

    Wraps an ``aiohttp.ClientSession`` configured with a fixed total
    timeout. Must be used as an async context manager so the session and
    its connection pool are closed when the worker finishes.

    Attributes:
        timeout: Total per-request timeout in seconds.
    """

    def __init__(self, timeout: float = DEFAULT_TIMEOUT) -> None:
        self.timeout = timeout
        self._client_timeout = aiohttp.ClientTimeout(total=timeout)
        self._session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> RequestExecutor:
        """Open the underlying aiohttp session."""
        self._session = aiohttp.ClientSession(timeout=self._client_timeout)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object | None,
    ) -> None:
        """Close the underlying aiohttp session."""
        if self._session is not None:
            await self._session.close()
            self._session = None

    async def execute(self, url: str) -> Result:
        """Send one GET request to ``url`` and time it.

        The response body is always read to the end so the connection goes
        back to the pool, whatever the status code. Any failure to complete
        the exchange is returned as an error result, never raised, and never
        retried.

        Args:
            url: Target URL, used verbatim.

        Returns:
            A Result with either the response status or the error.

        Raises:
            RuntimeError: If the executor is used outside of an async
                context manager.
        """
        if self._session is None:
            msg = "RequestExecutor must be used as an async context manager"
            raise RuntimeError(msg)

        start = time.monotonic()
        try:
            async with self._session.get(url) as resp:
                await resp.read()
                status_code = resp.status
        except Exception as exc:
            duration = time.monotonic() - start
            error = f"{type(exc).__name__}: {exc}"
            logger.debug("GET %s failed after %.3fs: %s", url, duration, error)
            return Result(duration=duration, error=error)

        return Result(status_code=status_code, duration=time.monotonic() - start)
