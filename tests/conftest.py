"""Shared test fixtures for the burstload test suite."""

from __future__ import annotations

import asyncio
import socket
import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import pytest
from aiohttp import web

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Iterator


# =============================================================================
# Pytest configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-apply markers based on test directory structure."""
    for item in items:
        test_path = str(item.fspath)
        if "/unit/" in test_path:
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
        elif "/e2e/" in test_path:
            item.add_marker(pytest.mark.e2e)


# =============================================================================
# Network utilities
# =============================================================================


def _get_free_port() -> int:
    """Find an available port on localhost."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        s.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        return s.getsockname()[1]


@dataclass
class ServerState:
    """Counters shared between the test and the target server's handlers.

    Handlers run on the server's single event loop, so plain integer
    updates are safe.
    """

    hits: int = 0
    in_flight: int = 0
    peak_in_flight: int = 0
    sequence: list[int] = field(default_factory=lambda: [200, 200, 500])


@dataclass
class TargetServer:
    """A running test server: its base URL and shared state."""

    base_url: str
    state: ServerState

    def url(self, path: str) -> str:
        return f"{self.base_url}{path}"


# =============================================================================
# Target HTTP server handlers
# =============================================================================


STATE_KEY = web.AppKey("state", ServerState)


def _state(request: web.Request) -> ServerState:
    return request.app[STATE_KEY]


async def _ok_handler(request: web.Request) -> web.Response:
    """Always 200 with a small body."""
    _state(request).hits += 1
    return web.Response(text="ok")


async def _status_handler(request: web.Request) -> web.Response:
    """Return the status code given in the path, e.g. ``/status/404``."""
    _state(request).hits += 1
    status = int(request.match_info["code"])
    return web.Response(status=status, text="x" * 2048)


async def _sequence_handler(request: web.Request) -> web.Response:
    """Return statuses from ``state.sequence`` in arrival order, cycling."""
    state = _state(request)
    status = state.sequence[state.hits % len(state.sequence)]
    state.hits += 1
    return web.Response(status=status, text="seq")


async def _slow_handler(request: web.Request) -> web.Response:
    """Hold each request open briefly and record peak concurrency."""
    state = _state(request)
    state.hits += 1
    state.in_flight += 1
    state.peak_in_flight = max(state.peak_in_flight, state.in_flight)
    try:
        await asyncio.sleep(float(request.query.get("delay", "0.05")))
    finally:
        state.in_flight -= 1
    return web.Response(text="slow")


def _create_target_app(state: ServerState) -> web.Application:
    """Build the target app with all test routes."""
    app = web.Application()
    app[STATE_KEY] = state
    app.router.add_get("/ok", _ok_handler)
    app.router.add_get("/status/{code:\\d+}", _status_handler)
    app.router.add_get("/sequence", _sequence_handler)
    app.router.add_get("/slow", _slow_handler)
    return app


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
async def target_server() -> AsyncIterator[TargetServer]:
    """Target server on the test's own event loop, for async tests."""
    state = ServerState()
    runner = web.AppRunner(_create_target_app(state))
    await runner.setup()
    port = _get_free_port()
    site = web.TCPSite(runner, "127.0.0.1", port)
    await site.start()
    yield TargetServer(base_url=f"http://127.0.0.1:{port}", state=state)
    await runner.cleanup()


@pytest.fixture
def sync_target_server() -> Iterator[TargetServer]:
    """Target server running in a background thread for blocking tests.

    The engine blocks the calling thread until the run completes, so the
    server needs an event loop of its own.
    """
    state = ServerState()
    port = _get_free_port()
    started = threading.Event()
    loop_holder: list[asyncio.AbstractEventLoop] = []

    def _thread_target() -> None:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        runner = web.AppRunner(_create_target_app(state))
        loop.run_until_complete(runner.setup())
        site = web.TCPSite(runner, "127.0.0.1", port)
        loop.run_until_complete(site.start())
        loop_holder.append(loop)
        started.set()
        loop.run_forever()
        loop.run_until_complete(runner.cleanup())
        loop.close()

    thread = threading.Thread(target=_thread_target, daemon=True)
    thread.start()
    started.wait(timeout=5.0)

    yield TargetServer(base_url=f"http://127.0.0.1:{port}", state=state)

    if loop_holder:
        loop_holder[0].call_soon_threadsafe(loop_holder[0].stop)
    thread.join(timeout=5.0)


@pytest.fixture
def refused_url() -> str:
    """URL of a localhost port with nothing listening on it."""
    return f"http://127.0.0.1:{_get_free_port()}/"
