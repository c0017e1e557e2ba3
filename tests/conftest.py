# File: tests/conftest.py
import asyncio
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Dict, List, Tuple

import pytest
import pytest_asyncio
from aiohttp import web

from roastmap.config import LOG_CHANNEL, RunConfig
from roastmap.errors import FetchFailure
from roastmap.models import FetchOutcome, URLRecord


class RecordingSleep:
    """Stand-in for asyncio.sleep that records the requested durations."""

    def __init__(self) -> None:
        self.calls: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)
        await asyncio.sleep(0)


class FakeFetcher:
    """
    Fetcher double for scheduler tests.

    Each successful fetch returns status 200 and a body length equal to how
    many times that URL has been fetched so far, so the latest sweep is
    visible in the result.
    """

    def __init__(
        self,
        failing: Tuple[str, ...] = (),
        latency: Dict[str, float] | None = None,
    ) -> None:
        self.failing = set(failing)
        self.latency = latency or {}
        self.calls: List[Tuple[str, int]] = []
        self.events: List[Tuple[str, str]] = []
        self.active = 0
        self.max_active = 0

    async def fetch(self, url: str, delay_ms: int = 0) -> FetchOutcome:
        self.calls.append((url, delay_ms))
        self.events.append(("start", url))
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        try:
            await asyncio.sleep(self.latency.get(url, 0))
        finally:
            self.active -= 1
            self.events.append(("end", url))
        if url in self.failing:
            raise FetchFailure(url, ConnectionError("boom"))
        return FetchOutcome(status=200, body_length=self.fetched(url))

    def fetched(self, url: str) -> int:
        return sum(1 for called, _ in self.calls if called == url)


class RecordingReporter:
    def __init__(self) -> None:
        self.started: List[Tuple[str, RunConfig]] = []
        self.chunks: List[Tuple[int, int, int]] = []
        self.sweeps: List[Tuple[str, int, int]] = []

    def run_started(self, host: str, config: RunConfig) -> None:
        self.started.append((host, config))

    def sweep_started(self, sweep: int, sweeps: int, total: int) -> None:
        self.sweeps.append(("start", sweep, sweeps))

    def chunk_done(self, processed: int, total: int, delay_ms: int) -> None:
        self.chunks.append((processed, total, delay_ms))

    def sweep_finished(self, sweep: int, sweeps: int) -> None:
        self.sweeps.append(("end", sweep, sweeps))


@pytest.fixture(autouse=True)
def reset_project_logger():
    """CLI tests reconfigure the project logger; restore propagation for caplog."""
    yield
    lg = logging.getLogger(LOG_CHANNEL)
    for handler in list(lg.handlers):
        lg.removeHandler(handler)
        handler.close()
    lg.propagate = True
    lg.setLevel(logging.NOTSET)


@pytest.fixture()
def records() -> Callable[..., List[URLRecord]]:
    """Build URLRecord lists from bare locations."""

    def _make(*locations: str) -> List[URLRecord]:
        return [URLRecord(location=loc) for loc in locations]

    return _make


@pytest.fixture()
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture()
def make_fetcher() -> Callable[..., FakeFetcher]:
    return FakeFetcher


@pytest.fixture()
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest_asyncio.fixture
async def serve(unused_tcp_port_factory) -> AsyncIterator[Callable[[web.Application], Awaitable[str]]]:
    """Start aiohttp apps on free ports; yields a coroutine returning the base URL."""
    runners: List[web.AppRunner] = []

    async def _serve(app: web.Application) -> str:
        runner = web.AppRunner(app)
        await runner.setup()
        runners.append(runner)
        port = unused_tcp_port_factory()
        site = web.TCPSite(runner, "127.0.0.1", port)
        await site.start()
        return f"http://127.0.0.1:{port}"

    try:
        yield _serve
    finally:
        for runner in runners:
            await runner.cleanup()
