# roastmap/fetcher.py
"""
Fetcher module: one GET per URL with a pre-request delay, constant-backoff
retries and debug timing of every network call.
"""
from __future__ import annotations

import asyncio
import logging
from types import SimpleNamespace
from typing import Awaitable, Callable, Optional

from aiohttp import (
    ClientSession,
    ClientTimeout,
    TCPConnector,
    TraceConfig,
    TraceRequestEndParams,
    TraceRequestExceptionParams,
    TraceRequestStartParams,
)

from roastmap.config import (
    MAX_FOLLOW_REDIRECTS,
    REQUEST_RETRY_ATTEMPTS,
    REQUEST_RETRY_DELAY,
    USER_AGENT,
)
from roastmap.errors import FetchFailure
from roastmap.models import FetchOutcome
from roastmap.retry import ConstantBackoff, attempt

DEFAULT_DELAY = 100

SleepT = Callable[[float], Awaitable[None]]


def build_trace_config(logger: logging.Logger) -> TraceConfig:
    """Log start/end of every request going over the wire, with elapsed time."""
    trace = TraceConfig()

    async def on_request_start(
        session: ClientSession, ctx: SimpleNamespace, params: TraceRequestStartParams
    ) -> None:
        ctx.start = asyncio.get_running_loop().time()
        logger.debug("Starting request to %s...", params.url)

    async def on_request_end(
        session: ClientSession, ctx: SimpleNamespace, params: TraceRequestEndParams
    ) -> None:
        elapsed = (asyncio.get_running_loop().time() - ctx.start) * 1000
        logger.debug("Done in %.2fms @ %s | %s", elapsed, params.response.status, params.url)

    async def on_request_exception(
        session: ClientSession, ctx: SimpleNamespace, params: TraceRequestExceptionParams
    ) -> None:
        elapsed = (asyncio.get_running_loop().time() - ctx.start) * 1000
        logger.debug("Failed in %.2fms @ %r | %s", elapsed, params.exception, params.url)

    trace.on_request_start.append(on_request_start)
    trace.on_request_end.append(on_request_end)
    trace.on_request_exception.append(on_request_exception)
    return trace


def create_session(logger: logging.Logger) -> ClientSession:
    """
    Session shared by discovery and every fetch of a run.

    Unlimited connection pool, no overall timeout: a run is bounded by the
    chunk size and the retry envelope only. Callers set the User-Agent on
    each request.
    """
    return ClientSession(
        connector=TCPConnector(limit=0),
        timeout=ClientTimeout(total=None),
        trace_configs=[build_trace_config(logger)],
        raise_for_status=False,
    )


class RetryingFetcher:
    """GETs a URL, retrying any error with a constant backoff."""

    def __init__(
        self,
        session: ClientSession,
        *,
        logger: Optional[logging.Logger] = None,
        max_attempts: int = REQUEST_RETRY_ATTEMPTS,
        retry_delay_ms: int = REQUEST_RETRY_DELAY,
        user_agent: str = USER_AGENT,
        max_redirects: int = MAX_FOLLOW_REDIRECTS,
        sleep: SleepT = asyncio.sleep,
    ) -> None:
        self.session = session
        self.logger = logger or logging.getLogger(__name__)
        self.max_attempts = max_attempts
        self.backoff = ConstantBackoff(retry_delay_ms)
        self.user_agent = user_agent
        self.max_redirects = max_redirects
        self._sleep = sleep

    async def fetch(self, url: str, delay_ms: int = DEFAULT_DELAY) -> FetchOutcome:
        """
        Fetch ``url`` and return its status and body size.

        ``delay_ms`` is slept before every attempt, retries included.
        Raises FetchFailure once ``max_attempts`` attempts have failed.
        """

        async def _once() -> FetchOutcome:
            if delay_ms > 0:
                await self._sleep(delay_ms / 1000)
            async with self.session.get(
                url,
                headers={"User-Agent": self.user_agent},
                allow_redirects=True,
                # aiohttp raises on the Nth redirect response, so N hops need N + 1
                max_redirects=self.max_redirects + 1,
            ) as resp:
                body = await resp.read()
                return FetchOutcome(status=resp.status, body_length=len(body))

        try:
            return await attempt(_once, self.max_attempts, self.backoff, sleep=self._sleep)
        except Exception as exc:
            self.logger.warning("Giving up on %s after %d attempts: %r", url, self.max_attempts, exc)
            raise FetchFailure(url, exc) from exc


__all__ = ["DEFAULT_DELAY", "RetryingFetcher", "build_trace_config", "create_session"]
