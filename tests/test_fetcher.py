# File: tests/test_fetcher.py
from __future__ import annotations

import logging

import pytest
from aiohttp import ClientConnectorError, TooManyRedirects, web

from roastmap.config import USER_AGENT
from roastmap.errors import FetchFailure
from roastmap.fetcher import RetryingFetcher, create_session

LOGGER = logging.getLogger("tests.fetcher")
BODY = "héllo wörld"


def build_app(seen_agents: list[str]) -> web.Application:
    app = web.Application()

    async def page(request):
        seen_agents.append(request.headers.get("User-Agent", ""))
        return web.Response(text=BODY, content_type="text/html")

    async def missing(_):
        return web.Response(status=404, text="nope")

    async def hop(request):
        # /hop/3 -> /hop/2 -> /hop/1 -> /page
        remaining = int(request.match_info["n"])
        raise web.HTTPFound(f"/hop/{remaining - 1}" if remaining > 1 else "/page")

    async def loop(_):
        raise web.HTTPFound("/loop")

    app.router.add_get("/page", page)
    app.router.add_get("/missing", missing)
    app.router.add_get(r"/hop/{n:\d+}", hop)
    app.router.add_get("/loop", loop)
    return app


@pytest.mark.asyncio()
async def test_fetch_reports_status_and_byte_length(serve, recording_sleep):
    agents: list[str] = []
    base = await serve(build_app(agents))

    async with create_session(LOGGER) as session:
        fetcher = RetryingFetcher(session, logger=LOGGER, sleep=recording_sleep)
        outcome = await fetcher.fetch(f"{base}/page", 0)

    assert outcome.status == 200
    assert outcome.body_length == len(BODY.encode("utf-8"))
    assert not outcome.failed
    assert agents == [USER_AGENT]
    assert recording_sleep.calls == []


@pytest.mark.asyncio()
async def test_user_agent_comes_from_the_fetcher(serve, recording_sleep):
    agents: list[str] = []
    base = await serve(build_app(agents))

    async with create_session(LOGGER) as session:
        assert "User-Agent" not in session.headers
        fetcher = RetryingFetcher(session, logger=LOGGER, user_agent="Custom/2.0", sleep=recording_sleep)
        await fetcher.fetch(f"{base}/page", 0)

    assert agents == ["Custom/2.0"]


@pytest.mark.asyncio()
async def test_http_error_status_is_an_outcome_not_a_failure(serve, recording_sleep):
    base = await serve(build_app([]))

    async with create_session(LOGGER) as session:
        fetcher = RetryingFetcher(session, logger=LOGGER, sleep=recording_sleep)
        outcome = await fetcher.fetch(f"{base}/missing", 0)

    assert outcome.status == 404
    assert outcome.body_length == len("nope")
    assert recording_sleep.calls == []


@pytest.mark.asyncio()
async def test_follows_up_to_three_redirects(serve, recording_sleep):
    base = await serve(build_app([]))

    async with create_session(LOGGER) as session:
        fetcher = RetryingFetcher(session, logger=LOGGER, sleep=recording_sleep)
        outcome = await fetcher.fetch(f"{base}/hop/3", 0)

    assert outcome.status == 200
    assert outcome.body_length == len(BODY.encode("utf-8"))
    assert recording_sleep.calls == []


@pytest.mark.asyncio()
async def test_fourth_redirect_is_a_failure(serve, recording_sleep):
    base = await serve(build_app([]))

    async with create_session(LOGGER) as session:
        fetcher = RetryingFetcher(session, logger=LOGGER, max_attempts=1, sleep=recording_sleep)
        with pytest.raises(FetchFailure) as excinfo:
            await fetcher.fetch(f"{base}/hop/4", 0)

    assert isinstance(excinfo.value.cause, TooManyRedirects)
    assert len(excinfo.value.cause.history) == 4


@pytest.mark.asyncio()
async def test_redirect_loop_is_a_failure(serve, recording_sleep):
    base = await serve(build_app([]))

    async with create_session(LOGGER) as session:
        fetcher = RetryingFetcher(session, logger=LOGGER, max_attempts=2, retry_delay_ms=5, sleep=recording_sleep)
        with pytest.raises(FetchFailure) as excinfo:
            await fetcher.fetch(f"{base}/loop", 0)

    assert isinstance(excinfo.value.cause, TooManyRedirects)
    assert excinfo.value.url == f"{base}/loop"
    assert recording_sleep.calls == [0.005]


@pytest.mark.asyncio()
async def test_unreachable_url_is_tried_ten_times(unused_tcp_port, recording_sleep):
    url = f"http://127.0.0.1:{unused_tcp_port}/nothing-listens-here"

    async with create_session(LOGGER) as session:
        fetcher = RetryingFetcher(session, logger=LOGGER, sleep=recording_sleep)
        with pytest.raises(FetchFailure) as excinfo:
            await fetcher.fetch(url, 50)

    assert isinstance(excinfo.value.cause, ClientConnectorError)
    assert excinfo.value.__cause__ is excinfo.value.cause
    # the per-request delay precedes every attempt, the 10 s backoff separates them
    assert recording_sleep.calls == [0.05] + [10.0, 0.05] * 9


@pytest.mark.asyncio()
async def test_debug_timing_lines(serve, recording_sleep, caplog):
    base = await serve(build_app([]))
    caplog.set_level(logging.DEBUG, logger=LOGGER.name)

    async with create_session(LOGGER) as session:
        fetcher = RetryingFetcher(session, logger=LOGGER, sleep=recording_sleep)
        await fetcher.fetch(f"{base}/page", 0)

    messages = [r.getMessage() for r in caplog.records if r.name == LOGGER.name]
    assert messages[0] == f"Starting request to {base}/page..."
    assert messages[1].startswith("Done in ")
    assert messages[1].endswith(f"@ 200 | {base}/page")
    assert all(r.levelno == logging.DEBUG for r in caplog.records if r.name == LOGGER.name)
