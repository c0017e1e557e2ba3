# File: roastmap/engine.py
"""roastmap.engine: orchestration layer wiring discovery, fetcher and scheduler for one run."""

from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import urlparse

from roastmap.aggregator import StatisticsAggregator
from roastmap.config import RunConfig
from roastmap.errors import DiscoveryError
from roastmap.fetcher import RetryingFetcher, create_session
from roastmap.logger import get_logger
from roastmap.models import ResultMap
from roastmap.progress import LoggingProgressReporter
from roastmap.scheduler import BatchScheduler
from roastmap.sitemap import SitemapSource
from roastmap.utils import is_valid_uri

__all__ = ["Roastmap", "start_warmup"]


class Roastmap:
    """Facade for the CLI and tests: discover a site's URLs and warm them up."""

    def __init__(self, uri: str, *, logger: Optional[logging.Logger] = None) -> None:
        """Bind the engine to the site at ``uri`` (http or https, with a host)."""
        if not is_valid_uri(uri):
            raise ValueError(f"Not an http(s) URI with a host: {uri!r}")
        self.uri = uri
        self.logger = logger or get_logger()

    @property
    def host(self) -> str:
        return urlparse(self.uri).hostname or ""

    async def run(self, config: RunConfig) -> ResultMap:
        """Discover the sitemap URLs, then sweep them ``config.sweeps`` times."""
        reporter = LoggingProgressReporter(self.logger)
        reporter.run_started(self.host, config)

        async with create_session(self.logger) as session:
            try:
                urls = await SitemapSource(session, logger=self.logger).discover(self.uri)
            except DiscoveryError as exc:
                self.logger.error("Sitemap discovery failed: %s", exc)
                raise

            aggregator = StatisticsAggregator()
            scheduler = BatchScheduler(
                RetryingFetcher(session, logger=self.logger),
                reporter=reporter,
                aggregator=aggregator,
                logger=self.logger,
            )
            results = await scheduler.run(urls, config)

        summary = aggregator.summary()
        self.logger.info(
            "Finished: %d urls, %d ok, %d failed, %d bytes",
            summary.total,
            summary.succeeded,
            summary.failed,
            summary.total_bytes,
        )
        return results


async def start_warmup(uri: str, config: RunConfig) -> ResultMap:
    """
    Run a full warmup of ``uri`` and return the per-URL results.

    Parameters
    ----------
    uri : str
        Site address; only its scheme and host are used for discovery.
    config : RunConfig
        Concurrency, sweep count and per-request delay.

    Returns
    -------
    ResultMap
        Latest FetchOutcome per URL.
    """
    return await Roastmap(uri).run(config)
