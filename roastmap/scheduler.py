from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Dict, Optional, Protocol, Sequence

from roastmap.aggregator import StatisticsAggregator
from roastmap.config import RunConfig
from roastmap.errors import FetchFailure
from roastmap.models import FetchOutcome, ResultMap, URLRecord
from roastmap.progress import LoggingProgressReporter, ProgressReporter
from roastmap.utils import chunked

__all__ = ("BatchScheduler", "Fetcher")


class Fetcher(Protocol):
    def fetch(self, url: str, delay_ms: int = ...) -> Awaitable[FetchOutcome]: ...


class BatchScheduler:
    """
    Drives the fetcher over the URL list in fixed-size chunks.

    Every fetch of a chunk runs concurrently and the whole chunk settles
    before the next one starts. The full traversal repeats ``sweeps`` times.
    """

    def __init__(
        self,
        fetcher: Fetcher,
        *,
        reporter: Optional[ProgressReporter] = None,
        aggregator: Optional[StatisticsAggregator] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.fetcher = fetcher
        self.logger = logger or logging.getLogger(__name__)
        self.reporter = reporter or LoggingProgressReporter(self.logger)
        self.aggregator = aggregator or StatisticsAggregator()
        # Grows by the chunk size, not the real number of URLs in the chunk.
        self.processed = 0

    async def run(self, urls: Sequence[URLRecord], config: RunConfig) -> ResultMap:
        """Warm every URL ``config.sweeps`` times; returns the outcomes of this run only."""
        self.aggregator.reset()
        self.processed = 0
        total = len(urls)
        for sweep in range(1, config.sweeps + 1):
            self.reporter.sweep_started(sweep, config.sweeps, total)
            for chunk in chunked(urls, config.concurrency):
                outcomes = await self._run_chunk(chunk, config.delay_ms)

                self.processed += config.concurrency
                self.reporter.chunk_done(self.processed, total, config.delay_ms)

                self.aggregator.merge(outcomes)
            self.reporter.sweep_finished(sweep, config.sweeps)
        return dict(self.aggregator.results)

    async def _run_chunk(self, chunk: Sequence[URLRecord], delay_ms: int) -> Dict[str, FetchOutcome]:
        locations = [record.location for record in chunk]
        settled = await asyncio.gather(
            *(self.fetcher.fetch(location, delay_ms) for location in locations),
            return_exceptions=True,
        )

        outcomes: Dict[str, FetchOutcome] = {}
        for location, result in zip(locations, settled):
            if isinstance(result, FetchFailure):
                self.logger.info("Recording %s as failed: %s", location, result.cause)
                outcomes[location] = FetchOutcome.failure(result)
            elif isinstance(result, BaseException):
                raise result
            else:
                outcomes[location] = result
        return outcomes
