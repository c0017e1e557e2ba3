"""Progress events emitted by the scheduler, and the logger that reports them."""

from __future__ import annotations

import logging
from typing import Protocol

from roastmap.config import RunConfig


class ProgressReporter(Protocol):
    def run_started(self, host: str, config: RunConfig) -> None: ...

    def sweep_started(self, sweep: int, sweeps: int, total: int) -> None: ...

    def chunk_done(self, processed: int, total: int, delay_ms: int) -> None: ...

    def sweep_finished(self, sweep: int, sweeps: int) -> None: ...


class LoggingProgressReporter:
    """Writes progress counters to the given logger."""

    def __init__(self, logger: logging.Logger) -> None:
        self.logger = logger

    def run_started(self, host: str, config: RunConfig) -> None:
        self.logger.info(
            "Start options: host: %s, parallel:%d, times:%d, delay:%d",
            host,
            config.concurrency,
            config.sweeps,
            config.delay_ms,
        )

    def sweep_started(self, sweep: int, sweeps: int, total: int) -> None:
        self.logger.debug("Sweep %d/%d over %d URLs", sweep, sweeps, total)

    def chunk_done(self, processed: int, total: int, delay_ms: int) -> None:
        self.logger.info("%d requests of %d was send ...", processed, total)
        if delay_ms > 0:
            self.logger.info("Delay between requests: %dms", delay_ms)

    def sweep_finished(self, sweep: int, sweeps: int) -> None:
        self.logger.debug("Sweep %d/%d finished", sweep, sweeps)


__all__ = ["LoggingProgressReporter", "ProgressReporter"]
