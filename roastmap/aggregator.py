# File: roastmap/aggregator.py
"""roastmap.aggregator: collects per-URL outcomes across chunks and sweeps."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from roastmap.models import FetchOutcome, ResultMap


@dataclass(frozen=True, slots=True)
class RunSummary:
    """Totals for the report footer and the final log line."""

    total: int
    succeeded: int
    failed: int
    total_bytes: int


class StatisticsAggregator:
    """
    Keeps the latest outcome per URL.

    Merges are overwrite-by-key: a URL seen again in a later chunk or sweep
    replaces its previous outcome, and keys are never dropped.
    """

    def __init__(self) -> None:
        self.results: ResultMap = {}

    def reset(self) -> None:
        self.results = {}

    def merge(self, chunk: Mapping[str, FetchOutcome]) -> None:
        for url, outcome in chunk.items():
            self.results[url] = outcome

    def summary(self) -> RunSummary:
        return summarize(self.results)

    def __len__(self) -> int:
        return len(self.results)


def summarize(results: Mapping[str, FetchOutcome]) -> RunSummary:
    failed = sum(1 for outcome in results.values() if outcome.failed)
    return RunSummary(
        total=len(results),
        succeeded=len(results) - failed,
        failed=failed,
        total_bytes=sum(outcome.body_length for outcome in results.values()),
    )


__all__ = ["RunSummary", "StatisticsAggregator", "summarize"]
