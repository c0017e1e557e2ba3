"""roastmap.errors: exception hierarchy."""

from __future__ import annotations


class RoastmapError(Exception):
    """Base class for every error raised by Roastmap."""


class DiscoveryError(RoastmapError):
    """robots.txt or a sitemap could not be fetched or parsed. Fatal for the run."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason


class FetchFailure(RoastmapError):
    """All attempts to fetch ``url`` failed; ``cause`` is the last error seen."""

    def __init__(self, url: str, cause: BaseException) -> None:
        super().__init__(f"{url}: {cause!r}")
        self.url = url
        self.cause = cause


__all__ = ["RoastmapError", "DiscoveryError", "FetchFailure"]
