# roastmap/models.py
"""
Data models shared by the fetcher, scheduler and reports.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, Optional

from roastmap.errors import FetchFailure

__all__ = ("URLRecord", "FetchOutcome", "FetchFailure", "ResultMap")


@dataclass(frozen=True, slots=True)
class URLRecord:
    """One ``<url>`` entry of a sitemap: its location plus whatever tags came with it."""

    location: str
    metadata: Mapping[str, str] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))


@dataclass(frozen=True, slots=True)
class FetchOutcome:
    """Normalized result of one URL: HTTP status and buffered body size in bytes."""

    status: int
    body_length: int
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.error is not None

    @classmethod
    def failure(cls, exc: BaseException) -> FetchOutcome:
        """Sentinel recorded when every attempt for a URL failed."""
        cause = exc.cause if isinstance(exc, FetchFailure) else exc
        return cls(status=0, body_length=0, error=f"{type(cause).__name__}: {cause}")


ResultMap = Dict[str, FetchOutcome]
