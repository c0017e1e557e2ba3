# File: roastmap/utils.py
"""roastmap.utils: URL helpers and list chunking."""

from __future__ import annotations

from typing import Collection, Iterator, List, Sequence, TypeVar
from urllib.parse import urlparse, urlunparse

from roastmap.logger import get_logger

__all__: Sequence[str] = (
    "chunked",
    "is_valid_uri",
    "robots_uri",
    "remove_duplicates",
)

T = TypeVar("T")

logger = get_logger()


def chunked(items: Sequence[T], size: int) -> Iterator[List[T]]:
    """Yield contiguous slices of ``size`` items; the last one may be shorter."""
    if size < 1:
        raise ValueError("chunk size must be >= 1")
    for start in range(0, len(items), size):
        yield list(items[start:start + size])


def is_valid_uri(uri: str) -> bool:
    """Checks that the URI uses http(s) and has a host."""
    parsed = urlparse(uri)
    return parsed.scheme in ("http", "https") and bool(parsed.hostname)


def robots_uri(uri: str) -> str:
    """``{scheme}://{host}/robots.txt`` for the given site URI (port kept)."""
    parsed = urlparse(uri)
    return urlunparse((parsed.scheme, parsed.netloc, "/robots.txt", "", "", ""))


def remove_duplicates(urls: Collection[str]) -> List[str]:
    """Drop duplicate URLs, keeping first-seen order."""
    unique = list(dict.fromkeys(urls))
    removed = len(urls) - len(unique)
    if removed:
        logger.debug("Removed %d duplicate URLs", removed)
    return unique
