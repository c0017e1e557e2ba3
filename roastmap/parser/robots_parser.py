# File: roastmap/parser/robots_parser.py
"""roastmap.parser.robots_parser: extraction of ``Sitemap:`` references from robots.txt."""

from __future__ import annotations

from typing import List, Tuple
from urllib.parse import urljoin

from roastmap.utils import remove_duplicates


def parse_robots_sitemaps(text: str, robots_url: str) -> List[str]:
    """Return sitemap URLs listed in robots.txt, in file order.

    Args:
        text: robots.txt content.
        robots_url: URL robots.txt was fetched from; relative references
            are resolved against it.

    Returns:
        Absolute sitemap URLs without duplicates.
    """
    found = [
        urljoin(robots_url, value)
        for directive, value in _prepare_lines(text)
        if directive == "sitemap" and value
    ]
    return remove_duplicates(found)


def _prepare_lines(text: str) -> List[Tuple[str, str]]:
    """Strip comments and split lines into (directive, value)."""
    lines: List[Tuple[str, str]] = []
    for raw in text.splitlines():
        line = raw.split("#", 1)[0].strip()
        if not line or ":" not in line:
            continue
        key, val = (part.strip() for part in line.split(":", 1))
        lines.append((key.lower(), val))
    return lines


__all__ = ["parse_robots_sitemaps"]
