# File: roastmap/parser/sitemap_parser.py
"""roastmap.parser.sitemap_parser: parsing of sitemap files (XML, gzip, plain text)."""

from __future__ import annotations

import gzip
import zlib
from dataclasses import dataclass, field
from typing import List

from lxml import etree

from roastmap.errors import DiscoveryError
from roastmap.logger import get_logger
from roastmap.models import URLRecord
from roastmap.utils import is_valid_uri

_GZIP_MAGIC = b"\x1f\x8b"
_BOM = b"\xef\xbb\xbf"

logger = get_logger()


@dataclass
class ParsedSitemap:
    """What one sitemap file contributed: nested sitemaps and page URLs."""

    sitemaps: List[str] = field(default_factory=list)
    urls: List[URLRecord] = field(default_factory=list)


def parse_sitemap(content: bytes, source: str) -> ParsedSitemap:
    """Parse one sitemap document fetched from ``source``.

    Args:
        content: raw response body; gzip is detected by its magic bytes.
        source: URL the document came from, used in errors and logs.

    Returns:
        ParsedSitemap with ``sitemaps`` for a ``<sitemapindex>`` and
        ``urls`` for a ``<urlset>`` or a plain-text sitemap.

    Raises:
        DiscoveryError: the document is corrupt gzip or malformed XML.

    Example:
    ```python
    from roastmap.parser.sitemap_parser import parse_sitemap

    with open('sitemap.xml', 'rb') as f:
        parsed = parse_sitemap(f.read(), 'https://example.com/sitemap.xml')
    print([record.location for record in parsed.urls])
    ```
    """
    if content[:2] == _GZIP_MAGIC:
        try:
            content = gzip.decompress(content)
        except (OSError, EOFError, zlib.error) as exc:
            raise DiscoveryError(source, f"corrupt gzip sitemap: {exc}") from exc

    body = content.removeprefix(_BOM).strip()
    if not body:
        logger.warning("Empty sitemap: %s", source)
        return ParsedSitemap()
    if not body.startswith(b"<"):
        return _parse_text(body, source)
    return _parse_xml(body, source)


def _parse_xml(body: bytes, source: str) -> ParsedSitemap:
    parser = etree.XMLParser(ns_clean=True, recover=False, resolve_entities=False, no_network=True)
    try:
        root = etree.fromstring(body, parser=parser)
    except etree.XMLSyntaxError as exc:
        raise DiscoveryError(source, f"malformed XML: {exc}") from exc

    parsed = ParsedSitemap()
    kind = etree.QName(root).localname
    if kind == "sitemapindex":
        for entry in _children(root, "sitemap"):
            loc = _child_text(entry, "loc")
            if loc:
                parsed.sitemaps.append(loc)
    elif kind == "urlset":
        for entry in _children(root, "url"):
            loc = _child_text(entry, "loc")
            if not loc:
                continue
            metadata = {
                etree.QName(child).localname: (child.text or "").strip()
                for child in entry
                if isinstance(child.tag, str) and etree.QName(child).localname != "loc"
            }
            parsed.urls.append(URLRecord(location=loc, metadata=metadata))
    else:
        logger.warning("Unsupported sitemap root <%s> in %s, skipped", kind, source)
    return parsed


def _parse_text(body: bytes, source: str) -> ParsedSitemap:
    """Plain-text sitemap: one absolute URL per line."""
    parsed = ParsedSitemap()
    for line in body.decode("utf-8", errors="replace").splitlines():
        url = line.strip()
        if url and is_valid_uri(url):
            parsed.urls.append(URLRecord(location=url))
        elif url:
            logger.debug("Skipping non-URL line in %s: %s", source, url)
    return parsed


def _children(node: etree._Element, name: str) -> List[etree._Element]:
    return [
        child for child in node if isinstance(child.tag, str) and etree.QName(child).localname == name
    ]


def _child_text(node: etree._Element, name: str) -> str:
    for child in _children(node, name):
        if child.text and child.text.strip():
            return child.text.strip()
    return ""


__all__ = ["ParsedSitemap", "parse_sitemap"]
