# roastmap/sitemap.py
"""
Sitemap discovery: robots.txt → every referenced sitemap (recursively) → URL records.
"""
from __future__ import annotations

import asyncio
import logging
from collections import deque
from typing import Deque, Dict, List, Optional, Set

from aiohttp import ClientError, ClientSession

from roastmap.config import USER_AGENT
from roastmap.errors import DiscoveryError
from roastmap.models import URLRecord
from roastmap.parser import parse_robots_sitemaps, parse_sitemap
from roastmap.utils import robots_uri


class SitemapSource:
    """Collects the ordered URL list of a site from its robots.txt sitemaps."""

    def __init__(
        self,
        session: ClientSession,
        *,
        logger: Optional[logging.Logger] = None,
        user_agent: str = USER_AGENT,
    ) -> None:
        self.session = session
        self.logger = logger or logging.getLogger(__name__)
        self.user_agent = user_agent

    async def discover(self, base_uri: str) -> List[URLRecord]:
        """
        Walk every sitemap reachable from ``base_uri``'s robots.txt.

        Returns unique URL records in discovery order. Any fetch or parse
        problem raises DiscoveryError; nothing is retried here.
        """
        robots_url = robots_uri(base_uri)
        robots_text = (await self._get(robots_url)).decode("utf-8", errors="replace")
        queue: Deque[str] = deque(parse_robots_sitemaps(robots_text, robots_url))
        for sitemap in queue:
            self.logger.info("Parsed SiteMap URI from robots.txt: %s", sitemap)

        if not queue:
            self.logger.warning("No sitemaps referenced in %s", robots_url)
            return []

        self.logger.info("Let's Go receiving links from XML files...")

        seen: Set[str] = set()
        records: Dict[str, URLRecord] = {}
        while queue:
            sitemap = queue.popleft()
            if sitemap in seen:
                continue
            seen.add(sitemap)

            parsed = parse_sitemap(await self._get(sitemap), sitemap)
            for nested in parsed.sitemaps:
                if nested not in seen:
                    self.logger.info("Parsed SiteMap URI from sitemap index: %s", nested)
                    queue.append(nested)
            for record in parsed.urls:
                records.setdefault(record.location, record)
            self.logger.debug("%s: %d sitemaps, %d urls", sitemap, len(parsed.sitemaps), len(parsed.urls))

        self.logger.info("Discovered %d URLs in %d sitemaps", len(records), len(seen))
        return list(records.values())

    async def _get(self, url: str) -> bytes:
        try:
            async with self.session.get(url, headers={"User-Agent": self.user_agent}) as resp:
                if not 200 <= resp.status < 300:
                    raise DiscoveryError(url, f"HTTP {resp.status}")
                return await resp.read()
        except (ClientError, asyncio.TimeoutError) as exc:
            raise DiscoveryError(url, repr(exc)) from exc


__all__ = ["SitemapSource"]
