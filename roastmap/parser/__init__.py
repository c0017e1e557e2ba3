"""roastmap.parser: robots.txt and sitemap parsers."""

from roastmap.parser.robots_parser import parse_robots_sitemaps
from roastmap.parser.sitemap_parser import ParsedSitemap, parse_sitemap

__all__ = ["ParsedSitemap", "parse_robots_sitemaps", "parse_sitemap"]
