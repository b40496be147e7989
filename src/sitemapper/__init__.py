"""
Web crawler that follows in-domain links depth-first from a start URL.
Counts incoming and outgoing links per page and ranks pages into a sitemap.
"""
__version__ = "1.0.0"

from sitemapper.core import CrawlGraph, PageNode, crawl
from sitemapper.report import render_sitemap, render_summary
from sitemapper.scoring import rank, score

__all__ = [
    "crawl", "CrawlGraph", "PageNode",
    "score", "rank",
    "render_summary", "render_sitemap",
]
