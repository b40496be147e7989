"""
Exceptions raised while crawling a site.
"""
from __future__ import annotations


class CrawlError(Exception):
    """Base class for all crawler errors."""


class InvalidSeedError(CrawlError, ValueError):
    """The start URL could not be parsed or is not an absolute http(s) URL."""


class SeedFetchError(CrawlError):
    """The start URL could not be fetched; nothing was crawled."""


class InvalidLinkError(CrawlError, ValueError):
    """A single href could not be parsed as a URL reference."""


class FetchError(CrawlError):
    """A page could not be fetched or parsed."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason
