"""
HTTP fetching and HTML parsing.
"""
from __future__ import annotations

import logging
from typing import Optional

import requests
from bs4 import BeautifulSoup

from sitemapper import __version__
from sitemapper.errors import FetchError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_S = 15.0
DEFAULT_USER_AGENT = f"sitemapper/{__version__}"


class PageFetcher:
    """Fetch one page per call over a shared session. No retries."""

    def __init__(
        self,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        user_agent: str = DEFAULT_USER_AGENT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.timeout_s = timeout_s
        self.session = session or requests.Session()
        self.session.headers["User-Agent"] = user_agent

    def fetch(self, url: str) -> BeautifulSoup:
        """
        GET ``url`` and parse the body into a document tree.

        HTTP error statuses are not errors, their body is parsed like any other
        page. Raises FetchError on transport failures and non-HTML responses.
        """
        try:
            resp = self.session.get(url, timeout=self.timeout_s, allow_redirects=True)
        except requests.RequestException as e:
            raise FetchError(url, str(e)) from e

        content_type = (resp.headers.get("content-type") or "").lower()
        if content_type and "html" not in content_type:
            raise FetchError(url, f"not an HTML document ({content_type})")

        logger.debug("Fetched %s (%s, %d bytes)", url, resp.status_code, len(resp.content))
        return BeautifulSoup(resp.content, "lxml")

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> PageFetcher:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
