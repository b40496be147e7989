"""In-memory site standing in for HTTP fetching."""

from __future__ import annotations

from typing import Dict, List

from bs4 import BeautifulSoup

from sitemapper.errors import FetchError


class FakeSite:
    """Serve canned HTML by URL and record every fetch, in order."""

    def __init__(self, pages: Dict[str, str]) -> None:
        self.pages = pages
        self.fetched: List[str] = []

    def fetch(self, url: str) -> BeautifulSoup:
        self.fetched.append(url)
        if url not in self.pages:
            raise FetchError(url, "404 Not Found")
        return BeautifulSoup(self.pages[url], "lxml")

    def __enter__(self) -> "FakeSite":
        return self

    def __exit__(self, *exc_info) -> None:
        pass


def links(*hrefs: str) -> str:
    """HTML body containing one anchor per href, in order."""
    anchors = "".join(f'<a href="{href}">link</a>' for href in hrefs)
    return f"<html><body>{anchors}</body></html>"
