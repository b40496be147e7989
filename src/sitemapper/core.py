"""
Core crawling logic and data structures.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterator, List, Optional, Set
from urllib.parse import SplitResult, urljoin, urlsplit, urlunsplit

from bs4 import BeautifulSoup

from sitemapper.errors import FetchError, SeedFetchError
from sitemapper.fetcher import PageFetcher
from sitemapper.urls import (
    ALLOWED_SCHEMES,
    display_path,
    host_of,
    normalize_url,
    parse_reference,
    parse_seed,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_PAGES = 100
DEFAULT_MAX_DEPTH = 0

FetchFn = Callable[[str], BeautifulSoup]


@dataclass(slots=True)
class PageNode:
    """Link counts for a single normalized URL. ``fetched`` is set once a fetch was attempted."""
    url: str
    path: str
    incoming: int = 0
    outgoing: int = 0
    fetched: bool = False


@dataclass(slots=True)
class CrawlGraph:
    """
    Link graph of one crawl run.

    ``nodes`` keeps discovery order. Every node was either the seed or the
    target of an in-domain link; it has not necessarily been fetched.
    """
    seed: str
    max_pages: int
    max_depth: int = DEFAULT_MAX_DEPTH
    nodes: Dict[str, PageNode] = field(default_factory=dict)
    visited: Set[str] = field(default_factory=set)
    pages_visited: int = 0

    def node(self, url: str, path: str) -> PageNode:
        """Get the node for ``url``, creating it if needed. The path is overwritten."""
        page = self.nodes.get(url)
        if page is None:
            page = self.nodes[url] = PageNode(url=url, path=path)
        else:
            page.path = path
        return page

    def record_link(self, source: str, link: SplitResult) -> str:
        """Count one in-domain anchor found on ``source`` and return its target key."""
        target = normalize_url(link)
        page = self.node(target, display_path(link))
        if target != source:
            page.incoming += 1
        self.nodes[source].outgoing += 1
        return target

    def can_fetch(self, url: str, depth: int) -> bool:
        """Whether ``url``, first reached at ``depth``, is within the crawl budgets."""
        if url in self.visited or self.pages_visited >= self.max_pages:
            return False
        return self.max_depth == 0 or depth <= self.max_depth

    def mark_visited(self, url: str) -> None:
        self.visited.add(url)
        self.nodes[url].fetched = True
        self.pages_visited += 1

    @property
    def incoming(self) -> Dict[str, int]:
        return {url: page.incoming for url, page in self.nodes.items()}

    @property
    def outgoing(self) -> Dict[str, int]:
        return {url: page.outgoing for url, page in self.nodes.items()}

    @property
    def paths(self) -> Dict[str, str]:
        return {url: page.path for url, page in self.nodes.items()}

    @property
    def seed_path(self) -> str:
        return self.nodes[self.seed].path


@dataclass(slots=True)
class _Frame:
    url: str
    depth: int
    links: Iterator[SplitResult]


def iter_links(page_url: str, doc: BeautifulSoup, host: str) -> Iterator[SplitResult]:
    """
    Yield in-domain links of ``doc`` in document order.

    hrefs are resolved against ``page_url``. Unparseable hrefs are skipped, as
    are non-http(s) URLs and URLs whose host differs from ``host``.
    """
    for anchor in doc.find_all("a", href=True):
        href = anchor["href"]
        try:
            ref = parse_reference(href)
            if ref.scheme and not ref.netloc:
                # Absolute without a host, e.g. "http:c"; never in-domain
                link = ref
            else:
                link = urlsplit(urljoin(page_url, ref.geturl()))
        except ValueError as e:
            logger.debug("Skipping link on %s: %s", page_url, e)
            continue

        if link.scheme in ALLOWED_SCHEMES and host_of(link) == host:
            yield link


def crawl(
    start_url: str,
    max_pages: int = DEFAULT_MAX_PAGES,
    max_depth: int = DEFAULT_MAX_DEPTH,
    fetch: Optional[FetchFn] = None,
    on_visit: Optional[Callable[[str], None]] = None,
) -> CrawlGraph:
    """
    Crawl in-domain links depth-first starting from a URL.

    Args:
        start_url: The URL to start crawling from.
        max_pages: Maximum number of pages to fetch, the start URL included.
        max_depth: Maximum link depth to fetch, the start URL being depth 1.
                   0 means unlimited.
        fetch: Callable returning the parsed document for a URL, raising
               FetchError on failure. Defaults to a PageFetcher.
        on_visit: Called with each newly visited URL just before it is fetched.

    Returns:
        The finished link graph.

    Raises:
        InvalidSeedError: start_url is not an absolute http(s) URL.
        SeedFetchError: start_url could not be fetched.
    """
    if max_pages < 1:
        raise ValueError(f"max_pages must be at least 1, got {max_pages}")
    if max_depth < 0:
        raise ValueError(f"max_depth must not be negative, got {max_depth}")

    seed = parse_seed(start_url)

    fetcher = None
    if fetch is None:
        fetcher = PageFetcher()
        fetch = fetcher.fetch

    try:
        try:
            doc = fetch(urlunsplit(seed))
        except FetchError as e:
            raise SeedFetchError(str(e)) from e

        graph = CrawlGraph(seed=normalize_url(seed), max_pages=max_pages, max_depth=max_depth)
        graph.node(graph.seed, display_path(seed))
        graph.mark_visited(graph.seed)
        _traverse(graph, urlunsplit(seed), host_of(seed), doc, fetch, on_visit)
    finally:
        if fetcher is not None:
            fetcher.close()

    logger.info(
        "Crawl of %s finished: %d pages fetched, %d URLs discovered",
        graph.seed, graph.pages_visited, len(graph.nodes),
    )
    return graph


def _traverse(
    graph: CrawlGraph,
    seed_url: str,
    host: str,
    doc: BeautifulSoup,
    fetch: FetchFn,
    on_visit: Optional[Callable[[str], None]],
) -> None:
    # One frame per page being scanned; the top frame is the deepest page.
    stack: List[_Frame] = [_Frame(graph.seed, 1, iter_links(seed_url, doc, host))]

    while stack:
        frame = stack[-1]
        link = next(frame.links, None)
        if link is None:
            stack.pop()
            continue

        target = graph.record_link(frame.url, link)
        depth = frame.depth + 1
        if not graph.can_fetch(target, depth):
            continue

        graph.mark_visited(target)
        if on_visit is not None:
            on_visit(target)
        try:
            child = fetch(target)
        except FetchError as e:
            logger.debug("Fetch failed, keeping %s as a leaf: %s", target, e)
            continue
        stack.append(_Frame(target, depth, iter_links(target, child, host)))
