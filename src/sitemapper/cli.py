"""
Command-line interface for the crawler.
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from sitemapper.core import DEFAULT_MAX_DEPTH, DEFAULT_MAX_PAGES, crawl
from sitemapper.errors import InvalidSeedError, SeedFetchError
from sitemapper.fetcher import DEFAULT_TIMEOUT_S, DEFAULT_USER_AGENT, PageFetcher
from sitemapper.report import render_summary, write_sitemap

DEFAULT_SITEMAP_PATH = "sitemap.xml"


def setup_logging(verbose: bool) -> None:
    """Send log records to stderr, DEBUG when verbose and WARNING otherwise."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(
        "%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)
    root.addHandler(handler)

    # urllib3 logs every connection at DEBUG
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Crawl a site, count incoming and outgoing links per page and build a sitemap."
    )
    parser.add_argument("url", nargs="?", help="Start URL (e.g. https://example.com)")
    parser.add_argument(
        "-n", "--max-pages", type=int, default=DEFAULT_MAX_PAGES,
        help=f"Maximum number of pages to visit (default: {DEFAULT_MAX_PAGES})",
    )
    parser.add_argument(
        "-i", "--max-depth", type=int, default=DEFAULT_MAX_DEPTH,
        help="Maximum recursion depth, 0 = unlimited (default: 0)",
    )
    parser.add_argument(
        "-s", "--summary", action=argparse.BooleanOptionalAction, default=True,
        help="Show summary of incoming links at the end (default: on)",
    )
    parser.add_argument("-x", "--xml", action="store_true", help="Write a sitemap XML file")
    parser.add_argument(
        "-o", "--output", default=DEFAULT_SITEMAP_PATH,
        help=f"Sitemap output path (default: {DEFAULT_SITEMAP_PATH})",
    )
    parser.add_argument(
        "--timeout", type=float, default=DEFAULT_TIMEOUT_S,
        help=f"Request timeout in seconds (default: {DEFAULT_TIMEOUT_S:g})",
    )
    parser.add_argument("--user-agent", default=DEFAULT_USER_AGENT, help="User-Agent header")
    parser.add_argument("--verbose", action="store_true", help="Log debug output to stderr")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the crawler CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.url:
        parser.print_help()
        return 0
    if args.max_pages < 1:
        parser.error("--max-pages must be at least 1")
    if args.max_depth < 0:
        parser.error("--max-depth must not be negative")

    setup_logging(args.verbose)

    with PageFetcher(timeout_s=args.timeout, user_agent=args.user_agent) as fetcher:
        try:
            graph = crawl(
                args.url,
                max_pages=args.max_pages,
                max_depth=args.max_depth,
                fetch=fetcher.fetch,
                on_visit=print,
            )
        except InvalidSeedError as e:
            print(f"Invalid URL: {e}")
            return 0
        except SeedFetchError as e:
            print(f"Error fetching URL: {e}")
            return 0

    if args.summary:
        print("\nSummary of visited pages and incoming link counts:")
        sys.stdout.write(render_summary(graph))

    if args.xml:
        try:
            output_path = write_sitemap(graph, args.output)
        except OSError as e:
            print(f"Error writing XML: {e}")
        else:
            print(f"XML written to {output_path}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
