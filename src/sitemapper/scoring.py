"""
Priority scoring of crawled pages.

A page's priority weighs its outgoing link count against the busiest hub and
its incoming link count against the most linked-to page:

    priority = 0.75 * outgoing / max_outgoing + 0.25 * incoming / max_incoming

Both maxima are floored at 1, so a graph without links scores every page 0.
"""
from __future__ import annotations

from typing import Dict, List, Tuple

from sitemapper.core import CrawlGraph

OUTLINK_WEIGHT = 0.75
INLINK_WEIGHT = 0.25


def score(graph: CrawlGraph) -> Dict[str, float]:
    """Return a priority in [0, 1] for every node of the graph."""
    max_out = max([1] + [page.outgoing for page in graph.nodes.values()])
    max_in = max([1] + [page.incoming for page in graph.nodes.values()])

    return {
        url: OUTLINK_WEIGHT * page.outgoing / max_out + INLINK_WEIGHT * page.incoming / max_in
        for url, page in graph.nodes.items()
    }


def rank(scores: Dict[str, float]) -> List[Tuple[str, float]]:
    """
    Sort scores by descending priority as rendered (two decimals).

    Pages with equal rendered priority are ordered by URL.
    """
    return sorted(scores.items(), key=lambda item: (-round(item[1], 2), item[0]))


def format_priority(priority: float) -> str:
    return f"{priority:.2f}"
