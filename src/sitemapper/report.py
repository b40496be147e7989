"""
Summary table and sitemap XML output for a finished crawl.
"""
from __future__ import annotations

import shutil
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from lxml import etree

from sitemapper.core import CrawlGraph
from sitemapper.scoring import format_priority, rank, score

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'
GENERATOR = "sitemapper"

DEFAULT_WIDTH = 80
MIN_WIDTH = 30
COUNT_COL = 6


def terminal_width() -> int:
    """Width of the attached terminal, DEFAULT_WIDTH if unknown or too narrow."""
    width = shutil.get_terminal_size(fallback=(DEFAULT_WIDTH, 24)).columns
    return width if width >= MIN_WIDTH else DEFAULT_WIDTH


def summary_rows(graph: CrawlGraph) -> List[Tuple[str, int]]:
    """
    Return (path, incoming count) pairs, one per distinct path.

    The start page's path comes first, the rest are sorted. When several
    URLs share a path, the first one discovered provides the count.
    """
    counts: Dict[str, int] = {}
    for page in graph.nodes.values():
        counts.setdefault(page.path, page.incoming)

    seed_path = graph.seed_path
    rest = sorted(p for p in counts if p != seed_path)
    return [(seed_path, counts[seed_path])] + [(p, counts[p]) for p in rest]


def render_summary(graph: CrawlGraph, width: Optional[int] = None) -> str:
    """Render the `Count | Path` table, wrapping long paths to fit ``width``."""
    if width is None:
        width = terminal_width()
    path_col = max(1, width - COUNT_COL - 3)

    lines = [f"{'Count':<{COUNT_COL}} | Path", "-" * width]
    for path, incoming in summary_rows(graph):
        chunks = [path[i:i + path_col] for i in range(0, len(path), path_col)] or [""]
        lines.append(f"{incoming:<{COUNT_COL}} | {chunks[0]}")
        lines.extend(f"{'':<{COUNT_COL}} | {chunk}" for chunk in chunks[1:])
    return "\n".join(lines) + "\n"


def build_urlset(graph: CrawlGraph) -> etree._Element:
    """Build the <urlset> element, pages ordered by descending priority."""
    root = etree.Element(f"{{{SITEMAP_NS}}}urlset", nsmap={None: SITEMAP_NS})
    for url, priority in rank(score(graph)):
        url_node = etree.SubElement(root, f"{{{SITEMAP_NS}}}url")
        etree.SubElement(url_node, f"{{{SITEMAP_NS}}}loc").text = url
        etree.SubElement(url_node, f"{{{SITEMAP_NS}}}priority").text = format_priority(priority)
    return root


def render_sitemap(graph: CrawlGraph) -> str:
    body = etree.tostring(build_urlset(graph), encoding="unicode", pretty_print=True)
    comment = etree.tostring(etree.Comment(f" Generated by {GENERATOR} "), encoding="unicode")
    return f"{XML_DECLARATION}\n{comment}\n{body}"


def write_sitemap(graph: CrawlGraph, path: Union[str, Path]) -> Path:
    """Write the sitemap for ``graph`` to ``path`` and return the path."""
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(render_sitemap(graph), encoding="utf-8")
    return output_path
