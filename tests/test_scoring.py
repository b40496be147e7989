"""Unit tests for sitemapper.scoring."""

from __future__ import annotations

import pytest

from sitemapper.core import CrawlGraph
from sitemapper.scoring import format_priority, rank, score

SEED = "https://example.com/"


def make_graph(counts):
    """Graph with nodes given as {path: (incoming, outgoing)}, in order."""
    graph = CrawlGraph(seed=SEED, max_pages=100)
    for path, (incoming, outgoing) in counts.items():
        page = graph.node("https://example.com" + path, path)
        page.incoming = incoming
        page.outgoing = outgoing
    return graph


def test_lone_seed_scores_zero():
    graph = make_graph({"/": (0, 0)})
    assert score(graph) == {SEED: 0.0}


def test_weights_outgoing_and_incoming():
    graph = make_graph({"/": (1, 4), "/a": (2, 2), "/b": (0, 0)})

    scores = score(graph)

    assert scores[SEED] == pytest.approx(0.75 + 0.25 * 0.5)
    assert scores["https://example.com/a"] == pytest.approx(0.75 * 0.5 + 0.25)
    assert scores["https://example.com/b"] == 0.0


def test_busiest_hub_gets_full_outbound_term():
    graph = make_graph({"/": (0, 6), "/a": (3, 6), "/b": (3, 1)})

    scores = score(graph)

    assert scores[SEED] == pytest.approx(0.75)
    assert scores["https://example.com/a"] == pytest.approx(1.0)


def test_scores_stay_in_unit_interval():
    graph = make_graph({f"/p{i}": (i % 5, (i * 7) % 11) for i in range(30)})
    assert all(0.0 <= p <= 1.0 for p in score(graph).values())


class TestRank:
    def test_descending_priority(self):
        ranked = rank({"https://example.com/a": 0.2, "https://example.com/b": 0.9})
        assert [u for u, _ in ranked] == ["https://example.com/b", "https://example.com/a"]

    def test_ties_broken_by_url(self):
        scores = {
            "https://example.com/z": 0.5,
            "https://example.com/m": 0.5,
            "https://example.com/a": 0.5,
        }
        assert [u for u, _ in rank(scores)] == [
            "https://example.com/a",
            "https://example.com/m",
            "https://example.com/z",
        ]

    def test_ties_use_rendered_precision(self):
        scores = {"https://example.com/b": 0.754, "https://example.com/a": 0.751}
        assert [u for u, _ in rank(scores)][0] == "https://example.com/a"


def test_format_priority_two_decimals():
    assert format_priority(0.876) == "0.88"
    assert format_priority(1.0) == "1.00"
    assert format_priority(0) == "0.00"
