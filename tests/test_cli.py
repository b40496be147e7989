"""Unit tests for sitemapper.cli.

PageFetcher is replaced with an in-memory FakeSite.
"""

from __future__ import annotations

import pytest

from sitemapper import cli
from tests.helpers import FakeSite, links

SEED = "https://example.com/"


@pytest.fixture
def site(monkeypatch):
    fake = FakeSite({
        SEED: links("/a", "/b"),
        "https://example.com/a": links("/"),
        "https://example.com/b": links(),
    })
    monkeypatch.setattr(cli, "PageFetcher", lambda **kwargs: fake)
    monkeypatch.setattr(cli, "setup_logging", lambda verbose: None)
    return fake


def test_no_url_prints_usage(capsys):
    assert cli.main([]) == 0
    assert "usage:" in capsys.readouterr().out


def test_invalid_url(site, capsys):
    assert cli.main(["not a url"]) == 0
    assert capsys.readouterr().out.startswith("Invalid URL:")
    assert site.fetched == []


def test_seed_fetch_failure(site, capsys):
    assert cli.main(["https://example.com/missing"]) == 0
    assert capsys.readouterr().out.startswith("Error fetching URL:")


def test_prints_visited_urls_and_summary(site, capsys, monkeypatch):
    monkeypatch.setattr(cli, "render_summary", lambda graph: "TABLE\n")

    assert cli.main([SEED]) == 0

    out = capsys.readouterr().out.splitlines()
    assert out[:2] == ["https://example.com/a", "https://example.com/b"]
    assert "Summary of visited pages and incoming link counts:" in out
    assert out[-1] == "TABLE"


def test_no_summary(site, capsys):
    assert cli.main([SEED, "--no-summary"]) == 0
    assert "Summary" not in capsys.readouterr().out


def test_budgets_are_passed_through(site):
    cli.main([SEED, "-n", "2", "-s"])
    assert site.fetched == [SEED, "https://example.com/a"]


def test_writes_sitemap(site, capsys, tmp_path):
    output = tmp_path / "sitemap.xml"

    assert cli.main([SEED, "-x", "--no-summary", "-o", str(output)]) == 0

    assert output.exists()
    assert "<loc>https://example.com/</loc>" in output.read_text(encoding="utf-8")
    assert f"XML written to {output}" in capsys.readouterr().out


def test_sitemap_write_error(site, capsys, tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x")

    cli.main([SEED, "-x", "--no-summary", "-o", str(blocker / "sitemap.xml")])

    assert "Error writing XML:" in capsys.readouterr().out


def test_rejects_zero_pages(site):
    with pytest.raises(SystemExit):
        cli.main([SEED, "-n", "0"])
