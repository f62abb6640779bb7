"""Tests for the reader CLI (extract / blocks / concepts)."""

from __future__ import annotations

import pytest
from typer.testing import CliRunner

from backend.scraper.errors import FetchError
from backend.scraper.models import RawPage
from cli.main import app
from cli.rendering import render_blocks
from backend.formatting.blocks import BulletList, CodeBlock, Heading, Paragraph

runner = CliRunner()

_PARA = "Standalone components declare their own imports instead of relying on a module. "

_PAGE = f"""\
<html><head><title>Going Standalone</title></head>
<body>
  <header>Site header</header>
  <div class="entry-content">
    <h2>Migration notes</h2>
    <p>{_PARA * 3}</p>
    <p>{_PARA * 2}See <a href="https://angular.dev/guide/components">the official component guide</a>.</p>
    <ul><li>Drop the NgModule</li><li>Import CommonModule</li></ul>
  </div>
  <footer>Footer</footer>
</body></html>
"""


@pytest.fixture
def page_file(tmp_path):
    path = tmp_path / "page.html"
    path.write_text(_PAGE, encoding="utf-8")
    return path


def test_extract_from_file(page_file):
    result = runner.invoke(app, ["extract", "--file", str(page_file)])

    assert result.exit_code == 0
    assert "[extract] Title    : Going Standalone" in result.output
    assert "the official component guide  <https://angular.dev/guide/components>" in result.output
    assert "[extract] Concepts : 1" in result.output
    assert "Migration notes" in result.output
    assert "Site header" not in result.output


def test_extract_from_url(monkeypatch):
    monkeypatch.setattr(
        "backend.scraper.reader.fetch_url",
        lambda url: RawPage(url=url, html=_PAGE, status_code=200),
    )
    result = runner.invoke(app, ["extract", "--url", "https://example.com/standalone"])

    assert result.exit_code == 0
    assert "Fetching 'https://example.com/standalone'" in result.output
    assert "[extract] Links    : 1" in result.output


def test_extract_fetch_failure_exits_1(monkeypatch):
    def failing_fetch(url):
        raise FetchError(detail="HTTP 503 from upstream", status_code=503)

    monkeypatch.setattr("backend.scraper.reader.fetch_url", failing_fetch)
    result = runner.invoke(app, ["extract", "--url", "https://example.com/down"])

    assert result.exit_code == 1
    assert "[extract] Error: Failed to fetch the URL." in result.output
    assert "HTTP 503 from upstream" in result.output


def test_extract_empty_page_exits_1(tmp_path):
    path = tmp_path / "junk.html"
    path.write_text("<html><body><nav>Menu</nav></body></html>", encoding="utf-8")
    result = runner.invoke(app, ["extract", "--file", str(path)])

    assert result.exit_code == 1
    assert "substantive content" in result.output


def test_extract_requires_exactly_one_source(page_file):
    neither = runner.invoke(app, ["extract"])
    both = runner.invoke(app, ["extract", "--url", "https://x.org", "--file", str(page_file)])

    assert neither.exit_code == 1
    assert both.exit_code == 1
    assert "exactly one of --url or --file" in neither.output


def test_blocks_paged(page_file, monkeypatch):
    monkeypatch.setattr("backend.config.settings.structural_markers", True)
    result = runner.invoke(app, ["blocks", "--file", str(page_file), "--page-size", "2", "--page", "2"])

    assert result.exit_code == 0
    assert "[blocks] Page 2/2  (4 block(s))" in result.output
    assert "  • Drop the NgModule" in result.output


def test_concepts_command():
    result = runner.invoke(app, ["concepts", "We migrated the Angular app to Signals."])

    assert result.exit_code == 0
    assert "Angular:" in result.output
    assert "Signals:" in result.output
    assert "Standalone Components:" not in result.output


def test_concepts_none_found():
    result = runner.invoke(app, ["concepts", "nothing relevant here"])
    assert "No known concepts found." in result.output


def test_render_blocks():
    text = render_blocks(
        [
            Heading(level=1, text="Title"),
            Paragraph(text="Body"),
            BulletList(items=("a", "b")),
            CodeBlock(text="x = 1"),
        ]
    )
    assert text == "Title\n=====\n\nBody\n\n  • a\n  • b\n\n    x = 1"
