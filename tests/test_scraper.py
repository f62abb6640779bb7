"""Tests for the web scraper (fetch + content extraction).

Mocking strategy:
- ``respx`` patches ``httpx`` at the transport layer so no real network calls
  are made during ``fetch_url`` tests.
- ``extract_content`` runs the real bs4 pipeline on inline fixtures.
"""

from __future__ import annotations

import httpx
import pytest
import respx

from backend.scraper.errors import FetchError
from backend.scraper.extractor import extract_content
from backend.scraper.fetcher import fetch_url
from backend.scraper.models import CleanPage, Link, RawPage


# ---------------------------------------------------------------------------
# Fixtures / constants
# ---------------------------------------------------------------------------

_PARA = (
    "Signals give the framework a precise picture of which parts of the page "
    "depend on which pieces of state, so only those parts are refreshed. "
)

_ARTICLE_HTML = f"""\
<!DOCTYPE html>
<html>
<head>
  <title>Understanding Signals</title>
  <style>.hero {{ color: red; }}</style>
</head>
<body>
  <header><h1>Example Site</h1></header>
  <nav><ul><li><a href="/">Home</a></li><li><a href="/blog">Blog</a></li></ul></nav>
  <div id="main-wrapper">
    <div class="post-content">
      <h1>Understanding Signals</h1>
      <ul class="topics"><li><a href="/t/alpha">Topic alpha</a></li><li><a href="/t/beta">Topic beta</a></li></ul>
      <p>{_PARA}Read the <a href="/docs/signals">signals documentation</a> first.</p>
      <p>{_PARA}</p>
      <p>{_PARA}</p>
    </div>
    <aside class="sidebar"><p>Subscribe today</p><p>Popular posts</p></aside>
  </div>
  <div class="comments"><p>Great post!</p><p>Thanks for sharing.</p></div>
  <footer>Copyright 2024</footer>
  <script>alert('tracking');</script>
</body>
</html>
"""


# ---------------------------------------------------------------------------
# fetch_url tests
# ---------------------------------------------------------------------------

class TestFetchUrl:
    def test_successful_fetch_returns_raw_page(self) -> None:
        """A 200 response is returned as a RawPage."""
        with respx.mock:
            respx.get("https://example.com/article").mock(
                return_value=httpx.Response(200, text=_ARTICLE_HTML)
            )
            raw = fetch_url("https://example.com/article")

        assert isinstance(raw, RawPage)
        assert raw.url == "https://example.com/article"
        assert raw.status_code == 200
        assert "<title>Understanding Signals</title>" in raw.html

    def test_sends_declared_user_agent(self, monkeypatch) -> None:
        monkeypatch.setattr("backend.config.settings.user_agent", "CleanReaderTest/1.0")
        with respx.mock:
            route = respx.get("https://example.com/").mock(
                return_value=httpx.Response(200, text="<html></html>")
            )
            fetch_url("https://example.com/")

        assert route.calls.last.request.headers["User-Agent"] == "CleanReaderTest/1.0"

    def test_http_error_raises_fetch_error_with_status(self) -> None:
        """A 404 response raises ``FetchError`` carrying the status code."""
        with respx.mock:
            respx.get("https://example.com/missing").mock(
                return_value=httpx.Response(404, text="Not Found")
            )
            with pytest.raises(FetchError) as info:
                fetch_url("https://example.com/missing")

        assert info.value.status_code == 404
        assert "404" in info.value.detail

    def test_transport_error_raises_fetch_error(self) -> None:
        with respx.mock:
            respx.get("https://unreachable.example.com/").mock(
                side_effect=httpx.ConnectTimeout("timed out")
            )
            with pytest.raises(FetchError) as info:
                fetch_url("https://unreachable.example.com/")

        assert info.value.status_code is None
        assert "ConnectTimeout" in info.value.detail

    def test_follows_redirects(self) -> None:
        with respx.mock:
            respx.get("https://example.com/old").mock(
                return_value=httpx.Response(
                    301, headers={"Location": "https://example.com/new"}
                )
            )
            respx.get("https://example.com/new").mock(
                return_value=httpx.Response(200, text="<p>moved</p>")
            )
            raw = fetch_url("https://example.com/old")

        assert raw.status_code == 200
        assert "moved" in raw.html


# ---------------------------------------------------------------------------
# extract_content tests
# ---------------------------------------------------------------------------

class TestExtractContent:
    def _extract(self, html: str = _ARTICLE_HTML, **kwargs) -> CleanPage:
        raw = RawPage(url="https://example.com/blog/signals", html=html, status_code=200)
        return extract_content(raw, **kwargs)

    def test_returns_clean_page_with_title(self) -> None:
        clean = self._extract()

        assert isinstance(clean, CleanPage)
        assert clean.url == "https://example.com/blog/signals"
        assert clean.title == "Understanding Signals"

    def test_keeps_article_text(self) -> None:
        clean = self._extract()
        assert clean.text.startswith("Understanding Signals")
        assert "signals documentation" in clean.text
        assert clean.text.count("Signals give the framework") == 3

    def test_drops_boilerplate(self) -> None:
        text = self._extract().text
        for junk in ("Example Site", "Home", "Subscribe today", "Great post!", "Copyright"):
            assert junk not in text

    def test_drops_scripts_and_styles(self) -> None:
        text = self._extract().text
        assert "alert" not in text
        assert "color" not in text

    def test_prunes_link_heavy_topic_list(self) -> None:
        clean = self._extract()
        assert "Topic alpha" not in clean.text
        assert all("/t/" not in link.url for link in clean.links)

    def test_related_links_are_resolved(self) -> None:
        clean = self._extract()
        assert clean.links == [
            Link(title="signals documentation", url="https://example.com/docs/signals")
        ]

    def test_strict_mode_drops_shorter_titles(self, monkeypatch) -> None:
        monkeypatch.setattr("backend.config.settings.strict_link_min_title_length", 30)
        assert self._extract(strict=True).links == []

    def test_structural_markers(self) -> None:
        clean = self._extract(structural_markers=True)
        assert clean.text.startswith("# Understanding Signals")

    def test_empty_html_does_not_raise(self) -> None:
        """Completely empty pages should not raise; text is an empty string."""
        clean = self._extract("<html></html>")
        assert clean.text == ""
        assert clean.links == []

    def test_fallback_to_body_without_candidates(self) -> None:
        clean = self._extract("<html><body><p>Just one short paragraph.</p></body></html>")
        assert clean.text == "Just one short paragraph."
