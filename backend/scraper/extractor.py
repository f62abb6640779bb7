"""Content extraction: turns a :class:`RawPage` into a :class:`CleanPage`.

Pipeline, in order:

    strip scripts/styles → parse → remove junk → select content root
    → prune link lists → collect related links → render text
"""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup

from backend.config import settings
from backend.scraper.links import extract_links
from backend.scraper.loader import load_markup, remove_junk
from backend.scraper.models import CleanPage, RawPage
from backend.scraper.pruning import prune_link_lists
from backend.scraper.renderer import render_text
from backend.scraper.scoring import select_content_root

logger = logging.getLogger(__name__)


def _extract_title(soup: BeautifulSoup) -> str:
    """Return the text of the first ``<title>`` tag, or empty string."""
    if soup.title is None:
        return ""
    return " ".join(soup.title.get_text().split())


def extract_content(
    raw: RawPage,
    *,
    strict: bool = False,
    structural_markers: bool | None = None,
) -> CleanPage:
    """Isolate the article body of *raw* and render it as clean text.

    Args:
        raw: The fetched page; ``raw.url`` is the base for relative links.
        strict: Use the stricter minimum anchor-title length for links.
        structural_markers: Emit heading/list/code markers in the text.
            ``None`` defers to ``settings.structural_markers``.

    Returns:
        A :class:`CleanPage`.  ``text`` may be empty; deciding whether that
        is a failure is the caller's job.
    """
    if structural_markers is None:
        structural_markers = settings.structural_markers

    soup = load_markup(raw.html)
    title = _extract_title(soup)

    removed = remove_junk(soup)
    root = select_content_root(soup)
    pruned = prune_link_lists(root)
    logger.debug(
        "%s: removed %d junk subtree(s), pruned %d link list(s)",
        raw.url, removed, pruned,
    )

    links = extract_links(
        root,
        raw.url,
        max_links=settings.max_related_links,
        min_title_length=settings.min_title_length(strict),
    )
    text = render_text(root, structural_markers=structural_markers)

    return CleanPage(url=raw.url, title=title, text=text, links=links)
