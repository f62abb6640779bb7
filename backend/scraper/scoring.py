"""Candidate scoring: pick the subtree most likely to be the article body.

The scoring itself is a pure function over :class:`ElementView`, a flat
summary of an element (tag, class/id, counts and text lengths), so it can be
exercised against hand-built fixtures without parsing any markup.
:func:`select_content_root` is the thin bs4 adapter that builds the views,
keeps the running maximum and applies the fallbacks.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from bs4 import BeautifulSoup, Tag

from backend.scraper.loader import class_id_string

logger = logging.getLogger(__name__)

CANDIDATE_TAGS = ("div", "article", "main", "section")

DISQUALIFYING_INDICATORS = ("sidebar", "widget")
BONUS_INDICATORS = ("article", "post", "content")

MIN_PARAGRAPHS = 2
CLASS_BONUS = 25.0
TEXT_LENGTH_DIVISOR = 100.0
TEXT_LENGTH_CAP = 50.0
PARAGRAPH_WEIGHT = 5.0
LINK_DENSITY_THRESHOLD = 0.5
LINK_DENSITY_PENALTY = -1000.0


@dataclass(frozen=True)
class ElementView:
    """The signals the scorer needs from one element, and nothing else."""

    tag: str
    class_id: str
    paragraph_count: int
    text_length: int
    link_text_length: int

    @classmethod
    def from_tag(cls, tag: Tag) -> "ElementView":
        return cls(
            tag=tag.name,
            class_id=class_id_string(tag),
            paragraph_count=len(tag.find_all("p")),
            text_length=len(tag.get_text()),
            link_text_length=anchor_text_length(tag),
        )


def anchor_text_length(tag: Tag) -> int:
    """Total length of the text inside ``<a>`` descendants of *tag*."""
    return sum(len(a.get_text()) for a in tag.find_all("a"))


def link_density(link_text_length: int, text_length: int) -> float:
    """Fraction of the text that sits inside anchors."""
    return link_text_length / max(text_length, 1)


def is_disqualified(view: ElementView) -> bool:
    """Return ``True`` when *view* must not be scored at all."""
    if any(ind in view.class_id for ind in DISQUALIFYING_INDICATORS):
        return True
    return view.paragraph_count < MIN_PARAGRAPHS


def score_element(view: ElementView) -> float:
    """Score *view*; higher means more article-like.

    ``class bonus + capped text-length bonus + paragraph bonus`` minus a flat
    1000 when more than half of the text is link text.
    """
    score = 0.0
    if any(ind in view.class_id for ind in BONUS_INDICATORS):
        score += CLASS_BONUS
    score += min(view.text_length / TEXT_LENGTH_DIVISOR, TEXT_LENGTH_CAP)
    score += view.paragraph_count * PARAGRAPH_WEIGHT
    if link_density(view.link_text_length, view.text_length) > LINK_DENSITY_THRESHOLD:
        score += LINK_DENSITY_PENALTY
    return score


def select_content_root(soup: BeautifulSoup) -> Tag:
    """Return the content root of *soup*.

    Walks every ``div``/``article``/``main``/``section`` in document order.
    A candidate replaces the current winner only with a strictly greater
    score, so ties go to the earlier element.  When nothing scores above
    zero the first ``<article>`` is used, then ``<body>``, then the whole
    document.
    """
    best: Tag | None = None
    best_view: ElementView | None = None
    best_score = 0.0

    for tag in soup.find_all(list(CANDIDATE_TAGS)):
        view = ElementView.from_tag(tag)
        if is_disqualified(view):
            continue
        score = score_element(view)
        if score > best_score:
            best, best_view, best_score = tag, view, score

    if best is not None:
        logger.debug(
            "Content root: <%s class/id=%r> score=%.1f",
            best_view.tag, best_view.class_id.strip(), best_score,
        )
        return best

    logger.debug("No candidate scored; falling back to <article>/<body>")
    for fallback in (soup.find("article"), soup.body):
        if fallback is not None:
            return fallback
    return soup
