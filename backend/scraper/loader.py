"""Markup loading and structural junk removal.

Scripts and stylesheets are cut out of the raw string before parsing so that
a partially-parsed ``<script>`` can never leak source code into the text.
Everything on the denylist is then decomposed from the working tree, which is
destructive: later stages never see those subtrees.
"""

from __future__ import annotations

import re

from bs4 import BeautifulSoup, Tag

_SCRIPT_RE = re.compile(r"<script\b[^>]*>.*?</script\s*>", re.IGNORECASE | re.DOTALL)
_STYLE_RE = re.compile(r"<style\b[^>]*>.*?</style\s*>", re.IGNORECASE | re.DOTALL)

JUNK_TAGS = ("nav", "header", "footer", "aside", "form", "iframe")

JUNK_INDICATORS = (
    "sidebar",
    "menu",
    "navbar",
    "nav",
    "ad",
    "promo",
    "comments",
    "related",
    "toc",
    "table-of-contents",
    "social-share",
    "breadcrumbs",
)

# An indicator only counts when it is not glued to other letters or digits,
# so "ad" hits "ad-slot" and "top_ad" but leaves "header" and "lead" alone.
_JUNK_RE = re.compile(
    r"(?<![a-z0-9])(?:"
    + "|".join(re.escape(i) for i in sorted(JUNK_INDICATORS, key=len, reverse=True))
    + r")(?![a-z0-9])"
)

_PROTECTED_TAGS = {"html", "body", "[document]"}


def class_id_string(tag: Tag) -> str:
    """Return ``"<class> <id>"`` for *tag*, lowercased."""
    classes = tag.get("class") or []
    if isinstance(classes, str):
        classes = [classes]
    ident = tag.get("id") or ""
    return f"{' '.join(classes)} {ident}".lower()


def strip_executable(html: str) -> str:
    """Remove ``<script>`` and ``<style>`` blocks from the raw markup."""
    return _STYLE_RE.sub("", _SCRIPT_RE.sub("", html))


def load_markup(html: str) -> BeautifulSoup:
    """Strip executable content and parse *html* into a tree."""
    return BeautifulSoup(strip_executable(html), "html.parser")


def is_junk(tag: Tag) -> bool:
    if tag.name in _PROTECTED_TAGS:
        return False
    if tag.name in JUNK_TAGS:
        return True
    return bool(_JUNK_RE.search(class_id_string(tag)))


def remove_junk(soup: BeautifulSoup) -> int:
    """Decompose every denylisted subtree in place and return how many went.

    Only the outermost match is counted; its descendants go with it.
    """
    removed = 0
    for tag in soup.find_all(True):
        # Descendants of an already-decomposed subtree are left detached.
        if tag.decomposed:
            continue
        if is_junk(tag):
            tag.decompose()
            removed += 1
    return removed
