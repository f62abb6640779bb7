"""Local link-density pruning of lists inside the content root."""

from __future__ import annotations

from bs4 import Tag

from backend.scraper.scoring import LINK_DENSITY_THRESHOLD, anchor_text_length


def list_link_density(tag: Tag) -> float:
    """Anchor-text fraction of *tag*; an element with no text has density 0."""
    total = len(tag.get_text())
    if total == 0:
        return 0.0
    return anchor_text_length(tag) / total


def prune_link_lists(root: Tag) -> int:
    """Remove every ``ul``/``ol`` under *root* that is mostly links.

    A "related topics" list or an in-page table of contents can survive the
    structural denylist; this pass catches it by content instead of naming.
    Returns the number of lists removed.
    """
    removed = 0
    for lst in root.find_all(["ul", "ol"]):
        if lst.decomposed:
            continue
        if list_link_density(lst) > LINK_DENSITY_THRESHOLD:
            lst.decompose()
            removed += 1
    return removed
