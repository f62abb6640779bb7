"""Related-link extraction, confined to the content root."""

from __future__ import annotations

from typing import List
from urllib.parse import urljoin, urlsplit

from bs4 import Tag

from backend.scraper.errors import LinkResolutionError
from backend.scraper.models import Link

_ALLOWED_SCHEMES = {"http", "https"}


def resolve_url(href: str, base_url: str) -> str:
    """Resolve *href* against *base_url*.

    Raises:
        LinkResolutionError: If the result is malformed or not http(s).
    """
    try:
        absolute = urljoin(base_url, href.strip())
        parts = urlsplit(absolute)
        # Accessing .port validates it; a bad port raises ValueError.
        parts.port
    except ValueError as exc:
        raise LinkResolutionError(f"Cannot resolve {href!r}: {exc}") from exc

    if parts.scheme.lower() not in _ALLOWED_SCHEMES or not parts.netloc:
        raise LinkResolutionError(f"Unsupported URL {absolute!r}")
    return absolute


def _anchor_title(anchor: Tag) -> str:
    return " ".join(anchor.get_text().split())


def extract_links(
    root: Tag,
    base_url: str,
    *,
    max_links: int = 5,
    min_title_length: int = 5,
) -> List[Link]:
    """Return up to *max_links* related links found under *root*.

    An anchor qualifies when it has an ``href`` that is not a bare fragment,
    its trimmed text is longer than *min_title_length*, and the address
    resolves to an absolute http(s) URL.  Anchors that fail to resolve are
    dropped silently.  Links are unique by ``(title, url)`` and kept in
    document order.
    """
    seen: set[tuple[str, str]] = set()
    links: List[Link] = []

    for anchor in root.find_all("a"):
        if len(links) >= max_links:
            break
        href = (anchor.get("href") or "").strip()
        if not href or href.startswith("#"):
            continue
        title = _anchor_title(anchor)
        if len(title) <= min_title_length:
            continue
        try:
            url = resolve_url(href, base_url)
        except LinkResolutionError:
            continue
        key = (title, url)
        if key in seen:
            continue
        seen.add(key)
        links.append(Link(title=title, url=url))

    return links
