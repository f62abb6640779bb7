"""Plain-text rendering of the content root.

Block-level elements are followed by a blank line and ``<br>`` becomes a
single newline, then whitespace is normalised.  The walk never mutates the
tree, so rendering the same root twice yields the same text.
"""

from __future__ import annotations

import re
from typing import List, Tuple

from bs4 import NavigableString, PageElement, Tag
from bs4.element import PreformattedString

BLOCK_TAGS = frozenset({"h1", "h2", "h3", "h4", "p", "li", "pre", "div", "tr", "blockquote"})

_HEADING_MARKERS = {"h1": "# ", "h2": "## ", "h3": "### ", "h4": "### "}
_FENCE = "```"

_HSPACE_RE = re.compile(r"[ \t]+")
_BLANK_RUN_RE = re.compile(r"(\n\s*){3,}")


def normalize_whitespace(text: str) -> str:
    """Collapse horizontal runs to one space and 3+ newlines to two; trim."""
    text = _HSPACE_RE.sub(" ", text)
    text = _BLANK_RUN_RE.sub("\n\n", text)
    return text.strip()


def _walk(root: PageElement, out: List[str], markers: bool) -> None:
    # Explicit stack of (node, leaving) pairs: legacy pages with thousands of
    # unclosed inline tags nest deeper than the interpreter's recursion limit.
    stack: List[Tuple[PageElement, bool]] = [(root, False)]
    while stack:
        node, leaving = stack.pop()

        if leaving:
            name = node.name
            if markers and name == "pre":
                out.append(f"\n{_FENCE}")
            if markers and name in ("ul", "ol"):
                out.append("\n\n")
            if name in BLOCK_TAGS:
                out.append("\n\n")
            continue

        if isinstance(node, NavigableString):
            # Comments, doctypes, CDATA and processing instructions are not text.
            if not isinstance(node, PreformattedString):
                out.append(str(node))
            continue
        if not isinstance(node, Tag):
            continue

        name = node.name
        if name == "br":
            out.append("\n")
            continue

        children = list(node.children)
        if markers:
            if name in _HEADING_MARKERS:
                # Heading text must sit on the marker line.
                out.append("\n\n" + _HEADING_MARKERS[name] + " ".join(node.get_text().split()) + "\n\n")
                continue
            if name in ("ul", "ol"):
                # Items of one list stay on consecutive lines.
                out.append("\n\n")
                children = [
                    c for c in children
                    if not (isinstance(c, NavigableString) and not c.strip())
                ]
            elif name == "li":
                # Nested lists are folded into their parent item.
                out.append("* " + " ".join(node.get_text().split()) + "\n")
                continue
            elif name == "pre":
                out.append(f"\n\n{_FENCE}\n")

        stack.append((node, True))
        stack.extend((child, False) for child in reversed(children))


def render_text(root: Tag, *, structural_markers: bool = False) -> str:
    """Flatten *root* to normalised plain text.

    With *structural_markers* the text also carries the light markup the
    block formatter understands: ``#`` heading prefixes, ``* `` list items
    and fenced ``<pre>`` sections.
    """
    out: List[str] = []
    _walk(root, out, structural_markers)
    return normalize_whitespace("".join(out))
