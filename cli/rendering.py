"""Utilities for rendering content blocks in the CLI."""

from __future__ import annotations

import textwrap
from typing import List

from backend.formatting.blocks import BulletList, CodeBlock, ContentBlock, Heading, Paragraph

_WIDTH = 88


def render_block(block: ContentBlock, width: int = _WIDTH) -> str:
    """Render one block as terminal text.

    Headings are underlined (``=`` for level 1, ``-`` below), bullets are
    hanging-indented and code is indented by four spaces, unwrapped.
    """
    if isinstance(block, Heading):
        rule = "=" if block.level == 1 else "-"
        return f"{block.text}\n{rule * min(len(block.text), width)}"
    if isinstance(block, BulletList):
        return "\n".join(
            textwrap.fill(item, width, initial_indent="  • ", subsequent_indent="    ")
            for item in block.items
        )
    if isinstance(block, CodeBlock):
        return textwrap.indent(block.text, "    ")
    if isinstance(block, Paragraph):
        return textwrap.fill(block.text, width)
    raise TypeError(f"Unknown block type: {type(block).__name__}")


def render_blocks(blocks: List[ContentBlock], width: int = _WIDTH) -> str:
    """Render *blocks* separated by blank lines."""
    return "\n\n".join(render_block(b, width) for b in blocks)
