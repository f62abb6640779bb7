"""Formatting package: rendered text to typed content blocks."""

from backend.formatting.blocks import (
    BulletList,
    CodeBlock,
    ContentBlock,
    Heading,
    Paragraph,
    format_blocks,
    get_page,
    page_count,
    paginate,
)

__all__ = [
    "BulletList",
    "CodeBlock",
    "ContentBlock",
    "Heading",
    "Paragraph",
    "format_blocks",
    "get_page",
    "page_count",
    "paginate",
]
