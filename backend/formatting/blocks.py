"""Block formatter: rendered plain text back into typed content blocks.

A single forward scan over the lines, driven by a three-state machine::

    DEFAULT  --"* x" / "- x"-->  IN_LIST
    DEFAULT  --"```"---------->  IN_CODE
    IN_LIST  --"```"---------->  IN_CODE   (list flushed first)
    IN_LIST  --blank/heading/text--> DEFAULT (list flushed)
    IN_CODE  --"```"---------->  DEFAULT   (code block emitted)

Lines inside a code segment are never interpreted.  The output is a pure
function of the input text.
"""

from __future__ import annotations

import enum
import re
from dataclasses import asdict, dataclass
from typing import Any, List, Union

FENCE = "```"
MAX_HEADING_LEVEL = 3

_HEADING_RE = re.compile(r"^(#+)\s+(.*)$")
_BULLET_PREFIXES = ("* ", "- ")


@dataclass(frozen=True)
class Heading:
    level: int
    text: str
    kind = "heading"

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.kind, **asdict(self)}


@dataclass(frozen=True)
class Paragraph:
    text: str
    kind = "paragraph"

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.kind, **asdict(self)}


@dataclass(frozen=True)
class BulletList:
    items: tuple[str, ...]
    kind = "bullet_list"

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.kind, "items": list(self.items)}


@dataclass(frozen=True)
class CodeBlock:
    text: str
    kind = "code"

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.kind, **asdict(self)}


ContentBlock = Union[Heading, Paragraph, BulletList, CodeBlock]


class FormatterState(enum.Enum):
    DEFAULT = "default"
    IN_LIST = "in_list"
    IN_CODE = "in_code"


class _BlockBuilder:
    """Holds the open state of one scan; see the module docstring."""

    def __init__(self) -> None:
        self.state = FormatterState.DEFAULT
        self.blocks: List[ContentBlock] = []
        self._items: List[str] = []
        self._code: List[str] = []

    # -- transitions -------------------------------------------------------

    def flush_list(self) -> None:
        if self.state is FormatterState.IN_LIST:
            self.blocks.append(BulletList(items=tuple(self._items)))
            self._items = []
            self.state = FormatterState.DEFAULT

    def toggle_code(self) -> None:
        if self.state is FormatterState.IN_CODE:
            self.close_code()
        else:
            self.flush_list()
            self.state = FormatterState.IN_CODE

    def close_code(self) -> None:
        self.blocks.append(CodeBlock(text="".join(self._code).strip()))
        self._code = []
        self.state = FormatterState.DEFAULT

    # -- line handling -----------------------------------------------------

    def feed(self, raw_line: str) -> None:
        if raw_line.lstrip().startswith(FENCE):
            self.toggle_code()
            return

        if self.state is FormatterState.IN_CODE:
            self._code.append(raw_line + "\n")
            return

        line = raw_line.strip()
        if not line:
            self.flush_list()
            return

        heading = _HEADING_RE.match(line)
        if heading:
            self.flush_list()
            level = min(len(heading.group(1)), MAX_HEADING_LEVEL)
            self.blocks.append(Heading(level=level, text=heading.group(2).strip()))
            return

        if line.startswith(_BULLET_PREFIXES):
            self._items.append(line[2:].strip())
            self.state = FormatterState.IN_LIST
            return

        self.flush_list()
        self.blocks.append(Paragraph(text=line))

    def finish(self) -> List[ContentBlock]:
        self.flush_list()
        if self.state is FormatterState.IN_CODE:
            # An unterminated fence still keeps its text.
            self.close_code()
        return self.blocks


def format_blocks(text: str) -> List[ContentBlock]:
    """Parse *text* into an ordered list of :data:`ContentBlock`.

    Example::

        >>> format_blocks("# Title\\n\\nSome text\\n\\n* a\\n* b")
        [Heading(level=1, text='Title'), Paragraph(text='Some text'), BulletList(items=('a', 'b'))]
    """
    builder = _BlockBuilder()
    for raw_line in text.splitlines():
        builder.feed(raw_line)
    return builder.finish()


# ---------------------------------------------------------------------------
# Pagination
# ---------------------------------------------------------------------------

def paginate(blocks: List[ContentBlock], page_size: int) -> List[List[ContentBlock]]:
    """Slice *blocks* into consecutive pages of at most *page_size* blocks."""
    if page_size < 1:
        raise ValueError("page_size must be at least 1")
    return [blocks[i : i + page_size] for i in range(0, len(blocks), page_size)]


def page_count(blocks: List[ContentBlock], page_size: int) -> int:
    return len(paginate(blocks, page_size))


def get_page(blocks: List[ContentBlock], page: int, page_size: int) -> List[ContentBlock]:
    """Return the 1-based *page* of *blocks*; out-of-range pages are empty."""
    if page < 1:
        raise ValueError("page must be at least 1")
    pages = paginate(blocks, page_size)
    return pages[page - 1] if page <= len(pages) else []
