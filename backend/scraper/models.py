"""Data models for the scraper pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, List

if TYPE_CHECKING:
    from backend.concepts import ConceptRecord
    from backend.formatting.blocks import ContentBlock


@dataclass
class RawPage:
    """The raw HTTP response for a single URL fetch."""

    url: str
    html: str
    status_code: int


@dataclass(frozen=True)
class Link:
    """A related outbound link found inside the content root."""

    title: str
    url: str

    def to_dict(self) -> dict[str, str]:
        return {"title": self.title, "url": self.url}


@dataclass
class CleanPage:
    """Cleaned, readable content extracted from a :class:`RawPage`."""

    url: str
    title: str
    text: str
    links: List[Link] = field(default_factory=list)


@dataclass
class ExtractionResult:
    """Everything one extraction request produces."""

    url: str
    title: str
    content: str
    related_links: List[Link] = field(default_factory=list)
    key_concepts: List["ConceptRecord"] = field(default_factory=list)
    blocks: List["ContentBlock"] = field(default_factory=list)

    def to_response(self) -> dict[str, Any]:
        """Serialise to the public response shape (camelCase keys)."""
        return {
            "content": self.content,
            "keyConcepts": [c.to_dict() for c in self.key_concepts],
            "relatedLinks": [lnk.to_dict() for lnk in self.related_links],
            "title": self.title,
        }
