"""Extraction endpoints.

Routes
------
POST /extract         Body: {"url": "https://..."}                    → read_url
POST /extract/blocks  Body: {"url": "...", "page": 1, "page_size": 20} → paged blocks

Errors raised by the pipeline are translated to JSON responses by the
handlers registered in :func:`backend.api.app.create_app`.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel, Field

from backend.config import settings
from backend.formatting.blocks import get_page, page_count
from backend.scraper.reader import read_url

router = APIRouter()


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class ExtractRequest(BaseModel):
    url: str = Field(..., min_length=1)
    strict: bool = False


class BlocksRequest(ExtractRequest):
    page: int = Field(1, ge=1)
    page_size: int | None = Field(None, ge=1, le=500)


class LinkOut(BaseModel):
    title: str
    url: str


class ConceptOut(BaseModel):
    overview: str
    explanation: str
    example: str
    mistakes: str


class ExtractResponse(BaseModel):
    content: str
    keyConcepts: list[ConceptOut]
    relatedLinks: list[LinkOut]
    title: str


class BlocksResponse(BaseModel):
    url: str
    title: str
    page: int
    page_size: int
    total_pages: int
    blocks: list[dict[str, Any]]


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post("", response_model=ExtractResponse)
def extract_endpoint(body: ExtractRequest) -> dict[str, Any]:
    """Fetch a page and return its article text, related links and concepts."""
    result = read_url(body.url, strict=body.strict)
    return result.to_response()


@router.post("/blocks", response_model=BlocksResponse)
def extract_blocks_endpoint(body: BlocksRequest) -> dict[str, Any]:
    """Fetch a page and return one page of its formatted content blocks."""
    result = read_url(body.url, strict=body.strict)
    size = body.page_size or settings.blocks_page_size
    return {
        "url": result.url,
        "title": result.title,
        "page": body.page,
        "page_size": size,
        "total_pages": page_count(result.blocks, size),
        "blocks": [b.to_dict() for b in get_page(result.blocks, body.page, size)],
    }
