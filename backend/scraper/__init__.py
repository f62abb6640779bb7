"""Scraper package: web fetch, article isolation and text rendering."""

from backend.scraper.errors import (
    BusyError,
    ExtractionError,
    FetchError,
    ReaderError,
    ValidationError,
)
from backend.scraper.extractor import extract_content
from backend.scraper.fetcher import fetch_url
from backend.scraper.models import CleanPage, ExtractionResult, Link, RawPage
from backend.scraper.reader import read_html, read_url

__all__ = [
    "fetch_url",
    "extract_content",
    "read_url",
    "read_html",
    "RawPage",
    "CleanPage",
    "Link",
    "ExtractionResult",
    "ReaderError",
    "ValidationError",
    "FetchError",
    "ExtractionError",
    "BusyError",
]
