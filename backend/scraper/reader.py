"""Request-level orchestration of one extraction.

``read_url`` runs the full request for a single address:

    validate → admit → fetch → extract → (empty? fail) → match concepts
    → format blocks

Every request is independent; the only shared object is the admission
semaphore that bounds how many large documents are parsed at once.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Iterator
from urllib.parse import urlsplit

from backend.concepts import ConceptDictionary, configured_dictionary
from backend.config import settings
from backend.formatting.blocks import format_blocks
from backend.scraper.errors import BusyError, ExtractionError, ValidationError
from backend.scraper.extractor import extract_content
from backend.scraper.fetcher import fetch_url
from backend.scraper.models import ExtractionResult, RawPage

logger = logging.getLogger(__name__)

_admission_lock = threading.Lock()
_admission: threading.BoundedSemaphore | None = None
_admission_size = 0


def _semaphore() -> threading.BoundedSemaphore:
    """Return the admission semaphore, rebuilt if the configured size changed."""
    global _admission, _admission_size
    with _admission_lock:
        size = max(settings.max_concurrent_extractions, 1)
        if _admission is None or size != _admission_size:
            _admission = threading.BoundedSemaphore(size)
            _admission_size = size
        return _admission


@contextmanager
def admission_slot() -> Iterator[None]:
    """Hold one extraction slot for the duration of the block.

    Raises:
        BusyError: If no slot frees up within ``settings.admission_timeout``.
    """
    sem = _semaphore()
    if not sem.acquire(timeout=settings.admission_timeout):
        logger.warning(
            "Admission refused: %d extraction(s) already in flight",
            settings.max_concurrent_extractions,
        )
        raise BusyError()
    try:
        yield
    finally:
        sem.release()


def validate_url(url: str | None) -> str:
    """Return *url* stripped, or raise :class:`ValidationError`."""
    if url is None or not str(url).strip():
        raise ValidationError()
    url = str(url).strip()
    parts = urlsplit(url)
    if parts.scheme.lower() not in ("http", "https") or not parts.netloc:
        raise ValidationError("URL must be an absolute http(s) address", detail=url)
    return url


def _finish(
    raw: RawPage,
    dictionary: ConceptDictionary | None,
    strict: bool,
) -> ExtractionResult:
    clean = extract_content(raw, strict=strict)
    if not clean.text:
        logger.warning("No substantive content isolated from %s", raw.url)
        raise ExtractionError(detail=raw.url)

    concepts = (dictionary or configured_dictionary()).match(clean.text)
    return ExtractionResult(
        url=raw.url,
        title=clean.title,
        content=clean.text,
        related_links=clean.links,
        key_concepts=concepts,
        blocks=format_blocks(clean.text),
    )


def read_url(
    url: str | None,
    *,
    dictionary: ConceptDictionary | None = None,
    strict: bool = False,
) -> ExtractionResult:
    """Fetch *url* and run the whole extraction pipeline on it.

    Raises:
        ValidationError: *url* is missing, blank or not http(s).
        BusyError: The admission limit was reached.
        FetchError: The page could not be fetched.
        ExtractionError: The page yielded no content.
    """
    url = validate_url(url)
    with admission_slot():
        raw = fetch_url(url)
        result = _finish(raw, dictionary, strict)
    logger.info(
        "Extracted %s: %d chars, %d link(s), %d concept(s)",
        url, len(result.content), len(result.related_links), len(result.key_concepts),
    )
    return result


def read_html(
    html: str,
    base_url: str,
    *,
    dictionary: ConceptDictionary | None = None,
    strict: bool = False,
) -> ExtractionResult:
    """Run the pipeline on markup the caller already has (no fetch)."""
    raw = RawPage(url=base_url, html=html, status_code=200)
    with admission_slot():
        return _finish(raw, dictionary, strict)
