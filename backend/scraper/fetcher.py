"""HTTP fetcher: the only network-facing step of the pipeline."""

from __future__ import annotations

import logging

import httpx

from backend.config import settings
from backend.scraper.errors import FetchError
from backend.scraper.models import RawPage

logger = logging.getLogger(__name__)


def _default_headers() -> dict[str, str]:
    return {"User-Agent": settings.user_agent}


def fetch_url(url: str) -> RawPage:
    """Fetch *url* and return a :class:`RawPage`.

    Uses ``httpx`` with ``settings.request_timeout`` and follows redirects.
    There is no retry policy: any failure is terminal for the request.

    Raises:
        FetchError: On a 4xx/5xx status (``status_code`` set) or on any
            transport-level failure (timeout, DNS, connection reset, ...).
    """
    try:
        with httpx.Client(
            headers=_default_headers(),
            timeout=settings.request_timeout,
            follow_redirects=True,
        ) as client:
            response = client.get(url)
            response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        status = exc.response.status_code
        logger.warning("Fetch of %s returned HTTP %s", url, status)
        raise FetchError(
            detail=f"HTTP {status} from {url}", status_code=status
        ) from exc
    except httpx.HTTPError as exc:
        logger.warning("Fetch of %s failed: %r", url, exc)
        raise FetchError(detail=f"{type(exc).__name__}: {exc}") from exc

    return RawPage(url=url, html=response.text, status_code=response.status_code)
