"""Error taxonomy for the extraction pipeline.

Every error the caller can see derives from :class:`ReaderError` and carries a
short, user-visible ``message`` plus an optional diagnostic ``detail``.
:class:`LinkResolutionError` is the exception: it is raised and swallowed
inside the link extractor and never reaches a caller.
"""

from __future__ import annotations


class ReaderError(Exception):
    """Base class for all user-visible extraction failures."""

    message = "Failed to fetch or process the URL."

    def __init__(self, message: str | None = None, detail: str | None = None) -> None:
        self.message = message or self.message
        self.detail = detail
        super().__init__(self.message if detail is None else f"{self.message} ({detail})")


class ValidationError(ReaderError):
    """The request address is missing, blank, or not an http(s) URL."""

    message = "URL is required"


class FetchError(ReaderError):
    """The fetch collaborator failed (network error or non-2xx status)."""

    message = "Failed to fetch the URL."

    def __init__(
        self,
        message: str | None = None,
        detail: str | None = None,
        status_code: int | None = None,
    ) -> None:
        self.status_code = status_code
        super().__init__(message, detail)


class ExtractionError(ReaderError):
    """The pipeline ran but isolated no substantive content."""

    message = "Could not extract any substantive content from the URL."


class BusyError(ReaderError):
    """Too many extractions are already in flight."""

    message = "Too many extractions in progress, try again later."


class LinkResolutionError(ValueError):
    """A single ``href`` could not be resolved to an absolute http(s) URL."""
