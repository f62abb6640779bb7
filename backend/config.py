"""Centralised settings for the Clean Reader backend.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (two levels up from this file)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() in _TRUTHY


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Fetcher
    # ------------------------------------------------------------------
    user_agent: str = field(
        default_factory=lambda: os.environ.get(
            "READER_USER_AGENT",
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36",
        )
    )
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("REQUEST_TIMEOUT", "30.0"))
    )

    # ------------------------------------------------------------------
    # Admission control
    # ------------------------------------------------------------------
    max_concurrent_extractions: int = field(
        default_factory=lambda: int(os.environ.get("MAX_CONCURRENT_EXTRACTIONS", "8"))
    )
    admission_timeout: float = field(
        default_factory=lambda: float(os.environ.get("ADMISSION_TIMEOUT", "10.0"))
    )

    # ------------------------------------------------------------------
    # Related links
    # ------------------------------------------------------------------
    max_related_links: int = field(
        default_factory=lambda: int(os.environ.get("MAX_RELATED_LINKS", "5"))
    )
    link_min_title_length: int = field(
        default_factory=lambda: int(os.environ.get("LINK_MIN_TITLE_LENGTH", "5"))
    )
    strict_link_min_title_length: int = field(
        default_factory=lambda: int(os.environ.get("STRICT_LINK_MIN_TITLE_LENGTH", "10"))
    )

    # ------------------------------------------------------------------
    # Rendering / presentation
    # ------------------------------------------------------------------
    structural_markers: bool = field(
        default_factory=lambda: _env_flag("STRUCTURAL_MARKERS", "false")
    )
    blocks_page_size: int = field(
        default_factory=lambda: int(os.environ.get("BLOCKS_PAGE_SIZE", "20"))
    )

    # ------------------------------------------------------------------
    # Concept dictionary
    # ------------------------------------------------------------------
    concepts_path: Path | None = field(
        default_factory=lambda: (
            Path(os.environ["CONCEPTS_PATH"]) if os.environ.get("CONCEPTS_PATH") else None
        )
    )

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------
    expose_error_details: bool = field(
        default_factory=lambda: _env_flag("EXPOSE_ERROR_DETAILS", "true")
    )
    log_level: str = field(
        default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO").upper()
    )

    def min_title_length(self, strict: bool = False) -> int:
        """Minimum anchor-title length for the given strictness mode."""
        return self.strict_link_min_title_length if strict else self.link_min_title_length


def configure_logging() -> None:
    """Apply ``settings.log_level`` to the root logger (idempotent)."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# Module-level singleton (import this everywhere):
#   from backend.config import settings
settings = Settings()
