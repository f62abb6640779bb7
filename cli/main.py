"""Clean Reader CLI: entry-point for extraction from the terminal.

Usage:
    python cli/main.py --help

Commands:
    extract   → isolate the article of a URL or local HTML file
    blocks    → show the formatted content blocks, one page at a time
    concepts  → look up dictionary concepts in a piece of text
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from backend.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any working
# directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from typing import Optional

import typer

from backend.concepts import configured_dictionary
from backend.config import configure_logging, settings
from backend.formatting.blocks import get_page, page_count
from backend.scraper.errors import ReaderError
from backend.scraper.models import ExtractionResult
from backend.scraper.reader import read_html, read_url
from cli.rendering import render_blocks

app = typer.Typer(
    name="reader",
    help="Clean Reader CLI.",
    no_args_is_help=True,
)


@app.callback()
def main() -> None:
    """Isolate article content from web pages."""
    configure_logging()


def _run(
    tag: str,
    url: Optional[str],
    file: Optional[Path],
    base_url: Optional[str],
    strict: bool,
) -> ExtractionResult:
    """Run the pipeline on *url* or *file*; exit 1 on any pipeline error."""
    if (url is None) == (file is None):
        typer.echo(f"[{tag}] Pass exactly one of --url or --file.")
        raise typer.Exit(1)

    try:
        if file is not None:
            typer.echo(f"[{tag}] Reading {str(file)!r} …")
            html = file.read_text(encoding="utf-8", errors="replace")
            return read_html(html, base_url or file.resolve().as_uri(), strict=strict)
        typer.echo(f"[{tag}] Fetching {url!r} …")
        return read_url(url, strict=strict)
    except ReaderError as exc:
        typer.echo(f"[{tag}] Error: {exc.message}")
        if exc.detail:
            typer.echo(f"[{tag}]        {exc.detail}")
        raise typer.Exit(1)


# ---------------------------------------------------------------------------
# extract
# ---------------------------------------------------------------------------
@app.command("extract")
def extract(
    url: Optional[str] = typer.Option(None, help="URL to extract."),
    file: Optional[Path] = typer.Option(None, exists=True, dir_okay=False, help="Local HTML file."),
    base_url: Optional[str] = typer.Option(None, help="Base URL for links when using --file."),
    strict: bool = typer.Option(False, help="Require longer anchor titles for related links."),
) -> None:
    """Extract a page and print its clean text, related links and concepts."""
    result = _run("extract", url, file, base_url, strict)

    typer.echo(f"[extract] Title    : {result.title or '(none)'}")
    typer.echo(f"[extract] Words    : {len(result.content.split())}")
    typer.echo(f"[extract] Links    : {len(result.related_links)}")
    for link in result.related_links:
        typer.echo(f"  - {link.title}  <{link.url}>")
    typer.echo(f"[extract] Concepts : {len(result.key_concepts)}")
    for concept in result.key_concepts:
        typer.echo(f"  * {concept.overview}")
    typer.echo("")
    typer.echo(result.content)


# ---------------------------------------------------------------------------
# blocks
# ---------------------------------------------------------------------------
@app.command("blocks")
def blocks(
    url: Optional[str] = typer.Option(None, help="URL to extract."),
    file: Optional[Path] = typer.Option(None, exists=True, dir_okay=False, help="Local HTML file."),
    base_url: Optional[str] = typer.Option(None, help="Base URL for links when using --file."),
    page: int = typer.Option(1, min=1, help="Page number (1-based)."),
    page_size: Optional[int] = typer.Option(None, min=1, help="Blocks per page."),
) -> None:
    """Print one page of the formatted content blocks."""
    result = _run("blocks", url, file, base_url, strict=False)
    size = page_size or settings.blocks_page_size
    total = page_count(result.blocks, size)

    typer.echo(f"[blocks] Page {page}/{total}  ({len(result.blocks)} block(s))")
    typer.echo("")
    typer.echo(render_blocks(get_page(result.blocks, page, size)))


# ---------------------------------------------------------------------------
# concepts
# ---------------------------------------------------------------------------
@app.command("concepts")
def concepts(
    text: str = typer.Argument(..., help="Text to scan for known terms."),
) -> None:
    """List the dictionary concepts mentioned in TEXT."""
    dictionary = configured_dictionary()
    matched = dictionary.match(text)
    if not matched:
        typer.echo("[concepts] No known concepts found.")
        return
    for term in dictionary:
        record = dictionary[term]
        if record in matched:
            typer.echo(f"  {term}: {record.overview}")


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
