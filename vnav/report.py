"""
PDF export for the Verse Navigator.

- export_chapter_pdf(index, book, chapter, outfile)
    Verse-per-line chapter printout.
- export_search_pdf(results, query, outfile)
    One paragraph per search hit, in canonical order.

Both return the written path, or None when there was nothing to export.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional
from xml.sax.saxutils import escape

from reportlab.lib.pagesizes import LETTER
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer

from . import config
from .index import CorpusIndex
from .model import SearchResult
from .util import ok, warn


def _build_pdf(outfile: Path, title: str, lines: List[str]) -> Path:
    outfile = outfile.with_suffix(".pdf")
    outfile.parent.mkdir(parents=True, exist_ok=True)

    styles = getSampleStyleSheet()
    story = [Paragraph(escape(title), styles["Heading1"]), Spacer(1, 12)]
    for line in lines:
        story.append(Paragraph(line, styles["Normal"]))
        story.append(Spacer(1, 4))

    doc = SimpleDocTemplate(str(outfile), pagesize=LETTER, title=title, author=config.APP_NAME)
    doc.build(story)
    ok(f"PDF exported: {outfile}")
    return outfile


def export_chapter_pdf(
    index: CorpusIndex,
    book: str,
    chapter: int,
    outfile: Path,
) -> Optional[Path]:
    meta = index.meta(book)
    if meta is None:
        warn(f"Book not found: {book!r}")
        return None

    verses = index.chapter_verses(meta.key, chapter)
    if not verses:
        warn(f"Chapter not found: {meta.display_name} {chapter}")
        return None

    title = f"{meta.display_name} {chapter}"
    lines = [f"<b>{verse}</b> {escape(p.text)}" for verse, p in verses]
    return _build_pdf(outfile, title, lines)


def export_search_pdf(
    results: List[SearchResult],
    query: str,
    outfile: Path,
) -> Optional[Path]:
    if not results:
        warn("No search results; no PDF generated.")
        return None

    title = f'Search Results – "{query}" ({len(results)})'
    lines = [f"<b>{escape(r.reference)}</b> {escape(r.text)}" for r in results]
    return _build_pdf(outfile, title, lines)
