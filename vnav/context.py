"""
Context engine for the Verse Navigator.

Provides chapter listings and verse windows around a reference like
"John 3:16", so you can see the verses before and after a location.

Public API:

- get_chapter(index, book, chapter) -> List[LocatedPassage]
- get_verse_window(index, ref, before=2, after=2) -> List[LocatedPassage]
- print_passages(rows, current=None)
"""

from __future__ import annotations

from typing import List, Optional

from .index import CorpusIndex
from .model import LocatedPassage, Position
from .reference import normalize_book_name, parse_reference
from .util import info, warn


def get_chapter(index: CorpusIndex, book: str, chapter: int) -> List[LocatedPassage]:
    """
    Every verse of a chapter, ascending by verse number.
    """
    key = normalize_book_name(book)
    rows = [
        LocatedPassage(key, chapter, verse, p.reference, p.text)
        for verse, p in index.chapter_verses(key, chapter)
    ]
    if not rows:
        warn(f"No verses found for {book!r} chapter {chapter}.")
    return rows


def get_verse_window(
    index: CorpusIndex,
    ref: str,
    before: int = 2,
    after: int = 2,
) -> List[LocatedPassage]:
    """
    Fetch a window of verses around a reference, within its chapter.

    Example:
        get_verse_window(index, "John 3:16", before=2, after=2)
    """
    info(f"=== CONTEXT WINDOW === ref={ref!r}, before={before}, after={after}")

    parsed = parse_reference(ref)
    if parsed is None:
        warn(f"Could not parse reference: {ref!r}")
        return []

    book, chapter, center_verse = parsed
    if index.meta(book) is None:
        warn(f"Unknown book in reference: {ref!r}")
        return []

    v_start = max(1, center_verse - before)
    v_end = center_verse + after

    rows = [
        LocatedPassage(book, chapter, verse, p.reference, p.text)
        for verse, p in index.chapter_verses(book, chapter)
        if v_start <= verse <= v_end
    ]
    info(f"Context window returned {len(rows)} verse(s).")
    return rows


def print_passages(rows: List[LocatedPassage], current: Optional[Position] = None) -> None:
    """
    Print verse-per-line, marking the current position with '>'.
    """
    if not rows:
        info("No verses.")
        return

    for r in rows:
        marker = ">" if current is not None and r.position == current else " "
        print(f"{marker} {r.verse:>3}  {r.text}")
