"""
Sequential traversal for the Verse Navigator.

Public API:

- next_position(index, pos)     -> Optional[Position]
- previous_position(index, pos) -> Optional[Position]

Both step one verse, crossing chapter and book boundaries using the
chapter lists and verse counts recorded by the indexer. They return None
at either end of the corpus, and also when the computed target has no
stored passage (a gap between the verse-count table and the sparse verse
map), so callers never receive a dangling position.
"""

from __future__ import annotations

from typing import Optional

from .index import CorpusIndex
from .model import Position


def _checked(index: CorpusIndex, pos: Position) -> Optional[Position]:
    return pos if index.contains(pos) else None


def next_position(index: CorpusIndex, pos: Position) -> Optional[Position]:
    meta = index.books.get(pos.book)
    if meta is None:
        return None

    verse = pos.verse + 1
    if verse <= meta.verse_counts.get(pos.chapter, 0):
        return _checked(index, Position(pos.book, pos.chapter, verse))

    if pos.chapter in meta.chapters:
        i = meta.chapters.index(pos.chapter)
        if i < len(meta.chapters) - 1:
            return _checked(index, Position(pos.book, meta.chapters[i + 1], 1))

    b = index.book_order.index(pos.book)
    if b == len(index.book_order) - 1:
        return None
    next_meta = index.books[index.book_order[b + 1]]
    return _checked(index, Position(next_meta.key, next_meta.first_chapter, 1))


def previous_position(index: CorpusIndex, pos: Position) -> Optional[Position]:
    meta = index.books.get(pos.book)
    if meta is None:
        return None

    verse = pos.verse - 1
    if verse >= 1:
        return _checked(index, Position(pos.book, pos.chapter, verse))

    if pos.chapter in meta.chapters:
        i = meta.chapters.index(pos.chapter)
        if i > 0:
            chapter = meta.chapters[i - 1]
            return _checked(index, Position(pos.book, chapter, meta.verse_counts[chapter]))

    b = index.book_order.index(pos.book)
    if b == 0:
        return None
    prev_meta = index.books[index.book_order[b - 1]]
    chapter = prev_meta.last_chapter
    return _checked(index, Position(prev_meta.key, chapter, prev_meta.verse_counts[chapter]))
