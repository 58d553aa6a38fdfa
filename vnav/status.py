"""
Status and health-report helpers for the Verse Navigator.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Tuple

from .index import CorpusIndex
from .state import load_last_location
from .util import info, warn


def get_book_stats(index: CorpusIndex) -> List[Tuple[str, int, int]]:
    """
    Return (display_name, chapter_count, passage_count) per book, in book order.
    """
    stats = []
    for key in index.book_order:
        meta = index.books[key]
        verses = sum(len(index.chapter_verses(key, ch)) for ch in meta.chapters)
        stats.append((meta.display_name, len(meta.chapters), verses))
    return stats


def print_books(index: CorpusIndex) -> None:
    for name, chapters, verses in get_book_stats(index):
        print(f"  - {name}: {chapters} chapter(s), {verses} verse(s)")


def print_status(index: CorpusIndex, source: str, state_path: Path) -> None:
    """
    Print a human-readable status report:

    - Dataset source
    - Book / passage counts, skipped keys and merged book names
    - Last saved position (if any)
    """
    info(f"Dataset: {source}")
    info(f"Books: {len(index.book_order)}, passages: {index.passage_count}")

    if index.skipped_keys:
        warn(f"{index.skipped_keys} dataset entr{'y' if index.skipped_keys == 1 else 'ies'} "
             f"skipped (key not '<book> <chapter>:<verse>').")

    for key, names in index.merged_names.items():
        warn(f"Book {key!r} merged from spellings: {', '.join(repr(n) for n in names)}")

    saved = load_last_location(state_path)
    if saved is None:
        info("Last location: (none saved)")
    else:
        info(f"Last location: {saved['book']} {saved.get('chapter')}:{saved.get('verse')}")
