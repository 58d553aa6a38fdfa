"""
Corpus indexer for the Verse Navigator.

build_index() consumes the flat dataset mapping once and returns an
immutable CorpusIndex:

- book_order   : book keys in first-seen (dataset) order, never re-sorted
- books        : book key -> BookMeta (display name, chapters, verse counts)
- passages     : book key -> chapter -> verse -> Passage

Design:
- Keys that do not parse as "<book> <chapter>:<verse>" are skipped, not
  rejected; the dataset may carry non-verse records.
- A repeated (book, chapter, verse) overwrites the earlier entry.
- Two different raw book spellings that normalize to the same key are
  merged into one book, but the merge is recorded and reported.
- Lower-cased passage text is computed here once so search never has to
  case-fold the corpus per query.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Set, Tuple, Union

from .model import BookMeta, LocatedPassage, Passage, Position, RawEntry
from .reference import (
    capitalize_words,
    format_reference,
    normalize_book_name,
    parse_reference,
    split_reference,
    strip_verse_suffix,
)
from .util import info, warn


PassageTree = Dict[str, Dict[int, Dict[int, Passage]]]


class CorpusIndex:
    """
    Read-only view over an indexed corpus. Obtain one from build_index().
    """

    def __init__(
        self,
        passages: PassageTree,
        books: Dict[str, BookMeta],
        book_order: List[str],
        lowered: Dict[Position, str],
        skipped_keys: int = 0,
        merged_names: Optional[Dict[str, Tuple[str, ...]]] = None,
    ) -> None:
        self._passages = passages
        self._books = MappingProxyType(dict(books))
        self._book_order = tuple(book_order)
        self._book_rank = {key: i for i, key in enumerate(self._book_order)}
        self._lowered = lowered
        self._skipped_keys = skipped_keys
        self._merged_names = MappingProxyType(dict(merged_names or {}))

    # --- structure ---

    @property
    def book_order(self) -> Tuple[str, ...]:
        return self._book_order

    @property
    def books(self) -> Mapping[str, BookMeta]:
        return self._books

    @property
    def passage_count(self) -> int:
        return len(self._lowered)

    @property
    def skipped_keys(self) -> int:
        """Number of dataset entries ignored because their key did not parse."""
        return self._skipped_keys

    @property
    def merged_names(self) -> Mapping[str, Tuple[str, ...]]:
        """Book key -> the distinct raw spellings that were merged into it."""
        return self._merged_names

    def meta(self, book: str) -> Optional[BookMeta]:
        return self._books.get(normalize_book_name(book))

    def book_index(self, book: str) -> Optional[int]:
        """Position of a book in canonical order, or None if unknown."""
        return self._book_rank.get(normalize_book_name(book))

    def sort_key(self, pos: Position) -> Tuple[int, int, int]:
        """Canonical corpus order: book order, then chapter, then verse."""
        return self._book_rank.get(pos.book, len(self._book_order)), pos.chapter, pos.verse

    # --- lookup ---

    def get(self, book: str, chapter: int, verse: int) -> Optional[Passage]:
        chapters = self._passages.get(normalize_book_name(book))
        if chapters is None:
            return None
        verses = chapters.get(chapter)
        if verses is None:
            return None
        return verses.get(verse)

    def passage_at(self, pos: Position) -> Optional[Passage]:
        return self.get(pos.book, pos.chapter, pos.verse)

    def located(self, pos: Position) -> Optional[LocatedPassage]:
        passage = self.passage_at(pos)
        if passage is None:
            return None
        return LocatedPassage(pos.book, pos.chapter, pos.verse, passage.reference, passage.text)

    def contains(self, pos: Position) -> bool:
        return self.passage_at(pos) is not None

    def resolve(self, reference: str) -> Optional[Position]:
        """
        Parse a reference and return its Position if a passage is stored there.
        """
        parsed = parse_reference(reference)
        if parsed is None:
            return None
        pos = Position(*parsed)
        return pos if self.contains(pos) else None

    def lookup(self, reference: str) -> Optional[Passage]:
        pos = self.resolve(reference)
        return None if pos is None else self.passage_at(pos)

    def chapter_verses(self, book: str, chapter: int) -> List[Tuple[int, Passage]]:
        """
        All (verse_number, Passage) pairs in a chapter, ascending by verse.
        """
        verses = self._passages.get(normalize_book_name(book), {}).get(chapter)
        if not verses:
            return []
        return sorted(verses.items())

    # --- iteration ---

    def iter_positions(self) -> Iterator[Position]:
        """Every stored Position in canonical corpus order."""
        for book in self._book_order:
            for chapter in self._books[book].chapters:
                for verse in sorted(self._passages[book][chapter]):
                    yield Position(book, chapter, verse)

    def iter_lowered(self) -> Iterator[Tuple[Position, str]]:
        """(Position, lower-cased text) pairs in dataset order."""
        return iter(self._lowered.items())

    def first_position(self) -> Optional[Position]:
        if not self._book_order:
            return None
        book = self._book_order[0]
        chapter = self._books[book].first_chapter
        return Position(book, chapter, min(self._passages[book][chapter]))

    def last_position(self) -> Optional[Position]:
        if not self._book_order:
            return None
        book = self._book_order[-1]
        chapter = self._books[book].last_chapter
        return Position(book, chapter, max(self._passages[book][chapter]))


RawValue = Union[RawEntry, Mapping]


def _to_raw_entry(key: str, value: RawValue) -> Optional[RawEntry]:
    if isinstance(value, RawEntry):
        entry = value
    elif isinstance(value, Mapping):
        entry = RawEntry.from_record(key, value)
    else:
        return None
    if not isinstance(entry.text, str) or not isinstance(entry.reference, str):
        return None
    return entry


def build_index(entries: Mapping[str, RawValue]) -> CorpusIndex:
    """
    Build the structured index from the flat dataset mapping.

    Parameters
    ----------
    entries:
        Map of dataset key ("Genesis 1:1") -> RawEntry or a plain
        {"text": ..., "reference": ...} dict. Iterated in delivery order.

    Returns
    -------
    CorpusIndex
    """
    info(f"=== BUILD INDEX === entries={len(entries)}")

    passages: PassageTree = {}
    book_order: List[str] = []
    display_names: Dict[str, str] = {}
    chapter_sets: Dict[str, Set[int]] = {}
    verse_counts: Dict[str, Dict[int, int]] = {}
    lowered: Dict[Position, str] = {}
    raw_names: Dict[str, List[str]] = {}
    skipped = 0

    for key, value in entries.items():
        parts = split_reference(key) if isinstance(key, str) else None
        entry = _to_raw_entry(key, value)
        if parts is None or entry is None:
            skipped += 1
            continue

        raw_book, chapter, verse = parts
        book = normalize_book_name(raw_book)

        if book not in display_names:
            book_order.append(book)
            display_names[book] = strip_verse_suffix(entry.reference) or capitalize_words(raw_book)
            passages[book] = {}
            chapter_sets[book] = set()
            verse_counts[book] = {}
            raw_names[book] = [raw_book]
        elif raw_book not in raw_names[book]:
            raw_names[book].append(raw_book)
            warn(
                f"Book name {raw_book!r} normalizes to {book!r}, already seen as "
                f"{raw_names[book][0]!r}; merging into one book."
            )

        pos = Position(book, chapter, verse)
        if pos in lowered:
            warn(f"Duplicate entry for {key!r}; later entry replaces the earlier one.")

        passages[book].setdefault(chapter, {})[verse] = Passage(
            text=entry.text,
            reference=entry.reference or format_reference(display_names[book], chapter, verse),
        )
        lowered[pos] = entry.text.lower()

        chapter_sets[book].add(chapter)
        if verse > verse_counts[book].get(chapter, 0):
            verse_counts[book][chapter] = verse

    books = {
        book: BookMeta(
            key=book,
            display_name=display_names[book],
            chapters=tuple(sorted(chapter_sets[book])),
            verse_counts=MappingProxyType(verse_counts[book]),
        )
        for book in book_order
    }
    merged = {book: tuple(names) for book, names in raw_names.items() if len(names) > 1}

    info(
        f"Indexed {len(lowered)} passage(s) across {len(book_order)} book(s); "
        f"skipped {skipped} entr{'y' if skipped == 1 else 'ies'}."
    )
    return CorpusIndex(
        passages=passages,
        books=books,
        book_order=book_order,
        lowered=lowered,
        skipped_keys=skipped,
        merged_names=merged,
    )
