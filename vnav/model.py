"""
Data model definitions for the Verse Navigator.

- RawEntry      : one record exactly as the flat dataset delivers it
- Position      : a (book, chapter, verse) location; book is a normalized key
- Passage       : the text + display reference stored at a Position
- BookMeta      : per-book display name, chapter list and verse counts
- LocatedPassage: a passage together with its location (search hits,
                  chapter listings, context windows)
- Scope         : how far a keyword search reaches
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Mapping, Tuple


@dataclass(frozen=True)
class RawEntry:
    """
    A passage as delivered by the external dataset.

    key is the dataset key ("Genesis 1:1"); reference may be empty when
    the source record has none.
    """
    key: str
    text: str
    reference: str = ""

    @classmethod
    def from_record(cls, key: str, record: dict) -> "RawEntry":
        """
        Construct from a dataset value of the form {"text": ..., "reference": ...}.
        """
        return cls(
            key=key,
            text=record.get("text") or "",
            reference=record.get("reference") or "",
        )


@dataclass(frozen=True, order=True)
class Position:
    """
    A location in the corpus.

    book   : normalized book key (e.g. 'song of solomon')
    chapter: 1..N
    verse  : 1..N

    Ordering on Position compares the book key alphabetically; use
    CorpusIndex.sort_key() for canonical corpus order.
    """
    book: str
    chapter: int
    verse: int

    def as_dict(self) -> Dict[str, object]:
        return {"book": self.book, "chapter": self.chapter, "verse": self.verse}


@dataclass(frozen=True)
class Passage:
    text: str
    reference: str


@dataclass(frozen=True)
class BookMeta:
    """
    Structural facts about one book, fixed once indexing completes.

    verse_counts maps chapter -> highest verse number seen in that chapter
    (read-only once built by build_index).
    """
    key: str
    display_name: str
    chapters: Tuple[int, ...]
    verse_counts: Mapping[int, int] = field(default_factory=dict)

    @property
    def first_chapter(self) -> int:
        return self.chapters[0]

    @property
    def last_chapter(self) -> int:
        return self.chapters[-1]


@dataclass(frozen=True)
class LocatedPassage:
    book: str
    chapter: int
    verse: int
    reference: str
    text: str

    @property
    def position(self) -> Position:
        return Position(self.book, self.chapter, self.verse)


class Scope(str, Enum):
    CORPUS = "corpus"
    BOOK = "book"
    CHAPTER = "chapter"

    @classmethod
    def parse(cls, value: str) -> "Scope":
        """
        Accept 'corpus', 'book', 'chapter' and the legacy UI name 'bible'.
        """
        value = (value or "").strip().lower()
        if value == "bible":
            return cls.CORPUS
        return cls(value)


# Search hits are located passages
SearchResult = LocatedPassage
