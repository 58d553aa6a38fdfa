"""
Reading session for the Verse Navigator.

A Session pairs an immutable CorpusIndex with the one piece of mutable
state a reader has: the current Position. Each session is independent,
so several can share one index.

Listeners registered with subscribe() are called with (position, passage)
after every successful move, and with (None, None) when the selection is
cleared. Failed moves leave the position alone and notify nobody.
"""

from __future__ import annotations

from typing import Callable, List, Mapping, Optional, Tuple

from .index import CorpusIndex
from .model import Passage, Position, Scope, SearchResult
from .navigator import next_position, previous_position
from .reference import normalize_book_name, parse_reference
from .search import search_passages
from .util import warn

Listener = Callable[[Optional[Position], Optional[Passage]], None]


class Session:

    def __init__(self, index: CorpusIndex, position: Optional[Position] = None) -> None:
        if position is not None and not index.contains(position):
            raise ValueError(f"Start position {position} is not in the index")
        self._index = index
        self._position = position
        self._listeners: List[Listener] = []

    @property
    def index(self) -> CorpusIndex:
        return self._index

    @property
    def position(self) -> Optional[Position]:
        return self._position

    def current_passage(self) -> Optional[Passage]:
        """The passage at the current position, or None if nothing is selected."""
        if self._position is None:
            return None
        return self._index.passage_at(self._position)

    # --- observers ---

    def subscribe(self, listener: Listener) -> Listener:
        self._listeners.append(listener)
        return listener

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self) -> None:
        passage = self.current_passage()
        for listener in list(self._listeners):
            listener(self._position, passage)

    # --- movement ---

    def go_to_position(self, pos: Position) -> bool:
        if not self._index.contains(pos):
            return False
        self._position = pos
        self._notify()
        return True

    def go_to(self, book: str, chapter: int, verse: int) -> bool:
        return self.go_to_position(Position(normalize_book_name(book), chapter, verse))

    def go_to_reference(self, reference: str) -> bool:
        """
        Jump to a typed reference such as 'john 3:16'.

        Returns False (with a warning) if the string does not parse or the
        passage is not in the index.
        """
        parsed = parse_reference(reference)
        if parsed is None:
            warn(f'Could not parse reference {reference!r}. Try "John 3:16".')
            return False
        if not self.go_to(*parsed):
            warn(f"Reference not found: {reference!r}")
            return False
        return True

    def select_chapter(self, book: str, chapter: int) -> bool:
        """
        Open a chapter at verse 1. Fails if the chapter has no verse 1.
        """
        return self.go_to(book, chapter, 1)

    def next(self) -> bool:
        if self._position is None:
            return False
        target = next_position(self._index, self._position)
        return target is not None and self.go_to_position(target)

    def previous(self) -> bool:
        if self._position is None:
            return False
        target = previous_position(self._index, self._position)
        return target is not None and self.go_to_position(target)

    def clear(self) -> None:
        self._position = None
        self._notify()

    # --- queries relative to the current position ---

    def chapter_verses(self) -> List[Tuple[int, Passage]]:
        if self._position is None:
            return []
        return self._index.chapter_verses(self._position.book, self._position.chapter)

    def search(self, query: str, scope: Scope = Scope.CORPUS) -> List[SearchResult]:
        """
        Search with 'book' and 'chapter' scopes taken from the current position.
        """
        pos = self._position
        return search_passages(
            self._index,
            query,
            scope,
            book=pos.book if pos else None,
            chapter=pos.chapter if pos else None,
        )

    # --- persistence ---

    def snapshot(self) -> Optional[dict]:
        return None if self._position is None else self._position.as_dict()

    def restore(self, data: Optional[Mapping]) -> bool:
        """
        Accept a saved {book, chapter, verse} triple only if it resolves to a
        stored passage in this index.
        """
        if not data:
            return False
        try:
            pos = Position(
                normalize_book_name(str(data["book"])),
                int(data["chapter"]),
                int(data["verse"]),
            )
        except (KeyError, TypeError, ValueError):
            warn(f"Ignoring malformed saved location: {data!r}")
            return False
        if not self.go_to_position(pos):
            warn(f"Saved location {pos.as_dict()} is not in the current dataset; ignoring.")
            return False
        return True
