"""
Display helpers for the Verse Navigator.

The navigator core only produces {reference, text} pairs. This module
shapes them for the two consumers: the main reading view and a presenter
screen that mirrors it in a larger font.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

from . import config
from .index import CorpusIndex
from .model import Passage

NO_SELECTION = Passage(
    text="Select a book, chapter, and verse, or search for a reference or keyword.",
    reference="No verse selected",
)


def display_passage(passage: Optional[Passage]) -> Passage:
    """The passage to show, or the 'no verse selected' placeholder."""
    return passage if passage is not None else NO_SELECTION


@dataclass
class FontSizes:
    """
    Font sizes for the centre view and the presenter screen.

    Growing caps each size (centre at 32px, presenter at 80px); shrinking
    has no floor beyond 1px.
    """
    center_px: int = config.CENTER_FONT_SIZE_PX
    presenter_px: int = config.PRESENTER_FONT_SIZE_PX

    def grow(self) -> None:
        self.center_px = min(config.CENTER_FONT_MAX_PX, self.center_px + 1)
        self.presenter_px = min(config.PRESENTER_FONT_MAX_PX, self.presenter_px + 2)

    def shrink(self) -> None:
        self.center_px = max(1, self.center_px - 1)
        self.presenter_px = max(1, self.presenter_px - 2)


def presenter_payload(passage: Optional[Passage], sizes: FontSizes) -> Dict[str, str]:
    """
    Build the 'verseUpdate' message a presenter screen consumes.
    """
    shown = display_passage(passage)
    return {
        "type": "verseUpdate",
        "reference": shown.reference,
        "text": shown.text,
        "size": f"{sizes.presenter_px}px",
    }


def search_suggestions(index: CorpusIndex) -> List[str]:
    """
    Autocomplete candidates for the search box: every book's display
    name in book order, then a few example queries.
    """
    names = [index.books[key].display_name for key in index.book_order]
    return names + list(config.SEARCH_SUGGESTIONS)
