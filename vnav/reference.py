"""
Reference grammar for the Verse Navigator.

A reference is "<book name> <chapter>:<verse>", e.g. "John 3:16" or
"1 Corinthians 13:4". The chapter:verse pair is anchored to the end of the
string, so the book name is everything before the last "<digits>:<digits>"
and may itself contain spaces and numerals.

The same compiled pattern parses dataset keys during indexing and free
text typed by a user, so the two can never disagree.
"""

from __future__ import annotations

import re
from typing import Optional, Tuple

REFERENCE_RE = re.compile(r"^\s*(?P<book>.+?)\s+(?P<chapter>\d+):(?P<verse>\d+)\s*$")

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_book_name(name: str) -> str:
    """
    Turn a raw book name into its book key: trimmed, lower-cased, with
    internal whitespace runs collapsed to a single space.
    """
    return _WHITESPACE_RE.sub(" ", name.strip().lower())


def capitalize_words(name: str) -> str:
    """'song  of SOLOMON' -> 'Song Of Solomon'"""
    return " ".join(w[0].upper() + w[1:].lower() for w in name.split())


def format_reference(display_name: str, chapter: int, verse: int) -> str:
    return f"{display_name} {chapter}:{verse}"


def split_reference(text: str) -> Optional[Tuple[str, int, int]]:
    """
    Split a reference into (raw_book_name, chapter, verse) without
    normalizing the book name.

    Returns None if the string does not match the grammar or if the
    chapter or verse is zero.
    """
    if not text or not text.strip():
        return None

    m = REFERENCE_RE.match(text)
    if m is None:
        return None

    chapter = int(m.group("chapter"))
    verse = int(m.group("verse"))
    if chapter < 1 or verse < 1:
        return None

    return m.group("book").strip(), chapter, verse


def parse_reference(text: str) -> Optional[Tuple[str, int, int]]:
    """
    Parse a reference string into (book_key, chapter, verse).

    Parameters
    ----------
    text:
        Reference such as 'John 3:16', '  song of   solomon 2:1 ' or a
        dataset key.

    Returns
    -------
    (book_key, chapter, verse) or None when the string is empty, does not
    match the grammar, or names chapter/verse 0.
    """
    parts = split_reference(text)
    if parts is None:
        return None
    book, chapter, verse = parts
    return normalize_book_name(book), chapter, verse


def strip_verse_suffix(reference: str) -> Optional[str]:
    """
    Return the book part of a display reference ('1 John 3:16' -> '1 John'),
    or None if the reference carries no trailing chapter:verse.
    """
    parts = split_reference(reference)
    if parts is None:
        return None
    return parts[0]
