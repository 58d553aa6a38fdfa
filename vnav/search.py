"""
Keyword search for the Verse Navigator.

This module provides:

- search_passages(index, query, scope, book=None, chapter=None, limit=None)
    Case-insensitive substring search, scoped to the whole corpus, one
    book, or one chapter. Results come back in canonical corpus order
    (book order, then chapter, then verse), whatever order the dataset
    delivered them in.

- print_search_results(results)
    Pretty-print results to the console

There is no tokenization or ranking: "grace" matches "disgraceful".
"""

from __future__ import annotations

from typing import List, Optional, Union

from .index import CorpusIndex
from .model import Scope, SearchResult
from .reference import normalize_book_name
from .util import info, warn


def search_passages(
    index: CorpusIndex,
    query: str,
    scope: Union[Scope, str] = Scope.CORPUS,
    book: Optional[str] = None,
    chapter: Optional[int] = None,
    limit: Optional[int] = None,
) -> List[SearchResult]:
    """
    Search passage text for a substring.

    Parameters
    ----------
    index:
        The corpus to search.
    query:
        Text to look for. Empty or whitespace-only queries return [].
    scope:
        Scope.CORPUS, Scope.BOOK or Scope.CHAPTER (or their string names).
    book:
        Book name or key; required for the book and chapter scopes.
    chapter:
        Chapter number; required for the chapter scope.
    limit:
        Optional cap on the number of (already sorted) results.

    Returns
    -------
    List of SearchResult in canonical corpus order.
    """
    if not isinstance(scope, Scope):
        scope = Scope.parse(scope)

    query = query.strip() if query else ""
    if not query:
        warn("Empty search query; returning no results.")
        return []

    book_key = normalize_book_name(book) if book else None
    if scope in (Scope.BOOK, Scope.CHAPTER) and not book_key:
        warn(f"Search scope {scope.value!r} needs a book; returning no results.")
        return []
    if scope is Scope.CHAPTER and chapter is None:
        warn("Search scope 'chapter' needs a chapter number; returning no results.")
        return []

    info(f"=== SEARCH === query={query!r}, scope={scope.value}, book={book_key!r}, chapter={chapter!r}")

    needle = query.lower()
    hits = []
    for pos, text in index.iter_lowered():
        if needle not in text:
            continue
        if scope is not Scope.CORPUS and pos.book != book_key:
            continue
        if scope is Scope.CHAPTER and pos.chapter != chapter:
            continue
        hits.append(pos)

    hits.sort(key=index.sort_key)
    if limit is not None:
        hits = hits[:limit]

    results = [index.located(pos) for pos in hits]

    info(f"Search returned {len(results)} result(s).")
    return results


def print_search_results(results: List[SearchResult]) -> None:
    """
    Pretty-print search results to the console.
    """
    if not results:
        info("No results.")
        return

    for r in results:
        print(f"{r.reference}")
        print(f"    {r.text}")
        print()
