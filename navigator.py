#!/usr/bin/env python
"""
navigator.py – unified CLI for the Verse Navigator

Commands:

  python navigator.py lookup "John 3:16"
      Print a single passage (book names are case/space-insensitive)

  python navigator.py next "Genesis 50:26"
  python navigator.py prev "Exodus 1:1"
      Print the neighbouring passage, crossing chapter and book boundaries

  python navigator.py search "love" --scope book --book John
      Case-insensitive substring search (scope: corpus, book, chapter)

  python navigator.py chapter Psalms 23
  python navigator.py context "John 3:16" --before 2 --after 2
      Chapter listing / verse window

  python navigator.py goto "John 3:16"
  python navigator.py step next
      Move the saved "last viewed" position

  python navigator.py import-table verses.xlsx data/kjv1611.json
      Convert a CSV/XLSX verse table into the JSON dataset format

  python navigator.py export-pdf John 3 [reports/john_3]
      Chapter PDF (written under reports/ when no path is given)
"""

import argparse
import json
import re
import sys
from pathlib import Path
from typing import Optional

from vnav import config, paths
from vnav.context import get_chapter, get_verse_window, print_passages
from vnav.display import FontSizes, display_passage, presenter_payload, search_suggestions
from vnav.excel_import import iter_verses_from_table, rows_to_dataset
from vnav.index import CorpusIndex
from vnav.loader import DataUnavailable, load_index, write_dataset
from vnav.model import Passage, Scope
from vnav.navigator import next_position, previous_position
from vnav.paths import STATE_PATH, dataset_source
from vnav.report import export_chapter_pdf, export_search_pdf
from vnav.search import print_search_results, search_passages
from vnav.session import Session
from vnav.state import load_last_location, save_last_location
from vnav.status import print_books, print_status
from vnav.util import error, info, warn


# ---------- Helpers ----------


def _load(args: argparse.Namespace) -> CorpusIndex:
    return load_index(args.dataset or dataset_source())


def _open_session(args: argparse.Namespace) -> Session:
    """
    Build a session over the dataset, restored to the saved position if it
    still resolves.
    """
    session = Session(_load(args))
    session.restore(load_last_location(Path(args.state)))
    return session


def _print_passage(passage: Optional[Passage]) -> None:
    shown = display_passage(passage)
    print(shown.reference)
    print(f"    {shown.text}")


def _report_path(output: Optional[str], stem: str) -> Path:
    """
    Explicit output path, or reports/<stem>.pdf when none was given.
    """
    if output:
        return Path(output)
    paths.ensure_basic_dirs()
    slug = re.sub(r"[^a-z0-9]+", "_", stem.lower()).strip("_") or "report"
    return paths.REPORTS_DIR / f"{slug}.pdf"


def _step_from(index: CorpusIndex, ref: str, forward: bool) -> int:
    pos = index.resolve(ref)
    if pos is None:
        warn(f"Reference not found: {ref!r}")
        return 1

    target = next_position(index, pos) if forward else previous_position(index, pos)
    if target is None:
        info("No further passage in that direction.")
        return 1
    _print_passage(index.passage_at(target))
    return 0


# ---------- Command handlers ----------


def cmd_lookup(args: argparse.Namespace) -> int:
    """
    Print a passage by reference.
    """
    index = _load(args)
    passage = index.lookup(args.ref)
    if passage is None:
        warn(f'Could not find reference {args.ref!r}. Try "John 3:16".')
        return 1
    _print_passage(passage)
    return 0


def cmd_next(args: argparse.Namespace) -> int:
    return _step_from(_load(args), args.ref, forward=True)


def cmd_prev(args: argparse.Namespace) -> int:
    return _step_from(_load(args), args.ref, forward=False)


def cmd_search(args: argparse.Namespace) -> int:
    """
    Keyword search. Book/chapter scopes fall back to the saved position.
    """
    session = _open_session(args)
    scope = Scope.parse(args.scope)
    book = args.book
    chapter = args.chapter

    if scope is not Scope.CORPUS and session.position is not None:
        if book is None:
            book = session.position.book
        if chapter is None:
            chapter = session.position.chapter

    results = search_passages(
        session.index,
        args.query,
        scope,
        book=book,
        chapter=chapter,
        limit=args.limit,
    )
    print_search_results(results)
    info(f'{len(results)} result(s) for "{args.query}"')
    return 0


def cmd_chapter(args: argparse.Namespace) -> int:
    session = _open_session(args)
    rows = get_chapter(session.index, args.book, args.chapter)
    print_passages(rows, current=session.position)
    return 0 if rows else 1


def cmd_context(args: argparse.Namespace) -> int:
    index = _load(args)
    rows = get_verse_window(index, args.ref, before=args.before, after=args.after)
    print_passages(rows, current=index.resolve(args.ref))
    return 0 if rows else 1


def cmd_books(args: argparse.Namespace) -> int:
    print_books(_load(args))
    return 0


def cmd_status(args: argparse.Namespace) -> int:
    source = args.dataset or dataset_source()
    print_status(load_index(source), source, Path(args.state))
    return 0


def cmd_goto(args: argparse.Namespace) -> int:
    """
    Move the saved position to a reference.
    """
    session = _open_session(args)
    session.subscribe(lambda pos, passage: save_last_location(Path(args.state), pos))
    if not session.go_to_reference(args.ref):
        return 1
    _print_passage(session.current_passage())
    return 0


def cmd_step(args: argparse.Namespace) -> int:
    """
    Move the saved position one verse forward or back.
    """
    session = _open_session(args)
    if session.position is None:
        warn("No saved position; use 'goto' first.")
        return 1

    session.subscribe(lambda pos, passage: save_last_location(Path(args.state), pos))
    moved = session.next() if args.direction == "next" else session.previous()
    if not moved:
        info("No further passage in that direction.")
        return 1
    _print_passage(session.current_passage())
    return 0


def cmd_suggest(args: argparse.Namespace) -> int:
    for s in search_suggestions(_load(args)):
        print(s)
    return 0


def cmd_present(args: argparse.Namespace) -> int:
    """
    Print the presenter payload for the saved position as JSON.
    """
    session = _open_session(args)
    sizes = FontSizes()
    for _ in range(args.grow):
        sizes.grow()
    for _ in range(args.shrink):
        sizes.shrink()
    print(json.dumps(presenter_payload(session.current_passage(), sizes), ensure_ascii=False))
    return 0


def cmd_import_table(args: argparse.Namespace) -> int:
    """
    Convert a CSV/XLSX verse table into the flat JSON dataset.
    """
    info("=== IMPORT TABLE ===")
    rows = list(
        iter_verses_from_table(Path(args.table), sheet_name=args.sheet, max_rows=args.max_rows)
    )
    if not rows:
        warn("No usable verse rows found; nothing written.")
        return 1

    write_dataset(rows_to_dataset(rows), Path(args.output))
    return 0


def cmd_export_pdf(args: argparse.Namespace) -> int:
    index = _load(args)
    out = export_chapter_pdf(
        index, args.book, args.chapter, _report_path(args.output, f"{args.book} {args.chapter}")
    )
    return 0 if out else 1


def cmd_export_search_pdf(args: argparse.Namespace) -> int:
    index = _load(args)
    results = search_passages(index, args.query, Scope.parse(args.scope), book=args.book, chapter=args.chapter)
    out = export_search_pdf(results, args.query, _report_path(args.output, f"search {args.query}"))
    return 0 if out else 1


# ---------- Parser setup ----------


def _add_scope_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--scope",
        choices=["corpus", "bible", "book", "chapter"],
        default="corpus",
        help="Search scope (default: corpus)",
    )
    p.add_argument("--book", type=str, default=None, help="Book for the book/chapter scopes")
    p.add_argument("--chapter", type=int, default=None, help="Chapter for the chapter scope")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="navigator",
        description=f"{config.APP_NAME} CLI (v{config.__version__})",
    )
    parser.add_argument(
        "--dataset",
        type=str,
        default=None,
        help=f"Dataset JSON path or URL (default: ${config.DATASET_ENV_VAR} or data/{config.DATASET_FILENAME})",
    )
    parser.add_argument(
        "--state",
        type=str,
        default=str(STATE_PATH),
        help="Last-location file (default: data/last_location.json)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # lookup
    p = sub.add_parser("lookup", help="Print a passage by reference (e.g. 'John 3:16')")
    p.add_argument("ref", type=str, help="Reference string")
    p.set_defaults(func=cmd_lookup)

    # next / prev
    p = sub.add_parser("next", help="Print the passage after a reference")
    p.add_argument("ref", type=str, help="Reference string")
    p.set_defaults(func=cmd_next)

    p = sub.add_parser("prev", help="Print the passage before a reference")
    p.add_argument("ref", type=str, help="Reference string")
    p.set_defaults(func=cmd_prev)

    # search
    p = sub.add_parser("search", help="Search passages for a text phrase")
    p.add_argument("query", type=str, help="Search text")
    _add_scope_args(p)
    p.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Maximum number of passages to print (default: all)",
    )
    p.set_defaults(func=cmd_search)

    # chapter
    p = sub.add_parser("chapter", help="List every verse in a chapter")
    p.add_argument("book", type=str, help="Book name, e.g. 'Psalms'")
    p.add_argument("chapter", type=int, help="Chapter number")
    p.set_defaults(func=cmd_chapter)

    # context
    p = sub.add_parser("context", help="Window of verses around a reference")
    p.add_argument("ref", type=str, help="Central reference, e.g. 'John 3:16'")
    p.add_argument("--before", type=int, default=2, help="Verses before the center (default: 2)")
    p.add_argument("--after", type=int, default=2, help="Verses after the center (default: 2)")
    p.set_defaults(func=cmd_context)

    # books / status
    p = sub.add_parser("books", help="List books with chapter and verse counts")
    p.set_defaults(func=cmd_books)

    p = sub.add_parser("status", help="Print a dataset and position status report")
    p.set_defaults(func=cmd_status)

    # goto / step / present
    p = sub.add_parser("goto", help="Move the saved position to a reference")
    p.add_argument("ref", type=str, help="Reference string")
    p.set_defaults(func=cmd_goto)

    p = sub.add_parser("step", help="Move the saved position one verse")
    p.add_argument("direction", choices=["next", "prev"])
    p.set_defaults(func=cmd_step)

    p = sub.add_parser("present", help="Print the presenter payload for the saved position")
    p.add_argument("--grow", type=int, default=0, help="Font size steps up")
    p.add_argument("--shrink", type=int, default=0, help="Font size steps down")
    p.set_defaults(func=cmd_present)

    p = sub.add_parser("suggest", help="List search-box suggestions (book names and examples)")
    p.set_defaults(func=cmd_suggest)

    # import-table
    p = sub.add_parser("import-table", help="Convert a CSV/XLSX verse table into dataset JSON")
    p.add_argument("table", type=str, help="Path to the .csv/.xlsx file")
    p.add_argument("output", type=str, help="Output JSON path")
    p.add_argument("--sheet", type=str, default=None, help="Worksheet name (default: active sheet)")
    p.add_argument("--max-rows", type=int, default=None, help="Maximum number of data rows to import")
    p.set_defaults(func=cmd_import_table)

    # export-pdf / export-search-pdf
    p = sub.add_parser("export-pdf", help="Export a verse-per-line chapter PDF")
    p.add_argument("book", type=str, help="Book name")
    p.add_argument("chapter", type=int, help="Chapter number")
    p.add_argument("output", type=str, nargs="?", default=None, help="Output PDF path (default: reports/)")
    p.set_defaults(func=cmd_export_pdf)

    p = sub.add_parser("export-search-pdf", help="Export search results as a PDF")
    p.add_argument("query", type=str, help="Search text")
    p.add_argument("output", type=str, nargs="?", default=None, help="Output PDF path (default: reports/)")
    _add_scope_args(p)
    p.set_defaults(func=cmd_export_search_pdf)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return args.func(args)
    except DataUnavailable as e:
        error(f"Data unavailable: {e}")
        return 2
    except (FileNotFoundError, ValueError) as e:
        error(str(e))
        return 2


if __name__ == "__main__":
    sys.exit(main())
