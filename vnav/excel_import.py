"""
CSV and Excel import for the Verse Navigator.

This module:
- Opens .xlsx files via openpyxl or .csv files via the csv module.
- Detects the header row and which columns hold book/chapter/verse/text
  (and optionally a display reference).
- Yields TableVerseRow objects, and converts them into the flat dataset
  mapping the indexer consumes ({"Genesis 1:1": {"text": ..., "reference": ...}}).
"""

from __future__ import annotations

import csv
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Sequence

from openpyxl import load_workbook

from .reference import format_reference
from .util import info, warn


@dataclass
class TableVerseRow:
    book: str
    chapter: int
    verse: int
    text: str
    reference: str      # "" when the table has no reference column
    raw_row_index: int  # for diagnostics

    @property
    def key(self) -> str:
        return format_reference(self.book, self.chapter, self.verse)


HEADER_CANDIDATES: Dict[str, List[str]] = {
    "book": ["book", "bookname", "bk"],
    "chapter": ["chapter", "chap", "ch"],
    "verse": ["verse", "versenum", "vs", "v"],
    "text": ["text", "versetext", "content", "body"],
}

OPTIONAL_HEADERS: Dict[str, List[str]] = {
    "reference": ["reference", "ref", "citation"],
}


def _normalize_header(value: object) -> str:
    if value is None:
        return ""
    return str(value).strip().lower().replace(" ", "").replace("-", "").replace("_", "")


def _find_column(norm_headers: List[str], candidates: List[str]) -> Optional[int]:
    for i, norm in enumerate(norm_headers):
        if norm in candidates:
            return i
    return None


def _detect_column_mapping(headers: Sequence[object]) -> Optional[Dict[str, int]]:
    """
    Work out which column index holds book/chapter/verse/text (and
    reference, when present). Returns None if a required column is missing.
    """
    norm_headers = [_normalize_header(h) for h in headers]
    mapping: Dict[str, int] = {}

    for logical_name, candidates in HEADER_CANDIDATES.items():
        idx = _find_column(norm_headers, candidates)
        if idx is None:
            warn(f"Could not detect column for '{logical_name}'. Headers were: {list(headers)}")
            return None
        mapping[logical_name] = idx

    for logical_name, candidates in OPTIONAL_HEADERS.items():
        idx = _find_column(norm_headers, candidates)
        if idx is not None:
            mapping[logical_name] = idx

    return mapping


def _iter_table_rows(
    rows: Iterator[Sequence[object]],
    max_rows: Optional[int],
) -> Iterator[TableVerseRow]:
    """
    Shared row handling for CSV and Excel: header detection, then one
    TableVerseRow per usable data row. Unusable rows are skipped with a warning.
    """
    try:
        headers = list(next(rows))
    except StopIteration:
        warn("Table is empty.")
        return

    info(f"Detected header row: {headers}")
    mapping = _detect_column_mapping(headers)
    if mapping is None:
        warn("Failed to detect required columns; aborting import.")
        return

    count = 0
    for row_idx, row in enumerate(rows, start=2):  # 1-based, +1 for header
        if max_rows is not None and count >= max_rows:
            info(f"Stopping after max_rows={max_rows} rows.")
            break

        row = list(row)
        if len(row) < max(mapping.values()) + 1:
            # Trailing empty cells may be dropped by the reader
            row.extend([None] * (max(mapping.values()) + 1 - len(row)))

        book_raw = row[mapping["book"]]
        chapter_raw = row[mapping["chapter"]]
        verse_raw = row[mapping["verse"]]
        text_raw = row[mapping["text"]]

        if book_raw in (None, "") or chapter_raw in (None, "") or verse_raw in (None, ""):
            warn(f"Row {row_idx}: missing book/chapter/verse; skipping.")
            continue

        text_str = "" if text_raw is None else str(text_raw).strip()
        if not text_str:
            warn(f"Row {row_idx}: empty verse text; skipping.")
            continue

        try:
            chapter_int = int(chapter_raw)
            verse_int = int(verse_raw)
        except (TypeError, ValueError):
            warn(f"Row {row_idx}: non-integer chapter/verse; skipping. "
                 f"chapter={chapter_raw!r}, verse={verse_raw!r}")
            continue

        if chapter_int < 1 or verse_int < 1:
            warn(f"Row {row_idx}: chapter/verse must be positive; skipping.")
            continue

        book_str = str(book_raw).strip()
        if not book_str:
            warn(f"Row {row_idx}: empty book value; skipping.")
            continue

        ref_raw = row[mapping["reference"]] if "reference" in mapping else None

        yield TableVerseRow(
            book=book_str,
            chapter=chapter_int,
            verse=verse_int,
            text=text_str,
            reference="" if ref_raw is None else str(ref_raw).strip(),
            raw_row_index=row_idx,
        )
        count += 1


def _iter_from_csv(csv_path: Path, max_rows: Optional[int]) -> Iterator[TableVerseRow]:
    info(f"Opening CSV file: {csv_path}")
    with open(csv_path, "r", encoding="utf-8", newline="") as f:
        yield from _iter_table_rows(csv.reader(f), max_rows)


def _iter_from_xlsx(
    excel_path: Path,
    sheet_name: Optional[str],
    max_rows: Optional[int],
) -> Iterator[TableVerseRow]:
    info(f"Opening Excel file: {excel_path}")
    wb = load_workbook(filename=str(excel_path), read_only=True, data_only=True)
    try:
        if sheet_name is None:
            ws = wb.active
            info(f"Using active sheet: {ws.title!r}")
        else:
            if sheet_name not in wb.sheetnames:
                raise ValueError(
                    f"Sheet {sheet_name!r} not found. Available: {wb.sheetnames}"
                )
            ws = wb[sheet_name]
            info(f"Using sheet: {ws.title!r}")

        yield from _iter_table_rows(ws.iter_rows(values_only=True), max_rows)
    finally:
        wb.close()


def iter_verses_from_table(
    path: Path,
    sheet_name: Optional[str] = None,
    max_rows: Optional[int] = None,
) -> Iterator[TableVerseRow]:
    """
    Yield TableVerseRow objects from an Excel (.xlsx/.xlsm) or CSV (.csv) file.

    Parameters
    ----------
    path:
        Path to the Excel or CSV file.
    sheet_name:
        Optional worksheet name (Excel only). If None, the active sheet is used.
    max_rows:
        Optional limit on number of data rows yielded.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    ValueError
        If the extension is unsupported or the named sheet is missing.
    """
    path = path.resolve()
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    suffix = path.suffix.lower()
    if suffix == ".csv":
        yield from _iter_from_csv(path, max_rows)
    elif suffix in (".xlsx", ".xlsm"):
        yield from _iter_from_xlsx(path, sheet_name, max_rows)
    else:
        raise ValueError(f"Unsupported file format: {suffix}. Expected .csv, .xlsx or .xlsm")


def rows_to_dataset(rows: Iterable[TableVerseRow]) -> Dict[str, Dict[str, str]]:
    """
    Convert table rows into the flat dataset mapping, keeping row order.
    Rows without a reference column get "<Book> <chapter>:<verse>".
    """
    dataset: Dict[str, Dict[str, str]] = {}
    for r in rows:
        dataset[r.key] = {"text": r.text, "reference": r.reference or r.key}
    return dataset
