"""
vnav - Verse Navigator core package

This package indexes a flat "Book Chapter:Verse" dataset and navigates it:
- config: Project configuration and versioning
- paths: Path management and directory setup
- util: Console output helpers
- reference: Reference grammar and book-name normalization
- index: Corpus indexer (CorpusIndex)
- navigator: Next/previous verse traversal
- search: Scoped keyword search
- session: Current position + change notifications
- loader: JSON dataset loading (file or URL)
- excel_import: CSV/XLSX verse-table import
- context: Chapter listings and verse windows
- state: Last-viewed position store
- display: Presenter payloads and font sizes
- report: PDF export
"""

from . import config
from .paths import PROJECT_ROOT, DATA_DIR, REPORTS_DIR, DATASET_PATH, STATE_PATH, dataset_source, ensure_basic_dirs
from .util import info, warn, ok, error, set_quiet
from .model import BookMeta, LocatedPassage, Passage, Position, RawEntry, Scope, SearchResult
from .reference import normalize_book_name, parse_reference
from .index import CorpusIndex, build_index
from .navigator import next_position, previous_position
from .search import search_passages, print_search_results
from .session import Session
from .loader import DataUnavailable, load_dataset, load_index

__version__ = config.__version__
__all__ = [
    "config",
    "PROJECT_ROOT",
    "DATA_DIR",
    "REPORTS_DIR",
    "DATASET_PATH",
    "STATE_PATH",
    "dataset_source",
    "ensure_basic_dirs",
    "info",
    "warn",
    "ok",
    "error",
    "set_quiet",
    "BookMeta",
    "LocatedPassage",
    "Passage",
    "Position",
    "RawEntry",
    "Scope",
    "SearchResult",
    "normalize_book_name",
    "parse_reference",
    "CorpusIndex",
    "build_index",
    "next_position",
    "previous_position",
    "search_passages",
    "print_search_results",
    "Session",
    "DataUnavailable",
    "load_dataset",
    "load_index",
]
