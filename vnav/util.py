"""
Console output helpers for the Verse Navigator.

Every module reports through these instead of printing directly, so
library callers can silence the chatter with set_quiet(True).
"""

import sys

_quiet = False


def set_quiet(quiet: bool = True) -> None:
    """Suppress [info]/[ok]/[warn] lines (errors are always printed)."""
    global _quiet
    _quiet = quiet


def info(msg: str) -> None:
    """Print an info message."""
    if not _quiet:
        print(f"[info] {msg}")


def warn(msg: str) -> None:
    """Print a warning message."""
    if not _quiet:
        print(f"[warn] {msg}")


def ok(msg: str) -> None:
    """Print a success message."""
    if not _quiet:
        print(f"[ok] {msg}")


def error(msg: str) -> None:
    """Print an error message to stderr."""
    print(f"[error] {msg}", file=sys.stderr)
