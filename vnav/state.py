"""
Last-viewed position store for the Verse Navigator.

The position is kept as a small JSON file:

    {"book": "john", "chapter": 3, "verse": 16}

Loading never validates against a dataset; hand the result to
Session.restore(), which does.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from .model import Position
from .util import warn


def save_last_location(path: Path, position: Optional[Position]) -> None:
    """
    Write the position (or nulls, when nothing is selected) to path.
    """
    data = position.as_dict() if position else {"book": None, "chapter": None, "verse": None}
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data) + "\n", encoding="utf-8")


def load_last_location(path: Path) -> Optional[dict]:
    """
    Read a saved position. Returns None if the file is missing or unreadable.
    """
    if not path.exists():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        warn(f"Could not restore last location from {path}: {e}")
        return None
    if not isinstance(data, dict) or not data.get("book"):
        return None
    return data
