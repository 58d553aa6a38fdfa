"""
Dataset loading for the Verse Navigator.

This module:
- Reads the flat JSON dataset ({"Genesis 1:1": {"text": ..., "reference": ...}})
  from a local file or an http(s) URL.
- Builds the CorpusIndex from it in one step.
- Writes a flat dataset back out (used by the CSV/XLSX importer).

A dataset is either loaded in full or not at all: any IO, HTTP or JSON
problem raises DataUnavailable and nothing is indexed.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import requests

from . import config
from .index import CorpusIndex, build_index
from .paths import dataset_source
from .util import info, ok


class DataUnavailable(RuntimeError):
    """The dataset could not be loaded; no query can be served."""


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def _fetch_json(url: str) -> Any:
    info(f"Fetching dataset from: {url}")
    try:
        resp = requests.get(url, timeout=config.HTTP_TIMEOUT_SECONDS)
        resp.raise_for_status()
        return resp.json()
    except requests.RequestException as e:
        raise DataUnavailable(f"Failed to fetch dataset from {url}: {e}") from e
    except ValueError as e:
        raise DataUnavailable(f"Dataset at {url} is not valid JSON: {e}") from e


def _read_json(path: Path) -> Any:
    path = path.resolve()
    if not path.exists():
        raise DataUnavailable(f"Dataset file not found: {path}")

    info(f"Reading dataset from: {path}")
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        raise DataUnavailable(f"Could not read dataset {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise DataUnavailable(f"Dataset {path} is not valid JSON: {e}") from e


def load_dataset(source: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Load the flat dataset mapping.

    Parameters
    ----------
    source:
        File path or http(s) URL. Defaults to $VNAV_DATASET, then
        data/kjv1611.json.

    Returns
    -------
    dict:
        Map of dataset key -> {"text": str, "reference": str}

    Raises
    ------
    DataUnavailable
        If the source is missing, unreachable, not JSON, or not a JSON object.
    """
    if source is None:
        source = dataset_source()

    if isinstance(source, str) and _is_url(source):
        data = _fetch_json(source)
    else:
        data = _read_json(Path(source))

    if not isinstance(data, dict):
        raise DataUnavailable(
            f"Dataset must be a JSON object keyed by reference, got {type(data).__name__}"
        )

    info(f"Loaded {len(data)} dataset entries.")
    return data


def load_index(source: Optional[Union[str, Path]] = None) -> CorpusIndex:
    """
    Load the dataset and build its index.
    """
    return build_index(load_dataset(source))


def write_dataset(entries: Mapping[str, Mapping[str, str]], output_path: Path) -> None:
    """
    Write a flat dataset mapping as JSON (UTF-8, key order preserved).
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(
        json.dumps(entries, ensure_ascii=False, indent=2) + "\n",
        encoding="utf-8",
    )
    ok(f"Wrote {len(entries)} entries to {output_path}")
