"""
Path configuration for the Verse Navigator project.
"""

import os
from pathlib import Path

from . import config

# Project root is one level up from vnav/
PROJECT_ROOT = Path(__file__).parent.parent
DATA_DIR = PROJECT_ROOT / "data"
REPORTS_DIR = PROJECT_ROOT / "reports"
DATASET_PATH = DATA_DIR / config.DATASET_FILENAME
STATE_PATH = DATA_DIR / config.STATE_FILENAME


def ensure_basic_dirs() -> None:
    """
    Ensure essential directories exist:
    - data/
    - reports/
    """
    DATA_DIR.mkdir(parents=True, exist_ok=True)
    REPORTS_DIR.mkdir(parents=True, exist_ok=True)


def dataset_source() -> str:
    """
    Return the dataset location: $VNAV_DATASET if set, else data/kjv1611.json.
    """
    return os.environ.get(config.DATASET_ENV_VAR) or str(DATASET_PATH)
