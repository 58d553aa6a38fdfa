"""
Project configuration and versioning for the Verse Navigator.
"""

APP_NAME = "Verse Navigator"
__version__ = "0.3.0"

# Flat dataset: { "Genesis 1:1": {"text": ..., "reference": ...}, ... }
DATASET_FILENAME = "kjv1611.json"
STATE_FILENAME = "last_location.json"

# Environment variable that overrides the dataset path (file or http(s) URL)
DATASET_ENV_VAR = "VNAV_DATASET"

HTTP_TIMEOUT_SECONDS = 30

# Font sizes: the centre display steps by 1px, the presenter by 2px
CENTER_FONT_SIZE_PX = 50
PRESENTER_FONT_SIZE_PX = 70
CENTER_FONT_MAX_PX = 32
PRESENTER_FONT_MAX_PX = 80

SEARCH_SUGGESTIONS = ["John 3:16", "Psalm 23:1", "love", "faith", "grace"]
