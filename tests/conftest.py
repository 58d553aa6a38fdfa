# tests/conftest.py
# Shared fixtures: a small realistic dataset (with gaps, a non-verse record
# and out-of-order keys) and a small gap-free dataset for traversal laws.

import json

import pytest

from vnav.index import build_index
from vnav.util import set_quiet

SAMPLE_DATASET = {
    "Genesis 1:1": {
        "text": "In the beginning God created the heaven and the earth.",
        "reference": "Genesis 1:1",
    },
    "Genesis 1:2": {
        "text": "And the earth was without form, and void; and darkness was upon the face of the deep.",
        "reference": "Genesis 1:2",
    },
    "Genesis 1:3": {
        "text": "And God said, Let there be light: and there was light.",
        "reference": "Genesis 1:3",
    },
    "Genesis 2:1": {
        "text": "Thus the heavens and the earth were finished, and all the host of them.",
        "reference": "Genesis 2:1",
    },
    "Genesis 2:2": {
        "text": "And on the seventh day God ended his work which he had made.",
        "reference": "Genesis 2:2",
    },
    "John 3:16": {
        "text": "For God so loved the world, that he gave his only begotten Son, that whosoever "
                "believeth in him should not perish, but have everlasting life.",
        "reference": "John 3:16",
    },
    "John 3:17": {
        "text": "For God sent not his Son into the world to condemn the world; but that the world "
                "through him might be saved.",
        "reference": "John 3:17",
    },
    "John 4:1": {
        "text": "When therefore the Lord knew how the Pharisees had heard that Jesus made and "
                "baptized more disciples than John,",
        "reference": "John 4:1",
    },
    "metadata": {"text": "King James Version, 1611"},
    "1 John 4:8": {
        "text": "He that loveth not knoweth not God; for God is love.",
        "reference": "1 John 4:8",
    },
    "1 John 4:7": {
        "text": "Beloved, let us love one another: for love is of God; and every one that loveth "
                "is born of God, and knoweth God.",
        "reference": "1 John 4:7",
    },
    "Jude 1:1": {
        "text": "Jude, the servant of Jesus Christ, and brother of James, to them that are "
                "sanctified by God the Father, and preserved in Jesus Christ, and called:",
    },
}


def _contiguous_dataset():
    """
    Three books, every chapter numbered from verse 1 with no gaps.
    Alpha chapter 2 appears before chapter 1 in delivery order.
    """
    layout = [
        ("Alpha", {2: 2, 1: 3}),
        ("Beta", {1: 2}),
        ("Gamma Book", {1: 1, 2: 3}),
    ]
    data = {}
    for book, chapters in layout:
        for chapter, count in chapters.items():
            for verse in range(1, count + 1):
                ref = f"{book} {chapter}:{verse}"
                data[ref] = {"text": f"Text of {ref}.", "reference": ref}
    return data


@pytest.fixture(autouse=True)
def _loud_console():
    set_quiet(False)
    yield
    set_quiet(False)


@pytest.fixture
def sample_dataset():
    return dict(SAMPLE_DATASET)


@pytest.fixture
def sample_index(sample_dataset):
    return build_index(sample_dataset)


@pytest.fixture
def contiguous_index():
    return build_index(_contiguous_dataset())


@pytest.fixture
def dataset_file(tmp_path, sample_dataset):
    path = tmp_path / "kjv1611.json"
    path.write_text(json.dumps(sample_dataset), encoding="utf-8")
    return path
