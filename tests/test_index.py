# tests/test_index.py
# Corpus indexer: book order, metadata, lookup and tolerance of bad data.

import pytest

from vnav.index import build_index
from vnav.model import Position, RawEntry
from vnav.reference import parse_reference


def test_book_order_is_first_seen_not_alphabetical(sample_index):
    assert sample_index.book_order == ("genesis", "john", "1 john", "jude")


def test_malformed_keys_are_skipped(sample_index):
    assert sample_index.skipped_keys == 1
    assert sample_index.passage_count == 11


def test_book_meta(sample_index):
    john = sample_index.books["john"]
    assert john.display_name == "John"
    assert john.chapters == (3, 4)
    assert john.verse_counts == {3: 17, 4: 1}

    first_john = sample_index.books["1 john"]
    assert first_john.display_name == "1 John"
    assert first_john.verse_counts == {4: 8}


def test_display_name_falls_back_to_capitalized_raw_name():
    index = build_index({"song of solomon 1:1": {"text": "The song of songs, which is Solomon's."}})
    meta = index.books["song of solomon"]
    assert meta.display_name == "Song Of Solomon"
    assert index.get("song of solomon", 1, 1).reference == "Song Of Solomon 1:1"


def test_missing_reference_is_synthesized(sample_index):
    passage = sample_index.get("Jude", 1, 1)
    assert passage.reference == "Jude 1:1"
    assert sample_index.books["jude"].display_name == "Jude"


def test_chapters_sorted_regardless_of_delivery_order(contiguous_index):
    assert contiguous_index.books["alpha"].chapters == (1, 2)


def test_every_dataset_key_round_trips_to_its_text(sample_dataset, sample_index):
    for key, record in sample_dataset.items():
        parsed = parse_reference(key)
        if parsed is None:
            continue
        assert sample_index.get(*parsed).text == record["text"]


def test_lookup_ignores_case_and_spacing(sample_index, sample_dataset):
    expected = sample_dataset["John 3:16"]["text"]
    assert sample_index.lookup("john 3:16").text == expected
    assert sample_index.lookup("  JOHN   3:16 ").text == expected
    assert sample_index.resolve("john 3:16") == Position("john", 3, 16)


def test_lookup_not_found_and_parse_failure(sample_index):
    assert sample_index.lookup("John 3:99") is None
    assert sample_index.lookup("Hezekiah 1:1") is None
    assert sample_index.lookup("not a reference") is None


def test_duplicate_triple_last_write_wins_and_merge_is_recorded(capsys):
    index = build_index({
        "Ruth 1:1": {"text": "first"},
        "ruth  1:1": {"text": "second"},
    })
    assert index.get("ruth", 1, 1).text == "second"
    assert index.passage_count == 1
    assert dict(index.merged_names) == {"ruth": ("Ruth", "ruth")}

    out = capsys.readouterr().out
    assert "merging into one book" in out
    assert "Duplicate entry" in out


def test_non_mapping_values_are_skipped():
    index = build_index({"Ruth 1:1": "bare string", "Ruth 1:2": {"text": "ok"}})
    assert index.skipped_keys == 1
    assert index.books["ruth"].chapters == (1,)


@pytest.mark.parametrize(
    "bad_value",
    [
        {"text": 123},
        {"text": "ok", "reference": 7},
        {"text": ["a"]},
        RawEntry(key="Ruth 1:1", text=None, reference="Ruth 1:1"),
    ],
)
def test_non_string_fields_are_skipped(bad_value):
    index = build_index({"Ruth 1:1": bad_value, "Ruth 1:2": {"text": "fine"}})
    assert index.skipped_keys == 1
    assert index.passage_count == 1
    assert index.lookup("Ruth 1:2").text == "fine"


def test_non_string_keys_are_skipped():
    index = build_index({7: {"text": "seven"}, ("Ruth", 1, 1): {"text": "tuple"}, "Ruth 1:2": {"text": "fine"}})
    assert index.skipped_keys == 2
    assert index.book_order == ("ruth",)


def test_verse_counts_are_read_only(sample_index):
    with pytest.raises(TypeError):
        sample_index.books["john"].verse_counts[3] = 99
    assert sample_index.books["john"].verse_counts[3] == 17


def test_raw_entry_values_are_accepted():
    index = build_index({"Ruth 1:1": RawEntry(key="Ruth 1:1", text="In the days", reference="Ruth 1:1")})
    assert index.lookup("ruth 1:1").text == "In the days"


def test_empty_dataset():
    index = build_index({})
    assert index.book_order == ()
    assert index.first_position() is None
    assert index.last_position() is None
    assert list(index.iter_positions()) == []


def test_iter_positions_canonical_order(sample_index):
    positions = list(sample_index.iter_positions())
    assert positions[0] == Position("genesis", 1, 1)
    assert positions[-1] == Position("jude", 1, 1)
    assert positions.index(Position("1 john", 4, 7)) < positions.index(Position("1 john", 4, 8))
    assert sorted(positions, key=sample_index.sort_key) == positions


def test_first_and_last_position(sample_index):
    assert sample_index.first_position() == Position("genesis", 1, 1)
    assert sample_index.last_position() == Position("jude", 1, 1)


def test_chapter_verses(sample_index):
    verses = sample_index.chapter_verses("1 John", 4)
    assert [v for v, _ in verses] == [7, 8]
    assert sample_index.chapter_verses("1 John", 5) == []
    assert sample_index.chapter_verses("Nahum", 1) == []


def test_book_index(sample_index):
    assert sample_index.book_index("Genesis") == 0
    assert sample_index.book_index("1  JOHN") == 2
    assert sample_index.book_index("Nahum") is None
