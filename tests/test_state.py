# tests/test_state.py
# Last-location file: save, load, and tolerance of missing/corrupt files.

from vnav.model import Position
from vnav.state import load_last_location, save_last_location


def test_save_and_load(tmp_path):
    path = tmp_path / "state" / "last.json"
    save_last_location(path, Position("john", 3, 16))
    assert load_last_location(path) == {"book": "john", "chapter": 3, "verse": 16}


def test_missing_file(tmp_path):
    assert load_last_location(tmp_path / "missing.json") is None


def test_corrupt_file(tmp_path, capsys):
    path = tmp_path / "last.json"
    path.write_text("{oops", encoding="utf-8")
    assert load_last_location(path) is None
    assert "Could not restore last location" in capsys.readouterr().out


def test_nothing_selected_is_saved_as_nulls(tmp_path):
    path = tmp_path / "last.json"
    save_last_location(path, None)
    assert load_last_location(path) is None
