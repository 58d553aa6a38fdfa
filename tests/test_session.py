# tests/test_session.py
# Session: current position, change notifications and restore validation.

import pytest

from vnav.model import Position, Scope
from vnav.session import Session


@pytest.fixture
def session(sample_index):
    return Session(sample_index)


@pytest.fixture
def events(session):
    seen = []
    session.subscribe(lambda pos, passage: seen.append((pos, passage)))
    return seen


def test_starts_with_nothing_selected(session):
    assert session.position is None
    assert session.current_passage() is None
    assert session.snapshot() is None
    assert session.next() is False
    assert session.previous() is False
    assert session.chapter_verses() == []


def test_go_to_reference_notifies(session, events):
    assert session.go_to_reference("john 3:16")
    assert session.position == Position("john", 3, 16)
    assert len(events) == 1
    pos, passage = events[0]
    assert pos == Position("john", 3, 16)
    assert passage.reference == "John 3:16"


def test_failed_moves_do_not_notify(session, events, capsys):
    assert not session.go_to_reference("John")
    assert not session.go_to_reference("John 3:99")
    assert events == []
    assert session.position is None

    out = capsys.readouterr().out
    assert "Could not parse reference" in out
    assert "Reference not found" in out


def test_next_and_previous(session, events):
    session.go_to("Genesis", 1, 3)
    assert session.next()
    assert session.position == Position("genesis", 2, 1)
    assert session.previous()
    assert session.position == Position("genesis", 1, 3)
    assert len(events) == 3


def test_terminal_moves_keep_position(session, events):
    session.go_to("Jude", 1, 1)
    assert not session.next()
    assert session.position == Position("jude", 1, 1)

    session.go_to("Genesis", 1, 1)
    assert not session.previous()
    assert session.position == Position("genesis", 1, 1)
    assert len(events) == 2


def test_unsubscribe(session, events):
    listener = session.subscribe(lambda pos, passage: events.append("second"))
    session.unsubscribe(listener)
    session.go_to("Genesis", 1, 1)
    assert "second" not in events


def test_clear_notifies_with_no_passage(session, events):
    session.go_to("Genesis", 1, 1)
    session.clear()
    assert session.position is None
    assert events[-1] == (None, None)


def test_select_chapter_opens_verse_one(session):
    assert session.select_chapter("genesis", 2)
    assert session.position == Position("genesis", 2, 1)
    # John 3 has no verse 1 in the sample
    assert not session.select_chapter("john", 3)


def test_chapter_verses_follow_position(session):
    session.go_to("1 John", 4, 8)
    assert [v for v, _ in session.chapter_verses()] == [7, 8]


def test_search_uses_current_book_and_chapter(session):
    session.go_to("John", 4, 1)
    assert [r.reference for r in session.search("love", Scope.BOOK)] == ["John 3:16"]
    assert session.search("love", Scope.CHAPTER) == []
    assert len(session.search("love")) == 3


def test_search_book_scope_without_position(session):
    assert session.search("love", Scope.BOOK) == []


def test_restore_accepts_only_resolvable_positions(session):
    assert session.restore({"book": "1 john", "chapter": 4, "verse": 7})
    assert session.position == Position("1 john", 4, 7)

    assert not session.restore({"book": "john", "chapter": 3, "verse": 1})
    assert not session.restore({"book": "nahum", "chapter": 1, "verse": 1})
    assert not session.restore({"book": "john", "chapter": "three", "verse": 16})
    assert not session.restore({"book": "john"})
    assert not session.restore(None)
    assert session.position == Position("1 john", 4, 7)


def test_snapshot_round_trips_through_restore(sample_index, session):
    session.go_to("Genesis", 2, 2)
    other = Session(sample_index)
    assert other.restore(session.snapshot())
    assert other.position == session.position


def test_sessions_are_independent(sample_index):
    a = Session(sample_index)
    b = Session(sample_index)
    a.go_to("Genesis", 1, 1)
    b.go_to("Jude", 1, 1)
    a.next()
    assert a.position == Position("genesis", 1, 2)
    assert b.position == Position("jude", 1, 1)


def test_invalid_start_position_is_rejected(sample_index):
    with pytest.raises(ValueError):
        Session(sample_index, Position("john", 3, 1))
