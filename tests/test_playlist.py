"""Tests for core.playlist: container edits and current-row arithmetic."""

import pytest

from core.errors import OutOfRange
from core.models import Track
from core.playlist import Playlist, index_after_move, index_after_remove


def make(*names):
    return Playlist(Track(n) for n in names)


class TestIndexAfterRemove:
    @pytest.mark.parametrize(
        "current,removed,expected",
        [
            (2, 2, -1),
            (2, 0, 1),
            (2, 3, 2),
            (0, 0, -1),
            (-1, 0, -1),
        ],
    )
    def test_cases(self, current, removed, expected):
        assert index_after_remove(current, removed) == expected


class TestIndexAfterMove:
    def test_front_to_back(self):
        # [A,B,C,D], C current, A to the end -> [B,C,D,A]
        assert index_after_move(2, 0, 3) == 1

    def test_back_to_front(self):
        assert index_after_move(1, 3, 0) == 2

    def test_current_moves_with_itself(self):
        assert index_after_move(1, 1, 3) == 3
        assert index_after_move(3, 3, 0) == 0

    def test_no_selection(self):
        assert index_after_move(-1, 0, 3) == -1

    @pytest.mark.parametrize("old", range(5))
    @pytest.mark.parametrize("new", range(5))
    def test_follows_the_same_track(self, old, new):
        names = list("ABCDE")
        for current in range(len(names)):
            pl = make(*names)
            pl.move(old, new)
            moved = pl.tracks()[index_after_move(current, old, new)]
            assert moved.locator == names[current]


class TestPlaylist:
    def test_append_keeps_duplicates(self):
        pl = make("a", "b")
        assert pl.append([Track("a")]) == 1
        assert [t.locator for t in pl] == ["a", "b", "a"]
        assert len(pl) == 3

    def test_remove_at_returns_track(self):
        pl = make("a", "b", "c")
        assert pl.remove_at(1) == Track("b")
        assert [t.locator for t in pl] == ["a", "c"]

    def test_move(self):
        pl = make("A", "B", "C", "D")
        pl.move(0, 3)
        assert [t.locator for t in pl] == ["B", "C", "D", "A"]
        pl.move(3, 0)
        assert [t.locator for t in pl] == ["A", "B", "C", "D"]

    def test_move_same_index_is_noop(self):
        pl = make("A", "B")
        pl.move(1, 1)
        assert [t.locator for t in pl] == ["A", "B"]

    @pytest.mark.parametrize("index", [-1, 3, 10])
    def test_invalid_indices_raise(self, index):
        pl = make("a", "b", "c")
        with pytest.raises(OutOfRange):
            pl.remove_at(index)
        with pytest.raises(OutOfRange):
            pl.move(0, index)
        with pytest.raises(OutOfRange):
            pl[index]
        assert len(pl) == 3

    def test_out_of_range_is_an_index_error(self):
        with pytest.raises(IndexError):
            make().remove_at(0)
