"""Tests for core.models and core.utils."""

import pytest

from core.models import PlaybackStatus, PlayerState, Track
from core.utils import clamp, display_name, format_ms


class TestTrack:
    def test_identity_is_the_locator(self):
        assert Track("/a.mp3", title="One") == Track("/a.mp3", title="Other", duration_ms=5)
        assert Track("/a.mp3") != Track("/b.mp3")

    def test_name_prefers_tags(self):
        assert Track("/m/x.mp3").name == "x.mp3"
        assert Track("/m/x.mp3", title="Song").name == "Song"
        assert Track("/m/x.mp3", title="Song", artist="Band").name == "Band - Song"


class TestPlayerState:
    def test_status(self):
        tracks = (Track("a"), Track("b"))
        assert PlayerState().status == PlaybackStatus.IDLE
        assert PlayerState(tracks, 0, loading=True).status == PlaybackStatus.LOADING
        assert PlayerState(tracks, 1).status == PlaybackStatus.PAUSED
        assert PlayerState(tracks, 1, playing=True).status == PlaybackStatus.PLAYING

    def test_neighbours(self):
        tracks = (Track("a"), Track("b"), Track("c"))
        assert PlayerState(tracks, 0).has_next
        assert not PlayerState(tracks, 0).has_previous
        assert not PlayerState(tracks, 2).has_next
        assert PlayerState(tracks, 2).current_track == Track("c")
        assert PlayerState(tracks, -1).current_track is None


class TestUtils:
    @pytest.mark.parametrize(
        "ms,expected",
        [
            (None, "0:00"),
            (-5, "0:00"),
            (999, "0:00"),
            (61000, "1:01"),
            (600000, "10:00"),
            (3723000, "1:02:03"),
        ],
    )
    def test_format_ms(self, ms, expected):
        assert format_ms(ms) == expected

    def test_clamp(self):
        assert clamp(5, 0, 3) == 3
        assert clamp(-1, 0, 3) == 0
        assert clamp(2, 0, 3) == 2
        # an upper bound below the lower bound collapses to the lower bound
        assert clamp(7, 0, -1) == 0

    def test_display_name(self):
        assert display_name("/home/me/Music/song.mp3") == "song.mp3"
        assert display_name("C:\\Music\\song.flac") == "song.flac"
        assert display_name("song.ogg") == "song.ogg"
