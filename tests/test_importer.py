"""Tests for library.importer, library.audio_files and the desktop permission gate."""

import os

import pytest

from core.errors import PermissionDenied
from library.audio_files import is_audio_path, read_track
from library.importer import TrackImporter
from ui.permissions import DENIED_MESSAGE, StoragePermissionGate


class FakeGate:
    def __init__(self, granted=True):
        self.granted = granted

    def ensure(self):
        if not self.granted:
            raise PermissionDenied(DENIED_MESSAGE)


class FakeSource:
    def __init__(self, paths):
        self.paths = paths
        self.picked = 0

    def pick(self):
        self.picked += 1
        return list(self.paths)


@pytest.fixture
def notes():
    return []


def notify_into(notes):
    return lambda message, notify_type="info": notes.append((notify_type, message))


def touch(path, data=b"\x00" * 64):
    path.write_bytes(data)
    return str(path)


class TestTrackImporter:
    def test_denied_permission_skips_picker(self, notes):
        source = FakeSource(["/a.mp3"])
        importer = TrackImporter(FakeGate(granted=False), source, notify_into(notes))
        assert importer.request_tracks() == []
        assert source.picked == 0
        assert notes == [("error", "Storage permission is required.")]

    def test_cancelled_picker_returns_nothing(self, notes):
        importer = TrackImporter(FakeGate(), FakeSource([]), notify_into(notes))
        assert importer.request_tracks() == []
        assert notes == []

    def test_keeps_existing_audio_files_in_order(self, tmp_path, notes):
        b = touch(tmp_path / "b.flac")
        a = touch(tmp_path / "a.mp3")
        importer = TrackImporter(FakeGate(), FakeSource([b, a]), notify_into(notes))
        tracks = importer.request_tracks()
        assert [t.locator for t in tracks] == [b, a]
        assert notes == []

    def test_skips_non_audio_and_missing(self, tmp_path, notes):
        good = touch(tmp_path / "song.ogg")
        text = touch(tmp_path / "notes.txt", b"hello")
        missing = str(tmp_path / "gone.mp3")
        importer = TrackImporter(FakeGate(), FakeSource([good, text, missing]), notify_into(notes))
        tracks = importer.request_tracks()
        assert [t.locator for t in tracks] == [good]
        assert notes == [("warning", "Skipped 2 file(s) that are not audio.")]


class TestAudioFiles:
    @pytest.mark.parametrize("path", ["a.mp3", "B.FLAC", "/x/y.opus", "c.m4a", "d.wav"])
    def test_audio_extensions(self, path):
        assert is_audio_path(path)

    @pytest.mark.parametrize("path", ["a.txt", "b", "c.mp3.bak", "/x/cover.jpg"])
    def test_other_extensions(self, path):
        assert not is_audio_path(path)

    def test_untagged_file_falls_back_to_file_name(self, tmp_path):
        path = touch(tmp_path / "rehearsal.mp3")
        track = read_track(path)
        assert track.locator == path
        assert track.title is None
        assert track.name == "rehearsal.mp3"

    def test_missing_file_still_yields_track(self, tmp_path):
        path = str(tmp_path / "nope.mp3")
        assert read_track(path).locator == path


class TestStoragePermissionGate:
    def test_readable_dir(self, tmp_path):
        gate = StoragePermissionGate(str(tmp_path))
        assert gate.request()
        gate.ensure()

    def test_no_music_dir(self, tmp_path):
        assert StoragePermissionGate("").request()
        assert StoragePermissionGate(str(tmp_path / "missing")).request()

    def test_unreadable_dir(self, tmp_path, monkeypatch):
        monkeypatch.setattr(os, "access", lambda path, mode: False)
        gate = StoragePermissionGate(str(tmp_path))
        assert not gate.request()
        with pytest.raises(PermissionDenied, match="Storage permission is required."):
            gate.ensure()
