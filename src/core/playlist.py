# core/playlist.py
"""Ordered track list plus the index arithmetic that keeps a selected row valid across edits."""
from __future__ import annotations

from typing import Iterable, Iterator

from core.errors import OutOfRange
from core.models import Track


def index_after_remove(current: int, removed: int) -> int:
    """Where `current` ends up once the row at `removed` is gone (-1 if it was that row)."""
    if current < 0:
        return current
    if removed == current:
        return -1
    if removed < current:
        return current - 1
    return current


def index_after_move(current: int, old: int, new: int) -> int:
    """Where `current` ends up after the row at `old` is moved to `new` (remove, then insert at `new`)."""
    if current < 0 or old == new:
        return current
    if current == old:
        return new
    if old < current <= new:
        return current - 1
    if new <= current < old:
        return current + 1
    return current


class Playlist:
    def __init__(self, tracks: Iterable[Track] = ()):
        self._tracks: list[Track] = list(tracks)

    def __len__(self) -> int:
        return len(self._tracks)

    def __iter__(self) -> Iterator[Track]:
        return iter(self._tracks)

    def __getitem__(self, index: int) -> Track:
        self.check_index(index)
        return self._tracks[index]

    def tracks(self) -> tuple[Track, ...]:
        return tuple(self._tracks)

    def is_valid(self, index: int) -> bool:
        return 0 <= index < len(self._tracks)

    def check_index(self, index: int) -> None:
        # no negative indexing: -1 means "nothing selected" everywhere else
        if not self.is_valid(index):
            raise OutOfRange(index, len(self._tracks))

    def append(self, tracks: Iterable[Track]) -> int:
        before = len(self._tracks)
        self._tracks.extend(tracks)
        return len(self._tracks) - before

    def remove_at(self, index: int) -> Track:
        self.check_index(index)
        return self._tracks.pop(index)

    def move(self, old: int, new: int) -> None:
        """Move the row at `old` so that it ends up at position `new` of the resulting list."""
        self.check_index(old)
        self.check_index(new)
        if old == new:
            return
        track = self._tracks.pop(old)
        self._tracks.insert(new, track)
