# core/models.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from core.utils import display_name


@dataclass(frozen=True)
class Track:
    """One playable audio file. Identity is the locator; metadata is display-only."""

    locator: str
    title: str | None = field(default=None, compare=False)
    artist: str | None = field(default=None, compare=False)
    duration_ms: int | None = field(default=None, compare=False)

    @property
    def name(self) -> str:
        if self.title:
            return f"{self.artist} - {self.title}" if self.artist else self.title
        return display_name(self.locator)


class PlaybackStatus(Enum):
    IDLE = "idle"
    LOADING = "loading"
    PAUSED = "paused"
    PLAYING = "playing"


@dataclass(frozen=True)
class PlayerState:
    playlist: tuple[Track, ...] = ()
    current_index: int = -1
    position_ms: int = 0
    duration_ms: int = 0
    playing: bool = False
    loading: bool = False

    @property
    def status(self) -> PlaybackStatus:
        if self.current_index < 0:
            return PlaybackStatus.IDLE
        if self.loading:
            return PlaybackStatus.LOADING
        return PlaybackStatus.PLAYING if self.playing else PlaybackStatus.PAUSED

    @property
    def current_track(self) -> Track | None:
        if 0 <= self.current_index < len(self.playlist):
            return self.playlist[self.current_index]
        return None

    @property
    def has_next(self) -> bool:
        return 0 <= self.current_index < len(self.playlist) - 1

    @property
    def has_previous(self) -> bool:
        return self.current_index > 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "playlist": [t.locator for t in self.playlist],
            "current_index": self.current_index,
            "position_ms": self.position_ms,
            "duration_ms": self.duration_ms,
            "playing": self.playing,
            "loading": self.loading,
            "status": self.status.value,
        }
