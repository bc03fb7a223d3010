# core/errors.py
from __future__ import annotations


class PlayerError(Exception):
    """Base class for playlist / playback errors."""


class OutOfRange(PlayerError, IndexError):
    def __init__(self, index: int, length: int):
        super().__init__(f"index {index} out of range for playlist of {length} track(s)")
        self.index = index
        self.length = length


class PlaybackError(PlayerError):
    def __init__(self, locator: str, reason: str = ""):
        msg = f"cannot play {locator}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)
        self.locator = locator
        self.reason = reason


class LoadFailure(PlaybackError):
    """The transport could not open the track (missing, unreadable, corrupt, timed out)."""


class PermissionDenied(PlayerError):
    pass
