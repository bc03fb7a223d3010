# ui/permissions.py
from __future__ import annotations

import os

from core.errors import PermissionDenied

DENIED_MESSAGE = "Storage permission is required."


class StoragePermissionGate:
    """
    Desktop stand-in for a storage permission prompt: access is granted when the
    music folder is readable. A folder that does not exist has nothing to guard.
    """

    def __init__(self, music_dir: str = ""):
        self.music_dir = music_dir

    def request(self) -> bool:
        if not self.music_dir or not os.path.isdir(self.music_dir):
            return True
        return os.access(self.music_dir, os.R_OK | os.X_OK)

    def ensure(self) -> None:
        if not self.request():
            raise PermissionDenied(DENIED_MESSAGE)
