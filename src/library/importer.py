# src/library/importer.py
from __future__ import annotations

import logging
import os
from typing import Callable

from core.errors import PermissionDenied
from core.models import Track
from library.audio_files import is_audio_path, tracks_from_paths

logger = logging.getLogger(__name__)


class TrackImporter:
    """
    Turns "add tracks" into a list of Tracks.

    `gate` needs `ensure()` (raises PermissionDenied), `source` needs `pick()`
    returning a list of paths (empty when cancelled).
    """

    def __init__(self, gate, source, notify: Callable[[str, str], None]):
        self._gate = gate
        self._source = source
        self._notify = notify

    def request_tracks(self) -> list[Track]:
        try:
            self._gate.ensure()
        except PermissionDenied as e:
            logger.warning("Storage access denied: %s", e)
            self._notify(str(e), "error")
            return []

        paths = [p for p in self._source.pick() if p]
        if not paths:
            logger.debug("File picker returned nothing")
            return []

        accepted = [p for p in paths if is_audio_path(p) and os.path.isfile(p)]
        skipped = len(paths) - len(accepted)
        if skipped:
            logger.info("Skipped %d non-audio or missing file(s)", skipped)
            self._notify(f"Skipped {skipped} file(s) that are not audio.", "warning")

        return tracks_from_paths(accepted)
