# src/library/audio_files.py
from __future__ import annotations

import logging
import os
from typing import Iterable

from mutagen import File as MutagenFile
from mutagen._util import MutagenError

from core.models import Track

logger = logging.getLogger(__name__)

AUDIO_EXTS = {".mp3", ".m4a", ".aac", ".flac", ".ogg", ".oga", ".opus", ".wav"}


def is_audio_path(path: str) -> bool:
    return os.path.splitext(path)[1].lower() in AUDIO_EXTS


def _first(easy, key: str) -> str | None:
    v = easy.get(key)
    if not v:
        return None
    if isinstance(v, list):
        return (str(v[0]).strip() if v else None) or None
    s = str(v).strip()
    return s or None


def read_track(path: str) -> Track:
    """
    Build a Track for `path`, filling title/artist/duration from tags when
    mutagen can read them. Unreadable files still yield a bare Track: whether
    a file plays is for the transport to decide.
    """
    try:
        audio = MutagenFile(path, easy=True)
    except (MutagenError, OSError) as e:
        logger.debug("No tags for %s: %s", path, e)
        return Track(path)
    if audio is None:
        return Track(path)

    try:
        title = _first(audio, "title")
        artist = _first(audio, "artist")
    except (KeyError, ValueError):
        title = artist = None

    duration_ms = None
    length = getattr(getattr(audio, "info", None), "length", None)
    if length:
        duration_ms = int(round(float(length) * 1000))

    return Track(path, title=title, artist=artist, duration_ms=duration_ms)


def tracks_from_paths(paths: Iterable[str]) -> list[Track]:
    return [read_track(p) for p in paths]
