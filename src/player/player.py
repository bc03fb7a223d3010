# src/player/player.py
from __future__ import annotations

import logging
import os

from PySide6.QtCore import QObject, QTimer, QUrl, Signal
from PySide6.QtMultimedia import QAudioOutput, QMediaPlayer

logger = logging.getLogger(__name__)


class Player(QObject):
    """
    Single-source audio transport over QMediaPlayer.

    Every signal carries the generation passed to the load() that produced the
    current source, so a listener can tell late events of a replaced source apart.
    load() returns at once; the outcome arrives as `loaded` or `loadFailed`.
    """

    loaded = Signal(int)                # generation
    loadFailed = Signal(int, str)       # generation, reason
    positionChanged = Signal(int, int)  # generation, ms
    durationChanged = Signal(int, int)  # generation, ms (<= 0: unknown)
    playingChanged = Signal(int, bool)  # generation, playing
    ended = Signal(int)                 # generation

    def __init__(self, volume: float = 0.7):
        super().__init__()

        self._generation = 0
        self._loading = False
        self._released = False

        self.audio = QAudioOutput()
        self.media = QMediaPlayer()
        self.media.setAudioOutput(self.audio)

        self.set_volume(volume)

        self.media.positionChanged.connect(self._on_qt_position)
        self.media.durationChanged.connect(self._on_qt_duration)
        self.media.playbackStateChanged.connect(self._on_qt_state_changed)
        self.media.mediaStatusChanged.connect(self._on_qt_media_status)
        self.media.errorOccurred.connect(self._on_qt_error)

    # ----------------------------
    # Qt backend handlers
    # ----------------------------

    def _on_qt_position(self, ms: int) -> None:
        self.positionChanged.emit(self._generation, int(ms))

    def _on_qt_duration(self, ms: int) -> None:
        self.durationChanged.emit(self._generation, int(ms))

    def _on_qt_state_changed(self, state: QMediaPlayer.PlaybackState) -> None:
        self.playingChanged.emit(self._generation, state == QMediaPlayer.PlaybackState.PlayingState)

    def _on_qt_media_status(self, status: QMediaPlayer.MediaStatus) -> None:
        if status in (QMediaPlayer.MediaStatus.LoadedMedia, QMediaPlayer.MediaStatus.BufferedMedia):
            if self._loading:
                self._loading = False
                self.loaded.emit(self._generation)
        elif status == QMediaPlayer.MediaStatus.InvalidMedia:
            if self._loading:
                self._loading = False
                self.loadFailed.emit(self._generation, self.media.errorString() or "unsupported or corrupt file")
        elif status == QMediaPlayer.MediaStatus.EndOfMedia:
            self.ended.emit(self._generation)

    def _on_qt_error(self, error: QMediaPlayer.Error, message: str) -> None:
        if error == QMediaPlayer.Error.NoError:
            return
        if self._loading:
            self._loading = False
            self.loadFailed.emit(self._generation, message or "playback error")
        else:
            logger.warning("Playback error (generation %d): %s", self._generation, message)

    # ----------------------------
    # Public API
    # ----------------------------

    def load(self, locator: str, generation: int) -> None:
        self._generation = int(generation)
        self._loading = True

        # clear first so re-loading the same file still produces a status change
        self.media.stop()
        self.media.setSource(QUrl())

        if not os.path.isfile(locator):
            self._loading = False
            QTimer.singleShot(0, lambda g=self._generation: self.loadFailed.emit(g, "file not found"))
            return

        self.media.setSource(QUrl.fromLocalFile(locator))

    def play(self) -> None:
        self.media.play()

    def pause(self) -> None:
        self.media.pause()

    def stop(self) -> None:
        if self._released:
            return
        self._loading = False
        self.media.stop()

    def seek(self, ms: int) -> None:
        self.media.setPosition(max(0, int(ms)))

    def is_playing(self) -> bool:
        return self.media.playbackState() == QMediaPlayer.PlaybackState.PlayingState

    def set_volume(self, volume_0_to_1: float) -> None:
        v = min(1.0, max(0.0, float(volume_0_to_1)))
        self.audio.setVolume(v)

    def release(self) -> None:
        if self._released:
            return
        self._released = True
        self._loading = False
        self.media.stop()
        self.media.setSource(QUrl())
        self.media.deleteLater()
        self.audio.deleteLater()
        logger.debug("Audio output released")


class UnavailablePlayer(QObject):
    """Transport used when the audio output could not be created: every load fails."""

    loaded = Signal(int)
    loadFailed = Signal(int, str)
    positionChanged = Signal(int, int)
    durationChanged = Signal(int, int)
    playingChanged = Signal(int, bool)
    ended = Signal(int)

    def __init__(self, reason: str):
        super().__init__()
        self.reason = reason

    def load(self, locator: str, generation: int) -> None:
        QTimer.singleShot(0, lambda g=int(generation): self.loadFailed.emit(g, self.reason))

    def play(self) -> None:
        pass

    def pause(self) -> None:
        pass

    def stop(self) -> None:
        pass

    def seek(self, ms: int) -> None:
        pass

    def is_playing(self) -> bool:
        return False

    def release(self) -> None:
        pass
