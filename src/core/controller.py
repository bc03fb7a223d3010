# core/controller.py
"""
Playlist + playback state machine.

The controller owns the track list, the current row and the transport. User
commands and transport events go through one FIFO work queue, so no two
mutations interleave even when a transport emits synchronously from inside a
command. Every load carries a generation number; transport events tagged with
an older generation are dropped.
"""
from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Callable, Iterable

from PySide6.QtCore import QObject, QTimer, Signal

from core.errors import LoadFailure, PlayerError
from core.models import PlayerState, Track
from core.playlist import Playlist, index_after_move, index_after_remove
from core.utils import clamp

logger = logging.getLogger(__name__)


@dataclass
class _PendingLoad:
    generation: int
    autoplay: bool
    fallback_index: int          # last-good row, -1 if none
    fallback_position_ms: int
    restore_at_ms: int | None = None   # set when this load is itself a rollback


def _no_notify(message: str, notify_type: str = "info") -> None:
    pass


class PlaylistController(QObject):
    stateChanged = Signal(object)    # PlayerState
    playbackError = Signal(object)   # LoadFailure

    def __init__(
        self,
        transport,
        notify: Callable[[str, str], None] | None = None,
        load_timeout_ms: int = 0,
        parent: QObject | None = None,
    ):
        super().__init__(parent)
        self._transport = transport
        self._notify = notify or _no_notify

        self._playlist = Playlist()
        self._current = -1
        self._position_ms = 0
        self._duration_ms = 0
        self._playing = False

        self._generation = 0
        self._pending: _PendingLoad | None = None
        self._closed = False

        self._queue: deque = deque()
        self._draining = False
        self._published = self._snapshot()

        self._load_timeout_ms = max(0, int(load_timeout_ms))
        self._load_timer = QTimer(self)
        self._load_timer.setSingleShot(True)
        self._load_timer.timeout.connect(self._on_load_timeout)

        transport.loaded.connect(self.on_transport_loaded)
        transport.loadFailed.connect(self.on_transport_load_failed)
        transport.positionChanged.connect(self.on_position_update)
        transport.durationChanged.connect(self.on_duration_update)
        transport.playingChanged.connect(self.on_playing_update)
        transport.ended.connect(self.on_transport_completed)

    # ----------------------------
    # Synchronous reads
    # ----------------------------

    @property
    def state(self) -> PlayerState:
        return self._snapshot()

    @property
    def current_index(self) -> int:
        return self._current

    @property
    def tracks(self) -> tuple[Track, ...]:
        return self._playlist.tracks()

    @property
    def is_playing(self) -> bool:
        return self._playing

    @property
    def is_closed(self) -> bool:
        return self._closed

    # ----------------------------
    # Commands
    # ----------------------------

    def append(self, tracks: Iterable[Track | str]) -> None:
        items = [t if isinstance(t, Track) else Track(str(t)) for t in tracks]
        if not items:
            return
        self._submit(self._do_append, items)

    def remove_at(self, index: int) -> None:
        """Remove a row. Raises OutOfRange for an invalid index."""
        self._submit(self._do_remove_at, index)

    def move(self, old_index: int, new_index: int) -> None:
        """Move a row so it ends up at `new_index`. Raises OutOfRange for an invalid index."""
        self._submit(self._do_move, old_index, new_index)

    def play_at(self, index: int) -> None:
        """Load and start a row. An index outside the playlist is ignored."""
        self._submit(self._do_play_at, index)

    def play_next(self) -> None:
        self._submit(self._do_step, 1)

    def play_previous(self) -> None:
        self._submit(self._do_step, -1)

    def toggle_play_pause(self) -> None:
        self._submit(self._do_toggle)

    def pause(self) -> None:
        self._submit(self._do_pause)

    def resume(self) -> None:
        self._submit(self._do_resume)

    def seek(self, position_ms: int) -> None:
        self._submit(self._do_seek, int(position_ms))

    def seek_relative(self, seconds: float) -> None:
        self._submit(self._do_seek_relative, seconds)

    def close(self) -> None:
        """Drop any in-flight load and release the transport. Safe to call twice."""
        if self._closed:
            return
        logger.info("Closing playback session")
        self._closed = True
        self._queue.clear()
        self._generation += 1
        self._pending = None
        self._load_timer.stop()
        self._playing = False
        try:
            self._transport.stop()
        finally:
            self._transport.release()
        self._publish()

    def __enter__(self) -> "PlaylistController":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ----------------------------
    # Transport events
    # ----------------------------

    def on_transport_loaded(self, generation: int) -> None:
        self._submit(self._handle_loaded, generation)

    def on_transport_load_failed(self, generation: int, reason: str) -> None:
        self._submit(self._handle_load_failed, generation, reason)

    def on_transport_completed(self, generation: int) -> None:
        self._submit(self._handle_completed, generation)

    def on_position_update(self, generation: int, position_ms: int) -> None:
        self._submit(self._handle_position, generation, position_ms)

    def on_duration_update(self, generation: int, duration_ms: int | None) -> None:
        self._submit(self._handle_duration, generation, duration_ms)

    def on_playing_update(self, generation: int, playing: bool) -> None:
        self._submit(self._handle_playing, generation, playing)

    def _on_load_timeout(self) -> None:
        if self._pending is None:
            return
        logger.warning("Load timed out after %d ms (generation %d)", self._load_timeout_ms, self._pending.generation)
        self._submit(
            self._handle_load_failed,
            self._pending.generation,
            f"timed out after {self._load_timeout_ms} ms",
        )

    # ----------------------------
    # Work queue
    # ----------------------------

    def _submit(self, handler, *args) -> None:
        if self._closed:
            logger.debug("Ignoring %s after close", handler.__name__)
            return
        self._queue.append((handler, args))
        if self._draining:
            return

        self._draining = True
        own_error: PlayerError | None = None
        first = True
        try:
            while self._queue and not self._closed:
                fn, fn_args = self._queue.popleft()
                try:
                    fn(*fn_args)
                except PlayerError as e:
                    # only the caller's own command reports back; the rest were queued by events
                    if first:
                        own_error = e
                    else:
                        logger.warning("%s failed: %s", fn.__name__, e)
                first = False
        except Exception:
            if self._queue:
                logger.error("Dropping %d queued item(s) after an unexpected error", len(self._queue))
                self._queue.clear()
            raise
        finally:
            self._draining = False
            self._publish()

        if own_error is not None:
            raise own_error

    def _snapshot(self) -> PlayerState:
        return PlayerState(
            playlist=self._playlist.tracks(),
            current_index=self._current,
            position_ms=self._position_ms,
            duration_ms=self._duration_ms,
            playing=self._playing,
            loading=self._pending is not None,
        )

    def _publish(self) -> None:
        state = self._snapshot()
        if state != self._published:
            self._published = state
            self.stateChanged.emit(state)

    # ----------------------------
    # Handlers (run only from the queue)
    # ----------------------------

    def _do_append(self, items: list[Track]) -> None:
        added = self._playlist.append(items)
        logger.info("Added %d track(s); playlist has %d", added, len(self._playlist))

    def _do_remove_at(self, index: int) -> None:
        track = self._playlist.remove_at(index)
        if index == self._current:
            self._go_idle()
        else:
            self._current = index_after_remove(self._current, index)
            if self._pending is not None:
                self._pending.fallback_index = index_after_remove(self._pending.fallback_index, index)
        logger.info("Removed #%d %s; current is now %d", index, track.locator, self._current)
        self._notify(f"Removed {track.name}.", "info")

    def _do_move(self, old_index: int, new_index: int) -> None:
        self._playlist.move(old_index, new_index)
        self._current = index_after_move(self._current, old_index, new_index)
        if self._pending is not None:
            self._pending.fallback_index = index_after_move(
                self._pending.fallback_index, old_index, new_index
            )
        logger.debug("Moved #%d -> #%d; current is now %d", old_index, new_index, self._current)

    def _do_play_at(self, index: int) -> None:
        if not self._playlist.is_valid(index):
            logger.debug("play_at(%d) ignored; playlist has %d track(s)", index, len(self._playlist))
            return
        self._start_load(index, autoplay=True)

    def _do_step(self, delta: int) -> None:
        target = self._current + delta
        if not self._playlist.is_valid(target):
            return
        self._start_load(target, autoplay=True)

    def _do_toggle(self) -> None:
        if self._pending is not None:
            self._pending.autoplay = True
        elif self._playing:
            self._do_pause()
        elif self._current >= 0:
            self._do_resume()
        elif len(self._playlist):
            self._start_load(0, autoplay=True)

    def _do_pause(self) -> None:
        if self._pending is not None:
            self._pending.autoplay = False
        if self._playing:
            self._transport.pause()
            self._playing = False

    def _do_resume(self) -> None:
        if self._pending is not None:
            self._pending.autoplay = True
            return
        if self._current < 0 or self._playing:
            return
        if self._duration_ms and self._position_ms >= self._duration_ms:
            # finished track: start over
            self._transport.seek(0)
            self._position_ms = 0
        self._transport.play()
        self._playing = True

    def _do_seek(self, position_ms: int) -> None:
        if self._current < 0 or self._pending is not None:
            return
        # unknown duration: never seek past what has been played
        upper = self._duration_ms if self._duration_ms > 0 else self._position_ms
        target = clamp(position_ms, 0, upper)
        self._transport.seek(target)
        self._position_ms = target

    def _do_seek_relative(self, seconds: float) -> None:
        self._do_seek(self._position_ms + int(round(seconds * 1000)))

    def _handle_loaded(self, generation: int) -> None:
        pending = self._pending
        if pending is None or generation != pending.generation:
            logger.debug("Ignoring stale load result (generation %d, current %d)", generation, self._generation)
            return
        self._pending = None
        self._load_timer.stop()
        logger.info("Loaded #%d (generation %d)", self._current, generation)
        if pending.restore_at_ms:
            self._transport.seek(pending.restore_at_ms)
            self._position_ms = pending.restore_at_ms
        if pending.autoplay:
            self._transport.play()
            self._playing = True

    def _handle_load_failed(self, generation: int, reason: str) -> None:
        pending = self._pending
        if pending is None or generation != pending.generation:
            logger.debug("Ignoring stale load failure (generation %d, current %d)", generation, self._generation)
            return
        self._pending = None
        self._load_timer.stop()

        track = self._playlist[self._current]
        failure = LoadFailure(track.locator, reason)
        logger.warning("%s", failure)
        self.playbackError.emit(failure)
        self._notify(f"Cannot play {track.name}.", "error")

        if pending.restore_at_ms is not None:
            # the rollback target broke too; give up on it
            self._go_idle()
            return

        if self._playlist.is_valid(pending.fallback_index):
            logger.info("Rolling back to #%d", pending.fallback_index)
            self._start_load(
                pending.fallback_index,
                autoplay=False,
                restore_at_ms=pending.fallback_position_ms,
            )
        else:
            self._go_idle()

    def _handle_completed(self, generation: int) -> None:
        if generation != self._generation or self._pending is not None or self._current < 0:
            logger.debug("Ignoring stale completion (generation %d, current %d)", generation, self._generation)
            return
        nxt = self._current + 1
        if self._playlist.is_valid(nxt):
            logger.info("Track #%d finished; advancing to #%d", self._current, nxt)
            self._start_load(nxt, autoplay=True)
            return
        logger.info("Track #%d finished; end of playlist", self._current)
        self._playing = False
        if self._duration_ms:
            self._position_ms = self._duration_ms

    def _handle_position(self, generation: int, position_ms: int) -> None:
        if generation != self._generation:
            return
        self._position_ms = max(0, int(position_ms))

    def _handle_duration(self, generation: int, duration_ms: int | None) -> None:
        if generation != self._generation:
            return
        if duration_ms is None or duration_ms <= 0:
            return
        self._duration_ms = int(duration_ms)

    def _handle_playing(self, generation: int, playing: bool) -> None:
        # while a load is pending the controller decides when playback starts
        if generation != self._generation or self._pending is not None:
            return
        self._playing = bool(playing)

    # ----------------------------
    # Helpers
    # ----------------------------

    def _start_load(self, index: int, *, autoplay: bool, restore_at_ms: int | None = None) -> None:
        if restore_at_ms is not None:
            fallback, fallback_pos = -1, 0
        elif self._pending is not None:
            # superseding a load: the last-good row is still the one before it
            if self._pending.restore_at_ms is not None:
                fallback, fallback_pos = self._current, self._pending.restore_at_ms
            else:
                fallback, fallback_pos = self._pending.fallback_index, self._pending.fallback_position_ms
        else:
            fallback, fallback_pos = self._current, self._position_ms
            if self._duration_ms and fallback_pos >= self._duration_ms:
                fallback_pos = 0

        self._generation += 1
        self._pending = _PendingLoad(
            generation=self._generation,
            autoplay=autoplay,
            fallback_index=fallback,
            fallback_position_ms=fallback_pos,
            restore_at_ms=restore_at_ms,
        )
        self._current = index
        self._position_ms = 0
        self._duration_ms = 0
        self._playing = False

        track = self._playlist[index]
        logger.info("Loading #%d %s (generation %d)", index, track.locator, self._generation)
        try:
            self._transport.load(track.locator, self._generation)
        except Exception as e:
            logger.exception("Transport refused %s", track.locator)
            self._queue.append((self._handle_load_failed, (self._generation, str(e) or type(e).__name__)))
            return
        if self._load_timeout_ms:
            self._load_timer.start(self._load_timeout_ms)

    def _go_idle(self) -> None:
        self._generation += 1
        self._pending = None
        self._load_timer.stop()
        self._transport.stop()
        self._current = -1
        self._position_ms = 0
        self._duration_ms = 0
        self._playing = False
