# src/player/session.py
from __future__ import annotations

import logging
from typing import Callable, Optional

from PySide6.QtCore import QObject, Signal

from core.models import PlaybackStatus, Track
from core.utils import clamp_fraction, format_time, fraction_from_pointer
from player.catalog import TrackCatalog
from player.clock import ProgressClock
from player.history import HistoryTracker

logger = logging.getLogger(__name__)

DEFAULT_TICK_INTERVAL_MS = 100

class MediaLoadError(Exception):
    """Raised by a media probe when a track's source cannot be opened."""

MediaProbe = Callable[[Track], None]

class PlaybackSession(QObject):
    trackChanged = Signal(object, int)          # Track, index
    progressChanged = Signal(float, str, str)   # fraction, elapsed, total
    historyChanged = Signal(list)               # display strings, newest first
    playlistLoaded = Signal(list)               # display strings, catalog order
    statusChanged = Signal(object)              # PlaybackStatus
    volumeChanged = Signal(float)
    loadFailed = Signal(object, str)            # Track, message

    def __init__(
        self,
        catalog: TrackCatalog,
        clock: ProgressClock,
        history: HistoryTracker | None = None,
        tick_interval_ms: int = DEFAULT_TICK_INTERVAL_MS,
        volume: float = 0.7,
        media_probe: Optional[MediaProbe] = None,
        parent: QObject | None = None,
    ):
        super().__init__(parent)
        if tick_interval_ms <= 0:
            raise ValueError(f"tick interval must be > 0, got {tick_interval_ms}")

        self.catalog = catalog
        self.history = history if history is not None else HistoryTracker()
        self._clock = clock
        self._tick_interval_ms = int(tick_interval_ms)
        self._media_probe = media_probe

        self._index = 0
        self._status = PlaybackStatus.PAUSED
        self._progress = 0.0
        # progress is derived from whole elapsed ms so N ticks land exactly on N*I/D
        self._elapsed_ms = 0.0
        self._volume = clamp_fraction(volume)

    # ----------------------------
    # State
    # ----------------------------

    @property
    def current_index(self) -> int:
        return self._index

    @property
    def current_track(self) -> Track:
        return self.catalog.get(self._index)

    @property
    def status(self) -> PlaybackStatus:
        return self._status

    @property
    def is_playing(self) -> bool:
        return self._status is PlaybackStatus.PLAYING

    @property
    def progress(self) -> float:
        return self._progress

    @property
    def elapsed_ms(self) -> float:
        return self._elapsed_ms

    @property
    def volume(self) -> float:
        return self._volume

    @property
    def tick_interval_ms(self) -> int:
        return self._tick_interval_ms

    # ----------------------------
    # Navigation
    # ----------------------------

    def start(self, index: int = 0) -> None:
        """Play the first loadable track from `index` on. Stays paused if none loads."""
        self.playlistLoaded.emit(self.catalog.display_strings())
        self.historyChanged.emit(self.history.display_strings())
        for i in range(max(0, index), self.catalog.size()):
            if self._load(i):
                return
        logger.warning("No loadable track from index %d on", index)

    def load_track(self, index: int) -> None:
        self._load(index)

    def _load(self, index: int) -> bool:
        if not self.catalog.contains_index(index):
            logger.debug("load_track(%s) ignored: catalog has %d tracks", index, self.catalog.size())
            return False

        track = self.catalog.get(index)

        if self._media_probe is not None:
            try:
                self._media_probe(track)
            except MediaLoadError as e:
                # keep playing whatever was loaded before
                logger.warning("Unable to load %s: %s", track.display, e)
                self.loadFailed.emit(track, str(e))
                return False

        self._clock.cancel()

        self._index = index
        self._progress = 0.0
        self._elapsed_ms = 0.0
        self.history.record(track)

        logger.info("Now playing [%d] %s", index, track.display)
        self.trackChanged.emit(track, index)
        self.historyChanged.emit(self.history.display_strings())
        self._emit_progress()

        self._set_status(PlaybackStatus.PLAYING)
        self._clock.schedule(self._tick_interval_ms, self.tick)
        return True

    def play_previous(self) -> None:
        if self._index > 0:
            self.load_track(self._index - 1)

    def play_next(self) -> None:
        if self._index < self.catalog.size() - 1:
            self.load_track(self._index + 1)

    # inbound commands from the presentation layer
    def select_track(self, index: int) -> None:
        self.load_track(index)

    def previous(self) -> None:
        self.play_previous()

    def next(self) -> None:
        self.play_next()

    def select_from_playlist(self, display_key: str) -> None:
        index = self.catalog.index_of_display(display_key)
        if index is None:
            logger.debug("Playlist entry not found: %r", display_key)
            return
        self.load_track(index)

    def select_from_history(self, display_key: str) -> None:
        track = self.history.find_track(display_key)
        if track is None:
            logger.debug("History entry not found: %r", display_key)
            return
        self._load_by_identity(track)

    def select_history_entry(self, position: int) -> None:
        track = self.history.entry_at(position)
        if track is None:
            logger.debug("No history entry at position %s", position)
            return
        self._load_by_identity(track)

    def _load_by_identity(self, track: Track) -> None:
        # history may point at a track the catalog no longer has
        index = self.catalog.index_of(*track.key)
        if index is None:
            logger.debug("History track no longer in catalog: %s", track.display)
            return
        self.load_track(index)

    # ----------------------------
    # Transport
    # ----------------------------

    def seek(self, fraction: float) -> None:
        self._progress = clamp_fraction(fraction)
        duration = self.current_track.duration_ms
        self._elapsed_ms = self._progress * duration if duration else 0.0
        self._emit_progress()

    def seek_to_pointer(self, offset: float, width: float) -> None:
        fraction = fraction_from_pointer(offset, width)
        if fraction is None:
            return
        self.seek(fraction)

    def toggle_play_pause(self) -> None:
        if self.is_playing:
            self._clock.cancel()
            self._set_status(PlaybackStatus.PAUSED)
        else:
            self._set_status(PlaybackStatus.PLAYING)
            self._clock.schedule(self._tick_interval_ms, self.tick)

    def set_volume(self, volume: float) -> None:
        self._volume = clamp_fraction(volume)
        self.volumeChanged.emit(self._volume)

    def tick(self) -> None:
        if not self.is_playing:
            return

        duration = self.current_track.duration_ms
        if not duration:
            # unknown length: never completes
            return

        self._elapsed_ms += self._tick_interval_ms
        progress = self._elapsed_ms / duration

        if progress >= 1.0:
            self._progress = 1.0
            self._elapsed_ms = float(duration)
            self._clock.cancel()
            self._set_status(PlaybackStatus.PAUSED)
            self._emit_progress()
            logger.debug("Finished %s", self.current_track.display)
            self.play_next()
            return

        self._progress = progress
        self._emit_progress()

    # ----------------------------
    # Helpers
    # ----------------------------

    def _set_status(self, new_status: PlaybackStatus) -> None:
        if self._status != new_status:
            self._status = new_status
            self.statusChanged.emit(self._status)

    def _emit_progress(self) -> None:
        duration = self.current_track.duration_ms
        self.progressChanged.emit(
            self._progress,
            format_time(self._elapsed_ms),
            format_time(duration),
        )
