"""Shared fixtures: Qt core app, small catalogs, a session driven by ManualClock."""

import pytest
from PySide6.QtCore import QCoreApplication

from core.models import Track
from player.catalog import TrackCatalog
from player.clock import ManualClock
from player.history import HistoryTracker
from player.session import PlaybackSession


@pytest.fixture(scope='session')
def qapp():
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


class SignalRecorder:
    """Collects emitted signal arguments as tuples."""

    def __init__(self, signal):
        self.calls = []
        signal.connect(self._on_emit)

    def _on_emit(self, *args):
        self.calls.append(args)

    @property
    def last(self):
        return self.calls[-1] if self.calls else None

    def __len__(self):
        return len(self.calls)


@pytest.fixture
def record():
    return SignalRecorder


def make_track(title, artist='Artist', seconds=200):
    return Track(
        title=title,
        artist=artist,
        source_ref=f'{title.lower().replace(" ", "_")}.mp3',
        duration_ms=None if seconds is None else seconds * 1000,
    )


@pytest.fixture
def two_track_catalog():
    return TrackCatalog([make_track('A', seconds=200), make_track('B', seconds=180)])


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def session(qapp, two_track_catalog, clock):
    return PlaybackSession(two_track_catalog, clock, history=HistoryTracker(), tick_interval_ms=100)
