# src/player/history.py
from __future__ import annotations

from collections import deque

from core.models import Track

HISTORY_CAPACITY = 10

class HistoryTracker:
    """
    Most-recently-played list, newest first.

    Entries are the catalog's own Track objects. Replaying a track records it
    again, so the same track can appear more than once.
    """

    def __init__(self, capacity: int = HISTORY_CAPACITY):
        if capacity < 1:
            raise ValueError(f"history capacity must be >= 1, got {capacity}")
        self._entries: deque[Track] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._entries.maxlen

    def record(self, track: Track) -> None:
        # appendleft on a full deque drops the rightmost (oldest) entry
        self._entries.appendleft(track)

    def entries(self) -> tuple[Track, ...]:
        return tuple(self._entries)

    def display_strings(self) -> list[str]:
        return [t.display for t in self._entries]

    def find_track(self, display_key: str) -> Track | None:
        for t in self._entries:
            if t.display == display_key:
                return t
        return None

    def entry_at(self, position: int) -> Track | None:
        if 0 <= position < len(self._entries):
            return self._entries[position]
        return None

    def __len__(self) -> int:
        return len(self._entries)
