# src/player/catalog.py
from __future__ import annotations

from typing import Iterable, Iterator

from core.models import Track

class EmptyCatalogError(ValueError):
    pass

class TrackCatalog:
    """Ordered tracks for one session. Fixed after construction; indices never move."""

    def __init__(self, tracks: Iterable[Track]):
        self._tracks: tuple[Track, ...] = tuple(tracks)
        if not self._tracks:
            raise EmptyCatalogError("catalog needs at least one track")

    def get(self, index: int) -> Track:
        if not 0 <= index < len(self._tracks):
            raise IndexError(f"track index out of range: {index}")
        return self._tracks[index]

    def size(self) -> int:
        return len(self._tracks)

    def contains_index(self, index: int) -> bool:
        return 0 <= index < len(self._tracks)

    def index_of(self, title: str, artist: str) -> int | None:
        key = (title, artist)
        for i, t in enumerate(self):
            if t.key == key:
                return i
        return None

    def index_of_display(self, display_key: str) -> int | None:
        for i, t in enumerate(self):
            if t.display == display_key:
                return i
        return None

    def display_strings(self) -> list[str]:
        return [t.display for t in self]

    def __len__(self) -> int:
        return len(self._tracks)

    def __iter__(self) -> Iterator[Track]:
        return iter(self._tracks)
