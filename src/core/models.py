# core/models.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, auto

from core.utils import display_string

@dataclass(frozen=True)
class Track:
    title: str
    artist: str
    source_ref: str
    duration_ms: int | None = None   # None = unknown, never auto-advances

    @property
    def key(self) -> tuple[str, str]:
        return (self.title, self.artist)

    @property
    def display(self) -> str:
        return display_string(self.title, self.artist)

    def __str__(self) -> str:
        return self.display

class PlaybackStatus(Enum):
    PLAYING = auto()
    PAUSED = auto()
