# src/library/demo.py
from __future__ import annotations

from core.models import Track
from player.catalog import TrackCatalog

# (title, artist, source, seconds)
DEMO_TRACKS = [
    ("Chasing Dreams", "Aurora Sky", "demo_song_1.mp3", 252),
    ("Ocean Waves", "Coastal Sound", "demo_song_2.mp3", 180),
    ("Midnight City", "Neon", "demo_song_3.mp3", 210),
    ("Starlight Road", "Horizon Lights", "demo_song_4.mp3", 195),
    ("Lost Memories", "Unknown Artist", "demo_song_5.mp3", 225),
    ("Sunset Drive", "Chill Vibes", "demo_song_6.mp3", 240),
    ("Into the Night", "Lunar Echo", "demo_song_7.mp3", 200),
    ("Morning Breeze", "Sunrise Melody", "demo_song_8.mp3", 190),
]

# recorded oldest first, so Midnight City ends up on top
DEMO_HISTORY = [1, 2]

def demo_catalog() -> TrackCatalog:
    return TrackCatalog(
        Track(title=title, artist=artist, source_ref=src, duration_ms=seconds * 1000)
        for title, artist, src, seconds in DEMO_TRACKS
    )

def seed_demo_history(catalog: TrackCatalog, history) -> None:
    for index in DEMO_HISTORY:
        if catalog.contains_index(index):
            history.record(catalog.get(index))
