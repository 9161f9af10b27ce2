# src/library/scan_library.py
from __future__ import annotations

import os
import logging

from mutagen import File as MutagenFile
from mutagen._util import MutagenError

from core.models import Track
from player.catalog import EmptyCatalogError, TrackCatalog
from player.session import MediaLoadError

logger = logging.getLogger(__name__)

AUDIO_EXTS = {".mp3", ".m4a", ".flac", ".ogg", ".opus", ".wav"}

def iter_audio_paths(directories: list[str]) -> list[str]:
    paths: list[str] = []
    for root in directories:
        if not root or not os.path.isdir(root):
            logger.warning("Skipping missing music folder: %s", root)
            continue
        for dirpath, _, filenames in os.walk(root):
            for fn in filenames:
                ext = os.path.splitext(fn)[1].lower()
                if ext in AUDIO_EXTS:
                    paths.append(os.path.join(dirpath, fn))
    # os.walk order is filesystem dependent; catalog indices must not be
    return sorted(paths)

def _first(easy, key: str) -> str | None:
    v = easy.get(key)
    if not v:
        return None
    if isinstance(v, list):
        return (str(v[0]).strip() if v else None) or None
    s = str(v).strip()
    return s or None

def _duration_ms(audio) -> int | None:
    info = getattr(audio, "info", None)
    length = getattr(info, "length", None) if info else None
    if not length:
        return None
    return int(round(float(length) * 1000))

def track_from_path(path: str) -> Track | None:
    try:
        audio = MutagenFile(path, easy=True)
    except (MutagenError, OSError) as e:
        logger.warning("Cannot read %s: %s", path, e)
        return None
    if audio is None:
        logger.debug("Not an audio file mutagen understands: %s", path)
        return None

    title = _first(audio, "title") or os.path.splitext(os.path.basename(path))[0]
    artist = _first(audio, "artist") or "Unknown Artist"

    return Track(
        title=title,
        artist=artist,
        source_ref=path,
        duration_ms=_duration_ms(audio),
    )

def load_catalog(directories: list[str]) -> TrackCatalog:
    paths = iter_audio_paths(directories)
    tracks = []
    for p in paths:
        t = track_from_path(p)
        if t is not None:
            tracks.append(t)

    logger.info("Scanned %d files, %d playable tracks", len(paths), len(tracks))
    if not tracks:
        raise EmptyCatalogError(f"no playable tracks in: {', '.join(directories)}")
    return TrackCatalog(tracks)

def probe_source(track: Track) -> None:
    """Fail with MediaLoadError if the track's source file can't be opened."""
    try:
        audio = MutagenFile(track.source_ref)
    except (MutagenError, OSError) as e:
        raise MediaLoadError(f"Could not load: {track.title} ({e})") from e
    if audio is None:
        raise MediaLoadError(f"Could not load: {track.title}")
