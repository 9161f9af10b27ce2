# core/config.py
from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass, field

from core.utils import clamp_fraction

logger = logging.getLogger(__name__)

ENV_PREFIX = "PLAYSESSION_"

DEFAULT_TICK_MS = 100
DEFAULT_HISTORY_CAPACITY = 10
DEFAULT_VOLUME = 0.7

# QTimer intervals are signed 32-bit milliseconds
MAX_TIMER_MS = 2**31 - 1
MAX_RUN_SECONDS = MAX_TIMER_MS // 1000
MAX_HISTORY_CAPACITY = 10_000

def _env_int(env, name: str, default: int, maximum: int) -> int:
    raw = env.get(ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        logger.warning("Ignoring %s%s=%r (not an integer)", ENV_PREFIX, name, raw)
        return default
    if not 0 < value <= maximum:
        logger.warning("Ignoring %s%s=%r (must be 1..%d)", ENV_PREFIX, name, raw, maximum)
        return default
    return value

def _env_float(env, name: str, default: float) -> float:
    raw = env.get(ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw.strip())
    except ValueError:
        logger.warning("Ignoring %s%s=%r (not a number)", ENV_PREFIX, name, raw)
        return default
    if not math.isfinite(value):
        logger.warning("Ignoring %s%s=%r (not finite)", ENV_PREFIX, name, raw)
        return default
    return value

@dataclass(frozen=True)
class SessionConfig:
    music_dirs: tuple[str, ...] = field(default_factory=tuple)
    tick_interval_ms: int = DEFAULT_TICK_MS
    history_capacity: int = DEFAULT_HISTORY_CAPACITY
    volume: float = DEFAULT_VOLUME
    run_seconds: float = 0.0   # 0 = run until interrupted
    debug: bool = False

    @property
    def use_demo_catalog(self) -> bool:
        return not self.music_dirs

    @staticmethod
    def from_env(env=None) -> "SessionConfig":
        env = os.environ if env is None else env

        raw_dirs = env.get(ENV_PREFIX + "MUSIC_DIRS") or ""
        music_dirs = tuple(d.strip() for d in raw_dirs.split(os.pathsep) if d.strip())

        run_seconds = _env_float(env, "RUN_SECONDS", 0.0)
        if not 0 <= run_seconds <= MAX_RUN_SECONDS:
            logger.warning("Ignoring %sRUN_SECONDS=%r (must be 0..%d)", ENV_PREFIX, run_seconds, MAX_RUN_SECONDS)
            run_seconds = 0.0

        return SessionConfig(
            music_dirs=music_dirs,
            tick_interval_ms=_env_int(env, "TICK_MS", DEFAULT_TICK_MS, MAX_TIMER_MS),
            history_capacity=_env_int(env, "HISTORY_CAPACITY", DEFAULT_HISTORY_CAPACITY, MAX_HISTORY_CAPACITY),
            volume=clamp_fraction(_env_float(env, "VOLUME", DEFAULT_VOLUME)),
            run_seconds=run_seconds,
            debug=env.get(ENV_PREFIX + "DEBUG") == "1",
        )
