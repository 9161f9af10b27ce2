# src/player/clock.py
from __future__ import annotations

from typing import Callable, Optional, Protocol

from PySide6.QtCore import QObject, QTimer

TickCallback = Callable[[], None]

class ProgressClock(Protocol):
    def schedule(self, interval_ms: int, callback: TickCallback) -> None: ...
    def cancel(self) -> None: ...
    def is_active(self) -> bool: ...

class QtProgressClock(QObject):
    """
    Periodic tick source on the Qt event loop.
    Ticks run on the thread that owns this object, same as every session command.
    """

    def __init__(self, parent: QObject | None = None):
        super().__init__(parent)
        self._callback: Optional[TickCallback] = None

        self._timer = QTimer(self)
        self._timer.timeout.connect(self._on_timeout)

    def schedule(self, interval_ms: int, callback: TickCallback) -> None:
        self._callback = callback
        self._timer.setInterval(int(interval_ms))
        self._timer.start()

    def cancel(self) -> None:
        self._timer.stop()

    def is_active(self) -> bool:
        return self._timer.isActive()

    @property
    def interval_ms(self) -> int:
        return self._timer.interval()

    def _on_timeout(self) -> None:
        if self._callback is not None:
            self._callback()

class ManualClock:
    """Test/simulation clock: ticks are delivered only when asked for."""

    def __init__(self):
        self._callback: Optional[TickCallback] = None
        self._interval_ms = 0
        self._active = False
        self._carry_ms = 0

    def schedule(self, interval_ms: int, callback: TickCallback) -> None:
        if interval_ms <= 0:
            raise ValueError(f"interval must be > 0, got {interval_ms}")
        self._callback = callback
        self._interval_ms = int(interval_ms)
        self._active = True
        self._carry_ms = 0

    def cancel(self) -> None:
        self._active = False
        self._carry_ms = 0

    def is_active(self) -> bool:
        return self._active

    @property
    def interval_ms(self) -> int:
        return self._interval_ms

    def fire(self, count: int = 1) -> int:
        """Deliver up to `count` ticks; stops early once cancelled. Returns ticks delivered."""
        delivered = 0
        for _ in range(count):
            if not self._active or self._callback is None:
                break
            self._callback()
            delivered += 1
        return delivered

    def advance(self, ms: int) -> int:
        if not self._active:
            return 0
        total = self._carry_ms + int(ms)
        count, carry = divmod(total, self._interval_ms)
        delivered = self.fire(count)
        # a cancel/reschedule inside a tick resets the carry
        if delivered == count and self._active:
            self._carry_ms = carry
        return delivered
