from __future__ import annotations
from dataclasses import dataclass
from PySide6.QtCore import QObject, Signal, Slot

@dataclass(frozen=True)
class Notify:
    message: str
    notify_type: str = "info"   # info/success/warn/error

class AppState(QObject):
    notification = Signal(object)   # emits Notify

    def __init__(self):
        super().__init__()
        self.config = None
        self.catalog = None
        self.clock = None
        self.session = None
        self.queued_notifications: list[Notify] = []

    @Slot(str, str)
    def notify(self, message: str, notify_type: str = "info"):
        self.notification.emit(Notify(message=message, notify_type=notify_type))

    def attach_session(self, session) -> None:
        self.session = session
        session.loadFailed.connect(self._on_load_failed)

    def _on_load_failed(self, track, message: str):
        self.notify(message or f"Could not load: {track.title}", "error")
