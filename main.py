import logging
import signal
import sys
from pathlib import Path

from PySide6.QtCore import QCoreApplication, QTimer

ROOT = Path(__file__).resolve().parent
SRC_DIR = ROOT / "src"

if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from core.config import SessionConfig
from core.state import AppState, Notify
from library.demo import demo_catalog, seed_demo_history
from library.scan_library import load_catalog, probe_source
from player.catalog import EmptyCatalogError
from player.clock import QtProgressClock
from player.history import HistoryTracker
from player.session import PlaybackSession

log = logging.getLogger("main")

def setup_logging(debug: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

def init_app_state(config: SessionConfig) -> AppState:
    app_state = AppState()
    app_state.config = config

    history = HistoryTracker(config.history_capacity)
    media_probe = None

    if config.use_demo_catalog:
        app_state.catalog = demo_catalog()
        seed_demo_history(app_state.catalog, history)
    else:
        try:
            app_state.catalog = load_catalog(list(config.music_dirs))
            media_probe = probe_source
        except EmptyCatalogError as e:
            app_state.catalog = demo_catalog()
            app_state.queued_notifications.append(
                Notify(message=f"{e}; using demo playlist", notify_type="warn")
            )

    app_state.clock = QtProgressClock()
    app_state.attach_session(PlaybackSession(
        app_state.catalog,
        app_state.clock,
        history=history,
        tick_interval_ms=config.tick_interval_ms,
        volume=config.volume,
        media_probe=media_probe,
    ))
    return app_state

def _on_notify(n: Notify) -> None:
    level = logging.ERROR if n.notify_type == "error" else logging.WARNING if n.notify_type == "warn" else logging.INFO
    log.log(level, "%s", n.message)

def connect_console_output(app_state: AppState) -> None:
    session = app_state.session
    app_state.notification.connect(_on_notify)

    session.playlistLoaded.connect(lambda items: log.info("Playlist: %s", ", ".join(items)))
    session.historyChanged.connect(lambda items: log.debug("History: %s", items))
    session.trackChanged.connect(lambda track, index: log.info("Track %d: %s", index, track.display))
    session.statusChanged.connect(lambda status: log.info("Status: %s", status.name.lower()))
    session.progressChanged.connect(lambda frac, cur, total: log.debug("%s/%s (%.3f)", cur, total, frac))

def main() -> int:
    config = SessionConfig.from_env()
    setup_logging(config.debug)

    qt_app = QCoreApplication(sys.argv)
    # let Ctrl+C end the loop
    signal.signal(signal.SIGINT, signal.SIG_DFL)

    app_state = init_app_state(config)
    connect_console_output(app_state)

    for n in app_state.queued_notifications:
        _on_notify(n)
    app_state.queued_notifications.clear()

    app_state.session.start()

    if config.run_seconds > 0:
        QTimer.singleShot(int(config.run_seconds * 1000), qt_app.quit)

    return qt_app.exec()

if __name__ == "__main__":
    raise SystemExit(main())
