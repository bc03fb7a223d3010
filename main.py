import logging
import os
import sys
from pathlib import Path

from PySide6.QtCore import QStandardPaths
from PySide6.QtWidgets import QApplication

ROOT = Path(__file__).resolve().parent
SRC_DIR = ROOT / "src"

if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from core.config import AppConfig, load_config
from core.controller import PlaylistController
from core.log_config import setup_logging
from core.state import AppState, Notify
from player.player import Player, UnavailablePlayer
from ui.main_window import MainWindow

log = logging.getLogger("main")

def get_app_data_dir() -> str:
    base = QStandardPaths.writableLocation(QStandardPaths.AppDataLocation)
    os.makedirs(base, exist_ok=True)
    return base

def get_music_dir() -> str:
    return QStandardPaths.writableLocation(QStandardPaths.MusicLocation)

def init_app_state(config: AppConfig) -> AppState:
    app_state = AppState(config)

    try:
        app_state.player = Player(volume=config.volume)
    except Exception as e:
        log.exception("Audio output unavailable")
        app_state.player = UnavailablePlayer(f"audio output unavailable: {e}")
        app_state.queued_notifications.append(
            Notify(message=f"Failed to initialize audio player: {e}", notify_type="error")
        )

    app_state.controller = PlaylistController(
        app_state.player,
        notify=app_state.notify,
        load_timeout_ms=config.load_timeout_ms,
    )
    return app_state

def main() -> int:
    qt_app = QApplication(sys.argv)
    qt_app.setApplicationName("BandPlayer")

    config = load_config(app_data_dir=get_app_data_dir(), music_dir=get_music_dir())
    setup_logging(config.app_data_dir, config.log_level)

    app_state = init_app_state(config)
    with app_state.controller:
        qt_app.aboutToQuit.connect(app_state.controller.close)
        main_window = MainWindow(app_state)
        main_window.show()
        return qt_app.exec()

if __name__ == "__main__":
    raise SystemExit(main())
