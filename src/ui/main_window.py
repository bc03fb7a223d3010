from PySide6.QtWidgets import QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QLabel, QToolButton, QStyle
from PySide6.QtGui import QShortcut, QKeySequence
from PySide6.QtCore import Qt

from core import log_config
from library.importer import TrackImporter
from ui.file_source import DialogFileSource
from ui.permissions import StoragePermissionGate
from ui.player_bar import PlayerBar
from ui.toast import ToastManager
from ui.widgets.playlist_widget import PlaylistWidget


class MainWindow(QMainWindow):
    def __init__(self, app_state):
        super().__init__()
        self.setWindowTitle("Band Playlist Player")
        self.resize(760, 520)
        self.app_state = app_state
        self.controller = app_state.controller
        config = app_state.config

        self.importer = TrackImporter(
            gate=StoragePermissionGate(config.music_dir),
            source=DialogFileSource(self, config.music_dir),
            notify=self.app_state.notify,
        )

        self.toasts = ToastManager(self)
        self.app_state.notification.connect(self.toasts.show_notify)

        # --- Shortcuts ---
        skip = config.skip_seconds
        QShortcut(QKeySequence("Space"), self, activated=self.controller.toggle_play_pause)
        QShortcut(QKeySequence("Ctrl+Right"), self, activated=self.controller.play_next)
        QShortcut(QKeySequence("Ctrl+Left"), self, activated=self.controller.play_previous)
        QShortcut(QKeySequence("Right"), self, activated=lambda: self.controller.seek_relative(skip))
        QShortcut(QKeySequence("Left"), self, activated=lambda: self.controller.seek_relative(-skip))
        QShortcut(QKeySequence(QKeySequence.StandardKey.Open), self, activated=self.add_tracks)

        self.central_widget = QWidget()
        self.setCentralWidget(self.central_widget)
        self.layout = QVBoxLayout(self.central_widget)
        self.layout.setContentsMargins(0, 0, 0, 0)
        self.layout.setSpacing(0)

        # --- Top bar ---
        top_bar = QHBoxLayout()
        top_bar.setContentsMargins(10, 8, 10, 8)
        title = QLabel("Band Playlist")
        title.setObjectName("AppTitle")
        top_bar.addWidget(title)
        top_bar.addStretch(1)

        self.btn_add = QToolButton()
        self.btn_add.setIcon(self.style().standardIcon(QStyle.StandardPixmap.SP_DirOpenIcon))
        self.btn_add.setToolTip("Add tracks (Ctrl+O)")
        self.btn_add.clicked.connect(self.add_tracks)

        self.btn_about = QToolButton()
        self.btn_about.setIcon(self.style().standardIcon(QStyle.StandardPixmap.SP_MessageBoxInformation))
        self.btn_about.setToolTip("About")
        self.btn_about.clicked.connect(self.open_about)

        top_bar.addWidget(self.btn_add)
        top_bar.addWidget(self.btn_about)
        self.layout.addLayout(top_bar)

        # --- Playlist ---
        self.playlist = PlaylistWidget(self.controller, self)
        self.playlist.addRequested.connect(self.add_tracks)
        self.layout.addWidget(self.playlist, 1)

        # --- PlayerBar ---
        self.player_bar = PlayerBar(self.controller, skip_seconds=skip, parent=self)
        self.layout.addWidget(self.player_bar)

        self.setStyleSheet("""
            QMainWindow, QWidget { background: #020617; }
            QLabel#AppTitle { color: #e5e7eb; font-size: 14px; font-weight: 600; }
        """)
        self.show_queued_notifications()

    def add_tracks(self):
        tracks = self.importer.request_tracks()
        if tracks:
            self.controller.append(tracks)
            self.app_state.notify(f"Added {len(tracks)} track(s).", "success")

    def open_about(self):
        log_path = log_config.LOG_FILE_PATH or "(none)"
        self.app_state.notify(f"Band Playlist Player. Log file: {log_path}", "info")

    def show_queued_notifications(self):
        for n in self.app_state.queued_notifications:
            self.toasts.show_notify(n)
        self.app_state.queued_notifications.clear()

    def closeEvent(self, event):
        self.controller.close()
        super().closeEvent(event)
