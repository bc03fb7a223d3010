# ui/player_bar.py
from __future__ import annotations

from PySide6.QtCore import Qt, QSize
from PySide6.QtGui import QIcon, QPixmap, QPainter
from PySide6.QtWidgets import QWidget, QHBoxLayout, QLabel, QToolButton, QSlider
from PySide6.QtCore import QByteArray
from PySide6.QtSvg import QSvgRenderer

from core.models import PlaybackStatus, PlayerState
from core.utils import format_ms

def _svg_icon(path_d: str, size: int = 20, color: str = "#e5e7eb") -> QIcon:
    svg = f"""
    <svg xmlns="http://www.w3.org/2000/svg" width="{size}" height="{size}" viewBox="0 0 24 24">
      <path d="{path_d}" fill="{color}"/>
    </svg>
    """.strip()

    renderer = QSvgRenderer(QByteArray(svg.encode("utf-8")))
    pm = QPixmap(size, size)
    pm.fill(Qt.transparent)

    p = QPainter(pm)
    renderer.render(p)
    p.end()

    return QIcon(pm)


SVG_PREV = "M6 18V6h2v12H6zm3.5-6L18 6v12l-8.5-6z"
SVG_NEXT = "M16 6v12h2V6h-2zM6 18l8.5-6L6 6v12z"
SVG_PLAY = "M8 5v14l11-7L8 5z"
SVG_PAUSE = "M6 5h4v14H6V5zm8 0h4v14h-4V5z"
SVG_REWIND = "M11 18V6l-8.5 6 8.5 6zm.5-6l8.5 6V6l-8.5 6z"
SVG_FORWARD = "M4 18l8.5-6L4 6v12zm9-12v12l8.5-6L13 6z"

class PlayerBar(QWidget):
    def __init__(self, controller, skip_seconds: float = 10.0, parent=None):
        super().__init__(parent)
        self.controller = controller
        self.skip_seconds = skip_seconds

        self._dragging = False

        root = QHBoxLayout(self)
        root.setContentsMargins(8, 6, 8, 6)
        root.setSpacing(10)

        secs = f"{skip_seconds:g}"
        self.btn_prev = self._button("BtnPrev", SVG_PREV, 20, "Previous")
        self.btn_rewind = self._button("BtnRewind", SVG_REWIND, 18, f"Back {secs}s")
        self.btn_play = self._button("BtnPlay", SVG_PLAY, 22, "Play")
        self.btn_forward = self._button("BtnForward", SVG_FORWARD, 18, f"Forward {secs}s")
        self.btn_next = self._button("BtnNext", SVG_NEXT, 20, "Next")

        self._play_icon = _svg_icon(SVG_PLAY, 22)
        self._pause_icon = _svg_icon(SVG_PAUSE, 22)

        self.lbl_title = QLabel("Nothing playing")
        self.lbl_title.setMinimumWidth(220)
        self.lbl_title.setTextInteractionFlags(Qt.TextSelectableByMouse)
        self.lbl_title.setObjectName("NowPlaying")

        self.lbl_time = QLabel("0:00")
        self.lbl_dur = QLabel("0:00")

        self.slider = QSlider(Qt.Orientation.Horizontal)
        self.slider.setRange(0, 0)
        self.slider.setSingleStep(1000)
        self.slider.setPageStep(5000)

        root.addWidget(self.btn_prev)
        root.addWidget(self.btn_rewind)
        root.addWidget(self.btn_play)
        root.addWidget(self.btn_forward)
        root.addWidget(self.btn_next)
        root.addSpacing(6)
        root.addWidget(self.lbl_title, 1)
        root.addWidget(self.lbl_time)
        root.addWidget(self.slider, 3)
        root.addWidget(self.lbl_dur)

        self.slider.sliderPressed.connect(self._on_slider_pressed)
        self.slider.sliderReleased.connect(self._on_slider_released)
        self.slider.sliderMoved.connect(self._on_slider_moved)

        self.btn_prev.clicked.connect(self.controller.play_previous)
        self.btn_next.clicked.connect(self.controller.play_next)
        self.btn_play.clicked.connect(self.controller.toggle_play_pause)
        self.btn_rewind.clicked.connect(lambda: self.controller.seek_relative(-self.skip_seconds))
        self.btn_forward.clicked.connect(lambda: self.controller.seek_relative(self.skip_seconds))
        self.controller.stateChanged.connect(self.render_state)

        self.setObjectName("PlayerBar")
        self._apply_styles()
        self.render_state(self.controller.state)

    def _button(self, name: str, path_d: str, size: int, tip: str) -> QToolButton:
        btn = QToolButton()
        btn.setObjectName(name)
        btn.setIcon(_svg_icon(path_d, size))
        btn.setIconSize(QSize(size, size))
        btn.setToolTip(tip)
        return btn

    # --- slider handling ---
    def _on_slider_pressed(self):
        self._dragging = True

    def _on_slider_moved(self, value: int):
        # show preview time while dragging
        self.lbl_time.setText(format_ms(value))

    def _on_slider_released(self):
        self._dragging = False
        self.controller.seek(int(self.slider.value()))

    # --- controller updates ---
    def render_state(self, state: PlayerState):
        track = state.current_track
        status = state.status
        if track is None:
            self.lbl_title.setText("Nothing playing")
        elif status == PlaybackStatus.LOADING:
            self.lbl_title.setText(f"Loading {track.name}…")
        else:
            self.lbl_title.setText(track.name)

        playing = status == PlaybackStatus.PLAYING
        self.btn_play.setIcon(self._pause_icon if playing else self._play_icon)
        self.btn_play.setToolTip("Pause" if playing else "Play")
        self.btn_play.setEnabled(bool(state.playlist))

        seekable = status in (PlaybackStatus.PLAYING, PlaybackStatus.PAUSED)
        self.btn_prev.setEnabled(state.has_previous)
        self.btn_next.setEnabled(state.has_next or (state.current_index < 0 and bool(state.playlist)))
        self.btn_rewind.setEnabled(seekable)
        self.btn_forward.setEnabled(seekable and state.duration_ms > 0)
        self.slider.setEnabled(seekable and state.duration_ms > 0)

        self.slider.setRange(0, max(0, state.duration_ms))
        self.lbl_dur.setText(format_ms(state.duration_ms))
        if not self._dragging:
            self.lbl_time.setText(format_ms(state.position_ms))
            self.slider.setValue(state.position_ms)

    def _apply_styles(self):
        self.setStyleSheet("""
        QWidget#PlayerBar {
            background-color: #020617;
            border-top: 1px solid #111827;
        }

        QToolButton {
            border: 1px solid transparent;
            background: transparent;
            padding: 6px;
            border-radius: 10px;
            color: #e5e7eb;
        }
        QToolButton:hover {
            background: #0b1222;
            border-color: #1f2937;
        }
        QToolButton:disabled {
            background: transparent;
        }

        QToolButton#BtnPlay {
            background: #111827;
            border: 1px solid #1f2937;
            border-radius: 999px;
            padding: 8px;
        }
        QToolButton#BtnPlay:hover {
            border-color: #38bdf8;
            background: #020617;
        }

        QSlider::groove:horizontal {
            height: 4px;
            background: #0f172a;
            border-radius: 2px;
        }
        QSlider::handle:horizontal {
            width: 12px;
            height: 12px;
            margin: -4px 0;
            border-radius: 6px;
            background: #38bdf8;
        }
        QSlider::sub-page:horizontal {
            background: #38bdf8;
            border-radius: 2px;
        }

        QLabel {
            color: #9ca3af;
            font-size: 11px;
        }
        QLabel#NowPlaying {
            color: #e5e7eb;
            font-size: 12px;
        }
        """)
