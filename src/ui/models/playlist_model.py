# ui/models/playlist_model.py
from __future__ import annotations
from PySide6.QtCore import QAbstractTableModel, Qt, QModelIndex
from PySide6.QtGui import QColor, QFont

from core.models import PlayerState, Track
from core.utils import format_ms

NOW_PLAYING_COLOR = QColor("#4ade80")

class PlaylistModel(QAbstractTableModel):
    def __init__(self):
        super().__init__()
        self._rows: tuple[Track, ...] = ()
        self._current = -1

    def set_state(self, state: PlayerState):
        if state.playlist != self._rows:
            self.beginResetModel()
            self._rows = state.playlist
            self._current = state.current_index
            self.endResetModel()
            return

        if state.current_index != self._current:
            changed = [r for r in (self._current, state.current_index) if 0 <= r < len(self._rows)]
            self._current = state.current_index
            for r in changed:
                self.dataChanged.emit(self.index(r, 0), self.index(r, self.columnCount() - 1))

    def rowCount(self, parent=QModelIndex()) -> int:
        return len(self._rows)

    def columnCount(self, parent=QModelIndex()) -> int:
        return 3

    def headerData(self, section, orientation, role=Qt.DisplayRole):
        if role != Qt.DisplayRole or orientation != Qt.Horizontal:
            return None
        return ["#", "Track", "Duration"][section]

    def data(self, index: QModelIndex, role=Qt.DisplayRole):
        if not index.isValid():
            return None
        row = index.row()
        track = self._rows[row]
        col = index.column()
        is_current = row == self._current

        if role == Qt.DisplayRole:
            if col == 0:
                return "▶" if is_current else str(row + 1)
            if col == 1:
                return track.name
            if col == 2:
                return format_ms(track.duration_ms) if track.duration_ms else ""
        if role == Qt.ToolTipRole and col == 1:
            return track.locator
        if role == Qt.ForegroundRole and is_current:
            return NOW_PLAYING_COLOR
        if role == Qt.FontRole and is_current:
            font = QFont()
            font.setBold(True)
            return font
        if role == Qt.TextAlignmentRole and col != 1:
            return Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter
        return None
