# ui/widgets/playlist_widget.py
from __future__ import annotations

import logging

from PySide6.QtCore import Qt, Signal, QItemSelectionModel
from PySide6.QtGui import QKeySequence, QShortcut
from PySide6.QtWidgets import QWidget, QVBoxLayout, QTableView, QHeaderView, QMenu, QLabel, QStackedLayout

from core.errors import OutOfRange
from core.models import PlayerState
from ui.models.playlist_model import PlaylistModel

logger = logging.getLogger(__name__)


class PlaylistWidget(QWidget):
    """Track table bound to a PlaylistController; edits go straight to the controller."""

    addRequested = Signal()

    def __init__(self, controller, parent=None):
        super().__init__(parent)
        self.controller = controller

        self.table = QTableView()
        self.model = PlaylistModel()
        self.table.setModel(self.model)

        self.table.setSelectionBehavior(QTableView.SelectionBehavior.SelectRows)
        self.table.setSelectionMode(QTableView.SelectionMode.SingleSelection)
        self.table.verticalHeader().setVisible(False)
        self.table.setShowGrid(False)
        self.table.setAlternatingRowColors(True)
        self.table.verticalHeader().setDefaultSectionSize(26)
        header = self.table.horizontalHeader()
        header.setSectionResizeMode(0, QHeaderView.ResizeMode.ResizeToContents)
        header.setSectionResizeMode(1, QHeaderView.ResizeMode.Stretch)
        header.setSectionResizeMode(2, QHeaderView.ResizeMode.ResizeToContents)
        self.table.setObjectName("PlaylistTable")

        self.placeholder = QLabel("No tracks selected.")
        self.placeholder.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.placeholder.setObjectName("EmptyPlaylist")

        self._stack = QStackedLayout()
        self._stack.addWidget(self.placeholder)
        self._stack.addWidget(self.table)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addLayout(self._stack)

        self.table.doubleClicked.connect(self._on_double_click)
        self.table.setContextMenuPolicy(Qt.ContextMenuPolicy.CustomContextMenu)
        self.table.customContextMenuRequested.connect(self._on_context_menu)

        QShortcut(QKeySequence(QKeySequence.StandardKey.Delete), self.table, activated=self.remove_selected)
        QShortcut(QKeySequence("Ctrl+Up"), self.table, activated=lambda: self.move_selected(-1))
        QShortcut(QKeySequence("Ctrl+Down"), self.table, activated=lambda: self.move_selected(1))

        self.controller.stateChanged.connect(self.render_state)
        self._apply_styles()
        self.render_state(self.controller.state)

    # -------------------------
    # External API
    # -------------------------
    def render_state(self, state: PlayerState):
        selected = self.selected_row()
        self.model.set_state(state)
        self._stack.setCurrentWidget(self.table if state.playlist else self.placeholder)
        if 0 <= selected < self.model.rowCount():
            self._select_row(selected)

    def selected_row(self) -> int:
        idx = self.table.currentIndex()
        return idx.row() if idx.isValid() else -1

    def remove_selected(self):
        row = self.selected_row()
        if row >= 0:
            self._remove(row)

    def move_selected(self, delta: int):
        row = self.selected_row()
        if row >= 0:
            self._move(row, row + delta)

    # -------------------------
    # UI Events
    # -------------------------
    def _on_double_click(self, index):
        if index.isValid():
            self.controller.play_at(index.row())

    def _on_context_menu(self, pos):
        idx = self.table.indexAt(pos)
        menu = QMenu(self)
        act_add = menu.addAction("Add tracks…")
        if not idx.isValid():
            if menu.exec(self.table.viewport().mapToGlobal(pos)) == act_add:
                self.addRequested.emit()
            return

        row = idx.row()
        last = self.model.rowCount() - 1
        menu.addSeparator()
        act_play = menu.addAction("Play")
        act_up = menu.addAction("Move up")
        act_down = menu.addAction("Move down")
        act_top = menu.addAction("Move to top")
        act_bottom = menu.addAction("Move to bottom")
        menu.addSeparator()
        act_remove = menu.addAction("Remove")
        act_up.setEnabled(row > 0)
        act_top.setEnabled(row > 0)
        act_down.setEnabled(row < last)
        act_bottom.setEnabled(row < last)

        chosen = menu.exec(self.table.viewport().mapToGlobal(pos))
        if chosen == act_add:
            self.addRequested.emit()
        elif chosen == act_play:
            self.controller.play_at(row)
        elif chosen == act_up:
            self._move(row, row - 1)
        elif chosen == act_down:
            self._move(row, row + 1)
        elif chosen == act_top:
            self._move(row, 0)
        elif chosen == act_bottom:
            self._move(row, last)
        elif chosen == act_remove:
            self._remove(row)

    def _move(self, old: int, new: int):
        if new < 0 or new >= self.model.rowCount() or new == old:
            return
        try:
            self.controller.move(old, new)
        except OutOfRange:
            logger.exception("Move %d -> %d rejected", old, new)
            return
        self._select_row(new)

    def _remove(self, row: int):
        try:
            self.controller.remove_at(row)
        except OutOfRange:
            logger.exception("Remove %d rejected", row)

    def _select_row(self, row: int):
        sm = self.table.selectionModel()
        if sm is None:
            return
        idx = self.model.index(row, 0)
        sm.setCurrentIndex(idx, QItemSelectionModel.ClearAndSelect | QItemSelectionModel.Rows)

    def _apply_styles(self):
        self.setStyleSheet("""
        QTableView#PlaylistTable {
            background-color: #020617;
            alternate-background-color: #030712;
            border: none;
            color: #e5e7eb;
            gridline-color: #020617;
            selection-background-color: rgba(56, 189, 248, 0.2);
            selection-color: #e5e7eb;
        }

        QHeaderView::section {
            background-color: #020617;
            color: #9ca3af;
            padding: 4px 6px;
            border: none;
            border-bottom: 1px solid #111827;
            font-size: 11px;
            text-transform: uppercase;
        }

        QTableView::item {
            padding: 4px 6px;
        }

        QLabel#EmptyPlaylist {
            color: #6b7280;
            font-size: 13px;
        }
        """)
