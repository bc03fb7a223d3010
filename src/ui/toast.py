from PySide6.QtWidgets import QFrame, QLabel, QHBoxLayout, QWidget
from PySide6.QtCore import Qt, QTimer

from core.state import Notify

KINDS = {"info", "success", "warning", "error"}

class Toast(QFrame):
    def __init__(self, parent, text: str, kind: str = "info", ms: int = 3000):
        super().__init__(parent)
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)
        self.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents, True)

        self.label = QLabel(text)
        self.label.setWordWrap(True)
        layout = QHBoxLayout(self)
        layout.setContentsMargins(12, 8, 12, 8)
        layout.addWidget(self.label)

        self.setObjectName(f"toast-{kind}")
        self.setStyleSheet("""
        QFrame { border-radius: 10px; background: #0b1222; border: 1px solid #38bdf8; }
        QFrame#toast-success { background: #052e1a; border-color: #16a34a; }
        QFrame#toast-warning { background: #2a1a05; border-color: #f59e0b; }
        QFrame#toast-error { background: #2a0a0a; border-color: #ef4444; }
        QLabel { color: #e5e7eb; font-size: 12px; border: none; background: transparent; }
        """)

        QTimer.singleShot(ms, self.close)


class ToastManager:
    """Stacks toasts in the bottom-right corner of `host`, newest at the bottom."""

    def __init__(self, host: QWidget, margin: int = 16, spacing: int = 8, max_visible: int = 4):
        self.host = host
        self.margin = margin
        self.spacing = spacing
        self.max_visible = max_visible
        self._toasts: list[Toast] = []

    def show_notify(self, n: Notify, ms: int = 3000):
        kind = (n.notify_type or "info").lower()
        if kind == "warn":
            kind = "warning"
        if kind not in KINDS:
            kind = "info"
        self.show_toast(n.message, kind, ms)

    def show_toast(self, text: str, kind: str = "info", ms: int = 3000):
        toast = Toast(self.host, text, kind, ms)
        toast.destroyed.connect(lambda *_: self._forget(toast))
        toast.setAttribute(Qt.WidgetAttribute.WA_DeleteOnClose, True)
        toast.setFixedWidth(min(420, max(240, self.host.width() // 2)))
        self._toasts.append(toast)
        while len(self._toasts) > self.max_visible:
            self._toasts.pop(0).close()
        toast.show()
        toast.raise_()
        self._layout()

    def _forget(self, toast: Toast):
        if toast in self._toasts:
            self._toasts.remove(toast)
            self._layout()

    def _layout(self):
        y = self.host.height() - self.margin
        for toast in reversed(self._toasts):
            toast.adjustSize()
            y -= toast.height()
            toast.move(self.host.width() - toast.width() - self.margin, y)
            y -= self.spacing
