# ui/file_source.py
from __future__ import annotations

from PySide6.QtWidgets import QFileDialog, QWidget

from library.audio_files import AUDIO_EXTS


def audio_name_filter() -> str:
    patterns = " ".join(f"*{ext}" for ext in sorted(AUDIO_EXTS))
    return f"Audio files ({patterns})"


class DialogFileSource:
    def __init__(self, parent: QWidget | None = None, start_dir: str = ""):
        self.parent = parent
        self.start_dir = start_dir

    def pick(self) -> list[str]:
        # cancel -> ([], "")
        paths, _ = QFileDialog.getOpenFileNames(
            self.parent,
            "Add tracks",
            self.start_dir,
            audio_name_filter(),
        )
        return list(paths)
