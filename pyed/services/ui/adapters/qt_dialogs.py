from __future__ import annotations

from pathlib import Path
from typing import Any

from PyQt6.QtWidgets import QFileDialog

from pyed.services.ui.ports.dialogs import IFileDialogService


class QtFileDialogService(IFileDialogService):
    """Native Qt file pickers. Starts in the folder of the last chosen file when no start is given."""

    def __init__(self) -> None:
        self._last_dir: Path | None = None

    def get_open_file(
        self,
        parent: Any | None,
        caption: str,
        start_dir: str | None,
        filter_str: str,
    ) -> Path | None:
        path_str, _ = QFileDialog.getOpenFileName(
            parent, caption, start_dir or self._start(), filter_str
        )
        return self._remember(path_str)

    def get_save_file(
        self,
        parent: Any | None,
        caption: str,
        start_path: str | None,
        filter_str: str,
    ) -> Path | None:
        path_str, _ = QFileDialog.getSaveFileName(
            parent, caption, start_path or self._start(), filter_str
        )
        return self._remember(path_str)

    def _start(self) -> str:
        return str(self._last_dir) if self._last_dir else ""

    def _remember(self, path_str: str) -> Path | None:
        if not path_str:
            return None
        path = Path(path_str)
        self._last_dir = path.parent
        return path
