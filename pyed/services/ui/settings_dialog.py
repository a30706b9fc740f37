from __future__ import annotations

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import (
    QComboBox,
    QDialog,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
)

from pyed.services.ui.themes import EDITOR_THEME_NAMES, editor_themes, highlight_themes


class SettingsDialog(QDialog):
    """Modal settings panel: editor theme and code-highlight theme pickers."""

    editor_theme_selected = pyqtSignal(str)
    highlight_theme_selected = pyqtSignal(str)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Settings")
        self.setModal(True)
        self._syncing = False

        # Widgets
        self.highlight_combo = QComboBox()
        for name in highlight_themes():
            self.highlight_combo.addItem(name, name)

        self.theme_combo = QComboBox()
        for theme_id in editor_themes():
            self.theme_combo.addItem(EDITOR_THEME_NAMES[theme_id], theme_id)

        self.close_btn = QPushButton("Close")

        # Layout
        form = QGridLayout()
        form.addWidget(QLabel("Code Highlight Theme:"), 0, 0)
        form.addWidget(self.highlight_combo, 0, 1)
        form.addWidget(QLabel("Editor Theme:"), 1, 0)
        form.addWidget(self.theme_combo, 1, 1)

        buttons = QHBoxLayout()
        buttons.addStretch(1)
        buttons.addWidget(self.close_btn)

        root = QVBoxLayout(self)
        root.addLayout(form)
        root.addLayout(buttons)

        # Signals
        self.close_btn.clicked.connect(self.reject)
        self.theme_combo.currentIndexChanged.connect(self._on_theme_index)
        self.highlight_combo.currentIndexChanged.connect(self._on_highlight_index)

    def set_selection(self, editor_theme: str, highlight_theme: str) -> None:
        """Reflect current preferences without re-emitting them."""
        self._syncing = True
        try:
            i = self.theme_combo.findData(editor_theme)
            if i >= 0:
                self.theme_combo.setCurrentIndex(i)
            j = self.highlight_combo.findData(highlight_theme)
            if j >= 0:
                self.highlight_combo.setCurrentIndex(j)
        finally:
            self._syncing = False

    def _on_theme_index(self, index: int) -> None:
        if not self._syncing and index >= 0:
            self.editor_theme_selected.emit(self.theme_combo.itemData(index))

    def _on_highlight_index(self, index: int) -> None:
        if not self._syncing and index >= 0:
            self.highlight_theme_selected.emit(self.highlight_combo.itemData(index))
