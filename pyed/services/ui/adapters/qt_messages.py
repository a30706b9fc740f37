from __future__ import annotations

from typing import Any

from PyQt6.QtWidgets import QMessageBox

from pyed.services.ui.ports.messages import IMessageService


class QtMessageService(IMessageService):
    """Yes/No confirmations through QMessageBox."""

    def ask(self, parent: Any | None, title: str, text: str) -> bool:
        resp = QMessageBox.question(
            parent,
            title,
            text,
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
            QMessageBox.StandardButton.No,
        )
        return resp == QMessageBox.StandardButton.Yes
