from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import pytest
from PyQt6.QtCore import QSettings
from PyQt6.QtWidgets import QApplication

from pyed.services.file_service import FileService
from pyed.services.settings_service import SettingsService

# Headless by default; an explicit QT_QPA_PLATFORM wins.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


# --- Fallback QApplication fixture (works with or without pytest-qt) ---
@pytest.fixture(scope="session")
def qapp():
    """Provide a QApplication for tests that need Qt.
    Creates one if not present; reuses existing otherwise.
    """
    app = QApplication.instance()
    created = False
    if app is None:
        app = QApplication([])
        created = True
    try:
        yield app
    finally:
        # Don't forcibly quit a shared app; only close if we created it here.
        if created:
            app.quit()


# --- Fakes shared by controller / service / window tests ---


class FakeDialogs:
    """IFileDialogService stand-in returning canned answers and recording calls."""

    def __init__(self, open_result: Path | None = None, save_result: Path | None = None):
        self.open_result = open_result
        self.save_result = save_result
        self.calls: list[str] = []

    def get_open_file(self, parent: Any, caption: str, start_dir: str | None, filter_str: str):
        self.calls.append("open")
        return self.open_result

    def get_save_file(self, parent: Any, caption: str, start_path: str | None, filter_str: str):
        self.calls.append("save")
        return self.save_result


class FakeMessages:
    """IMessageService stand-in with a fixed answer."""

    def __init__(self, answer: bool = True):
        self.answer = answer
        self.asked: list[tuple[str, str]] = []

    def ask(self, parent: Any, title: str, text: str) -> bool:
        self.asked.append((title, text))
        return self.answer


class FakeAsyncFiles:
    """IAsyncFileService stand-in: records requests; tests dispatch the results themselves."""

    def __init__(self):
        self.calls: list[tuple] = []
        self.newlines: list[str] = []

    def pick_and_load(self) -> None:
        self.calls.append(("pick_and_load",))

    def load(self, path: Path) -> None:
        self.calls.append(("load", path))

    def save(
        self,
        path: Path | None,
        text: str,
        *,
        document_id: int | None = None,
        newline: str = "\n",
    ) -> None:
        self.calls.append(("save", path, text, document_id))
        self.newlines.append(newline)


# --- Other common fixtures ---


@pytest.fixture()
def tmp_settings_path(tmp_path: Path) -> Path:
    return tmp_path / "settings.ini"


@pytest.fixture()
def qsettings(tmp_settings_path: Path) -> QSettings:
    # Use an INI file so we don't touch system registry / platform stores
    s = QSettings(str(tmp_settings_path), QSettings.Format.IniFormat)
    s.clear()
    return s


@pytest.fixture()
def settings_service(qsettings: QSettings) -> SettingsService:
    return SettingsService(qsettings)


@pytest.fixture()
def file_service() -> FileService:
    return FileService()


@pytest.fixture()
def fake_files() -> FakeAsyncFiles:
    return FakeAsyncFiles()


@pytest.fixture()
def fake_messages() -> FakeMessages:
    return FakeMessages()
