from __future__ import annotations

from typing import Iterable

from PyQt6.QtCore import QByteArray, QSettings

from pyed.domain.interfaces import ISettingsService
from pyed.utils.constants import (
    MAX_RECENTS,
    SETTINGS_EDITOR_THEME,
    SETTINGS_GEOMETRY,
    SETTINGS_HIGHLIGHT_THEME,
    SETTINGS_RECENTS,
)


class SettingsService(ISettingsService):
    """Persist small UI bits: window geometry, recent files and chosen themes."""

    def __init__(self, qsettings: QSettings) -> None:
        self._s = qsettings

    def get_geometry(self) -> bytes | None:
        v = self._s.value(SETTINGS_GEOMETRY)
        return bytes(v) if isinstance(v, QByteArray) else None

    def set_geometry(self, blob: bytes) -> None:
        self._s.setValue(SETTINGS_GEOMETRY, QByteArray(blob))

    def get_recent(self) -> list[str]:
        v = self._s.value(SETTINGS_RECENTS, [])
        # INI backends hand back a bare string for one-element lists
        if isinstance(v, str):
            v = [v]
        return [str(x) for x in v if x][:MAX_RECENTS] if isinstance(v, list) else []

    def set_recent(self, recent: Iterable[str]) -> None:
        self._s.setValue(SETTINGS_RECENTS, list(recent)[:MAX_RECENTS])

    def get_editor_theme(self) -> str | None:
        return self._str_value(SETTINGS_EDITOR_THEME)

    def set_editor_theme(self, theme: str) -> None:
        self._s.setValue(SETTINGS_EDITOR_THEME, theme)

    def get_highlight_theme(self) -> str | None:
        return self._str_value(SETTINGS_HIGHLIGHT_THEME)

    def set_highlight_theme(self, theme: str) -> None:
        self._s.setValue(SETTINGS_HIGHLIGHT_THEME, theme)

    def _str_value(self, key: str) -> str | None:
        v = self._s.value(key)
        return v if isinstance(v, str) and v else None
