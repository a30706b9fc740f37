from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Protocol


class IFileService(Protocol):
    """Read/write text files. Writes should be atomic when possible."""

    def read_text(self, path: Path) -> str: ...
    def write_text_atomic(self, path: Path, text: str) -> None: ...


class IAsyncFileService(Protocol):
    """
    Off-thread file picking and disk I/O.

    Nothing is returned directly: each call eventually emits exactly one result
    intent (OpenCompleted or SaveCompleted) on the service's `finished` signal.
    """

    def pick_and_load(self) -> None: ...
    def load(self, path: Path) -> None: ...
    def save(
        self,
        path: Path | None,
        text: str,
        *,
        document_id: int | None = None,
        newline: str = "\n",
    ) -> None: ...


class ISettingsService(Protocol):
    """Persist and retrieve lightweight UI state."""

    def get_geometry(self) -> bytes | None: ...
    def set_geometry(self, blob: bytes) -> None: ...
    def get_recent(self) -> list[str]: ...
    def set_recent(self, recent: Iterable[str]) -> None: ...
    def get_editor_theme(self) -> str | None: ...
    def set_editor_theme(self, theme: str) -> None: ...
    def get_highlight_theme(self) -> str | None: ...
    def set_highlight_theme(self, theme: str) -> None: ...


class IConfigService(Protocol):
    """Read-only key/value configuration grouped in sections."""

    def get(self, section: str, key: str, default: str | None = None) -> str | None: ...
    def get_int(self, section: str, key: str, default: int | None = None) -> int | None: ...
    def get_bool(self, section: str, key: str, default: bool | None = None) -> bool | None: ...
    def as_dict(self) -> Mapping[str, Mapping[str, str]]: ...
