"""
Intents consumed by the EditorController and the effects it asks the file service to run.

Result intents (OpenCompleted / SaveCompleted) carry either a payload or an error,
never both.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from pyed.domain.errors import EditorError
from pyed.domain.text_buffer import TextEdit


@dataclass(frozen=True)
class LoadedFile:
    path: Path
    text: str
    display_name: str


# ---------- user intents ----------
@dataclass(frozen=True)
class NewDocument:
    pass


@dataclass(frozen=True)
class OpenRequested:
    pass


@dataclass(frozen=True)
class OpenPathRequested:
    path: Path


@dataclass(frozen=True)
class SaveRequested:
    pass


@dataclass(frozen=True)
class SaveAsRequested:
    pass


@dataclass(frozen=True)
class EditPerformed:
    action: TextEdit


@dataclass(frozen=True)
class TabActivated:
    index: int


@dataclass(frozen=True)
class TabClosed:
    index: int


@dataclass(frozen=True)
class ThemeChanged:
    theme: str


@dataclass(frozen=True)
class HighlightThemeChanged:
    theme: str


@dataclass(frozen=True)
class ToggleSettingsPanel:
    visible: bool


# ---------- result intents ----------
@dataclass(frozen=True)
class OpenCompleted:
    loaded: LoadedFile | None = None
    error: EditorError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.loaded is not None


@dataclass(frozen=True)
class SaveCompleted:
    path: Path | None = None
    error: EditorError | None = None
    document_id: int | None = None
    # buffer text the write was made from, LF line endings
    text: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.path is not None


Intent = (
    NewDocument
    | OpenRequested
    | OpenPathRequested
    | SaveRequested
    | SaveAsRequested
    | EditPerformed
    | TabActivated
    | TabClosed
    | ThemeChanged
    | HighlightThemeChanged
    | ToggleSettingsPanel
    | OpenCompleted
    | SaveCompleted
)


# ---------- effects ----------
@dataclass(frozen=True)
class PickAndLoad:
    pass


@dataclass(frozen=True)
class LoadPath:
    path: Path


@dataclass(frozen=True)
class SaveText:
    document_id: int
    path: Path | None
    text: str
    newline: str = "\n"


Effect = PickAndLoad | LoadPath | SaveText
