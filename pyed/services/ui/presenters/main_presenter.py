from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable

from pyed.domain.errors import EditorError
from pyed.domain.intents import (
    EditPerformed,
    HighlightThemeChanged,
    NewDocument,
    OpenPathRequested,
    OpenRequested,
    SaveAsRequested,
    SaveRequested,
    TabActivated,
    TabClosed,
    ThemeChanged,
    ToggleSettingsPanel,
)
from pyed.domain.interfaces import ISettingsService
from pyed.domain.text_buffer import TextEdit
from pyed.services.editor_controller import EditorController, EditorState
from pyed.services.ui.ports.messages import IMessageService
from pyed.utils.constants import MAX_RECENTS

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class EditorSnapshot:
    """Read-only view of the editor state handed to the window on every render."""

    tab_labels: tuple[str, ...]
    dirty_flags: tuple[bool, ...]
    active_index: int | None
    active_doc_id: int | None
    active_text: str
    active_path: Path | None
    caret: int
    cursor: tuple[int, int]
    status_text: str
    error: EditorError | None
    editor_theme: str
    highlight_theme: str
    show_settings: bool

    @classmethod
    def from_state(cls, state: EditorState) -> EditorSnapshot:
        docs = state.documents
        active = docs.active()
        error = state.current_error
        if error is not None and error.is_fault:
            status = error.describe()
        elif active is None:
            status = "No file open"
        elif active.source_path is not None:
            status = str(active.source_path)
        else:
            status = "New File"
        return cls(
            tab_labels=tuple(docs.labels()),
            dirty_flags=tuple(d.is_dirty for d in docs),
            active_index=docs.active_index,
            active_doc_id=active.doc_id if active else None,
            active_text=active.text() if active else "",
            active_path=active.source_path if active else None,
            caret=active.content.caret if active else 0,
            cursor=active.content.cursor_position() if active else (0, 0),
            status_text=status,
            error=error,
            editor_theme=state.editor_theme,
            highlight_theme=state.highlight_theme,
            show_settings=state.show_settings,
        )


@runtime_checkable
class IMainView(Protocol):
    """Passive view surface (implemented by the Qt MainWindow)."""

    def show_snapshot(self, snapshot: EditorSnapshot) -> None: ...
    def set_recents(self, items: list[str]) -> None: ...
    def show_status(self, text: str, msec: int = 3000) -> None: ...


class MainPresenter:
    """
    Turns view gestures into intents and controller state into snapshots.

    Owns the bits of UI policy that are not document state: discard
    confirmations, the recent-files list and persisting theme choices.
    """

    def __init__(
        self,
        view: IMainView,
        controller: EditorController,
        settings: ISettingsService,
        messages: IMessageService,
    ) -> None:
        self.view = view
        self.controller = controller
        self.settings = settings
        self.messages = messages
        self.recents: list[str] = settings.get_recent()

        self._persisted_themes = (controller.state.editor_theme, controller.state.highlight_theme)

        controller.state_changed.connect(self._on_state_changed)
        controller.file_synced.connect(self._on_file_synced)

    @property
    def snapshot(self) -> EditorSnapshot:
        return EditorSnapshot.from_state(self.controller.state)

    def start(self, start_path: Path | None = None) -> None:
        self.view.set_recents(list(self.recents))
        self.view.show_snapshot(self.snapshot)
        if start_path is not None:
            self.open_path(start_path)

    # ---------- gestures ----------
    def new_document(self) -> None:
        self.controller.dispatch(NewDocument())

    def open_dialog(self) -> None:
        self.controller.dispatch(OpenRequested())

    def open_path(self, path: Path) -> None:
        self.controller.dispatch(OpenPathRequested(path))

    def save(self) -> None:
        self.controller.dispatch(SaveRequested())

    def save_as(self) -> None:
        self.controller.dispatch(SaveAsRequested())

    def edit(self, action: TextEdit) -> None:
        self.controller.dispatch(EditPerformed(action))

    def activate_tab(self, index: int) -> None:
        self.controller.dispatch(TabActivated(index))

    def close_tab(self, index: int) -> bool:
        docs = self.controller.state.documents.documents
        if not 0 <= index < len(docs):
            return False
        doc = docs[index]
        if doc.is_dirty and not self.messages.ask(
            self.view,
            "Discard changes?",
            f"{doc.display_name} has unsaved changes. Close it anyway?",
        ):
            LOGGER.debug("Kept %s open; discard declined", doc.display_name)
            return False
        self.controller.dispatch(TabClosed(index))
        return True

    def close_active_tab(self) -> bool:
        index = self.controller.state.documents.active_index
        return False if index is None else self.close_tab(index)

    def set_editor_theme(self, theme: str) -> None:
        self.controller.dispatch(ThemeChanged(theme))

    def set_highlight_theme(self, theme: str) -> None:
        self.controller.dispatch(HighlightThemeChanged(theme))

    def show_settings(self, visible: bool) -> None:
        self.controller.dispatch(ToggleSettingsPanel(visible))

    def confirm_quit(self) -> bool:
        dirty = [d.display_name for d in self.controller.state.documents if d.is_dirty]
        if not dirty:
            return True
        return self.messages.ask(
            self.view,
            "Discard changes?",
            f"{len(dirty)} document(s) have unsaved changes: {', '.join(dirty)}. Quit anyway?",
        )

    # ---------- controller callbacks ----------
    def _on_state_changed(self, state: EditorState) -> None:
        themes = (state.editor_theme, state.highlight_theme)
        if themes != self._persisted_themes:
            self.settings.set_editor_theme(state.editor_theme)
            self.settings.set_highlight_theme(state.highlight_theme)
            self._persisted_themes = themes
        self.view.show_snapshot(EditorSnapshot.from_state(state))

    def _on_file_synced(self, path: Path) -> None:
        s = str(path)
        if s in self.recents:
            self.recents.remove(s)
        self.recents.insert(0, s)
        self.recents = self.recents[:MAX_RECENTS]
        self.settings.set_recent(self.recents)
        self.view.set_recents(list(self.recents))
        self.view.show_status(f"Synced: {path}")
