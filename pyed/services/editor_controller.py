from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from PyQt6.QtCore import QObject, pyqtSignal

from pyed.domain.errors import EditorError
from pyed.domain.intents import (
    EditPerformed,
    Effect,
    HighlightThemeChanged,
    Intent,
    LoadPath,
    NewDocument,
    OpenCompleted,
    OpenPathRequested,
    OpenRequested,
    PickAndLoad,
    SaveAsRequested,
    SaveCompleted,
    SaveRequested,
    SaveText,
    TabActivated,
    TabClosed,
    ThemeChanged,
    ToggleSettingsPanel,
)
from pyed.domain.interfaces import IAsyncFileService
from pyed.domain.models import DocumentSet
from pyed.utils.constants import DEFAULT_EDITOR_THEME, DEFAULT_HIGHLIGHT_THEME

LOGGER = logging.getLogger(__name__)


@dataclass
class EditorState:
    documents: DocumentSet = field(default_factory=DocumentSet)
    current_error: EditorError | None = None
    editor_theme: str = DEFAULT_EDITOR_THEME
    highlight_theme: str = DEFAULT_HIGHLIGHT_THEME
    show_settings: bool = False


class EditorController(QObject):
    """
    Single-threaded reducer over EditorState.

    `handle()` applies one intent and returns the file effect it requests, if any.
    `dispatch()` is the entry point for everyone else: intents are queued and
    processed one at a time, effects are handed to the async file service, and
    `state_changed` fires after each intent. Result intents from the file service
    come back through `dispatch()` as well.
    """

    state_changed = pyqtSignal(object)  # EditorState
    file_synced = pyqtSignal(object)  # Path, after a successful open or save

    def __init__(
        self,
        files: IAsyncFileService | None = None,
        *,
        state: EditorState | None = None,
        strict: bool = False,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._files = files
        self._state = state or EditorState()
        self._strict = strict
        self._queue: deque[Intent] = deque()
        self._draining = False
        self._handlers: dict[type, Callable[..., Effect | None]] = {
            NewDocument: self._on_new,
            OpenRequested: self._on_open_requested,
            OpenPathRequested: self._on_open_path,
            OpenCompleted: self._on_open_completed,
            SaveRequested: self._on_save_requested,
            SaveAsRequested: self._on_save_as_requested,
            SaveCompleted: self._on_save_completed,
            EditPerformed: self._on_edit,
            TabActivated: self._on_tab_activated,
            TabClosed: self._on_tab_closed,
            ThemeChanged: self._on_theme,
            HighlightThemeChanged: self._on_highlight_theme,
            ToggleSettingsPanel: self._on_toggle_settings,
        }

    @property
    def state(self) -> EditorState:
        return self._state

    # ---------- entry points ----------
    def dispatch(self, intent: Intent) -> None:
        self._queue.append(intent)
        if self._draining:
            return
        self._draining = True
        try:
            while self._queue:
                current = self._queue.popleft()
                effect = self.handle(current)
                if effect is not None:
                    self._run(effect)
                self.state_changed.emit(self._state)
        except BaseException:
            # intents queued behind a failing one belong to the aborted run
            self._queue.clear()
            raise
        finally:
            self._draining = False

    def handle(self, intent: Intent) -> Effect | None:
        handler = self._handlers.get(type(intent))
        if handler is None:
            raise TypeError(f"Unsupported intent: {intent!r}")
        LOGGER.debug("intent %s", type(intent).__name__)
        return handler(intent)

    # ---------- document intents ----------
    def _on_new(self, _: NewDocument) -> None:
        self._state.documents.insert_new()

    def _on_open_requested(self, _: OpenRequested) -> Effect:
        return PickAndLoad()

    def _on_open_path(self, intent: OpenPathRequested) -> Effect | None:
        existing = self._state.documents.find_by_path(intent.path)
        if existing is not None:
            self._state.documents.set_active(existing)
            return None
        return LoadPath(intent.path)

    def _on_open_completed(self, intent: OpenCompleted) -> None:
        if not intent.ok:
            self._record(intent.error)
            return
        loaded = intent.loaded
        docs = self._state.documents
        existing = docs.find_by_path(loaded.path)
        if existing is not None:
            LOGGER.info("%s is already open; activating tab %d", loaded.path, existing)
            docs.set_active(existing)
        else:
            docs.insert_loaded(loaded.path, loaded.text, loaded.display_name)
        self._state.current_error = None
        self.file_synced.emit(loaded.path)

    def _on_save_requested(self, _: SaveRequested) -> Effect | None:
        doc = self._state.documents.active()
        if doc is None:
            return None
        return SaveText(doc.doc_id, doc.source_path, doc.text(), doc.newline)

    def _on_save_as_requested(self, _: SaveAsRequested) -> Effect | None:
        doc = self._state.documents.active()
        if doc is None:
            return None
        return SaveText(doc.doc_id, None, doc.text(), doc.newline)

    def _on_save_completed(self, intent: SaveCompleted) -> None:
        if not intent.ok:
            self._record(intent.error)
            return
        docs = self._state.documents
        index = self._locate_save_target(intent.path, intent.document_id)
        if index is None:
            LOGGER.error(
                "Reconciliation failed: save of %s (document %s) matches no open tab",
                intent.path,
                intent.document_id,
            )
            self._state.current_error = EditorError.reconciliation(intent.path, intent.document_id)
            return
        doc = docs.documents[index]
        doc.mark_saved(intent.path, intent.text)
        if doc.is_dirty:
            LOGGER.info("%s changed while it was being saved; still modified", intent.path)
        self._state.current_error = None
        self.file_synced.emit(intent.path)

    def _on_edit(self, intent: EditPerformed) -> None:
        doc = self._state.documents.active()
        if doc is None:
            return
        doc.apply_edit(intent.action)
        self._state.current_error = None

    def _on_tab_activated(self, intent: TabActivated) -> None:
        try:
            self._state.documents.set_active(intent.index)
        except IndexError as exc:
            self._contract_violation(f"TabActivated: {exc}")

    def _on_tab_closed(self, intent: TabClosed) -> None:
        try:
            closed = self._state.documents.remove(intent.index)
        except IndexError as exc:
            self._contract_violation(f"TabClosed: {exc}")
            return
        LOGGER.debug("closed tab %d (%s)", intent.index, closed.display_name)

    # ---------- presentation preferences ----------
    def _on_theme(self, intent: ThemeChanged) -> None:
        self._state.editor_theme = intent.theme

    def _on_highlight_theme(self, intent: HighlightThemeChanged) -> None:
        self._state.highlight_theme = intent.theme

    def _on_toggle_settings(self, intent: ToggleSettingsPanel) -> None:
        self._state.show_settings = intent.visible

    # ---------- helpers ----------
    def _locate_save_target(self, path: Path, document_id: int | None) -> int | None:
        docs = self._state.documents
        if document_id is not None:
            return docs.find_by_id(document_id)
        return docs.find_by_path(path)

    def _record(self, error: EditorError | None) -> None:
        if error is not None and error.is_fault:
            LOGGER.warning("File operation failed: %s", error.describe())
        self._state.current_error = error

    def _contract_violation(self, message: str) -> None:
        LOGGER.error("Contract violation ignored: %s", message)
        if self._strict:
            raise AssertionError(message)

    def _run(self, effect: Effect) -> None:
        if self._files is None:
            LOGGER.error("No file service attached; dropping %s", type(effect).__name__)
            return
        if isinstance(effect, PickAndLoad):
            self._files.pick_and_load()
        elif isinstance(effect, LoadPath):
            self._files.load(effect.path)
        elif isinstance(effect, SaveText):
            self._files.save(
                effect.path, effect.text, document_id=effect.document_id, newline=effect.newline
            )
