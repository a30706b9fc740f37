from __future__ import annotations

import logging
from pathlib import Path

from PyQt6.QtCore import QByteArray
from PyQt6.QtGui import QAction, QFontDatabase, QKeySequence
from PyQt6.QtWidgets import (
    QLabel,
    QMainWindow,
    QMenu,
    QPlainTextEdit,
    QStatusBar,
    QTabBar,
    QVBoxLayout,
    QWidget,
)

from pyed.domain.interfaces import ISettingsService
from pyed.domain.text_buffer import TextEdit
from pyed.services.ui.highlighter import PygmentsHighlighter
from pyed.services.ui.presenters.main_presenter import EditorSnapshot, MainPresenter
from pyed.services.ui.settings_dialog import SettingsDialog
from pyed.services.ui.themes import error_color, stylesheet_for
from pyed.utils.constants import APP_NAME, STATUS_MSEC

LOGGER = logging.getLogger(__name__)

DIRTY_MARK = " •"


def qt_position(text: str, index: int) -> int:
    """Qt cursor position (UTF-16 code units) of the code point offset `index` in `text`."""
    return len(text[:index].encode("utf-16-le")) // 2


class MainWindow(QMainWindow):
    """
    Passive tabbed editor window.

    Widgets are rebuilt from an EditorSnapshot in `show_snapshot()`; user gestures are
    forwarded to the presenter. Text edits are diffed against the last rendered
    text and reported as a single TextEdit each.
    """

    def __init__(
        self,
        settings: ISettingsService,
        *,
        tab_width: int = 4,
        font_point_size: int | None = None,
        app_title: str = APP_NAME,
    ) -> None:
        super().__init__()
        self.app_title = app_title
        self.setWindowTitle(app_title)
        self.resize(1000, 700)

        self.settings = settings
        self.presenter: MainPresenter | None = None

        # Rendering guard: widget signals fired while applying a snapshot are ignored
        self._syncing = False
        self._shown_doc_id: int | None = None
        self._shown_text = ""
        self._tabs_key: tuple[tuple[str, ...], tuple[bool, ...]] | None = None
        self._theme: str | None = None

        # Widgets
        self.tab_bar = QTabBar(self)
        self.tab_bar.setTabsClosable(True)
        self.tab_bar.setMovable(False)
        self.tab_bar.setExpanding(False)
        self.tab_bar.setDocumentMode(True)

        self.editor = QPlainTextEdit(self)
        font = QFontDatabase.systemFont(QFontDatabase.SystemFont.FixedFont)
        if font_point_size:
            font.setPointSize(font_point_size)
        self.editor.setFont(font)
        self.editor.setTabStopDistance(tab_width * self.editor.fontMetrics().horizontalAdvance(" "))
        self.editor.setLineWrapMode(QPlainTextEdit.LineWrapMode.NoWrap)

        self.highlighter = PygmentsHighlighter(self.editor.document())

        central = QWidget(self)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)
        layout.addWidget(self.tab_bar)
        layout.addWidget(self.editor)
        self.setCentralWidget(central)

        self.status_label = QLabel(self)
        self.position_label = QLabel(self)
        status = QStatusBar(self)
        status.addWidget(self.status_label, 1)
        status.addPermanentWidget(self.position_label)
        self.setStatusBar(status)

        self.settings_dialog = SettingsDialog(self)

        # Signals
        self.editor.textChanged.connect(self._on_text_changed)
        self.editor.cursorPositionChanged.connect(self._update_position)
        self.tab_bar.currentChanged.connect(self._on_tab_changed)
        self.tab_bar.tabCloseRequested.connect(self._on_tab_close_requested)
        self.settings_dialog.editor_theme_selected.connect(self._on_editor_theme_selected)
        self.settings_dialog.highlight_theme_selected.connect(self._on_highlight_theme_selected)
        self.settings_dialog.finished.connect(self._on_settings_finished)

        # UI
        self._build_actions()
        self._build_menu()

        # Restore UI state
        geo = self.settings.get_geometry()
        if isinstance(geo, (bytes, bytearray)):
            self.restoreGeometry(QByteArray(geo))

        # DnD
        self.setAcceptDrops(True)

    def attach_presenter(self, presenter: MainPresenter) -> None:
        self.presenter = presenter

    # ---------- UI creation ----------
    def _build_actions(self):
        self.act_new = QAction(
            "New", self, shortcut=QKeySequence.StandardKey.New, triggered=self._new_file
        )
        self.act_open = QAction(
            "Open…",
            self,
            shortcut=QKeySequence.StandardKey.Open,
            triggered=self._open_dialog,
        )
        self.act_save = QAction(
            "Save", self, shortcut=QKeySequence.StandardKey.Save, triggered=self._save
        )
        self.act_save_as = QAction(
            "Save As…",
            self,
            shortcut=QKeySequence.StandardKey.SaveAs,
            triggered=self._save_as,
        )
        self.act_close_tab = QAction(
            "Close Tab", self, shortcut=QKeySequence.StandardKey.Close, triggered=self._close_tab
        )
        self.act_settings = QAction(
            "Settings…", self, shortcut="Ctrl+,", triggered=self._open_settings
        )
        self.exit_action = QAction("&Exit", self)
        self.exit_action.setShortcut("Ctrl+Q")
        self.exit_action.setStatusTip("Exit application")
        self.exit_action.triggered.connect(self.close)

        self.recent_menu = QMenu("Open Recent", self)

    def _build_menu(self):
        m = self.menuBar()
        filem = m.addMenu("&File")
        filem.addAction(self.act_new)
        filem.addAction(self.act_open)
        filem.addMenu(self.recent_menu)
        filem.addSeparator()
        filem.addAction(self.act_save)
        filem.addAction(self.act_save_as)
        filem.addAction(self.act_close_tab)
        filem.addSeparator()
        filem.addAction(self.act_settings)
        filem.addSeparator()
        filem.addAction(self.exit_action)
        self.set_recents([])

    # ---------- IMainView ----------
    def show_snapshot(self, snapshot: EditorSnapshot) -> None:
        self._syncing = True
        try:
            self._render_tabs(snapshot)
            self._render_editor(snapshot)
            self._render_theme(snapshot)
            self._render_status(snapshot)
            self._render_settings(snapshot)
            self._update_title(snapshot)
        finally:
            self._syncing = False
        self._update_position()

    def set_recents(self, items: list[str]) -> None:
        self.recent_menu.clear()
        if not items:
            na = QAction("(empty)", self)
            na.setEnabled(False)
            self.recent_menu.addAction(na)
            return
        for p in items:
            self.recent_menu.addAction(
                QAction(p, self, triggered=lambda chk=False, x=p: self._open_path(Path(x)))
            )

    def show_status(self, text: str, msec: int = STATUS_MSEC) -> None:
        self.statusBar().showMessage(text, msec)

    # ---------- rendering ----------
    def _render_tabs(self, snapshot: EditorSnapshot) -> None:
        key = (snapshot.tab_labels, snapshot.dirty_flags)
        self.tab_bar.blockSignals(True)
        try:
            if key != self._tabs_key:
                while self.tab_bar.count():
                    self.tab_bar.removeTab(self.tab_bar.count() - 1)
                for label, dirty in zip(snapshot.tab_labels, snapshot.dirty_flags):
                    self.tab_bar.addTab(label + (DIRTY_MARK if dirty else ""))
                self._tabs_key = key
            if snapshot.active_index is not None:
                self.tab_bar.setCurrentIndex(snapshot.active_index)
        finally:
            self.tab_bar.blockSignals(False)

    def _render_editor(self, snapshot: EditorSnapshot) -> None:
        has_doc = snapshot.active_index is not None
        self.editor.setReadOnly(not has_doc)
        self.editor.setPlaceholderText(
            "" if has_doc else "Press Ctrl+N for a new file or Ctrl+O to open one"
        )
        for act in (self.act_save, self.act_save_as, self.act_close_tab):
            act.setEnabled(has_doc)

        if snapshot.active_doc_id != self._shown_doc_id or snapshot.active_text != self._shown_text:
            self.editor.setPlainText(snapshot.active_text)
            cursor = self.editor.textCursor()
            cursor.setPosition(qt_position(snapshot.active_text, snapshot.caret))
            self.editor.setTextCursor(cursor)
            self._shown_doc_id = snapshot.active_doc_id
            self._shown_text = snapshot.active_text
        self.highlighter.configure(snapshot.active_path, snapshot.highlight_theme)

    def _render_theme(self, snapshot: EditorSnapshot) -> None:
        if snapshot.editor_theme != self._theme:
            self.setStyleSheet(stylesheet_for(snapshot.editor_theme))
            self._theme = snapshot.editor_theme

    def _render_status(self, snapshot: EditorSnapshot) -> None:
        self.status_label.setText(snapshot.status_text)
        if snapshot.error is not None and snapshot.error.is_fault:
            self.status_label.setStyleSheet(f"color: {error_color(snapshot.editor_theme)};")
        else:
            self.status_label.setStyleSheet("")

    def _render_settings(self, snapshot: EditorSnapshot) -> None:
        dialog = self.settings_dialog
        dialog.set_selection(snapshot.editor_theme, snapshot.highlight_theme)
        if snapshot.show_settings and not dialog.isVisible():
            dialog.show()
        elif not snapshot.show_settings and dialog.isVisible():
            dialog.hide()

    def _update_title(self, snapshot: EditorSnapshot) -> None:
        i = snapshot.active_index
        if i is None:
            self.setWindowTitle(self.app_title)
            return
        star = DIRTY_MARK if snapshot.dirty_flags[i] else ""
        self.setWindowTitle(f"{snapshot.tab_labels[i]}{star} — {self.app_title}")

    def _update_position(self) -> None:
        if self.editor.isReadOnly():
            self.position_label.setText("")
            return
        c = self.editor.textCursor()
        self.position_label.setText(f"{c.blockNumber() + 1}:{c.positionInBlock() + 1}")

    # ---------- Actions ----------
    def _new_file(self):
        if self.presenter:
            self.presenter.new_document()

    def _open_dialog(self):
        if self.presenter:
            self.presenter.open_dialog()

    def _open_path(self, path: Path):
        if self.presenter:
            self.presenter.open_path(path)

    def _save(self):
        if self.presenter:
            self.presenter.save()

    def _save_as(self):
        if self.presenter:
            self.presenter.save_as()

    def _close_tab(self):
        if self.presenter:
            self.presenter.close_active_tab()

    def _open_settings(self):
        if self.presenter:
            self.presenter.show_settings(True)

    # ---------- widget signals ----------
    def _on_text_changed(self):
        if self._syncing or self.presenter is None or self.editor.isReadOnly():
            return
        new_text = self.editor.toPlainText()
        action = TextEdit.between(self._shown_text, new_text)
        self._shown_text = new_text
        if not action.is_noop:
            self.presenter.edit(action)

    def _on_tab_changed(self, index: int):
        if not self._syncing and self.presenter and index >= 0:
            self.presenter.activate_tab(index)

    def _on_tab_close_requested(self, index: int):
        if self.presenter:
            self.presenter.close_tab(index)

    def _on_editor_theme_selected(self, theme: str):
        if not self._syncing and self.presenter:
            self.presenter.set_editor_theme(theme)

    def _on_highlight_theme_selected(self, theme: str):
        if not self._syncing and self.presenter:
            self.presenter.set_highlight_theme(theme)

    def _on_settings_finished(self, _result: int):
        if not self._syncing and self.presenter:
            self.presenter.show_settings(False)

    # ---------- DnD ----------
    def dragEnterEvent(self, e):
        if e.mimeData().hasUrls():
            e.acceptProposedAction()

    def dropEvent(self, e):
        for url in e.mimeData().urls():
            local = url.toLocalFile()
            if local:
                LOGGER.debug("Dropped %s", local)
                self._open_path(Path(local))

    # ---------- Close ----------
    def closeEvent(self, event):
        if self.presenter and not self.presenter.confirm_quit():
            event.ignore()
            return
        self.settings.set_geometry(bytes(self.saveGeometry()))
        super().closeEvent(event)
