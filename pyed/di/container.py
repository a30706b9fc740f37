from __future__ import annotations

import logging
from pathlib import Path

from PyQt6.QtCore import QSettings, QThreadPool

from pyed.domain.interfaces import IFileService, ISettingsService
from pyed.services.async_file_service import QtAsyncFileService
from pyed.services.config.app_config import AppConfig, build_app_config
from pyed.services.editor_controller import EditorController, EditorState
from pyed.services.file_service import FileService
from pyed.services.settings_service import SettingsService
from pyed.services.ui.adapters import QtFileDialogService, QtMessageService
from pyed.services.ui.main_window import MainWindow
from pyed.services.ui.ports.dialogs import IFileDialogService
from pyed.services.ui.ports.messages import IMessageService
from pyed.services.ui.presenters import MainPresenter
from pyed.services.ui.themes import normalize_editor_theme, normalize_highlight_theme
from pyed.utils.constants import APP_NAME, APP_ORG

LOGGER = logging.getLogger(__name__)


class Container:
    """
    Lightweight DI container:
      - wires default services if not provided
      - builds the controller with preferences from settings (falling back to config)
      - builds the window and attaches its presenter
    """

    def __init__(
        self,
        files: IFileService | None = None,
        settings: ISettingsService | None = None,
        qsettings: QSettings | None = None,
        dialogs: IFileDialogService | None = None,
        messages: IMessageService | None = None,
        config: AppConfig | None = None,
        pool: QThreadPool | None = None,
    ) -> None:
        self.config: AppConfig = config or build_app_config()
        self.file_service: IFileService = files or FileService()
        self.settings_service: ISettingsService = settings or SettingsService(
            qsettings or QSettings()
        )
        self.dialogs: IFileDialogService = dialogs or QtFileDialogService()
        self.messages: IMessageService = messages or QtMessageService()

        self.async_files = QtAsyncFileService(self.file_service, self.dialogs, pool=pool)
        self.controller = EditorController(
            self.async_files,
            state=self._initial_state(),
            strict=self.config.strict_contracts(),
        )
        # Result intents re-enter the reducer on the GUI thread
        self.async_files.finished.connect(self.controller.dispatch)

    @staticmethod
    def default(
        qsettings: QSettings | None = None,
        *,
        organization: str = APP_ORG,
        application: str = APP_NAME,
        config: AppConfig | None = None,
    ) -> Container:
        if qsettings is None:
            qsettings = QSettings(organization, application)
        return Container(qsettings=qsettings, config=config)

    def _initial_state(self) -> EditorState:
        s = self.settings_service
        return EditorState(
            editor_theme=normalize_editor_theme(
                s.get_editor_theme() or self.config.editor_theme()
            ),
            highlight_theme=normalize_highlight_theme(
                s.get_highlight_theme() or self.config.highlight_theme()
            ),
        )

    # ---------- UI factories ----------
    def build_main_presenter(self, view: MainWindow) -> MainPresenter:
        return MainPresenter(
            view=view,
            controller=self.controller,
            settings=self.settings_service,
            messages=self.messages,
        )

    def build_main_window(
        self,
        *,
        start_path: Path | None = None,
        app_title: str = APP_NAME,
    ) -> MainWindow:
        """Create the Qt MainWindow, attach its presenter and render the initial state."""
        window = MainWindow(
            settings=self.settings_service,
            tab_width=self.config.tab_width(),
            font_point_size=self.config.font_point_size(),
            app_title=app_title,
        )
        self.async_files.dialog_parent = window
        presenter = self.build_main_presenter(window)
        window.attach_presenter(presenter)
        presenter.start(start_path)
        LOGGER.debug("Main window ready (start path: %s)", start_path)
        return window
