from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from PyQt6.QtWidgets import QApplication

from pyed.di.container import Container
from pyed.services.config.app_config import build_app_config
from pyed.utils import APP_NAME, APP_ORG, configure_logging

LOGGER = logging.getLogger(__name__)


def run_app(argv: Sequence[str]) -> int:
    """
    Bootstraps logging and Qt, composes the application via the DI container,
    and launches the main window.
    """
    config = build_app_config()
    configure_logging(config.log_level(), config.log_file())

    QApplication.setOrganizationName(APP_ORG)
    QApplication.setApplicationName(APP_NAME)
    app = QApplication(list(argv))

    container = Container.default(config=config)

    # Optional file path to open passed as first CLI argument
    start_path = Path(argv[1]) if len(argv) > 1 else None

    win = container.build_main_window(start_path=start_path, app_title=APP_NAME)
    win.show()

    LOGGER.info("%s started", APP_NAME)
    code = app.exec()
    container.async_files.wait_for_done(5000)
    return code
