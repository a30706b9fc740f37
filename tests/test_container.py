from __future__ import annotations

from pathlib import Path

import pytest

from conftest import FakeDialogs, FakeMessages
from pyed.di.container import Container
from pyed.domain.intents import LoadedFile, OpenCompleted, TabActivated
from pyed.services.async_file_service import QtAsyncFileService
from pyed.services.config.app_config import build_app_config
from pyed.services.ui.main_window import MainWindow
from pyed.utils.constants import DEFAULT_EDITOR_THEME


@pytest.fixture()
def config(monkeypatch, tmp_path):
    monkeypatch.setattr(
        "pyed.services.config.ini_config_service.user_config_dir",
        lambda appname: str(tmp_path / "nowhere" / appname),
        raising=True,
    )
    root = tmp_path / "proj"
    ini = root / "config" / "config.ini"
    ini.parent.mkdir(parents=True)
    ini.write_text(
        "[editor]\ntheme = dark\nhighlight_theme = monokai\ntab_width = 8\n"
        "[app]\nstrict_contracts = true\n",
        encoding="utf-8",
    )
    return build_app_config(project_root=root)


@pytest.fixture()
def container(qapp, qsettings, config) -> Container:
    return Container(
        qsettings=qsettings, config=config, dialogs=FakeDialogs(), messages=FakeMessages()
    )


def test_container_wires_services(container):
    assert container.file_service is not None
    assert container.settings_service is not None
    assert isinstance(container.async_files, QtAsyncFileService)
    assert container.controller.state.editor_theme == "dark"
    assert container.controller.state.highlight_theme == "monokai"


def test_persisted_preferences_override_config(qapp, settings_service, config):
    settings_service.set_editor_theme("nord")
    settings_service.set_highlight_theme("no-such-style")
    c = Container(settings=settings_service, config=config, dialogs=FakeDialogs())
    assert c.controller.state.editor_theme == "nord"
    # unknown highlight style falls back to the default instead of the config value
    assert c.controller.state.highlight_theme != "no-such-style"


def test_unknown_configured_theme_is_normalized(qapp, qsettings, monkeypatch, tmp_path):
    monkeypatch.setattr(
        "pyed.services.config.ini_config_service.user_config_dir",
        lambda appname: str(tmp_path / "nowhere" / appname),
        raising=True,
    )
    ini = tmp_path / "custom.ini"
    ini.write_text("[editor]\ntheme = neon\n", encoding="utf-8")
    c = Container(qsettings=qsettings, config=build_app_config(explicit_ini=ini))
    assert c.controller.state.editor_theme == DEFAULT_EDITOR_THEME


def test_build_main_window_attaches_presenter(qtbot, container):
    win = container.build_main_window(app_title="PyEd")
    qtbot.addWidget(win)
    assert isinstance(win, MainWindow)
    assert win.presenter is not None
    assert win.presenter.controller is container.controller
    assert container.async_files.dialog_parent is win


def test_file_results_reach_the_controller(qtbot, container, tmp_path):
    win = container.build_main_window()
    qtbot.addWidget(win)
    p = tmp_path / "a.txt"
    container.async_files.finished.emit(OpenCompleted(loaded=LoadedFile(p, "abc", "a.txt")))
    assert container.controller.state.documents.labels() == ["a.txt"]
    assert win.editor.toPlainText() == "abc"


def test_start_path_is_loaded_through_the_pool(qtbot, container, tmp_path):
    p = tmp_path / "start.txt"
    p.write_text("from disk", encoding="utf-8")
    win = container.build_main_window(start_path=p)
    qtbot.addWidget(win)
    qtbot.waitUntil(lambda: len(container.controller.state.documents) == 1, timeout=5000)
    assert win.editor.toPlainText() == "from disk"
    assert win.tab_bar.tabText(0) == "start.txt"


def test_strict_contracts_come_from_config(container):
    with pytest.raises(AssertionError):
        container.controller.dispatch(TabActivated(0))
