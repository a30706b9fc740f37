from __future__ import annotations

import pytest

from pyed.services.ui.settings_dialog import SettingsDialog


@pytest.fixture
def dlg(qtbot):
    d = SettingsDialog(None)
    qtbot.addWidget(d)
    return d


def test_constructs_modal_with_both_pickers(dlg: SettingsDialog):
    assert dlg.windowTitle() == "Settings"
    assert dlg.isModal() is True
    assert dlg.theme_combo.findData("nord") >= 0
    assert dlg.highlight_combo.findData("monokai") >= 0


def test_set_selection_does_not_emit(qtbot, dlg: SettingsDialog):
    with qtbot.assertNotEmitted(dlg.editor_theme_selected):
        with qtbot.assertNotEmitted(dlg.highlight_theme_selected):
            dlg.set_selection("nord", "monokai")
    assert dlg.theme_combo.currentData() == "nord"
    assert dlg.highlight_combo.currentData() == "monokai"


def test_user_choice_emits_theme_id(qtbot, dlg: SettingsDialog):
    dlg.set_selection("light", "monokai")
    with qtbot.waitSignal(dlg.editor_theme_selected, timeout=1000) as blocker:
        dlg.theme_combo.setCurrentIndex(dlg.theme_combo.findData("dark"))
    assert blocker.args == ["dark"]

    with qtbot.waitSignal(dlg.highlight_theme_selected, timeout=1000) as blocker:
        dlg.highlight_combo.setCurrentIndex(dlg.highlight_combo.findData("solarized-dark"))
    assert blocker.args == ["solarized-dark"]


def test_unknown_ids_leave_selection_alone(dlg: SettingsDialog):
    dlg.set_selection("nord", "monokai")
    dlg.set_selection("nope", "nope")
    assert dlg.theme_combo.currentData() == "nord"


def test_close_button_rejects(qtbot, dlg: SettingsDialog):
    dlg.show()
    with qtbot.waitSignal(dlg.finished, timeout=1000):
        dlg.close_btn.click()
    assert not dlg.isVisible()
