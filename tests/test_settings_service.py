from pyed.services.settings_service import SettingsService
from pyed.utils.constants import MAX_RECENTS, SETTINGS_RECENTS


def test_settings_roundtrip_geometry(settings_service: SettingsService):
    assert settings_service.get_geometry() is None
    blob = b"\x01\x02\x03"
    settings_service.set_geometry(blob)
    got = settings_service.get_geometry()
    assert isinstance(got, (bytes, bytearray))
    assert bytes(got) == blob


def test_settings_recents(settings_service: SettingsService):
    assert settings_service.get_recent() == []  # default
    r = ["a.txt", "b.txt"]
    settings_service.set_recent(r)
    assert settings_service.get_recent() == r


def test_settings_recents_are_capped(settings_service: SettingsService):
    settings_service.set_recent([f"{i}.txt" for i in range(MAX_RECENTS + 4)])
    assert len(settings_service.get_recent()) == MAX_RECENTS


def test_settings_single_recent_from_ini_string(qsettings):
    qsettings.setValue(SETTINGS_RECENTS, "only.txt")
    assert SettingsService(qsettings).get_recent() == ["only.txt"]


def test_settings_theme_roundtrip(settings_service: SettingsService):
    assert settings_service.get_editor_theme() is None
    assert settings_service.get_highlight_theme() is None
    settings_service.set_editor_theme("nord")
    settings_service.set_highlight_theme("monokai")
    assert settings_service.get_editor_theme() == "nord"
    assert settings_service.get_highlight_theme() == "monokai"


def test_settings_persist_across_instances(tmp_settings_path):
    from PyQt6.QtCore import QSettings

    qs = QSettings(str(tmp_settings_path), QSettings.Format.IniFormat)
    first = SettingsService(qs)
    first.set_editor_theme("light")
    first.set_recent(["x.txt"])
    qs.sync()

    second = SettingsService(QSettings(str(tmp_settings_path), QSettings.Format.IniFormat))
    assert second.get_editor_theme() == "light"
    assert second.get_recent() == ["x.txt"]
