from __future__ import annotations

import logging
from pathlib import Path

import pytest

from pyed.services.config.ini_config_service import IniConfigService


def write_ini(p: Path, text: str) -> None:
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(text, encoding="utf-8")


@pytest.fixture()
def user_dir(monkeypatch, tmp_path) -> Path:
    """Point platformdirs at an (initially empty) directory under tmp."""
    base = tmp_path / "usercfg"

    def fake_user_config_dir(appname: str) -> str:
        return str(base / appname)

    monkeypatch.setattr(
        "pyed.services.config.ini_config_service.user_config_dir",
        fake_user_config_dir,
        raising=True,
    )
    return base / IniConfigService.DEFAULT_APP_DIR


def test_defaults_when_no_config_files(user_dir):
    cfg = IniConfigService()
    assert cfg.loaded_from is None

    # getters with defaults
    assert cfg.get("missing", "key", "x") == "x"
    assert cfg.get_int("editor", "tab_width", 4) == 4
    assert cfg.get_bool("app", "strict_contracts", False) is False
    assert cfg.as_dict() == {}


def test_project_root_config_is_used_when_present(user_dir, tmp_path):
    proj_root = tmp_path / "repo"
    ini = proj_root / "config" / "config.ini"
    write_ini(ini, "[editor]\ntheme = nord\n[app]\nstrict_contracts = true\n")

    cfg = IniConfigService(project_root=proj_root)
    assert cfg.get("editor", "theme") == "nord"
    assert cfg.get_bool("app", "strict_contracts", None) is True
    assert cfg.loaded_from == ini


def test_user_config_preferred_over_project_root(user_dir, tmp_path):
    user_ini = user_dir / IniConfigService.DEFAULT_FILE
    proj_root = tmp_path / "repo"
    write_ini(user_ini, "[editor]\ntheme = light\n")
    write_ini(proj_root / "config" / "config.ini", "[editor]\ntheme = dark\n")

    cfg = IniConfigService(project_root=proj_root)
    assert cfg.get("editor", "theme") == "light"
    assert cfg.loaded_from == user_ini


def test_explicit_path_overrides_everything(user_dir, tmp_path):
    proj_root = tmp_path / "repo"
    explicit_path = tmp_path / "explicit.ini"
    write_ini(user_dir / IniConfigService.DEFAULT_FILE, "[editor]\ntheme = light\n")
    write_ini(proj_root / "config" / "config.ini", "[editor]\ntheme = dark\n")
    write_ini(explicit_path, "[editor]\ntheme = nord\n")

    cfg = IniConfigService(explicit_path=explicit_path, project_root=proj_root)
    assert cfg.get("editor", "theme") == "nord"
    assert cfg.loaded_from == explicit_path


def test_malformed_file_falls_through_to_next_candidate(user_dir, tmp_path, caplog):
    proj_root = tmp_path / "repo"
    write_ini(user_dir / IniConfigService.DEFAULT_FILE, "this is not [ini\n")
    proj_ini = proj_root / "config" / "config.ini"
    write_ini(proj_ini, "[editor]\ntheme = dark\n")

    with caplog.at_level(logging.WARNING, logger="pyed.services.config.ini_config_service"):
        cfg = IniConfigService(project_root=proj_root)

    assert cfg.loaded_from == proj_ini
    assert cfg.get("editor", "theme") == "dark"
    assert any("Ignoring unreadable config" in r.getMessage() for r in caplog.records)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("42", 42),
        ("  7  ", 7),
        ("notanint", None),
        ("", None),
    ],
)
def test_get_int_parsing(user_dir, raw, expected):
    write_ini(user_dir / IniConfigService.DEFAULT_FILE, f"[editor]\ntab_width = {raw}\n")

    cfg = IniConfigService()
    assert cfg.get_int("editor", "tab_width", None) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("true", True),
        (" True ", True),
        ("yes", True),
        ("on", True),
        ("false", False),
        ("no", False),
        ("off", False),
        ("0", False),
        ("maybe", None),
        ("", None),
    ],
)
def test_get_bool_parsing(user_dir, raw, expected):
    write_ini(user_dir / IniConfigService.DEFAULT_FILE, f"[app]\nstrict_contracts = {raw}\n")

    cfg = IniConfigService()
    assert cfg.get_bool("app", "strict_contracts", None) is expected


def test_as_dict_snapshot(user_dir):
    write_ini(
        user_dir / IniConfigService.DEFAULT_FILE,
        "[editor]\ntheme = nord\ntab_width = 2\n\n[logging]\nlevel = DEBUG\n",
    )

    snap = IniConfigService().as_dict()
    assert snap["editor"] == {"theme": "nord", "tab_width": "2"}
    assert snap["logging"]["level"] == "DEBUG"
