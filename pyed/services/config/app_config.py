from __future__ import annotations

import logging
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from pyed.domain.interfaces import IConfigService
from pyed.services.config.ini_config_service import IniConfigService
from pyed.utils.constants import DEFAULT_EDITOR_THEME, DEFAULT_HIGHLIGHT_THEME

_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


def _project_root_fallback() -> Path:
    """
    Best-effort project root resolution that also works in PyInstaller:
      - PyInstaller onefile/onedir uses sys._MEIPASS as bundle root
      - dev mode walks up from this file
    """
    meipass = getattr(sys, "_MEIPASS", None)  # type: ignore[attr-defined]
    if meipass:
        return Path(meipass)

    # app_config.py -> pyed/services/config/app_config.py
    return Path(__file__).resolve().parents[3]


@dataclass(frozen=True)
class AppConfig:
    """
    Typed view over the INI configuration.

    [editor] theme, highlight_theme, tab_width, font_size
    [app]    strict_contracts
    [logging] level, file
    """

    ini: IConfigService

    def editor_theme(self) -> str:
        return (self.ini.get("editor", "theme") or "").strip() or DEFAULT_EDITOR_THEME

    def highlight_theme(self) -> str:
        return (self.ini.get("editor", "highlight_theme") or "").strip() or DEFAULT_HIGHLIGHT_THEME

    def tab_width(self) -> int:
        v = self.ini.get_int("editor", "tab_width", 4) or 4
        return v if 1 <= v <= 16 else 4

    def font_point_size(self) -> int | None:
        v = self.ini.get_int("editor", "font_size", None)
        return v if v and v > 0 else None

    def strict_contracts(self) -> bool:
        return bool(self.ini.get_bool("app", "strict_contracts", False))

    def log_level(self) -> str:
        v = (self.ini.get("logging", "level") or "INFO").strip().upper()
        return v if v in _LEVELS else "INFO"

    def log_file(self) -> Path | None:
        v = (self.ini.get("logging", "file") or "").strip()
        return Path(v).expanduser() if v else None

    def as_dict(self) -> Mapping[str, Mapping[str, str]]:
        return self.ini.as_dict()

    @property
    def loaded_from(self) -> Path | None:
        return getattr(self.ini, "loaded_from", None)


def build_app_config(
    *, explicit_ini: Path | None = None, project_root: Path | None = None
) -> AppConfig:
    root = project_root or _project_root_fallback()
    ini = IniConfigService(explicit_path=explicit_ini, project_root=root)
    cfg = AppConfig(ini=ini)
    if cfg.loaded_from is not None:
        logging.getLogger(__name__).info("Loaded config from %s", cfg.loaded_from)
    return cfg
