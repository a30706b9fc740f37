# pyed/services/config/ini_config_service.py
from __future__ import annotations

import configparser
import logging
from pathlib import Path
from typing import Mapping, Optional

from platformdirs import user_config_dir

from pyed.domain.interfaces import IConfigService

LOGGER = logging.getLogger(__name__)

_BOOL_WORDS = {
    **dict.fromkeys(("1", "true", "yes", "y", "on"), True),
    **dict.fromkeys(("0", "false", "no", "n", "off"), False),
}


class IniConfigService(IConfigService):
    r"""
    INI-backed configuration reader.

    Load order (first hit wins):
      1. Explicit path provided at construction
      2. User config dir (e.g., ~/.config/PyEd/config.ini or %APPDATA%\PyEd\config.ini)
      3. Project default at <repo>/config/config.ini  (optional)
    """

    DEFAULT_APP_DIR = "PyEd"
    DEFAULT_FILE = "config.ini"

    def __init__(self, explicit_path: Optional[Path] = None, project_root: Optional[Path] = None):
        self._parser = configparser.ConfigParser()
        self._loaded_from: Optional[Path] = None

        for path in self._candidates(explicit_path, project_root):
            if path.exists() and self._try_read(path):
                self._loaded_from = path
                break

    def _candidates(self, explicit_path: Optional[Path], project_root: Optional[Path]) -> list[Path]:
        found = [explicit_path] if explicit_path else []
        found.append(Path(user_config_dir(self.DEFAULT_APP_DIR)) / self.DEFAULT_FILE)
        if project_root:
            found.append(project_root / "config" / self.DEFAULT_FILE)
        return found

    def _try_read(self, path: Path) -> bool:
        parser = configparser.ConfigParser()
        try:
            with path.open("r", encoding="utf-8") as fh:
                parser.read_file(fh)
        except (OSError, configparser.Error) as exc:
            LOGGER.warning("Ignoring unreadable config %s: %s", path, exc)
            return False
        self._parser = parser
        return True

    # ----- IConfigService -----

    def get(self, section: str, key: str, default: Optional[str] = None) -> Optional[str]:
        if section not in self._parser:
            return default
        return self._parser[section].get(key, default)

    def get_int(self, section: str, key: str, default: Optional[int] = None) -> Optional[int]:
        val = self.get(section, key, None)
        if val is None:
            return default
        try:
            return int(val.strip())
        except ValueError:
            return default

    def get_bool(self, section: str, key: str, default: Optional[bool] = None) -> Optional[bool]:
        val = self.get(section, key, None)
        if val is None:
            return default
        return _BOOL_WORDS.get(val.strip().lower(), default)

    def as_dict(self) -> Mapping[str, Mapping[str, str]]:
        return {sect: dict(self._parser[sect]) for sect in self._parser.sections()}

    @property
    def loaded_from(self) -> Optional[Path]:
        """For diagnostics."""
        return self._loaded_from
