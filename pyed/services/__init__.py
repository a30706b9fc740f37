"""Concrete service implementations: file I/O, settings, config and the editor controller."""

from .file_service import FileService
from .settings_service import SettingsService

__all__ = ["FileService", "SettingsService"]
