"""App constants and utilities."""

from .constants import (
    APP_NAME,
    APP_ORG,
    DEFAULT_EDITOR_THEME,
    DEFAULT_HIGHLIGHT_THEME,
    MAX_RECENTS,
    NEW_DOCUMENT_NAME,
    SETTINGS_EDITOR_THEME,
    SETTINGS_GEOMETRY,
    SETTINGS_HIGHLIGHT_THEME,
    SETTINGS_RECENTS,
    UNNAMED_PLACEHOLDER,
)
from .logging_setup import configure_logging

__all__ = [
    "APP_ORG",
    "APP_NAME",
    "NEW_DOCUMENT_NAME",
    "UNNAMED_PLACEHOLDER",
    "DEFAULT_EDITOR_THEME",
    "DEFAULT_HIGHLIGHT_THEME",
    "SETTINGS_GEOMETRY",
    "SETTINGS_RECENTS",
    "SETTINGS_EDITOR_THEME",
    "SETTINGS_HIGHLIGHT_THEME",
    "MAX_RECENTS",
    "configure_logging",
]
