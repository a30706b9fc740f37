from __future__ import annotations

from pygments.styles import get_all_styles

from pyed.utils.constants import DEFAULT_EDITOR_THEME, DEFAULT_HIGHLIGHT_THEME

EDITOR_THEME_NAMES: dict[str, str] = {
    "light": "Light",
    "dark": "Dark",
    "catppuccin-frappe": "Catppuccin Frappé",
    "nord": "Nord",
    "solarized-dark": "Solarized Dark",
}

_PALETTES: dict[str, dict[str, str]] = {
    "light": {
        "bg": "#f5f5f5",
        "fg": "#1f2328",
        "editor_bg": "#ffffff",
        "border": "#d0d7de",
        "selection": "#b6d6fd",
        "tab_bg": "#e8e8e8",
        "tab_active_bg": "#ffffff",
        "accent": "#0969da",
        "error": "#cf222e",
    },
    "dark": {
        "bg": "#252526",
        "fg": "#d4d4d4",
        "editor_bg": "#1e1e1e",
        "border": "#3f3f46",
        "selection": "#094771",
        "tab_bg": "#2d2d30",
        "tab_active_bg": "#1e1e1e",
        "accent": "#3794ff",
        "error": "#f48771",
    },
    "catppuccin-frappe": {
        "bg": "#292c3c",
        "fg": "#c6d0f5",
        "editor_bg": "#303446",
        "border": "#414559",
        "selection": "#51576d",
        "tab_bg": "#232634",
        "tab_active_bg": "#303446",
        "accent": "#8caaee",
        "error": "#e78284",
    },
    "nord": {
        "bg": "#3b4252",
        "fg": "#e5e9f0",
        "editor_bg": "#2e3440",
        "border": "#4c566a",
        "selection": "#434c5e",
        "tab_bg": "#3b4252",
        "tab_active_bg": "#2e3440",
        "accent": "#88c0d0",
        "error": "#bf616a",
    },
    "solarized-dark": {
        "bg": "#073642",
        "fg": "#93a1a1",
        "editor_bg": "#002b36",
        "border": "#586e75",
        "selection": "#0a4b5c",
        "tab_bg": "#073642",
        "tab_active_bg": "#002b36",
        "accent": "#268bd2",
        "error": "#dc322f",
    },
}


def editor_themes() -> list[str]:
    return list(EDITOR_THEME_NAMES)


def highlight_themes() -> list[str]:
    return sorted(get_all_styles())


def normalize_editor_theme(theme_id: str | None) -> str:
    return theme_id if theme_id in _PALETTES else DEFAULT_EDITOR_THEME


def normalize_highlight_theme(name: str | None) -> str:
    if name and name in set(get_all_styles()):
        return name
    return DEFAULT_HIGHLIGHT_THEME


def error_color(theme_id: str) -> str:
    return _PALETTES[normalize_editor_theme(theme_id)]["error"]


def stylesheet_for(theme_id: str) -> str:
    p = _PALETTES[normalize_editor_theme(theme_id)]
    return f"""
QMainWindow, QDialog, QMenuBar, QMenu, QStatusBar {{
    background: {p["bg"]}; color: {p["fg"]};
}}
QMenuBar::item:selected, QMenu::item:selected {{ background: {p["selection"]}; }}
QPlainTextEdit {{
    background: {p["editor_bg"]}; color: {p["fg"]};
    border: 1px solid {p["border"]};
    selection-background-color: {p["selection"]};
}}
QTabBar::tab {{
    background: {p["tab_bg"]}; color: {p["fg"]};
    border: 1px solid {p["border"]}; border-bottom: none;
    padding: 4px 12px;
}}
QTabBar::tab:selected {{
    background: {p["tab_active_bg"]}; border-top: 2px solid {p["accent"]};
}}
QComboBox, QPushButton {{
    background: {p["editor_bg"]}; color: {p["fg"]};
    border: 1px solid {p["border"]}; padding: 3px 8px;
}}
QLabel {{ color: {p["fg"]}; }}
"""
