APP_ORG = "QuickTools"
APP_NAME = "PyEd"

# Tab label for documents created via "New"
NEW_DOCUMENT_NAME = "Untitled"
# Fallback when a path has no usable final component
UNNAMED_PLACEHOLDER = "Unnamed"

DEFAULT_EDITOR_THEME = "catppuccin-frappe"
DEFAULT_HIGHLIGHT_THEME = "solarized-dark"

OPEN_FILTER = "Text files (*.txt *.md *.py *.rs *.toml *.json *.ini);;All files (*)"
SAVE_FILTER = "All files (*)"

SETTINGS_GEOMETRY = "window/geometry"
SETTINGS_RECENTS = "file/recent"
SETTINGS_EDITOR_THEME = "appearance/editor_theme"
SETTINGS_HIGHLIGHT_THEME = "appearance/highlight_theme"
MAX_RECENTS = 8

STATUS_MSEC = 3000
