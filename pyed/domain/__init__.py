"""Domain layer: document models, intents, errors and service interfaces."""

from .errors import EditorError, ErrorKind
from .interfaces import IAsyncFileService, IConfigService, IFileService, ISettingsService
from .models import Document, DocumentSet, display_name_for
from .text_buffer import TextBuffer, TextEdit

__all__ = [
    "IFileService",
    "IAsyncFileService",
    "ISettingsService",
    "IConfigService",
    "Document",
    "DocumentSet",
    "display_name_for",
    "TextBuffer",
    "TextEdit",
    "EditorError",
    "ErrorKind",
]
