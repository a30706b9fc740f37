from __future__ import annotations

import itertools
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

from pyed.domain.text_buffer import TextBuffer, TextEdit, detect_newline, normalize_newlines
from pyed.utils.constants import NEW_DOCUMENT_NAME, UNNAMED_PLACEHOLDER

_ids = itertools.count(1)


def display_name_for(path: Path) -> str:
    """Final path component, or the placeholder when there is none (e.g. '/')."""
    return path.name or UNNAMED_PLACEHOLDER


@dataclass
class Document:
    """
    One open file's in-memory state.

    Content is held with LF line endings; `newline` is what the file uses on disk.
    """

    display_name: str = NEW_DOCUMENT_NAME
    source_path: Path | None = None
    content: TextBuffer = field(default_factory=TextBuffer)
    is_dirty: bool = False
    is_new: bool = True
    newline: str = "\n"
    doc_id: int = field(default_factory=lambda: next(_ids))

    @classmethod
    def new(cls) -> Document:
        return cls()

    @classmethod
    def loaded(cls, path: Path, text: str, display_name: str) -> Document:
        return cls(
            display_name=display_name,
            source_path=path,
            content=TextBuffer(normalize_newlines(text)),
            is_dirty=False,
            is_new=False,
            newline=detect_newline(text),
        )

    def apply_edit(self, action: TextEdit) -> None:
        self.content.perform(action)
        self.is_dirty = True

    def mark_saved(self, new_path: Path, saved_text: str | None = None) -> None:
        """
        Record a successful write to `new_path`.

        When `saved_text` is given and the buffer has moved on since it was
        captured, the document stays dirty.
        """
        self.source_path = new_path
        self.is_dirty = saved_text is not None and saved_text != self.text()
        self.is_new = False
        self.display_name = display_name_for(new_path)

    def text(self) -> str:
        return self.content.text()

    def identity_path(self) -> Path | None:
        return self.source_path


class DocumentSet:
    """
    Ordered open documents plus the active-selection index.

    Insertion order is tab order. `active_index` is None exactly when the set is
    empty; every structural change repairs it in the same call.
    """

    def __init__(self) -> None:
        self._documents: list[Document] = []
        self._active_index: int | None = None

    # ---------- read access ----------
    def __len__(self) -> int:
        return len(self._documents)

    def __iter__(self) -> Iterator[Document]:
        return iter(tuple(self._documents))

    @property
    def documents(self) -> tuple[Document, ...]:
        return tuple(self._documents)

    @property
    def active_index(self) -> int | None:
        return self._active_index

    def active(self) -> Document | None:
        if self._active_index is None:
            return None
        return self._documents[self._active_index]

    def labels(self) -> list[str]:
        return [d.display_name for d in self._documents]

    # ---------- lookups ----------
    def find_by_path(self, path: Path) -> int | None:
        for index, doc in enumerate(self._documents):
            if doc.identity_path() == path:
                return index
        return None

    def find_by_id(self, doc_id: int) -> int | None:
        for index, doc in enumerate(self._documents):
            if doc.doc_id == doc_id:
                return index
        return None

    # ---------- mutation ----------
    def insert_new(self) -> int:
        return self._append(Document.new())

    def insert_loaded(self, path: Path, text: str, display_name: str) -> int:
        return self._append(Document.loaded(path, text, display_name))

    def set_active(self, index: int) -> None:
        self._check_index(index)
        self._active_index = index

    def remove(self, index: int) -> Document:
        self._check_index(index)
        doc = self._documents.pop(index)
        active = self._active_index
        if not self._documents:
            self._active_index = None
        elif active is not None and index < active:
            self._active_index = active - 1
        elif active == index:
            self._active_index = min(index, len(self._documents) - 1)
        return doc

    def _append(self, doc: Document) -> int:
        self._documents.append(doc)
        self._active_index = len(self._documents) - 1
        return self._active_index

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._documents):
            raise IndexError(f"document index {index} out of range (0..{len(self) - 1})")
