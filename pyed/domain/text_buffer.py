from __future__ import annotations

from dataclasses import dataclass


def detect_newline(text: str) -> str:
    """Line ending used by `text` (the first one found); LF when there is none."""
    for i, ch in enumerate(text):
        if ch == "\r":
            return "\r\n" if text[i + 1 : i + 2] == "\n" else "\r"
        if ch == "\n":
            return "\n"
    return "\n"


def normalize_newlines(text: str) -> str:
    """Fold CRLF and lone CR into LF, the form Qt text widgets work in."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


@dataclass(frozen=True)
class TextEdit:
    """
    Edit action: replace `length` characters at `position` with `text`.

    Insertions have length 0, deletions have empty text.
    """

    position: int
    length: int = 0
    text: str = ""

    @classmethod
    def insert(cls, position: int, text: str) -> TextEdit:
        return cls(position=position, length=0, text=text)

    @classmethod
    def delete(cls, position: int, length: int) -> TextEdit:
        return cls(position=position, length=length, text="")

    @classmethod
    def between(cls, old: str, new: str) -> TextEdit:
        """Smallest single replacement that turns `old` into `new`."""
        limit = min(len(old), len(new))
        start = 0
        while start < limit and old[start] == new[start]:
            start += 1
        end_old, end_new = len(old), len(new)
        while end_old > start and end_new > start and old[end_old - 1] == new[end_new - 1]:
            end_old -= 1
            end_new -= 1
        return cls(position=start, length=end_old - start, text=new[start:end_new])

    @property
    def is_noop(self) -> bool:
        return self.length == 0 and not self.text


class TextBuffer:
    """Plain-text edit buffer with a caret. Every TextEdit is accepted; positions are clamped."""

    def __init__(self, text: str = "") -> None:
        self._text = text
        self._caret = 0

    def perform(self, action: TextEdit) -> None:
        start = min(max(action.position, 0), len(self._text))
        end = min(start + max(action.length, 0), len(self._text))
        self._text = self._text[:start] + action.text + self._text[end:]
        self._caret = start + len(action.text)

    def text(self) -> str:
        return self._text

    @property
    def caret(self) -> int:
        return self._caret

    def cursor_position(self) -> tuple[int, int]:
        """0-based (line, column) of the caret."""
        before = self._text[: self._caret]
        line = before.count("\n")
        column = self._caret - (before.rfind("\n") + 1)
        return line, column

    def __len__(self) -> int:
        return len(self._text)
