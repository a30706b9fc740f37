from __future__ import annotations

import logging
import zlib
from pathlib import Path

from pygments.lexer import Lexer
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.styles import get_style_by_name
from pygments.token import Comment, String
from pygments.util import ClassNotFound
from PyQt6.QtGui import (
    QColor,
    QFont,
    QSyntaxHighlighter,
    QTextBlockUserData,
    QTextCharFormat,
    QTextDocument,
)

from pyed.utils.constants import DEFAULT_HIGHLIGHT_THEME

LOGGER = logging.getLogger(__name__)

_STATE_CLOSED = 0


class _OpenToken(QTextBlockUserData):
    """Source, from the start of its opening line, of a string or block comment left open."""

    def __init__(self, source: str) -> None:
        super().__init__()
        self.source = source


def _spans_lines(ttype: object) -> bool:
    return ttype in String or ttype in Comment.Multiline


def _utf16_len(text: str) -> int:
    return len(text.encode("utf-16-le")) // 2


def lexer_for(path: Path | None) -> Lexer:
    """Pygments lexer picked from the file name; plain text when unknown or unsaved."""
    if path is None:
        return TextLexer()
    try:
        return get_lexer_for_filename(path.name, stripnl=False, ensurenl=False)
    except ClassNotFound:
        return TextLexer()


class PygmentsHighlighter(QSyntaxHighlighter):
    """
    Pygments highlighting for the editor's QTextDocument, one block at a time.

    A string or block comment left open at the end of a block is carried into
    the next one through the block state and an _OpenToken user data.
    """

    def __init__(self, document: QTextDocument | None = None) -> None:
        super().__init__(document)
        self._lexer: Lexer = TextLexer()
        self._style_name = DEFAULT_HIGHLIGHT_THEME
        self._style = get_style_by_name(self._style_name)
        self._formats: dict[object, QTextCharFormat | None] = {}

    @property
    def lexer_name(self) -> str:
        return self._lexer.name

    @property
    def style_name(self) -> str:
        return self._style_name

    def configure(self, path: Path | None, style_name: str) -> None:
        """Switch lexer and/or style; re-highlights only when something changed."""
        changed = False
        lexer = lexer_for(path)
        if type(lexer) is not type(self._lexer):
            self._lexer = lexer
            changed = True
        if style_name != self._style_name:
            try:
                self._style = get_style_by_name(style_name)
            except ClassNotFound:
                LOGGER.warning("Unknown highlight style %r; keeping %r", style_name, self._style_name)
            else:
                self._style_name = style_name
                self._formats.clear()
                changed = True
        if changed:
            self.rehighlight()

    def highlightBlock(self, text: str) -> None:  # noqa: N802 (Qt API)
        carry = ""
        if self.previousBlockState() > _STATE_CLOSED:
            data = self.currentBlock().previous().userData()
            if isinstance(data, _OpenToken):
                carry = data.source + "\n"

        # Lex the open token's lines ahead of this one so the lexer resumes
        # inside it; the trailing newline shows whether this line closes it.
        source = carry + text + "\n"
        line_end = len(source) - 1
        run_start: int | None = None
        opener = ""
        qt_pos = 0
        for index, ttype, value in self._lexer.get_tokens_unprocessed(source):
            if _spans_lines(ttype):
                if run_start is None:
                    run_start, opener = index, value
            else:
                run_start = None
            start = max(index, len(carry))
            end = min(index + len(value), line_end)
            if end <= start:
                continue
            length = _utf16_len(source[start:end])
            fmt = self._format_for(ttype)
            if fmt is not None:
                self.setFormat(qt_pos, length, fmt)
            qt_pos += length

        if run_start is None:
            self.setCurrentBlockState(_STATE_CLOSED)
            return
        line_start = source.rfind("\n", 0, run_start) + 1
        self.setCurrentBlockUserData(_OpenToken(source[line_start:line_end]))
        # state is keyed on the opener so a changed opener re-highlights later blocks
        self.setCurrentBlockState(1 + (zlib.crc32(opener.encode("utf-8")) & 0x3FFFFFFF))

    def _format_for(self, ttype: object) -> QTextCharFormat | None:
        if ttype in self._formats:
            return self._formats[ttype]
        style = self._style.style_for_token(ttype)
        fmt: QTextCharFormat | None = None
        if style["color"] or style["bold"] or style["italic"] or style["underline"]:
            fmt = QTextCharFormat()
            if style["color"]:
                fmt.setForeground(QColor(f"#{style['color']}"))
            if style["bold"]:
                fmt.setFontWeight(QFont.Weight.Bold)
            if style["italic"]:
                fmt.setFontItalic(True)
            if style["underline"]:
                fmt.setFontUnderline(True)
        self._formats[ttype] = fmt
        return fmt
