"""Character-level tokenizer for Gradle dependency reports."""

from __future__ import annotations

import io
import logging
from typing import Iterable, Iterator, Optional, TextIO, Union

from depreport.config.schema import DEFAULT_DEPENDENCY_TYPES
from depreport.parsers.gradle.tokens import (
    PROJECT_KEYWORD,
    PUNCTUATION,
    TerminalSymbol,
    Token,
)

logger = logging.getLogger("depreport.parsers.gradle.scanner")

_EOF = ""

ReportSource = Union[str, TextIO]


def _is_whitespace(ch: str) -> bool:
    return ch == " " or ch == "\t"


def _is_newline(ch: str) -> bool:
    return ch == "\n" or ch == "\r"


def _is_letter(ch: str) -> bool:
    return ("a" <= ch <= "z") or ("A" <= ch <= "Z")


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


class Scanner:
    """Split a report character stream into terminal symbols.

    The scanner only moves forward. It keeps a single character of pushback
    so that whitespace, newline, identifier and number runs can be read with
    maximal munch. Characters it does not know become ``ILLEGAL`` tokens;
    whether that is fatal is up to the parser.
    """

    def __init__(
        self,
        source: ReportSource,
        dependency_types: Optional[Iterable[str]] = None,
    ) -> None:
        """Initialize scanner.

        Args:
            source: Report text, or an open text stream to read it from.
            dependency_types: Configuration names reclassified as
                ``TYPE_DEPENDENCY``. Defaults to the stock Gradle set.
        """
        self._reader: TextIO = io.StringIO(source) if isinstance(source, str) else source
        self._dependency_types = frozenset(
            DEFAULT_DEPENDENCY_TYPES if dependency_types is None else dependency_types
        )
        self._position = 0
        self._pending: Optional[str] = None
        self._last: str = _EOF

    def _read(self) -> str:
        if self._pending is not None:
            ch, self._pending = self._pending, None
        else:
            ch = self._reader.read(1)
        self._last = ch
        if ch != _EOF:
            self._position += 1
        return ch

    def _unread(self) -> None:
        if self._last == _EOF:
            return
        self._pending = self._last
        self._last = _EOF
        self._position -= 1

    def scan(self) -> TerminalSymbol:
        """Return the next terminal symbol; ``EOF`` forever once exhausted."""
        start = self._position
        ch = self._read()

        if ch == _EOF:
            return TerminalSymbol(Token.EOF, "", start, start)

        self._unread()
        if _is_whitespace(ch):
            return self._scan_run(Token.WS, _is_whitespace)
        if _is_letter(ch):
            return self._scan_identifier()
        if _is_digit(ch):
            return self._scan_run(Token.NUMBER, _is_digit)
        if ch in PUNCTUATION:
            self._read()
            return TerminalSymbol(PUNCTUATION[ch], ch, start, self._position)
        if _is_newline(ch):
            return self._scan_newlines()

        self._read()
        logger.debug("Illegal character %r at offset %d", ch, start)
        return TerminalSymbol(Token.ILLEGAL, ch, start, self._position)

    def __iter__(self) -> Iterator[TerminalSymbol]:
        """Yield symbols up to and including the first ``EOF``."""
        while True:
            symbol = self.scan()
            yield symbol
            if symbol.kind is Token.EOF:
                return

    def _scan_run(self, kind: Token, predicate) -> TerminalSymbol:
        start = self._position
        buf = [self._read()]
        while True:
            ch = self._read()
            if ch == _EOF:
                break
            if not predicate(ch):
                self._unread()
                break
            buf.append(ch)
        return TerminalSymbol(kind, "".join(buf), start, self._position)

    def _scan_identifier(self) -> TerminalSymbol:
        symbol = self._scan_run(Token.NAME, _is_letter)
        if symbol.literal == PROJECT_KEYWORD:
            return symbol._replace(kind=Token.PROJECT)
        if symbol.literal in self._dependency_types:
            return symbol._replace(kind=Token.TYPE_DEPENDENCY)
        return symbol

    def _scan_newlines(self) -> TerminalSymbol:
        # '\r' belongs to the run but only '\n' counts towards a section break.
        symbol = self._scan_run(Token.NEW_LINE, _is_newline)
        if symbol.literal.count("\n") >= 2:
            return symbol._replace(kind=Token.MULTI_NEW_LINE)
        return symbol
