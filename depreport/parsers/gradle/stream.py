"""Token stream with one-token pushback and mark/rewind lookahead."""

from __future__ import annotations

import logging
from typing import List

from depreport.parsers.base import PushbackError
from depreport.parsers.gradle.scanner import Scanner
from depreport.parsers.gradle.tokens import TerminalSymbol

logger = logging.getLogger("depreport.parsers.gradle.stream")


class TokenStream:
    """Pull tokens from a :class:`Scanner` on demand.

    ``push_back`` returns the token just read to the stream and is one slot
    deep: pushing back twice without a ``next`` in between raises
    :class:`PushbackError`.

    Lookahead that needs to consume several tokens and possibly restore them
    uses checkpoints::

        stream.mark()
        ...  # any number of next() calls
        stream.rewind()   # or stream.release() to keep the tokens consumed

    Tokens are buffered only while a checkpoint is open (plus the last token,
    for pushback).
    """

    def __init__(self, scanner: Scanner) -> None:
        self._scanner = scanner
        self._buffer: List[TerminalSymbol] = []
        self._pos = 0
        self._marks: List[int] = []
        self._can_push_back = False

    def next(self) -> TerminalSymbol:
        """Return the next token, replaying buffered tokens first."""
        if self._pos < len(self._buffer):
            token = self._buffer[self._pos]
        else:
            token = self._scanner.scan()
            self._buffer.append(token)
        self._pos += 1
        self._can_push_back = True

        if not self._marks and self._pos > 1:
            # Nothing can rewind past this point; keep only the last token.
            del self._buffer[: self._pos - 1]
            self._pos = 1
        return token

    def push_back(self) -> None:
        """Return the token last read by :meth:`next` to the stream."""
        if not self._can_push_back:
            raise PushbackError(
                "push_back() must follow next(); the pushback buffer holds one token"
            )
        self._pos -= 1
        self._can_push_back = False

    def peek(self) -> TerminalSymbol:
        """Return the next token without consuming it."""
        token = self.next()
        self.push_back()
        return token

    def mark(self) -> int:
        """Open a checkpoint at the current position; returns its depth."""
        self._marks.append(self._pos)
        self._can_push_back = False
        return len(self._marks)

    def rewind(self) -> int:
        """Restore every token read since the innermost checkpoint.

        Returns:
            Number of tokens restored.
        """
        if not self._marks:
            raise PushbackError("rewind() called without an open mark()")
        position = self._marks.pop()
        restored = self._pos - position
        self._pos = position
        self._can_push_back = False
        if restored:
            logger.debug("Rewound %d token(s)", restored)
        return restored

    def release(self) -> None:
        """Close the innermost checkpoint, keeping tokens consumed."""
        if not self._marks:
            raise PushbackError("release() called without an open mark()")
        self._marks.pop()
