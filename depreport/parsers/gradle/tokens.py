"""Token kinds and terminal symbols for Gradle dependency reports.

The tokenizer classifies every character run of a ``gradle dependencies``
report into one of the :class:`Token` kinds below. Tree-drawing characters
(``+``, ``\\``, ``|``, ``-``) are kept as individual tokens; the parser
decides what they mean from their position.
"""

from __future__ import annotations

from enum import Enum
from typing import FrozenSet, NamedTuple


class Token(str, Enum):
    """Terminal symbol kinds produced by the scanner."""

    # Special tokens
    ILLEGAL = "illegal"
    EOF = "eof"
    WS = "ws"  # run of spaces/tabs
    NEW_LINE = "new_line"  # exactly one '\n'
    MULTI_NEW_LINE = "multi_new_line"  # '\n\n...' (section break)

    # Literals
    NAME = "name"  # a-zA-Z
    NUMBER = "number"  # 0-9

    # Punctuation
    PLUS = "plus"  # +
    LEFT_BRACKET = "left_bracket"  # (
    RIGHT_BRACKET = "right_bracket"  # )
    MINUS = "minus"  # -
    COLON = "colon"  # :
    POINT = "point"  # .
    ARROW = "arrow"  # >
    LINE = "line"  # |
    SLASH = "slash"  # \
    QUOTE = "quote"  # '
    COMMA = "comma"  # ,
    MULTIPLY = "multiply"  # *

    # Keywords
    PROJECT = "project"
    TYPE_DEPENDENCY = "type_dependency"  # api, compileClasspath, runtimeOnly...

    # Assigned by the parser to synthesized symbols
    DEPENDENCY_NAME = "dependency_name"
    DEPENDENCY_VERSION = "dependency_version"


class TerminalSymbol(NamedTuple):
    """A classified lexical unit covering ``[start_offset, end_offset)``."""

    kind: Token
    literal: str
    start_offset: int
    end_offset: int

    def __str__(self) -> str:
        return self.literal


PUNCTUATION: dict[str, Token] = {
    "+": Token.PLUS,
    "-": Token.MINUS,
    ">": Token.ARROW,
    ":": Token.COLON,
    ".": Token.POINT,
    "|": Token.LINE,
    "\\": Token.SLASH,
    "'": Token.QUOTE,
    ",": Token.COMMA,
    "(": Token.LEFT_BRACKET,
    ")": Token.RIGHT_BRACKET,
    "*": Token.MULTIPLY,
}

PROJECT_KEYWORD = "Project"

# Kinds that can spell an identifier inside a coordinate or project path.
# Keyword reclassification is purely lexical, so ``log4j-api`` still
# contains a TYPE_DEPENDENCY token.
IDENTIFIER_KINDS: FrozenSet[Token] = frozenset(
    {Token.NAME, Token.PROJECT, Token.TYPE_DEPENDENCY}
)

# Tokens that open a dependency line in the tree.
TREE_KINDS: FrozenSet[Token] = frozenset({Token.PLUS, Token.LINE, Token.SLASH})

LINE_END_KINDS: FrozenSet[Token] = frozenset(
    {Token.NEW_LINE, Token.MULTI_NEW_LINE, Token.EOF}
)
