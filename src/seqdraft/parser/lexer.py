# Copyright 2026 Seqdraft Contributors
# SPDX-License-Identifier: Apache-2.0

"""Line-oriented lexical scanner for sequence diagram sources.

The scanner consumes source text one line at a time and carries a small mode
value between lines, so a caller can feed lines incrementally and receive the
tokens of each line as soon as it has been read.
"""

from __future__ import annotations

import enum
import logging
import re
import string
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


class TokenType(enum.Enum):
    """All token types produced by the lexer.

    Keywords and operators each occupy a contiguous numeric range so that
    classification is a single range check.
    """

    IDENTIFIER = 1
    TEXT = 3
    COLON = 4
    COMMA = 5

    # Keywords
    TITLE = 100
    PARTICIPANT = 101
    AS = 102
    NOTE = 103
    OVER = 104
    LEFT = 105
    RIGHT = 106
    OF = 107
    OPT = 108
    ALT = 109
    ELSE = 110
    END = 111
    ACTIVATE = 112
    DEACTIVATE = 113
    DESTROY = 114

    # Operators
    ARROW_BODY = 200
    ARROW_BODY_DOTTED = 201
    ARROW_LEFT_CLOSED = 210
    ARROW_LEFT_OPEN = 211
    ARROW_RIGHT_CLOSED = 220
    ARROW_RIGHT_OPEN = 221
    ACTIVATE_MARK = 230
    DEACTIVATE_MARK = 231
    CREATE_MARK = 232

    EOF = 1000

    def describe(self) -> str:
        """Return the human-readable name used in diagnostics."""
        if _KEYWORD_RANGE[0] <= self.value <= _KEYWORD_RANGE[1]:
            return repr(self.name.lower())
        return _TYPE_NAMES[self]


@dataclass(frozen=True)
class Token:
    """A lexical token with its source location.

    Attributes:
        type: The kind of token.
        value: The raw text of the token, or None for the synthetic EOF token.
        line: 1-based line number where the token starts.
        column: 1-based column number where the token starts.
    """

    type: TokenType
    value: str | None
    line: int
    column: int

    @property
    def is_keyword(self) -> bool:
        return _KEYWORD_RANGE[0] <= self.type.value <= _KEYWORD_RANGE[1]

    @property
    def is_operator(self) -> bool:
        return _OPERATOR_RANGE[0] <= self.type.value <= _OPERATOR_RANGE[1]

    @property
    def is_arrow_right(self) -> bool:
        return self.type in (TokenType.ARROW_RIGHT_CLOSED, TokenType.ARROW_RIGHT_OPEN)

    @property
    def starts_multiline_text(self) -> bool:
        return self.type == TokenType.NOTE

    @property
    def starts_inline_text(self) -> bool:
        return self.type in _INLINE_TEXT_KEYWORDS

    def __str__(self) -> str:
        name = self.type.describe()
        if self.value is None:
            return name
        return f"{name}({self.value!r})"


class LexerMode(enum.Enum):
    """The state carried by the lexer from one line to the next."""

    NORMAL = "normal"
    MULTILINE_TEXT = "multiline-text"
    ERROR = "error"
    DONE = "done"


class LexerError(Exception):
    """Raised when the scanner meets a character that cannot start a token.

    Attributes:
        line: 1-based line number of the error.
        column: 1-based column number of the error.
        line_text: The full text of the offending line.
    """

    def __init__(self, message: str, line_text: str, line: int, column: int) -> None:
        super().__init__(f"Line {line}, column {column}: {message}")
        self.message = message
        self.line_text = line_text
        self.line = line
        self.column = column

    def excerpt(self) -> str:
        """Return the offending line with a caret under the error column."""
        return f"{self.line_text}\n{' ' * (self.column - 1)}^"


class Lexer:
    """Incremental, single-use scanner fed one source line at a time."""

    def __init__(self) -> None:
        self._mode = LexerMode.NORMAL
        self._line = ""
        self._line_number = 0
        self._pos = 0

    @property
    def mode(self) -> LexerMode:
        return self._mode

    @property
    def line_number(self) -> int:
        """Number of lines consumed so far."""
        return self._line_number

    def feed_line(self, line: str) -> list[Token]:
        """Tokenize the next source line and return its tokens.

        Args:
            line: One line of source text without its line terminator.

        Returns:
            The tokens of the line, in order. Blank lines yield no tokens.

        Raises:
            LexerError: If the line contains a character that cannot start a
                token. The lexer is left in ERROR mode.
            RuntimeError: If the lexer has already failed or been closed.
            ValueError: If the line contains an embedded line terminator.
        """
        if self._mode in (LexerMode.ERROR, LexerMode.DONE):
            raise RuntimeError(f"Lexer cannot accept input in {self._mode.value} mode")
        if "\n" in line or "\r" in line:
            raise ValueError("Source lines must not contain line terminators")

        self._line = line
        self._line_number += 1
        self._pos = 0

        if self._mode == LexerMode.MULTILINE_TEXT:
            return self._read_multiline_text()
        return self._tokenize_statement()

    def close(self) -> Token:
        """Signal end of input and return the terminal EOF token.

        Raises:
            RuntimeError: If the lexer has already failed or been closed.
        """
        if self._mode in (LexerMode.ERROR, LexerMode.DONE):
            raise RuntimeError(f"Lexer cannot be closed in {self._mode.value} mode")
        self._set_mode(LexerMode.DONE)
        return Token(TokenType.EOF, None, max(self._line_number, 1), len(self._line) + 1)

    # ------------------------------------------------------------------
    # Statement lines
    # ------------------------------------------------------------------

    def _tokenize_statement(self) -> list[Token]:
        """Scan the current line as a statement."""
        tokens: list[Token] = []
        read_inline_text = False
        check_for_activator = False
        while self._pos < len(self._line):
            self._skip_whitespace()
            if self._pos >= len(self._line):
                break
            if read_inline_text:
                token = self._read_inline_text()
            elif check_for_activator:
                check_for_activator = False
                token = self._read_activator_or_statement_token()
            else:
                token = self._read_statement_token()
            tokens.append(token)

            if token.type == TokenType.COLON:
                read_inline_text = True
            elif token.is_arrow_right:
                check_for_activator = True
            elif len(tokens) == 1 and token.starts_inline_text:
                read_inline_text = True

        if tokens and tokens[0].starts_multiline_text and not read_inline_text:
            self._set_mode(LexerMode.MULTILINE_TEXT)
        return tokens

    def _read_statement_token(self) -> Token:
        ch = self._current()
        if ch in _OPERATOR_CHARS:
            return self._read_operator()
        if ch in _IDENT_START_CHARS:
            return self._read_identifier()
        raise self._fail(f"Unexpected character: {ch!r}")

    def _read_activator_or_statement_token(self) -> Token:
        ch = self._current()
        if ch == "+":
            return self._read_char(TokenType.ACTIVATE_MARK)
        if ch == "-":
            return self._read_char(TokenType.DEACTIVATE_MARK)
        return self._read_statement_token()

    def _read_inline_text(self) -> Token:
        column = self._pos + 1
        text = self._line[self._pos :]
        self._pos = len(self._line)
        return Token(TokenType.TEXT, text, self._line_number, column)

    # ------------------------------------------------------------------
    # Multi-line text
    # ------------------------------------------------------------------

    def _read_multiline_text(self) -> list[Token]:
        if _END_PATTERN.match(self._line):
            self._set_mode(LexerMode.NORMAL)
            return self._tokenize_statement()
        return [Token(TokenType.TEXT, self._line, self._line_number, 1)]

    # ------------------------------------------------------------------
    # Operators and identifiers
    # ------------------------------------------------------------------

    def _read_operator(self) -> Token:
        ch = self._current()
        if ch == "<":
            return self._read_doubled("<", TokenType.ARROW_LEFT_CLOSED, TokenType.ARROW_LEFT_OPEN)
        if ch == "-":
            return self._read_doubled("-", TokenType.ARROW_BODY, TokenType.ARROW_BODY_DOTTED)
        if ch == ">":
            return self._read_doubled(">", TokenType.ARROW_RIGHT_CLOSED, TokenType.ARROW_RIGHT_OPEN)
        if ch == "*":
            return self._read_char(TokenType.CREATE_MARK)
        if ch == ":":
            return self._read_char(TokenType.COLON)
        if ch == ",":
            return self._read_char(TokenType.COMMA)
        raise self._fail(f"Unexpected operator: {ch!r}")

    def _read_doubled(self, ch: str, single: TokenType, double: TokenType) -> Token:
        """Scan a one- or two-character run of *ch*."""
        column = self._pos + 1
        self._pos += 1
        if self._current() == ch:
            self._pos += 1
            return Token(double, ch * 2, self._line_number, column)
        return Token(single, ch, self._line_number, column)

    def _read_char(self, token_type: TokenType) -> Token:
        column = self._pos + 1
        ch = self._line[self._pos]
        self._pos += 1
        return Token(token_type, ch, self._line_number, column)

    def _read_identifier(self) -> Token:
        """Scan an identifier and map it to a keyword token type if applicable."""
        start = self._pos
        while self._pos < len(self._line) and self._line[self._pos] in _IDENT_CHARS:
            self._pos += 1
        value = self._line[start : self._pos]
        token_type = _KEYWORDS.get(value, TokenType.IDENTIFIER)
        return Token(token_type, value, self._line_number, start + 1)

    # ------------------------------------------------------------------
    # Low-level helpers
    # ------------------------------------------------------------------

    def _current(self) -> str:
        """Return the character at the current position, or '' at end of line."""
        if self._pos < len(self._line):
            return self._line[self._pos]
        return ""

    def _skip_whitespace(self) -> None:
        while self._pos < len(self._line) and self._line[self._pos] in " \t":
            self._pos += 1

    def _set_mode(self, mode: LexerMode) -> None:
        if mode != self._mode:
            logger.debug("Lexer mode %s -> %s at line %d", self._mode.value, mode.value, self._line_number)
            self._mode = mode

    def _fail(self, message: str) -> LexerError:
        self._set_mode(LexerMode.ERROR)
        return LexerError(message, self._line, self._line_number, self._pos + 1)


def iter_tokens(lines: Iterable[str]) -> Iterator[Token]:
    """Lazily tokenize a sequence of source lines.

    Tokens of each line are yielded once that line has been fully scanned.
    The stream ends with exactly one EOF token. Closing the iterator early
    stops the scan without reading further lines.

    Raises:
        LexerError: On the first line containing an invalid character.
    """
    lexer = Lexer()
    for line in lines:
        yield from lexer.feed_line(line)
    yield lexer.close()


def tokenize(source: str) -> list[Token]:
    """Tokenize sequence diagram source text into a list of tokens.

    Args:
        source: The full text of a diagram.

    Returns:
        A list of Token objects ending with a single EOF token.

    Raises:
        LexerError: On a character that cannot start a token.
    """
    return list(iter_tokens(source.splitlines()))


# ################
# Implementation
# ################

_KEYWORD_RANGE = (TokenType.TITLE.value, TokenType.DESTROY.value)
_OPERATOR_RANGE = (TokenType.ARROW_BODY.value, TokenType.CREATE_MARK.value)

_KEYWORDS: dict[str, TokenType] = {
    member.name.lower(): member
    for member in TokenType
    if _KEYWORD_RANGE[0] <= member.value <= _KEYWORD_RANGE[1]
}

_INLINE_TEXT_KEYWORDS = frozenset({TokenType.TITLE, TokenType.OPT, TokenType.ALT, TokenType.ELSE})

_TYPE_NAMES: dict[TokenType, str] = {
    TokenType.IDENTIFIER: "identifier",
    TokenType.TEXT: "text",
    TokenType.COLON: "colon",
    TokenType.COMMA: "comma",
    TokenType.ARROW_BODY: "arrowbody",
    TokenType.ARROW_BODY_DOTTED: "arrowbodydotted",
    TokenType.ARROW_LEFT_CLOSED: "arrowleft",
    TokenType.ARROW_LEFT_OPEN: "arrowleftopen",
    TokenType.ARROW_RIGHT_CLOSED: "arrowright",
    TokenType.ARROW_RIGHT_OPEN: "arrowrightopen",
    TokenType.ACTIVATE_MARK: "activation marker",
    TokenType.DEACTIVATE_MARK: "deactivation marker",
    TokenType.CREATE_MARK: "create marker",
    TokenType.EOF: "end of input",
}

_OPERATOR_CHARS = frozenset("<>:,*+-")
_IDENT_START_CHARS = frozenset(string.ascii_letters)
_IDENT_CHARS = frozenset(string.ascii_letters + string.digits + "_")

_END_PATTERN = re.compile(r"^\s*end\b", re.IGNORECASE)
