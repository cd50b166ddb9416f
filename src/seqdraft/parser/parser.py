# Copyright 2026 Seqdraft Contributors
# SPDX-License-Identifier: Apache-2.0

"""Recursive-descent parser for sequence diagram sources.

Converts a token stream produced by the lexer into a Diagram tree.
"""

from __future__ import annotations

from collections.abc import Iterable

from seqdraft.model.entities import Adornment, AltGroup, ConditionalBlock, Diagram, Signal, Statement
from seqdraft.parser.lexer import Token, TokenType, tokenize

# ###############
# Public Interface
# ###############


class ParseError(Exception):
    """Raised when the parser encounters a syntactically invalid construct.

    Attributes:
        token: The offending token, if one is available.
        line: 1-based line number of the error, or None without a token.
        column: 1-based column number of the error, or None without a token.
    """

    def __init__(self, message: str, token: Token | None = None) -> None:
        if token is None:
            super().__init__(message)
        else:
            super().__init__(f"Line {token.line}, column {token.column}: {message}")
        self.message = message
        self.token = token
        self.line = token.line if token is not None else None
        self.column = token.column if token is not None else None


def parse(source: str) -> Diagram:
    """Parse diagram source text into a Diagram.

    Args:
        source: The full text of a diagram.

    Returns:
        The parsed Diagram.

    Raises:
        LexerError: If the source contains a character that cannot start a token.
        ParseError: If the source is syntactically invalid.
    """
    return parse_tokens(tokenize(source))


def parse_tokens(tokens: Iterable[Token]) -> Diagram:
    """Parse a token sequence into a Diagram.

    The sequence does not need to end with an EOF token; running out of
    tokens is treated the same way.

    Raises:
        ParseError: If the tokens do not form a valid diagram.
    """
    return _Parser(tokens).parse()


# ################
# Implementation
# ################

_TAILS: dict[TokenType, Adornment] = {
    TokenType.ARROW_LEFT_CLOSED: Adornment.CLOSED,
    TokenType.ARROW_LEFT_OPEN: Adornment.OPEN,
}

_HEADS: dict[TokenType, Adornment] = {
    TokenType.ARROW_RIGHT_CLOSED: Adornment.CLOSED,
    TokenType.ARROW_RIGHT_OPEN: Adornment.OPEN,
}


class _Parser:
    """Recursive-descent parser with a single token of lookahead."""

    def __init__(self, tokens: Iterable[Token]) -> None:
        self._tokens = iter(tokens)
        self._last: Token | None = None
        self._diagram = Diagram()
        self._current = self._next_token()

    def parse(self) -> Diagram:
        """Parse the full token stream and return the Diagram."""
        while not self._check(TokenType.EOF):
            if self._accept(TokenType.TITLE):
                self._parse_title()
            elif self._accept(TokenType.PARTICIPANT):
                self._parse_participant()
            else:
                self._parse_statement(self._diagram.statements)
        return self._diagram

    # ------------------------------------------------------------------
    # Token access helpers
    # ------------------------------------------------------------------

    def _next_token(self) -> Token:
        """Pull the next token, synthesizing EOF once the input runs out."""
        tok = next(self._tokens, None)
        if tok is None:
            line, column = (self._last.line, self._last.column) if self._last is not None else (1, 1)
            return Token(TokenType.EOF, None, line, column)
        self._last = tok
        return tok

    def _advance(self) -> Token:
        """Consume and return the current token, stopping at EOF."""
        tok = self._current
        if tok.type != TokenType.EOF:
            self._current = self._next_token()
        return tok

    def _check(self, *types: TokenType) -> bool:
        """Return True if the current token matches any of the given types."""
        return self._current.type in types

    def _accept(self, token_type: TokenType) -> bool:
        """Consume the current token if it has the given type."""
        if self._check(token_type):
            self._advance()
            return True
        return False

    def _expect(self, *types: TokenType) -> Token:
        """Consume the current token if it matches any of the given types.

        Raises ParseError if the current token does not match.
        """
        tok = self._current
        if tok.type not in types:
            expected = " or ".join(t.describe() for t in types)
            raise ParseError(f"Expected {expected}, got {tok}", tok)
        return self._advance()

    def _read(self, token_type: TokenType) -> str:
        """Consume a token of the given type and return its value."""
        return self._expect(token_type).value or ""

    def _accept_text(self) -> str | None:
        """Consume an optional TEXT token and return its value."""
        if self._check(TokenType.TEXT):
            return self._read(TokenType.TEXT)
        return None

    # ------------------------------------------------------------------
    # Declarations
    # ------------------------------------------------------------------

    def _parse_title(self) -> None:
        """Parse the remainder of: title <text>"""
        self._diagram.title = self._read(TokenType.TEXT)

    def _parse_participant(self) -> None:
        """Parse the remainder of: participant <name> [as <alias>]"""
        name = self._read(TokenType.IDENTIFIER)
        self._diagram.add_participant(name)
        if self._accept(TokenType.AS):
            alias = self._read(TokenType.IDENTIFIER)
            self._diagram.add_alias(alias, name)

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def _parse_statement(self, statements: list[Statement]) -> None:
        """Parse one statement and append it to *statements*."""
        if self._accept(TokenType.OPT):
            statements.append(self._parse_opt())
        elif self._accept(TokenType.ALT):
            statements.append(self._parse_alt())
        elif self._check(TokenType.IDENTIFIER):
            statements.append(self._parse_signal())
        else:
            raise ParseError(f"Unexpected token in statement: {self._current}", self._current)

    def _parse_opt(self) -> ConditionalBlock:
        """Parse the remainder of: opt [<condition>] <statement>* end"""
        block = ConditionalBlock(label="opt", condition=self._accept_text())
        while not self._check(TokenType.END, TokenType.EOF):
            self._parse_statement(block.statements)
        self._expect(TokenType.END)
        return block

    def _parse_alt(self) -> AltGroup:
        """Parse the remainder of: alt [<condition>] (else [<condition>])* end

        Branch bodies are not parsed; every block of the group is empty.
        """
        group = AltGroup()
        block = ConditionalBlock(label="alt", condition=self._accept_text())
        while True:
            if self._accept(TokenType.ELSE):
                group.blocks.append(block)
                block = ConditionalBlock(label="else", condition=self._accept_text())
            else:
                self._expect(TokenType.ELSE, TokenType.END)
                group.blocks.append(block)
                return group

    def _parse_signal(self) -> Signal:
        """Parse: <from> [tail] body [head] [+|-] <to> [: <message>]"""
        source = self._read(TokenType.IDENTIFIER)

        arrow = self._current
        tail = _TAILS.get(arrow.type)
        if tail is not None:
            self._advance()
        dotted = self._accept(TokenType.ARROW_BODY_DOTTED)
        if not dotted:
            self._expect(TokenType.ARROW_BODY)
        head = _HEADS.get(self._current.type)
        if head is not None:
            self._advance()
        if head is None and tail is None:
            raise ParseError("Arrow has neither head nor tail", arrow)

        activates = self._accept(TokenType.ACTIVATE_MARK)
        deactivates = not activates and self._accept(TokenType.DEACTIVATE_MARK)

        target = self._read(TokenType.IDENTIFIER)
        message = self._read(TokenType.TEXT) if self._accept(TokenType.COLON) else None

        for name in (source, target):
            canonical = self._diagram.resolve(name)
            if self._diagram.participant(canonical) is None:
                self._diagram.add_participant(canonical)

        return Signal(
            source=source,
            target=target,
            tail=tail,
            head=head,
            dotted=dotted,
            message=message,
            activates=activates,
            deactivates=deactivates,
        )
