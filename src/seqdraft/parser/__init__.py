# Copyright 2026 Seqdraft Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lexer and parser for sequence diagram sources."""

from seqdraft.parser.lexer import Lexer, LexerError, LexerMode, Token, TokenType, iter_tokens, tokenize
from seqdraft.parser.parser import ParseError, parse, parse_tokens

__all__ = [
    "Lexer",
    "LexerError",
    "LexerMode",
    "Token",
    "TokenType",
    "iter_tokens",
    "tokenize",
    "parse",
    "parse_tokens",
    "ParseError",
]
