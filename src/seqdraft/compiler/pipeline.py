# Copyright 2026 Seqdraft Contributors
# SPDX-License-Identifier: Apache-2.0

"""End-to-end pipeline: source text to Layout."""

from __future__ import annotations

from collections.abc import Iterable

from seqdraft.layout.config import LayoutConfig
from seqdraft.layout.engine import layout_diagram
from seqdraft.layout.types import Layout
from seqdraft.parser.lexer import iter_tokens
from seqdraft.parser.parser import parse_tokens

# ###############
# Public Interface
# ###############


def build_layout(source: str, config: LayoutConfig | None = None) -> Layout:
    """Lex, parse and lay out diagram source text.

    Raises:
        LexerError: If the source contains a character that cannot start a token.
        ParseError: If the source is syntactically invalid.
    """
    return build_layout_from_lines(source.splitlines(), config)


def build_layout_from_lines(lines: Iterable[str], config: LayoutConfig | None = None) -> Layout:
    """Like :func:`build_layout`, reading the source one line at a time.

    Lines are consumed lazily; a lexical error stops reading at the
    offending line.
    """
    diagram = parse_tokens(iter_tokens(lines))
    return layout_diagram(diagram, config)
