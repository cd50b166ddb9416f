# Copyright 2026 Seqdraft Contributors
# SPDX-License-Identifier: Apache-2.0

"""Seqdraft: sequence diagram text to geometric layout."""

from seqdraft.compiler.pipeline import build_layout, build_layout_from_lines
from seqdraft.layout import Layout, LayoutConfig, layout_diagram
from seqdraft.model import Diagram
from seqdraft.parser import LexerError, ParseError, parse, tokenize

__all__ = [
    "build_layout",
    "build_layout_from_lines",
    "Diagram",
    "Layout",
    "LayoutConfig",
    "layout_diagram",
    "LexerError",
    "ParseError",
    "parse",
    "tokenize",
]
