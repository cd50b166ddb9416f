# Copyright 2026 Seqdraft Contributors
# SPDX-License-Identifier: Apache-2.0

"""Compiler pipeline: lexing, parsing, layout and artifact serialization."""

from seqdraft.compiler.artifact import (
    ARTIFACT_SUFFIX,
    deserialize,
    deserialize_diagram,
    read_artifact,
    serialize,
    serialize_diagram,
    write_artifact,
)
from seqdraft.compiler.pipeline import build_layout, build_layout_from_lines

__all__ = [
    "build_layout",
    "build_layout_from_lines",
    "serialize",
    "deserialize",
    "serialize_diagram",
    "deserialize_diagram",
    "write_artifact",
    "read_artifact",
    "ARTIFACT_SUFFIX",
]
