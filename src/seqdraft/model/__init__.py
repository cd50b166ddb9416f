# Copyright 2026 Seqdraft Contributors
# SPDX-License-Identifier: Apache-2.0

"""Diagram tree model (signals, conditional blocks, alt groups)."""

from seqdraft.model.entities import (
    DEFAULT_ROLE,
    Adornment,
    AltGroup,
    ConditionalBlock,
    Diagram,
    Signal,
    Statement,
)

__all__ = [
    "DEFAULT_ROLE",
    "Adornment",
    "AltGroup",
    "ConditionalBlock",
    "Diagram",
    "Signal",
    "Statement",
]
