# Copyright 2026 Seqdraft Contributors
# SPDX-License-Identifier: Apache-2.0

"""Layout engine and the geometric values it produces."""

from seqdraft.layout.config import LayoutConfig, LayoutConfigError, load_layout_config
from seqdraft.layout.engine import LayoutEngine, layout_diagram
from seqdraft.layout.types import ActivationBox, Anchor, Arrow, Layout, Lifeline

__all__ = [
    "LayoutConfig",
    "LayoutConfigError",
    "load_layout_config",
    "LayoutEngine",
    "layout_diagram",
    "ActivationBox",
    "Anchor",
    "Arrow",
    "Layout",
    "Lifeline",
]
