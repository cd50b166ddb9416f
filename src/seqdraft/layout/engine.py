# Copyright 2026 Seqdraft Contributors
# SPDX-License-Identifier: Apache-2.0

"""Layout engine: turns a Diagram into lifelines, activation boxes and arrows.

The engine walks the root statements in document order and keeps a single
vertical cursor shared by all lifelines. Every growth step extends the open
activation boxes of every lifeline by the same amount, so lifelines that take
no part in a signal stay aligned with those that do.

Only signals directly in the root sequence are laid out; the contents of
``opt`` blocks and ``alt`` groups are skipped.
"""

from __future__ import annotations

import logging

from seqdraft.layout.config import LayoutConfig
from seqdraft.layout.types import Anchor, Arrow, Layout, Lifeline
from seqdraft.model.entities import Diagram, Signal

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


class LayoutEngine:
    """Layout pass over one diagram.

    Each call to ``layout`` starts from an empty state and builds a fresh Layout,
    so Layouts returned by earlier calls are never modified.
    """

    def __init__(self, diagram: Diagram, config: LayoutConfig | None = None) -> None:
        self._diagram = diagram
        self._config = config or LayoutConfig()
        self._reset()

    @property
    def body_height(self) -> float:
        """Current position of the shared vertical cursor."""
        return self._body_height

    def layout(self) -> Layout:
        """Run the layout pass and return the finished Layout."""
        self._reset()
        for statement in self._diagram.statements:
            if isinstance(statement, Signal):
                self._layout_signal(statement)
        logger.debug(
            "Laid out %d arrow(s) across %d lifeline(s), height %.1f",
            len(self._arrows),
            len(self._lifelines),
            self._body_height,
        )
        return Layout(lifelines=self._lifelines, arrows=self._arrows, height=self._body_height)

    # ------------------------------------------------------------------
    # Signals
    # ------------------------------------------------------------------

    def _layout_signal(self, signal: Signal) -> None:
        source_index = self._lifeline(self._diagram.resolve(signal.source))
        target_index = self._lifeline(self._diagram.resolve(signal.target))
        source = self._lifelines[source_index]
        target = self._lifelines[target_index]

        self._grow_by(self._config.signal_top_margin)
        start = Anchor(lifeline=source_index, box=source.active_box, y=self._body_height)
        if signal.deactivates:
            source.deactivate()

        self._grow_by(self._config.self_signal_height if signal.is_self_signal else 0.0)

        if signal.activates:
            target.activate(self._body_height, self._config.box_width, self._config.box_inset)
        end = Anchor(lifeline=target_index, box=target.active_box, y=self._body_height)

        self._grow_by(self._config.signal_bottom_margin)
        self._arrows.append(Arrow(start=start, end=end, label=signal.message, dotted=signal.dotted))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _reset(self) -> None:
        self._lifelines: list[Lifeline] = []
        self._index: dict[str, int] = {}
        self._arrows: list[Arrow] = []
        self._body_height = 0.0

    def _lifeline(self, name: str) -> int:
        """Return the index of the lifeline for *name*, creating it on first use."""
        index = self._index.get(name)
        if index is None:
            index = len(self._lifelines)
            self._lifelines.append(Lifeline(name=name))
            self._index[name] = index
        return index

    def _grow_by(self, height: float) -> None:
        if height == 0.0:
            return
        for lifeline in self._lifelines:
            lifeline.grow_by(height)
        self._body_height += height


def layout_diagram(diagram: Diagram, config: LayoutConfig | None = None) -> Layout:
    """Lay out *diagram* and return the resulting Layout."""
    return LayoutEngine(diagram, config).layout()
