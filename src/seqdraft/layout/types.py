# Copyright 2026 Seqdraft Contributors
# SPDX-License-Identifier: Apache-2.0

"""Geometric layout values handed to renderers.

Anchors refer to lifelines and activation boxes by index rather than by
object, so a Layout holds no reference cycles and copies cheaply.
"""

from __future__ import annotations

from dataclasses import dataclass, field

# ###############
# Public Interface
# ###############


@dataclass
class ActivationBox:
    """A span of activity on a lifeline.

    Attributes:
        start: Vertical offset of the top edge.
        width: Horizontal size of the box.
        height: Vertical size; only ever increases during layout.
        inset: Horizontal offset from the lifeline center (nesting depth × unit).
    """

    start: float
    width: float
    height: float = 0.0
    inset: float = 0.0

    @property
    def bottom(self) -> float:
        return self.start + self.height

    def grow_by(self, height: float) -> None:
        if height < 0.0:
            raise ValueError(f"Activation boxes cannot shrink (got {height})")
        self.height += height


@dataclass
class Lifeline:
    """The vertical timeline of one participant.

    Attributes:
        name: Canonical participant name.
        boxes: Activation boxes in creation order.
        open_boxes: Indices into ``boxes`` of the currently open boxes,
            innermost last.
    """

    name: str
    boxes: list[ActivationBox] = field(default_factory=list)
    open_boxes: list[int] = field(default_factory=list)

    @property
    def active_box(self) -> int | None:
        """Index of the innermost open box, or None if no box is open."""
        if self.open_boxes:
            return self.open_boxes[-1]
        return None

    @property
    def extent(self) -> float:
        """Lowest point reached by any of the lifeline's boxes."""
        return max((box.bottom for box in self.boxes), default=0.0)

    def activate(self, start: float, width: float, inset_unit: float) -> int:
        """Open a new box at *start*, nested inside any box already open.

        Returns the index of the new box.
        """
        box = ActivationBox(start=start, width=width, inset=len(self.open_boxes) * inset_unit)
        self.boxes.append(box)
        self.open_boxes.append(len(self.boxes) - 1)
        return len(self.boxes) - 1

    def deactivate(self) -> int | None:
        """Close the innermost open box and return its index (None if none was open)."""
        if not self.open_boxes:
            return None
        return self.open_boxes.pop()

    def grow_by(self, height: float) -> None:
        """Grow every open box; they all span the time range going forward."""
        for index in self.open_boxes:
            self.boxes[index].grow_by(height)


@dataclass(frozen=True)
class Anchor:
    """One resolved end of an arrow.

    Attributes:
        lifeline: Index into ``Layout.lifelines``.
        box: Index into that lifeline's ``boxes``, or None.
        y: Vertical offset.
    """

    lifeline: int
    box: int | None
    y: float


@dataclass(frozen=True)
class Arrow:
    start: Anchor
    end: Anchor
    label: str | None = None
    dotted: bool = False


@dataclass(frozen=True)
class Layout:
    """Result of one layout pass.

    Attributes:
        lifelines: One per participant, in first-seen order.
        arrows: One per laid-out signal, in document order.
        height: Total vertical extent consumed by the signals.
    """

    lifelines: list[Lifeline] = field(default_factory=list)
    arrows: list[Arrow] = field(default_factory=list)
    height: float = 0.0

    def lifeline(self, name: str) -> Lifeline | None:
        """Return the lifeline of participant *name*, or None."""
        for lifeline in self.lifelines:
            if lifeline.name == name:
                return lifeline
        return None

    def anchor_box(self, anchor: Anchor) -> ActivationBox | None:
        """Return the activation box an anchor refers to, if any."""
        if anchor.box is None:
            return None
        return self.lifelines[anchor.lifeline].boxes[anchor.box]
