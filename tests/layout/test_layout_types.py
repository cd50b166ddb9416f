# Copyright 2026 Seqdraft Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for lifelines, activation boxes and anchors."""

import pytest

from seqdraft.layout.types import ActivationBox, Anchor, Layout, Lifeline

# ###############
# Activation Boxes
# ###############


class TestActivationBox:
    def test_grow_by_increases_height(self) -> None:
        box = ActivationBox(start=10.0, width=32.0)
        box.grow_by(5.0)
        box.grow_by(2.5)
        assert box.height == 7.5
        assert box.bottom == 17.5

    def test_negative_growth_is_rejected(self) -> None:
        box = ActivationBox(start=0.0, width=32.0, height=4.0)
        with pytest.raises(ValueError):
            box.grow_by(-1.0)
        assert box.height == 4.0


# ###############
# Lifelines
# ###############


class TestLifeline:
    def test_new_lifeline_has_no_active_box(self) -> None:
        lifeline = Lifeline(name="A")
        assert lifeline.active_box is None
        assert lifeline.extent == 0.0

    def test_activate_pushes_box(self) -> None:
        lifeline = Lifeline(name="A")
        index = lifeline.activate(12.0, 32.0, 8.0)
        assert index == 0
        assert lifeline.active_box == 0
        assert lifeline.boxes[0].start == 12.0

    def test_inset_is_depth_times_unit(self) -> None:
        lifeline = Lifeline(name="A")
        lifeline.activate(0.0, 32.0, 8.0)
        lifeline.activate(1.0, 32.0, 8.0)
        lifeline.activate(2.0, 32.0, 8.0)
        assert [box.inset for box in lifeline.boxes] == [0.0, 8.0, 16.0]

    def test_deactivate_pops_without_changing_height(self) -> None:
        lifeline = Lifeline(name="A")
        lifeline.activate(0.0, 32.0, 8.0)
        lifeline.grow_by(10.0)
        assert lifeline.deactivate() == 0
        lifeline.grow_by(10.0)
        assert lifeline.boxes[0].height == 10.0
        assert lifeline.active_box is None

    def test_deactivate_with_nothing_open(self) -> None:
        assert Lifeline(name="A").deactivate() is None

    def test_grow_by_applies_to_all_open_boxes(self) -> None:
        lifeline = Lifeline(name="A")
        lifeline.activate(0.0, 32.0, 8.0)
        lifeline.activate(5.0, 32.0, 8.0)
        lifeline.grow_by(3.0)
        assert [box.height for box in lifeline.boxes] == [3.0, 3.0]

    def test_box_reopened_after_close_is_not_inset(self) -> None:
        lifeline = Lifeline(name="A")
        lifeline.activate(0.0, 32.0, 8.0)
        lifeline.deactivate()
        lifeline.activate(20.0, 32.0, 8.0)
        assert lifeline.boxes[1].inset == 0.0
        assert lifeline.active_box == 1

    def test_extent_is_lowest_box_bottom(self) -> None:
        lifeline = Lifeline(name="A")
        lifeline.boxes.append(ActivationBox(start=0.0, width=32.0, height=50.0))
        lifeline.boxes.append(ActivationBox(start=10.0, width=32.0, height=20.0))
        assert lifeline.extent == 50.0


# ###############
# Layout
# ###############


class TestLayout:
    def test_anchor_box_lookup(self) -> None:
        lifeline = Lifeline(name="A")
        lifeline.activate(0.0, 32.0, 8.0)
        layout = Layout(lifelines=[lifeline])
        assert layout.anchor_box(Anchor(lifeline=0, box=0, y=0.0)) is lifeline.boxes[0]
        assert layout.anchor_box(Anchor(lifeline=0, box=None, y=0.0)) is None
