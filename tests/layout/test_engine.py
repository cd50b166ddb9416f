# Copyright 2026 Seqdraft Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the layout engine."""

import pytest

from seqdraft.layout import Layout, LayoutConfig, LayoutEngine, layout_diagram
from seqdraft.model.entities import Adornment, Diagram, Signal
from seqdraft.parser.parser import parse

# Default config: top margin 20, self-signal height 16, bottom margin 16.
_TOP = 20.0
_SELF = 16.0
_BOTTOM = 16.0

# ###############
# Test Helpers
# ###############


def _layout(source: str, config: LayoutConfig | None = None) -> Layout:
    """Parse and lay out a source string."""
    return layout_diagram(parse(source), config)


def _names(layout: Layout) -> list[str]:
    return [lifeline.name for lifeline in layout.lifelines]


# ###############
# Basic Signals
# ###############


class TestBasicSignals:
    def test_empty_diagram(self) -> None:
        layout = _layout("")
        assert layout.lifelines == []
        assert layout.arrows == []
        assert layout.height == 0.0

    def test_declared_participants_without_signals_have_no_lifelines(self) -> None:
        assert _layout("participant A\nparticipant B").lifelines == []

    def test_single_signal(self) -> None:
        layout = _layout("A -> B: hello")
        assert _names(layout) == ["A", "B"]
        assert len(layout.arrows) == 1
        arrow = layout.arrows[0]
        assert arrow.start.lifeline == 0
        assert arrow.end.lifeline == 1
        assert arrow.start.y == _TOP
        assert arrow.end.y == _TOP
        assert arrow.start.box is None
        assert arrow.end.box is None
        assert arrow.label == "hello"
        assert arrow.dotted is False
        assert layout.height == _TOP + _BOTTOM

    def test_dotted_flag_is_carried(self) -> None:
        assert _layout("A --> B").arrows[0].dotted is True

    def test_self_signal_separates_anchors(self) -> None:
        layout = _layout("A -> A")
        assert _names(layout) == ["A"]
        arrow = layout.arrows[0]
        assert arrow.start.y == _TOP
        assert arrow.end.y == _TOP + _SELF
        assert layout.height == _TOP + _SELF + _BOTTOM

    def test_cursor_accumulates_across_signals(self) -> None:
        layout = _layout("A -> B\nB -> C\nC -> A")
        step = _TOP + _BOTTOM
        assert [a.start.y for a in layout.arrows] == [_TOP, _TOP + step, _TOP + 2 * step]
        assert layout.height == 3 * step

    def test_arrows_follow_document_order(self) -> None:
        layout = _layout("A -> B: 1\nB -> A: 2\nA -> B: 3\nB -> A: 4")
        assert [a.label for a in layout.arrows] == ["1", "2", "3", "4"]
        assert _names(layout) == ["A", "B"]

    def test_lifelines_in_first_seen_order(self) -> None:
        layout = _layout("C -> A\nB -> C\nD -> D")
        assert _names(layout) == ["C", "A", "B", "D"]

    def test_custom_config_scales_margins(self) -> None:
        layout = _layout("A -> A", LayoutConfig(font_size=10.0))
        arrow = layout.arrows[0]
        assert arrow.start.y == 12.5
        assert arrow.end.y == 22.5
        assert layout.height == 32.5


# ###############
# Aliases and Scope
# ###############


class TestAliasesAndScope:
    def test_aliases_resolve_to_canonical_lifeline(self) -> None:
        layout = _layout("participant Alice as A\nA -> Bob\nBob -> Alice")
        assert _names(layout) == ["Alice", "Bob"]
        assert layout.arrows[1].end.lifeline == 0

    def test_nested_block_contents_are_not_laid_out(self) -> None:
        layout = _layout("opt\nA -> B\nend\nalt\nelse\nend\nC -> D")
        assert _names(layout) == ["C", "D"]
        assert len(layout.arrows) == 1
        assert layout.arrows[0].start.y == _TOP

    def test_hand_built_diagram(self) -> None:
        diagram = Diagram(statements=[Signal(source="X", target="Y", tail=Adornment.OPEN)])
        layout = LayoutEngine(diagram).layout()
        assert _names(layout) == ["X", "Y"]

    def test_alias_and_canonical_name_form_a_flat_arrow(self) -> None:
        # Self-signal detection compares names as written, before alias resolution.
        layout = _layout("participant Alice as A\nA -> Alice")
        assert _names(layout) == ["Alice"]
        arrow = layout.arrows[0]
        assert arrow.start.lifeline == arrow.end.lifeline == 0
        assert arrow.start.y == arrow.end.y == _TOP
        assert layout.height == _TOP + _BOTTOM


# ###############
# Activation Boxes
# ###############


class TestActivation:
    def test_activation_opens_box_at_end_anchor(self) -> None:
        layout = _layout("A ->+ B: call")
        b = layout.lifelines[1]
        assert len(b.boxes) == 1
        box = b.boxes[0]
        assert box.start == _TOP
        assert box.width == 32.0
        assert box.inset == 0.0
        assert box.height == _BOTTOM
        assert layout.arrows[0].end.box == 0
        assert layout.arrows[0].start.box is None

    def test_deactivation_closes_box_after_start_anchor(self) -> None:
        layout = _layout("A ->+ B: call\nB -->- A: reply")
        b = layout.lifelines[1]
        box = b.boxes[0]
        reply = layout.arrows[1]
        assert reply.start.lifeline == 1
        assert reply.start.box == 0
        assert reply.end.box is None
        # Grew by the bottom margin of the call and the top margin of the reply.
        assert box.height == _BOTTOM + _TOP
        assert b.active_box is None
        assert b.extent == box.start + box.height

    def test_closed_box_stops_growing(self) -> None:
        layout = _layout("A ->+ B\nB ->- A\nA -> C\nC -> A")
        assert layout.lifelines[1].boxes[0].height == _BOTTOM + _TOP

    def test_nested_activation_is_inset(self) -> None:
        layout = _layout("A ->+ B\nA ->+ B")
        boxes = layout.lifelines[1].boxes
        assert [box.inset for box in boxes] == [0.0, 8.0]
        assert boxes[1].start == 2 * _TOP + _BOTTOM
        # All open boxes grow together.
        assert boxes[0].height == 2 * _BOTTOM + _TOP
        assert boxes[1].height == _BOTTOM
        assert layout.arrows[1].end.box == 1

    def test_growth_applies_to_uninvolved_lifelines(self) -> None:
        layout = _layout("A ->+ B\nC -> D")
        assert layout.lifelines[1].boxes[0].height == _BOTTOM + _TOP + _BOTTOM

    def test_self_activation(self) -> None:
        layout = _layout("A ->+ A")
        box = layout.lifelines[0].boxes[0]
        assert box.start == _TOP + _SELF
        assert layout.arrows[0].start.box is None
        assert layout.arrows[0].end.box == 0

    def test_deactivate_without_open_box_is_harmless(self) -> None:
        layout = _layout("A ->- B")
        assert layout.lifelines[0].boxes == []

    def test_heights_are_monotonic_as_signals_are_added(self) -> None:
        lines = ["A ->+ B", "B -> C", "C -> B", "B ->- A", "A -> C"]
        heights = []
        for count in range(1, len(lines) + 1):
            layout = _layout("\n".join(lines[:count]))
            heights.append(layout.lifelines[1].boxes[0].height)
        assert heights == sorted(heights)

    def test_anchors_resolve_to_existing_lifelines_and_boxes(self) -> None:
        layout = _layout("A ->+ B\nB ->+ C\nC ->+ C\nC -->- B\nB -->- A\nA ->> C")
        for arrow in layout.arrows:
            for anchor in (arrow.start, arrow.end):
                lifeline = layout.lifelines[anchor.lifeline]
                if anchor.box is not None:
                    assert layout.anchor_box(anchor) is lifeline.boxes[anchor.box]


# ###############
# Engine State
# ###############


class TestEngineState:
    def test_body_height_matches_layout_height(self) -> None:
        engine = LayoutEngine(parse("A -> B\nB -> B"))
        layout = engine.layout()
        assert engine.body_height == layout.height

    @pytest.mark.parametrize("source", ["A -> B", "A -> A", "A ->+ B\nB -->- A"])
    def test_lifeline_lookup_by_name(self, source: str) -> None:
        layout = _layout(source)
        assert layout.lifeline("A") is layout.lifelines[0]
        assert layout.lifeline("missing") is None

    def test_repeated_layout_leaves_earlier_result_untouched(self) -> None:
        engine = LayoutEngine(parse("A ->+ B: call"))
        first = engine.layout()
        second = engine.layout()
        assert len(first.arrows) == 1
        assert first.lifelines[1].boxes[0].height == _BOTTOM
        assert first.height == _TOP + _BOTTOM
        assert second == first
        assert second.lifelines is not first.lifelines
        assert engine.body_height == second.height
