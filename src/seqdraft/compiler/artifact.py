# Copyright 2026 Seqdraft Contributors
# SPDX-License-Identifier: Apache-2.0

"""Serialization of layouts and diagram trees.

Layout artifacts are compact JSON files handed to renderers. The format is
versioned so future schema changes can be detected.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from seqdraft.layout.types import ActivationBox, Anchor, Arrow, Layout, Lifeline
from seqdraft.model.entities import Diagram

# ###############
# Public Interface
# ###############

ARTIFACT_FORMAT_VERSION = "1"
ARTIFACT_SUFFIX = ".layout.json"


def serialize(layout: Layout) -> str:
    """Serialize a Layout to a compact JSON string."""
    return json.dumps(_layout_to_dict(layout), separators=(",", ":"))


def deserialize(data: str) -> Layout:
    """Deserialize a Layout from a JSON string.

    Args:
        data: JSON string produced by :func:`serialize`.

    Returns:
        The reconstructed :class:`Layout`.

    Raises:
        ValueError: If the artifact format version is not recognised.
    """
    obj = json.loads(data)
    version = obj.get("v")
    if version != ARTIFACT_FORMAT_VERSION:
        raise ValueError(f"Unsupported artifact format version: {version!r}")
    return _layout_from_dict(obj)


def write_artifact(layout: Layout, path: Path) -> None:
    """Write a layout artifact to *path*, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(serialize(layout), encoding="utf-8")


def read_artifact(path: Path) -> Layout:
    """Read and deserialize a layout artifact from *path*."""
    return deserialize(path.read_text(encoding="utf-8"))


def serialize_diagram(diagram: Diagram) -> str:
    """Serialize a Diagram tree to JSON."""
    return diagram.model_dump_json()


def deserialize_diagram(data: str) -> Diagram:
    """Rebuild a Diagram tree from :func:`serialize_diagram` output."""
    return Diagram.model_validate_json(data)


# ################
# Implementation
# ################


def _layout_to_dict(layout: Layout) -> dict[str, Any]:
    return {
        "v": ARTIFACT_FORMAT_VERSION,
        "height": layout.height,
        "lifelines": [_lifeline_to_dict(lf) for lf in layout.lifelines],
        "arrows": [_arrow_to_dict(a) for a in layout.arrows],
    }


def _layout_from_dict(obj: dict[str, Any]) -> Layout:
    return Layout(
        lifelines=[_lifeline_from_dict(lf) for lf in obj.get("lifelines", [])],
        arrows=[_arrow_from_dict(a) for a in obj.get("arrows", [])],
        height=obj.get("height", 0.0),
    )


def _lifeline_to_dict(lifeline: Lifeline) -> dict[str, Any]:
    d: dict[str, Any] = {"name": lifeline.name, "boxes": [_box_to_dict(b) for b in lifeline.boxes]}
    if lifeline.open_boxes:
        d["open"] = lifeline.open_boxes
    return d


def _lifeline_from_dict(obj: dict[str, Any]) -> Lifeline:
    return Lifeline(
        name=obj["name"],
        boxes=[_box_from_dict(b) for b in obj.get("boxes", [])],
        open_boxes=list(obj.get("open", [])),
    )


def _box_to_dict(box: ActivationBox) -> dict[str, Any]:
    return {"start": box.start, "width": box.width, "height": box.height, "inset": box.inset}


def _box_from_dict(obj: dict[str, Any]) -> ActivationBox:
    return ActivationBox(start=obj["start"], width=obj["width"], height=obj["height"], inset=obj["inset"])


def _anchor_to_dict(anchor: Anchor) -> dict[str, Any]:
    d: dict[str, Any] = {"lifeline": anchor.lifeline, "y": anchor.y}
    if anchor.box is not None:
        d["box"] = anchor.box
    return d


def _anchor_from_dict(obj: dict[str, Any]) -> Anchor:
    return Anchor(lifeline=obj["lifeline"], box=obj.get("box"), y=obj["y"])


def _arrow_to_dict(arrow: Arrow) -> dict[str, Any]:
    d: dict[str, Any] = {"start": _anchor_to_dict(arrow.start), "end": _anchor_to_dict(arrow.end)}
    if arrow.label is not None:
        d["label"] = arrow.label
    if arrow.dotted:
        d["dotted"] = True
    return d


def _arrow_from_dict(obj: dict[str, Any]) -> Arrow:
    return Arrow(
        start=_anchor_from_dict(obj["start"]),
        end=_anchor_from_dict(obj["end"]),
        label=obj.get("label"),
        dotted=obj.get("dotted", False),
    )
