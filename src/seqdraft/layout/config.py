# Copyright 2026 Seqdraft Contributors
# SPDX-License-Identifier: Apache-2.0

"""Layout configuration record and its YAML loader."""

from __future__ import annotations

import math
from dataclasses import dataclass
from pathlib import Path

import yaml

# ###############
# Public Interface
# ###############


class LayoutConfigError(Exception):
    """Raised when a layout configuration file is invalid or cannot be loaded."""


@dataclass(frozen=True)
class LayoutConfig:
    """Numeric constants that scale the layout geometry.

    Attributes:
        font_size: Text size unit; signal margins are derived from it.
        box_width: Width of an activation box.
        box_inset: Horizontal inset applied per nesting level of activation.
    """

    font_size: float = 16.0
    box_width: float = 32.0
    box_inset: float = 8.0

    @property
    def signal_top_margin(self) -> float:
        """Vertical space above the start anchor of a signal."""
        return self.font_size * 1.25

    @property
    def self_signal_height(self) -> float:
        """Vertical distance between the anchors of a self-directed signal."""
        return self.font_size

    @property
    def signal_bottom_margin(self) -> float:
        """Vertical space below the end anchor of a signal."""
        return self.font_size


def load_layout_config(path: Path) -> LayoutConfig:
    """Load a layout configuration file.

    Args:
        path: Path to a YAML file with optional ``font-size``, ``box-width``
            and ``box-inset`` entries.

    Returns:
        A LayoutConfig with defaults for every entry the file omits.

    Raises:
        LayoutConfigError: If the file cannot be read or the configuration is invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise LayoutConfigError(f"Layout config file not found: {path}") from None
    except OSError as exc:
        raise LayoutConfigError(f"Cannot read layout config file: {exc}") from exc

    return _parse_layout_config(text, source_label=str(path))


# ################
# Implementation
# ################

_KEYS: dict[str, str] = {
    "font-size": "font_size",
    "box-width": "box_width",
    "box-inset": "box_inset",
}


def _parse_layout_config(text: str, source_label: str = "<string>") -> LayoutConfig:
    """Parse layout config YAML text into a LayoutConfig.

    An empty document yields the default configuration.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise LayoutConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        return LayoutConfig()
    if not isinstance(data, dict):
        raise LayoutConfigError(f"{source_label}: layout config must be a YAML mapping")

    unknown = sorted(str(key) for key in data if key not in _KEYS)
    if unknown:
        raise LayoutConfigError(f"{source_label}: unknown layout setting(s): {', '.join(unknown)}")

    values = {_KEYS[key]: _require_positive_number(data, key, source_label) for key in data}
    return LayoutConfig(**values)


def _require_positive_number(mapping: dict[str, object], key: str, source_label: str) -> float:
    value = mapping[key]
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise LayoutConfigError(f"{source_label}: '{key}' must be a number")
    if not math.isfinite(value):
        raise LayoutConfigError(f"{source_label}: '{key}' must be finite")
    if value <= 0:
        raise LayoutConfigError(f"{source_label}: '{key}' must be positive")
    return float(value)
