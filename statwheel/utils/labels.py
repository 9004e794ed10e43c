"""Label policy for wedges: whether to label, which name, where and how rotated."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional

from statwheel.utils.constants import (
    MAX_FULL_NAME_CHARS,
    MIN_LABEL_ARC,
    MIN_LABEL_OPACITY,
    PIE_VALUE_LABEL_MIN_ARC,
    PIE_VALUE_LABEL_RADIUS,
    SHORT_LABEL_ARC,
    SHORT_LABEL_PIXELS,
    SHORT_NAME_MAP,
)
from statwheel.utils.data import format_stat_value
from statwheel.utils.geometry import is_pie_slice, level_radii, polar_to_cartesian
from statwheel.utils.types import ArcProps, StatsNode


@dataclass(frozen=True)
class LabelDecision:
    node_id: str
    text: str
    x: float
    y: float
    rotation: float = 0.0
    font_size: int = 8
    font_weight: int = 600
    use_short: bool = False
    kind: str = "name"


def get_short_name(name: str, short_name: Optional[str] = None) -> str:
    """Explicit short name, else the curated abbreviation, else two upper-cased letters."""
    if short_name:
        return short_name
    return SHORT_NAME_MAP.get(name) or name[:2].upper()


def use_short_label(arc_angle: float, mid_radius: float, name: str) -> bool:
    arc_length = arc_angle * mid_radius
    return arc_angle < SHORT_LABEL_ARC or arc_length < SHORT_LABEL_PIXELS or len(name) > MAX_FULL_NAME_CHARS


def text_rotation(mid_angle: float) -> float:
    """Rotation in degrees along the radius, flipped on the left half to stay upright."""
    rotation = math.degrees(mid_angle)
    if math.pi / 2 < mid_angle < math.pi * 1.5:
        rotation += 180
    return rotation


def _labelable(node: StatsNode, props: ArcProps, has_shape: bool) -> bool:
    return (
        node.level > 0
        and has_shape
        and props["visible"]
        and props["opacity"] >= MIN_LABEL_OPACITY
    )


def place_label(node: StatsNode, variant: str, props: ArcProps, has_shape: bool = True) -> Optional[LabelDecision]:
    """Ring label for a wedge, or None when it should stay unlabelled.

    Pie slices (level 1 of the pie variant) get value labels instead.
    """
    if not _labelable(node, props, has_shape) or is_pie_slice(node.level, variant):
        return None

    arc_angle = node.span
    if arc_angle < MIN_LABEL_ARC:
        return None

    inner, outer = level_radii(node.level, variant)
    mid_angle = node.start_angle + arc_angle / 2
    mid_radius = inner + (outer - inner) / 2
    x, y = polar_to_cartesian(0, 0, mid_radius, mid_angle)

    short = use_short_label(arc_angle, mid_radius, node.name)
    text = get_short_name(node.name, node.short_name) if short else node.name
    top_level = node.level == 1
    return LabelDecision(
        node_id=node.id,
        text=text,
        x=x,
        y=y,
        rotation=text_rotation(mid_angle),
        font_size=(9 if short else 10) if top_level else 8,
        font_weight=700 if top_level else 600,
        use_short=short,
    )


def place_value_label(node: StatsNode, variant: str, props: ArcProps, has_shape: bool = True) -> List[LabelDecision]:
    """Name and value printed inside a pie slice wide enough to hold them."""
    if not _labelable(node, props, has_shape) or not is_pie_slice(node.level, variant):
        return []
    if node.span < PIE_VALUE_LABEL_MIN_ARC:
        return []

    _, outer = level_radii(node.level, variant)
    mid_angle = node.start_angle + node.span / 2
    x, y = polar_to_cartesian(0, 0, outer * PIE_VALUE_LABEL_RADIUS, mid_angle)
    return [
        LabelDecision(node.id, node.name, x, y - 6, font_size=13, font_weight=700),
        LabelDecision(node.id, format_stat_value(node.value, missing="0"), x, y + 10,
                      font_size=16, font_weight=800, kind="value"),
    ]
