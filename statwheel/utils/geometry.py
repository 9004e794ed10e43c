"""Polar geometry for the stats wheel.

A node is drawn as an annular sector: an outer arc, a straight edge inward, an
inner arc back and a closing edge. Angles are in radians, measured clockwise
from 3 o'clock in screen space (y grows downward), so the root span
[-pi/2, 3pi/2] starts at 12 o'clock.

Degenerate wedges (zero thickness, or a span eaten up by padding) produce no
shape at all; callers simply skip them.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from statwheel.utils.constants import (
    ACTIVE_GROWTH,
    BACKGROUND_RING_LEVELS,
    DEFAULT_VARIANT,
    DIMMED_OPACITY,
    DIMMED_THICKNESS,
    LAST_ACTIVE_GROWTH,
    LEVEL_RADII,
    PIE_HOVER_GROWTH,
    PIE_HOVER_LIFT,
    PIE_HOVER_OPACITY_BOOST,
    PIE_SLICE_PADDING,
    RING_HOVER_GROWTH,
    RING_PADDING,
    ROOT_END_ANGLE,
    ROOT_START_ANGLE,
    VARIANTS,
)
from statwheel.utils.monitoring import logger
from statwheel.utils.types import ArcProps


def normalize_variant(variant: Optional[str]) -> str:
    """Return a known variant name, falling back to the default."""
    if variant in VARIANTS:
        return variant
    logger.warning(f"Unknown chart variant {variant!r}, using {DEFAULT_VARIANT!r}")
    return DEFAULT_VARIANT


def level_radii(level: int, variant: str = DEFAULT_VARIANT) -> Tuple[float, float]:
    """(inner, outer) radius for a level; deeper levels reuse the deepest entry."""
    table = LEVEL_RADII[variant]
    if level in table:
        return table[level]
    return table[max(table)]


def is_pie_slice(level: int, variant: str) -> bool:
    return variant == "pie" and level == 1


def segment_padding(level: int, variant: str = DEFAULT_VARIANT) -> float:
    return PIE_SLICE_PADDING if is_pie_slice(level, variant) else RING_PADDING


def polar_to_cartesian(cx: float, cy: float, radius: float, angle: float) -> Tuple[float, float]:
    return cx + radius * math.cos(angle), cy + radius * math.sin(angle)


def _fmt(v: float) -> str:
    text = f"{v:.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


@dataclass(frozen=True)
class WedgeShape:
    """A drawable annular sector (angles already padded)."""

    inner_radius: float
    outer_radius: float
    start_angle: float
    end_angle: float
    cx: float = 0.0
    cy: float = 0.0

    @property
    def extent(self) -> float:
        return self.end_angle - self.start_angle

    @property
    def large_arc(self) -> bool:
        return self.extent > math.pi

    @property
    def mid_angle(self) -> float:
        return self.start_angle + self.extent / 2

    @property
    def is_empty(self) -> bool:
        """True for zero-thickness shapes (hidden wedges)."""
        return self.outer_radius <= self.inner_radius

    @property
    def path(self) -> str:
        """SVG path data for the sector, or '' for a zero-thickness shape."""
        if self.is_empty:
            return ""
        sx, sy = polar_to_cartesian(self.cx, self.cy, self.outer_radius, self.end_angle)
        ex, ey = polar_to_cartesian(self.cx, self.cy, self.outer_radius, self.start_angle)
        s2x, s2y = polar_to_cartesian(self.cx, self.cy, self.inner_radius, self.end_angle)
        e2x, e2y = polar_to_cartesian(self.cx, self.cy, self.inner_radius, self.start_angle)
        flag = "1" if self.large_arc else "0"
        r, ir = _fmt(self.outer_radius), _fmt(self.inner_radius)
        return " ".join([
            "M", _fmt(sx), _fmt(sy),
            "A", r, r, "0", flag, "0", _fmt(ex), _fmt(ey),
            "L", _fmt(e2x), _fmt(e2y),
            "A", ir, ir, "0", flag, "1", _fmt(s2x), _fmt(s2y),
            "Z",
        ])

    def outline(self, points_per_radian: float = 24.0) -> Tuple[np.ndarray, np.ndarray]:
        """Sample the same boundary as ``path`` as a closed polygon."""
        if self.is_empty:
            return np.array([]), np.array([])
        n = max(2, int(math.ceil(self.extent * points_per_radian)) + 1)
        outer = np.linspace(self.end_angle, self.start_angle, n)
        inner = outer[::-1]
        angles = np.concatenate([outer, inner, outer[:1]])
        radii = np.concatenate([
            np.full(n, self.outer_radius),
            np.full(n, self.inner_radius),
            [self.outer_radius],
        ])
        return self.cx + radii * np.cos(angles), self.cy + radii * np.sin(angles)

    def translated(self, dx: float, dy: float) -> "WedgeShape":
        return WedgeShape(self.inner_radius, self.outer_radius, self.start_angle, self.end_angle,
                          self.cx + dx, self.cy + dy)


def describe_arc(
    cx: float,
    cy: float,
    inner_radius: float,
    outer_radius: float,
    start_angle: float,
    end_angle: float,
    padding: float = 0.01,
) -> Optional[WedgeShape]:
    """Annular sector between two radii, shrunk by ``padding`` on both sides.

    Returns None for a degenerate wedge.
    """
    if inner_radius >= outer_radius:
        return None
    padded_start = start_angle + padding
    padded_end = end_angle - padding
    if padded_start >= padded_end:
        return None
    return WedgeShape(inner_radius, outer_radius, padded_start, padded_end, cx, cy)


def arc_props(
    level: int,
    variant: str = DEFAULT_VARIANT,
    *,
    visible: bool = True,
    dimmed: bool = False,
    active: bool = False,
    last_active: bool = False,
) -> ArcProps:
    """Radii and opacity for a wedge given its drill state."""
    inner, outer = level_radii(level, variant)
    opacity = 1.0

    if not visible:
        outer = inner
        opacity = 0.0
    elif dimmed:
        outer = inner + DIMMED_THICKNESS
        opacity = DIMMED_OPACITY
    elif last_active:
        outer = outer + LAST_ACTIVE_GROWTH
    elif active:
        outer = outer + ACTIVE_GROWTH

    return ArcProps(inner_radius=inner, outer_radius=outer, opacity=opacity, visible=visible)


def hover_growth(level: int, variant: str) -> float:
    return PIE_HOVER_GROWTH if is_pie_slice(level, variant) else RING_HOVER_GROWTH


def hover_offset(level: int, start_angle: float, end_angle: float, variant: str) -> Tuple[float, float]:
    """Outward translation of a hovered pie slice (zero for ring segments)."""
    if not is_pie_slice(level, variant):
        return 0.0, 0.0
    mid = start_angle + (end_angle - start_angle) / 2
    return math.cos(mid) * PIE_HOVER_LIFT, math.sin(mid) * PIE_HOVER_LIFT


def hover_opacity(opacity: float, level: int, variant: str, hovered: bool) -> float:
    if hovered and is_pie_slice(level, variant):
        return min(opacity + PIE_HOVER_OPACITY_BOOST, 1.0)
    return opacity


def wedge_geometry(
    level: int,
    start_angle: float,
    end_angle: float,
    variant: str = DEFAULT_VARIANT,
    hovered: bool = False,
    visible: bool = True,
    *,
    dimmed: bool = False,
    active: bool = False,
    last_active: bool = False,
) -> Optional[WedgeShape]:
    """Drawable wedge for a node, or None when it is degenerate.

    Degeneracy is judged on the table radii and the padded span only, so drill
    and hover state never decide whether a wedge exists. A hidden wedge comes
    back with zero thickness.
    """
    padding = segment_padding(level, variant)
    inner, outer = level_radii(level, variant)
    if describe_arc(0, 0, inner, outer, start_angle, end_angle, padding) is None:
        return None

    props = arc_props(level, variant, visible=visible, dimmed=dimmed, active=active, last_active=last_active)
    if not props["visible"]:
        return WedgeShape(props["inner_radius"], props["inner_radius"],
                          start_angle + padding, end_angle - padding)

    outer_r = props["outer_radius"] + (hover_growth(level, variant) if hovered else 0)
    shape = WedgeShape(props["inner_radius"], outer_r, start_angle + padding, end_angle - padding)
    if hovered:
        dx, dy = hover_offset(level, start_angle, end_angle, variant)
        shape = shape.translated(dx, dy)
    return shape


def background_rings(variant: str = DEFAULT_VARIANT) -> list:
    """Full-circle rings drawn faintly behind levels 1 to 3."""
    rings = []
    for level in BACKGROUND_RING_LEVELS:
        inner, outer = level_radii(level, variant)
        shape = describe_arc(0, 0, inner, outer, ROOT_START_ANGLE, ROOT_END_ANGLE, padding=0)
        if shape is not None:
            rings.append(shape)
    return rings
