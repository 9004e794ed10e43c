"""Tests for wedge geometry and arc properties."""

import math

import pytest

from statwheel.utils.geometry import (
    arc_props,
    background_rings,
    describe_arc,
    hover_opacity,
    level_radii,
    normalize_variant,
    segment_padding,
    wedge_geometry,
)


class TestLevelRadii:
    """Test the ring table lookups."""

    def test_doughnut_table(self):
        assert level_radii(1, "doughnut") == (55, 95)
        assert level_radii(3, "doughnut") == (150, 180)

    def test_pie_table(self):
        assert level_radii(1, "pie") == (0, 120)
        assert level_radii(2, "pie") == (130, 160)

    def test_deeper_levels_use_deepest_entry(self):
        """Test levels past the table reuse its last ring."""
        assert level_radii(7, "doughnut") == (190, 215)
        assert level_radii(5, "pie") == (205, 215)

    def test_padding(self):
        assert segment_padding(1, "pie") == pytest.approx(0.008)
        assert segment_padding(2, "pie") == pytest.approx(0.015)
        assert segment_padding(1, "doughnut") == pytest.approx(0.015)

    def test_unknown_variant_falls_back(self):
        assert normalize_variant("sunburst") == "doughnut"
        assert normalize_variant("pie") == "pie"


class TestDescribeArc:
    """Test annular sector construction."""

    def test_quarter_sector_path(self):
        """Test the SVG path of an unpadded quarter sector."""
        shape = describe_arc(0, 0, 10, 20, 0, math.pi / 2, padding=0)
        assert shape.path == "M 0 20 A 20 20 0 0 0 20 0 L 10 0 A 10 10 0 0 1 0 10 Z"

    def test_large_arc_flag(self):
        """Test the large-arc flag is set past half a turn."""
        assert describe_arc(0, 0, 10, 20, 0, 4.0, padding=0.01).large_arc
        assert not describe_arc(0, 0, 10, 20, 0, 3.0, padding=0.01).large_arc

    def test_zero_thickness_is_degenerate(self):
        assert describe_arc(0, 0, 20, 20, 0, 1.0) is None
        assert describe_arc(0, 0, 30, 20, 0, 1.0) is None

    def test_padding_eats_span(self):
        """Test a span no wider than twice the padding yields nothing."""
        assert describe_arc(0, 0, 10, 20, 0, 0.02, padding=0.01) is None

    def test_padding_shrinks_both_sides(self):
        shape = describe_arc(0, 0, 10, 20, 1.0, 2.0, padding=0.1)
        assert shape.start_angle == pytest.approx(1.1)
        assert shape.end_angle == pytest.approx(1.9)

    def test_outline_is_closed(self):
        """Test the sampled polygon returns to its first point."""
        xs, ys = describe_arc(0, 0, 10, 20, 0, 1.0).outline()
        assert xs[0] == pytest.approx(xs[-1])
        assert ys[0] == pytest.approx(ys[-1])


class TestArcProps:
    """Test drill-state radii and opacity."""

    def test_default(self):
        assert arc_props(2, "doughnut") == {
            "inner_radius": 105, "outer_radius": 140, "opacity": 1.0, "visible": True,
        }

    def test_invisible(self):
        props = arc_props(2, "doughnut", visible=False)
        assert props["outer_radius"] == props["inner_radius"] == 105
        assert props["opacity"] == 0
        assert props["visible"] is False

    def test_dimmed(self):
        props = arc_props(2, "doughnut", dimmed=True)
        assert props["outer_radius"] == 117
        assert props["opacity"] == pytest.approx(0.25)

    def test_last_active_and_active(self):
        assert arc_props(1, "doughnut", active=True, last_active=True)["outer_radius"] == 103
        assert arc_props(1, "doughnut", active=True)["outer_radius"] == 98

    def test_dimmed_wins_over_active(self):
        assert arc_props(1, "doughnut", dimmed=True, active=True)["outer_radius"] == 67


class TestWedgeGeometry:
    """Test the drawable wedge for a node."""

    def test_hidden_wedge_has_no_thickness(self):
        shape = wedge_geometry(2, 0, 1.0, "doughnut", visible=False)
        assert shape is not None
        assert shape.is_empty
        assert shape.path == ""

    def test_degenerate_span(self):
        assert wedge_geometry(2, 0, 0.02, "doughnut") is None

    def test_pie_level_zero_is_degenerate(self):
        assert wedge_geometry(0, 0, 1.0, "pie") is None

    def test_ring_hover_grows_outward(self):
        shape = wedge_geometry(2, 0, 1.0, "doughnut", hovered=True)
        assert shape.outer_radius == 145
        assert (shape.cx, shape.cy) == (0.0, 0.0)

    def test_pie_hover_lifts_slice(self):
        """Test a hovered pie slice grows and moves along its bisector."""
        shape = wedge_geometry(1, 0, math.pi / 2, "pie", hovered=True)
        assert shape.outer_radius == 128
        assert shape.cx == pytest.approx(6 * math.cos(math.pi / 4))
        assert shape.cy == pytest.approx(6 * math.sin(math.pi / 4))
        assert shape.start_angle == pytest.approx(0.008)

    def test_pie_hover_opacity(self):
        assert hover_opacity(0.5, 1, "pie", True) == pytest.approx(0.65)
        assert hover_opacity(0.95, 1, "pie", True) == 1.0
        assert hover_opacity(0.5, 2, "pie", True) == 0.5
        assert hover_opacity(0.5, 1, "pie", False) == 0.5

    def test_background_rings(self):
        rings = background_rings("doughnut")
        assert [(r.inner_radius, r.outer_radius) for r in rings] == [(55, 95), (105, 140), (150, 180)]
