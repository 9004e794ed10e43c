"""Tests for tree aggregation, angle partitioning and the id index."""

import copy
import logging
import math

import pytest

from statwheel.utils.constants import ROOT_END_ANGLE, ROOT_START_ANGLE
from statwheel.utils.hierarchy import (
    TreeIndex,
    annotate_tree,
    assign_angles,
    calculate_hierarchy,
)
from statwheel.utils.types import StatsNode


# =============================================================================
# AGGREGATION
# =============================================================================

class TestCalculateHierarchy:
    """Test bottom-up value aggregation."""

    def test_internal_values_are_sums(self, annotated):
        """Test internal nodes carry the sum of their children."""
        index = annotated.index
        assert index.get("A").value == 40
        assert index.get("B").value == 20
        assert annotated.root.value == 60
        assert annotated.total == 60

    def test_missing_leaf_stays_none(self, annotated):
        """Test a None leaf counts as 0 but is not rewritten."""
        assert annotated.index.get("B1").value is None

    def test_internal_value_is_overwritten(self):
        """Test a stale value on an internal node is replaced."""
        root = StatsNode("r", "Root", value=999, children=[
            StatsNode("a", "A", value=2, level=1),
            StatsNode("b", "B", value=3, level=1),
        ])
        assert calculate_hierarchy(root) == 5
        assert root.value == 5

    def test_bare_leaf_root(self):
        """Test a root without children keeps its own value."""
        root = StatsNode("r", "Root", value=7)
        assert calculate_hierarchy(root) == 7
        assert root.value == 7


# =============================================================================
# ANGLES
# =============================================================================

class TestAssignAngles:
    """Test proportional partitioning of the circle."""

    def test_root_covers_full_circle(self, annotated):
        """Test the root spans -pi/2 to 3pi/2."""
        assert annotated.root.start_angle == pytest.approx(ROOT_START_ANGLE)
        assert annotated.root.end_angle == pytest.approx(ROOT_END_ANGLE)

    def test_spans_are_proportional(self, annotated):
        """Test child spans follow their share of the parent value."""
        index = annotated.index
        full = 2 * math.pi
        assert index.get("A").span == pytest.approx(full * 40 / 60)
        assert index.get("B").span == pytest.approx(full * 20 / 60)
        assert index.get("A1").span == pytest.approx(index.get("A").span * 0.75)
        assert index.get("B1").span == pytest.approx(0.0)

    def test_children_are_contiguous(self, annotated):
        """Test siblings tile the parent span in order."""
        index = annotated.index
        assert index.get("A").end_angle == pytest.approx(index.get("B").start_angle)
        assert index.get("A1").start_angle == pytest.approx(index.get("A").start_angle)
        assert index.get("B2").end_angle == pytest.approx(index.get("B").end_angle)

    def test_center_angle(self, annotated):
        """Test the center angle is the midpoint of the span."""
        node = annotated.index.get("A")
        assert node.center_angle == pytest.approx((node.start_angle + node.end_angle) / 2)

    def test_zero_total_splits_equally(self):
        """Test an all-zero subtree divides its span evenly."""
        root = StatsNode("r", "Root", children=[
            StatsNode("a", "A", value=0, level=1),
            StatsNode("b", "B", value=None, level=1),
            StatsNode("c", "C", value=0, level=1),
        ])
        calculate_hierarchy(root)
        assign_angles(root, 0.0, 3.0)
        assert [c.span for c in root.children] == pytest.approx([1.0, 1.0, 1.0])


# =============================================================================
# INDEX
# =============================================================================

class TestTreeIndex:
    """Test id lookups on the annotated tree."""

    def test_path_to(self, annotated):
        """Test the path runs from the category down, root excluded."""
        assert annotated.index.path_to("A1") == ["A", "A1"]
        assert annotated.index.path_to("B") == ["B"]
        assert annotated.index.path_to("root") == []

    def test_path_to_unknown(self, annotated):
        """Test an unknown id has no path."""
        assert annotated.index.path_to("nope") is None

    def test_parent_and_siblings(self, annotated):
        """Test parent and sibling lookups."""
        index = annotated.index
        assert index.parent_id("A1") == "A"
        assert index.parent("A").id == "root"
        assert index.parent("root") is None
        assert [s.id for s in index.siblings("A2")] == ["A1", "A2"]

    def test_root_category(self, annotated):
        """Test the level-1 ancestor lookup."""
        assert annotated.index.root_category("B2").id == "B"
        assert annotated.index.root_category("A").id == "A"
        assert annotated.index.root_category("root") is None

    def test_nodes_depth_first(self, annotated):
        """Test nodes come back depth-first with children in order."""
        ids = [n.id for n in annotated.index.nodes()]
        assert ids == ["root", "A", "A1", "A2", "B", "B1", "B2"]

    def test_duplicate_ids_keep_first(self, caplog):
        """Test a duplicate id is logged and its subtree skipped."""
        root = StatsNode("r", "Root", children=[
            StatsNode("x", "First", value=1, level=1),
            StatsNode("x", "Second", value=2, level=1, children=[
                StatsNode("y", "Child", value=2, level=2),
            ]),
        ])
        with caplog.at_level(logging.WARNING, logger="statwheel"):
            index = TreeIndex(root)
        assert index.get("x").name == "First"
        assert "y" not in index
        assert len(index) == 2
        assert "Duplicate" in caplog.text


# =============================================================================
# PIPELINE
# =============================================================================

class TestAnnotateTree:
    """Test the copy-aggregate-partition pipeline."""

    def test_duplicate_subtree_takes_no_angle(self, caplog):
        """Test a repeated id is dropped before values and angles are assigned."""
        root = StatsNode("r", "Root", children=[
            StatsNode("x", "First", value=1),
            StatsNode("x", "Second", children=[StatsNode("y", "Child", value=3)]),
        ])
        with caplog.at_level(logging.WARNING, logger="statwheel"):
            result = annotate_tree(root)
        assert [c.id for c in result.root.children] == ["x"]
        assert result.total == 1
        assert result.index.get("x").span == pytest.approx(2 * math.pi)
        assert "y" not in result.index
        assert "Duplicate" in caplog.text

    def test_duplicate_keeps_first_in_depth_first_order(self):
        """Test the nested occurrence wins when it is reached first."""
        root = StatsNode("r", "Root", children=[
            StatsNode("a", "A", children=[StatsNode("x", "Nested", value=2)]),
            StatsNode("x", "Sibling", value=5),
        ])
        result = annotate_tree(root)
        assert result.index.path_to("x") == ["a", "x"]
        assert result.total == 2

    def test_levels_stamped_by_depth(self):
        """Test nodes built without levels get their depth."""
        root = StatsNode("r", "Root", children=[
            StatsNode("a", "A", children=[StatsNode("a1", "A1", value=3)]),
            StatsNode("b", "B", value=1),
        ])
        result = annotate_tree(root)
        assert [(n.id, n.level) for n in result.index.nodes()] == [("r", 0), ("a", 1), ("a1", 2), ("b", 1)]
        assert root.children[0].level == 0

    def test_explicit_levels_follow_depth(self):
        """Test a level that disagrees with depth is corrected."""
        result = annotate_tree({"id": "r", "name": "Root", "children": [
            {"id": "a", "name": "A", "level": 3, "value": 1},
        ]})
        assert result.index.get("a").level == 1

    def test_input_dict_not_mutated(self, basic_stats_tree):
        """Test the caller's mapping is left untouched."""
        before = copy.deepcopy(basic_stats_tree)
        annotate_tree(basic_stats_tree)
        assert basic_stats_tree == before

    def test_input_node_not_mutated(self):
        """Test the caller's StatsNode is deep-copied."""
        root = StatsNode("r", "Root", children=[StatsNode("a", "A", value=4, level=1)])
        result = annotate_tree(root)
        assert root.value is None
        assert root.start_angle is None
        assert result.root is not root
        assert result.root.value == 4

    def test_levels_derived_when_missing(self):
        """Test levels follow depth when the input omits them."""
        result = annotate_tree({
            "id": "r", "name": "Root",
            "children": [{"id": "a", "name": "A", "children": [{"id": "b", "name": "B", "value": 1}]}],
        })
        assert result.index.get("a").level == 1
        assert result.index.get("b").level == 2


class TestStatsNodeFromDict:
    """Test building nodes from plain mappings."""

    def test_camel_case_keys(self):
        """Test camelCase keys land on the snake_case fields."""
        node = StatsNode.from_dict({"id": "a", "name": "Yellow Cards", "shortName": "YC", "level": 2})
        assert node.short_name == "YC"
        assert node.to_dict()["shortName"] == "YC"

    def test_requires_id_and_name(self):
        """Test a node without id or name is rejected."""
        with pytest.raises(ValueError):
            StatsNode.from_dict({"name": "No id"})
        with pytest.raises(ValueError):
            StatsNode.from_dict({"id": "no-name"})

    def test_rejects_non_mapping(self):
        """Test a non-mapping child is rejected."""
        with pytest.raises(ValueError):
            StatsNode.from_dict({"id": "r", "name": "Root", "children": ["oops"]})


class TestAngleConservation:
    """Test every parent span is fully covered by its children."""

    def test_sample_tree(self):
        from statwheel.config import DATA_PATH
        from statwheel.utils.data import load_stats_tree

        tree = annotate_tree(load_stats_tree(DATA_PATH))
        for node in tree.index.nodes():
            if node.children:
                assert sum(c.span for c in node.children) == pytest.approx(node.span, abs=1e-9)
