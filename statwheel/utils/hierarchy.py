"""Tree aggregation, angle partitioning and the id lookup index.

The pipeline works on a private deep copy of the caller's tree:

    annotated = annotate_tree(data)   # copy -> normalize -> aggregate -> assign angles -> index

so the caller's structure is never mutated and every later pass (geometry,
drill state, search) reads the same annotated copy.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Dict, Iterator, List, Mapping, Optional, Set, Union

from statwheel.utils.constants import ROOT_END_ANGLE, ROOT_START_ANGLE
from statwheel.utils.monitoring import logger, timing_decorator
from statwheel.utils.types import StatsNode
from statwheel.utils.validation import safe_divide, safe_float


def normalize_tree(node: StatsNode, level: int = 0, seen: Optional[Set[str]] = None) -> None:
    """Stamp levels by depth and drop repeated ids, in place.

    The root is level 0 and each child sits one level below its parent,
    whatever levels the input carried. Walking depth-first with children in
    order, the first node with a given id wins; a later duplicate is removed
    together with its subtree so it takes no share of the circle.
    """
    if seen is None:
        seen = {node.id}
    if node.level != level:
        logger.debug(f"Stats node {node.id!r}: level {node.level} -> {level}")
        node.level = level

    kept = []
    for child in node.children:
        if child.id in seen:
            logger.warning(f"Duplicate stats node id {child.id!r}; dropping it and its subtree")
            continue
        seen.add(child.id)
        normalize_tree(child, level + 1, seen)
        kept.append(child)
    node.children = kept


def calculate_hierarchy(node: StatsNode) -> float:
    """Aggregate values bottom-up and return the subtree total.

    Leaves keep their own value (None stays None, it only counts as 0 in the
    sum). Internal nodes have their value overwritten with the children's sum.
    """
    if not node.children:
        return safe_float(node.value)
    total = sum(calculate_hierarchy(child) for child in node.children)
    node.value = total
    return total


def assign_angles(node: StatsNode, start_angle: float, end_angle: float) -> None:
    """Give ``node`` the span [start_angle, end_angle] and split it among its children.

    Children get spans proportional to their values, laid out in order. When
    the subtree total is 0 the span is split equally instead.
    """
    node.start_angle = start_angle
    node.end_angle = end_angle
    node.center_angle = start_angle + (end_angle - start_angle) / 2

    if not node.children:
        return

    total = safe_float(node.value)
    span = end_angle - start_angle
    count = len(node.children)
    cursor = start_angle
    for child in node.children:
        if total > 0:
            child_span = safe_divide(safe_float(child.value), total) * span
        else:
            child_span = span / count
        assign_angles(child, cursor, cursor + child_span)
        cursor += child_span


class TreeIndex:
    """id -> node and id -> parent lookups, built once per annotated tree."""

    def __init__(self, root: StatsNode):
        self.root = root
        self._nodes: Dict[str, StatsNode] = {}
        self._parents: Dict[str, Optional[str]] = {}
        self._order: List[str] = []

        stack = [(root, None)]
        while stack:
            node, parent_id = stack.pop()
            if node.id in self._nodes:
                logger.warning(f"Duplicate stats node id {node.id!r}; keeping the first occurrence")
                continue
            self._nodes[node.id] = node
            self._parents[node.id] = parent_id
            self._order.append(node.id)
            stack.extend((child, node.id) for child in reversed(node.children))

    def __contains__(self, node_id: str) -> bool:
        return node_id in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def nodes(self) -> Iterator[StatsNode]:
        """All indexed nodes, depth-first with children in order."""
        for node_id in self._order:
            yield self._nodes[node_id]

    def get(self, node_id: str) -> Optional[StatsNode]:
        return self._nodes.get(node_id)

    def parent_id(self, node_id: str) -> Optional[str]:
        return self._parents.get(node_id)

    def parent(self, node_id: str) -> Optional[StatsNode]:
        pid = self._parents.get(node_id)
        return self._nodes.get(pid) if pid is not None else None

    def siblings(self, node_id: str) -> List[StatsNode]:
        """Children of the node's parent, the node itself included."""
        parent = self.parent(node_id)
        return list(parent.children) if parent is not None else []

    def path_to(self, node_id: str) -> Optional[List[str]]:
        """Ids from the top-level category down to ``node_id``, root excluded.

        Returns None when the id is not part of the tree.
        """
        if node_id not in self._nodes:
            return None
        path: List[str] = []
        current: Optional[str] = node_id
        while current is not None:
            if self._nodes[current].level > 0:
                path.append(current)
            current = self._parents.get(current)
        path.reverse()
        return path

    def root_category(self, node_id: str) -> Optional[StatsNode]:
        """The level-1 ancestor of a node (the node itself for level 1)."""
        path = self.path_to(node_id)
        if not path:
            return None
        return self._nodes[path[0]]


@dataclass
class AnnotatedTree:
    """Aggregated and angled copy of an input tree plus its index."""

    root: StatsNode
    index: TreeIndex

    @property
    def total(self) -> float:
        return safe_float(self.root.value)


@timing_decorator
def annotate_tree(data: Union[StatsNode, Mapping]) -> AnnotatedTree:
    """Copy, aggregate and partition an input tree."""
    if isinstance(data, StatsNode):
        root = copy.deepcopy(data)
    else:
        root = StatsNode.from_dict(data)

    normalize_tree(root)
    calculate_hierarchy(root)
    assign_angles(root, ROOT_START_ANGLE, ROOT_END_ANGLE)
    index = TreeIndex(root)
    logger.debug(f"Annotated stats tree {root.id!r}: {len(index)} nodes, total={root.value}")
    return AnnotatedTree(root=root, index=index)
