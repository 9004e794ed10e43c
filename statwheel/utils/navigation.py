"""Breadcrumb trail and category legend derived from the drill path."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from statwheel.utils.colors import classify_category, level_color
from statwheel.utils.constants import ROOT_BREADCRUMB_LABEL
from statwheel.utils.data import format_stat_value
from statwheel.utils.hierarchy import TreeIndex
from statwheel.utils.state import DrillState
from statwheel.utils.types import StatsNode


@dataclass(frozen=True)
class Breadcrumb:
    """One crumb; the root crumb has no node and position -1."""

    label: str
    node_id: Optional[str]
    position: int
    is_current: bool

    @property
    def is_root(self) -> bool:
        return self.node_id is None


def breadcrumb_trail(active_path: Sequence[str], index: TreeIndex) -> List[Breadcrumb]:
    """'All Stats' followed by one crumb per node of the active path.

    Ids that are not in the tree are skipped.
    """
    trail = [Breadcrumb(ROOT_BREADCRUMB_LABEL, None, -1, is_current=not active_path)]
    last = len(active_path) - 1
    for position, node_id in enumerate(active_path):
        node = index.get(node_id)
        if node is None:
            continue
        trail.append(Breadcrumb(node.name, node.id, position, is_current=position == last))
    return trail


class NavigationController:
    """Breadcrumb clicks and reset-to-root on top of a DrillState."""

    def __init__(self, drill: DrillState):
        self.drill = drill

    def trail(self, index: TreeIndex) -> List[Breadcrumb]:
        return breadcrumb_trail(self.drill.active_path, index)

    def click(self, crumb: Breadcrumb) -> List[str]:
        if crumb.is_root:
            return self.reset()
        return self.drill.breadcrumb_click(crumb.position)

    def reset(self) -> List[str]:
        return self.drill.reset()


@dataclass(frozen=True)
class LegendEntry:
    node_id: str
    name: str
    value_text: str
    color: str
    active: bool


def category_legend(root: StatsNode, active_path: Sequence[str]) -> List[LegendEntry]:
    """One entry per top-level category; active when it or a direct child is selected."""
    entries = []
    for child in root.children:
        active = child.id in active_path or any(c.id in active_path for c in child.children)
        entries.append(LegendEntry(
            node_id=child.id,
            name=child.name,
            value_text=format_stat_value(child.value, suffix=child.suffix, missing=""),
            color=level_color(classify_category(child.name), 1),
            active=active,
        ))
    return entries
