"""Drill-down state for the stats wheel, kept in Streamlit session state."""

from typing import List, Optional, Sequence

import streamlit as st

from statwheel.utils.hierarchy import TreeIndex
from statwheel.utils.monitoring import logger
from statwheel.utils.types import StatsNode


class DrillState:
    """The active path (ids from a top-level category down) and its transitions.

    The path is stored under ``{key_prefix}_active_path`` so it survives
    Streamlit reruns while the tree itself is rebuilt from input each time.
    """

    def __init__(self, key_prefix: str = "drill"):
        self.key_prefix = key_prefix
        self._key = f"{key_prefix}_active_path"
        if self._key not in st.session_state:
            st.session_state[self._key] = []

    @property
    def active_path(self) -> List[str]:
        return list(st.session_state.get(self._key, []))

    @active_path.setter
    def active_path(self, value: Sequence[str]) -> None:
        st.session_state[self._key] = list(value)

    # ------------------------------------------------------------------
    # Predicates
    # ------------------------------------------------------------------

    def is_active(self, node_id: str) -> bool:
        return node_id in self.active_path

    def is_last_active(self, node_id: str) -> bool:
        path = self.active_path
        return bool(path) and path[-1] == node_id

    def is_visible(self, node: StatsNode, index: TreeIndex) -> bool:
        """Level 1 is always shown; deeper levels only under an active parent."""
        if node.level == 0:
            return False
        if node.level == 1:
            return True
        parent_id = index.parent_id(node.id)
        if parent_id is None:
            return False
        return parent_id in self.active_path

    def is_dimmed(self, node: StatsNode, index: TreeIndex) -> bool:
        """True when a sibling of the node is selected but the node is not."""
        path = self.active_path
        if not path or node.id in path:
            return False
        return any(s.id in path for s in index.siblings(node.id) if s.id != node.id)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def click(self, node_id: str, index: TreeIndex) -> List[str]:
        """Collapse when the deepest active node is clicked, otherwise jump to it."""
        if self.is_last_active(node_id):
            return self.collapse()

        path = index.path_to(node_id)
        if path is None:
            logger.warning(f"Ignoring click on unknown stats node {node_id!r}")
            return self.active_path
        return self.jump_to(path)

    def jump_to(self, path: Sequence[str]) -> List[str]:
        """Replace the whole active path."""
        self.active_path = path
        logger.debug(f"Drill path -> {list(path)}")
        return self.active_path

    def collapse(self) -> List[str]:
        """Drop the deepest entry; nothing happens on an empty path."""
        path = self.active_path
        if path:
            self.active_path = path[:-1]
            logger.debug(f"Drill path collapsed to {path[:-1]}")
        return self.active_path

    def click_outside(self) -> List[str]:
        if self.active_path:
            self.reset()
        return self.active_path

    def breadcrumb_click(self, position: int) -> List[str]:
        """Keep the first ``position + 1`` entries."""
        if position < 0:
            return self.reset()
        return self.jump_to(self.active_path[:position + 1])

    def reset(self) -> List[str]:
        self.active_path = []
        logger.debug("Drill path reset")
        return []

    def deepest(self) -> Optional[str]:
        path = self.active_path
        return path[-1] if path else None
