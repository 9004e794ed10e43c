"""Stat search: flattening the tree, filtering, and keyboard-driven selection.

Key Features:
- Depth-first flat list of every stat with its ancestor trail
- Case-insensitive matching on the stat name or any ancestor name
- Keyboard cursor (next / previous / confirm / cancel) with clamping
- Empty state with "did you mean" suggestions
"""

from typing import Optional, List, Tuple, Sequence
from dataclasses import dataclass, field
from difflib import get_close_matches

import streamlit as st

from statwheel.utils.constants import SEARCH_RESULT_LIMIT
from statwheel.utils.monitoring import logger
from statwheel.utils.types import StatsNode
from statwheel.utils.validation import clamp


# =============================================================================
# FLATTENED INDEX
# =============================================================================

@dataclass(frozen=True)
class FlatStatItem:
    """One searchable stat with the trail of categories above it."""

    id: str
    name: str
    value: Optional[float]
    ancestor_ids: Tuple[str, ...] = ()
    ancestor_names: Tuple[str, ...] = ()
    level: int = 1
    suffix: Optional[str] = None

    @property
    def path(self) -> List[str]:
        """Active path that drills straight to this stat."""
        return [*self.ancestor_ids, self.id]

    @property
    def category_name(self) -> str:
        return self.ancestor_names[0] if self.ancestor_names else self.name


def flatten_stats(root: StatsNode) -> List[FlatStatItem]:
    """Every node except the level-0 root, depth-first with children in order."""
    result: List[FlatStatItem] = []

    def _walk(node: StatsNode, ids: Tuple[str, ...], names: Tuple[str, ...]) -> None:
        if node.level > 0:
            result.append(FlatStatItem(
                id=node.id,
                name=node.name,
                value=node.value,
                ancestor_ids=ids,
                ancestor_names=names,
                level=node.level,
                suffix=node.suffix,
            ))
            ids = ids + (node.id,)
            names = names + (node.name,)
        for child in node.children:
            _walk(child, ids, names)

    _walk(root, (), ())
    return result


def filter_stats(items: Sequence[FlatStatItem], query: str) -> List[FlatStatItem]:
    """Items whose name or any ancestor name contains ``query`` (case-insensitive).

    A blank query returns every item.
    """
    if not query or not query.strip():
        return list(items)
    q = query.lower()
    return [
        item for item in items
        if q in item.name.lower() or any(q in name.lower() for name in item.ancestor_names)
    ]


class StatsSearchIndex:
    """Flattened view of an annotated tree, built once per tree."""

    def __init__(self, root: StatsNode):
        self.items = flatten_stats(root)
        self._names = sorted({item.name for item in self.items})

    def __len__(self) -> int:
        return len(self.items)

    def search(self, query: str) -> List[FlatStatItem]:
        return filter_stats(self.items, query)

    def suggestions(self, query: str, limit: int = 3) -> List[str]:
        return get_search_suggestions(query, self._names, limit=limit)


def get_search_suggestions(query: str, stat_names: List[str], limit: int = 3) -> List[str]:
    """Close stat names for a query that matched nothing."""
    if not query or len(query.strip()) < 2:
        return []

    close_matches = get_close_matches(
        query.strip().lower(),
        [name.lower() for name in stat_names],
        n=limit,
        cutoff=0.6
    )
    suggestions = []
    for match in close_matches:
        original = next((name for name in stat_names if name.lower() == match), match)
        if original not in suggestions:
            suggestions.append(original)
    return suggestions


def empty_state_message(query: str) -> str:
    return f'No stats found for "{query}"'


def results_footer(total: int, limit: int = SEARCH_RESULT_LIMIT) -> Optional[str]:
    if total > limit:
        return f"Showing {limit} of {total} results"
    return None


@dataclass
class SearchResults:
    """What the search dropdown should show for the current state."""

    query: str
    items: List[FlatStatItem]
    total: int
    selected_index: int
    is_open: bool
    suggestions: List[str] = field(default_factory=list)
    limit: int = SEARCH_RESULT_LIMIT

    @property
    def show_dropdown(self) -> bool:
        return self.is_open and bool(self.query)

    @property
    def empty_message(self) -> Optional[str]:
        return empty_state_message(self.query) if self.total == 0 else None

    @property
    def footer(self) -> Optional[str]:
        return results_footer(self.total, self.limit)


# =============================================================================
# SEARCH STATE
# =============================================================================

KEY_ACTIONS = {
    "next": "next",
    "ArrowDown": "next",
    "previous": "previous",
    "ArrowUp": "previous",
    "confirm": "confirm",
    "Enter": "confirm",
    "cancel": "cancel",
    "Escape": "cancel",
}


class SearchState:
    """Query, dropdown and keyboard cursor for the stat search box."""

    def __init__(self, key_prefix: str = "stat_search"):
        self.key_prefix = key_prefix
        self._init_state()

    def _init_state(self) -> None:
        prefix = self.key_prefix
        defaults = {
            f"{prefix}_query": "",
            f"{prefix}_open": False,
            f"{prefix}_selected_index": 0,
            f"{prefix}_result_ids": None,
        }
        for key, value in defaults.items():
            if key not in st.session_state:
                st.session_state[key] = value

    @property
    def query(self) -> str:
        return st.session_state.get(f"{self.key_prefix}_query", "")

    @query.setter
    def query(self, value: str) -> None:
        st.session_state[f"{self.key_prefix}_query"] = value

    @property
    def is_open(self) -> bool:
        return st.session_state.get(f"{self.key_prefix}_open", False)

    @is_open.setter
    def is_open(self, value: bool) -> None:
        st.session_state[f"{self.key_prefix}_open"] = value

    @property
    def selected_index(self) -> int:
        return st.session_state.get(f"{self.key_prefix}_selected_index", 0)

    @selected_index.setter
    def selected_index(self, value: int) -> None:
        st.session_state[f"{self.key_prefix}_selected_index"] = value

    def sync_results(self, results: Sequence[FlatStatItem]) -> None:
        """Move the cursor back to the top whenever the result set changes."""
        ids = tuple(item.id for item in results)
        if st.session_state.get(f"{self.key_prefix}_result_ids") != ids:
            st.session_state[f"{self.key_prefix}_result_ids"] = ids
            self.selected_index = 0

    def set_query(self, text: str, results: Sequence[FlatStatItem]) -> None:
        self.query = text
        self.is_open = True
        self.sync_results(results)

    def open(self) -> None:
        self.is_open = True

    def close(self) -> None:
        self.is_open = False

    def clear_query(self) -> None:
        self.query = ""

    def move_next(self, count: int) -> int:
        if count <= 0:
            self.selected_index = 0
        else:
            self.selected_index = clamp(self.selected_index + 1, 0, count - 1)
        return self.selected_index

    def move_previous(self) -> int:
        self.selected_index = max(self.selected_index - 1, 0)
        return self.selected_index

    def hover(self, position: int, count: int) -> None:
        """Pointer over a result row moves the cursor there."""
        if count > 0:
            self.selected_index = clamp(position, 0, count - 1)

    def handle_key(self, key: str, results: Sequence[FlatStatItem]) -> Optional[FlatStatItem]:
        """Apply a keyboard action; returns the chosen item on confirm."""
        action = KEY_ACTIONS.get(key)
        if action is None:
            return None
        if action == "next":
            self.move_next(len(results))
        elif action == "previous":
            self.move_previous()
        elif action == "confirm":
            if results:
                return results[clamp(self.selected_index, 0, len(results) - 1)]
        elif action == "cancel":
            self.close()
            self.clear_query()
        return None

    def select_result(self, item: FlatStatItem) -> List[str]:
        """Clear and close the search; returns the path to drill into."""
        logger.debug(f"Search selected {item.id!r}")
        self.clear_query()
        self.close()
        return item.path

    def reset(self) -> None:
        self.query = ""
        self.is_open = False
        self.selected_index = 0
        st.session_state[f"{self.key_prefix}_result_ids"] = None
