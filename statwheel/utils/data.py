"""Loading stats trees and formatting their values."""

from __future__ import annotations

import json
import pathlib
import re
from typing import Dict, List, Optional, Sequence, Tuple, Union

import pandas as pd
import streamlit as st

from statwheel.utils.constants import MISSING_VALUE, ROOT_BREADCRUMB_LABEL
from statwheel.utils.types import StatsNode
from statwheel.utils.validation import is_missing


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------

def format_stat_value(value, suffix: Optional[str] = "", missing: str = MISSING_VALUE) -> str:
    """Format a stat value for labels, tooltips and search results.

    Examples:
        >>> format_stat_value(1234)
        '1,234'
        >>> format_stat_value(None)
        '--'
        >>> format_stat_value(61.5, suffix="%")
        '61.5%'
    """
    if is_missing(value):
        return missing
    try:
        v = float(value)
    except (TypeError, ValueError):
        return missing
    if v.is_integer():
        formatted = f"{int(v):,}"
    else:
        formatted = f"{v:,.3f}".rstrip("0").rstrip(".")
    return f"{formatted}{suffix or ''}"


def slugify(text: str) -> str:
    """Lower-case id fragment: 'Key Passes' -> 'key-passes'."""
    slug = re.sub(r"[^a-z0-9]+", "-", str(text).lower()).strip("-")
    return slug or "stat"


# ---------------------------------------------------------------------------
# Loaders
# ---------------------------------------------------------------------------

@st.cache_data(show_spinner=False)
def _read_tree_json(path: str) -> dict:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def load_stats_tree(path: Union[str, pathlib.Path]) -> StatsNode:
    """Read a stats tree from a JSON file (camelCase or snake_case keys)."""
    return StatsNode.from_dict(_read_tree_json(str(path)))


def tree_from_frame(
    df: pd.DataFrame,
    levels: Sequence[str],
    value_col: str = "value",
    root_id: str = "root",
    root_name: str = ROOT_BREADCRUMB_LABEL,
    suffix_col: Optional[str] = None,
) -> StatsNode:
    """Build a stats tree from a long DataFrame, one row per leaf.

    ``levels`` are the hierarchy columns from the top-level category down. A
    row whose trailing level columns are empty becomes a leaf higher up the
    tree. Duplicate paths are summed; an all-missing group keeps a None value.
    Node order follows first appearance in ``df``.
    """
    required = list(levels) + [value_col] + ([suffix_col] if suffix_col else [])
    missing_cols = [c for c in required if c not in df.columns]
    if missing_cols:
        raise ValueError(f"Missing columns for stats tree: {missing_cols}")

    root = StatsNode(id=root_id, name=root_name, level=0)
    if df.empty:
        return root

    aggs = {"value": (value_col, lambda s: s.sum(min_count=1))}
    if suffix_col:
        aggs["suffix"] = (suffix_col, "first")
    grouped = df.groupby(list(levels), sort=False, dropna=False).agg(**aggs)

    nodes: Dict[Tuple[str, ...], StatsNode] = {}
    for keys, row in grouped.iterrows():
        keys = keys if isinstance(keys, tuple) else (keys,)
        parts: List[str] = []
        for part in keys:
            if is_missing(part) or not str(part).strip():
                break
            parts.append(str(part).strip())
        if not parts:
            continue

        parent = root
        for depth in range(1, len(parts) + 1):
            key = tuple(parts[:depth])
            node = nodes.get(key)
            if node is None:
                node = StatsNode(
                    id=".".join(slugify(p) for p in key),
                    name=key[-1],
                    level=depth,
                )
                nodes[key] = node
                parent.children.append(node)
            parent = node

        value = row["value"]
        parent.value = None if is_missing(value) else value.item() if hasattr(value, "item") else value
        if suffix_col and not is_missing(row["suffix"]):
            parent.suffix = str(row["suffix"])

    return root
