"""Statwheel: expandable match stats chart.

Entry point: streamlit run statwheel/app.py
"""

import sys
import pathlib

_project_root = pathlib.Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

import streamlit as st

from statwheel.config import DATA_PATH, DEFAULT_VARIANT, LOG_LEVEL, SEARCH_RESULT_LIMIT
from statwheel.utils.components import (
    render_breadcrumbs,
    render_category_legend,
    render_stat_search,
    render_stats_chart,
)
from statwheel.utils.constants import VARIANTS
from statwheel.utils.data import format_stat_value, load_stats_tree
from statwheel.utils.events import PointerDownEvent, PointerEventBus
from statwheel.utils.expandable_chart import ExpandableStatsChart
from statwheel.utils.geometry import normalize_variant
from statwheel.utils.monitoring import configure_logging, safe_execute

configure_logging(LOG_LEVEL)

st.set_page_config(
    page_title="Statwheel",
    page_icon="⚽",
    layout="centered",
)

if "pointer_bus" not in st.session_state:
    st.session_state["pointer_bus"] = PointerEventBus()
bus = st.session_state["pointer_bus"]


def _outside_click() -> None:
    # Sidebar controls sit outside the chart container. Widget callbacks run
    # before the chart is mounted, so the event is delivered once it is.
    st.session_state["pending_outside_click"] = True


# ---------------------------------------------------------------------------
# Sidebar
# ---------------------------------------------------------------------------
with st.sidebar:
    st.markdown("### Chart")
    variant = st.radio(
        "Style",
        VARIANTS,
        index=VARIANTS.index(DEFAULT_VARIANT) if DEFAULT_VARIANT in VARIANTS else 0,
        key="chart_variant",
        on_change=_outside_click,
    )
    st.caption(f"Data: `{DATA_PATH.name}`")

# ---------------------------------------------------------------------------
# Load data
# ---------------------------------------------------------------------------
# One tree object per session; the chart re-aggregates only when it changes.
if st.session_state.get("match_stats_tree") is None:
    st.session_state["match_stats_tree"] = safe_execute(
        load_stats_tree,
        DATA_PATH,
        error_message=f"Could not load match stats from {DATA_PATH}.",
    )
tree = st.session_state["match_stats_tree"]
if tree is None:
    st.stop()

st.markdown("## Match stats")

chart = st.session_state.get("match_stats_chart")
if chart is None:
    chart = ExpandableStatsChart(tree, variant=variant, key_prefix="match_stats",
                                 search_limit=SEARCH_RESULT_LIMIT)
    st.session_state["match_stats_chart"] = chart
else:
    chart.set_data(tree)
    chart.variant = normalize_variant(variant)

with chart.mounted(bus):
    if st.session_state.pop("pending_outside_click", False):
        bus.dispatch(PointerDownEvent(inside_chart=False))

    render_stat_search(chart)
    render_breadcrumbs(chart)
    render_stats_chart(chart)
    render_category_legend(chart)

    deepest = chart.drill.deepest()
    node = chart.tree.index.get(deepest) if deepest else None
    if node is not None:
        st.metric(node.name, format_stat_value(node.value, suffix=node.suffix))
