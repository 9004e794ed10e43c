"""Streamlit widgets for the expandable stats chart."""

from html import escape as _html_escape
from typing import Optional

import streamlit as st

from statwheel.utils.charts import expandable_stats_figure
from statwheel.utils.constants import CHART_HINT, SEARCH_PLACEHOLDER
from statwheel.utils.data import format_stat_value
from statwheel.utils.expandable_chart import ExpandableStatsChart
from statwheel.utils.monitoring import logger


def _input_key(chart: ExpandableStatsChart) -> str:
    return f"{chart.key_prefix}_search_input"


def _nonce_key(chart: ExpandableStatsChart) -> str:
    return f"{chart.key_prefix}_chart_nonce"


def render_stat_search(chart: ExpandableStatsChart) -> None:
    """Search box with a dropdown of matching stats (ancestor trail, value, colour dot)."""
    input_key = _input_key(chart)

    def on_change() -> None:
        chart.on_search_change(st.session_state.get(input_key, ""))

    def on_select(position: int) -> None:
        results = chart.search_results()
        if position < len(results.items):
            chart.on_search_select(results.items[position])
            st.session_state[input_key] = ""

    st.text_input(
        "Search stats",
        key=input_key,
        placeholder=SEARCH_PLACEHOLDER,
        on_change=on_change,
        label_visibility="collapsed",
    )

    results = chart.search_results()
    if not results.show_dropdown:
        return

    if results.empty_message:
        st.caption(results.empty_message)
        if results.suggestions:
            st.caption("Did you mean: " + ", ".join(results.suggestions))
        return

    for i, item in enumerate(results.items):
        trail = " › ".join(item.ancestor_names)
        color = chart.result_color(item)
        value = format_stat_value(item.value, suffix=item.suffix)
        c_dot, c_btn = st.columns([1, 14])
        c_dot.markdown(
            f"<div style='width:10px;height:10px;border-radius:50%;background:{color};"
            f"margin-top:0.9rem;'></div>",
            unsafe_allow_html=True,
        )
        c_btn.button(
            f"{trail + ' › ' if trail else ''}{item.name} · {value}",
            key=f"{chart.key_prefix}_result_{item.id}",
            type="primary" if i == results.selected_index else "secondary",
            on_click=on_select,
            args=(i,),
            use_container_width=True,
        )
    if results.footer:
        st.caption(results.footer)


def render_breadcrumbs(chart: ExpandableStatsChart) -> None:
    crumbs = chart.breadcrumbs()
    cols = st.columns(max(len(crumbs), 1) + 1)
    for col, crumb in zip(cols, crumbs):
        col.button(
            crumb.label,
            key=f"{chart.key_prefix}_crumb_{crumb.position}",
            type="primary" if crumb.is_current else "tertiary",
            on_click=chart.on_breadcrumb_click,
            args=(crumb,),
        )


def render_category_legend(chart: ExpandableStatsChart) -> None:
    entries = chart.legend()
    if not entries:
        return
    cols = st.columns(min(len(entries), 4))
    for i, entry in enumerate(entries):
        cols[i % len(cols)].button(
            f"{entry.name} {entry.value_text}".strip(),
            key=f"{chart.key_prefix}_legend_{entry.node_id}",
            type="primary" if entry.active else "secondary",
            on_click=chart.on_node_click,
            args=(entry.node_id,),
            use_container_width=True,
        )


def _selected_node_id(event, fig=None) -> Optional[str]:
    """Node id of the first selected point.

    Points without customdata (a click on a wedge fill) are resolved through
    the trace they belong to.
    """
    try:
        points = event.selection.points
    except AttributeError:
        return None
    for point in points or []:
        node_id = point.get("customdata")
        if node_id is None and fig is not None:
            curve = point.get("curve_number")
            if curve is not None and 0 <= curve < len(fig.data):
                trace_ids = fig.data[curve].customdata
                node_id = trace_ids[0] if trace_ids is not None and len(trace_ids) else None
        if isinstance(node_id, (list, tuple)):
            node_id = node_id[0] if node_id else None
        if node_id:
            return str(node_id)
    return None


def render_stats_chart(chart: ExpandableStatsChart, height: int = 520) -> None:
    """Draw the sunburst and turn a clicked wedge into a node click."""
    nonce_key = _nonce_key(chart)
    if nonce_key not in st.session_state:
        st.session_state[nonce_key] = 0

    fig = expandable_stats_figure(chart, height=height)
    event = st.plotly_chart(
        fig,
        use_container_width=True,
        key=f"{chart.key_prefix}_figure_{st.session_state[nonce_key]}",
        on_select="rerun",
        selection_mode=("points",),
        config={"displayModeBar": False},
    )

    node_id = _selected_node_id(event, fig)
    if node_id is not None:
        logger.debug(f"Wedge clicked: {node_id}")
        chart.on_node_click(node_id)
        # A fresh widget key drops the stale selection on the next run.
        st.session_state[nonce_key] += 1
        st.rerun()

    st.markdown(
        f"<p style='text-align:center;font-size:0.75rem;color:#8B949E;'>{_html_escape(CHART_HINT)}</p>",
        unsafe_allow_html=True,
    )
