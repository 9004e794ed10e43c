"""Expandable stats chart: the engine behind one mounted sunburst.

Ties the annotated tree, drill state, search and label policy together and
exposes the callbacks a host wires to user input.

Usage:
    chart = ExpandableStatsChart(tree, variant="pie", key_prefix="player_stats")
    with chart.mounted(bus):
        fig = expandable_stats_figure(chart)
        ...
        chart.on_node_click(node_id)
"""

from __future__ import annotations

import contextlib
from dataclasses import dataclass
from typing import List, Mapping, Optional, Tuple, Union

import streamlit as st

from statwheel.utils.colors import classify_category, level_color
from statwheel.utils.constants import DEFAULT_VARIANT, SEARCH_RESULT_LIMIT, TOOLTIP_OFFSET
from statwheel.utils.data import format_stat_value
from statwheel.utils.events import PointerDownEvent, PointerEventBus, Subscription
from statwheel.utils.geometry import (
    WedgeShape,
    arc_props,
    hover_opacity,
    normalize_variant,
    wedge_geometry,
)
from statwheel.utils.hierarchy import AnnotatedTree, annotate_tree
from statwheel.utils.labels import LabelDecision, place_label, place_value_label
from statwheel.utils.monitoring import logger, monitor_performance
from statwheel.utils.navigation import (
    Breadcrumb,
    LegendEntry,
    NavigationController,
    category_legend,
)
from statwheel.utils.search_components import (
    FlatStatItem,
    SearchResults,
    SearchState,
    StatsSearchIndex,
)
from statwheel.utils.state import DrillState
from statwheel.utils.types import ArcProps, ContainerRect, StatsNode


@dataclass(frozen=True)
class RenderedWedge:
    """Everything a renderer needs to draw one node."""

    node: StatsNode
    inner_radius: float
    outer_radius: float
    opacity: float
    visible: bool
    dimmed: bool
    active: bool
    last_active: bool
    hovered: bool
    color: str
    shape: Optional[WedgeShape]
    fill_opacity: float

    @property
    def arc_props(self) -> ArcProps:
        return ArcProps(inner_radius=self.inner_radius, outer_radius=self.outer_radius,
                        opacity=self.opacity, visible=self.visible)

    @property
    def drawable(self) -> bool:
        return self.shape is not None and not self.shape.is_empty and self.fill_opacity > 0


@dataclass(frozen=True)
class Tooltip:
    category: str
    name: str
    value_text: str
    color: str
    x: float
    y: float


class ExpandableStatsChart:
    """Drill-down sunburst over a stats tree."""

    def __init__(
        self,
        data: Union[StatsNode, Mapping],
        variant: str = DEFAULT_VARIANT,
        key_prefix: str = "stats_chart",
        search_limit: int = SEARCH_RESULT_LIMIT,
    ):
        self.variant = normalize_variant(variant)
        self.key_prefix = key_prefix
        self.search_limit = search_limit
        self.drill = DrillState(f"{key_prefix}_drill")
        self.search = SearchState(f"{key_prefix}_search")
        self.navigation = NavigationController(self.drill)
        for key, value in ((f"{key_prefix}_hovered", None), (f"{key_prefix}_pointer", (0.0, 0.0))):
            if key not in st.session_state:
                st.session_state[key] = value

        self._source = None
        self._tree: Optional[AnnotatedTree] = None
        self._search_index: Optional[StatsSearchIndex] = None
        self._subscription: Optional[Subscription] = None
        self.set_data(data)

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def set_data(self, data: Union[StatsNode, Mapping]) -> bool:
        """Re-annotate only when a different tree object is passed in."""
        if data is self._source and self._tree is not None:
            return False
        self._tree = annotate_tree(data)
        self._search_index = StatsSearchIndex(self._tree.root)
        self._source = data
        return True

    @property
    def tree(self) -> AnnotatedTree:
        return self._tree

    @property
    def root(self) -> StatsNode:
        return self._tree.root

    @property
    def total(self) -> float:
        return self._tree.total

    @property
    def active_path(self) -> List[str]:
        return self.drill.active_path

    @property
    def hovered_id(self) -> Optional[str]:
        return st.session_state.get(f"{self.key_prefix}_hovered")

    @property
    def pointer(self) -> Tuple[float, float]:
        return st.session_state.get(f"{self.key_prefix}_pointer", (0.0, 0.0))

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def node_color(self, node: StatsNode) -> str:
        category = self._tree.index.root_category(node.id)
        tag = classify_category(category.name if category is not None else node.name)
        return level_color(tag, node.level)

    def render_wedges(self) -> List[RenderedWedge]:
        """One entry per non-root node, depth-first."""
        index = self._tree.index
        hovered_id = self.hovered_id
        wedges = []
        with monitor_performance("render_wedges", nodes=len(index)):
            for node in index.nodes():
                if node.level == 0:
                    continue
                visible = self.drill.is_visible(node, index)
                dimmed = self.drill.is_dimmed(node, index)
                active = self.drill.is_active(node.id)
                last_active = self.drill.is_last_active(node.id)
                hovered = hovered_id == node.id
                props = arc_props(node.level, self.variant, visible=visible, dimmed=dimmed,
                                  active=active, last_active=last_active)
                shape = wedge_geometry(
                    node.level, node.start_angle, node.end_angle, self.variant,
                    hovered=hovered, visible=visible,
                    dimmed=dimmed, active=active, last_active=last_active,
                )
                wedges.append(RenderedWedge(
                    node=node,
                    inner_radius=props["inner_radius"],
                    outer_radius=props["outer_radius"],
                    opacity=props["opacity"],
                    visible=visible,
                    dimmed=dimmed,
                    active=active,
                    last_active=last_active,
                    hovered=hovered,
                    color=self.node_color(node),
                    shape=shape,
                    fill_opacity=hover_opacity(props["opacity"], node.level, self.variant, hovered),
                ))
        return wedges

    def value_labels(self, wedges: Optional[List[RenderedWedge]] = None) -> List[LabelDecision]:
        """Name and value pairs inside pie slices (empty for the doughnut)."""
        out: List[LabelDecision] = []
        for wedge in wedges if wedges is not None else self.render_wedges():
            out.extend(place_value_label(wedge.node, self.variant, wedge.arc_props, wedge.shape is not None))
        return out

    def labels(self, wedges: Optional[List[RenderedWedge]] = None) -> List[LabelDecision]:
        """Ring labels followed by the value labels."""
        if wedges is None:
            wedges = self.render_wedges()
        out: List[LabelDecision] = []
        for wedge in wedges:
            label = place_label(wedge.node, self.variant, wedge.arc_props, wedge.shape is not None)
            if label is not None:
                out.append(label)
        return out + self.value_labels(wedges)

    def breadcrumbs(self) -> List[Breadcrumb]:
        return self.navigation.trail(self._tree.index)

    def legend(self) -> List[LegendEntry]:
        return category_legend(self._tree.root, self.drill.active_path)

    def tooltip(self) -> Optional[Tooltip]:
        node = self._tree.index.get(self.hovered_id) if self.hovered_id else None
        if node is None:
            return None
        category = self._tree.index.root_category(node.id)
        x, y = self.pointer
        return Tooltip(
            category=category.name if category is not None else node.name,
            name=node.name,
            value_text=format_stat_value(node.value, suffix=node.suffix),
            color=self.node_color(node),
            x=x + TOOLTIP_OFFSET[0],
            y=y + TOOLTIP_OFFSET[1],
        )

    def _matching(self) -> List[FlatStatItem]:
        return self._search_index.search(self.search.query)

    def search_results(self) -> SearchResults:
        results = self._matching()
        self.search.sync_results(results)
        suggestions = self._search_index.suggestions(self.search.query) if not results else []
        return SearchResults(
            query=self.search.query,
            items=results[:self.search_limit],
            total=len(results),
            selected_index=self.search.selected_index,
            is_open=self.search.is_open,
            suggestions=suggestions,
            limit=self.search_limit,
        )

    def result_color(self, item: FlatStatItem) -> str:
        return level_color(classify_category(item.category_name), item.level)

    # ------------------------------------------------------------------
    # Event callbacks
    # ------------------------------------------------------------------

    def on_node_click(self, node_id: str) -> List[str]:
        return self.drill.click(node_id, self._tree.index)

    def on_hover_enter(self, node_id: str) -> None:
        st.session_state[f"{self.key_prefix}_hovered"] = node_id

    def on_hover_leave(self) -> None:
        st.session_state[f"{self.key_prefix}_hovered"] = None

    def on_pointer_move(self, client_x: float, client_y: float, container: ContainerRect) -> Tuple[float, float]:
        """Store the pointer relative to the chart container (for the tooltip)."""
        pos = (client_x - container["left"], client_y - container["top"])
        st.session_state[f"{self.key_prefix}_pointer"] = pos
        return pos

    def on_breadcrumb_click(self, crumb: Breadcrumb) -> List[str]:
        return self.navigation.click(crumb)

    def on_root_click(self) -> List[str]:
        return self.navigation.reset()

    def on_search_change(self, text: str) -> None:
        self.search.set_query(text, self._search_index.search(text))

    def on_search_focus(self) -> None:
        self.search.open()

    def on_search_clear(self) -> None:
        self.search.clear_query()
        self.search.sync_results(self._matching())

    def on_search_hover(self, position: int) -> None:
        self.search.hover(position, min(len(self._matching()), self.search_limit))

    def on_search_key(self, key: str) -> List[str]:
        item = self.search.handle_key(key, self._matching())
        if item is not None:
            return self.on_search_select(item)
        self.search.sync_results(self._matching())
        return self.drill.active_path

    def on_search_select(self, item: FlatStatItem) -> List[str]:
        path = self.search.select_result(item)
        self.search.sync_results(self._matching())
        return self.drill.jump_to(path)

    def on_pointer_down(self, event: PointerDownEvent) -> None:
        if not event.inside_search:
            self.search.close()
        if not event.inside_chart:
            self.drill.click_outside()

    # ------------------------------------------------------------------
    # Lifetime
    # ------------------------------------------------------------------

    @property
    def is_mounted(self) -> bool:
        return self._subscription is not None and self._subscription.active

    def mount(self, bus: PointerEventBus) -> Subscription:
        if self.is_mounted:
            return self._subscription
        self._subscription = bus.subscribe(self.on_pointer_down)
        logger.debug(f"Chart {self.key_prefix!r} mounted")
        return self._subscription

    def unmount(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
            logger.debug(f"Chart {self.key_prefix!r} unmounted")

    @contextlib.contextmanager
    def mounted(self, bus: PointerEventBus):
        """Listen for outside clicks for the duration of the block."""
        self.mount(bus)
        try:
            yield self
        finally:
            self.unmount()
