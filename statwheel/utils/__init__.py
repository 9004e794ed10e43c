"""Stats wheel utilities package.

This package provides the engine behind the expandable stats chart:
- Tree aggregation and angle partitioning
- Arc geometry and label placement
- Drill-down, breadcrumb and search state
- Plotly rendering and Streamlit widgets
"""

# Data model
from statwheel.utils.types import (
    StatsNode,
    ArcProps,
    Variant,
)

# Tree passes
from statwheel.utils.hierarchy import (
    normalize_tree,
    calculate_hierarchy,
    assign_angles,
    annotate_tree,
    AnnotatedTree,
    TreeIndex,
)

# Geometry
from statwheel.utils.geometry import (
    WedgeShape,
    describe_arc,
    arc_props,
    wedge_geometry,
    level_radii,
    polar_to_cartesian,
)

# Interaction state
from statwheel.utils.state import DrillState
from statwheel.utils.search_components import (
    FlatStatItem,
    SearchState,
    StatsSearchIndex,
    flatten_stats,
    filter_stats,
)
from statwheel.utils.navigation import (
    Breadcrumb,
    NavigationController,
    breadcrumb_trail,
    category_legend,
)
from statwheel.utils.labels import (
    LabelDecision,
    get_short_name,
    use_short_label,
    place_label,
    place_value_label,
)
from statwheel.utils.colors import (
    CategoryTag,
    classify_category,
    level_color,
)
from statwheel.utils.events import PointerDownEvent, PointerEventBus

# Chart
from statwheel.utils.expandable_chart import (
    ExpandableStatsChart,
    RenderedWedge,
    Tooltip,
)
from statwheel.utils.charts import expandable_stats_figure

# Data helpers
from statwheel.utils.data import (
    format_stat_value,
    load_stats_tree,
    tree_from_frame,
)
