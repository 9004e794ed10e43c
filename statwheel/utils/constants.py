"""Shared constants for the stats wheel."""

import math

# ---------------------------------------------------------------------------
# Angles
# ---------------------------------------------------------------------------
# The root always covers the full circle, clockwise from 12 o'clock.
ROOT_START_ANGLE = -math.pi / 2
ROOT_END_ANGLE = math.pi * 1.5

# ---------------------------------------------------------------------------
# Ring layout: level -> (inner radius, outer radius), in chart units.
# The chart is drawn in a 460 x 460 box centred on (0, 0).
# ---------------------------------------------------------------------------
VARIANTS = ("doughnut", "pie")
DEFAULT_VARIANT = "doughnut"

LEVEL_RADII = {
    # Narrow concentric rings around a blank centre disc for the total.
    "doughnut": {
        0: (0, 45),
        1: (55, 95),
        2: (105, 140),
        3: (150, 180),
        4: (190, 215),
    },
    # Level 1 is a solid pie; deeper levels are thin outer rings.
    "pie": {
        0: (0, 0),
        1: (0, 120),
        2: (130, 160),
        3: (170, 195),
        4: (205, 215),
    },
}

CHART_EXTENT = 230
CENTER_DISC_RADIUS = 45

# Gap cut from each side of a wedge, in radians.
PIE_SLICE_PADDING = 0.008
RING_PADDING = 0.015

# Cosmetic radius changes layered on top of the table radii.
DIMMED_THICKNESS = 12
DIMMED_OPACITY = 0.25
LAST_ACTIVE_GROWTH = 8
ACTIVE_GROWTH = 3
PIE_HOVER_GROWTH = 8
RING_HOVER_GROWTH = 5
PIE_HOVER_LIFT = 6
PIE_HOVER_OPACITY_BOOST = 0.15
BACKGROUND_RING_LEVELS = (1, 2, 3)
BACKGROUND_RING_OPACITY = 0.1

# ---------------------------------------------------------------------------
# Labels
# ---------------------------------------------------------------------------
MIN_LABEL_ARC = 0.15            # rad; narrower wedges get no label
SHORT_LABEL_ARC = 0.5           # rad; narrower wedges use the short name
SHORT_LABEL_PIXELS = 50         # estimated arc length below which short name is used
MAX_FULL_NAME_CHARS = 8
MIN_LABEL_OPACITY = 0.5
PIE_VALUE_LABEL_MIN_ARC = 0.25
PIE_VALUE_LABEL_RADIUS = 0.55   # fraction of the level-1 outer radius

SHORT_NAME_MAP = {
    # Passing
    "Successful": "SC",
    "Unsuccessful": "US",
    "Progressive": "PG",
    "Key Passes": "KP",
    "Assists": "AS",
    "Crosses": "CR",
    "Long Passes": "LP",
    "Short Passes": "SP",
    "Through Balls": "TB",
    "Other": "OT",
    "Blocked": "BL",
    "Clearance": "CL",
    "Interception": "IN",
    "Offside": "OF",
    "Ball Recoveries": "BR",
    "High Pressing": "HP",
    # Set pieces
    "Set Pieces": "SP",
    "Goal Kicks": "GK",
    "Free Kicks": "FK",
    "Corners": "CN",
    "Throw-ins": "TI",
    "First Contact": "1C",
    "Second Contact": "2C",
    "Penalties": "PN",
    # Duels
    "Duels": "DU",
    "Aerial": "AE",
    "Ground": "GR",
    "Dribbles": "DR",
    "Won": "WN",
    "Lost": "LT",
    "Tackles Won": "TW",
    "Tackles Lost": "TL",
    "Failed": "FL",
    "Dribble Success Rate": "DS",
    # Goalkeeper
    "Keeper Stats": "GK",
    "Saves": "SV",
    "Inside Box": "IB",
    "Outside Box": "OB",
    "Actions": "AC",
    "Punches": "PU",
    "Catches": "CT",
    "Sweepings": "SW",
    "Conceded": "GC",
    # Outplays
    "Outplays": "OP",
    "Passing": "PS",
    "Dribbling": "DR",
    "Players Outplayed": "PO",
    "Lines Broken": "LB",
}

# ---------------------------------------------------------------------------
# Navigation and search
# ---------------------------------------------------------------------------
ROOT_BREADCRUMB_LABEL = "All Stats"
MISSING_VALUE = "--"
SEARCH_RESULT_LIMIT = 20
SEARCH_PLACEHOLDER = "Search stats... (e.g., Goals, Assists, Interceptions)"
TOOLTIP_OFFSET = (15, -10)
CHART_HINT = "Click segments to drill down • Click again to collapse"
