"""Category classification and colour palettes.

Every wedge is coloured by the top-level category it belongs to. The category
name is classified once into a closed set of tags; each tag owns a palette of
three shades that get lighter with depth.
"""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple


class CategoryTag(str, Enum):
    PASSES = "passes"
    SHOTS = "shots"
    DUELS = "duels"
    DEFENSIVE = "defensive"
    SET_PIECES = "setpieces"
    GOALKEEPER = "goalkeeper"
    FOULS = "fouls"
    OUTPLAYS = "outplays"


class CategoryPalette(NamedTuple):
    main: str
    light: str
    lighter: str


CATEGORY_COLORS = {
    CategoryTag.PASSES: CategoryPalette("hsl(217, 91%, 50%)", "hsl(217, 91%, 60%)", "hsl(217, 91%, 72%)"),
    CategoryTag.SHOTS: CategoryPalette("hsl(0, 72%, 51%)", "hsl(0, 72%, 60%)", "hsl(0, 72%, 72%)"),
    CategoryTag.DUELS: CategoryPalette("hsl(38, 92%, 50%)", "hsl(38, 92%, 58%)", "hsl(38, 92%, 70%)"),
    CategoryTag.DEFENSIVE: CategoryPalette("hsl(142, 71%, 45%)", "hsl(142, 71%, 55%)", "hsl(142, 71%, 68%)"),
    CategoryTag.SET_PIECES: CategoryPalette("hsl(270, 70%, 55%)", "hsl(270, 70%, 65%)", "hsl(270, 70%, 78%)"),
    CategoryTag.GOALKEEPER: CategoryPalette("hsl(190, 80%, 45%)", "hsl(190, 80%, 55%)", "hsl(190, 80%, 68%)"),
    CategoryTag.FOULS: CategoryPalette("hsl(330, 70%, 50%)", "hsl(330, 70%, 60%)", "hsl(330, 70%, 72%)"),
    CategoryTag.OUTPLAYS: CategoryPalette("hsl(160, 70%, 45%)", "hsl(160, 70%, 55%)", "hsl(160, 70%, 68%)"),
}

# Checked in order; the first keyword hit wins.
_CATEGORY_RULES = (
    (CategoryTag.PASSES, ("pass",)),
    (CategoryTag.SHOTS, ("shot",)),
    (CategoryTag.DUELS, ("duel",)),
    (CategoryTag.DEFENSIVE, ("defen",)),
    (CategoryTag.SET_PIECES, ("set", "piece")),
    (CategoryTag.GOALKEEPER, ("goal", "keep", "save")),
    (CategoryTag.FOULS, ("foul", "card")),
    (CategoryTag.OUTPLAYS, ("outplay",)),
)

DEFAULT_CATEGORY = CategoryTag.PASSES


def classify_category(name: str) -> CategoryTag:
    """Map a top-level category name to its tag (passes when nothing matches)."""
    lowered = (name or "").lower()
    for tag, keywords in _CATEGORY_RULES:
        if any(k in lowered for k in keywords):
            return tag
    return DEFAULT_CATEGORY


def level_color(tag: CategoryTag, level: int) -> str:
    """Shade of the category palette for a given depth."""
    palette = CATEGORY_COLORS[tag]
    if level <= 1:
        return palette.main
    if level == 2:
        return palette.light
    return palette.lighter
