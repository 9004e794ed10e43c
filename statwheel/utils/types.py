"""Type definitions for the stats wheel."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Mapping, Optional, TypedDict

Variant = Literal["doughnut", "pie"]

# camelCase keys accepted from the JSON/front-end form of a tree.
_CAMEL_KEYS = {
    "shortName": "short_name",
    "baseColor": "base_color",
    "startAngle": "start_angle",
    "endAngle": "end_angle",
    "centerAngle": "center_angle",
}


@dataclass
class StatsNode:
    """One node of a hierarchical stats tree.

    Leaves carry the raw value; internal nodes get their value overwritten
    with the sum of their children when the tree is aggregated.
    """

    id: str
    name: str
    value: Optional[float] = None
    children: List["StatsNode"] = field(default_factory=list)
    level: int = 0
    short_name: Optional[str] = None
    suffix: Optional[str] = None
    base_color: Optional[str] = None
    start_angle: Optional[float] = None
    end_angle: Optional[float] = None
    center_angle: Optional[float] = None

    @property
    def is_leaf(self) -> bool:
        return not self.children

    @property
    def span(self) -> float:
        """Angular width in radians (0 before partitioning)."""
        if self.start_angle is None or self.end_angle is None:
            return 0.0
        return self.end_angle - self.start_angle

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], level: Optional[int] = None) -> "StatsNode":
        """Build a node (and its subtree) from a plain mapping.

        Accepts camelCase and snake_case keys. When ``level`` is missing it is
        derived from the depth of the node.
        """
        if not isinstance(data, Mapping):
            raise ValueError(f"Stats node must be a mapping, got {type(data).__name__}")
        if "id" not in data or "name" not in data:
            raise ValueError("Stats node requires 'id' and 'name'")

        values = {_CAMEL_KEYS.get(k, k): v for k, v in data.items()}
        depth = values.get("level")
        if depth is None:
            depth = level if level is not None else 0

        children = [cls.from_dict(child, level=int(depth) + 1) for child in values.get("children") or []]
        return cls(
            id=str(values["id"]),
            name=str(values["name"]),
            value=values.get("value"),
            children=children,
            level=int(depth),
            short_name=values.get("short_name"),
            suffix=values.get("suffix"),
            base_color=values.get("base_color"),
            start_angle=values.get("start_angle"),
            end_angle=values.get("end_angle"),
            center_angle=values.get("center_angle"),
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "value": self.value,
            "level": self.level,
        }
        if self.short_name is not None:
            out["shortName"] = self.short_name
        if self.suffix is not None:
            out["suffix"] = self.suffix
        if self.base_color is not None:
            out["baseColor"] = self.base_color
        if self.start_angle is not None:
            out["startAngle"] = self.start_angle
            out["endAngle"] = self.end_angle
            out["centerAngle"] = self.center_angle
        if self.children:
            out["children"] = [c.to_dict() for c in self.children]
        return out


class ArcProps(TypedDict):
    """Cosmetic radii and opacity for one wedge."""
    inner_radius: float
    outer_radius: float
    opacity: float
    visible: bool


class ContainerRect(TypedDict):
    """Bounding box of the chart container in client coordinates."""
    left: float
    top: float
    width: float
    height: float
