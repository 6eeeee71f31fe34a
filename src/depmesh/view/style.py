"""
Style lookup for node groups and link states.

The table is fixed and read-only; unknown groups fall back to a neutral
default rather than raising.
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Dict

from ..core.types import NodeGroup


class Shape(StrEnum):
    CIRCLE = "circle"
    SQUARE = "square"


@dataclass(frozen=True)
class NodeStyle:
    shape: Shape
    size: float  # radius for circles, half side for squares
    fill: str

    def contains(self, dx: float, dy: float) -> bool:
        """Hit test relative to the node centre, in world units."""
        if self.shape is Shape.SQUARE:
            return abs(dx) <= self.size and abs(dy) <= self.size
        return dx * dx + dy * dy <= self.size * self.size


GROUP_STYLES: Dict[str, NodeStyle] = {
    NodeGroup.OBJECT: NodeStyle(Shape.CIRCLE, 15, "#0176D3"),
    NodeGroup.FLOW: NodeStyle(Shape.CIRCLE, 12, "#9333ea"),
    NodeGroup.TRIGGER: NodeStyle(Shape.SQUARE, 10, "#f97316"),
    NodeGroup.FIELD: NodeStyle(Shape.CIRCLE, 8, "#10b981"),
}

DEFAULT_NODE_STYLE = NodeStyle(Shape.CIRCLE, 8, "#94a3b8")

# Links
LINK_COLOR = "#cbd5e1"
LINK_HIGHLIGHT_COLOR = "#0176D3"
LINK_OPACITY = 0.6
LINK_WIDTH = 1.5
ARROW_COLOR = "#94a3b8"
ARROW_SIZE = 6.0

# Labels
LABEL_COLOR = "#334155"
LABEL_FONT_SIZE = 10.0
LABEL_OFFSET = (18.0, 4.0)
HALO_COLOR = "#ffffff"
HALO_WIDTH = 3.0

BACKGROUND = "#f8fafc"


def style_for(group: str) -> NodeStyle:
    return GROUP_STYLES.get(group, DEFAULT_NODE_STYLE)
