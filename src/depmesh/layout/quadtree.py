"""
Barnes-Hut quadtree for many-body repulsion.

Each cell aggregates the total charge of the nodes below it and their
charge-weighted centroid, so a distant cluster can be treated as a single
body. Coincident points share a leaf instead of subdividing forever.
"""

from typing import List, Optional, Sequence

from ..core.types import SimulationNode

# Subdivision stops here; remaining points share the leaf
MAX_DEPTH = 32


class QuadCell:
    """A square region of the plane, either a leaf holding points or four children."""

    __slots__ = ("x0", "y0", "x1", "y1", "children", "points", "charge", "cx", "cy")

    def __init__(self, x0: float, y0: float, x1: float, y1: float):
        self.x0 = x0
        self.y0 = y0
        self.x1 = x1
        self.y1 = y1
        self.children: Optional[List["QuadCell"]] = None
        self.points: List[SimulationNode] = []
        self.charge = 0.0
        self.cx = 0.0
        self.cy = 0.0

    @property
    def width(self) -> float:
        return self.x1 - self.x0

    @property
    def is_leaf(self) -> bool:
        return self.children is None

    def _child_for(self, x: float, y: float) -> "QuadCell":
        mx = (self.x0 + self.x1) / 2
        my = (self.y0 + self.y1) / 2
        return self.children[(1 if x >= mx else 0) + (2 if y >= my else 0)]

    def _subdivide(self) -> None:
        mx = (self.x0 + self.x1) / 2
        my = (self.y0 + self.y1) / 2
        self.children = [
            QuadCell(self.x0, self.y0, mx, my),
            QuadCell(mx, self.y0, self.x1, my),
            QuadCell(self.x0, my, mx, self.y1),
            QuadCell(mx, my, self.x1, self.y1),
        ]

    def insert(self, point: SimulationNode, depth: int = 0) -> None:
        cell = self
        while True:
            if cell.is_leaf:
                if not cell.points or depth >= MAX_DEPTH or (
                    cell.points[0].x == point.x and cell.points[0].y == point.y
                ):
                    cell.points.append(point)
                    return
                existing = cell.points
                cell.points = []
                cell._subdivide()
                for other in existing:
                    cell._child_for(other.x, other.y).points.append(other)
            cell = cell._child_for(point.x, point.y)
            depth += 1

    def accumulate(self, strength: float) -> None:
        """Compute aggregate charge and centroid bottom-up."""
        if self.is_leaf:
            self.charge = strength * len(self.points)
            if self.points:
                self.cx = sum(p.x for p in self.points) / len(self.points)
                self.cy = sum(p.y for p in self.points) / len(self.points)
            return

        weight = 0.0
        cx = cy = 0.0
        charge = 0.0
        for child in self.children:
            child.accumulate(strength)
            if child.charge:
                w = abs(child.charge)
                weight += w
                cx += w * child.cx
                cy += w * child.cy
                charge += child.charge
        self.charge = charge
        if weight:
            self.cx = cx / weight
            self.cy = cy / weight


def build_quadtree(nodes: Sequence[SimulationNode], strength: float) -> Optional[QuadCell]:
    """Build and aggregate a quadtree covering all node positions."""
    if not nodes:
        return None

    x0 = min(n.x for n in nodes)
    y0 = min(n.y for n in nodes)
    x1 = max(n.x for n in nodes)
    y1 = max(n.y for n in nodes)
    size = max(x1 - x0, y1 - y0, 1.0)
    # Grow slightly so points on the max edge fall inside
    root = QuadCell(x0, y0, x0 + size * 1.0001, y0 + size * 1.0001)

    for node in nodes:
        root.insert(node)
    root.accumulate(strength)
    return root
