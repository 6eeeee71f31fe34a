"""
Forces applied by the layout solver.

Every force follows the same two-step protocol: `initialize` is called once
with the node arena when a simulation is built, and `apply` is called every
tick with the current temperature (alpha). Forces only touch velocities
(or, for centering, positions); integration happens in the Simulation.

Key forces:
- ManyBodyForce: inverse-distance repulsion, Barnes-Hut approximated.
- LinkForce: springs pulling linked nodes toward a rest length.
- CenterForce: translates the layout so its mean sits at the midpoint.
- PositionXForce / PositionYForce: per-node pull toward a target coordinate.
- CollideForce: pushes apart nodes closer than twice the collision radius.
"""

import math
import random
from abc import ABC, abstractmethod
from typing import Callable, List, Sequence

from ..core.graph import ProjectedGraph
from ..core.types import SimulationNode
from .quadtree import QuadCell, build_quadtree
from .spatial import SpatialGrid


def jiggle() -> float:
    """Tiny random offset used to separate coincident nodes."""
    return (random.random() - 0.5) * 1e-6


class Force(ABC):
    """Abstract base class for all forces."""

    def initialize(self, nodes: Sequence[SimulationNode]) -> None:
        self.nodes = nodes

    @abstractmethod
    def apply(self, alpha: float) -> None:
        ...


class ManyBodyForce(Force):
    """
    Charge between every pair of nodes.

    Negative strength repels. Far-away cells of the quadtree are treated as
    a single body when cell_width / distance < theta.
    """

    def __init__(self, strength: float = -300.0, theta: float = 0.9, distance_min: float = 1.0):
        self.strength = strength
        self.theta2 = theta * theta
        self.distance_min2 = distance_min * distance_min

    def apply(self, alpha: float) -> None:
        root = build_quadtree(self.nodes, self.strength)
        if root is None:
            return
        for node in self.nodes:
            self._accumulate(node, root, alpha)

    def _accumulate(self, node: SimulationNode, root: QuadCell, alpha: float) -> None:
        stack = [root]
        while stack:
            cell = stack.pop()
            if not cell.charge:
                continue

            dx = cell.cx - node.x
            dy = cell.cy - node.y
            w = cell.width
            l = dx * dx + dy * dy

            # Far enough away: use the aggregate
            if w * w / self.theta2 < l:
                if not (cell.is_leaf and len(cell.points) == 1 and cell.points[0] is node):
                    self._push(node, dx, dy, l, cell.charge, alpha)
                continue

            if not cell.is_leaf:
                stack.extend(cell.children)
                continue

            for other in cell.points:
                if other is node:
                    continue
                dx = other.x - node.x
                dy = other.y - node.y
                l = dx * dx + dy * dy
                self._push(node, dx, dy, l, self.strength, alpha)

    def _push(self, node: SimulationNode, dx: float, dy: float, l: float,
              charge: float, alpha: float) -> None:
        if dx == 0:
            dx = jiggle()
            l += dx * dx
        if dy == 0:
            dy = jiggle()
            l += dy * dy
        if l < self.distance_min2:
            l = math.sqrt(self.distance_min2 * l)
        w = charge * alpha / l
        node.vx += dx * w
        node.vy += dy * w


class LinkForce(Force):
    """
    Spring along every projected link.

    Strength defaults to 1 / min(degree(source), degree(target)) so hubs are
    not yanked around by their many leaves; `strength_scale` multiplies it.
    Bias splits the correction so the lower-degree end moves more.
    """

    def __init__(self, graph: ProjectedGraph, distance: float = 100.0, strength_scale: float = 1.0):
        self.graph = graph
        self.distance = distance
        self.strength_scale = strength_scale
        self._springs: List[tuple] = []

    def initialize(self, nodes: Sequence[SimulationNode]) -> None:
        super().initialize(nodes)
        self._springs = []
        for link in self.graph.links:
            s = self.graph.index_of(link.source)
            t = self.graph.index_of(link.target)
            if s == t:
                continue
            ds = self.graph.degree(s)
            dt = self.graph.degree(t)
            strength = self.strength_scale / min(ds, dt)
            bias = ds / (ds + dt)
            self._springs.append((s, t, strength, bias))

    def apply(self, alpha: float) -> None:
        nodes = self.nodes
        for s, t, strength, bias in self._springs:
            source = nodes[s]
            target = nodes[t]
            x = target.x + target.vx - source.x - source.vx or jiggle()
            y = target.y + target.vy - source.y - source.vy or jiggle()
            l = math.sqrt(x * x + y * y)
            l = (l - self.distance) / l * alpha * strength
            x *= l
            y *= l
            target.vx -= x * bias
            target.vy -= y * bias
            source.vx += x * (1 - bias)
            source.vy += y * (1 - bias)


class CenterForce(Force):
    """Translates all nodes so their mean position moves to (x, y)."""

    def __init__(self, x: float, y: float, strength: float = 1.0):
        self.x = x
        self.y = y
        self.strength = strength

    def apply(self, alpha: float) -> None:
        if not self.nodes:
            return
        n = len(self.nodes)
        sx = (sum(node.x for node in self.nodes) / n - self.x) * self.strength * alpha
        sy = (sum(node.y for node in self.nodes) / n - self.y) * self.strength * alpha
        for node in self.nodes:
            node.x -= sx
            node.y -= sy


class PositionXForce(Force):
    """Pulls each node's x toward a per-node target, independent of neighbors."""

    def __init__(self, target: Callable[[SimulationNode], float], strength: float = 0.1):
        self.target = target
        self.strength = strength

    def initialize(self, nodes: Sequence[SimulationNode]) -> None:
        super().initialize(nodes)
        self._targets = [self.target(node) for node in nodes]

    def apply(self, alpha: float) -> None:
        k = self.strength * alpha
        for node, tx in zip(self.nodes, self._targets):
            node.vx += (tx - node.x) * k


class PositionYForce(Force):
    """Pulls each node's y toward a fixed coordinate."""

    def __init__(self, y: float, strength: float = 0.1):
        self.y = y
        self.strength = strength

    def apply(self, alpha: float) -> None:
        k = self.strength * alpha
        for node in self.nodes:
            node.vy += (self.y - node.y) * k


class CollideForce(Force):
    """
    Keeps nodes at least 2 * radius apart.

    Candidate pairs come from a uniform grid with cells of one diameter, so
    the pass is linear in the number of nodes for typical densities.
    """

    def __init__(self, radius: float = 30.0, strength: float = 1.0):
        self.radius = radius
        self.strength = strength

    def apply(self, alpha: float) -> None:
        nodes = self.nodes
        if len(nodes) < 2:
            return

        diameter = self.radius * 2
        grid = SpatialGrid(diameter)
        for node in nodes:
            grid.insert(node.index, node.x + node.vx, node.y + node.vy)

        k = self.strength * alpha
        for node in nodes:
            xi = node.x + node.vx
            yi = node.y + node.vy
            for j in grid.candidates(xi, yi):
                if j <= node.index:
                    continue
                other = nodes[j]
                x = xi - other.x - other.vx
                y = yi - other.y - other.vy
                l = x * x + y * y
                if l >= diameter * diameter:
                    continue
                if x == 0:
                    x = jiggle()
                    l += x * x
                if y == 0:
                    y = jiggle()
                    l += y * y
                l = math.sqrt(l)
                l = (diameter - l) / l * k
                x *= l
                y *= l
                # Equal radii: the push is split evenly
                node.vx += x * 0.5
                node.vy += y * 0.5
                other.vx -= x * 0.5
                other.vy -= y * 0.5
