"""
Force configurations for the two layout modes.

Both modes share the Simulation integrator; they differ only in which forces
are active, how nodes are seeded, and how the scene draws them. The set of
configurations is closed: use `configuration_for(mode)`.
"""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Sequence

from ..config import PhysicsConfig
from ..core.graph import ProjectedGraph
from ..core.types import LayoutMode, SimulationNode
from .forces import (
    CenterForce,
    CollideForce,
    Force,
    LinkForce,
    ManyBodyForce,
    PositionXForce,
    PositionYForce,
)

INITIAL_RADIUS = 10.0
INITIAL_ANGLE = math.pi * (3 - math.sqrt(5))


def phyllotaxis(i: int) -> tuple:
    """Offset of the i-th seed on a sunflower spiral."""
    radius = INITIAL_RADIUS * math.sqrt(0.5 + i)
    angle = i * INITIAL_ANGLE
    return radius * math.cos(angle), radius * math.sin(angle)


@dataclass(frozen=True)
class ForceConfiguration(ABC):
    """Base configuration: what forces run and how the scene draws links."""
    mode: LayoutMode
    curved_links: bool
    truncate_labels: bool

    @abstractmethod
    def build_forces(self, graph: ProjectedGraph, width: float, height: float,
                     physics: PhysicsConfig) -> List[Force]:
        ...

    @abstractmethod
    def seed(self, nodes: Sequence[SimulationNode], width: float, height: float,
             physics: PhysicsConfig) -> None:
        ...


@dataclass(frozen=True)
class OmnidirectionalConfiguration(ForceConfiguration):
    """Free-form dependency view: repulsion, springs, centering and collision."""

    def build_forces(self, graph: ProjectedGraph, width: float, height: float,
                     physics: PhysicsConfig) -> List[Force]:
        return [
            LinkForce(graph, distance=physics.link_distance),
            ManyBodyForce(
                physics.charge_strength,
                theta=physics.charge_theta,
                distance_min=physics.charge_distance_min,
            ),
            CenterForce(width / 2, height / 2),
            CollideForce(physics.collide_radius),
        ]

    def seed(self, nodes: Sequence[SimulationNode], width: float, height: float,
             physics: PhysicsConfig) -> None:
        for node in nodes:
            dx, dy = phyllotaxis(node.index)
            node.x = width / 2 + dx
            node.y = height / 2 + dy
            node.vx = node.vy = 0.0


@dataclass(frozen=True)
class LayeredConfiguration(ForceConfiguration):
    """
    Left-to-right process view.

    Centering is replaced by a strong pull toward each node's column and a
    weak pull toward the vertical midline; repulsion and collision spread
    nodes vertically. Springs rest at one column width so adjacent levels
    stay put horizontally.
    """

    def build_forces(self, graph: ProjectedGraph, width: float, height: float,
                     physics: PhysicsConfig) -> List[Force]:
        column = physics.column_width
        return [
            LinkForce(graph, distance=column, strength_scale=physics.layered_link_strength),
            ManyBodyForce(
                physics.charge_strength,
                theta=physics.charge_theta,
                distance_min=physics.charge_distance_min,
            ),
            PositionXForce(
                lambda n: column_center(n.node.level, column),
                strength=physics.layered_x_strength,
            ),
            PositionYForce(height / 2, strength=physics.layered_y_strength),
            CollideForce(physics.collide_radius),
        ]

    def seed(self, nodes: Sequence[SimulationNode], width: float, height: float,
             physics: PhysicsConfig) -> None:
        for node in nodes:
            _, dy = phyllotaxis(node.index)
            node.x = column_center(node.node.level, physics.column_width)
            node.y = height / 2 + dy
            node.vx = node.vy = 0.0


def column_center(level: int, column_width: float) -> float:
    return level * column_width + column_width / 2


FORCE = OmnidirectionalConfiguration(LayoutMode.FORCE, curved_links=False, truncate_labels=False)
LAYERED = LayeredConfiguration(LayoutMode.LAYERED, curved_links=True, truncate_labels=True)


def configuration_for(mode: LayoutMode) -> ForceConfiguration:
    if LayoutMode(mode) is LayoutMode.LAYERED:
        return LAYERED
    return FORCE
