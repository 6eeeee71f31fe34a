"""
Layout Solver.

Owns the arena of SimulationNodes for one projected graph and advances it
one tick at a time. The temperature (alpha) starts at 1 and decays toward
alpha_target; every force is scaled by it, so the layout moves a lot at
first and then settles. A drag raises alpha_target, which reheats the
layout without resetting it.

A Simulation is bound to a single (projected graph, layout mode) pair.
Changing either means building a new Simulation: positions are never
carried across.
"""

import logging
from typing import Dict, List, Optional, Tuple

from ..config import ALPHA_START, PhysicsConfig
from ..core.graph import ProjectedGraph
from ..core.types import LayoutMode, SimulationNode
from .forces import Force
from .modes import ForceConfiguration, configuration_for

logger = logging.getLogger(__name__)


class Simulation:
    """
    Iterative force-directed solver over an index-addressed node arena.

    Features:
    - Shared integrator for both layout modes
    - Pinned nodes keep exerting forces but are not integrated
    - Settles once alpha drops below alpha_min
    """

    def __init__(
        self,
        graph: ProjectedGraph,
        mode: LayoutMode = LayoutMode.FORCE,
        width: float = 1200,
        height: float = 800,
        physics: Optional[PhysicsConfig] = None,
    ):
        self.graph = graph
        self.configuration: ForceConfiguration = configuration_for(mode)
        self.physics = physics or PhysicsConfig()
        self.width = width
        self.height = height

        self.nodes: List[SimulationNode] = [
            SimulationNode(index=i, node=node) for i, node in enumerate(graph.nodes)
        ]
        self.alpha = ALPHA_START
        self.alpha_target = 0.0
        self.tick_count = 0

        self.configuration.seed(self.nodes, width, height, self.physics)
        self.forces: List[Force] = self.configuration.build_forces(
            graph, width, height, self.physics
        )
        for force in self.forces:
            force.initialize(self.nodes)

        logger.debug(
            f"Seeded {self.configuration.mode} simulation with "
            f"{graph.node_count} nodes and {graph.link_count} links"
        )

    @property
    def mode(self) -> LayoutMode:
        return self.configuration.mode

    @property
    def settled(self) -> bool:
        return self.alpha < self.physics.alpha_min

    @property
    def has_pins(self) -> bool:
        return any(node.is_pinned for node in self.nodes)

    def tick(self) -> None:
        """Advance the layout by one step."""
        was_settled = self.settled
        self.alpha += (self.alpha_target - self.alpha) * self.physics.alpha_decay
        self.tick_count += 1

        for force in self.forces:
            force.apply(self.alpha)

        damping = 1 - self.physics.velocity_decay
        for node in self.nodes:
            if node.fx is None:
                node.vx *= damping
                node.x += node.vx
            else:
                node.x = node.fx
                node.vx = 0.0
            if node.fy is None:
                node.vy *= damping
                node.y += node.vy
            else:
                node.y = node.fy
                node.vy = 0.0

        if self.settled and not was_settled:
            logger.debug(f"Simulation settled after {self.tick_count} ticks")

    def run_until_settled(self, max_ticks: int = 1000) -> int:
        """Tick synchronously until settled. Returns the number of ticks run."""
        ticks = 0
        while not self.settled and ticks < max_ticks:
            self.tick()
            ticks += 1
        return ticks

    def reheat(self, alpha_target: float) -> None:
        """Set the temperature the simulation is drawn toward."""
        self.alpha_target = alpha_target
        if self.alpha < self.physics.alpha_min:
            # Kick a settled simulation back above the threshold so it ticks again
            self.alpha = max(self.alpha, self.physics.alpha_min)

    # =========================================================================
    # Lookup
    # =========================================================================

    def find(self, node_id: str) -> Optional[SimulationNode]:
        idx = self.graph.index_of(node_id)
        if idx is None:
            return None
        return self.nodes[idx]

    def positions(self) -> Dict[str, Tuple[float, float]]:
        return {node.id: (node.x, node.y) for node in self.nodes}

    # =========================================================================
    # Pinning
    # =========================================================================

    def pin(self, node_id: str, x: Optional[float] = None, y: Optional[float] = None) -> bool:
        """Fix a node at (x, y), defaulting to its current position."""
        node = self.find(node_id)
        if node is None:
            return False
        node.fx = node.x if x is None else x
        node.fy = node.y if y is None else y
        node.x, node.y = node.fx, node.fy
        node.vx = node.vy = 0.0
        if self.alpha_target < self.physics.drag_alpha_target:
            self.reheat(self.physics.drag_alpha_target)
        logger.debug(f"Pinned {node_id} at ({node.fx:.1f}, {node.fy:.1f})")
        return True

    def drag_to(self, node_id: str, x: float, y: float) -> bool:
        """Move an already pinned node; the pointer drives it directly."""
        node = self.find(node_id)
        if node is None or not node.is_pinned:
            return False
        node.fx = node.x = x
        node.fy = node.y = y
        return True

    def unpin(self, node_id: str) -> bool:
        """
        Release a pin, leaving the node where it was last placed.

        The temperature target drops back to zero once no pins remain.
        """
        node = self.find(node_id)
        if node is None or not node.is_pinned:
            return False
        node.x, node.y = node.fx, node.fy
        node.vx = node.vy = 0.0
        node.fx = node.fy = None
        if not self.has_pins:
            self.alpha_target = 0.0
        return True
