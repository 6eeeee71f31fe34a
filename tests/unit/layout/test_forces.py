"""
Unit tests for the individual layout forces.
"""

import math

import pytest

from depmesh.core.graph import ProjectedGraph
from depmesh.core.types import GraphLink, GraphNode, SimulationNode
from depmesh.layout.forces import (
    CenterForce,
    CollideForce,
    LinkForce,
    ManyBodyForce,
    PositionXForce,
    PositionYForce,
    jiggle,
)


def _arena(*positions):
    nodes = [GraphNode(id=f"n{i}", group="X", label=f"n{i}") for i in range(len(positions))]
    arena = [
        SimulationNode(index=i, node=node, x=x, y=y)
        for i, (node, (x, y)) in enumerate(zip(nodes, positions))
    ]
    return nodes, arena


class TestJiggle:
    def test_is_tiny_and_nonzero_in_practice(self):
        values = [jiggle() for _ in range(100)]
        assert all(abs(v) <= 5e-7 for v in values)
        assert any(v != 0 for v in values)


class TestManyBodyForce:
    def test_pushes_nodes_apart(self):
        _, arena = _arena((0, 0), (10, 0))
        force = ManyBodyForce(-300)
        force.initialize(arena)
        force.apply(1.0)
        assert arena[0].vx < 0
        assert arena[1].vx > 0
        assert arena[0].vx == pytest.approx(-arena[1].vx)

    def test_coincident_nodes_get_finite_push(self):
        _, arena = _arena((5, 5), (5, 5))
        force = ManyBodyForce(-300)
        force.initialize(arena)
        force.apply(1.0)
        for node in arena:
            assert math.isfinite(node.vx)
            assert math.isfinite(node.vy)

    def test_scaled_by_alpha(self):
        _, hot = _arena((0, 0), (10, 0))
        _, cold = _arena((0, 0), (10, 0))
        for arena, alpha in ((hot, 1.0), (cold, 0.1)):
            force = ManyBodyForce(-300)
            force.initialize(arena)
            force.apply(alpha)
        assert cold[1].vx == pytest.approx(hot[1].vx * 0.1)

    def test_empty_arena(self):
        force = ManyBodyForce()
        force.initialize([])
        force.apply(1.0)


class TestLinkForce:
    def _linked(self, distance_between):
        nodes, arena = _arena((0, 0), (distance_between, 0))
        graph = ProjectedGraph(nodes, [GraphLink(source="n0", target="n1")])
        force = LinkForce(graph, distance=100)
        force.initialize(arena)
        return force, arena

    def test_stretched_link_pulls_together(self):
        force, arena = self._linked(200)
        force.apply(1.0)
        assert arena[0].vx > 0
        assert arena[1].vx < 0

    def test_compressed_link_pushes_apart(self):
        force, arena = self._linked(50)
        force.apply(1.0)
        assert arena[0].vx < 0
        assert arena[1].vx > 0

    def test_rest_length_is_stable(self):
        force, arena = self._linked(100)
        force.apply(1.0)
        assert arena[0].vx == pytest.approx(0)
        assert arena[1].vx == pytest.approx(0)

    def test_self_loops_are_ignored(self):
        nodes, arena = _arena((0, 0))
        graph = ProjectedGraph(nodes, [GraphLink(source="n0", target="n0")])
        force = LinkForce(graph)
        force.initialize(arena)
        force.apply(1.0)
        assert arena[0].vx == 0 and arena[0].vy == 0


class TestCenterForce:
    def test_moves_mean_to_center(self):
        _, arena = _arena((0, 0), (20, 40))
        force = CenterForce(100, 100)
        force.initialize(arena)
        force.apply(1.0)
        assert sum(n.x for n in arena) / 2 == pytest.approx(100)
        assert sum(n.y for n in arena) / 2 == pytest.approx(100)
        assert arena[1].x - arena[0].x == pytest.approx(20)


class TestPositionForces:
    def test_x_pull_toward_per_node_target(self):
        _, arena = _arena((0, 0), (500, 0))
        force = PositionXForce(lambda n: 100.0 * (n.index + 1), strength=1.0)
        force.initialize(arena)
        force.apply(0.5)
        assert arena[0].vx == pytest.approx(50)
        assert arena[1].vx == pytest.approx(-150)

    def test_y_pull(self):
        _, arena = _arena((0, 0))
        force = PositionYForce(400, strength=0.05)
        force.initialize(arena)
        force.apply(1.0)
        assert arena[0].vy == pytest.approx(20)


class TestCollideForce:
    def test_separates_overlapping_nodes(self):
        _, arena = _arena((0, 0), (10, 0))
        force = CollideForce(radius=30)
        force.initialize(arena)
        force.apply(1.0)
        assert arena[0].vx < 0
        assert arena[1].vx > 0

    def test_ignores_distant_nodes(self):
        _, arena = _arena((0, 0), (61, 0))
        force = CollideForce(radius=30)
        force.initialize(arena)
        force.apply(1.0)
        assert arena[0].vx == 0
        assert arena[1].vx == 0
