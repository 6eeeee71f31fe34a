"""
Unit tests for the Scene Builder and style lookup.
"""

import pytest

from depmesh.core.projection import project
from depmesh.core.types import GraphData, LayoutMode
from depmesh.layout.simulation import Simulation
from depmesh.view import style
from depmesh.view.highlight import NONE, Hover, Search
from depmesh.view.scene import (
    NO_EMPHASIS,
    LabelDrawable,
    LinkDrawable,
    NodeDrawable,
    SceneBuilder,
    resolve_emphasis,
    truncate,
)
from depmesh.view.viewport import IDENTITY, ViewportTransform


def _build(data, state=NONE, mode=LayoutMode.FORCE, transform=IDENTITY):
    graph = project(data, {n.group for n in data.nodes})
    sim = Simulation(graph, mode=mode)
    config = sim.configuration
    scene = SceneBuilder().build(
        sim.nodes, graph, transform, 1200, 800,
        emphasis=resolve_emphasis(graph, state),
        curved_links=config.curved_links,
        truncate_labels=config.truncate_labels,
    )
    return sim, graph, scene


class TestStyle:
    def test_known_groups(self):
        assert style.style_for("Object").fill == "#0176D3"
        assert style.style_for("Trigger").shape is style.Shape.SQUARE

    def test_unknown_group_falls_back(self):
        assert style.style_for("Widget") == style.DEFAULT_NODE_STYLE

    def test_contains(self):
        square = style.style_for("Trigger")
        circle = style.style_for("Field")
        assert square.contains(9, 9)
        assert not square.contains(11, 0)
        assert circle.contains(0, 8)
        assert not circle.contains(6, 6)


class TestResolveEmphasis:
    def test_hover_on_missing_node(self, star_graph):
        graph = project(star_graph, {"Object"})
        assert resolve_emphasis(graph, Hover("a")) == NO_EMPHASIS

    def test_uses_cached_neighbors(self, star_graph):
        graph = project(star_graph, {n.group for n in star_graph.nodes})
        emphasis = resolve_emphasis(graph, Hover("hub"), frozenset({"a"}))
        assert emphasis.full_nodes == {"hub", "a"}


class TestSceneBuilder:
    def test_no_highlight_is_full_opacity(self, star_graph):
        _, _, scene = _build(star_graph)
        assert all(n.opacity == 1.0 for n in scene.nodes)
        assert all(l.opacity == style.LINK_OPACITY for l in scene.links)
        assert all(l.color == style.LINK_COLOR for l in scene.links)

    def test_hover_highlights_node_and_neighbors(self, star_graph):
        _, graph, scene = _build(star_graph, Hover("hub"))
        k = len(graph.neighbors("hub"))
        assert sorted(scene.full_opacity_nodes()) == ["a", "b", "c", "hub"]
        assert len(scene.full_opacity_nodes()) == k + 1
        assert scene.node("lonely").opacity == pytest.approx(0.1)

        highlighted = [l for l in scene.links if l.color == style.LINK_HIGHLIGHT_COLOR]
        assert len(highlighted) == len(graph.incident_link_indices("hub"))
        assert all(l.opacity == 1.0 for l in highlighted)

    def test_hover_leaf_recolors_only_incident_links(self, star_graph):
        _, _, scene = _build(star_graph, Hover("b"))
        assert sorted(scene.full_opacity_nodes()) == ["b", "hub"]
        highlighted = [(l.source_id, l.target_id) for l in scene.links
                       if l.color == style.LINK_HIGHLIGHT_COLOR]
        assert highlighted == [("b", "hub")]
        others = [l for l in scene.links if l.color != style.LINK_HIGHLIGHT_COLOR]
        assert all(l.opacity == pytest.approx(0.1) for l in others)

    def test_labels_follow_node_opacity(self, star_graph):
        _, _, scene = _build(star_graph, Hover("b"))
        for node, label in zip(scene.nodes, scene.labels):
            assert node.node_id == label.node_id
            assert node.opacity == label.opacity

    def test_search_matching_one_label(self, star_graph):
        _, _, scene = _build(star_graph, Search("gamma"))
        assert scene.full_opacity_nodes() == ["c"]
        assert all(l.opacity == pytest.approx(0.1) for l in scene.links)
        assert all(l.color == style.LINK_COLOR for l in scene.links)

    def test_search_matches_metadata(self, star_graph):
        _, _, scene = _build(star_graph, Search("_FLOW__C"))
        assert scene.full_opacity_nodes() == ["c"]

    def test_dimmed_never_brighter_than_full(self, demo_graph):
        for state in (Hover("Account"), Search("opp")):
            _, _, scene = _build(demo_graph, state)
            full = [n.opacity for n in scene.nodes if n.node_id in scene.full_opacity_nodes()]
            dim = [n.opacity for n in scene.nodes if n.node_id not in scene.full_opacity_nodes()]
            assert dim and full
            assert max(dim) <= min(full)

    def test_z_order(self, star_graph):
        _, _, scene = _build(star_graph)
        kinds = [type(d) for d in scene.drawables()]
        n_links, n_nodes = len(scene.links), len(scene.nodes)
        assert kinds[:n_links] == [LinkDrawable] * n_links
        assert kinds[n_links:n_links + n_nodes] == [NodeDrawable] * n_nodes
        assert kinds[n_links + n_nodes:] == [LabelDrawable] * len(scene.labels)

    def test_rendered_links_have_rendered_endpoints(self, demo_graph):
        _, _, scene = _build(demo_graph)
        ids = {n.node_id for n in scene.nodes}
        assert all(l.source_id in ids and l.target_id in ids for l in scene.links)

    def test_unknown_group_uses_default_style(self):
        data = GraphData.model_validate({"nodes": [{"id": "w", "group": "Widget", "label": "W"}]})
        _, _, scene = _build(data)
        assert scene.nodes[0].fill == style.DEFAULT_NODE_STYLE.fill

    def test_transform_is_applied(self, star_graph):
        transform = ViewportTransform(2.0, 10.0, 20.0)
        sim, _, scene = _build(star_graph, transform=transform)
        hub = sim.find("hub")
        drawn = scene.node("hub")
        assert (drawn.x, drawn.y) == pytest.approx((hub.x * 2 + 10, hub.y * 2 + 20))
        assert drawn.size == 30
        assert scene.transform == transform

    def test_force_mode_links_are_straight(self, star_graph):
        _, _, scene = _build(star_graph)
        assert all(not l.curved for l in scene.links)
        assert scene.links[0].path.startswith("M")
        assert " L" in scene.links[0].path

    def test_empty_graph_yields_empty_scene(self):
        _, _, scene = _build(GraphData())
        assert scene.is_empty
        assert list(scene.drawables()) == []


class TestLayeredScene:
    def test_curved_link_runs_between_endpoints(self, two_group_graph):
        sim, _, scene = _build(two_group_graph, mode=LayoutMode.LAYERED)
        sim.run_until_settled()
        graph = sim.graph
        scene = SceneBuilder().build(sim.nodes, graph, IDENTITY, 1200, 800, curved_links=True,
                                     truncate_labels=True)
        link = scene.links[0]
        a, b = sim.find("A"), sim.find("B")
        assert link.curved
        assert link.start == pytest.approx((a.x, a.y))
        assert link.end == pytest.approx((b.x, b.y))
        assert link.path.startswith("M") and " C" in link.path
        # Horizontal tangents at both ends
        assert link.points[1][1] == pytest.approx(a.y)
        assert link.points[2][1] == pytest.approx(b.y)

    def test_labels_truncate_only_in_layered_mode(self, process_graph):
        _, _, layered = _build(process_graph, mode=LayoutMode.LAYERED)
        _, _, force = _build(process_graph, mode=LayoutMode.FORCE)
        long_label = "Closed Won Notification Flow"
        layered_text = next(l.text for l in layered.labels if l.node_id == "flow_close")
        force_text = next(l.text for l in force.labels if l.node_id == "flow_close")
        assert layered_text == long_label[:19] + "…"
        assert len(layered_text) == 20
        assert force_text == long_label


class TestTruncate:
    def test_short_text_untouched(self):
        assert truncate("Amount", 20) == "Amount"
        assert truncate("x" * 20, 20) == "x" * 20

    def test_long_text(self):
        assert truncate("x" * 21, 20) == "x" * 19 + "…"
