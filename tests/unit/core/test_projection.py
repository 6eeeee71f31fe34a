"""
Unit tests for the Graph Data Projector.
"""

import itertools

from depmesh.core.projection import FilterSet, available_groups, project
from depmesh.core.types import GraphData


class TestAvailableGroups:
    def test_first_appearance_order(self, demo_graph):
        assert available_groups(demo_graph) == ["Object", "Flow", "Trigger", "Field"]


class TestFilterSet:
    def test_defaults_to_every_group(self, star_graph):
        filters = FilterSet.for_graph(star_graph)
        assert filters.active == {"Object", "Field", "Flow", "Trigger"}

    def test_restricted_to_present_groups(self, star_graph):
        filters = FilterSet.for_graph(star_graph, ["Object", "Nonexistent"])
        assert filters.active == {"Object"}

    def test_toggle(self, star_graph):
        filters = FilterSet.for_graph(star_graph)
        assert filters.toggle("Field")
        assert "Field" not in filters
        assert filters.toggle("Field")
        assert "Field" in filters

    def test_toggle_unknown_tag_is_ignored(self, star_graph):
        filters = FilterSet.for_graph(star_graph)
        assert not filters.toggle("Nonexistent")
        assert "Nonexistent" not in filters

    def test_set_active_reports_change(self, star_graph):
        filters = FilterSet.for_graph(star_graph, ["Object"])
        assert not filters.set_active(["Object"])
        assert filters.set_active(["Object", "Flow"])
        assert len(filters) == 2


class TestProject:
    def test_single_group_drops_cross_links(self, two_group_graph):
        projected = project(two_group_graph, FilterSet.for_graph(two_group_graph, ["X"]))
        assert [n.id for n in projected.nodes] == ["A"]
        assert projected.link_count == 0

    def test_accepts_plain_iterables(self, two_group_graph):
        projected = project(two_group_graph, {"X", "Y"})
        assert projected.node_count == 2
        assert projected.link_count == 1

    def test_links_always_have_surviving_endpoints(self, demo_graph):
        groups = available_groups(demo_graph)
        for size in range(len(groups) + 1):
            for subset in itertools.combinations(groups, size):
                projected = project(demo_graph, subset)
                ids = {n.id for n in projected.nodes}
                assert all(n.group in subset for n in projected.nodes)
                for link in projected.links:
                    assert link.source in ids
                    assert link.target in ids

    def test_drops_links_to_missing_nodes(self):
        data = GraphData.model_validate({
            "nodes": [{"id": "a", "group": "X", "label": "a"}],
            "links": [{"source": "a", "target": "ghost"}, {"source": "ghost", "target": "a"}],
        })
        assert project(data, {"X"}).link_count == 0

    def test_duplicate_ids_keep_first(self):
        data = GraphData.model_validate({
            "nodes": [
                {"id": "a", "group": "X", "label": "first"},
                {"id": "a", "group": "X", "label": "second"},
            ],
        })
        projected = project(data, {"X"})
        assert projected.node_count == 1
        assert projected.nodes[0].label == "first"

    def test_empty_filter(self, demo_graph):
        projected = project(demo_graph, FilterSet.for_graph(demo_graph, []))
        assert projected.node_count == 0
        assert projected.link_count == 0
