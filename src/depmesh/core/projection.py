"""
Graph Data Projector.

Filters the full graph down to the active node groups. The projection is a
pure function of (GraphData, FilterSet); links whose endpoints did not
survive are dropped silently, which also covers links that never had a
valid endpoint in the first place.
"""

import logging
from typing import Dict, FrozenSet, Iterable, List, Optional, Set

from .graph import ProjectedGraph
from .types import GraphData, GraphLink, GraphNode

logger = logging.getLogger(__name__)


def available_groups(graph: GraphData) -> List[str]:
    """Group tags present in the data, in order of first appearance."""
    seen: Dict[str, None] = {}
    for node in graph.nodes:
        seen.setdefault(node.group, None)
    return list(seen)


class FilterSet:
    """
    The set of node groups currently shown.

    Only tags that exist in the loaded data can be active; requests for any
    other tag are ignored.
    """

    def __init__(self, selectable: Iterable[str], active: Optional[Iterable[str]] = None):
        self._selectable: List[str] = list(dict.fromkeys(selectable))
        allowed = set(self._selectable)
        requested = self._selectable if active is None else active
        self._active: Set[str] = {tag for tag in requested if tag in allowed}

    @classmethod
    def for_graph(cls, graph: GraphData, active: Optional[Iterable[str]] = None) -> "FilterSet":
        return cls(available_groups(graph), active)

    @property
    def active(self) -> FrozenSet[str]:
        return frozenset(self._active)

    def toggle(self, tag: str) -> bool:
        """
        Flip a tag on or off.

        Returns:
            True if the active set changed.
        """
        if tag not in self._selectable:
            return False
        if tag in self._active:
            self._active.discard(tag)
        else:
            self._active.add(tag)
        return True

    def set_active(self, tags: Iterable[str]) -> bool:
        """Replace the active set. Returns True if it changed."""
        allowed = set(self._selectable)
        updated = {tag for tag in tags if tag in allowed}
        if updated == self._active:
            return False
        self._active = updated
        return True

    def __contains__(self, tag: str) -> bool:
        return tag in self._active

    def __len__(self) -> int:
        return len(self._active)

    def __repr__(self) -> str:
        return f"FilterSet(active={sorted(self._active)!r})"


def project(graph: GraphData, filters: Iterable[str]) -> ProjectedGraph:
    """
    Project the full graph onto the active groups.

    O(|V| + |E|): one pass over nodes to collect survivors, one pass over
    links with set-membership checks on both endpoints.
    """
    active = filters.active if isinstance(filters, FilterSet) else frozenset(filters)

    nodes: List[GraphNode] = []
    node_ids: Set[str] = set()
    for node in graph.nodes:
        if node.group in active and node.id not in node_ids:
            nodes.append(node)
            node_ids.add(node.id)

    links: List[GraphLink] = [
        link for link in graph.links
        if link.source in node_ids and link.target in node_ids
    ]

    dropped = len(graph.links) - len(links)
    if dropped:
        logger.debug(f"Projection dropped {dropped} links with filtered or missing endpoints")

    return ProjectedGraph(nodes, links)
