"""
Projected graph index backed by rustworkx.

The projector hands the layout and interaction layers a ProjectedGraph:
the surviving nodes and links plus an integer-indexed rustworkx digraph
for adjacency queries (hover neighborhoods, link degrees, level derivation).

It manages:
- The bimap between string node IDs and rustworkx integer indices.
- Neighbor and incident-link lookups independent of link direction.
- Longest-path level assignment for process diagrams.
"""

import logging
from typing import Dict, List, Optional, Sequence, Set

import rustworkx as rx

from .types import GraphData, GraphLink, GraphNode

logger = logging.getLogger(__name__)


class ProjectedGraph:
    """
    Immutable view of the nodes and links that survived filtering.

    Node indices match the order of `nodes`, so the solver arena and the
    rustworkx index share the same integer keys.
    """

    def __init__(self, nodes: Sequence[GraphNode], links: Sequence[GraphLink]):
        self.nodes: List[GraphNode] = list(nodes)
        self.links: List[GraphLink] = list(links)
        self._graph = rx.PyDiGraph(multigraph=True)
        self._id_to_idx: Dict[str, int] = {}

        for node in self.nodes:
            self._id_to_idx[node.id] = self._graph.add_node(node.id)

        for position, link in enumerate(self.links):
            self._graph.add_edge(
                self._id_to_idx[link.source], self._id_to_idx[link.target], position
            )

    @classmethod
    def empty(cls) -> "ProjectedGraph":
        return cls([], [])

    def index_of(self, node_id: str) -> Optional[int]:
        return self._id_to_idx.get(node_id)

    def has_node(self, node_id: str) -> bool:
        return node_id in self._id_to_idx

    def get_node(self, node_id: str) -> Optional[GraphNode]:
        idx = self._id_to_idx.get(node_id)
        if idx is None:
            return None
        return self.nodes[idx]

    def incident_link_indices(self, node_id: str) -> Set[int]:
        """Positions (in `links`) of every link touching the node, either direction."""
        idx = self._id_to_idx.get(node_id)
        if idx is None:
            return set()
        result = {data for _, _, data in self._graph.out_edges(idx)}
        result.update(data for _, _, data in self._graph.in_edges(idx))
        return result

    def neighbors(self, node_id: str) -> Set[str]:
        """IDs of nodes directly linked to node_id, regardless of direction."""
        idx = self._id_to_idx.get(node_id)
        if idx is None:
            return set()
        neighbor_indices = {t for _, t, _ in self._graph.out_edges(idx)}
        neighbor_indices.update(s for s, _, _ in self._graph.in_edges(idx))
        neighbor_indices.discard(idx)
        return {self.nodes[i].id for i in neighbor_indices}

    def degree(self, index: int) -> int:
        """Number of link endpoints at the node (self-loops count twice)."""
        return self._graph.in_degree(index) + self._graph.out_degree(index)

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def link_count(self) -> int:
        return len(self.links)

    @property
    def groups(self) -> List[str]:
        seen: Dict[str, None] = {}
        for node in self.nodes:
            seen.setdefault(node.group, None)
        return list(seen)


def assign_levels(graph: GraphData) -> GraphData:
    """
    Derive process levels for a graph that carries none.

    Each node's level is the length of the longest path reaching it from a
    source node. Back edges found by a depth-first search are ignored so
    cycles cannot inflate levels.
    """
    known = {node.id for node in graph.nodes}
    index = ProjectedGraph(
        graph.nodes,
        [l for l in graph.links if l.source in known and l.target in known],
    )
    dag = rx.PyDiGraph(multigraph=False)
    dag.add_nodes_from(range(index.node_count))

    # Iterative DFS colouring: 0 = unvisited, 1 = on stack, 2 = done
    state = [0] * index.node_count
    forward: Dict[int, List[int]] = {i: [] for i in range(index.node_count)}
    for link in index.links:
        forward[index.index_of(link.source)].append(index.index_of(link.target))

    for root in range(index.node_count):
        if state[root]:
            continue
        stack = [(root, iter(forward[root]))]
        state[root] = 1
        while stack:
            current, children = stack[-1]
            child = next(children, None)
            if child is None:
                state[current] = 2
                stack.pop()
                continue
            if state[child] == 1:
                logger.debug(f"Ignoring back edge {index.nodes[current].id} -> {index.nodes[child].id}")
                continue
            if not dag.has_edge(current, child):
                dag.add_edge(current, child, None)
            if state[child] == 0:
                state[child] = 1
                stack.append((child, iter(forward[child])))

    levels = [0] * index.node_count
    for idx in rx.topological_sort(dag):
        for _, succ, _ in dag.out_edges(idx):
            levels[succ] = max(levels[succ], levels[idx] + 1)

    return GraphData(
        nodes=[
            node.model_copy(update={"level": levels[i]})
            for i, node in enumerate(index.nodes)
        ],
        links=graph.links,
    )
