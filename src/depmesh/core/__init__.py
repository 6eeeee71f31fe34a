"""
depmesh Core Module.

Data model, input loading and the Graph Data Projector:
    - GraphNode, GraphLink, GraphData: immutable input graph
    - SimulationNode: mutable solver overlay
    - ProjectedGraph: filtered graph with a rustworkx adjacency index
    - FilterSet, project: group filtering
"""

from .exceptions import ConfigError, DepmeshError, GraphLoadError
from .graph import ProjectedGraph, assign_levels
from .projection import FilterSet, available_groups, project
from .types import (
    GraphData,
    GraphLink,
    GraphNode,
    LayoutMode,
    LinkType,
    NodeGroup,
    SimulationNode,
)

__all__ = [
    "GraphData",
    "GraphLink",
    "GraphNode",
    "LayoutMode",
    "LinkType",
    "NodeGroup",
    "SimulationNode",
    "ProjectedGraph",
    "assign_levels",
    "FilterSet",
    "available_groups",
    "project",
    "DepmeshError",
    "GraphLoadError",
    "ConfigError",
]
