"""
depmesh - Interactive layout engine for dependency graphs.

depmesh positions a typed, directed dependency graph so related artifacts
cluster and relationships stay legible, and keeps a drawable scene in sync
with pan/zoom, hover, search, filters and drag-to-pin.

Key Components:
- core: Data types, loading, group filtering (projection)
- layout: Force-directed and layered solvers
- view: Viewport, interaction, scene building, PNG export

Usage:
    from depmesh import GraphView, load_graph_file

    view = GraphView()
    view.load(load_graph_file("graph.json"))
    view.run_until_settled()
    view.export_png("graph.png")
"""

__version__ = "0.1.0"

from .core.loader import load_graph_dict, load_graph_file
from .core.projection import FilterSet, project
from .core.types import GraphData, GraphLink, GraphNode, LayoutMode, LinkType
from .view.engine import GraphView

__all__ = [
    "__version__",
    "GraphData",
    "GraphLink",
    "GraphNode",
    "LayoutMode",
    "LinkType",
    "FilterSet",
    "project",
    "load_graph_dict",
    "load_graph_file",
    "GraphView",
]
