"""
View layer: viewport, interaction, scene building and tick scheduling.
"""

from .engine import GraphView
from .export import export_png
from .highlight import HighlightMachine, Hover, NoHighlight, Search
from .interaction import InteractionController
from .loop import AsyncioScheduler, ManualScheduler, TickLoop
from .scene import Scene, SceneBuilder
from .viewport import Viewport, ViewportTransform

__all__ = [
    "GraphView",
    "export_png",
    "HighlightMachine",
    "Hover",
    "NoHighlight",
    "Search",
    "InteractionController",
    "AsyncioScheduler",
    "ManualScheduler",
    "TickLoop",
    "Scene",
    "SceneBuilder",
    "Viewport",
    "ViewportTransform",
]
