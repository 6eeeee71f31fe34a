"""
Graph view engine.

GraphView wires the Projector, the layout Simulation, the Viewport, the
InteractionController and the SceneBuilder together behind one object a
host can drive: feed it data, forward input events to `controls`, give it
a Scheduler, and read `scene` after every frame.

Ownership:
- FilterSet and HighlightState belong to `controls`
- ViewportTransform belongs to `viewport`
- node positions and velocities belong to `simulation`

Rebuilding the projection or switching layout mode stops the tick loop
before the old Simulation is dropped, so no stale frame can touch it.
"""

import logging
from pathlib import Path
from typing import Callable, Dict, Iterable, Optional, Tuple, Union

from ..config import EngineConfig
from ..core.graph import ProjectedGraph
from ..core.projection import FilterSet, project
from ..core.types import GraphData, LayoutMode
from ..layout.simulation import Simulation
from . import export
from .interaction import InteractionController, NodeClickHandler, NodeContextMenuHandler
from .loop import ManualScheduler, Scheduler, TickLoop
from .scene import Scene, SceneBuilder, resolve_emphasis
from .viewport import Viewport

logger = logging.getLogger(__name__)

EMPTY_GRAPH = GraphData()


class GraphView:
    """
    Interactive diagram of one graph on one drawing surface.

    Example:
        view = GraphView(width=1200, height=800)
        view.load(graph_data)
        view.run_until_settled()
        png = view.export_png()
    """

    def __init__(
        self,
        width: Optional[float] = None,
        height: Optional[float] = None,
        mode: LayoutMode = LayoutMode.FORCE,
        config: Optional[EngineConfig] = None,
        scheduler: Optional[Scheduler] = None,
        on_node_click: Optional[NodeClickHandler] = None,
        on_node_context_menu: Optional[NodeContextMenuHandler] = None,
        on_render: Optional[Callable[[Scene], None]] = None,
    ):
        self.config = config or EngineConfig()
        self.viewport = Viewport(
            width if width is not None else self.config.viewport.width,
            height if height is not None else self.config.viewport.height,
            self.config.viewport,
        )
        self.mode = LayoutMode(mode)
        self.controls = InteractionController(self, on_node_click, on_node_context_menu)
        self.builder = SceneBuilder(self.config.render)
        self.loop = TickLoop(scheduler or ManualScheduler(), self.tick)
        self.on_render = on_render

        self.data: GraphData = EMPTY_GRAPH
        self.graph: ProjectedGraph = ProjectedGraph.empty()
        self.simulation: Optional[Simulation] = None
        self.focused = False
        self.destroyed = False
        self._scene = Scene(self.viewport.width, self.viewport.height)

    @property
    def scene(self) -> Scene:
        """The most recently built Scene."""
        return self._scene

    @property
    def filters(self) -> FilterSet:
        return self.controls.filters

    # =========================================================================
    # Data & mode
    # =========================================================================

    def load(self, data: GraphData, active_groups: Optional[Iterable[str]] = None) -> ProjectedGraph:
        """
        Replace the graph wholesale.

        Args:
            data: The full graph.
            active_groups: Groups to show initially; defaults to every group
                present in the data.
        """
        self.loop.stop()
        self.data = data
        self.controls.reset_filters(FilterSet.for_graph(data, active_groups))
        logger.debug(f"Loaded graph with {data.node_count} nodes and {data.link_count} links")
        return self.reproject()

    def set_mode(self, mode: LayoutMode) -> bool:
        """Switch layout mode. Positions are discarded and re-seeded."""
        mode = LayoutMode(mode)
        if mode is self.mode:
            return False
        self.mode = mode
        logger.debug(f"Switching layout mode to {mode}")
        self.reproject()
        return True

    def reproject(self) -> ProjectedGraph:
        """Rebuild the projection and a fresh Simulation from current filters."""
        self.loop.stop()
        self.simulation = None

        self.graph = project(self.data, self.controls.filters)
        self.simulation = Simulation(
            self.graph,
            mode=self.mode,
            width=self.viewport.width,
            height=self.viewport.height,
            physics=self.config.physics,
        )
        self.controls.projection_changed(self.graph)
        self.render()
        if not self.destroyed:
            self.loop.start()
        return self.graph

    def toggle_filter(self, tag: str) -> bool:
        return self.controls.toggle_filter(tag)

    def set_query(self, query: str) -> None:
        self.controls.set_query(query)

    # =========================================================================
    # Ticking
    # =========================================================================

    def tick(self) -> bool:
        """
        Advance one frame and rebuild the scene.

        Returns:
            True if the loop should be rescheduled: the layout is still
            moving, a drag is in progress, or the view has focus.
        """
        if self.simulation is None or self.destroyed:
            return False
        self.simulation.tick()
        self.render()
        return (
            not self.simulation.settled
            or self.simulation.alpha_target > 0
            or self.focused
        )

    def run_until_settled(self, max_ticks: int = 1000) -> int:
        """Settle synchronously, bypassing the scheduler. Returns ticks run."""
        if self.simulation is None:
            return 0
        self.loop.stop()
        ticks = self.simulation.run_until_settled(max_ticks)
        self.render()
        return ticks

    def wake(self) -> None:
        """Make sure frames are being scheduled (after a reheat)."""
        if self.simulation is not None and not self.destroyed:
            self.loop.start()

    def focus(self) -> None:
        self.focused = True
        self.wake()

    def blur(self) -> None:
        self.focused = False

    def destroy(self) -> None:
        """Tear the view down. The loop is stopped before state is released."""
        self.loop.stop()
        self.destroyed = True
        self.simulation = None
        self.graph = ProjectedGraph.empty()
        self.controls.projection_changed(self.graph)
        self._scene = Scene(self.viewport.width, self.viewport.height)
        logger.debug("Graph view destroyed")

    # =========================================================================
    # Viewport & rendering
    # =========================================================================

    def resize(self, width: float, height: float) -> None:
        """
        Change the surface size.

        The running layout keeps its centre; the new size seeds the next
        projection.
        """
        self.viewport.resize(width, height)
        self.render()

    def fit(self, padding: float = 40.0) -> None:
        """Frame every node in the viewport."""
        bounds = self.bounds()
        if bounds is not None:
            self.viewport.fit(bounds, padding)
            self.render()

    def bounds(self) -> Optional[Tuple[float, float, float, float]]:
        if not self.simulation or not self.simulation.nodes:
            return None
        xs = [n.x for n in self.simulation.nodes]
        ys = [n.y for n in self.simulation.nodes]
        return min(xs), min(ys), max(xs), max(ys)

    def positions(self) -> Dict[str, Tuple[float, float]]:
        if self.simulation is None:
            return {}
        return self.simulation.positions()

    def render(self) -> Scene:
        """Rebuild the scene from the current state. Needs no tick."""
        if self.simulation is None:
            self._scene = Scene(self.viewport.width, self.viewport.height, self.viewport.transform)
            return self._scene

        configuration = self.simulation.configuration
        emphasis = resolve_emphasis(
            self.graph, self.controls.state, self.controls.hover_neighbors
        )
        self._scene = self.builder.build(
            self.simulation.nodes,
            self.graph,
            self.viewport.transform,
            self.viewport.width,
            self.viewport.height,
            emphasis=emphasis,
            curved_links=configuration.curved_links,
            truncate_labels=configuration.truncate_labels,
        )
        if self.on_render is not None:
            self.on_render(self._scene)
        return self._scene

    def export_png(self, destination: Optional[Union[str, Path]] = None,
                   dpi: int = export.EXPORT_DPI) -> bytes:
        """Serialize the current scene to a PNG image."""
        return export.export_png(self._scene, destination, dpi=dpi)
