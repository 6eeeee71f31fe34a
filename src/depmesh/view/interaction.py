"""
Interaction & Highlight Controller.

Translates pointer and keyboard input into FilterSet, HighlightState and
pin transitions, and dispatches node click / context-menu events to the
host. The controller is the only writer of the FilterSet and of the
HighlightState; it reaches the solver only through pin/drag/unpin.

Gestures:
- pointer-down on a node pins it and reheats the layout; pointer-move drags
  it; pointer-up unpins it where it was dropped. If the pointer never moved
  past the click distance the gesture is a click instead.
- pointer-down on the background followed by movement pans the viewport.
- pointer-move with no button held tracks hover.
"""

import logging
import math
from typing import TYPE_CHECKING, Callable, FrozenSet, Iterable, Optional, Tuple

from ..core.graph import ProjectedGraph
from ..core.projection import FilterSet
from ..core.types import GraphNode
from . import style
from .highlight import HighlightMachine, HighlightState

if TYPE_CHECKING:
    from .engine import GraphView

logger = logging.getLogger(__name__)

Point = Tuple[float, float]
NodeClickHandler = Callable[[GraphNode], None]
NodeContextMenuHandler = Callable[[GraphNode, Point], None]

ZOOM_IN_KEYS = ("+", "=")
ZOOM_OUT_KEYS = ("-",)
RESET_KEYS = ("0",)
CLEAR_KEYS = ("Escape",)


class InteractionController:
    """Owns filters, highlight state and the in-progress pointer gesture."""

    def __init__(
        self,
        view: "GraphView",
        on_node_click: Optional[NodeClickHandler] = None,
        on_node_context_menu: Optional[NodeContextMenuHandler] = None,
    ):
        self.view = view
        self.on_node_click = on_node_click
        self.on_node_context_menu = on_node_context_menu
        self.filters = FilterSet([])
        self.highlight = HighlightMachine()
        self.hover_neighbors: Optional[FrozenSet[str]] = None

        # Gesture state
        self._press: Optional[Point] = None
        self._last: Optional[Point] = None
        self._moved = False
        self._drag_id: Optional[str] = None
        self._grab_offset: Point = (0.0, 0.0)

    @property
    def state(self) -> HighlightState:
        return self.highlight.state

    @property
    def query(self) -> str:
        return self.highlight.query

    @property
    def dragging(self) -> Optional[str]:
        return self._drag_id

    @property
    def click_distance(self) -> float:
        return self.view.config.render.click_distance

    # =========================================================================
    # Filters & search
    # =========================================================================

    def reset_filters(self, filters: FilterSet) -> None:
        """Install a fresh FilterSet (on data load). Does not reproject."""
        self.filters = filters

    def toggle_filter(self, tag: str) -> bool:
        """Flip a group on or off and reproject if anything changed."""
        if not self.filters.toggle(tag):
            logger.debug(f"Ignoring filter toggle for unknown group {tag!r}")
            return False
        self.view.reproject()
        return True

    def set_filters(self, tags: Iterable[str]) -> bool:
        if not self.filters.set_active(tags):
            return False
        self.view.reproject()
        return True

    def set_query(self, query: str) -> HighlightState:
        state = self.highlight.query_changed(query)
        self.hover_neighbors = None
        self.view.render()
        return state

    # =========================================================================
    # Hover
    # =========================================================================

    def hover(self, node_id: str) -> HighlightState:
        """Pointer entered a node. Unknown ids are ignored."""
        graph = self.view.graph
        if not graph.has_node(node_id):
            return self.highlight.state
        if self.highlight.hovered != node_id:
            self.highlight.pointer_enter(node_id)
            self.hover_neighbors = frozenset(graph.neighbors(node_id))
            self.view.render()
        return self.highlight.state

    def unhover(self) -> HighlightState:
        """Pointer left the hovered node."""
        if self.highlight.hovered is not None:
            self.highlight.pointer_leave()
            self.hover_neighbors = None
            self.view.render()
        return self.highlight.state

    def projection_changed(self, graph: ProjectedGraph) -> None:
        """Drop gesture and hover state that referred to the old projection."""
        self._clear_gesture()
        if self.highlight.hovered is not None:
            self.highlight.reset()
        self.hover_neighbors = None

    # =========================================================================
    # Pointer
    # =========================================================================

    def hit_test(self, sx: float, sy: float) -> Optional[GraphNode]:
        """Topmost node under a screen point, or None."""
        simulation = self.view.simulation
        if simulation is None:
            return None
        wx, wy = self.view.viewport.screen_to_world(sx, sy)
        for sim_node in reversed(simulation.nodes):
            node_style = style.style_for(sim_node.node.group)
            if node_style.contains(wx - sim_node.x, wy - sim_node.y):
                return sim_node.node
        return None

    def pointer_down(self, sx: float, sy: float) -> Optional[GraphNode]:
        self._press = self._last = (sx, sy)
        self._moved = False

        node = self.hit_test(sx, sy)
        if node is None:
            return None

        simulation = self.view.simulation
        sim_node = simulation.find(node.id)
        wx, wy = self.view.viewport.screen_to_world(sx, sy)
        self._grab_offset = (sim_node.x - wx, sim_node.y - wy)
        self._drag_id = node.id
        simulation.pin(node.id)
        self.view.wake()
        return node

    def pointer_move(self, sx: float, sy: float) -> None:
        if self._press is None:
            node = self.hit_test(sx, sy)
            if node is None:
                self.unhover()
            else:
                self.hover(node.id)
            return

        if self._drag_id is not None and self.view.simulation is None:
            self._clear_gesture()
            return

        px, py = self._press
        if not self._moved and math.hypot(sx - px, sy - py) > self.click_distance:
            self._moved = True

        if self._drag_id is not None:
            self._drag_to(sx, sy)
        elif self._moved:
            lx, ly = self._last
            self.view.viewport.pan(sx - lx, sy - ly)
            self.view.render()
        self._last = (sx, sy)

    def pointer_up(self, sx: float, sy: float) -> Optional[GraphNode]:
        """
        Finish the current gesture.

        Returns:
            The clicked node if the gesture was a click on a node.
        """
        if self._press is None:
            return None
        if self._drag_id is not None and self.view.simulation is None:
            self._clear_gesture()
            return None

        px, py = self._press
        if math.hypot(sx - px, sy - py) > self.click_distance:
            self._moved = True

        clicked: Optional[GraphNode] = None
        if self._drag_id is not None:
            simulation = self.view.simulation
            if self._moved:
                self._drag_to(sx, sy)
            simulation.unpin(self._drag_id)
            if not self._moved:
                clicked = self.view.graph.get_node(self._drag_id)
        elif self._moved:
            lx, ly = self._last
            self.view.viewport.pan(sx - lx, sy - ly)
            self.view.render()

        self._clear_gesture()
        if clicked is not None and self.on_node_click is not None:
            self.on_node_click(clicked)
        return clicked

    def _drag_to(self, sx: float, sy: float) -> None:
        if self.view.simulation is None:
            return
        wx, wy = self.view.viewport.screen_to_world(sx, sy)
        ox, oy = self._grab_offset
        self.view.simulation.drag_to(self._drag_id, wx + ox, wy + oy)

    def _clear_gesture(self) -> None:
        self._press = self._last = None
        self._moved = False
        self._drag_id = None
        self._grab_offset = (0.0, 0.0)

    def context_menu(self, sx: float, sy: float) -> Optional[GraphNode]:
        node = self.hit_test(sx, sy)
        if node is not None and self.on_node_context_menu is not None:
            self.on_node_context_menu(node, (sx, sy))
        return node

    # =========================================================================
    # Wheel & keyboard
    # =========================================================================

    def wheel(self, sx: float, sy: float, delta: float) -> None:
        self.view.viewport.zoom_at((sx, sy), delta)
        self.view.render()

    def key_press(self, key: str) -> bool:
        """Handle a key. Returns True if the key was consumed."""
        viewport = self.view.viewport
        if key in CLEAR_KEYS:
            self.set_query("")
            return True
        if key in ZOOM_IN_KEYS:
            viewport.zoom_in()
        elif key in ZOOM_OUT_KEYS:
            viewport.zoom_out()
        elif key in RESET_KEYS:
            viewport.reset()
        else:
            return False
        self.view.render()
        return True
