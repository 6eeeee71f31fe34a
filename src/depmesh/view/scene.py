"""
Scene Builder.

Turns solver output, the viewport transform and the highlight state into a
fresh list of draw commands. A Scene is a snapshot: it is rebuilt on every
tick and on every viewport change, and never mutated afterwards.

Z-order is fixed: links, then nodes, then labels.
"""

import math
from dataclasses import dataclass
from typing import FrozenSet, Iterator, List, Optional, Sequence, Tuple, Union

from ..config import RenderConfig
from ..core.graph import ProjectedGraph
from ..core.types import LinkType, SimulationNode
from . import style
from .highlight import HighlightState, Hover, Search
from .viewport import IDENTITY, ViewportTransform

Point = Tuple[float, float]

ELLIPSIS = "…"


@dataclass(frozen=True)
class Emphasis:
    """
    Which nodes and links are drawn at full strength.

    `full_nodes` of None means every node is at full opacity.
    """
    full_nodes: Optional[FrozenSet[str]] = None
    highlighted_links: FrozenSet[int] = frozenset()
    dim_links: bool = False

    def node_is_full(self, node_id: str) -> bool:
        return self.full_nodes is None or node_id in self.full_nodes


NO_EMPHASIS = Emphasis()


def resolve_emphasis(graph: ProjectedGraph, state: HighlightState,
                     hover_neighbors: Optional[FrozenSet[str]] = None) -> Emphasis:
    """
    Map a HighlightState onto the projected graph.

    Hover: the node, its neighbors and its incident links stand out; everything
    else dims. Search: matching nodes stand out and all links dim.
    """
    if isinstance(state, Hover) and graph.has_node(state.node_id):
        neighbors = hover_neighbors if hover_neighbors is not None else frozenset(
            graph.neighbors(state.node_id)
        )
        return Emphasis(
            full_nodes=frozenset(neighbors | {state.node_id}),
            highlighted_links=frozenset(graph.incident_link_indices(state.node_id)),
            dim_links=True,
        )
    if isinstance(state, Search) and state.query:
        return Emphasis(
            full_nodes=frozenset(n.id for n in graph.nodes if n.matches(state.query)),
            dim_links=True,
        )
    return NO_EMPHASIS


@dataclass(frozen=True)
class LinkDrawable:
    """
    A link in screen space.

    `points` holds two points for a straight segment or four for a cubic
    Bezier (start, control 1, control 2, end).
    """
    source_id: str
    target_id: str
    link_type: LinkType
    points: Tuple[Point, ...]
    color: str
    opacity: float
    width: float
    arrow_tip: Point
    arrow_angle: float
    arrow_size: float

    @property
    def curved(self) -> bool:
        return len(self.points) == 4

    @property
    def start(self) -> Point:
        return self.points[0]

    @property
    def end(self) -> Point:
        return self.points[-1]

    @property
    def path(self) -> str:
        """SVG path data for the link."""
        coords = [f"{x:.2f},{y:.2f}" for x, y in self.points]
        if self.curved:
            return f"M{coords[0]} C{coords[1]} {coords[2]} {coords[3]}"
        return f"M{coords[0]} L{coords[1]}"


@dataclass(frozen=True)
class NodeDrawable:
    node_id: str
    group: str
    shape: style.Shape
    x: float
    y: float
    size: float
    fill: str
    opacity: float


@dataclass(frozen=True)
class LabelDrawable:
    node_id: str
    text: str
    x: float
    y: float
    font_size: float
    color: str
    halo_color: str
    halo_width: float
    opacity: float


Drawable = Union[LinkDrawable, NodeDrawable, LabelDrawable]


@dataclass(frozen=True)
class Scene:
    width: float
    height: float
    transform: ViewportTransform = IDENTITY
    links: Tuple[LinkDrawable, ...] = ()
    nodes: Tuple[NodeDrawable, ...] = ()
    labels: Tuple[LabelDrawable, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (self.links or self.nodes or self.labels)

    def drawables(self) -> Iterator[Drawable]:
        """All draw commands in paint order."""
        yield from self.links
        yield from self.nodes
        yield from self.labels

    def node(self, node_id: str) -> Optional[NodeDrawable]:
        for drawable in self.nodes:
            if drawable.node_id == node_id:
                return drawable
        return None

    def full_opacity_nodes(self) -> List[str]:
        return [n.node_id for n in self.nodes if n.opacity >= 1.0]


def truncate(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[: max(limit - 1, 0)] + ELLIPSIS


class SceneBuilder:
    """Builds Scenes from simulation state. Holds no per-frame state."""

    def __init__(self, config: Optional[RenderConfig] = None):
        self.config = config or RenderConfig()

    def build(
        self,
        nodes: Sequence[SimulationNode],
        graph: ProjectedGraph,
        transform: ViewportTransform,
        width: float,
        height: float,
        emphasis: Emphasis = NO_EMPHASIS,
        curved_links: bool = False,
        truncate_labels: bool = False,
    ) -> Scene:
        if not nodes:
            return Scene(width, height, transform)

        scale = transform.scale
        dim = self.config.dim_opacity
        screen: List[Point] = [transform.apply(n.x, n.y) for n in nodes]

        links: List[LinkDrawable] = []
        for position, link in enumerate(graph.links):
            s = graph.index_of(link.source)
            t = graph.index_of(link.target)
            target_style = style.style_for(nodes[t].node.group)
            links.append(self._link(
                link.source, link.target, link.type, screen[s], screen[t],
                curved_links, target_style.size * scale, scale,
                highlighted=position in emphasis.highlighted_links,
                dimmed=emphasis.dim_links, dim_opacity=dim,
            ))

        drawn_nodes: List[NodeDrawable] = []
        labels: List[LabelDrawable] = []
        ox, oy = style.LABEL_OFFSET
        for sim_node, (sx, sy) in zip(nodes, screen):
            node = sim_node.node
            node_style = style.style_for(node.group)
            opacity = 1.0 if emphasis.node_is_full(node.id) else dim
            drawn_nodes.append(NodeDrawable(
                node_id=node.id,
                group=node.group,
                shape=node_style.shape,
                x=sx,
                y=sy,
                size=node_style.size * scale,
                fill=node_style.fill,
                opacity=opacity,
            ))
            text = truncate(node.label, self.config.label_max_chars) if truncate_labels else node.label
            labels.append(LabelDrawable(
                node_id=node.id,
                text=text,
                x=sx + ox * scale,
                y=sy + oy * scale,
                font_size=style.LABEL_FONT_SIZE * scale,
                color=style.LABEL_COLOR,
                halo_color=style.HALO_COLOR,
                halo_width=style.HALO_WIDTH * scale,
                opacity=opacity,
            ))

        return Scene(width, height, transform, tuple(links), tuple(drawn_nodes), tuple(labels))

    def _link(self, source_id: str, target_id: str, link_type: LinkType,
              start: Point, end: Point, curved: bool, target_size: float, scale: float,
              highlighted: bool, dimmed: bool, dim_opacity: float) -> LinkDrawable:
        if curved:
            mx = (start[0] + end[0]) / 2
            points: Tuple[Point, ...] = (start, (mx, start[1]), (mx, end[1]), end)
            # The curve arrives horizontally
            dx = end[0] - mx
            angle = 0.0 if dx >= 0 else math.pi
        else:
            points = (start, end)
            angle = math.atan2(end[1] - start[1], end[0] - start[0])

        # Pull the arrow tip back to the target's outline
        back = target_size + 2 * scale
        tip = (end[0] - math.cos(angle) * back, end[1] - math.sin(angle) * back)

        if highlighted:
            color, opacity = style.LINK_HIGHLIGHT_COLOR, 1.0
        elif dimmed:
            color, opacity = style.LINK_COLOR, dim_opacity
        else:
            color, opacity = style.LINK_COLOR, style.LINK_OPACITY

        return LinkDrawable(
            source_id=source_id,
            target_id=target_id,
            link_type=link_type,
            points=points,
            color=color,
            opacity=opacity,
            width=style.LINK_WIDTH * scale,
            arrow_tip=tip,
            arrow_angle=angle,
            arrow_size=style.ARROW_SIZE * scale,
        )
