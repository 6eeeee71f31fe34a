"""
Core type definitions for depmesh.

GraphNode/GraphLink/GraphData describe the input graph and are immutable
once ingested. SimulationNode is the mutable runtime overlay the solver owns.
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class LinkType(StrEnum):
    """Kinds of relationships between configuration artifacts."""
    REFERENCE = "reference"
    UPDATE = "update"
    TRIGGER = "trigger"
    DEPENDENCY = "dependency"
    PROCESS_STEP = "process_step"


class LayoutMode(StrEnum):
    """Layout strategies available to the view."""
    FORCE = "force"
    LAYERED = "layered"


class NodeGroup(StrEnum):
    """
    Groups known to the style table.

    Node groups are open: any string is a valid group, these are just the
    ones with a dedicated shape and color.
    """
    OBJECT = "Object"
    FLOW = "Flow"
    TRIGGER = "Trigger"
    FIELD = "Field"


class GraphNode(BaseModel):
    """
    A configuration artifact in the dependency graph.
    """
    id: str
    group: str
    label: str
    weight: float = Field(default=1.0, validation_alias=AliasChoices("weight", "val"))
    level: int = 0
    metadata: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True, extra="ignore")

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match against label and metadata values."""
        needle = query.lower()
        if needle in self.label.lower():
            return True
        return any(needle in str(value).lower() for value in self.metadata.values())

    def __hash__(self):
        return hash(self.id)


class GraphLink(BaseModel):
    """
    Directed relationship between two GraphNodes.
    """
    source: str = Field(validation_alias=AliasChoices("source", "source_id"))
    target: str = Field(validation_alias=AliasChoices("target", "target_id"))
    type: LinkType = LinkType.DEPENDENCY

    model_config = ConfigDict(frozen=True, extra="ignore")

    def touches(self, node_id: str) -> bool:
        return self.source == node_id or self.target == node_id


class GraphData(BaseModel):
    """
    A full graph as supplied by the data collaborators.

    Always replaced wholesale on refresh.
    """
    nodes: List[GraphNode] = Field(default_factory=list)
    links: List[GraphLink] = Field(
        default_factory=list, validation_alias=AliasChoices("links", "edges")
    )

    model_config = ConfigDict(frozen=True)

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def link_count(self) -> int:
        return len(self.links)


@dataclass(slots=True)
class SimulationNode:
    """
    Runtime state of a node inside the solver arena.

    `index` is the node's slot in the arena; `fx`/`fy` hold the pinned
    position while the node is being dragged.
    """
    index: int
    node: GraphNode
    x: float = 0.0
    y: float = 0.0
    vx: float = 0.0
    vy: float = 0.0
    fx: Optional[float] = None
    fy: Optional[float] = None

    @property
    def id(self) -> str:
        return self.node.id

    @property
    def is_pinned(self) -> bool:
        return self.fx is not None
