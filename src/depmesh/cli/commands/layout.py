"""
Layout Command - Headless settle.

Runs the layout solver to rest without a display and prints the resulting
node positions as JSON, for hosts that draw the diagram themselves.
"""

import json
import logging
import sys
from typing import List, Optional

import click
from pydantic import BaseModel

from ...core.types import LayoutMode
from ...view.engine import GraphView
from ..utils import check_filters, load_engine_config, load_graph

logger = logging.getLogger(__name__)


# --- API Models ---
class NodePosition(BaseModel):
    id: str
    group: str
    level: int
    x: float
    y: float


class LayoutResponse(BaseModel):
    mode: LayoutMode
    ticks: int
    settled: bool
    width: float
    height: float
    nodes: List[NodePosition]


@click.command()
@click.argument("graph_file", default=".")
@click.option("-m", "--mode", type=click.Choice([m.value for m in LayoutMode]),
              default=LayoutMode.FORCE.value, help="Layout mode")
@click.option("-f", "--filter", "filters", multiple=True, help="Node group to include (repeatable)")
@click.option("--auto-levels", is_flag=True, help="Derive levels from the link structure")
@click.option("--max-ticks", default=1000, type=int, help="Upper bound on solver iterations")
@click.option("--width", type=float, default=None, help="Surface width in pixels")
@click.option("--height", type=float, default=None, help="Surface height in pixels")
def layout(graph_file: str, mode: str, filters: tuple, auto_levels: bool,
           max_ticks: int, width: Optional[float], height: Optional[float]):
    """
    Settle GRAPH_FILE and print node positions as JSON.
    """
    config = load_engine_config()
    if config is None:
        sys.exit(1)

    graph = load_graph(graph_file, auto_levels=auto_levels)
    if graph is None:
        sys.exit(1)

    view = GraphView(width=width, height=height, mode=LayoutMode(mode), config=config)
    view.load(graph, check_filters(graph, filters))
    ticks = view.run_until_settled(max_ticks)
    logger.debug(f"Layout finished after {ticks} ticks")

    simulation = view.simulation
    response = LayoutResponse(
        mode=view.mode,
        ticks=ticks,
        settled=simulation.settled,
        width=view.viewport.width,
        height=view.viewport.height,
        nodes=[
            NodePosition(id=n.id, group=n.node.group, level=n.node.level,
                         x=round(n.x, 3), y=round(n.y, 3))
            for n in simulation.nodes
        ],
    )
    click.echo(json.dumps(response.model_dump(mode="json"), indent=2))
