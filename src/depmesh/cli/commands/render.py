"""
Render Command - Export a settled diagram as PNG.

Settles the layout headlessly, frames it in the viewport, applies an
optional search or hover highlight and writes the scene with the
matplotlib exporter.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from ...core.types import LayoutMode
from ...view.engine import GraphView
from ..utils import check_filters, echo_info, echo_success, echo_warning, load_engine_config, load_graph

logger = logging.getLogger(__name__)


@click.command()
@click.argument("graph_file", default=".")
@click.option("-o", "--output", default="graph.png", type=click.Path(dir_okay=False),
              help="Output PNG file")
@click.option("-m", "--mode", type=click.Choice([m.value for m in LayoutMode]),
              default=LayoutMode.FORCE.value, help="Layout mode")
@click.option("-f", "--filter", "filters", multiple=True, help="Node group to include (repeatable)")
@click.option("-s", "--search", default=None, help="Highlight nodes matching this text")
@click.option("--hover", "hover_id", default=None, help="Highlight this node and its neighbors")
@click.option("--auto-levels", is_flag=True, help="Derive levels from the link structure")
@click.option("--max-ticks", default=1000, type=int, help="Upper bound on solver iterations")
@click.option("--width", type=float, default=None, help="Image width in pixels")
@click.option("--height", type=float, default=None, help="Image height in pixels")
@click.option("--dpi", default=100, type=int, help="Output resolution")
def render(graph_file: str, output: str, mode: str, filters: tuple, search: Optional[str],
           hover_id: Optional[str], auto_levels: bool, max_ticks: int,
           width: Optional[float], height: Optional[float], dpi: int):
    """
    Lay out GRAPH_FILE and export it as a PNG image.
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
    view.fit()

    if search:
        view.set_query(search)
    if hover_id:
        if view.graph.has_node(hover_id):
            view.controls.hover(hover_id)
        else:
            echo_warning(f"Node '{hover_id}' is not in the rendered graph")

    path = Path(output)
    view.export_png(path, dpi=dpi)
    rendered = view.graph.node_count
    view.destroy()

    echo_success(f"Rendered {rendered} nodes to {path}")
    echo_info(f"Mode: {mode}, settled after {ticks} ticks")
