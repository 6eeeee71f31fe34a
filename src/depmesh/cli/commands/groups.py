"""
Groups Command - Summarize what a graph contains.

Lists the node groups (the tags the view can filter on) and link types
with their counts.
"""

import json
import sys
from collections import Counter
from typing import Dict

import click
from pydantic import BaseModel
from rich.console import Console
from rich.table import Table

from ...core.projection import available_groups
from ..utils import load_graph

console = Console()


class GroupsResponse(BaseModel):
    nodes: int
    links: int
    groups: Dict[str, int]
    link_types: Dict[str, int]


@click.command()
@click.argument("graph_file", default=".")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def groups(graph_file: str, as_json: bool):
    """
    Show node groups and link types in GRAPH_FILE.
    """
    graph = load_graph(graph_file)
    if graph is None:
        sys.exit(1)

    group_counts = Counter(node.group for node in graph.nodes)
    link_counts = Counter(str(link.type) for link in graph.links)

    response = GroupsResponse(
        nodes=graph.node_count,
        links=graph.link_count,
        groups={tag: group_counts[tag] for tag in available_groups(graph)},
        link_types=dict(link_counts),
    )

    if as_json:
        click.echo(json.dumps(response.model_dump(), indent=2))
        return

    table = Table(title=f"{response.nodes} nodes, {response.links} links",
                  show_header=True, header_style="bold")
    table.add_column("Group", style="cyan")
    table.add_column("Nodes", justify="right")
    for tag, count in response.groups.items():
        table.add_row(tag, str(count))
    console.print(table)

    if response.link_types:
        links_table = Table(show_header=True, header_style="bold")
        links_table.add_column("Link type", style="magenta")
        links_table.add_column("Links", justify="right")
        for link_type, count in sorted(response.link_types.items()):
            links_table.add_row(link_type, str(count))
        console.print(links_table)
