"""
Demo Command - Emit the bundled example graph.
"""

import json
from pathlib import Path
from typing import Optional

import click

from ...core.demo import DemoManager
from ..utils import echo_success


@click.command()
@click.option("-o", "--output", type=click.Path(dir_okay=False), default=None,
              help="Write the graph to this file instead of stdout")
@click.option("--process", is_flag=True, help="Emit the leveled process diagram instead")
def demo(output: Optional[str], process: bool):
    """
    Write the example dependency graph as JSON.
    """
    data = DemoManager.PROCESS_GRAPH if process else DemoManager.DEPENDENCY_GRAPH
    text = json.dumps(data, indent=2)

    if output is None:
        click.echo(text)
        return

    path = Path(output)
    path.write_text(text)
    echo_success(f"Demo graph written to {path}")
