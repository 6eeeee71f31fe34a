"""
CLI Utilities - Shared helper functions for command line operations.

This module provides formatted printing, logging setup and the graph and
config loading used by every command.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional

import click

from ..config import EngineConfig, load_config
from ..core.exceptions import ConfigError, GraphLoadError
from ..core.graph import assign_levels
from ..core.loader import load_graph_file
from ..core.projection import available_groups
from ..core.types import GraphData


def echo_success(message: str) -> None:
    """
    Print a success message with a green checkmark.

    Args:
        message (str): The message to display.
    """
    click.echo(click.style(f"✅ {message}", fg="green"))


def echo_error(message: str) -> None:
    """
    Print an error message with a red cross.

    Args:
        message (str): The error message to display.
    """
    click.echo(click.style(f"❌ {message}", fg="red"), err=True)


def echo_warning(message: str) -> None:
    """
    Print a warning message with a yellow alert symbol.

    Args:
        message (str): The warning message to display.
    """
    click.echo(click.style(f"⚠️  {message}", fg="yellow"), err=True)


def echo_info(message: str) -> None:
    """
    Print an informational message, dimmed.

    Args:
        message (str): The info message to display.
    """
    click.echo(click.style(f"   {message}", dim=True))


def configure_logging(verbose: bool) -> None:
    """Route library logging to stderr; DEBUG with --verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(message)s",
        datefmt="[%X]",
    )


def load_graph(graph_file: str, auto_levels: bool = False) -> Optional[GraphData]:
    """
    Load GraphData from a file or directory path.

    Args:
        graph_file (str): Path to a JSON file or a directory containing graph.json.
        auto_levels (bool): Derive process levels from the link structure.

    Returns:
        Optional[GraphData]: The loaded graph, or None if loading failed.
    """
    try:
        graph = load_graph_file(graph_file)
    except GraphLoadError as e:
        echo_error(str(e))
        click.echo("Run 'depmesh demo -o graph.json' to create a sample graph.", err=True)
        return None

    if auto_levels:
        graph = assign_levels(graph)
    return graph


def load_engine_config(path: Optional[Path] = None) -> Optional[EngineConfig]:
    """Load .depmesh/config.yaml, reporting errors instead of raising."""
    try:
        return load_config(path)
    except ConfigError as e:
        echo_error(str(e))
        return None


def check_filters(graph: GraphData, tags: Iterable[str]) -> Optional[List[str]]:
    """
    Validate --filter tags against the groups present in the graph.

    Unknown tags are reported and dropped. Returns None when no tags were
    given, meaning "every group".
    """
    tags = list(tags)
    if not tags:
        return None
    present = set(available_groups(graph))
    for tag in tags:
        if tag not in present:
            echo_warning(f"Group '{tag}' does not appear in the graph; ignoring it")
    return [tag for tag in tags if tag in present]
