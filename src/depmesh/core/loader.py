"""
Graph Loading.

Reads GraphData from JSON files or plain dictionaries. This is the only
place where input is validated; everything downstream assumes well-typed
data.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

from pydantic import ValidationError

from .exceptions import GraphLoadError
from .types import GraphData

logger = logging.getLogger(__name__)

# File names probed when a directory is given
DEFAULT_GRAPH_FILES = ("graph.json", ".depmesh/graph.json")


def load_graph_dict(data: Dict[str, Any], source: str = "<dict>") -> GraphData:
    """
    Build GraphData from a dictionary.

    Expected format:
    {
        "nodes": [{"id": "...", "group": "...", "label": "...", ...}, ...],
        "links": [{"source": "...", "target": "...", "type": "..."}, ...]
    }

    "edges" is accepted in place of "links", as are "source_id"/"target_id".
    """
    if not isinstance(data, dict):
        raise GraphLoadError(source, "top-level JSON value must be an object")
    try:
        graph = GraphData.model_validate(data)
    except ValidationError as e:
        raise GraphLoadError(source, str(e)) from e

    logger.debug(f"Loaded {graph.node_count} nodes and {graph.link_count} links from {source}")
    return graph


def resolve_graph_path(path: Union[str, Path]) -> Path:
    """Resolve a directory to the graph file inside it."""
    graph_path = Path(path)
    if graph_path.is_dir():
        for name in DEFAULT_GRAPH_FILES:
            candidate = graph_path / name
            if candidate.exists():
                return candidate
        raise GraphLoadError(str(path), "no graph.json found in directory")
    return graph_path


def load_graph_file(path: Union[str, Path]) -> GraphData:
    """
    Load GraphData from a JSON file or a directory containing graph.json.

    Raises:
        GraphLoadError: If the file is missing, not JSON, or malformed.
    """
    graph_path = resolve_graph_path(path)
    if not graph_path.exists():
        raise GraphLoadError(str(graph_path), "file not found")

    try:
        data = json.loads(graph_path.read_text())
    except (OSError, json.JSONDecodeError) as e:
        raise GraphLoadError(str(graph_path), str(e)) from e

    return load_graph_dict(data, source=str(graph_path))
