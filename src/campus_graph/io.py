"""JSON graph files.

Format::

    {
      "vertices": 5,
      "edges": [{"from": 0, "to": 1, "weight": 3}, ...],
      "labels": {"0": "TaskA", ...}        # optional
    }

A missing edge weight defaults to 1.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Union

from .config import DEFAULT_WEIGHT
from .errors import GraphError, InvalidArgument
from .graph import DirectedGraph

LOGGER = logging.getLogger(__name__)

PathLike = Union[str, Path]


def graph_from_dict(doc: dict) -> DirectedGraph:
    try:
        graph = DirectedGraph(doc["vertices"])
        for edge in doc.get("edges", []):
            graph.add_edge(edge["from"], edge["to"], int(edge.get("weight", DEFAULT_WEIGHT)))
        for key, label in (doc.get("labels") or {}).items():
            graph.set_label(int(key), str(label))
    except GraphError:
        raise
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise InvalidArgument(f"Invalid graph document: {exc}") from exc
    return graph


def load_graph(path: PathLike) -> DirectedGraph:
    path = Path(path)
    try:
        doc = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise InvalidArgument(f"Invalid JSON format in {path}: {exc}") from exc
    if not isinstance(doc, dict):
        raise InvalidArgument(f"Invalid graph document in {path}: top level must be an object")
    return graph_from_dict(doc)


def graph_to_dict(graph: DirectedGraph) -> dict:
    edges = [
        {"from": u, "to": e.destination, "weight": e.weight}
        for u in range(graph.vertex_count())
        for e in graph.edges_from(u)
    ]
    labels = {str(v): graph.get_label(v) for v in range(graph.vertex_count())}
    return {"vertices": graph.vertex_count(), "edges": edges, "labels": labels}


def dump_graph(graph: DirectedGraph, path: PathLike) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(graph_to_dict(graph), indent=2), encoding="utf-8")
    return path


def load_graphs(directory: PathLike) -> Dict[str, DirectedGraph]:
    """Every *.json under `directory`, keyed by file stem in name order.

    Files that fail to load are logged and skipped.
    """
    directory = Path(directory)
    graphs: Dict[str, DirectedGraph] = {}
    if not directory.is_dir():
        return graphs
    for path in sorted(directory.glob("*.json")):
        try:
            graphs[path.stem] = load_graph(path)
        except (GraphError, OSError) as exc:
            LOGGER.error("Failed to load graph from %s: %s", path, exc)
    return graphs
