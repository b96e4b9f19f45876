"""Small built-in graphs for demos and smoke runs."""

from __future__ import annotations

from typing import Callable, Dict

from .errors import InvalidArgument
from .graph import DirectedGraph


def simple_dag() -> DirectedGraph:
    g = DirectedGraph(6)
    for v, label in enumerate(["Start", "Task1", "Task2", "Task3", "Task4", "End"]):
        g.set_label(v, label)
    g.add_edge(0, 1, 2)
    g.add_edge(0, 2, 3)
    g.add_edge(1, 3, 4)
    g.add_edge(2, 3, 1)
    g.add_edge(3, 4, 2)
    g.add_edge(4, 5, 3)
    return g


def graph_with_cycle() -> DirectedGraph:
    g = DirectedGraph(4)
    for v, label in enumerate("ABCD"):
        g.set_label(v, label)
    g.add_edge(0, 1, 2)
    g.add_edge(1, 2, 3)
    g.add_edge(2, 0, 1)
    g.add_edge(2, 3, 2)
    return g


def complex_dag() -> DirectedGraph:
    g = DirectedGraph(10)
    for v in range(10):
        g.set_label(v, f"N{v}")
    for u, v, w in [
        (0, 1, 3), (0, 2, 2), (1, 3, 4), (1, 4, 5), (2, 4, 2), (2, 5, 3), (3, 6, 2),
        (4, 6, 1), (4, 7, 4), (5, 7, 2), (6, 8, 3), (7, 8, 2), (7, 9, 5), (8, 9, 1),
    ]:
        g.add_edge(u, v, w)
    return g


SAMPLES: Dict[str, Callable[[], DirectedGraph]] = {
    "simple_dag": simple_dag,
    "graph_with_cycle": graph_with_cycle,
    "complex_dag": complex_dag,
}


def sample_graph(kind: str) -> DirectedGraph:
    try:
        return SAMPLES[kind]()
    except KeyError:
        raise InvalidArgument(f"Unknown graph type: {kind!r}") from None
