from __future__ import annotations

from typing import Iterable, Tuple

import numpy as np
import pytest

from campus_graph.graph import DirectedGraph


def make_graph(n: int, edges: Iterable[Tuple[int, ...]]) -> DirectedGraph:
    g = DirectedGraph(n)
    for e in edges:
        g.add_edge(*e)
    return g


def random_graph(n: int, m: int, seed: int) -> DirectedGraph:
    rng = np.random.default_rng(seed)
    g = DirectedGraph(n)
    for u, v, w in zip(rng.integers(0, n, m), rng.integers(0, n, m), rng.integers(1, 10, m)):
        g.add_edge(int(u), int(v), int(w))
    return g


def random_dag(n: int, m: int, seed: int) -> DirectedGraph:
    """Random DAG whose hidden order is a shuffled permutation of 0..n-1."""
    rng = np.random.default_rng(seed)
    perm = rng.permutation(n)
    g = DirectedGraph(n)
    for _ in range(m):
        a, b = sorted(rng.choice(n, size=2, replace=False))
        g.add_edge(int(perm[a]), int(perm[b]), int(rng.integers(-3, 10)))
    return g


def reachable(g: DirectedGraph, s: int) -> set:
    seen = {s}
    stack = [s]
    while stack:
        u = stack.pop()
        for e in g.edges_from(u):
            if e.destination not in seen:
                seen.add(e.destination)
                stack.append(e.destination)
    return seen


@pytest.fixture
def weighted_dag() -> DirectedGraph:
    return make_graph(4, [(0, 1, 2), (0, 2, 4), (1, 2, 1), (1, 3, 4), (2, 3, 2)])


@pytest.fixture
def three_cycle() -> DirectedGraph:
    return make_graph(3, [(0, 1), (1, 2), (2, 0)])
