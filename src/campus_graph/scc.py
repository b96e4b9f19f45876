from __future__ import annotations

import logging
from typing import List, Optional, Tuple

import numpy as np

from .errors import IllegalState
from .graph import DirectedGraph
from .metrics import PerformanceMetrics

LOGGER = logging.getLogger(__name__)


def scc_kosaraju(
    out_adj: List[List[Tuple[int, int]]],
    metrics: Optional[PerformanceMetrics] = None,
) -> Tuple[np.ndarray, List[List[int]]]:
    """Strongly connected components via Kosaraju (iterative).

    Parameters
    ----------
    out_adj:
        adjacency list with weighted edges (weights ignored for SCC).
    metrics:
        optional collector; receives dfs_visits, edge_explorations,
        stack_pushes and graph_reversals counts.

    Returns
    -------
    comp_id:
        np.ndarray of length n mapping node -> component index in [0, m-1].
    comps:
        list of components in discovery order; comps[c] lists its nodes in
        the order the second pass reached them.
    """
    metrics = metrics if metrics is not None else PerformanceMetrics()
    n = len(out_adj)

    visited = np.zeros(n, dtype=bool)
    order: List[int] = []

    # first pass: finishing order, roots taken in increasing index
    for start in range(n):
        if visited[start]:
            continue
        stack = [(start, 0)]
        visited[start] = True
        metrics.increment("dfs_visits")
        while stack:
            u, idx = stack[-1]
            nbrs = out_adj[u]
            if idx < len(nbrs):
                v = int(nbrs[idx][0])
                stack[-1] = (u, idx + 1)
                metrics.increment("edge_explorations")
                if not visited[v]:
                    visited[v] = True
                    metrics.increment("dfs_visits")
                    stack.append((v, 0))
            else:
                stack.pop()
                order.append(u)
                metrics.increment("stack_pushes")

    # transpose
    rev: List[List[int]] = [[] for _ in range(n)]
    for u, nbrs in enumerate(out_adj):
        for v, _ in nbrs:
            rev[int(v)].append(u)
    metrics.increment("graph_reversals")

    # second pass on the transpose, latest finisher first
    comp_id = np.full(n, -1, dtype=np.int32)
    comps: List[List[int]] = []

    for start in reversed(order):
        if comp_id[start] != -1:
            continue
        cid = len(comps)
        members = [start]
        comp_id[start] = cid
        metrics.increment("dfs_visits")
        stack = [(start, 0)]
        while stack:
            u, idx = stack[-1]
            if idx < len(rev[u]):
                v = rev[u][idx]
                stack[-1] = (u, idx + 1)
                metrics.increment("edge_explorations")
                if comp_id[v] == -1:
                    comp_id[v] = cid
                    members.append(v)
                    metrics.increment("dfs_visits")
                    stack.append((v, 0))
            else:
                stack.pop()
        comps.append(members)

    return comp_id, comps


class KosarajuSCC:
    """Two-phase SCC finder: call find_sccs() once, then query."""

    def __init__(self, graph: DirectedGraph, metrics: Optional[PerformanceMetrics] = None):
        self.graph = graph
        self.metrics = metrics if metrics is not None else PerformanceMetrics()
        self._comp_id: Optional[np.ndarray] = None
        self._components: Optional[List[List[int]]] = None

    @property
    def computed(self) -> bool:
        return self._components is not None

    def find_sccs(self) -> List[List[int]]:
        """Partition every vertex into strongly connected components.

        Memoized: repeated calls return the cached partition.
        """
        if self._components is None:
            self.metrics.start_timer()
            self._comp_id, self._components = scc_kosaraju(self.graph.out_adj(), self.metrics)
            self.metrics.stop_timer()
            LOGGER.debug(
                "find_sccs vertices=%d edges=%d components=%d",
                self.graph.vertex_count(),
                self.graph.edge_count(),
                len(self._components),
            )
        return self.components()

    def _require(self) -> List[List[int]]:
        if self._components is None:
            raise IllegalState("find_sccs() must be called before querying components")
        return self._components

    def components(self) -> List[List[int]]:
        return [list(c) for c in self._require()]

    def component_count(self) -> int:
        return len(self._require())

    def component_id(self, vertex: int) -> int:
        """Component index of `vertex`, or -1 if not computed or out of range."""
        if self._comp_id is None or not 0 <= vertex < len(self._comp_id):
            return -1
        return int(self._comp_id[vertex])

    def component_sizes(self) -> List[int]:
        return [len(c) for c in self._require()]

    def strongly_connected(self, v1: int, v2: int) -> bool:
        self._require()
        cid = self.component_id(v1)
        return cid != -1 and cid == self.component_id(v2)

    def component_labels(self) -> List[List[str]]:
        return [[self.graph.get_label(v) for v in comp] for comp in self._require()]
