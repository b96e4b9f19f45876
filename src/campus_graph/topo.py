"""Topological ordering with cycle detection.

Two interchangeable strategies share one contract: sort() returns every vertex
in an order where each edge points forward, or an empty list when the graph
has a cycle. Neither returns a partial order.

Ties are broken by vertex index under each strategy's own rule, so the two
may disagree on graphs with more than one valid order.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import List, Optional

import numpy as np

from .errors import IllegalState
from .graph import DirectedGraph
from .metrics import PerformanceMetrics

LOGGER = logging.getLogger(__name__)


class TopologicalSorter:
    strategy = "abstract"

    def __init__(self, graph: DirectedGraph, metrics: Optional[PerformanceMetrics] = None):
        self.graph = graph
        self.metrics = metrics if metrics is not None else PerformanceMetrics()
        self._order: Optional[List[int]] = None
        self._is_dag = False

    def sort(self) -> List[int]:
        self.metrics.start_timer()
        order = self._run()
        self._is_dag = order is not None
        self._order = order if order is not None else []
        if not self._is_dag:
            self.metrics.increment("cycle_detected")
            LOGGER.info("%s sort: cycle detected in graph with %d vertices", self.strategy, self.graph.vertex_count())
        self.metrics.stop_timer()
        LOGGER.debug("%s sort vertices=%d is_dag=%s", self.strategy, self.graph.vertex_count(), self._is_dag)
        return list(self._order)

    def _run(self) -> Optional[List[int]]:
        """Return the full order, or None when a cycle exists."""
        raise NotImplementedError

    def _require(self) -> List[int]:
        if self._order is None:
            raise IllegalState("sort() must be called first")
        return self._order

    def order(self) -> List[int]:
        return list(self._require())

    def is_dag(self) -> bool:
        self._require()
        return self._is_dag

    def order_labels(self) -> List[str]:
        return [self.graph.get_label(v) for v in self._require()]

    def verify_order(self) -> bool:
        """Re-check every edge against the positions in the computed order."""
        order = self._require()
        if not self._is_dag or len(order) != self.graph.vertex_count():
            return False
        position = np.full(self.graph.vertex_count(), -1, dtype=np.int64)
        for i, v in enumerate(order):
            position[v] = i
        for u in range(self.graph.vertex_count()):
            for e in self.graph.edges_from(u):
                if position[u] >= position[e.destination]:
                    return False
        return True


class KahnTopologicalSort(TopologicalSorter):
    """Queue-based ordering driven by in-degrees."""

    strategy = "kahn"

    def _run(self) -> Optional[List[int]]:
        n = self.graph.vertex_count()
        m = self.metrics
        in_degree = np.zeros(n, dtype=np.int64)
        for u in range(n):
            for e in self.graph.edges_from(u):
                in_degree[e.destination] += 1
                m.increment("in_degree_calculations")

        queue = deque()
        for v in range(n):
            if in_degree[v] == 0:
                queue.append(v)
                m.increment("queue_adds")

        order: List[int] = []
        while queue:
            u = queue.popleft()
            order.append(u)
            m.increment("queue_removals")
            m.increment("vertices_processed")
            for e in self.graph.edges_from(u):
                v = e.destination
                in_degree[v] -= 1
                m.increment("in_degree_updates")
                if in_degree[v] == 0:
                    queue.append(v)
                    m.increment("queue_adds")

        if len(order) < n:
            return None
        return order


class DFSTopologicalSort(TopologicalSorter):
    """Reverse post-order of an iterative DFS; a back edge aborts the run."""

    strategy = "dfs"

    def _run(self) -> Optional[List[int]]:
        n = self.graph.vertex_count()
        m = self.metrics
        adj = self.graph.out_adj()
        visited = np.zeros(n, dtype=bool)
        on_path = np.zeros(n, dtype=bool)
        finished: List[int] = []

        for start in range(n):
            if visited[start]:
                continue
            stack = [(start, 0)]
            visited[start] = on_path[start] = True
            m.increment("dfs_visits")
            while stack:
                u, idx = stack[-1]
                nbrs = adj[u]
                if idx < len(nbrs):
                    v = nbrs[idx][0]
                    stack[-1] = (u, idx + 1)
                    m.increment("edge_explorations")
                    if not visited[v]:
                        visited[v] = on_path[v] = True
                        m.increment("dfs_visits")
                        stack.append((v, 0))
                    elif on_path[v]:
                        m.increment("back_edges_found")
                        return None
                else:
                    stack.pop()
                    on_path[u] = False
                    finished.append(u)
                    m.increment("stack_pushes")

        m.add("stack_pops", len(finished))
        return finished[::-1]


def has_cycle(graph: DirectedGraph) -> bool:
    """DFS back-edge check, independent of any SCC result."""
    sorter = DFSTopologicalSort(graph)
    sorter.sort()
    return not sorter.is_dag()
