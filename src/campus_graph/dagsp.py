from __future__ import annotations

import logging
import operator
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np
from tqdm.auto import tqdm

from .config import progress_enabled
from .errors import IllegalState, OutOfRange
from .graph import DirectedGraph
from .metrics import PerformanceMetrics
from .topo import DFSTopologicalSort

LOGGER = logging.getLogger(__name__)

# working sentinels, kept far from int64 limits so dist[u] + w cannot overflow
_INF = np.iinfo(np.int64).max // 4
_NO_PRED = -1

# what get_distance() reports for a vertex the last run never reached
UNREACHABLE = None


def _vertex_index(vertex: int, n: int) -> int:
    try:
        index = operator.index(vertex)
    except TypeError:
        raise OutOfRange(vertex, n) from None
    if not 0 <= index < n:
        raise OutOfRange(vertex, n)
    return index


@dataclass
class CriticalPath:
    path: List[int] = field(default_factory=list)
    length: int = 0

    @property
    def source(self) -> Optional[int]:
        return self.path[0] if self.path else None

    @property
    def destination(self) -> Optional[int]:
        return self.path[-1] if self.path else None

    def __str__(self) -> str:
        return f"Critical Path: {self.path}, Length: {self.length}"


class DAGPathSolver:
    """Single-source shortest/longest paths by relaxation in topological order.

    The graph must be acyclic. compute_shortest_paths() and
    compute_longest_paths() return False on a cyclic graph and leave no
    distances behind; get_distance() and get_path() raise IllegalState until
    a computation has succeeded.
    """

    def __init__(self, graph: DirectedGraph, metrics: Optional[PerformanceMetrics] = None):
        self.graph = graph
        self.metrics = metrics if metrics is not None else PerformanceMetrics()
        self._topo_order: Optional[List[int]] = None
        self._dist: Optional[np.ndarray] = None
        self._pred: Optional[np.ndarray] = None
        self._unreached = _INF
        self.source: Optional[int] = None
        self.mode: Optional[str] = None

    def _topological_order(self) -> Optional[List[int]]:
        if self._topo_order is None:
            sorter = DFSTopologicalSort(self.graph)
            order = sorter.sort()
            self._topo_order = order if sorter.is_dag() else []
        return self._topo_order or None

    def compute_shortest_paths(self, source: int) -> bool:
        return self._timed_relax(source, longest=False)

    def compute_longest_paths(self, source: int) -> bool:
        return self._timed_relax(source, longest=True)

    def _timed_relax(self, source: int, longest: bool) -> bool:
        self.metrics.start_timer()
        try:
            return self._relax_all(source, longest)
        finally:
            self.metrics.stop_timer()

    def _relax_all(self, source: int, longest: bool) -> bool:
        n = self.graph.vertex_count()
        source = _vertex_index(source, n)
        m = self.metrics

        order = self._topological_order()
        if order is None:
            self._dist = self._pred = None
            self.source = self.mode = None
            LOGGER.info("path computation from %d skipped: graph is not acyclic", source)
            return False

        unreached = -_INF if longest else _INF
        dist = np.full(n, unreached, dtype=np.int64)
        pred = np.full(n, _NO_PRED, dtype=np.int64)
        dist[source] = 0
        m.increment("initializations")

        for u in order:
            du = int(dist[u])
            if du != unreached:
                for e in self.graph.edges_from(u):
                    v = e.destination
                    cand = du + e.weight
                    m.increment("relaxations")
                    better = cand > dist[v] if longest else cand < dist[v]
                    if better:
                        dist[v] = cand
                        pred[v] = u
                        m.increment("distance_updates")
            m.increment("vertices_processed")

        self._dist, self._pred, self._unreached = dist, pred, unreached
        self.source = source
        self.mode = "longest" if longest else "shortest"
        return True

    def _require(self) -> np.ndarray:
        if self._dist is None:
            raise IllegalState("compute_shortest_paths() or compute_longest_paths() must succeed first")
        return self._dist

    def get_distance(self, vertex: int) -> Optional[int]:
        """Distance from the last source, or UNREACHABLE."""
        dist = self._require()
        d = int(dist[_vertex_index(vertex, len(dist))])
        return UNREACHABLE if d == self._unreached else d

    def distances(self) -> List[Optional[int]]:
        self._require()
        return [self.get_distance(v) for v in range(self.graph.vertex_count())]

    def get_path(self, destination: int) -> List[int]:
        """Vertices from the source to `destination`; empty if unreachable."""
        if self.get_distance(destination) is UNREACHABLE:
            return []
        path = []
        cur = operator.index(destination)
        while cur != _NO_PRED:
            path.append(cur)
            cur = int(self._pred[cur])
        path.reverse()
        return path

    def path_labels(self, destination: int) -> List[str]:
        return [self.graph.get_label(v) for v in self.get_path(destination)]

    def find_critical_path(self, progress: Optional[bool] = None) -> CriticalPath:
        """Globally longest path over every (source, destination) pair.

        Runs a longest-path pass from each vertex. Ties keep the first pair
        found scanning sources, then destinations, in increasing index.
        Returns an empty CriticalPath when the graph has no edge-bearing path
        or is not acyclic. The metrics timer spans the whole search.
        """
        n = self.graph.vertex_count()
        if progress is None:
            progress = progress_enabled()

        self.metrics.start_timer()
        try:
            best_len: Optional[int] = None
            best_src = best_dst = -1
            for s in tqdm(range(n), desc="Critical path: longest paths per source", disable=not progress):
                if not self._relax_all(s, longest=True):
                    return CriticalPath()
                dist = self._dist
                for d in range(n):
                    if d == s or dist[d] == self._unreached:
                        continue
                    if best_len is None or dist[d] > best_len:
                        best_len, best_src, best_dst = int(dist[d]), s, d

            if best_len is None:
                return CriticalPath()

            self._relax_all(best_src, longest=True)
        finally:
            self.metrics.stop_timer()
        result = CriticalPath(self.get_path(best_dst), best_len)
        LOGGER.debug("critical path %s -> %s length=%d", best_src, best_dst, best_len)
        return result
