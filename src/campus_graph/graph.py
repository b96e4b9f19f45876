from __future__ import annotations

import operator
from dataclasses import dataclass
from typing import Dict, List, Tuple

import numpy as np
from scipy import sparse

from .config import DEFAULT_WEIGHT, LABEL_PREFIX
from .errors import InvalidArgument, OutOfRange


@dataclass(frozen=True)
class Edge:
    destination: int
    weight: int = DEFAULT_WEIGHT

    def __str__(self) -> str:
        return f"→{self.destination}({self.weight})"


class DirectedGraph:
    """Weighted directed graph over the dense vertex set 0..n-1.

    Outgoing edges keep their insertion order, and that order is what every
    traversal in this package follows. Parallel edges and self-loops are
    allowed. Labels are display metadata only.
    """

    def __init__(self, vertices: int):
        try:
            n = operator.index(vertices)
        except TypeError:
            raise InvalidArgument(f"Number of vertices must be an integer, got {vertices!r}") from None
        if n <= 0:
            raise InvalidArgument("Number of vertices must be positive")
        self._n = n
        self._adj: List[List[Edge]] = [[] for _ in range(self._n)]
        self._labels: Dict[int, str] = {}

    # construction

    def add_edge(self, source: int, destination: int, weight: int = DEFAULT_WEIGHT) -> None:
        source = self._validate(source)
        destination = self._validate(destination)
        self._adj[source].append(Edge(destination, int(weight)))

    def set_label(self, vertex: int, label: str) -> None:
        vertex = self._validate(vertex)
        self._labels[vertex] = str(label)

    def get_label(self, vertex: int) -> str:
        vertex = self._validate(vertex)
        return self._labels.get(vertex, f"{LABEL_PREFIX}{vertex}")

    # queries

    def vertex_count(self) -> int:
        return self._n

    def edge_count(self) -> int:
        return sum(len(edges) for edges in self._adj)

    def edges_from(self, vertex: int) -> List[Edge]:
        """Outgoing edges of `vertex` as a fresh list."""
        vertex = self._validate(vertex)
        return list(self._adj[vertex])

    def out_adj(self) -> List[List[Tuple[int, int]]]:
        """Adjacency list of (destination, weight) pairs, one list per vertex."""
        return [[(e.destination, e.weight) for e in edges] for edges in self._adj]

    def has_edge(self, source: int, destination: int) -> bool:
        source = self._validate(source)
        destination = self._validate(destination)
        return any(e.destination == destination for e in self._adj[source])

    def in_degree(self, vertex: int) -> int:
        vertex = self._validate(vertex)
        return sum(1 for edges in self._adj for e in edges if e.destination == vertex)

    def out_degree(self, vertex: int) -> int:
        vertex = self._validate(vertex)
        return len(self._adj[vertex])

    def reverse(self) -> "DirectedGraph":
        """Transpose graph with the same weights and labels."""
        rev = DirectedGraph(self._n)
        rev._labels = dict(self._labels)
        for u, edges in enumerate(self._adj):
            for e in edges:
                rev._adj[e.destination].append(Edge(u, e.weight))
        return rev

    # numeric exports

    def edge_arrays(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Edges as aligned (src, dst, weight) arrays in traversal order."""
        m = self.edge_count()
        src = np.empty(m, dtype=np.int32)
        dst = np.empty(m, dtype=np.int32)
        w = np.empty(m, dtype=np.int64)
        i = 0
        for u, edges in enumerate(self._adj):
            for e in edges:
                src[i], dst[i], w[i] = u, e.destination, e.weight
                i += 1
        return src, dst, w

    def to_csr(self) -> sparse.csr_matrix:
        """Sparse n x n adjacency matrix; parallel edges are summed."""
        src, dst, w = self.edge_arrays()
        return sparse.csr_matrix((w, (src, dst)), shape=(self._n, self._n), dtype=np.int64)

    def _validate(self, vertex: int) -> int:
        """Return `vertex` as a plain int; non-integral indices are out of range."""
        try:
            index = operator.index(vertex)
        except TypeError:
            raise OutOfRange(vertex, self._n) from None
        if not 0 <= index < self._n:
            raise OutOfRange(vertex, self._n)
        return index

    def __repr__(self) -> str:
        return f"DirectedGraph(vertices={self._n}, edges={self.edge_count()})"

    def __str__(self) -> str:
        lines = [f"DirectedGraph{{vertices={self._n}, edges={self.edge_count()}}}"]
        for u, edges in enumerate(self._adj):
            if edges:
                succ = ", ".join(f"{self.get_label(e.destination)}(w={e.weight})" for e in edges)
            else:
                succ = "∅"
            lines.append(f"{self.get_label(u)}: {succ}")
        return "\n".join(lines)
