"""Condensation DAG built from an SCC partition.

Each strongly connected component becomes one vertex; every cross-component
edge of the original graph contributes to exactly one condensation edge per
(source component, destination component) pair. Intra-component edges are
dropped, so the result is acyclic whenever the partition is correct.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional, Tuple

from .config import COMPONENT_LABEL_PREFIX
from .errors import IllegalState, InvalidArgument
from .graph import DirectedGraph
from .scc import KosarajuSCC
from .topo import has_cycle

LOGGER = logging.getLogger(__name__)

# how parallel cross-component edges combine into one weight
WEIGHT_POLICIES: Dict[str, Callable[[int, int], int]] = {
    "first": lambda kept, new: kept,
    "max": max,
    "min": min,
    "sum": lambda kept, new: kept + new,
}


class CondensationBuilder:
    def __init__(self, graph: DirectedGraph, scc: KosarajuSCC, weight_policy: str = "first"):
        if weight_policy not in WEIGHT_POLICIES:
            raise InvalidArgument(
                f"Unknown weight policy {weight_policy!r}; expected one of {sorted(WEIGHT_POLICIES)}"
            )
        self.graph = graph
        self.scc = scc
        self.weight_policy = weight_policy
        self._condensation: Optional[DirectedGraph] = None
        self._acyclic: Optional[bool] = None

    def build_condensation(self) -> DirectedGraph:
        components = self.scc.find_sccs()
        combine = WEIGHT_POLICIES[self.weight_policy]

        cond = DirectedGraph(len(components))
        for cid, members in enumerate(components):
            cond.set_label(cid, f"{COMPONENT_LABEL_PREFIX}{cid}{self._format_members(members)}")

        # dict preserves first-encounter order of component pairs
        weights: Dict[Tuple[int, int], int] = {}
        for u in range(self.graph.vertex_count()):
            cu = self.scc.component_id(u)
            for e in self.graph.edges_from(u):
                cv = self.scc.component_id(e.destination)
                if cu == cv:
                    continue
                key = (cu, cv)
                if key in weights:
                    weights[key] = combine(weights[key], e.weight)
                else:
                    weights[key] = e.weight

        for (cu, cv), w in weights.items():
            cond.add_edge(cu, cv, w)

        self._condensation = cond
        self._acyclic = not has_cycle(cond)
        if not self._acyclic:
            LOGGER.warning("condensation of %r contains a cycle; SCC partition is inconsistent", self.graph)
        LOGGER.debug(
            "build_condensation components=%d cross_edges=%d policy=%s",
            cond.vertex_count(),
            cond.edge_count(),
            self.weight_policy,
        )
        return cond

    def _require(self) -> DirectedGraph:
        if self._condensation is None:
            raise IllegalState("build_condensation() must be called first")
        return self._condensation

    @property
    def condensation(self) -> DirectedGraph:
        return self._require()

    def is_acyclic(self) -> bool:
        """Result of an independent DFS cycle check on the built condensation."""
        self._require()
        return bool(self._acyclic)

    def component_for_vertex(self, vertex: int) -> int:
        self._require()
        return self.scc.component_id(vertex)

    def component_vertices(self, component: int) -> List[int]:
        self._require()
        components = self.scc.components()
        if 0 <= component < len(components):
            return components[component]
        return []

    def statistics(self) -> dict:
        cond = self._require()
        return {
            "original_vertices": self.graph.vertex_count(),
            "original_edges": self.graph.edge_count(),
            "condensation_vertices": cond.vertex_count(),
            "condensation_edges": cond.edge_count(),
            "compression_ratio": 100.0 * cond.vertex_count() / self.graph.vertex_count(),
            "is_acyclic": self.is_acyclic(),
        }

    def _format_members(self, members: List[int]) -> str:
        if len(members) <= 3:
            return "[" + ",".join(self.graph.get_label(v) for v in members) + "]"
        return f"[{len(members)} vertices]"

    def __str__(self) -> str:
        cond = self._require()
        lines = ["Condensation Graph:", str(cond), "", "Statistics:"]
        for key, value in self.statistics().items():
            if key == "compression_ratio":
                value = f"{value:.2f}%"
            lines.append(f"  {key}: {value}")
        return "\n".join(lines)
