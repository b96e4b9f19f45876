"""Dependency-graph analysis for scheduling.

This package provides a minimal implementation of:
- a weighted directed graph store with transpose and numeric exports,
- SCC detection via iterative Kosaraju,
- condensation of SCCs into an acyclic quotient graph,
- topological ordering (Kahn and DFS) with cycle detection,
- shortest/longest paths and the critical path over a DAG.
"""

from .errors import GraphError, InvalidArgument, OutOfRange, IllegalState
from .graph import DirectedGraph, Edge
from .metrics import PerformanceMetrics
from .scc import KosarajuSCC, scc_kosaraju
from .condensation import CondensationBuilder
from .topo import KahnTopologicalSort, DFSTopologicalSort, has_cycle
from .dagsp import DAGPathSolver, CriticalPath, UNREACHABLE
from .io import load_graph, load_graphs, dump_graph, graph_to_dict
from .pipeline import analyze_graph, reports_frame

__all__ = [
    "GraphError",
    "InvalidArgument",
    "OutOfRange",
    "IllegalState",
    "DirectedGraph",
    "Edge",
    "PerformanceMetrics",
    "KosarajuSCC",
    "scc_kosaraju",
    "CondensationBuilder",
    "KahnTopologicalSort",
    "DFSTopologicalSort",
    "has_cycle",
    "DAGPathSolver",
    "CriticalPath",
    "UNREACHABLE",
    "load_graph",
    "load_graphs",
    "dump_graph",
    "graph_to_dict",
    "analyze_graph",
    "reports_frame",
]
