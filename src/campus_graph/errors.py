from __future__ import annotations


class GraphError(Exception):
    """Base class for every error raised by campus_graph."""


class InvalidArgument(GraphError, ValueError):
    """A constructor or option received a value it cannot accept."""


class OutOfRange(GraphError, IndexError):
    """A vertex index falls outside [0, n)."""

    def __init__(self, vertex: int, n: int):
        super().__init__(f"Vertex {vertex} is out of range [0, {n - 1}]")
        self.vertex = vertex
        self.n = n


class IllegalState(GraphError, RuntimeError):
    """A result was queried before its compute entry point ran."""
