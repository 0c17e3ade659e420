"""Intermediate representation: the extracted node/edge graph."""

from mermaid_fallback.ir.graph import Graph, GraphEdge, GraphNode

__all__ = [
    "Graph",
    "GraphEdge",
    "GraphNode",
]
