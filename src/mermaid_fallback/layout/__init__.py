"""Layout engine public API."""

from __future__ import annotations

from mermaid_fallback.config import PipelineConfig
from mermaid_fallback.ir.graph import Graph
from mermaid_fallback.layout.linear import LinearLayout
from mermaid_fallback.layout.types import Point, PositionedGraph

__all__ = [
    "LinearLayout",
    "Point",
    "PositionedGraph",
    "layout",
]


def layout(graph: Graph, config: PipelineConfig | None = None) -> PositionedGraph:
    """Assign every node of ``graph`` a position. Total; an empty graph gives no positions."""
    return LinearLayout(config).layout(graph)
