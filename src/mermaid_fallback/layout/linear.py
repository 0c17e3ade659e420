"""Linear layout: one column, one row per node, in discovery order."""

from __future__ import annotations

from mermaid_fallback.config import PipelineConfig
from mermaid_fallback.ir.graph import Graph
from mermaid_fallback.layout.types import Point, PositionedGraph


class LinearLayout:
    """Places nodes top to bottom at a fixed column.

    Edges do not influence placement; the result only depends on the node
    order of the graph.
    """

    def __init__(self, config: PipelineConfig | None = None) -> None:
        self.config = config or PipelineConfig()

    def layout(self, graph: Graph) -> PositionedGraph:
        cfg = self.config
        positions = {
            node.id: Point(x=cfg.node_x, y=cfg.origin_y + index * cfg.row_height)
            for index, node in enumerate(graph.nodes)
        }
        return PositionedGraph(graph=graph, positions=positions)
