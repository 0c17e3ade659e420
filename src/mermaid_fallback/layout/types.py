"""Layout types shared by the layout engine and renderers."""

from __future__ import annotations

from dataclasses import dataclass, field

from mermaid_fallback.ir.graph import Graph


@dataclass(frozen=True)
class Point:
    """A 2D point in layout coordinates."""

    x: int
    y: int


@dataclass(frozen=True)
class PositionedGraph:
    """A graph plus one position per node: everything renderers need."""

    graph: Graph
    positions: dict[str, Point] = field(default_factory=dict)

    def position(self, node_id: str) -> Point:
        return self.positions[node_id]

    def rows(self) -> list[str]:
        """Node ids sorted top to bottom."""
        return sorted(self.positions, key=lambda node_id: (self.positions[node_id].y, self.positions[node_id].x))
