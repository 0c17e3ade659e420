"""ASCII/Unicode text renderer for positioned graphs.

Nodes are stacked top to bottom in layout order as boxes of one common width.
An edge between vertically adjacent boxes is a straight connector below the
source; every other edge (skips, back edges, self-loops) gets its own lane to
the right of the boxes:

    ┌───────┐
    │ Start │
    └───┬───┘
        │
        ▼
    ┌───────┐
    │  End  ├─┐
    └───────┘ │
      ...
"""

from __future__ import annotations

from mermaid_fallback.ir.graph import GraphEdge
from mermaid_fallback.layout.types import PositionedGraph
from mermaid_fallback.renderers.canvas import Canvas
from mermaid_fallback.renderers.charset import CharSet

NODE_HEIGHT = 3
V_GAP = 3
LANE_GAP = 2


class AsciiRenderer:
    """ASCII/Unicode text renderer."""

    def __init__(self, unicode: bool = True, padding: int = 1) -> None:
        self.unicode = unicode
        self.padding = padding

    def render(self, positioned: PositionedGraph) -> str:
        order = positioned.rows()
        if not order:
            return ""
        graph = positioned.graph
        row_of = {node_id: i for i, node_id in enumerate(order)}

        labels = {node_id: graph.node(node_id).label for node_id in order}
        box_width = max(len(label) for label in labels.values()) + 2 * self.padding + 2

        adjacent: list[GraphEdge] = []
        lanes: list[GraphEdge] = []
        for edge in graph.edges:
            if row_of[edge.target_id] == row_of[edge.source_id] + 1:
                adjacent.append(edge)
            else:
                lanes.append(edge)

        width = box_width + LANE_GAP * len(lanes) + 1 if lanes else box_width
        height = len(order) * (NODE_HEIGHT + V_GAP) - V_GAP
        canvas = Canvas(width, height, CharSet.Unicode if self.unicode else CharSet.Ascii)

        for node_id in order:
            _paint_node(canvas, _top(row_of[node_id]), box_width, labels[node_id])

        arrows: list[tuple[int, int, str]] = []
        for edge in adjacent:
            arrows.extend(_paint_adjacent(canvas, edge, _top(row_of[edge.source_id]), box_width))
        for k, edge in enumerate(lanes):
            lane_col = box_width + LANE_GAP * (k + 1)
            arrows.extend(
                _paint_lane(canvas, edge, _top(row_of[edge.source_id]), _top(row_of[edge.target_id]), box_width, lane_col)
            )

        # arrowheads go last so no connector runs over them
        for col, row, ch in arrows:
            canvas.set(col, row, ch)
        return canvas.to_string()


def _top(row: int) -> int:
    return row * (NODE_HEIGHT + V_GAP)


def _paint_node(canvas: Canvas, top: int, box_width: int, label: str) -> None:
    canvas.draw_box(0, top, box_width, NODE_HEIGHT)
    pad = max(0, box_width - 2 - len(label)) // 2
    canvas.write_str(1 + pad, top + 1, label)


def _paint_adjacent(canvas: Canvas, edge: GraphEdge, source_top: int, box_width: int) -> list[tuple[int, int, str]]:
    center = box_width // 2
    bc = canvas.chars
    first = source_top + NODE_HEIGHT
    last = source_top + NODE_HEIGHT + V_GAP - 1

    canvas.add_arm(center, first - 1, down=True)
    canvas.vline(center, first, last, bc.vertical_for(edge.edge_type))

    arrows = []
    if edge.edge_type.directed:
        arrows.append((center, last, bc.arrow_down))
    if edge.edge_type.token.startswith("<"):
        arrows.append((center, first, bc.arrow_up))
    return arrows


def _paint_lane(
    canvas: Canvas,
    edge: GraphEdge,
    source_top: int,
    target_top: int,
    box_width: int,
    lane_col: int,
) -> list[tuple[int, int, str]]:
    exit_row = source_top + 1
    # a self-loop re-enters one row lower than it leaves
    entry_row = target_top + 2 if edge.source_id == edge.target_id else target_top + 1
    downward = entry_row > exit_row

    canvas.add_arm(box_width - 1, exit_row, right=True)
    canvas.hline(exit_row, box_width, lane_col - 1)
    canvas.hline(entry_row, box_width, lane_col - 1)
    lo, hi = sorted((exit_row, entry_row))
    if hi - lo > 1:
        canvas.vline(lane_col, lo + 1, hi - 1)
    canvas.add_arm(lane_col, exit_row, left=True, down=downward, up=not downward)
    canvas.add_arm(lane_col, entry_row, left=True, up=downward, down=not downward)

    bc = canvas.chars
    arrows = []
    if edge.edge_type.directed:
        arrows.append((box_width, entry_row, bc.arrow_left))
    if edge.edge_type.token.startswith("<"):
        arrows.append((box_width, exit_row, bc.arrow_left))
    return arrows
