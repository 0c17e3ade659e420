"""Tests for mermaid_fallback.layout."""

from mermaid_fallback.config import PipelineConfig
from mermaid_fallback.ir.graph import Graph, GraphEdge, GraphNode
from mermaid_fallback.layout import LinearLayout, Point, layout


def chain(n):
    ids = [f"N{i}" for i in range(n)]
    return Graph.from_parts(
        [GraphNode(i, i) for i in ids],
        [GraphEdge(f"e{k}", ids[k], ids[k + 1]) for k in range(n - 1)],
    )


def test_empty_graph_has_no_positions():
    positioned = layout(Graph.empty())
    assert positioned.positions == {}
    assert positioned.rows() == []


def test_one_position_per_node():
    positioned = layout(chain(5))
    assert len(positioned.positions) == 5


def test_fixed_column_and_rows():
    positioned = layout(chain(3))
    assert positioned.position("N0") == Point(250, 50)
    assert positioned.position("N1") == Point(250, 170)
    assert positioned.position("N2") == Point(250, 290)


def test_y_strictly_increasing_in_discovery_order():
    g = Graph.from_parts([GraphNode("Z", "z"), GraphNode("A", "a"), GraphNode("M", "m")])
    positioned = layout(g)
    ys = [positioned.position(n.id).y for n in g.nodes]
    assert ys == sorted(ys)
    assert len(set(ys)) == len(ys)
    assert positioned.rows() == ["Z", "A", "M"]


def test_edges_do_not_change_placement():
    nodes = [GraphNode("A", "A"), GraphNode("B", "B")]
    plain = layout(Graph.from_parts(nodes))
    back = layout(Graph.from_parts(nodes, [GraphEdge("e", "B", "A")]))
    assert plain.positions == back.positions


def test_deterministic():
    g = chain(4)
    assert layout(g).positions == layout(g).positions


def test_custom_config():
    cfg = PipelineConfig(node_x=10, origin_y=0, row_height=5)
    positioned = LinearLayout(cfg).layout(chain(2))
    assert positioned.position("N1") == Point(10, 5)
