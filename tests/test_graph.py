"""Tests for mermaid_fallback.ir.graph."""

import pytest

from mermaid_fallback.ir.graph import Graph, GraphEdge, GraphNode


def make(nodes, edges=()):
    return Graph.from_parts(
        [GraphNode(id=n, label=n) for n in nodes],
        [GraphEdge(id=f"e{i}", source_id=s, target_id=t) for i, (s, t) in enumerate(edges)],
    )


class TestFromParts:
    def test_nodes_in_insertion_order(self):
        g = make(["C", "A", "B"])
        assert [n.id for n in g.nodes] == ["C", "A", "B"]
        assert g.node_count() == 3
        assert len(g) == 3

    def test_first_node_per_id_wins(self):
        g = Graph.from_parts([GraphNode("A", "first"), GraphNode("A", "second")])
        assert g.node_count() == 1
        assert g.node("A").label == "first"

    def test_dangling_edges_dropped(self):
        g = make(["A", "B"], [("A", "B"), ("A", "Z"), ("Y", "B")])
        assert g.edge_count() == 1
        assert g.edges[0].target_id == "B"

    def test_duplicate_edge_ids_dropped(self):
        edges = [GraphEdge("e", "A", "B"), GraphEdge("e", "B", "A")]
        g = Graph.from_parts([GraphNode("A", "A"), GraphNode("B", "B")], edges)
        assert g.edge_count() == 1

    def test_parallel_edges_kept(self):
        g = make(["A", "B"], [("A", "B"), ("A", "B")])
        assert g.edge_count() == 2
        assert g.digraph.number_of_edges("A", "B") == 2

    def test_frozen(self):
        g = make(["A"])
        with pytest.raises(Exception):
            g.digraph.add_node("B")


class TestQueries:
    def test_empty(self):
        g = Graph.empty()
        assert g.is_empty()
        assert g.nodes == ()
        assert g.edges == ()

    def test_contains(self):
        g = make(["A"])
        assert "A" in g
        assert "B" not in g

    def test_repr(self):
        assert repr(make(["A", "B"], [("A", "B")])) == "Graph(nodes=2, edges=1)"
