"""Graph IR: the node/edge graph recovered by lenient extraction.

Wraps a frozen networkx MultiDiGraph. Node insertion order is the discovery
order and is what the layout uses for placement; edges keep their own
insertion-ordered tuple because a multigraph iterates them grouped by source.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

import networkx as nx

from mermaid_fallback.types import EdgeType


@dataclass(frozen=True)
class GraphNode:
    id: str
    label: str


@dataclass(frozen=True)
class GraphEdge:
    id: str
    source_id: str
    target_id: str
    edge_type: EdgeType = EdgeType.Arrow


class Graph:
    """An immutable node/edge graph.

    Build one with ``Graph.from_parts``; edges whose endpoints are not nodes of
    the graph are dropped there, never raised.
    """

    def __init__(self, digraph: nx.MultiDiGraph, edges: tuple[GraphEdge, ...]) -> None:
        self.digraph = digraph
        self._edges = edges

    @classmethod
    def from_parts(cls, nodes: Iterable[GraphNode], edges: Iterable[GraphEdge] = ()) -> Graph:
        """Build a Graph; first node per id wins, dangling edges are dropped."""
        digraph: nx.MultiDiGraph = nx.MultiDiGraph()
        for node in nodes:
            if node.id not in digraph:
                digraph.add_node(node.id, data=node)

        kept: list[GraphEdge] = []
        seen_ids: set[str] = set()
        for edge in edges:
            if edge.source_id not in digraph or edge.target_id not in digraph:
                continue
            if edge.id in seen_ids:
                continue
            seen_ids.add(edge.id)
            digraph.add_edge(edge.source_id, edge.target_id, key=edge.id, data=edge)
            kept.append(edge)

        return cls(digraph=nx.freeze(digraph), edges=tuple(kept))

    @classmethod
    def empty(cls) -> Graph:
        return cls.from_parts(())

    @property
    def nodes(self) -> tuple[GraphNode, ...]:
        return tuple(data for _, data in self.digraph.nodes(data="data"))

    @property
    def edges(self) -> tuple[GraphEdge, ...]:
        return self._edges

    def node(self, node_id: str) -> GraphNode:
        return self.digraph.nodes[node_id]["data"]

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.digraph

    def __len__(self) -> int:
        return self.node_count()

    def node_count(self) -> int:
        return self.digraph.number_of_nodes()

    def edge_count(self) -> int:
        return len(self._edges)

    def is_empty(self) -> bool:
        return self.node_count() == 0

    def __repr__(self) -> str:
        return f"Graph(nodes={self.node_count()}, edges={self.edge_count()})"
