"""Lenient graph extractor.

Recovers nodes and edges from diagram text that need not satisfy the full
grammar. A header at the start of a line is dropped and the rest of the line
scanned. Statement lines (edges, or lines that open with a node reference)
contribute every shaped node on them; any other line only contributes
``id[label]`` matches, so prose that happens to contain parentheses does not
turn into nodes. An edge leaves the last node before its connector and
arrives at the first node after it, once per ``&`` alternative on each side.
"""

from __future__ import annotations

import re

from mermaid_fallback.config import LABEL_MAX_LENGTH
from mermaid_fallback.ir.graph import Graph, GraphEdge, GraphNode
from mermaid_fallback.parsers.base import Parser
from mermaid_fallback.parsers.registry import strip_header
from mermaid_fallback.syntax.label import sanitize
from mermaid_fallback.syntax.statement import (
    Connector,
    NodeRef,
    is_comment,
    is_directive,
    parse_node,
    split_fan_out,
    split_sides,
    tokenize,
)

_RECT_DECL_RE = re.compile(r"(?<![A-Za-z0-9_])([A-Za-z0-9_]+)\[([^\[\]\n]*)")


class LenientParser:
    """Regex-driven extractor that never raises."""

    def __init__(self, max_label_length: int | None = LABEL_MAX_LENGTH) -> None:
        self.max_label_length = max_label_length

    def parse(self, src: str) -> Graph:
        nodes: dict[str, GraphNode] = {}
        edges: list[GraphEdge] = []

        for raw_line in src.splitlines():
            line = raw_line.strip()
            if not line or is_comment(line) or is_directive(line):
                continue
            # "graph TD; A --> B" carries statements after its header
            line = strip_header(line)
            if not line:
                continue

            sides, connectors = split_sides(line)
            if connectors:
                self._collect_edge_statement(sides, connectors, nodes, edges)
            elif _opens_with_shape(line):
                self._collect_statement_nodes(line, nodes)
            else:
                self._collect_rect_nodes(line, nodes)

        return Graph.from_parts(nodes.values(), edges)

    def _make_node(self, node_id: str, raw_label: str | None) -> GraphNode:
        label = sanitize(raw_label, self.max_label_length) if raw_label else ""
        return GraphNode(id=node_id, label=label or node_id[: self.max_label_length])

    def _add(self, ref: NodeRef, nodes: dict[str, GraphNode]) -> None:
        if ref.id not in nodes:
            nodes[ref.id] = self._make_node(ref.id, ref.label)

    def _collect_statement_nodes(self, text: str, nodes: dict[str, GraphNode]) -> None:
        for token in tokenize(text):
            if isinstance(token, NodeRef) and not token.bare:
                self._add(token, nodes)

    def _collect_rect_nodes(self, line: str, nodes: dict[str, GraphNode]) -> None:
        for m in _RECT_DECL_RE.finditer(line):
            node_id, raw_label = m.group(1), m.group(2)
            if node_id not in nodes:
                nodes[node_id] = self._make_node(node_id, raw_label)

    def _collect_edge_statement(
        self,
        sides: list[str],
        connectors: list[Connector],
        nodes: dict[str, GraphNode],
        edges: list[GraphEdge],
    ) -> None:
        # per side: the ids edges arrive at and the ids they leave from
        ends: list[tuple[list[str], list[str]]] = []
        for i, side in enumerate(sides):
            targets: list[str] = []
            sources: list[str] = []
            for part in split_fan_out(side):
                refs = [token for token in tokenize(part) if isinstance(token, NodeRef)]
                if not refs:
                    continue
                # prose may surround a node: an edge arrives at the first one and leaves from the last
                head = refs[0] if i > 0 else None
                tail = refs[-1] if i < len(connectors) else None
                for ref in refs:
                    if not ref.bare or ref is head or ref is tail:
                        self._add(ref, nodes)
                if head is not None:
                    targets.append(head.id)
                if tail is not None:
                    sources.append(tail.id)
            ends.append((targets, sources))

        for i, connector in enumerate(connectors):
            for source_id in ends[i][1]:
                for target_id in ends[i + 1][0]:
                    edges.append(
                        GraphEdge(
                            id=f"e-{source_id}-{target_id}-{len(edges)}",
                            source_id=source_id,
                            target_id=target_id,
                            edge_type=connector.edge_type,
                        )
                    )


def _opens_with_shape(line: str) -> bool:
    parsed = parse_node(line)
    return parsed is not None and not parsed[0].bare


def extract_graph(text: str, max_label_length: int | None = LABEL_MAX_LENGTH) -> Graph:
    """Extract a generic node/edge graph from raw or sanitized diagram text.

    Never raises; a Graph with zero nodes means nothing usable was found.
    """
    parser: Parser = LenientParser(max_label_length)
    return parser.parse(text)


__all__ = ["LenientParser", "extract_graph"]
