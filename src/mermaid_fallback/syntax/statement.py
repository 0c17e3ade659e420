"""Lenient tokenizer for single flowchart statements.

A cursor walks one line and yields node references and connectors. Unlike a
grammar parser it never fails: unclosed shapes are reported as such and
unrecognized characters are skipped.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from mermaid_fallback.types import EdgeType, NodeShape

# ─── Token patterns ──────────────────────────────────────────────────────────

CONNECTOR_RE = re.compile(r"<-\.->|<==>|<-->|-\.+->|={2,}>|-{2,}>|-\.+-|={3,}|-{3,}")
NODE_ID_RE = re.compile(r"[A-Za-z0-9_]+")
PIPE_LABEL_RE = re.compile(r"\|([^|\n]*)\|")
DIRECTIVE_RE = re.compile(r"(?:subgraph|end|classDef|class|style|linkStyle|click|direction)\b")
_WHITESPACE_RE = re.compile(r"[ \t]+")

# longest openers first so "((" is not read as "("
SHAPES: list[tuple[str, str, NodeShape]] = [
    ("((", "))", NodeShape.Circle),
    ("[[", "]]", NodeShape.Subroutine),
    ("([", "])", NodeShape.Stadium),
    ("[(", ")]", NodeShape.Cylinder),
    ("{{", "}}", NodeShape.Hexagon),
    ("[", "]", NodeShape.Rectangle),
    ("(", ")", NodeShape.Rounded),
    ("{", "}", NodeShape.Diamond),
]


def edge_type_for(token: str) -> EdgeType:
    """Map a connector as written (``--->``, ``-..->``) to its EdgeType."""
    bidir = token.startswith("<")
    directed = token.endswith(">")
    if "." in token:
        if bidir:
            return EdgeType.BidirDotted
        return EdgeType.DottedArrow if directed else EdgeType.DottedLine
    if "=" in token:
        if bidir:
            return EdgeType.BidirThick
        return EdgeType.ThickArrow if directed else EdgeType.ThickLine
    if bidir:
        return EdgeType.BidirArrow
    return EdgeType.Arrow if directed else EdgeType.Line


def is_comment(line: str) -> bool:
    return line.startswith("%%")


def is_directive(line: str) -> bool:
    return DIRECTIVE_RE.match(line) is not None


@dataclass
class NodeRef:
    """A node reference: a bare id or an id with a shaped label."""

    id: str
    shape: NodeShape | None = None
    opener: str = ""
    closer: str = ""
    label: str | None = None
    closed: bool = True
    pos: int = 0

    @property
    def bare(self) -> bool:
        return self.shape is None


@dataclass
class Connector:
    """An edge connector with its optional pipe label."""

    token: str
    edge_type: EdgeType
    label: str | None = None
    pos: int = 0


Token = NodeRef | Connector


def match_shape(src: str, pos: int) -> tuple[str, str, NodeShape] | None:
    for opener, closer, shape in SHAPES:
        if src.startswith(opener, pos):
            return (opener, closer, shape)
    return None


@dataclass
class _Cursor:
    """Stateful cursor over one statement."""

    src: str
    pos: int = 0

    def eof(self) -> bool:
        return self.pos >= len(self.src)

    def match_re(self, pattern: re.Pattern[str]) -> str | None:
        m = pattern.match(self.src, self.pos)
        if m:
            self.pos = m.end()
            return m.group(0)
        return None

    def skip_ws(self) -> None:
        self.match_re(_WHITESPACE_RE)

    def parse_label(self, closer: str) -> tuple[str, bool]:
        """Read a label up to ``closer``; a connector or end of line first means it is unclosed."""
        close_at = self.src.find(closer, self.pos)
        conn = CONNECTOR_RE.search(self.src, self.pos)
        if close_at >= 0 and (conn is None or close_at <= conn.start()):
            label = self.src[self.pos : close_at]
            self.pos = close_at + len(closer)
            return (label, True)
        end = conn.start() if conn is not None else len(self.src)
        label = self.src[self.pos : end]
        self.pos = end
        return (label, False)

    def parse_node_ref(self) -> NodeRef | None:
        self.skip_ws()
        start = self.pos
        node_id = self.match_re(NODE_ID_RE)
        if not node_id:
            return None
        shape = match_shape(self.src, self.pos)
        if shape is None:
            return NodeRef(id=node_id, pos=start)
        opener, closer, node_shape = shape
        self.pos += len(opener)
        label, closed = self.parse_label(closer)
        return NodeRef(
            id=node_id,
            shape=node_shape,
            opener=opener,
            closer=closer,
            label=label,
            closed=closed,
            pos=start,
        )

    def parse_connector(self) -> Connector | None:
        self.skip_ws()
        start = self.pos
        token = self.match_re(CONNECTOR_RE)
        if token is None:
            return None
        connector = Connector(token=token, edge_type=edge_type_for(token), pos=start)
        saved = self.pos
        self.skip_ws()
        m = PIPE_LABEL_RE.match(self.src, self.pos)
        if m:
            connector.label = m.group(1)
            self.pos = m.end()
        else:
            self.pos = saved
        return connector

    def tokenize(self) -> list[Token]:
        tokens: list[Token] = []
        while True:
            self.skip_ws()
            if self.eof():
                break
            connector = self.parse_connector()
            if connector is not None:
                tokens.append(connector)
                continue
            node = self.parse_node_ref()
            if node is not None:
                tokens.append(node)
                continue
            m = PIPE_LABEL_RE.match(self.src, self.pos)
            if m:
                # a pipe label detached from its connector
                if tokens and isinstance(tokens[-1], Connector) and tokens[-1].label is None:
                    tokens[-1].label = m.group(1)
                self.pos = m.end()
                continue
            # stray character: skip it
            self.pos += 1
        return tokens


def tokenize(line: str) -> list[Token]:
    """Split one statement into node references and connectors."""
    return _Cursor(src=line).tokenize()


def split_sides(line: str) -> tuple[list[str], list[Connector]]:
    """Split an edge statement at its connectors.

    Returns the side texts (always one more than the connectors) and the
    connectors with their pipe labels.
    """
    sides: list[str] = []
    connectors: list[Connector] = []
    cursor = _Cursor(src=line)
    last = 0
    for m in CONNECTOR_RE.finditer(line):
        if m.start() < last:
            continue
        cursor.pos = m.start()
        connector = cursor.parse_connector()
        if connector is None:
            continue
        sides.append(line[last : m.start()].strip())
        connectors.append(connector)
        last = cursor.pos
    sides.append(line[last:].strip())
    return (sides, connectors)


def split_fan_out(side: str) -> list[str]:
    """Split an edge side like ``B & C[x]`` at ampersands outside labels."""
    parts: list[str] = []
    depth = 0
    start = 0
    for i, ch in enumerate(side):
        if ch in "[({":
            depth += 1
        elif ch in "])}":
            depth = max(depth - 1, 0)
        elif ch == "&" and depth == 0:
            parts.append(side[start:i].strip())
            start = i + 1
    parts.append(side[start:].strip())
    return [part for part in parts if part]


def parse_node(text: str) -> tuple[NodeRef, str] | None:
    """Parse a node reference at the start of ``text``.

    Returns the reference and whatever follows it, or None when ``text`` does
    not start with an identifier.
    """
    cursor = _Cursor(src=text)
    node = cursor.parse_node_ref()
    if node is None:
        return None
    return (node, text[cursor.pos :])
