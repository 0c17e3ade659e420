"""Diagram validator/repairer.

A heuristic, line-oriented pass that rewrites model-generated diagram text
into something the primary engine is more likely to accept. It optimizes for
the most likely intended structure; it is not a grammar parser. Every repair
is recorded as a ``RepairEvent``; nothing here raises.

Per body line of a flowchart, in order:

  a. concatenation detection: glued node declarations, dangling arrows and
     glued pipe labels make the line be re-tokenized and re-emitted as one
     declaration per labelled node plus one bare edge per connector
  b. arrow repair: each side of a connector is node-sanitized and the line is
     reassembled as ``source --> target``
  c. single-node repair: ``id[label`` gets its closing bracket back

Finally the ``[``/``]`` counts of the whole text are balanced by appending.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from mermaid_fallback.config import DEFAULT_HEADER
from mermaid_fallback.logging import get_logger
from mermaid_fallback.parsers.registry import is_bare_keyword, is_flowchart_keyword, match_header, strip_header
from mermaid_fallback.syntax.label import has_emphasis, has_non_ascii, has_special_chars, sanitize
from mermaid_fallback.syntax.statement import (
    CONNECTOR_RE,
    NODE_ID_RE,
    Connector,
    NodeRef,
    is_comment,
    is_directive,
    parse_node,
    split_fan_out,
    split_sides,
    tokenize,
)
from mermaid_fallback.types import DiagramType, RepairKind

logger = get_logger(__name__)

# ─── Concatenation patterns ──────────────────────────────────────────────────

_ARROW = r"(?:<-\.->|<==>|<-->|-\.+->|={2,}>|-{2,}>)"
_CLOSE = r"[\]\)\}]"
_OPEN = r"[\[\(\{]"
_ID = r"[A-Za-z0-9_]+"

_CONCATENATION_PATTERNS: list[tuple[re.Pattern[str], RepairKind]] = [
    # A[x]B[y]  /  A[x] B(y)
    (re.compile(_CLOSE + r"\s*" + _ID + r"\s*" + _OPEN), RepairKind.CONCATENATED_NODES),
    # A[x]B --> C
    (re.compile(_CLOSE + r"\s*" + _ID + r"\s*" + _ARROW), RepairKind.CONCATENATED_NODES),
    # A[x]B
    (re.compile(_CLOSE + r"\s*" + _ID + r"\s*$"), RepairKind.CONCATENATED_NODES),
    # A[x]-->B
    (re.compile(_CLOSE + _ARROW), RepairKind.MALFORMED_ARROW),
    # --> B  /  A -->  /  A --> --> B
    (re.compile(r"^\s*" + _ARROW), RepairKind.MALFORMED_ARROW),
    (re.compile(_ARROW + r"\s*(?:\|[^|]*\|\s*)?$"), RepairKind.MALFORMED_ARROW),
    (re.compile(_ARROW + r"\s*(?:\|[^|]*\|\s*)?" + _ARROW), RepairKind.MALFORMED_ARROW),
    # A -->|yes|B  /  A[x]|yes|  /  |yes|[
    (re.compile(r"(?:" + CONNECTOR_RE.pattern + r")\s*\|[^|\n]*\|(?=[A-Za-z0-9_])"), RepairKind.MALFORMED_ARROW),
    (re.compile(_CLOSE + r"\|"), RepairKind.MALFORMED_ARROW),
    (re.compile(r"\|\["), RepairKind.MALFORMED_ARROW),
]


# ─── Result types ────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class RepairEvent:
    """One diagnostic record; ``line_number`` 0 marks a document-level event."""

    line_number: int
    kind: RepairKind
    message: str


@dataclass(frozen=True)
class SanitizedDiagram:
    type: DiagramType
    lines: tuple[str, ...]
    valid: bool
    repairs: tuple[RepairEvent, ...] = ()
    synthesized_header: bool = False

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    @property
    def body(self) -> str:
        """The text without a header the repairer had to add itself."""
        if not self.synthesized_header:
            return self.text
        lines = list(self.lines)
        lines.remove(self.header)
        return "\n".join(lines)

    @property
    def header(self) -> str:
        return next(line for line in self.lines if not is_comment(line))

    def kinds(self) -> set[RepairKind]:
        return {event.kind for event in self.repairs}


# ─── Repair pass ─────────────────────────────────────────────────────────────


@dataclass
class _Placeholders:
    """Synthesizes ids for arrow ends that lost their node."""

    prefix: str
    taken: set[str] = field(default_factory=set)
    count: int = 0

    def next(self) -> str:
        while True:
            self.count += 1
            candidate = self.prefix if self.count == 1 else f"{self.prefix}{self.count}"
            if candidate not in self.taken:
                self.taken.add(candidate)
                return candidate


class DiagramRepairer:
    """One repair pass over one diagram; use ``validate_and_sanitize``."""

    def __init__(self, default_header: str = DEFAULT_HEADER, placeholder_id: str = "MissingNode") -> None:
        self.default_header = default_header
        self.repairs: list[RepairEvent] = []
        self.placeholders = _Placeholders(placeholder_id)

    def record(self, line_number: int, kind: RepairKind, message: str) -> None:
        self.repairs.append(RepairEvent(line_number=line_number, kind=kind, message=message))
        logger.debug("repair line=%d kind=%s: %s", line_number, kind.value, message)

    def run(self, raw: str) -> SanitizedDiagram:
        numbered = [(n, line.strip()) for n, line in enumerate(raw.splitlines(), start=1) if line.strip()]
        self.placeholders.taken.update(NODE_ID_RE.findall(raw))

        out: list[str] = []
        idx = 0
        # comment lines may precede the header
        while idx < len(numbered) and is_comment(numbered[idx][1]):
            out.append(numbered[idx][1])
            idx += 1

        header_no, first = numbered[idx] if idx < len(numbered) else (1, "")
        diagram_type = match_header(first)
        synthesized = diagram_type is None
        if diagram_type is not None:
            out.append(first)
            idx += 1
        else:
            message = "Missing or invalid diagram type on first line"
            if first and is_flowchart_keyword(first):
                rest = "" if is_bare_keyword(first) else strip_header(first)
                if rest:
                    # the keyword goes, the statements after it stay
                    message = f"Removed diagram keyword from {first!r}"
                    numbered[idx] = (header_no, rest)
                else:
                    message = f"Replaced invalid diagram header {first!r}"
                    idx += 1
            self.record(header_no, RepairKind.MISSING_HEADER, message)
            diagram_type = match_header(self.default_header) or DiagramType.default()
            out.append(self.default_header)

        for line_no, line in numbered[idx:]:
            if not diagram_type.is_flowchart or is_comment(line) or is_directive(line):
                out.append(line)
                continue
            out.extend(self.repair_line(line_no, line))

        self.balance_brackets(out)
        return SanitizedDiagram(
            type=diagram_type,
            lines=tuple(out),
            valid=not self.repairs,
            repairs=tuple(self.repairs),
            synthesized_header=synthesized,
        )

    def repair_line(self, line_no: int, line: str) -> list[str]:
        for pattern, kind in _CONCATENATION_PATTERNS:
            if pattern.search(line):
                if kind is RepairKind.CONCATENATED_NODES:
                    self.record(line_no, kind, f"Split concatenated node declarations on line {line_no}")
                else:
                    self.record(line_no, kind, f"Rebuilt malformed arrow on line {line_no}")
                return self.split_statement(line_no, line)

        sides, connectors = split_sides(line)
        if not connectors:
            return [self.repair_node(line_no, line)]
        if not all(sides):
            self.record(line_no, RepairKind.MALFORMED_ARROW, f"Connector without a node on line {line_no}")
            return self.split_statement(line_no, line)
        return self.repair_edge(line_no, sides, connectors)

    def split_statement(self, line_no: int, line: str) -> list[str]:
        """Re-emit a broken statement as declarations, then bare nodes, then edges."""
        declarations: list[str] = []
        declared: set[str] = set()
        bare: list[str] = []
        edges: list[str] = []
        in_edge: set[str] = set()

        previous: str | None = None
        pending: Connector | None = None
        source = ""

        def close_edge(target: str) -> None:
            edges.append(_edge_line(source, pending, target, self.clean_pipe(line_no, pending)))
            in_edge.update((source, target))

        for token in tokenize(line):
            if isinstance(token, Connector):
                if pending is not None:
                    previous = self.placeholders.next()
                    close_edge(previous)
                pending = token
                source = previous if previous is not None else self.placeholders.next()
                continue

            if token.bare:
                bare.append(token.id)
            elif token.id not in declared:
                declarations.append(self.render_node(line_no, token))
                declared.add(token.id)
            if pending is not None:
                close_edge(token.id)
                pending = None
            previous = token.id

        if pending is not None:
            close_edge(self.placeholders.next())

        standalone = [node_id for node_id in dict.fromkeys(bare) if node_id not in in_edge | declared]
        return declarations + standalone + edges

    def repair_edge(self, line_no: int, sides: list[str], connectors: list[Connector]) -> list[str]:
        groups = [[self.repair_node(line_no, part) for part in split_fan_out(side) or [side]] for side in sides]
        lines: list[str] = []
        for i, connector in enumerate(connectors):
            label = self.clean_pipe(line_no, connector)
            # a chain A --> B --> C and a fan-out A --> B & C both become one edge per line
            sources = groups[i] if i == 0 else [_leading_id(node) for node in groups[i]]
            for source in sources:
                for target in groups[i + 1]:
                    lines.append(_edge_line(source, connector, target, label))
        return lines

    def repair_node(self, line_no: int, text: str) -> str:
        parsed = parse_node(text)
        if parsed is None or parsed[0].bare:
            return text
        node, rest = parsed
        rendered = self.render_node(line_no, node)
        if rendered == text[: len(text) - len(rest)]:
            return text
        return rendered + rest

    def render_node(self, line_no: int, node: NodeRef) -> str:
        if not node.closed:
            self.record(line_no, RepairKind.UNCLOSED_BRACKET, f"Fixed unclosed bracket in node '{node.id}' on line {line_no}")
        label = self.clean_label(line_no, node.id, node.label or "")
        return f"{node.id}{node.opener}{label}{node.closer}"

    def clean_label(self, line_no: int, node_id: str, raw_label: str) -> str:
        label = sanitize(raw_label, max_length=None)
        if label == raw_label.strip():
            return raw_label
        if has_emphasis(raw_label):
            self.record(line_no, RepairKind.MARKDOWN_IN_LABEL, f"Removed markdown formatting from node '{node_id}' on line {line_no}")
        if has_non_ascii(raw_label):
            self.record(line_no, RepairKind.NON_ASCII_IN_LABEL, f"Removed non-ASCII characters from node '{node_id}' on line {line_no}")
        if has_special_chars(raw_label):
            self.record(line_no, RepairKind.SPECIAL_CHARS_IN_LABEL, f"Removed special characters from node '{node_id}' on line {line_no}")
        # nothing printable left: show the id instead
        return label or node_id

    def clean_pipe(self, line_no: int, connector: Connector) -> str | None:
        if connector.label is None:
            return None
        label = sanitize(connector.label, max_length=None)
        if label != connector.label.strip():
            self.record(line_no, RepairKind.SPECIAL_CHARS_IN_LABEL, f"Cleaned edge label on line {line_no}")
        return label

    def balance_brackets(self, lines: list[str]) -> None:
        text = "\n".join(lines)
        opening = text.count("[")
        closing = text.count("]")
        if opening == closing:
            return
        self.record(0, RepairKind.MISMATCHED_BRACKET_COUNT, f"Mismatched brackets: {opening} opening vs {closing} closing")
        if opening > closing:
            lines[-1] += "]" * (opening - closing)
        else:
            # characters are only ever appended, so the missing openers go into a comment
            lines.append("%% " + "[" * (closing - opening))


def _leading_id(text: str) -> str:
    m = NODE_ID_RE.match(text)
    return m.group(0) if m else text


def _edge_line(source: str, connector: Connector, target: str, label: str | None = None) -> str:
    pipe = f"|{label}|" if label else ""
    return f"{source} {connector.token}{pipe} {target}"


def validate_and_sanitize(
    raw: str,
    default_header: str = DEFAULT_HEADER,
    placeholder_id: str = "MissingNode",
) -> SanitizedDiagram:
    """Repair model-generated diagram text. Never raises.

    Args:
        raw: The diagram source, possibly empty or arbitrarily malformed.
        default_header: Header line prepended when the first line is not one.
        placeholder_id: Base id for nodes synthesized at dangling arrow ends.

    Returns:
        The SanitizedDiagram; ``valid`` is True iff no repair was needed.
    """
    return DiagramRepairer(default_header, placeholder_id).run(raw)
