"""Parser registry: diagram header detection shared by the repairer and extractor."""

from __future__ import annotations

import re

from mermaid_fallback.types import DiagramType

HEADER_PREFIXES: list[tuple[str, DiagramType]] = [
    ("graph TD", DiagramType.FLOWCHART_TD),
    ("graph TB", DiagramType.FLOWCHART_TD),
    ("graph BT", DiagramType.FLOWCHART_TD),
    ("graph LR", DiagramType.FLOWCHART_LR),
    ("graph RL", DiagramType.FLOWCHART_LR),
    ("flowchart TD", DiagramType.FLOWCHART_TD),
    ("flowchart TB", DiagramType.FLOWCHART_TD),
    ("flowchart BT", DiagramType.FLOWCHART_TD),
    ("flowchart LR", DiagramType.FLOWCHART_LR),
    ("flowchart RL", DiagramType.FLOWCHART_LR),
    ("sequenceDiagram", DiagramType.SEQUENCE),
    ("mindmap", DiagramType.MINDMAP),
    ("pie", DiagramType.PIE),
    ("gantt", DiagramType.GANTT),
    ("journey", DiagramType.JOURNEY),
    ("classDiagram", DiagramType.CLASS),
    ("stateDiagram", DiagramType.STATE),
    ("erDiagram", DiagramType.ER),
]

_HEADER_RES: list[tuple[re.Pattern[str], DiagramType]] = [
    (re.compile(re.escape(prefix) + r"(?![\w\[({])"), diagram_type) for prefix, diagram_type in HEADER_PREFIXES
]

# the keyword must stand as a word of its own: "Graph[x]" is a node, "graphs" is prose
_FLOWCHART_KEYWORD_RE = re.compile(r"(?:graph|flowchart)(?=[\s;]|$)", re.IGNORECASE)
_BARE_KEYWORD_RE = re.compile(r"(?:graph|flowchart)(?:\s+\w+)?\s*;?\s*$", re.IGNORECASE)


def _match_prefix(line: str) -> tuple[re.Match[str], DiagramType] | None:
    for pattern, diagram_type in _HEADER_RES:
        m = pattern.match(line)
        if m:
            return (m, diagram_type)
    return None


def match_header(line: str) -> DiagramType | None:
    """Return the diagram type a header line declares, or None."""
    found = _match_prefix(line)
    return found[1] if found else None


def is_flowchart_keyword(line: str) -> bool:
    """True for a line opening with the word ``graph``/``flowchart`` whatever follows."""
    return _FLOWCHART_KEYWORD_RE.match(line) is not None


def is_bare_keyword(line: str) -> bool:
    """True for ``graph``/``flowchart`` alone or with a single unknown direction."""
    return _BARE_KEYWORD_RE.match(line) is not None


def strip_header(line: str) -> str:
    """Drop a leading header or flowchart keyword and any ``;`` after it."""
    found = _match_prefix(line)
    m = found[0] if found else _FLOWCHART_KEYWORD_RE.match(line)
    if m is None:
        return line
    return line[m.end() :].lstrip(" \t;")


def detect_type(src: str) -> DiagramType | None:
    """Detect the diagram type from the first non-blank, non-comment line."""
    for line in src.splitlines():
        line = line.strip()
        if not line or line.startswith("%%"):
            continue
        return match_header(line)
    return None
