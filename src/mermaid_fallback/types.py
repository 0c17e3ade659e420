"""Shared type definitions for mermaid-fallback.

Enums used across the repairer, extractor, layout, and renderers.
"""

from __future__ import annotations

from enum import Enum, auto


class DiagramType(Enum):
    FLOWCHART_TD = auto()
    FLOWCHART_LR = auto()
    SEQUENCE = auto()
    MINDMAP = auto()
    PIE = auto()
    GANTT = auto()
    JOURNEY = auto()
    CLASS = auto()
    STATE = auto()
    ER = auto()

    @classmethod
    def default(cls) -> DiagramType:
        return cls.FLOWCHART_TD

    @property
    def is_flowchart(self) -> bool:
        return self in (DiagramType.FLOWCHART_TD, DiagramType.FLOWCHART_LR)


class RepairKind(Enum):
    MISSING_HEADER = "missing-header"
    UNCLOSED_BRACKET = "unclosed-bracket"
    CONCATENATED_NODES = "concatenated-nodes"
    MALFORMED_ARROW = "malformed-arrow"
    MARKDOWN_IN_LABEL = "markdown-in-label"
    NON_ASCII_IN_LABEL = "non-ascii-in-label"
    SPECIAL_CHARS_IN_LABEL = "special-chars-in-label"
    MISMATCHED_BRACKET_COUNT = "mismatched-bracket-count"


class NodeShape(Enum):
    Rectangle = auto()  # id[Label]
    Rounded = auto()  # id(Label)
    Diamond = auto()  # id{Label}
    Circle = auto()  # id((Label))
    Subroutine = auto()  # id[[Label]]
    Stadium = auto()  # id([Label])
    Cylinder = auto()  # id[(Label)]
    Hexagon = auto()  # id{{Label}}

    @classmethod
    def default(cls) -> NodeShape:
        return cls.Rectangle


class EdgeType(Enum):
    Arrow = "-->"
    Line = "---"
    DottedArrow = "-.->"
    DottedLine = "-.-"
    ThickArrow = "==>"
    ThickLine = "==="
    BidirArrow = "<-->"
    BidirDotted = "<-.->"
    BidirThick = "<==>"

    @property
    def token(self) -> str:
        return self.value

    @property
    def directed(self) -> bool:
        return self.value.endswith(">")
