"""Parsers: diagram type detection and lenient graph extraction."""

from mermaid_fallback.parsers.lenient import LenientParser, extract_graph
from mermaid_fallback.parsers.registry import detect_type, is_flowchart_keyword, match_header

__all__ = [
    "LenientParser",
    "detect_type",
    "extract_graph",
    "is_flowchart_keyword",
    "match_header",
]
