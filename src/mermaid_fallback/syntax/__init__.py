"""Text-level stages: label sanitizing, statement tokenizing and repair."""

from mermaid_fallback.syntax.fence import extract_diagram
from mermaid_fallback.syntax.label import sanitize
from mermaid_fallback.syntax.repair import RepairEvent, SanitizedDiagram, validate_and_sanitize

__all__ = [
    "RepairEvent",
    "SanitizedDiagram",
    "extract_diagram",
    "sanitize",
    "validate_and_sanitize",
]
