"""mermaid-fallback: render model-generated Mermaid diagrams without ever failing."""

from mermaid_fallback.config import PipelineConfig
from mermaid_fallback.engines import EngineOutput, MermaidCliEngine, RejectingEngine
from mermaid_fallback.errors import DiagramError, EngineRejection
from mermaid_fallback.ir.graph import Graph, GraphEdge, GraphNode
from mermaid_fallback.layout import Point, PositionedGraph
from mermaid_fallback.layout import layout as layout_graph
from mermaid_fallback.orchestrator import (
    DiagramRenderer,
    GenericGraphSuccess,
    PrimaryEngineSuccess,
    RenderResult,
    RenderState,
    TextFallback,
    render_diagram,
)
from mermaid_fallback.parsers.lenient import extract_graph
from mermaid_fallback.renderers.ascii import AsciiRenderer
from mermaid_fallback.syntax import RepairEvent, SanitizedDiagram, extract_diagram, sanitize, validate_and_sanitize
from mermaid_fallback.types import DiagramType, EdgeType, RepairKind

__all__ = [
    "AsciiRenderer",
    "DiagramError",
    "DiagramRenderer",
    "DiagramType",
    "EdgeType",
    "EngineOutput",
    "EngineRejection",
    "GenericGraphSuccess",
    "Graph",
    "GraphEdge",
    "GraphNode",
    "MermaidCliEngine",
    "PipelineConfig",
    "Point",
    "PositionedGraph",
    "PrimaryEngineSuccess",
    "RejectingEngine",
    "RenderResult",
    "RenderState",
    "RepairEvent",
    "RepairKind",
    "SanitizedDiagram",
    "TextFallback",
    "extract_diagram",
    "extract_graph",
    "render_diagram",
    "render_text",
    "sanitize",
    "validate_and_sanitize",
]


def render_text(src: str, unicode: bool = True, padding: int = 1) -> str:
    """Repair a diagram and draw its generic graph as ASCII/Unicode art.

    Args:
        src: Diagram source, possibly malformed.
        unicode: True for Unicode box-drawing characters; False for ASCII fallback.
        padding: Spaces inside node border on each side (default 1).

    Returns:
        The rendered string, or empty string if no node could be recovered.
    """
    sanitized = validate_and_sanitize(src)
    graph = extract_graph(sanitized.text)
    if graph.is_empty():
        graph = extract_graph(src)
    return AsciiRenderer(unicode=unicode, padding=padding).render(layout_graph(graph))
