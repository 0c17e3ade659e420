"""Primary rendering engines."""

from mermaid_fallback.engines.base import EngineOutput, PrimaryEngine, RejectingEngine
from mermaid_fallback.engines.mmdc import MermaidCliEngine

__all__ = [
    "EngineOutput",
    "MermaidCliEngine",
    "PrimaryEngine",
    "RejectingEngine",
]
