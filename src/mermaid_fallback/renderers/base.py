"""Base renderer protocol."""

from __future__ import annotations

from typing import Protocol

from mermaid_fallback.layout.types import PositionedGraph


class Renderer(Protocol):
    """Protocol that all generic graph renderers must implement."""

    def render(self, positioned: PositionedGraph) -> str:
        """Render a positioned graph to an output string."""
        ...
