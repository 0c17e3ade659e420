"""Base parser protocol."""

from __future__ import annotations

from typing import Protocol

from mermaid_fallback.ir.graph import Graph


class Parser(Protocol):
    """Protocol that all graph extractors must implement."""

    def parse(self, src: str) -> Graph:
        """Extract a Graph from source text. Must never raise."""
        ...
