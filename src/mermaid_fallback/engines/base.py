"""Primary engine protocol and the offline engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from mermaid_fallback.errors import EngineRejection


@dataclass(frozen=True)
class EngineOutput:
    """What a primary engine produces: a standalone SVG document."""

    svg: str


class PrimaryEngine(Protocol):
    """Protocol that all primary engines must implement."""

    async def render(self, unique_id: str, text: str) -> EngineOutput:
        """Render diagram text. Raises EngineRejection (or anything else) on failure."""
        ...


class RejectingEngine:
    """Engine that refuses every diagram; used when no renderer is installed."""

    async def render(self, unique_id: str, text: str) -> EngineOutput:
        raise EngineRejection(unique_id, "no primary engine configured")
