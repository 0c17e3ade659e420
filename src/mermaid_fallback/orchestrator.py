"""Fallback orchestrator: primary engine, then generic graph, then text.

``DiagramRenderer.render`` always returns exactly one RenderResult:

    Idle ─► AttemptingPrimary ─┬─► PrimaryEngineSuccess
                               └─► AttemptingGeneric ─┬─► GenericGraphSuccess
                                                      └─► AttemptingText ─► TextFallback

Empty input goes straight to TextFallback. The engine call is the only await
point; everything else is synchronous. A render that is overtaken by a newer
one on the same renderer still returns its result to its own caller but never
becomes ``current``.
"""

from __future__ import annotations

import asyncio
import uuid
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, auto
from typing import ClassVar, Union

from mermaid_fallback.config import PipelineConfig
from mermaid_fallback.engines.base import PrimaryEngine, RejectingEngine
from mermaid_fallback.errors import EngineRejection
from mermaid_fallback.layout import PositionedGraph, layout
from mermaid_fallback.logging import get_logger
from mermaid_fallback.parsers.lenient import extract_graph
from mermaid_fallback.syntax.repair import SanitizedDiagram, validate_and_sanitize

logger = get_logger(__name__)


class RenderState(Enum):
    Idle = auto()
    AttemptingPrimary = auto()
    AttemptingGeneric = auto()
    AttemptingText = auto()
    PrimaryEngineSuccess = auto()
    GenericGraphSuccess = auto()
    TextFallback = auto()


@dataclass(frozen=True)
class PrimaryEngineSuccess:
    svg: str

    kind: ClassVar[RenderState] = RenderState.PrimaryEngineSuccess


@dataclass(frozen=True)
class GenericGraphSuccess:
    positioned: PositionedGraph

    kind: ClassVar[RenderState] = RenderState.GenericGraphSuccess


@dataclass(frozen=True)
class TextFallback:
    text: str

    kind: ClassVar[RenderState] = RenderState.TextFallback


RenderResult = Union[PrimaryEngineSuccess, GenericGraphSuccess, TextFallback]


@dataclass(frozen=True)
class Transition:
    """One state change of one render call."""

    generation: int
    source: RenderState
    target: RenderState
    reason: str = ""


def new_unique_id() -> str:
    return f"mermaid-{uuid.uuid4().hex[:9]}"


class DiagramRenderer:
    """Renders model-generated diagrams with graceful degradation.

    Args:
        engine: The primary engine; defaults to one that rejects everything.
        config: Pipeline constants.
        on_result: Called with each committed result.
    """

    def __init__(
        self,
        engine: PrimaryEngine | None = None,
        config: PipelineConfig | None = None,
        on_result: Callable[[RenderResult], None] | None = None,
    ) -> None:
        self.engine = engine or RejectingEngine()
        self.config = config or PipelineConfig()
        self.on_result = on_result
        self.state = RenderState.Idle
        self.current: RenderResult | None = None
        self.sanitized: SanitizedDiagram | None = None
        self.transitions: list[Transition] = []
        self.generation = 0

    def _move(self, generation: int, source: RenderState, target: RenderState, reason: str = "") -> RenderState:
        self.transitions.append(Transition(generation, source, target, reason))
        logger.debug("render #%d %s -> %s %s", generation, source.name, target.name, reason)
        if generation == self.generation:
            self.state = target
        return target

    def _commit(self, generation: int, result: RenderResult, sanitized: SanitizedDiagram | None) -> RenderResult:
        if generation != self.generation:
            logger.debug("render #%d superseded by #%d, result dropped", generation, self.generation)
            return result
        self.current = result
        self.sanitized = sanitized
        if self.on_result is not None:
            self.on_result(result)
        return result

    async def render(self, raw: str) -> RenderResult:
        self.generation += 1
        generation = self.generation
        cfg = self.config

        if not raw.strip():
            self._move(generation, RenderState.Idle, RenderState.TextFallback, "empty input")
            return self._commit(generation, TextFallback(cfg.empty_message), None)

        state = self._move(generation, RenderState.Idle, RenderState.AttemptingPrimary)
        sanitized = validate_and_sanitize(raw, cfg.default_header, cfg.placeholder_id)
        result = await self._attempt_primary(generation, sanitized)
        if result is not None:
            self._move(generation, state, RenderState.PrimaryEngineSuccess)
            return self._commit(generation, result, sanitized)

        state = RenderState.AttemptingGeneric
        result = self._attempt_generic(raw, sanitized)
        if result is not None:
            self._move(generation, state, RenderState.GenericGraphSuccess)
            return self._commit(generation, result, sanitized)

        state = self._move(generation, state, RenderState.AttemptingText, "no nodes found")
        self._move(generation, state, RenderState.TextFallback)
        return self._commit(generation, self._text_view(raw, sanitized), sanitized)

    async def _attempt_primary(self, generation: int, sanitized: SanitizedDiagram) -> PrimaryEngineSuccess | None:
        unique_id = new_unique_id()
        source = RenderState.AttemptingPrimary
        try:
            call = self.engine.render(unique_id, sanitized.text)
            if self.config.engine_timeout is not None:
                output = await asyncio.wait_for(call, self.config.engine_timeout)
            else:
                output = await call
            svg = output.svg
        except EngineRejection as e:
            logger.info("%s", e)
            self._move(generation, source, RenderState.AttemptingGeneric, str(e))
            return None
        except asyncio.TimeoutError:
            logger.info("engine timed out on %s after %ss", unique_id, self.config.engine_timeout)
            self._move(generation, source, RenderState.AttemptingGeneric, "timeout")
            return None
        except Exception as e:
            logger.warning("engine failed on %s: %r", unique_id, e)
            self._move(generation, source, RenderState.AttemptingGeneric, repr(e))
            return None
        return PrimaryEngineSuccess(svg=svg)

    def _attempt_generic(self, raw: str, sanitized: SanitizedDiagram) -> GenericGraphSuccess | None:
        max_len = self.config.label_max_length
        graph = extract_graph(sanitized.text, max_len)
        if graph.is_empty():
            graph = extract_graph(raw, max_len)
        if graph.is_empty():
            return None
        return GenericGraphSuccess(positioned=layout(graph, self.config))

    def _text_view(self, raw: str, sanitized: SanitizedDiagram) -> TextFallback:
        # a lone header leaves no body once the synthesized one is dropped
        text = sanitized.body or raw.strip()
        budget = self.config.text_budget
        if len(text) > budget:
            text = text[:budget] + self.config.ellipsis
        return TextFallback(text)


async def render_diagram(
    raw: str,
    engine: PrimaryEngine | None = None,
    config: PipelineConfig | None = None,
) -> RenderResult:
    """Render one diagram with a throwaway DiagramRenderer."""
    return await DiagramRenderer(engine, config).render(raw)
