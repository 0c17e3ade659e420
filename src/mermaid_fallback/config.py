"""Centralized configuration for mermaid-fallback."""

from __future__ import annotations

from dataclasses import dataclass

LABEL_MAX_LENGTH: int = 40
TEXT_BUDGET: int = 300
DEFAULT_HEADER: str = "graph TD"
EMPTY_MESSAGE: str = "No diagram provided"


@dataclass(frozen=True)
class PipelineConfig:
    """Configuration for the repair and fallback pipeline."""

    label_max_length: int = LABEL_MAX_LENGTH
    text_budget: int = TEXT_BUDGET
    ellipsis: str = "..."
    empty_message: str = EMPTY_MESSAGE
    default_header: str = DEFAULT_HEADER
    placeholder_id: str = "MissingNode"
    node_x: int = 250
    origin_y: int = 50
    row_height: int = 120
    engine_timeout: float | None = None
