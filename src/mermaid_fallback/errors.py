"""Exception hierarchy for the rendering pipeline.

Only the primary engine tier raises; the orchestrator catches at each tier
boundary and falls through to the next one.
"""

from __future__ import annotations

import time
from typing import Any


class DiagramError(Exception):
    """Base exception with context for logging."""

    def __init__(self, message: str, operation: str | None = None, **metadata: Any) -> None:
        self.operation = operation
        self.timestamp = time.time()
        self.metadata = metadata
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging."""
        return {
            "error_type": self.__class__.__name__,
            "message": str(self),
            "operation": self.operation,
            "timestamp": self.timestamp,
            "metadata": self.metadata,
        }


class EngineRejection(DiagramError):
    """The primary engine refused the diagram text."""

    def __init__(self, unique_id: str, detail: str = "", **metadata: Any) -> None:
        self.unique_id = unique_id
        self.detail = detail
        message = f"engine rejected diagram {unique_id}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message, operation="engine_render", unique_id=unique_id, **metadata)
