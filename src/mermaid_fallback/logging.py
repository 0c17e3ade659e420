"""Logging setup shared by the library and the command line."""

from __future__ import annotations

import logging
import sys

__all__ = ["setup_logging", "get_logger"]


def setup_logging(level: int = logging.INFO) -> None:
    """Setup basic logging configuration for the pipeline.

    Logs go to stderr so CLI output on stdout stays clean.
    """
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with the given name."""
    return logging.getLogger(name)
