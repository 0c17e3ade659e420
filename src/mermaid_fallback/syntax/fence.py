"""Locate the diagram inside a chat message."""

from __future__ import annotations

import re

_FENCED_RE = re.compile(r"```[ \t]*mermaid[^\n]*\n(.*?)(?:```|\Z)", re.DOTALL | re.IGNORECASE)
_BARE_HEADER_RE = re.compile(r"^[ \t]*(?:graph|flowchart)\s+(?:TD|TB|BT|LR|RL)\b", re.MULTILINE)


def extract_diagram(message: str) -> str:
    """Return the diagram source embedded in ``message``.

    The first fenced ```mermaid block wins (an unterminated fence runs to the
    end of the message). Without a fence, everything from the first line that
    opens with a flowchart header is taken. Returns "" when neither is found.
    """
    fenced = _FENCED_RE.search(message)
    if fenced:
        return fenced.group(1).strip()
    bare = _BARE_HEADER_RE.search(message)
    if bare:
        return message[bare.start() :].strip()
    return ""
