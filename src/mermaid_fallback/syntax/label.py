"""Label sanitizer: turn a model-written node label into a safe one-line label.

The steps run in a fixed order so each one sees the output of the previous:

  1. emphasis asterisks are deleted, enclosed text kept
  2. underscores used as emphasis are deleted (snake_case survives)
  3. line breaks collapse to a single space
  4. characters outside printable ASCII are dropped
  5. parentheses, angle brackets, quotes and structural characters are dropped
  6. the result is trimmed and truncated

``sanitize`` is total and idempotent.
"""

from __future__ import annotations

import re

from mermaid_fallback.config import LABEL_MAX_LENGTH

_EMPHASIS_RE = re.compile(r"\*+")
_UNDERSCORE_RE = re.compile(r"(?<![A-Za-z0-9_])_+|_+(?![A-Za-z0-9_])")
_LINE_BREAK_RE = re.compile(r"[ \t]*[\r\n]\s*")
_NON_PRINTABLE_RE = re.compile(r"[^\x20-\x7e]")
_SPECIAL_RE = re.compile(r"[()<>\"`\[\]{}|]")


def sanitize(raw_label: str, max_length: int | None = LABEL_MAX_LENGTH) -> str:
    """Normalize a raw label into a single-line printable ASCII string.

    Args:
        raw_label: Label text as written by the model.
        max_length: Truncation limit; None keeps the full text (used when the
            label is destined for the primary engine).

    Returns:
        The sanitized label; empty input yields an empty string.
    """
    label = _EMPHASIS_RE.sub("", raw_label)
    label = _UNDERSCORE_RE.sub("", label)
    label = _LINE_BREAK_RE.sub(" ", label)
    label = _NON_PRINTABLE_RE.sub("", label)
    label = _SPECIAL_RE.sub("", label)
    label = label.strip()
    if max_length is not None and len(label) > max_length:
        # a cut can leave a dangling blank or a half snake_case word
        label = label[:max_length].rstrip(" _")
    return label


def has_emphasis(text: str) -> bool:
    return "*" in text or _UNDERSCORE_RE.search(text) is not None


def has_non_ascii(text: str) -> bool:
    return _NON_PRINTABLE_RE.search(text) is not None


def has_special_chars(text: str) -> bool:
    return _SPECIAL_RE.search(text) is not None
