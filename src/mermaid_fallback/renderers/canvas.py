"""Canvas: a fixed-size 2D character grid for rendering."""

from __future__ import annotations

from mermaid_fallback.renderers.charset import Arms, BoxChars, CharSet


class Canvas:
    """A 2D character grid onto which boxes and connectors are painted.

    Writes outside the grid are ignored. Line characters drawn with
    ``set_merge`` combine with what is already there, so crossing connectors
    become junctions instead of overwriting each other.
    """

    def __init__(self, width: int, height: int, charset: CharSet) -> None:
        self.width = width
        self.height = height
        self.charset = charset
        self.chars = BoxChars.for_charset(charset)
        self.cells: list[list[str]] = [[" "] * width for _ in range(height)]

    def _inside(self, col: int, row: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def get(self, col: int, row: int) -> str:
        if self._inside(col, row):
            return self.cells[row][col]
        return " "

    def set(self, col: int, row: int, c: str) -> None:
        if self._inside(col, row):
            self.cells[row][col] = c

    def set_merge(self, col: int, row: int, c: str) -> None:
        if not self._inside(col, row):
            return
        existing = Arms.from_char(self.cells[row][col])
        new = Arms.from_char(c)
        if existing is not None and new is not None:
            self.cells[row][col] = existing.merge(new).to_char(self.charset)
        else:
            self.cells[row][col] = c

    def add_arm(self, col: int, row: int, **arm: bool) -> None:
        """Add one arm to the junction at a cell, e.g. a connector leaving a box border."""
        existing = Arms.from_char(self.get(col, row)) or Arms()
        self.set(col, row, existing.merge(Arms(**arm)).to_char(self.charset))

    def hline(self, row: int, x1: int, x2: int, c: str | None = None) -> None:
        lo, hi = (x1, x2) if x1 <= x2 else (x2, x1)
        for col in range(lo, hi + 1):
            self.set_merge(col, row, c or self.chars.horizontal)

    def vline(self, col: int, y1: int, y2: int, c: str | None = None) -> None:
        lo, hi = (y1, y2) if y1 <= y2 else (y2, y1)
        for row in range(lo, hi + 1):
            self.set_merge(col, row, c or self.chars.vertical)

    def draw_box(self, x: int, y: int, width: int, height: int) -> None:
        if width < 2 or height < 2:
            return
        bc = self.chars
        x1 = x + width - 1
        y1 = y + height - 1
        self.set(x, y, bc.top_left)
        self.set(x1, y, bc.top_right)
        self.set(x, y1, bc.bottom_left)
        self.set(x1, y1, bc.bottom_right)
        for col in range(x + 1, x1):
            self.set(col, y, bc.horizontal)
            self.set(col, y1, bc.horizontal)
        for row in range(y + 1, y1):
            self.set(x, row, bc.vertical)
            self.set(x1, row, bc.vertical)

    def write_str(self, col: int, row: int, s: str) -> None:
        for i, ch in enumerate(s):
            self.set(col + i, row, ch)

    def to_string(self) -> str:
        out = "\n".join("".join(row).rstrip() for row in self.cells)
        return out.rstrip("\n") + "\n"
