"""Character sets and junction merging for box-drawing."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from mermaid_fallback.types import EdgeType


class CharSet(Enum):
    Unicode = "unicode"
    Ascii = "ascii"


@dataclass(frozen=True)
class BoxChars:
    top_left: str
    top_right: str
    bottom_left: str
    bottom_right: str
    horizontal: str
    vertical: str
    tee_right: str
    tee_left: str
    tee_down: str
    tee_up: str
    cross: str
    arrow_left: str
    arrow_down: str
    arrow_up: str

    @classmethod
    def for_charset(cls, cs: CharSet) -> BoxChars:
        return _UNICODE if cs == CharSet.Unicode else _ASCII

    def vertical_for(self, edge_type: EdgeType) -> str:
        """The vertical stroke for a connector kind; plain ASCII has only one."""
        if self is _ASCII:
            return self.vertical
        if edge_type in (EdgeType.ThickArrow, EdgeType.ThickLine, EdgeType.BidirThick):
            return "║"
        if edge_type in (EdgeType.DottedArrow, EdgeType.DottedLine, EdgeType.BidirDotted):
            return "╎"
        return self.vertical


_UNICODE = BoxChars(
    top_left="┌",
    top_right="┐",
    bottom_left="└",
    bottom_right="┘",
    horizontal="─",
    vertical="│",
    tee_right="├",
    tee_left="┤",
    tee_down="┬",
    tee_up="┴",
    cross="┼",
    arrow_left="◄",
    arrow_down="▼",
    arrow_up="▲",
)

_ASCII = BoxChars(
    top_left="+",
    top_right="+",
    bottom_left="+",
    bottom_right="+",
    horizontal="-",
    vertical="|",
    tee_right="+",
    tee_left="+",
    tee_down="+",
    tee_up="+",
    cross="+",
    arrow_left="<",
    arrow_down="v",
    arrow_up="^",
)

# (up, down, left, right) per junction character
_ARMS_BY_CHAR: dict[str, tuple[bool, bool, bool, bool]] = {
    "─": (False, False, True, True),
    "│": (True, True, False, False),
    "┌": (False, True, False, True),
    "┐": (False, True, True, False),
    "└": (True, False, False, True),
    "┘": (True, False, True, False),
    "├": (True, True, False, True),
    "┤": (True, True, True, False),
    "┬": (False, True, True, True),
    "┴": (True, False, True, True),
    "┼": (True, True, True, True),
    "-": (False, False, True, True),
    "|": (True, True, False, False),
    "+": (True, True, True, True),
}


@dataclass(frozen=True)
class Arms:
    """Which arms of a junction cell are active."""

    up: bool = False
    down: bool = False
    left: bool = False
    right: bool = False

    @classmethod
    def from_char(cls, c: str) -> Arms | None:
        entry = _ARMS_BY_CHAR.get(c)
        if entry is None:
            return None
        return cls(*entry)

    def merge(self, other: Arms) -> Arms:
        return Arms(
            up=self.up or other.up,
            down=self.down or other.down,
            left=self.left or other.left,
            right=self.right or other.right,
        )

    def to_char(self, cs: CharSet) -> str:
        bc = BoxChars.for_charset(cs)
        key = (self.up, self.down, self.left, self.right)
        match key:
            case (False, False, False, False):
                return " "
            case (_, _, False, False):
                return bc.vertical
            case (False, False, _, _):
                return bc.horizontal
            case (False, True, False, True):
                return bc.top_left
            case (False, True, True, False):
                return bc.top_right
            case (True, False, False, True):
                return bc.bottom_left
            case (True, False, True, False):
                return bc.bottom_right
            case (True, True, False, True):
                return bc.tee_right
            case (True, True, True, False):
                return bc.tee_left
            case (False, True, True, True):
                return bc.tee_down
            case (True, False, True, True):
                return bc.tee_up
            case _:
                return bc.cross
