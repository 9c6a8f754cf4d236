"""Character sets, line glyph tables and junction merging."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum

from termgraph.types import LineKind, Side


class CharSet(Enum):
    Unicode = "unicode"
    Ascii = "ascii"


@dataclass(frozen=True)
class LineGlyphs:
    horizontal: str
    vertical: str
    top_left: str
    top_right: str
    bottom_left: str
    bottom_right: str
    tee_right: str
    tee_left: str
    tee_down: str
    tee_up: str
    cross: str
    arrow_right: str
    arrow_left: str
    arrow_down: str
    arrow_up: str
    self_loop: str
    dotted_horizontal: str
    dotted_vertical: str
    thick_horizontal: str
    thick_vertical: str

    @classmethod
    def unicode(cls) -> LineGlyphs:
        return cls(
            horizontal="─",
            vertical="│",
            top_left="┌",
            top_right="┐",
            bottom_left="└",
            bottom_right="┘",
            tee_right="├",
            tee_left="┤",
            tee_down="┬",
            tee_up="┴",
            cross="┼",
            arrow_right="►",
            arrow_left="◄",
            arrow_down="▼",
            arrow_up="▲",
            self_loop="↺",
            dotted_horizontal="╌",
            dotted_vertical="╎",
            thick_horizontal="═",
            thick_vertical="║",
        )

    @classmethod
    def ascii(cls) -> LineGlyphs:
        return cls(
            horizontal="-",
            vertical="|",
            top_left="+",
            top_right="+",
            bottom_left="+",
            bottom_right="+",
            tee_right="+",
            tee_left="+",
            tee_down="+",
            tee_up="+",
            cross="+",
            arrow_right=">",
            arrow_left="<",
            arrow_down="v",
            arrow_up="^",
            self_loop="@",
            dotted_horizontal=".",
            dotted_vertical=":",
            thick_horizontal="=",
            thick_vertical="#",
        )

    @classmethod
    def for_charset(cls, cs: CharSet) -> LineGlyphs:
        if cs == CharSet.Unicode:
            return cls.unicode()
        return cls.ascii()

    @classmethod
    def custom(cls, vertical: str, horizontal: str, crossing: str, base: CharSet = CharSet.Ascii) -> LineGlyphs:
        """Plain lines drawn with the given glyphs; every corner and tee uses ``crossing``."""
        return dataclasses.replace(
            cls.for_charset(base),
            horizontal=horizontal,
            vertical=vertical,
            top_left=crossing,
            top_right=crossing,
            bottom_left=crossing,
            bottom_right=crossing,
            tee_right=crossing,
            tee_left=crossing,
            tee_down=crossing,
            tee_up=crossing,
            cross=crossing,
            dotted_horizontal=horizontal,
            dotted_vertical=vertical,
            thick_horizontal=horizontal,
            thick_vertical=vertical,
        )

    def straight(self, kind: LineKind, vertical: bool) -> str:
        if kind == LineKind.Dotted:
            return self.dotted_vertical if vertical else self.dotted_horizontal
        if kind == LineKind.Thick:
            return self.thick_vertical if vertical else self.thick_horizontal
        return self.vertical if vertical else self.horizontal

    def arrow(self, approach: Side) -> str:
        """Arrowhead for a path arriving from ``approach`` (pointing away from it)."""
        match approach:
            case Side.TOP:
                return self.arrow_down
            case Side.BOTTOM:
                return self.arrow_up
            case Side.LEFT:
                return self.arrow_right
            case _:
                return self.arrow_left


@dataclass
class Arms:
    """Which arms of a junction cell are active."""

    up: bool = False
    down: bool = False
    left: bool = False
    right: bool = False

    def merge(self, other: Arms) -> Arms:
        return Arms(
            up=self.up or other.up,
            down=self.down or other.down,
            left=self.left or other.left,
            right=self.right or other.right,
        )

    def to_char(self, glyphs: LineGlyphs, kind: LineKind = LineKind.Solid) -> str:
        key = (self.up, self.down, self.left, self.right)
        match key:
            case (False, False, False, False):
                return " "
            case (True, _, False, False) | (_, True, False, False):
                return glyphs.straight(kind, vertical=True)
            case (False, False, True, _) | (False, False, _, True):
                return glyphs.straight(kind, vertical=False)
            case (False, True, False, True):
                return glyphs.top_left
            case (False, True, True, False):
                return glyphs.top_right
            case (True, False, False, True):
                return glyphs.bottom_left
            case (True, False, True, False):
                return glyphs.bottom_right
            case (True, True, False, True):
                return glyphs.tee_right
            case (True, True, True, False):
                return glyphs.tee_left
            case (False, True, True, True):
                return glyphs.tee_down
            case (True, False, True, True):
                return glyphs.tee_up
            case _:
                return glyphs.cross
