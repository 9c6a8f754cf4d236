"""Grid: the immutable styled character grid a render call returns."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass


@dataclass(frozen=True)
class Cell:
    """One terminal column: a character (``" "`` when blank) and an optional style tag.

    A wide glyph occupies its own cell plus continuation cells whose ``char``
    is the empty string.
    """

    char: str = " "
    style: object | None = None

    @property
    def is_blank(self) -> bool:
        return self.char == " "

    @property
    def is_continuation(self) -> bool:
        return self.char == ""


BLANK = Cell()


@dataclass(frozen=True)
class Grid:
    """A rectangular, immutable array of cells indexed as ``cell(x, y)``."""

    rows: tuple[tuple[Cell, ...], ...] = ()

    @classmethod
    def empty(cls) -> Grid:
        return cls(rows=())

    @property
    def height(self) -> int:
        return len(self.rows)

    @property
    def width(self) -> int:
        return len(self.rows[0]) if self.rows else 0

    @property
    def dimensions(self) -> tuple[int, int]:
        return (self.width, self.height)

    def cell(self, x: int, y: int) -> Cell:
        if 0 <= y < self.height and 0 <= x < self.width:
            return self.rows[y][x]
        raise IndexError(f"cell ({x}, {y}) outside {self.width}x{self.height} grid")

    def row_text(self, y: int) -> str:
        return "".join(c.char for c in self.rows[y])

    def lines(self) -> Iterator[str]:
        for y in range(self.height):
            yield self.row_text(y).rstrip()

    def to_text(self) -> str:
        """Plain text, trailing blanks stripped per row, newline-terminated."""
        if not self.rows:
            return ""
        out = "\n".join(self.lines()).rstrip("\n")
        return out + "\n"

    def find(self, char: str) -> list[tuple[int, int]]:
        """All (x, y) positions holding ``char``."""
        return [(x, y) for y, row in enumerate(self.rows) for x, c in enumerate(row) if c.char == char]

    def __str__(self) -> str:
        return self.to_text()
