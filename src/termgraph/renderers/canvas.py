"""Canvas: mutable compositing surface with paint priorities."""

from __future__ import annotations

from enum import IntEnum

from termgraph.renderers.charset import Arms, LineGlyphs
from termgraph.renderers.grid import Cell, Grid
from termgraph.types import LineKind


class Priority(IntEnum):
    """Which element owns a cell; a lower priority never paints over a higher one."""

    BLANK = 0
    PATH = 1
    ARROW = 2
    NODE = 3


class Canvas:
    """A 2D grid onto which nodes, edge paths and arrowheads are painted."""

    def __init__(self, width: int, height: int, glyphs: LineGlyphs, merge_glyph: str | None = None) -> None:
        self.width = width
        self.height = height
        self.glyphs = glyphs
        self.merge_glyph = merge_glyph
        self.chars: list[list[str]] = [[" "] * width for _ in range(height)]
        self.styles: list[list[object | None]] = [[None] * width for _ in range(height)]
        self.priority: list[list[Priority]] = [[Priority.BLANK] * width for _ in range(height)]
        # Path cells drawn from arms: (col, row) -> (merged arms, per-edge arms, kinds)
        self.arms: dict[tuple[int, int], tuple[Arms, dict[int, Arms], set[LineKind]]] = {}

    def in_bounds(self, col: int, row: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def set(self, col: int, row: int, c: str, style: object | None, priority: Priority) -> bool:
        """Paint a character unless a higher-priority element owns the cell."""
        if not self.in_bounds(col, row) or self.priority[row][col] > priority:
            return False
        self.chars[row][col] = c
        self.styles[row][col] = style
        self.priority[row][col] = priority
        self.arms.pop((col, row), None)
        return True

    def set_arms(
        self,
        col: int,
        row: int,
        arms: Arms,
        edge_index: int,
        kind: LineKind,
        style: object | None,
    ) -> bool:
        """Add an edge's line arms to a path cell, merging with other edges there."""
        if not self.in_bounds(col, row) or self.priority[row][col] > Priority.PATH:
            return False
        key = (col, row)
        if key in self.arms:
            merged, per_edge, kinds = self.arms[key]
            per_edge[edge_index] = per_edge.get(edge_index, Arms()).merge(arms)
            kinds.add(kind)
            self.arms[key] = (merged.merge(arms), per_edge, kinds)
            if self.styles[row][col] != style:
                self.styles[row][col] = None
        else:
            self.arms[key] = (arms, {edge_index: arms}, {kind})
            self.styles[row][col] = style
            self.priority[row][col] = Priority.PATH
        return True

    def _junction_char(self, merged: Arms, per_edge: dict[int, Arms], kinds: set[LineKind]) -> str:
        shared = len(per_edge) > 1
        if shared and self.merge_glyph is not None and all(a != merged for a in per_edge.values()):
            return self.merge_glyph
        kind = next(iter(kinds)) if len(kinds) == 1 else LineKind.Solid
        return merged.to_char(self.glyphs, kind)

    def freeze(self) -> Grid:
        for (col, row), (merged, per_edge, kinds) in self.arms.items():
            self.chars[row][col] = self._junction_char(merged, per_edge, kinds)
        return Grid(
            rows=tuple(
                tuple(Cell(self.chars[y][x], self.styles[y][x]) for x in range(self.width))
                for y in range(self.height)
            )
        )
