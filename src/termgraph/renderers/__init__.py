"""Renderers: grid compositing and terminal output."""

from termgraph.renderers.canvas import Canvas, Priority
from termgraph.renderers.charset import Arms, CharSet, LineGlyphs
from termgraph.renderers.grid import BLANK, Cell, Grid

__all__ = [
    "BLANK",
    "Arms",
    "Canvas",
    "Cell",
    "CharSet",
    "Grid",
    "LineGlyphs",
    "Priority",
]
