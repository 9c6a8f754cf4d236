"""termgraph: render directed graphs, cycles included, as terminal text grids."""

from termgraph.config import GlyphWidth, RenderConfig, char_count_width, wcwidth_width
from termgraph.errors import DuplicateNodeError, GraphError, UnknownNodeError
from termgraph.formatter import IDFormatter, LabelFormatter, NodeFormat, ParenFormatter
from termgraph.ir.graph import DirectedGraph, EdgeData, NodeData, Segment
from termgraph.render import render, render_text
from termgraph.renderers.charset import CharSet, LineGlyphs
from termgraph.renderers.grid import Cell, Grid
from termgraph.renderers.terminal import display, to_ansi
from termgraph.types import Color, FeedbackPlacement, LineKind

__all__ = [
    "Cell",
    "CharSet",
    "Color",
    "DirectedGraph",
    "DuplicateNodeError",
    "EdgeData",
    "FeedbackPlacement",
    "GlyphWidth",
    "GraphError",
    "Grid",
    "IDFormatter",
    "LabelFormatter",
    "LineGlyphs",
    "LineKind",
    "NodeData",
    "NodeFormat",
    "ParenFormatter",
    "RenderConfig",
    "Segment",
    "UnknownNodeError",
    "char_count_width",
    "display",
    "render",
    "render_text",
    "to_ansi",
    "wcwidth_width",
]
