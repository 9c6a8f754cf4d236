"""Grid compositor: paints nodes, edge paths and arrowheads onto one grid.

Priority per cell is node > arrowhead > path > blank. Path cells shared by
several edges merge into a junction glyph.
"""

from __future__ import annotations

import logging

from termgraph.config import RenderConfig
from termgraph.ir.graph import label_text
from termgraph.layout.types import LayoutNode, LayoutResult, Point, RoutedEdge
from termgraph.renderers.canvas import Canvas, Priority
from termgraph.renderers.charset import Arms
from termgraph.renderers.grid import Grid
from termgraph.types import Side

logger = logging.getLogger(__name__)


def _toward(arms: Arms, p: Point, q: Point) -> None:
    """Switch on the arm of ``p`` that points at the neighbouring cell ``q``."""
    if q.x > p.x:
        arms.right = True
    elif q.x < p.x:
        arms.left = True
    elif q.y > p.y:
        arms.down = True
    elif q.y < p.y:
        arms.up = True


def _anchor_arm(arms: Arms, side: Side) -> None:
    # The first path cell sits just outside the node side it leaves from.
    match side:
        case Side.BOTTOM:
            arms.up = True
        case Side.TOP:
            arms.down = True
        case Side.LEFT:
            arms.right = True
        case Side.RIGHT:
            arms.left = True


def paint_node(canvas: Canvas, node: LayoutNode, config: RenderConfig) -> None:
    """Claim the node span and write its label, centred, clipped to the span."""
    for col in node.columns():
        canvas.set(col, node.y, " ", node.style, Priority.NODE)

    label_w = config.label_width(label_text(node.label))
    col = node.x + max(0, node.width - label_w) // 2
    for seg in node.label:
        style = seg.style if seg.style is not None else node.style
        for ch in seg.text:
            w = config.glyph_columns(ch)
            if col + w > node.x_end:
                return
            canvas.set(col, node.y, ch, style, Priority.NODE)
            for k in range(1, w):
                canvas.set(col + k, node.y, "", style, Priority.NODE)
            col += w


def paint_edge(canvas: Canvas, re: RoutedEdge) -> None:
    glyphs = canvas.glyphs
    cells = re.cells()
    if not cells:
        return

    if re.self_loop:
        for p in cells[:-1]:
            canvas.set(p.x, p.y, glyphs.self_loop, re.style, Priority.PATH)
    else:
        path = cells[:-1]
        for i, p in enumerate(path):
            arms = Arms()
            if i == 0:
                _anchor_arm(arms, re.start_side)
            else:
                _toward(arms, p, path[i - 1])
            _toward(arms, p, cells[i + 1])
            canvas.set_arms(p.x, p.y, arms, re.edge.index, re.kind, re.style)

    arrow = cells[-1]
    canvas.set(arrow.x, arrow.y, glyphs.arrow(re.arrow_side), re.style, Priority.ARROW)


def composite(result: LayoutResult, config: RenderConfig) -> Grid:
    """Merge node, path and arrowhead cells into the final grid."""
    canvas = Canvas(result.width, result.height, config.glyphs, config.merge_junction_glyph)
    for node in result.real_nodes():
        paint_node(canvas, node, config)
    for re in result.edges:
        paint_edge(canvas, re)
    grid = canvas.freeze()
    logger.debug("composited %dx%d grid", grid.width, grid.height)
    return grid
