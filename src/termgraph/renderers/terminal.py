"""Terminal writer: turns a Grid's style tags into ANSI colours via click."""

from __future__ import annotations

from typing import IO

import click

from termgraph.config import RenderConfig
from termgraph.ir.graph import DirectedGraph
from termgraph.render import render
from termgraph.renderers.grid import Grid
from termgraph.types import Color


def _fg(style: object | None) -> str | int | None:
    if style is None:
        return None
    if isinstance(style, Color):
        return style.value
    if isinstance(style, (str, int)) and not isinstance(style, bool):
        return style
    return None


def style_text(text: str, style: object | None) -> str:
    """Wrap text in the ANSI sequence for a style tag; unknown tags pass through plain."""
    fg = _fg(style)
    if fg is None or not text.strip():
        return text
    return click.style(text, fg=fg)


def to_ansi(grid: Grid, color: bool = True) -> str:
    """Render the grid as text, colouring runs of equally styled cells."""
    if not color:
        return grid.to_text()
    lines: list[str] = []
    for row in grid.rows:
        while row and row[-1].is_blank:
            row = row[:-1]
        parts: list[str] = []
        run: list[str] = []
        run_style: object | None = None
        for cell in row:
            if cell.style != run_style and run:
                parts.append(style_text("".join(run), run_style))
                run = []
            run_style = cell.style
            run.append(cell.char)
        if run:
            parts.append(style_text("".join(run), run_style))
        lines.append("".join(parts))
    if not lines:
        return ""
    return "\n".join(lines).rstrip("\n") + "\n"


def display(
    graph: DirectedGraph,
    config: RenderConfig | None = None,
    file: IO[str] | None = None,
    color: bool | None = None,
) -> None:
    """Render ``graph`` and write it to ``file`` (stdout by default).

    ``color=None`` lets click strip ANSI sequences when the target is not a terminal.
    """
    grid = render(graph, config)
    click.echo(to_ansi(grid, color=color is not False), file=file, nl=False, color=color)
