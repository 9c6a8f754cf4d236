"""Public render entry points: graph + config -> styled grid."""

from __future__ import annotations

from termgraph.config import RenderConfig
from termgraph.ir.graph import DirectedGraph
from termgraph.layout.engine import full_layout
from termgraph.renderers.compositor import composite
from termgraph.renderers.grid import Grid


def render(graph: DirectedGraph, config: RenderConfig | None = None) -> Grid:
    """Lay out and paint ``graph``.

    Args:
        graph: The graph to draw; it is not modified.
        config: Render options; defaults to ``RenderConfig()``.

    Returns:
        An immutable Grid; empty (0x0) when the graph has no nodes.
    """
    config = config or RenderConfig()
    if graph.is_empty():
        return Grid.empty()
    return composite(full_layout(graph, config), config)


def render_text(graph: DirectedGraph, config: RenderConfig | None = None) -> str:
    """Render ``graph`` to plain text, dropping style tags."""
    return render(graph, config).to_text()
