"""Layout pipeline: cycle breaking, layering, column allocation, routing."""

from __future__ import annotations

import logging

from termgraph.config import RenderConfig
from termgraph.ir.graph import DirectedGraph
from termgraph.layout.columns import allocate_columns
from termgraph.layout.cycles import break_cycles
from termgraph.layout.layering import assign_layers
from termgraph.layout.routing import route_edges
from termgraph.layout.types import LayoutResult

logger = logging.getLogger(__name__)


def full_layout(graph: DirectedGraph, config: RenderConfig | None = None) -> LayoutResult:
    """Run every layout stage on ``graph``; the graph itself is never mutated."""
    config = config or RenderConfig()
    logger.debug("layout: %d nodes, %d edges", graph.node_count(), graph.edge_count())
    cycles = break_cycles(graph)
    la = assign_layers(graph, cycles)
    alloc = allocate_columns(graph, la, cycles, config)
    return route_edges(graph, config, cycles, la, alloc)
