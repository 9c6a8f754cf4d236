"""Layout stages and their shared types."""

from termgraph.layout.columns import allocate_columns, node_width
from termgraph.layout.cycles import acyclic_reduction, break_cycles
from termgraph.layout.engine import full_layout
from termgraph.layout.layering import assign_layers, rank_components
from termgraph.layout.routing import EdgeRouter, route_edges
from termgraph.layout.types import (
    DUMMY_PREFIX,
    ColumnAllocation,
    CycleBreakResult,
    DummyId,
    Gap,
    Lane,
    LayerAssignment,
    LayoutNode,
    LayoutResult,
    Point,
    RoutedEdge,
)

__all__ = [
    "DUMMY_PREFIX",
    "ColumnAllocation",
    "CycleBreakResult",
    "DummyId",
    "EdgeRouter",
    "Gap",
    "Lane",
    "LayerAssignment",
    "LayoutNode",
    "LayoutResult",
    "Point",
    "RoutedEdge",
    "acyclic_reduction",
    "allocate_columns",
    "assign_layers",
    "break_cycles",
    "full_layout",
    "node_width",
    "rank_components",
    "route_edges",
]
