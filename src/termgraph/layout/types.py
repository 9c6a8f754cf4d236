"""Layout types shared by the layout stages and the grid compositor."""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass, field
from functools import cached_property

from termgraph.ir.graph import EdgeData, Label
from termgraph.types import LineKind, Side

DUMMY_PREFIX = "__dummy_"

# Columns reserved left of a node for its self-loop annotation.
SELF_LOOP_LEAD = 2
# Columns reserved right of a node for its feedback port (arrow or connector, then the turn).
PORT_WIDTH = 2


@dataclass(frozen=True)
class DummyId:
    """Placeholder slot for a long edge crossing an intermediate layer."""

    edge_index: int
    layer: int

    def __str__(self) -> str:
        return f"{DUMMY_PREFIX}{self.edge_index}_{self.layer}"


@dataclass
class CycleBreakResult:
    """Partition of the graph's edges into forward/cross and feedback edges."""

    forward: list[EdgeData] = field(default_factory=list)
    feedback: list[EdgeData] = field(default_factory=list)

    @cached_property
    def feedback_indices(self) -> frozenset[int]:
        return frozenset(e.index for e in self.feedback)

    def is_feedback(self, edge: EdgeData) -> bool:
        return edge.index in self.feedback_indices


@dataclass
class LayerAssignment:
    """Layer index per node, plus the component each node belongs to."""

    layers: dict[Hashable, int]
    layer_count: int
    components: dict[Hashable, int] = field(default_factory=dict)

    def layer(self, node_id: Hashable) -> int:
        return self.layers[node_id]


@dataclass
class LayoutNode:
    """A slot placed in a layer: a real node or a dummy lane slot."""

    id: Hashable
    layer: int
    order: int
    x: int
    width: int
    y: int = 0
    label: Label = ()
    style: object | None = None
    lead: int = 0
    port: int = 0

    @property
    def is_dummy(self) -> bool:
        return isinstance(self.id, DummyId)

    @property
    def x_end(self) -> int:
        return self.x + self.width

    @property
    def center(self) -> int:
        return self.x + self.width // 2

    @property
    def port_column(self) -> int:
        """Column where feedback paths turn into or out of the node row."""
        return self.x_end + 1

    @property
    def footprint(self) -> int:
        return self.lead + self.width + self.port

    def columns(self) -> range:
        return range(self.x, self.x + self.width)


@dataclass
class ColumnAllocation:
    """Ordered slots per layer and the slot chain each forward edge follows."""

    layers: list[list[LayoutNode]]
    chains: dict[int, list[Hashable]]
    width: int

    def slot_map(self) -> dict[Hashable, LayoutNode]:
        return {slot.id: slot for layer in self.layers for slot in layer}


@dataclass(frozen=True)
class Point:
    """A 2D point in character coordinates (column, row)."""

    x: int
    y: int


@dataclass
class Lane:
    """A horizontal run reserved for one edge inside a gap."""

    edge_index: int
    row: int
    from_x: int
    to_x: int
    feedback: bool = False


@dataclass
class Gap:
    """The band of rows above layer ``index`` (``index == layer_count`` is the bottom margin)."""

    index: int
    top: int
    height: int
    lanes: list[Lane] = field(default_factory=list)

    @property
    def exit_row(self) -> int:
        return self.top

    @property
    def arrow_row(self) -> int:
        return self.top + self.height - 1


@dataclass
class RoutedEdge:
    """An edge routed as orthogonal waypoints; the last waypoint is the arrowhead cell."""

    edge: EdgeData
    waypoints: list[Point]
    start_side: Side
    arrow_side: Side
    kind: LineKind = LineKind.Solid
    style: object | None = None
    feedback: bool = False
    self_loop: bool = False

    @property
    def arrow(self) -> Point:
        return self.waypoints[-1]

    def cells(self) -> list[Point]:
        """Every cell the route covers, in order, arrowhead last."""
        if not self.waypoints:
            return []
        out = [self.waypoints[0]]
        for p1 in self.waypoints[1:]:
            x, y = out[-1].x, out[-1].y
            step = 1 if p1.x > x else -1
            while x != p1.x:
                x += step
                out.append(Point(x, y))
            step = 1 if p1.y > y else -1
            while y != p1.y:
                y += step
                out.append(Point(x, y))
        return out

    def path_cells(self) -> list[Point]:
        return self.cells()[:-1]


@dataclass
class LayoutResult:
    """Self-contained layout output: everything the compositor needs."""

    nodes: list[LayoutNode]
    edges: list[RoutedEdge]
    width: int
    height: int
    assignment: LayerAssignment | None = None
    cycles: CycleBreakResult | None = None
    gaps: list[Gap] = field(default_factory=list)

    def real_nodes(self) -> list[LayoutNode]:
        return [n for n in self.nodes if not n.is_dummy]

    def node(self, node_id: Hashable) -> LayoutNode:
        for n in self.nodes:
            if n.id == node_id:
                return n
        raise KeyError(node_id)
