"""Column allocation: order each layer and give every slot a column span.

Real nodes come first in a layer, ordered by (component rank, insertion
order). Each forward edge spanning more than one layer gets a width-1 dummy
slot in every intermediate layer; dummies follow the real nodes of their
component, ordered by the column of the slot above them. A node spans
``max(min_node_width, glyph_width(label))`` columns and consecutive slots are
``horizontal_spacing`` columns apart.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable

from termgraph.config import RenderConfig
from termgraph.ir.graph import DirectedGraph, EdgeData, Label, label_text
from termgraph.layout.types import (
    PORT_WIDTH,
    SELF_LOOP_LEAD,
    ColumnAllocation,
    CycleBreakResult,
    DummyId,
    LayerAssignment,
    LayoutNode,
)
from termgraph.types import FeedbackPlacement

logger = logging.getLogger(__name__)


def node_width(label: Label, config: RenderConfig) -> int:
    """Column span of a node; a node always occupies at least one cell."""
    return max(config.min_node_width, config.label_width(label_text(label)), 1)


def build_chains(
    forward: list[EdgeData],
    la: LayerAssignment,
) -> tuple[dict[int, list[Hashable]], dict[int, list[tuple[DummyId, EdgeData]]]]:
    """Slot chain per forward edge, and the dummies each layer must host."""
    chains: dict[int, list[Hashable]] = {}
    dummies: dict[int, list[tuple[DummyId, EdgeData]]] = {}
    for edge in forward:
        src_layer = la.layer(edge.source)
        tgt_layer = la.layer(edge.target)
        chain: list[Hashable] = [edge.source]
        for layer in range(src_layer + 1, tgt_layer):
            dummy = DummyId(edge_index=edge.index, layer=layer)
            chain.append(dummy)
            dummies.setdefault(layer, []).append((dummy, edge))
        chain.append(edge.target)
        chains[edge.index] = chain
    return chains, dummies


def allocate_columns(
    graph: DirectedGraph,
    la: LayerAssignment,
    cycles: CycleBreakResult,
    config: RenderConfig,
) -> ColumnAllocation:
    """Place every node and dummy slot of every layer."""
    labels: dict[Hashable, Label] = {node.id: config.formatter.format_node(node) for node in graph.nodes()}
    looped: set[Hashable] = {e.source for e in cycles.feedback if e.is_self_loop}
    ported = _ported_nodes(cycles, config)
    chains, dummies = build_chains(cycles.forward, la)

    members: list[list[Hashable]] = [[] for _ in range(la.layer_count)]
    for node in sorted(graph.nodes(), key=lambda n: (la.components[n.id], n.index)):
        members[la.layer(node.id)].append(node.id)

    def lead(slot_id: Hashable) -> int:
        return SELF_LOOP_LEAD if slot_id in looped else 0

    def port(slot_id: Hashable) -> int:
        return PORT_WIDTH if slot_id in ported else 0

    def footprint(slot_id: Hashable) -> int:
        if isinstance(slot_id, DummyId):
            return 1
        return lead(slot_id) + node_width(labels[slot_id], config) + port(slot_id)

    layer_widths: list[int] = []
    for layer_idx in range(la.layer_count):
        count = len(members[layer_idx]) + len(dummies.get(layer_idx, []))
        total = sum(footprint(nid) for nid in members[layer_idx]) + len(dummies.get(layer_idx, []))
        layer_widths.append(total + max(0, count - 1) * config.horizontal_spacing)
    max_width = max(layer_widths, default=0)

    placed: dict[Hashable, LayoutNode] = {}
    layers: list[list[LayoutNode]] = []
    for layer_idx in range(la.layer_count):
        order = _order_layer(members[layer_idx], dummies.get(layer_idx, []), chains, placed, la)
        offset = (max_width - layer_widths[layer_idx]) // 2 if config.center_layers else 0
        x = offset
        row: list[LayoutNode] = []
        for position, slot_id in enumerate(order):
            if isinstance(slot_id, DummyId):
                slot = LayoutNode(id=slot_id, layer=layer_idx, order=position, x=x, width=1)
            else:
                node = graph.node(slot_id)
                slot = LayoutNode(
                    id=slot_id,
                    layer=layer_idx,
                    order=position,
                    x=x + lead(slot_id),
                    width=node_width(labels[slot_id], config),
                    label=labels[slot_id],
                    style=node.style,
                    lead=lead(slot_id),
                    port=port(slot_id),
                )
            placed[slot_id] = slot
            row.append(slot)
            x += footprint(slot_id) + config.horizontal_spacing
        layers.append(row)

    logger.debug("column allocation: %d layers, widest %d columns", len(layers), max_width)
    return ColumnAllocation(layers=layers, chains=chains, width=max_width)


def _order_layer(
    nodes: list[Hashable],
    dummies: list[tuple[DummyId, EdgeData]],
    chains: dict[int, list[Hashable]],
    placed: dict[Hashable, LayoutNode],
    la: LayerAssignment,
) -> list[Hashable]:
    """Real nodes per component, each component followed by its dummies."""

    def predecessor_center(dummy: DummyId) -> int:
        chain = chains[dummy.edge_index]
        prev = chain[chain.index(dummy) - 1]
        return placed[prev].center

    by_component: dict[int, list[Hashable]] = {}
    for node_id in nodes:
        by_component.setdefault(la.components[node_id], []).append(node_id)
    for dummy, edge in sorted(dummies, key=lambda d: (predecessor_center(d[0]), d[1].index)):
        by_component.setdefault(la.components[edge.source], []).append(dummy)

    order: list[Hashable] = []
    for rank in sorted(by_component):
        order.extend(by_component[rank])
    return order


def _ported_nodes(cycles: CycleBreakResult, config: RenderConfig) -> set[Hashable]:
    """Nodes whose right side hosts a feedback port.

    Feedback edges placed below enter their target from the right; feedback
    edges placed above leave their source to the right.
    """
    ported: set[Hashable] = set()
    for edge in cycles.feedback:
        if edge.is_self_loop:
            continue
        if config.feedback_placement is FeedbackPlacement.ABOVE:
            ported.add(edge.source)
        else:
            ported.add(edge.target)
    return ported
