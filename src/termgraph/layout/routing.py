"""Edge routing on the character grid.

Every layer is one text row. Gap ``g`` is the band of rows above layer ``g``
(gap 0 is a top margin and gap ``layer_count`` a bottom margin; margins only
get rows when feedback edges use them). Inside a gap the rows are, top to
bottom: the exit row under the upper layer, feedback lanes (BELOW placement),
one lane per jogging edge segment, feedback lanes (ABOVE placement), and the
arrow row over the lower layer.

Forward edges leave their source's bottom anchor, jog horizontally in their own
lane and arrive at the target's top anchor; long edges thread through dummy
slots. Feedback edges run to a dedicated margin column right of all content and
climb back to their target. One end of a feedback edge uses a top or bottom
anchor like a forward edge; the other end turns through the port column right
of its node, so a node side never mixes arrowheads with departing lines.
Self-loops become a loop glyph and arrowhead left of the node.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable
from dataclasses import dataclass

from termgraph.config import RenderConfig
from termgraph.ir.graph import DirectedGraph, EdgeData
from termgraph.layout.types import (
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
from termgraph.types import FeedbackPlacement, LineKind, Side

logger = logging.getLogger(__name__)

# Columns between the content and the first feedback margin lane, and between lanes.
MARGIN_GAP = 1
MARGIN_STEP = 2


@dataclass
class _Segment:
    """One forward edge crossing one gap, from an upper slot to a lower slot."""

    edge_index: int
    upper: Hashable
    lower: Hashable
    sx: int
    tx: int
    row: int | None = None


@dataclass
class _Hop:
    """A feedback edge's horizontal run between a node anchor and its margin column."""

    edge_index: int
    x: int
    margin: int
    leaving: bool
    row: int | None = None


def spread_anchors(slot: LayoutNode, count: int) -> list[int]:
    """``count`` anchor columns spread over the slot's span, left to right.

    Columns are distinct while the span is at least ``count`` wide.
    """
    if slot.is_dummy:
        return [slot.x] * count
    return [slot.x + (2 * i + 1) * slot.width // (2 * count) for i in range(count)]


def order_lanes(segments: list[_Segment]) -> list[_Segment]:
    """Lane order for jogging segments in one gap, keyed on target column.

    Leftward jogs take the upper lanes in ascending target order, rightward
    jogs follow in descending target order; with that order two jogs whose
    spans do not overlap never cross.
    """
    left = sorted((s for s in segments if s.tx < s.sx), key=lambda s: (s.tx, s.sx, s.edge_index))
    right = sorted((s for s in segments if s.tx > s.sx), key=lambda s: (-s.tx, -s.sx, s.edge_index))
    return left + right


def order_hops(hops: list[_Hop], placement: FeedbackPlacement) -> list[_Hop]:
    """Feedback lane order in one gap, top to bottom; nearer lanes get columns further right.

    Hops sharing a column nest by margin. A leaving hop's margin run heads up
    from its lane, so inner margins take the upper rows; an arriving hop's
    margin run heads down, so outer margins take the upper rows.
    """

    def nesting(h: _Hop) -> int:
        return h.margin if h.leaving else -h.margin

    if placement == FeedbackPlacement.ABOVE:
        return sorted(hops, key=lambda h: (h.x, nesting(h), h.edge_index))
    return sorted(hops, key=lambda h: (-h.x, nesting(h), h.edge_index))


def simplify_waypoints(points: list[Point]) -> list[Point]:
    """Drop repeated points and collinear intermediate points."""
    deduped: list[Point] = []
    for p in points:
        if not deduped or deduped[-1] != p:
            deduped.append(p)
    if len(deduped) <= 2:
        return deduped
    result = [deduped[0]]
    for i in range(1, len(deduped) - 1):
        prev, curr, nxt = result[-1], deduped[i], deduped[i + 1]
        if (prev.x == curr.x == nxt.x) or (prev.y == curr.y == nxt.y):
            continue
        result.append(curr)
    result.append(deduped[-1])
    return result


def edge_styles(graph: DirectedGraph, config: RenderConfig) -> dict[int, object | None]:
    """Style tag per edge: its own colour, else a palette colour per source node."""
    styles: dict[int, object | None] = {}
    palette = config.color_palette
    source_rank: dict[Hashable, int] = {}
    for edge in graph.edges():
        if edge.color is not None or not palette:
            styles[edge.index] = edge.color
            continue
        rank = source_rank.setdefault(edge.source, len(source_rank))
        styles[edge.index] = palette[rank % len(palette)]
    return styles


def edge_kind(edge: EdgeData, feedback: bool, config: RenderConfig) -> LineKind:
    if edge.kind is not None:
        return edge.kind
    return config.feedback_line_kind if feedback else LineKind.Solid


class EdgeRouter:
    """Routes every edge of a laid-out graph and sizes the gaps between layers."""

    def __init__(
        self,
        graph: DirectedGraph,
        config: RenderConfig,
        cycles: CycleBreakResult,
        la: LayerAssignment,
        alloc: ColumnAllocation,
    ) -> None:
        self.graph = graph
        self.config = config
        self.cycles = cycles
        self.la = la
        self.alloc = alloc
        self.slots = alloc.slot_map()
        self.placement = config.feedback_placement
        self.loops = [e for e in cycles.feedback if e.is_self_loop]
        self.feedback = [e for e in cycles.feedback if not e.is_self_loop]
        self.anchors: dict[tuple[Hashable, Side, int], int] = {}

    # ─── Anchors ─────────────────────────────────────────────────────────────

    def _feedback_anchor_end(self, edge: EdgeData) -> tuple[Hashable, Side]:
        """The endpoint whose top or bottom side a feedback edge uses; the other end uses its port."""
        if self.placement == FeedbackPlacement.ABOVE:
            return edge.target, Side.TOP
        return edge.source, Side.BOTTOM

    def assign_anchors(self) -> None:
        """Spread each node side's edges over the node span, ordered by the far end's column."""
        sides: dict[tuple[Hashable, Side], list[tuple[tuple[int, int, int], int]]] = {}
        for edge in self.cycles.forward:
            chain = self.alloc.chains[edge.index]
            for upper, lower in zip(chain, chain[1:]):
                sides.setdefault((upper, Side.BOTTOM), []).append(((0, self.slots[lower].center, edge.index), edge.index))
                sides.setdefault((lower, Side.TOP), []).append(((0, self.slots[upper].center, edge.index), edge.index))
        for edge in self.feedback:
            endpoint, side = self._feedback_anchor_end(edge)
            sides.setdefault((endpoint, side), []).append(((1, 0, edge.index), edge.index))

        for (slot_id, slot_side), entries in sides.items():
            entries.sort()
            columns = spread_anchors(self.slots[slot_id], len(entries))
            for (_, edge_index), x in zip(entries, columns):
                self.anchors[(slot_id, slot_side, edge_index)] = x

    def anchor(self, slot_id: Hashable, side: Side, edge_index: int) -> int:
        if isinstance(slot_id, DummyId):
            return self.slots[slot_id].x
        return self.anchors[(slot_id, side, edge_index)]

    # ─── Gaps ────────────────────────────────────────────────────────────────

    def _feedback_gaps(self, edge: EdgeData) -> tuple[int, int]:
        """Gap indices used by a feedback edge on its source and target side."""
        src, tgt = self.la.layer(edge.source), self.la.layer(edge.target)
        if self.placement == FeedbackPlacement.ABOVE:
            return src, tgt
        return src + 1, tgt + 1

    def build_gaps(
        self, margins: dict[int, int]
    ) -> tuple[list[Gap], dict[int, list[_Segment]], dict[int, tuple[_Hop, _Hop]]]:
        """Size every gap and give each jogging segment and feedback hop its lane row."""
        n = self.la.layer_count
        segments: dict[int, list[_Segment]] = {g: [] for g in range(n + 1)}
        per_edge: dict[int, list[_Segment]] = {}
        for edge in self.cycles.forward:
            chain = self.alloc.chains[edge.index]
            per_edge[edge.index] = []
            for upper, lower in zip(chain, chain[1:]):
                seg = _Segment(
                    edge_index=edge.index,
                    upper=upper,
                    lower=lower,
                    sx=self.anchor(upper, Side.BOTTOM, edge.index),
                    tx=self.anchor(lower, Side.TOP, edge.index),
                )
                segments[self.slots[lower].layer].append(seg)
                per_edge[edge.index].append(seg)

        hops: dict[int, list[_Hop]] = {g: [] for g in range(n + 1)}
        hop_pairs: dict[int, tuple[_Hop, _Hop]] = {}
        for edge in self.feedback:
            leave_gap, arrive_gap = self._feedback_gaps(edge)
            endpoint, side = self._feedback_anchor_end(edge)
            anchor_x = self.anchor(endpoint, side, edge.index)
            if self.placement == FeedbackPlacement.ABOVE:
                leave_x, arrive_x = self.slots[edge.source].port_column, anchor_x
            else:
                leave_x, arrive_x = anchor_x, self.slots[edge.target].port_column
            leave = _Hop(edge.index, leave_x, margins[edge.index], leaving=True)
            arrive = _Hop(edge.index, arrive_x, margins[edge.index], leaving=False)
            hops[leave_gap].append(leave)
            hops[arrive_gap].append(arrive)
            hop_pairs[edge.index] = (leave, arrive)

        gaps: list[Gap] = []
        top = 0
        for g in range(n + 1):
            jogs = order_lanes([s for s in segments[g] if s.sx != s.tx])
            gap_hops = order_hops(hops[g], self.placement)
            lanes = len(jogs) + len(gap_hops)
            if 0 < g < n:
                height = max(self.config.vertical_spacing, lanes + 2 if lanes else 1)
            else:
                height = len(gap_hops) + 1 if gap_hops else 0
            gap = Gap(index=g, top=top, height=height)

            if self.placement == FeedbackPlacement.BELOW:
                hop_rows = range(top + 1, top + 1 + len(gap_hops))
                jog_first = top + 1 + len(gap_hops)
            else:
                hop_rows = range(gap.arrow_row - len(gap_hops), gap.arrow_row)
                jog_first = top + 1
            for hop, row in zip(gap_hops, hop_rows):
                hop.row = row
            for i, seg in enumerate(jogs):
                seg.row = jog_first + i
                gap.lanes.append(Lane(edge_index=seg.edge_index, row=seg.row, from_x=seg.sx, to_x=seg.tx))
            gaps.append(gap)
            top += height + (1 if g < n else 0)

        for g, gap in enumerate(gaps):
            for hop in hops[g]:
                gap.lanes.append(
                    Lane(edge_index=hop.edge_index, row=hop.row, from_x=hop.x, to_x=hop.margin, feedback=True)
                )
        return gaps, per_edge, hop_pairs

    # ─── Routes ──────────────────────────────────────────────────────────────

    def margin_columns(self) -> dict[int, int]:
        """Margin column per feedback edge; edges spanning fewer layers sit nearer the content."""
        ordered = sorted(
            self.feedback,
            key=lambda e: (self.la.layer(e.source) - self.la.layer(e.target), e.index),
        )
        return {e.index: self.alloc.width + MARGIN_GAP + MARGIN_STEP * i for i, e in enumerate(ordered)}

    def route(self) -> LayoutResult:
        self.assign_anchors()
        margins = self.margin_columns()
        gaps, per_edge, hop_pairs = self.build_gaps(margins)
        node_rows = [gaps[g].top + gaps[g].height for g in range(self.la.layer_count)]
        for slot in self.slots.values():
            slot.y = node_rows[slot.layer]

        styles = edge_styles(self.graph, self.config)
        feedback_ids = self.cycles.feedback_indices
        routes: list[RoutedEdge] = []
        for edge in self.graph.edges():
            is_feedback = edge.index in feedback_ids
            if edge.is_self_loop:
                slot = self.slots[edge.source]
                waypoints = [Point(slot.x - slot.lead, slot.y), Point(slot.x - 1, slot.y)]
                start_side, arrow_side = Side.LEFT, Side.LEFT
            elif is_feedback:
                waypoints, start_side, arrow_side = self._feedback_route(edge, gaps, hop_pairs[edge.index], margins)
            else:
                waypoints = self._forward_route(per_edge[edge.index], gaps)
                start_side, arrow_side = Side.BOTTOM, Side.TOP
            routes.append(
                RoutedEdge(
                    edge=edge,
                    waypoints=waypoints,
                    start_side=start_side,
                    arrow_side=arrow_side,
                    kind=edge_kind(edge, is_feedback, self.config),
                    style=styles[edge.index],
                    feedback=is_feedback,
                    self_loop=edge.is_self_loop,
                )
            )

        width = max([self.alloc.width, *(m + 1 for m in margins.values())])
        height = gaps[-1].top + gaps[-1].height if gaps else 0
        nodes = [slot for layer in self.alloc.layers for slot in layer]
        logger.debug(
            "routing: %d edges (%d feedback, %d self-loops), grid %dx%d",
            len(routes),
            len(self.feedback),
            len(self.loops),
            width,
            height,
        )
        return LayoutResult(
            nodes=nodes,
            edges=routes,
            width=width,
            height=height,
            assignment=self.la,
            cycles=self.cycles,
            gaps=gaps,
        )

    def _forward_route(self, segments: list[_Segment], gaps: list[Gap]) -> list[Point]:
        points: list[Point] = []
        for seg in segments:
            gap = gaps[self.slots[seg.lower].layer]
            points.append(Point(seg.sx, gap.exit_row))
            if seg.row is not None:
                points.append(Point(seg.sx, seg.row))
                points.append(Point(seg.tx, seg.row))
            points.append(Point(seg.tx, gap.arrow_row))
        return simplify_waypoints(points)

    def _feedback_route(
        self,
        edge: EdgeData,
        gaps: list[Gap],
        hops: tuple[_Hop, _Hop],
        margins: dict[int, int],
    ) -> tuple[list[Point], Side, Side]:
        leave, arrive = hops
        leave_gap, arrive_gap = (gaps[g] for g in self._feedback_gaps(edge))
        m = margins[edge.index]
        lanes = [
            Point(leave.x, leave.row),
            Point(m, leave.row),
            Point(m, arrive.row),
            Point(arrive.x, arrive.row),
        ]
        if self.placement == FeedbackPlacement.ABOVE:
            source = self.slots[edge.source]
            points = [Point(source.x_end, source.y), Point(leave.x, source.y), *lanes]
            points.append(Point(arrive.x, arrive_gap.arrow_row))
            return simplify_waypoints(points), Side.RIGHT, Side.TOP
        target = self.slots[edge.target]
        points = [Point(leave.x, leave_gap.exit_row), *lanes]
        points += [Point(arrive.x, target.y), Point(target.x_end, target.y)]
        return simplify_waypoints(points), Side.BOTTOM, Side.RIGHT


def route_edges(
    graph: DirectedGraph,
    config: RenderConfig,
    cycles: CycleBreakResult,
    la: LayerAssignment,
    alloc: ColumnAllocation,
) -> LayoutResult:
    """Route every edge and produce the final layout."""
    return EdgeRouter(graph, config, cycles, la, alloc).route()
