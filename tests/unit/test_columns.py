"""Tests for layout/columns.py: node widths, dummy chains and column spans."""

from termgraph.config import RenderConfig, wcwidth_width
from termgraph.formatter import IDFormatter
from termgraph.ir.graph import DirectedGraph, make_label
from termgraph.layout.columns import allocate_columns, node_width
from termgraph.layout.cycles import break_cycles
from termgraph.layout.layering import assign_layers
from termgraph.layout.types import DummyId
from termgraph.types import FeedbackPlacement


def _graph(nodes: list[str], edges: list[tuple[str, str]]) -> DirectedGraph:
    g = DirectedGraph()
    for n in nodes:
        g.add_node(n)
    g.add_edges(edges)
    return g


def _allocate(g: DirectedGraph, config: RenderConfig | None = None):
    config = config or RenderConfig()
    cycles = break_cycles(g)
    return allocate_columns(g, assign_layers(g, cycles), cycles, config)


class TestNodeWidth:
    def test_label_wider_than_minimum(self):
        assert node_width(make_label("ABCDEFGHIJ"), RenderConfig(min_node_width=4)) == 10

    def test_minimum_wins_for_short_labels(self):
        assert node_width(make_label("ab"), RenderConfig(min_node_width=4)) == 4

    def test_empty_label_still_takes_a_column(self):
        assert node_width(make_label(""), RenderConfig(min_node_width=0)) == 1

    def test_label_width_is_summed_per_glyph(self):
        config = RenderConfig(glyph_width=lambda text: 1 if len(text) > 1 else 2)
        assert node_width(make_label("ab"), config) == 4

    def test_glyph_width_capability(self):
        config = RenderConfig(glyph_width=wcwidth_width)
        assert node_width(make_label("日本"), config) == 4


class TestAllocateColumns:
    def test_single_layer_spacing(self):
        g = _graph(["A", "BB", "C"], [])
        alloc = _allocate(g)
        assert [(s.id, s.x, s.width) for s in alloc.layers[0]] == [("A", 0, 1), ("BB", 3, 2), ("C", 7, 1)]
        assert alloc.width == 8

    def test_layers_centred_on_widest(self):
        g = _graph(["A", "B", "C"], [("A", "B"), ("A", "C")])
        alloc = _allocate(g)
        slots = alloc.slot_map()
        assert slots["B"].x == 0
        assert slots["C"].x == 3
        assert slots["A"].x == 1
        assert alloc.width == 4

    def test_left_aligned_without_centring(self):
        g = _graph(["A", "B", "C"], [("A", "B"), ("A", "C")])
        alloc = _allocate(g, RenderConfig(center_layers=False))
        assert alloc.slot_map()["A"].x == 0

    def test_long_edge_gets_dummy_slots(self):
        g = _graph(["A", "B", "C"], [("A", "B"), ("B", "C"), ("A", "C")])
        alloc = _allocate(g)
        dummy = DummyId(edge_index=2, layer=1)
        assert alloc.chains[2] == ["A", dummy, "C"]
        assert [s.id for s in alloc.layers[1]] == ["B", dummy]
        slot = alloc.slot_map()[dummy]
        assert slot.is_dummy
        assert slot.width == 1
        assert str(dummy) == "__dummy_2_1"

    def test_short_edges_have_direct_chains(self):
        g = _graph(["A", "B"], [("A", "B")])
        assert _allocate(g).chains == {0: ["A", "B"]}

    def test_spans_never_overlap(self):
        g = _graph(
            ["A", "B", "C", "D", "E", "F"],
            [("A", "D"), ("B", "D"), ("C", "E"), ("A", "F"), ("D", "F"), ("E", "F")],
        )
        config = RenderConfig(min_node_width=3, horizontal_spacing=1)
        for layer in _allocate(g, config).layers:
            for left, right in zip(layer, layer[1:]):
                assert left.x - left.lead + left.footprint + config.horizontal_spacing <= right.x - right.lead

    def test_components_side_by_side(self):
        g = _graph(["A", "B", "X", "Y"], [("A", "B"), ("X", "Y")])
        alloc = _allocate(g)
        assert [s.id for s in alloc.layers[0]] == ["A", "X"]
        assert [s.id for s in alloc.layers[1]] == ["B", "Y"]

    def test_formatter_decides_the_label(self):
        g = _graph(["A"], [])
        slot = _allocate(g, RenderConfig(formatter=IDFormatter())).layers[0][0]
        assert slot.width == 3
        assert slot.label == make_label("(A)")

    def test_self_loop_reserves_lead_columns(self):
        g = _graph(["A"], [("A", "A")])
        slot = _allocate(g).layers[0][0]
        assert slot.lead == 2
        assert slot.x == 2
        assert slot.footprint == 3

    def test_feedback_below_reserves_port_on_target(self):
        g = _graph(["A", "B"], [("A", "B"), ("B", "A")])
        slots = _allocate(g).slot_map()
        assert slots["A"].port == 2
        assert slots["B"].port == 0

    def test_feedback_above_reserves_port_on_source(self):
        g = _graph(["A", "B"], [("A", "B"), ("B", "A")])
        slots = _allocate(g, RenderConfig(feedback_placement=FeedbackPlacement.ABOVE)).slot_map()
        assert slots["A"].port == 0
        assert slots["B"].port == 2
        assert slots["B"].port_column == slots["B"].x_end + 1
