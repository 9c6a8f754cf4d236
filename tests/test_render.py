"""End-to-end render tests: graph + config -> grid text and styles."""

from termgraph import (
    CharSet,
    Color,
    DirectedGraph,
    FeedbackPlacement,
    LineKind,
    RenderConfig,
    Segment,
    render,
    render_text,
    wcwidth_width,
)


def _graph(nodes: list[str], edges: list[tuple[str, str]]) -> DirectedGraph:
    g = DirectedGraph()
    for n in nodes:
        g.add_node(n)
    g.add_edges(edges)
    return g


class TestBasicShapes:
    def test_empty_graph(self):
        grid = render(DirectedGraph())
        assert grid.dimensions == (0, 0)
        assert grid.to_text() == ""

    def test_single_node(self):
        assert render_text(_graph(["A"], [])) == "A\n"

    def test_chain(self):
        text = render_text(_graph(["A", "B", "C"], [("A", "B"), ("B", "C")]))
        assert text == "A\n│\n▼\nB\n│\n▼\nC\n"

    def test_chain_ascii(self):
        text = render_text(_graph(["A", "B"], [("A", "B")]), RenderConfig(charset=CharSet.Ascii))
        assert text == "A\n|\nv\nB\n"

    def test_fan_out_from_narrow_node(self):
        text = render_text(_graph(["A", "B", "C"], [("A", "B"), ("A", "C")]))
        assert text == " A\n │\n┌┤\n│└─┐\n▼  ▼\nB  C\n"

    def test_merge_junction_glyph(self):
        config = RenderConfig(merge_junction_glyph="*")
        text = render_text(_graph(["A", "B", "C"], [("A", "B"), ("A", "C")]), config)
        assert text.splitlines()[1] == " │"
        assert text.splitlines()[2] == "┌*"

    def test_label_centred_in_min_width(self):
        text = render_text(_graph(["A"], []), RenderConfig(min_node_width=5))
        assert text == "  A\n"

    def test_wide_label_keeps_its_width(self):
        g = DirectedGraph()
        g.add_node("n", "ABCDEFGHIJ")
        grid = render(g, RenderConfig(min_node_width=4))
        assert grid.width == 10
        assert grid.row_text(0) == "ABCDEFGHIJ"

    def test_thick_edge(self):
        g = _graph(["A", "B"], [])
        g.add_edge("A", "B", kind=LineKind.Thick)
        assert render_text(g) == "A\n║\n▼\nB\n"


class TestCycles:
    def test_two_cycle_below(self):
        text = render_text(_graph(["A", "B"], [("A", "B"), ("B", "A")]))
        assert text == (
            "A◄┐\n"
            "│ ╎\n"
            "│ └╌┐\n"
            "└┐  ╎\n"
            " ▼  ╎\n"
            " B  ╎\n"
            " ╎  ╎\n"
            " └╌╌┘\n"
        )

    def test_two_cycle_above(self):
        config = RenderConfig(feedback_placement=FeedbackPlacement.ABOVE)
        text = render_text(_graph(["A", "B"], [("A", "B"), ("B", "A")]), config)
        assert text == (
            " ┌╌╌┐\n"
            " ▼  ╎\n"
            " A  ╎\n"
            " │  ╎\n"
            "┌┘  ╎\n"
            "│ ┌╌┘\n"
            "▼ ╎\n"
            "B╌┘\n"
        )

    def test_self_loop_annotation(self):
        assert render_text(_graph(["A"], [("A", "A")])) == "↺►A\n"

    def test_parallel_feedback_edges_do_not_cross(self):
        g = _graph(["A", "B"], [("A", "B"), ("A", "B"), ("B", "A"), ("B", "A")])
        text = render_text(g)
        assert "┼" not in text

    def test_fully_cyclic_graph_renders(self):
        g = _graph(["A", "B", "C"], [("A", "B"), ("B", "C"), ("C", "A"), ("B", "A"), ("C", "C")])
        grid = render(g)
        assert len(grid.find("A")) == 1
        assert len(grid.find("B")) == 1
        assert len(grid.find("C")) == 1
        assert grid.find("↺")

    def test_every_edge_has_an_arrowhead(self):
        g = _graph(["A", "B", "C", "D"], [("A", "B"), ("A", "C"), ("B", "D"), ("C", "D"), ("D", "A")])
        grid = render(g, RenderConfig(min_node_width=3))
        arrows = sum(len(grid.find(ch)) for ch in "▼▲◄►")
        assert arrows == g.edge_count()


class TestDeterminism:
    def test_same_graph_same_output(self):
        edges = [("A", "B"), ("A", "C"), ("B", "D"), ("C", "D"), ("D", "B"), ("A", "D")]
        first = render(_graph(["A", "B", "C", "D"], edges))
        second = render(_graph(["A", "B", "C", "D"], edges))
        assert first == second

    def test_render_does_not_mutate_graph(self):
        g = _graph(["A", "B"], [("A", "B"), ("B", "A")])
        render(g)
        assert g.edge_count() == 2
        assert [n.id for n in g.nodes()] == ["A", "B"]


class TestStyles:
    def test_palette_colours_edges(self):
        grid = render(_graph(["A", "B"], [("A", "B")]), RenderConfig().default_colors())
        assert grid.cell(0, 1).style == Color.Red
        assert grid.cell(0, 2).style == Color.Red
        assert grid.cell(0, 0).style is None

    def test_shared_cells_of_different_colours_lose_style(self):
        g = _graph(["A", "B", "C"], [])
        g.add_edge("A", "B", color=Color.Red)
        g.add_edge("A", "C", color=Color.Blue)
        grid = render(g)
        assert grid.cell(1, 1).style is None
        assert grid.cell(0, 2).style == Color.Red
        assert grid.cell(2, 3).style == Color.Blue

    def test_node_and_segment_styles(self):
        g = DirectedGraph()
        g.add_node("a", [Segment("x", Color.Green), "y"], style=Color.Yellow)
        grid = render(g)
        assert grid.cell(0, 0).style == Color.Green
        assert grid.cell(1, 0).style == Color.Yellow

    def test_wide_glyphs_use_continuation_cells(self):
        g = DirectedGraph()
        g.add_node("n", "日本")
        grid = render(g, RenderConfig(glyph_width=wcwidth_width))
        assert grid.width == 4
        assert grid.cell(0, 0).char == "日"
        assert grid.cell(1, 0).is_continuation
        assert grid.row_text(0) == "日本"

    def test_label_measured_per_glyph(self):
        # A width function that is not additive over characters.
        def clustered(text: str) -> int:
            return 1 if len(text) > 1 else 2

        g = DirectedGraph()
        g.add_node("n", "ab")
        grid = render(g, RenderConfig(glyph_width=clustered))
        assert grid.width == 4
        assert grid.row_text(0) == "ab"
