"""Tests for layout/cycles.py: DFS cycle breaking and the acyclic reduction."""

import networkx as nx

from termgraph.ir.graph import DirectedGraph
from termgraph.layout.cycles import acyclic_reduction, break_cycles


def _graph(nodes: list[str], edges: list[tuple[str, str]]) -> DirectedGraph:
    g = DirectedGraph()
    for n in nodes:
        g.add_node(n)
    g.add_edges(edges)
    return g


def _feedback(g: DirectedGraph) -> list[int]:
    return [e.index for e in break_cycles(g).feedback]


class TestBreakCycles:
    def test_dag_has_no_feedback_edges(self):
        g = _graph(["A", "B", "C"], [("A", "B"), ("B", "C"), ("A", "C")])
        result = break_cycles(g)
        assert result.feedback == []
        assert [e.index for e in result.forward] == [0, 1, 2]

    def test_single_cycle(self):
        g = _graph(["A", "B"], [("A", "B"), ("B", "A")])
        assert _feedback(g) == [1]

    def test_self_loop_is_feedback(self):
        g = _graph(["A"], [("A", "A")])
        result = break_cycles(g)
        assert _feedback(g) == [0]
        assert result.is_feedback(g.edge(0))

    def test_complex_cycle(self):
        g = _graph(
            ["A", "B", "C", "D"],
            [("A", "B"), ("B", "C"), ("C", "A"), ("C", "D"), ("D", "B")],
        )
        assert _feedback(g) == [2, 4]

    def test_insertion_order_picks_the_root(self):
        g = DirectedGraph()
        g.add_node("B")
        g.add_node("A")
        g.add_edge("A", "B")
        g.add_edge("B", "A")
        # The traversal starts at B, so A -> B closes the cycle.
        assert _feedback(g) == [0]

    def test_cross_edge_is_forward(self):
        g = _graph(["A", "B", "C"], [("A", "B"), ("A", "C"), ("C", "B")])
        assert _feedback(g) == []

    def test_parallel_back_edges(self):
        g = _graph(["A", "B"], [("A", "B"), ("B", "A"), ("B", "A")])
        assert _feedback(g) == [1, 2]

    def test_partition_covers_every_edge(self):
        g = _graph(
            ["A", "B", "C", "D"],
            [("A", "B"), ("B", "C"), ("C", "A"), ("D", "D"), ("C", "D"), ("D", "A")],
        )
        result = break_cycles(g)
        indices = sorted(e.index for e in result.forward + result.feedback)
        assert indices == list(range(g.edge_count()))
        assert result.feedback_indices.isdisjoint(e.index for e in result.forward)

    def test_empty_graph(self):
        result = break_cycles(DirectedGraph())
        assert result.forward == []
        assert result.feedback == []

    def test_deterministic(self):
        edges = [("A", "B"), ("B", "C"), ("C", "A"), ("B", "A"), ("C", "B")]
        first = _feedback(_graph(["A", "B", "C"], edges))
        second = _feedback(_graph(["A", "B", "C"], edges))
        assert first == second

    def test_feedback_indices_computed_once(self):
        result = break_cycles(_graph(["A", "B"], [("A", "B"), ("B", "A")]))
        assert result.feedback_indices == {1}
        assert result.feedback_indices is result.feedback_indices
        assert result.is_feedback(result.feedback[0])
        assert not result.is_feedback(result.forward[0])


class TestAcyclicReduction:
    def test_reduction_is_a_dag(self):
        g = _graph(
            ["A", "B", "C", "D"],
            [("A", "B"), ("B", "C"), ("C", "A"), ("C", "D"), ("D", "B"), ("D", "D")],
        )
        dag = acyclic_reduction(g, break_cycles(g))
        assert nx.is_directed_acyclic_graph(dag)
        assert set(dag.nodes) == {"A", "B", "C", "D"}

    def test_reduction_keeps_insertion_index(self):
        g = _graph(["X", "Y"], [("X", "Y")])
        dag = acyclic_reduction(g, break_cycles(g))
        assert nx.get_node_attributes(dag, "index") == {"X": 0, "Y": 1}
