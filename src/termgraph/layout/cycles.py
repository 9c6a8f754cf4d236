"""Cycle breaking: split edges into forward/cross and feedback (back) edges.

Depth-first traversal from every unvisited node in insertion order, following
outgoing edges in insertion order. An edge whose target is still on the DFS
stack closes a cycle and is classified as feedback; self-loops always are.
Everything else (tree, forward and cross edges) forms a DAG.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable, Iterator

import networkx as nx

from termgraph.ir.graph import DirectedGraph, EdgeData
from termgraph.layout.types import CycleBreakResult

logger = logging.getLogger(__name__)

_UNVISITED = 0
_ON_STACK = 1
_DONE = 2


def break_cycles(graph: DirectedGraph) -> CycleBreakResult:
    """Classify every edge of ``graph`` as forward/cross or feedback."""
    state: dict[Hashable, int] = {}
    forward: list[EdgeData] = []
    feedback: list[EdgeData] = []

    for root in graph.nodes():
        if state.get(root.id, _UNVISITED) != _UNVISITED:
            continue
        state[root.id] = _ON_STACK
        stack: list[tuple[Hashable, Iterator[EdgeData]]] = [(root.id, graph.outgoing_edges(root.id))]
        while stack:
            node_id, pending = stack[-1]
            edge = next(pending, None)
            if edge is None:
                state[node_id] = _DONE
                stack.pop()
                continue
            target_state = state.get(edge.target, _UNVISITED)
            if target_state == _ON_STACK:
                feedback.append(edge)
                continue
            forward.append(edge)
            if target_state == _UNVISITED:
                state[edge.target] = _ON_STACK
                stack.append((edge.target, graph.outgoing_edges(edge.target)))

    forward.sort(key=lambda e: e.index)
    feedback.sort(key=lambda e: e.index)
    logger.debug("cycle breaking: %d forward edges, %d feedback edges", len(forward), len(feedback))
    return CycleBreakResult(forward=forward, feedback=feedback)


def acyclic_reduction(graph: DirectedGraph, result: CycleBreakResult) -> nx.DiGraph:
    """The layering graph: every node, and one arc per forward node pair."""
    dag: nx.DiGraph = nx.DiGraph()
    for node in graph.nodes():
        dag.add_node(node.id, index=node.index)
    for edge in result.forward:
        dag.add_edge(edge.source, edge.target)
    return dag
