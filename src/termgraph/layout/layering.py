"""Layer assignment: longest-path layering of the acyclic reduction.

layer(v) = 0 when v has no incoming forward edge, otherwise
1 + max(layer(u)) over its forward predecessors. Nodes are processed in a
topological order whose ties break by insertion order. Weakly connected
components are layered independently; each keeps its own layer 0 and the
components are ranked by their earliest-inserted node.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable

import networkx as nx

from termgraph.ir.graph import DirectedGraph
from termgraph.layout.cycles import acyclic_reduction
from termgraph.layout.types import CycleBreakResult, LayerAssignment

logger = logging.getLogger(__name__)


def rank_components(graph: DirectedGraph) -> dict[Hashable, int]:
    """Map each node to the rank of its weakly connected component."""
    index = {node.id: node.index for node in graph.nodes()}
    components = sorted(
        (sorted(c, key=index.__getitem__) for c in nx.weakly_connected_components(graph.digraph)),
        key=lambda members: index[members[0]],
    )
    return {node_id: rank for rank, members in enumerate(components) for node_id in members}


def assign_layers(graph: DirectedGraph, cycles: CycleBreakResult) -> LayerAssignment:
    """Compute longest-path layers for every node of ``graph``."""
    dag = acyclic_reduction(graph, cycles)
    index = nx.get_node_attributes(dag, "index")

    layers: dict[Hashable, int] = {}
    for node_id in nx.lexicographical_topological_sort(dag, key=index.__getitem__):
        preds = [layers[p] for p in dag.predecessors(node_id)]
        layers[node_id] = max(preds) + 1 if preds else 0

    # Reorder to insertion order so downstream iteration is stable.
    layers = {node.id: layers[node.id] for node in graph.nodes()}
    layer_count = (max(layers.values()) + 1) if layers else 0
    components = rank_components(graph)
    logger.debug(
        "layer assignment: %d nodes in %d layers, %d components",
        len(layers),
        layer_count,
        len(set(components.values())),
    )
    return LayerAssignment(layers=layers, layer_count=layer_count, components=components)
