"""Graph model: nodes, edges and the DirectedGraph container."""

from termgraph.ir.graph import DirectedGraph, EdgeData, Label, NodeData, Segment, label_text, make_label

__all__ = [
    "DirectedGraph",
    "EdgeData",
    "Label",
    "NodeData",
    "Segment",
    "label_text",
    "make_label",
]
