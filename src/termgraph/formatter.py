"""Node formatters: decide what text a node displays in the grid."""

from __future__ import annotations

from typing import Protocol

from termgraph.ir.graph import Label, NodeData, Segment


class NodeFormat(Protocol):
    """Turns a node into the label segments painted for it."""

    def format_node(self, node: NodeData) -> Label: ...


class LabelFormatter:
    """Displays the node's own label unchanged."""

    def format_node(self, node: NodeData) -> Label:
        return node.label


class IDFormatter:
    """Displays the node identity in parentheses, e.g. ``(3)``."""

    def format_node(self, node: NodeData) -> Label:
        return (Segment(f"({node.id})"),)


class ParenFormatter:
    """Displays the node label wrapped in parentheses, keeping segment styles."""

    def format_node(self, node: NodeData) -> Label:
        return (Segment("("), *node.label, Segment(")"))
