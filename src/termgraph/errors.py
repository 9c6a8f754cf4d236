"""Graph construction errors."""

from __future__ import annotations

from collections.abc import Hashable


class GraphError(Exception):
    """Base class for errors raised while building a DirectedGraph."""


class DuplicateNodeError(GraphError):
    """A node with the same identity is already present in the graph."""

    def __init__(self, node_id: Hashable) -> None:
        super().__init__(f"node {node_id!r} already exists")
        self.node_id = node_id


class UnknownNodeError(GraphError):
    """An edge or query referenced a node identity that is not in the graph."""

    def __init__(self, node_id: Hashable) -> None:
        super().__init__(f"unknown node {node_id!r}")
        self.node_id = node_id
