"""Graph model: the caller-built directed graph consumed by the render pipeline.

Nodes and edges live in a networkx MultiDiGraph so parallel edges and cycles
are ordinary data. Insertion order is tracked separately (node mapping, edge
list, per-node adjacency index lists) because every tie-break in layout and
routing follows it, and networkx's adjacency order is grouped by neighbour.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Iterator
from dataclasses import dataclass

import networkx as nx

from termgraph.errors import DuplicateNodeError, UnknownNodeError
from termgraph.types import LineKind


@dataclass(frozen=True)
class Segment:
    """A run of label text sharing one style tag."""

    text: str
    style: object | None = None


Label = tuple[Segment, ...]


def make_label(value: str | Segment | Iterable[str | Segment]) -> Label:
    """Normalise a caller-supplied label into a tuple of segments."""
    if isinstance(value, str):
        return (Segment(value),)
    if isinstance(value, Segment):
        return (value,)
    return tuple(part if isinstance(part, Segment) else Segment(str(part)) for part in value)


def label_text(label: Label) -> str:
    return "".join(seg.text for seg in label)


@dataclass(frozen=True)
class NodeData:
    id: Hashable
    label: Label
    index: int
    style: object | None = None

    @property
    def text(self) -> str:
        return label_text(self.label)


@dataclass(frozen=True)
class EdgeData:
    index: int
    source: Hashable
    target: Hashable
    color: object | None = None
    kind: LineKind | None = None

    @property
    def is_self_loop(self) -> bool:
        return self.source == self.target


class DirectedGraph:
    """Append-only directed multigraph with stable, insertion-ordered identities.

    Wraps a networkx MultiDiGraph (edge keys are the global edge index) and
    exposes the adjacency queries the layout stages need.
    """

    def __init__(self) -> None:
        self.digraph: nx.MultiDiGraph = nx.MultiDiGraph()
        self._nodes: dict[Hashable, NodeData] = {}
        self._edges: list[EdgeData] = []
        self._outgoing: dict[Hashable, list[int]] = {}
        self._incoming: dict[Hashable, list[int]] = {}

    # ─── Construction ────────────────────────────────────────────────────────

    def add_node(
        self,
        node_id: Hashable,
        label: str | Segment | Iterable[str | Segment] | None = None,
        *,
        style: object | None = None,
    ) -> NodeData:
        """Add a node; raises DuplicateNodeError if the identity is taken."""
        if node_id is None:
            raise ValueError("None cannot be used as a node identity")
        if node_id in self._nodes:
            raise DuplicateNodeError(node_id)
        data = NodeData(
            id=node_id,
            label=make_label(str(node_id) if label is None else label),
            index=len(self._nodes),
            style=style,
        )
        self._nodes[node_id] = data
        self._outgoing[node_id] = []
        self._incoming[node_id] = []
        self.digraph.add_node(node_id, data=data)
        return data

    def add_nodes(self, items: Iterable[tuple[Hashable, str | Segment | Iterable[str | Segment] | None]]) -> None:
        for node_id, label in items:
            self.add_node(node_id, label)

    def add_edge(
        self,
        source: Hashable,
        target: Hashable,
        *,
        color: object | None = None,
        kind: LineKind | None = None,
    ) -> EdgeData:
        """Add a directed edge; raises UnknownNodeError if an endpoint is absent."""
        for endpoint in (source, target):
            if endpoint not in self._nodes:
                raise UnknownNodeError(endpoint)
        data = EdgeData(index=len(self._edges), source=source, target=target, color=color, kind=kind)
        self._edges.append(data)
        self._outgoing[source].append(data.index)
        self._incoming[target].append(data.index)
        self.digraph.add_edge(source, target, key=data.index, data=data)
        return data

    def add_edges(self, pairs: Iterable[tuple[Hashable, Hashable]]) -> None:
        for source, target in pairs:
            self.add_edge(source, target)

    # ─── Queries ─────────────────────────────────────────────────────────────

    def node(self, node_id: Hashable) -> NodeData:
        try:
            return self._nodes[node_id]
        except KeyError:
            raise UnknownNodeError(node_id) from None

    def nodes(self) -> list[NodeData]:
        return list(self._nodes.values())

    def edges(self) -> list[EdgeData]:
        return list(self._edges)

    def edge(self, index: int) -> EdgeData:
        return self._edges[index]

    def outgoing_edges(self, node_id: Hashable) -> Iterator[EdgeData]:
        """Edges leaving node_id, lazily, in insertion order."""
        if node_id not in self._nodes:
            raise UnknownNodeError(node_id)
        return (self._edges[i] for i in self._outgoing[node_id])

    def incoming_edges(self, node_id: Hashable) -> Iterator[EdgeData]:
        """Edges entering node_id, lazily, in insertion order."""
        if node_id not in self._nodes:
            raise UnknownNodeError(node_id)
        return (self._edges[i] for i in self._incoming[node_id])

    def node_count(self) -> int:
        return len(self._nodes)

    def edge_count(self) -> int:
        return len(self._edges)

    def is_empty(self) -> bool:
        return not self._nodes

    def is_dag(self) -> bool:
        return nx.is_directed_acyclic_graph(self.digraph)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def __repr__(self) -> str:
        return f"DirectedGraph(nodes={self.node_count()}, edges={self.edge_count()})"
