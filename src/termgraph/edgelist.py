"""Edge-list reader used by the CLI.

Format, one statement per line::

    # comment
    A -> B -> C      edges (chains allowed)
    A: Alpha node    label for node A
    D                standalone node

Nodes are created in order of first mention.
"""

from __future__ import annotations

from termgraph.ir.graph import DirectedGraph

ARROW = "->"


def parse_edge_list(text: str) -> DirectedGraph:
    """Build a DirectedGraph from edge-list text; raises ValueError on malformed lines."""
    order: list[str] = []
    labels: dict[str, str] = {}
    edges: list[tuple[str, str]] = []

    def mention(name: str, lineno: int) -> str:
        name = name.strip()
        if not name:
            raise ValueError(f"line {lineno}: empty node name")
        if name not in labels:
            order.append(name)
            labels[name] = name
        return name

    declared: set[str] = set()
    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        if ARROW in line:
            names = [mention(part, lineno) for part in line.split(ARROW)]
            edges.extend(zip(names, names[1:]))
        elif ":" in line:
            name, _, label = line.partition(":")
            name = mention(name, lineno)
            label = label.strip()
            if name in declared and labels[name] != label:
                raise ValueError(f"line {lineno}: conflicting label for node {name!r}")
            declared.add(name)
            labels[name] = label or name
        else:
            mention(line, lineno)

    graph = DirectedGraph()
    for name in order:
        graph.add_node(name, labels[name])
    graph.add_edges(edges)
    return graph
