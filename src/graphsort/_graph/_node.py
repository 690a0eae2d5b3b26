"""Node and edge types of the working graph."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(eq=False, slots=True)
class Node[T]:
    """Graph representation of one distinct data value.

    Nodes compare and hash by identity; the wrapped ``data`` is what carries
    the caller's notion of equality.

    Attributes:
        data: The wrapped value.
        out_edges: Edges leaving this node, in the order the children were discovered.
        in_edges: Edges entering this node.
        consumed: Set once the node has been passed through a topological sort.

    """

    data: T
    out_edges: list[Edge[T]] = field(default_factory=list)
    in_edges: set[Edge[T]] = field(default_factory=set)
    consumed: bool = False

    def connect(self, target: Node[T]) -> Edge[T]:
        """Add an edge from this node to ``target`` and register it on both ends."""
        edge = Edge(self, target)
        self.out_edges.append(edge)
        target.in_edges.add(edge)
        return edge

    def __repr__(self) -> str:
        return f"Node({self.data!r})"


@dataclass(frozen=True, eq=False, slots=True)
class Edge[T]:
    """Directed link ``source -> target``.

    ``source`` is emitted before ``target`` becomes eligible.
    """

    source: Node[T]
    target: Node[T]

    def detach(self) -> None:
        """Remove this edge from both of its endpoints."""
        self.source.out_edges.remove(self)
        self.target.in_edges.discard(self)

    def __repr__(self) -> str:
        return f"Edge({self.source.data!r} -> {self.target.data!r})"
