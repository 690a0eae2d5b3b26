"""Topological sorting of the working graph."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Hashable
from typing import TYPE_CHECKING

from ._builder import build_graph
from ._source import MappingDataSource

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from ._node import Node
    from ._source import GraphDataSource

logger = logging.getLogger(__name__)

_MAX_REPORTED_VALUES = 10


class CycleError(ValueError):
    """Cycle present, topological sort not possible.

    Attributes:
        unresolved: Values whose nodes still had incoming edges when no node
            was ready any more, in discovery order.
        partial_order: Values emitted before the sort got stuck.

    """

    def __init__(self, unresolved: Sequence[object], partial_order: Sequence[object] = ()) -> None:
        self.unresolved = tuple(unresolved)
        self.partial_order = tuple(partial_order)
        shown = ", ".join(repr(value) for value in self.unresolved[:_MAX_REPORTED_VALUES])
        if len(self.unresolved) > _MAX_REPORTED_VALUES:
            shown += ", ..."
        super().__init__(f"Cycle present, topological sort not possible (unresolved: {shown})")


class GraphConsumedError(RuntimeError):
    """Raised when sorting nodes that an earlier sort already consumed."""


def topological_sort[T: Hashable](nodes: Sequence[Node[T]]) -> list[Node[T]]:
    """Sort nodes so that every edge source comes before its target.

    Kahn's algorithm: nodes without incoming edges are ready; emitting a node
    removes its outgoing edges, which may make their targets ready. Ties are
    resolved first-in first-out, starting from the order of ``nodes``. That
    order is reproducible but is not part of the contract.

    The sort consumes the graph: edges are removed as they are resolved and
    every node is marked consumed. Rebuild the graph to sort again.

    Args:
        nodes: The complete node list, typically from ``build_graph``.

    Returns:
        The nodes in topological order.

    Raises:
        CycleError: If nodes still have incoming edges once no node is ready.
        GraphConsumedError: If any node was consumed by an earlier sort.

    """
    for node in nodes:
        if node.consumed:
            msg = f"{node!r} was already consumed by a topological sort; rebuild the graph first"
            raise GraphConsumedError(msg)
    for node in nodes:
        node.consumed = True

    ready = deque(node for node in nodes if not node.in_edges)
    order: list[Node[T]] = []

    while ready:
        node = ready.popleft()
        order.append(node)
        for edge in list(node.out_edges):
            edge.detach()
            if not edge.target.in_edges:
                ready.append(edge.target)

    unresolved = [node for node in nodes if node.in_edges]
    if unresolved:
        logger.debug(f"Sort stopped after {len(order)} of {len(nodes)} nodes")
        raise CycleError(
            [node.data for node in unresolved],
            [node.data for node in order],
        )

    return order


def sort_data[T: Hashable](source: GraphDataSource[T]) -> list[T]:
    """Return the values of ``source`` in topological order.

    Builds a fresh graph on every call, so the same source can be sorted
    repeatedly.

    Example:
        >>> from graphsort import MappingDataSource
        >>> sort_data(MappingDataSource.from_mapping({"a": ["b"], "b": ["c"]}))
        ['a', 'b', 'c']

    """
    return [node.data for node in topological_sort(build_graph(source))]


def sort_mapping[T: Hashable](
    successors: Mapping[T, Iterable[T]],
    roots: Iterable[T] | None = None,
) -> list[T]:
    """Sort a graph given as a mapping from node to successors."""
    return sort_data(MappingDataSource.from_mapping(successors, roots))


def has_cycle[T: Hashable](source: GraphDataSource[T]) -> bool:
    """Check whether the graph reachable from the roots of ``source`` has a cycle."""
    try:
        sort_data(source)
    except CycleError:
        return True
    return False
