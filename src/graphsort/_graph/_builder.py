"""Materialize a node/edge graph from a data source."""

from __future__ import annotations

import logging
from collections.abc import Hashable
from typing import TYPE_CHECKING

from ._node import Node

if TYPE_CHECKING:
    from collections.abc import Iterator

    from ._source import GraphDataSource

logger = logging.getLogger(__name__)

_EXHAUSTED: object = object()


def build_graph[T: Hashable](source: GraphDataSource[T]) -> list[Node[T]]:
    """Build the working graph reachable from the roots of ``source``.

    Values are visited depth-first starting from each root in order. The
    first visit of a value creates its node and appends it to the result, so
    the result is in discovery order. Later visits reuse the node through a
    value lookup instead of descending again, which terminates traversal of
    shared sub-structure and of cycles. Cycles are not reported here; the
    sort detects them.

    Args:
        source: The graph description to read.

    Returns:
        One node per distinct value reachable from the roots, with edges wired.

    Example:
        >>> from graphsort import MappingDataSource
        >>> nodes = build_graph(MappingDataSource.from_mapping({"a": ["b"]}))
        >>> [node.data for node in nodes]
        ['a', 'b']

    """
    lookup: dict[T, Node[T]] = {}
    nodes: list[Node[T]] = []

    def visit(data: T) -> tuple[Node[T], bool]:
        node = lookup.get(data)
        if node is not None:
            return node, False
        node = Node(data)
        lookup[data] = node
        nodes.append(node)
        return node, True

    # Explicit stack of (node, pending children) instead of recursion
    for root in source.roots():
        root_node, created = visit(root)
        if not created:
            continue
        stack: list[tuple[Node[T], Iterator[T]]] = [(root_node, iter(source.children(root)))]
        while stack:
            parent, pending = stack[-1]
            child = next(pending, _EXHAUSTED)
            if child is _EXHAUSTED:
                stack.pop()
                continue
            child_node, created = visit(child)
            parent.connect(child_node)
            if created:
                stack.append((child_node, iter(source.children(child))))

    logger.debug(f"Built graph with {len(nodes)} nodes")
    return nodes

