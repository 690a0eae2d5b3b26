"""Graph module providing graph construction and topological sorting.

This module contains:
- GraphDataSource[T]: Caller-supplied roots/children description of a graph
- MappingDataSource[T]: A data source backed by a successor mapping
- Node[T] / Edge[T]: The mutable working graph
- build_graph: Materialize the working graph from a data source
- topological_sort: Kahn's algorithm over the working graph
"""

from ._algorithms import (
    CycleError,
    GraphConsumedError,
    has_cycle,
    sort_data,
    sort_mapping,
    topological_sort,
)
from ._builder import build_graph
from ._node import Edge, Node
from ._source import GraphDataSource, MappingDataSource

__all__ = [
    "CycleError",
    "Edge",
    "GraphConsumedError",
    "GraphDataSource",
    "MappingDataSource",
    "Node",
    "build_graph",
    "has_cycle",
    "sort_data",
    "sort_mapping",
    "topological_sort",
]
