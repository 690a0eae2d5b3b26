"""Topological sorting of caller-described dependency graphs."""

__all__ = [
    "CycleError",
    "Edge",
    "GraphConsumedError",
    "GraphDataSource",
    "GraphFileError",
    "MappingDataSource",
    "Node",
    "PluginDependency",
    "PluginInfo",
    "build_graph",
    "export_order_to_toml",
    "has_cycle",
    "load_graph_from_toml",
    "load_plugins_from_toml",
    "order_plugins",
    "sort_data",
    "sort_mapping",
    "topological_sort",
]

from ._graph import (
    CycleError,
    Edge,
    GraphConsumedError,
    GraphDataSource,
    MappingDataSource,
    Node,
    build_graph,
    has_cycle,
    sort_data,
    sort_mapping,
    topological_sort,
)
from ._io import GraphFileError, export_order_to_toml, load_graph_from_toml, load_plugins_from_toml
from ._plugins import PluginDependency, PluginInfo, order_plugins
