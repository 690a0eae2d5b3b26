"""Dependency ordering of detected plugins."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from ._graph import CycleError, sort_data

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

logger = logging.getLogger(__name__)


class PluginDependency(BaseModel):
    """Reference from a plugin to another plugin it needs."""

    model_config = ConfigDict(frozen=True)

    plugin_id: str
    optional: bool = False

    def accept(self, plugin_id: str) -> bool:
        """Check whether the plugin with ``plugin_id`` satisfies this dependency."""
        return self.plugin_id == plugin_id


class PluginInfo(BaseModel):
    """Descriptor of a detected plugin."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str | None = None
    version: str | None = None
    dependencies: tuple[PluginDependency, ...] = ()


@dataclass(frozen=True, slots=True)
class _PluginGraph:
    """Plugins as a graph where each plugin points to the plugins depending on it."""

    root_plugins: tuple[PluginInfo, ...]
    dependents: dict[str, list[PluginInfo]] = field(default_factory=dict)

    def roots(self) -> tuple[PluginInfo, ...]:
        return self.root_plugins

    def children(self, data: PluginInfo) -> list[PluginInfo]:
        return self.dependents.get(data.id, [])


def _build_plugin_graph(detected: Sequence[PluginInfo], available: frozenset[str]) -> _PluginGraph:
    roots: list[PluginInfo] = []
    dependents: dict[str, list[PluginInfo]] = {}

    for plugin in detected:
        dependencies_met = True
        for dependency in plugin.dependencies:
            met = dependency.optional or any(dependency.accept(plugin_id) for plugin_id in available)
            if not met:
                dependencies_met = False
            dependents.setdefault(dependency.plugin_id, []).append(plugin)

        # Plugins with unmet dependencies only enter the graph as dependents
        if dependencies_met:
            roots.append(plugin)

    return _PluginGraph(root_plugins=tuple(roots), dependents=dependents)


def order_plugins(
    detected: Sequence[PluginInfo],
    available: Iterable[str] = (),
) -> list[PluginInfo]:
    """Order detected plugins so that each comes after the plugins it depends on.

    Plugins without dependencies, and plugins whose dependencies are all
    optional or already ``available``, start the ordering. Every other plugin
    is placed after the detected plugins it depends on. Plugins that the
    ordering cannot reach, for example because they depend on a plugin that
    was neither detected nor available, are appended at the end in detection
    order.

    A dependency cycle does not fail the ordering: a warning is logged and
    the detection order is returned unchanged.

    Args:
        detected: Plugins in detection order.
        available: Ids of plugins that are already loaded.

    Returns:
        The plugins in initialization order.

    """
    graph = _build_plugin_graph(detected, frozenset(available))

    try:
        ordered = sort_data(graph)
    except CycleError as e:
        logger.warning(f"Unable to perform proper dependencies sorting: {e}")
        return list(detected)

    placed = set(ordered)
    for plugin in detected:
        if plugin not in placed:
            placed.add(plugin)
            ordered.append(plugin)
    logger.debug(f"Ordered {len(ordered)} plugins")
    return ordered
