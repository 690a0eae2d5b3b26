"""Graph data sources: the caller-side description of a graph."""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence


@runtime_checkable
class GraphDataSource[T: Hashable](Protocol):
    """Lazy, caller-driven description of a directed graph.

    The graph is discovered from ``roots()`` by repeatedly asking for
    ``children()``. Values must be hashable; two values that compare unequal
    are always distinct nodes.
    """

    def roots(self) -> Sequence[T]:
        """Return the traversal entry points."""
        ...

    def children(self, data: T) -> Sequence[T]:
        """Return the direct successors of ``data``."""
        ...


@dataclass(frozen=True, slots=True)
class MappingDataSource[T: Hashable]:
    """A graph data source backed by a successor mapping.

    ``successors[a] = (b, c)`` means edges ``a -> b`` and ``a -> c``, so ``a``
    is emitted before ``b`` and ``c``.

    Attributes:
        successors: Mapping from node to its direct successors.
        root_values: Explicit traversal entry points. When ``None``, every
            known node is a root, in declaration order.

    """

    successors: dict[T, tuple[T, ...]] = field(default_factory=dict)
    root_values: tuple[T, ...] | None = None

    @classmethod
    def from_mapping(
        cls,
        successors: Mapping[T, Iterable[T]],
        roots: Iterable[T] | None = None,
    ) -> MappingDataSource[T]:
        """Build a data source from a mapping of node to successors.

        Successors that are not keys of the mapping become known nodes with no
        successors of their own.

        Example:
            >>> source = MappingDataSource.from_mapping({"a": ["b"], "b": []})
            >>> source.children("a")
            ('b',)

        """
        normalized: dict[T, tuple[T, ...]] = {}
        for node, children in successors.items():
            normalized[node] = tuple(children)
        for children in list(normalized.values()):
            for child in children:
                normalized.setdefault(child, ())
        return cls(
            successors=normalized,
            root_values=tuple(roots) if roots is not None else None,
        )

    @classmethod
    def from_edges(
        cls,
        edges: Iterable[tuple[T, T]],
        roots: Iterable[T] | None = None,
    ) -> MappingDataSource[T]:
        """Build a data source from a list of ``(source, target)`` edges.

        Example:
            >>> source = MappingDataSource.from_edges([("a", "b"), ("b", "c")])
            >>> source.roots()
            ('a', 'b', 'c')

        """
        successors: dict[T, list[T]] = {}
        for src, dst in edges:
            successors.setdefault(src, []).append(dst)
            successors.setdefault(dst, [])
        return cls.from_mapping(successors, roots)

    @property
    def nodes(self) -> frozenset[T]:
        """All declared nodes."""
        return frozenset(self.successors)

    def roots(self) -> tuple[T, ...]:
        if self.root_values is not None:
            return self.root_values
        return tuple(self.successors)

    def children(self, data: T) -> tuple[T, ...]:
        return self.successors.get(data, ())

    def __len__(self) -> int:
        """Return the number of declared nodes."""
        return len(self.successors)

    def __contains__(self, node: object) -> bool:
        return node in self.successors
