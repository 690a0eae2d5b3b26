"""Tests for MappingDataSource."""

import dataclasses

import pytest

from graphsort import MappingDataSource


class TestMappingDataSourceConstruction:
    def test_empty(self) -> None:
        source = MappingDataSource.from_mapping({})
        assert source.nodes == frozenset()
        assert len(source) == 0
        assert source.roots() == ()

    def test_from_mapping_adds_successor_only_nodes(self) -> None:
        source = MappingDataSource.from_mapping({"a": ["b", "c"]})
        assert source.nodes == frozenset({"a", "b", "c"})
        assert source.children("b") == ()

    def test_from_mapping_copies_iterables(self) -> None:
        successors = {"a": iter(["b"])}
        source = MappingDataSource.from_mapping(successors)
        assert source.children("a") == ("b",)
        assert source.children("a") == ("b",)

    def test_from_edges(self) -> None:
        source = MappingDataSource.from_edges([("a", "b"), ("b", "c"), ("a", "c")])
        assert source.children("a") == ("b", "c")
        assert source.children("b") == ("c",)
        assert source.children("c") == ()

    def test_contains(self) -> None:
        source = MappingDataSource.from_edges([("a", "b")])
        assert "a" in source
        assert "b" in source
        assert "c" not in source

    def test_is_immutable(self) -> None:
        source = MappingDataSource.from_mapping({"a": []})
        with pytest.raises(dataclasses.FrozenInstanceError):
            source.root_values = ("a",)  # type: ignore[misc]


class TestMappingDataSourceQueries:
    def test_default_roots_are_all_nodes_in_declaration_order(self) -> None:
        source = MappingDataSource.from_mapping({"b": ["c"], "a": ["b"]})
        assert source.roots() == ("b", "a", "c")

    def test_explicit_roots(self) -> None:
        source = MappingDataSource.from_mapping({"a": ["b"], "b": []}, roots=["b"])
        assert source.roots() == ("b",)

    def test_explicit_empty_roots(self) -> None:
        source = MappingDataSource.from_mapping({"a": ["b"]}, roots=[])
        assert source.roots() == ()

    def test_children_of_unknown_value(self) -> None:
        source = MappingDataSource.from_mapping({"a": ["b"]})
        assert source.children("zzz") == ()

    def test_replace_roots(self) -> None:
        source = MappingDataSource.from_mapping({"a": ["b"], "x": []})
        rooted = dataclasses.replace(source, root_values=("x",))
        assert rooted.roots() == ("x",)
        assert rooted.successors == source.successors
