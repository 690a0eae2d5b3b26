"""Tests for building the working graph from a data source."""

from collections.abc import Sequence
from dataclasses import dataclass

from graphsort import Edge, GraphDataSource, MappingDataSource, Node, build_graph


class CountingSource:
    """Data source recording how often children are requested."""

    def __init__(self, roots: list[str], successors: dict[str, list[str]]) -> None:
        self._roots = roots
        self._successors = successors
        self.calls: list[str] = []

    def roots(self) -> list[str]:
        return self._roots

    def children(self, data: str) -> list[str]:
        self.calls.append(data)
        return self._successors.get(data, [])


@dataclass(frozen=True)
class Package:
    name: str
    version: str


class TestNodeAndEdge:
    def test_connect_registers_edge_on_both_ends(self) -> None:
        a = Node("a")
        b = Node("b")
        edge = a.connect(b)
        assert a.out_edges == [edge]
        assert b.in_edges == {edge}
        assert edge.source is a
        assert edge.target is b

    def test_detach_removes_edge_from_both_ends(self) -> None:
        a = Node("a")
        b = Node("b")
        edge = a.connect(b)
        edge.detach()
        assert a.out_edges == []
        assert b.in_edges == set()

    def test_nodes_compare_by_identity(self) -> None:
        assert Node("a") != Node("a")
        assert len({Node("a"), Node("a")}) == 2

    def test_edges_compare_by_identity(self) -> None:
        a = Node("a")
        b = Node("b")
        assert Edge(a, b) != Edge(a, b)

    def test_repr(self) -> None:
        a = Node("a")
        edge = a.connect(Node("b"))
        assert repr(a) == "Node('a')"
        assert repr(edge) == "Edge('a' -> 'b')"


class TestBuildGraph:
    def test_empty_source(self) -> None:
        assert build_graph(MappingDataSource()) == []

    def test_discovery_order_is_depth_first(self) -> None:
        source = CountingSource(["A"], {"A": ["B", "C"], "B": ["D"], "C": ["D"]})
        nodes = build_graph(source)
        assert [node.data for node in nodes] == ["A", "B", "D", "C"]

    def test_shared_descendant_is_one_node(self) -> None:
        source = CountingSource(["A"], {"A": ["B", "C"], "B": ["D"], "C": ["D"]})
        nodes = build_graph(source)
        by_data = {node.data: node for node in nodes}
        assert len(nodes) == 4
        assert {edge.source.data for edge in by_data["D"].in_edges} == {"B", "C"}

    def test_children_requested_once_per_value(self) -> None:
        source = CountingSource(["A", "B"], {"A": ["B", "C"], "B": ["C"], "C": []})
        build_graph(source)
        assert sorted(source.calls) == ["A", "B", "C"]

    def test_out_edges_follow_children_order(self) -> None:
        source = CountingSource(["A"], {"A": ["C", "B", "D"]})
        nodes = build_graph(source)
        assert [edge.target.data for edge in nodes[0].out_edges] == ["C", "B", "D"]

    def test_root_reached_from_another_root_is_not_duplicated(self) -> None:
        source = CountingSource(["A", "B"], {"A": ["B"]})
        nodes = build_graph(source)
        assert [node.data for node in nodes] == ["A", "B"]
        assert len(nodes[1].in_edges) == 1

    def test_duplicate_roots(self) -> None:
        nodes = build_graph(CountingSource(["A", "A"], {}))
        assert [node.data for node in nodes] == ["A"]

    def test_cycle_does_not_raise(self) -> None:
        nodes = build_graph(CountingSource(["X"], {"X": ["Y"], "Y": ["X"]}))
        assert [node.data for node in nodes] == ["X", "Y"]
        assert all(len(node.in_edges) == 1 for node in nodes)

    def test_self_loop(self) -> None:
        nodes = build_graph(CountingSource(["S"], {"S": ["S"]}))
        assert len(nodes) == 1
        (edge,) = nodes[0].in_edges
        assert edge.source is nodes[0]
        assert edge.target is nodes[0]

    def test_values_deduplicated_by_equality(self) -> None:
        root = Package("app", "1.0")
        successors = {
            Package("app", "1.0"): [Package("lib", "2.0"), Package("lib", "2.0"), Package("lib", "3.0")],
        }
        source = MappingDataSource.from_mapping(successors, roots=[root])
        nodes = build_graph(source)
        assert [node.data for node in nodes] == [root, Package("lib", "2.0"), Package("lib", "3.0")]

    def test_deep_graph_does_not_recurse(self) -> None:
        size = 20_000
        source = MappingDataSource.from_mapping({i: [i + 1] for i in range(size)}, roots=[0])
        nodes = build_graph(source)
        assert len(nodes) == size + 1


class TestGraphDataSourceProtocol:
    def test_plain_class_is_a_data_source(self) -> None:
        assert isinstance(CountingSource([], {}), GraphDataSource)

    def test_mapping_source_is_a_data_source(self) -> None:
        assert isinstance(MappingDataSource(), GraphDataSource)

    def test_object_without_children_is_not(self) -> None:
        class RootsOnly:
            def roots(self) -> Sequence[str]:
                return []

        assert not isinstance(RootsOnly(), GraphDataSource)
