"""Tests for the Kruskal-style spanning forest builder."""

import itertools

import pytest
from py_geomlib.core.graph import Graph
from py_geomlib.core.spanning_forest import (
    build_spanning_forest, describe_forest, forest_edges, forest_weight
)
from py_geomlib.core.union_find import UnionFind


def _graph(edges):
    graph = Graph()
    for edge in edges:
        graph.add_edge(*edge)
    return graph


def _components(graph, keys):
    keys = list(keys)
    uf = UnionFind(keys)
    for edge in graph.all_edges():
        if edge.a in uf and edge.b in uf:
            uf.union(edge.a, edge.b)
    return uf.count


def _is_acyclic(forest):
    uf = UnionFind(forest)
    for a, b, _ in forest_edges(forest):
        if not uf.union(a, b):
            return False
    return True


class TestSpanningForest:
    """Test forest structure and size."""

    @pytest.fixture
    def weighted_square(self):
        """Square with a cheap diagonal and one expensive side."""
        return _graph([
            ("A", "B", 4.0),
            ("A", "D", 1.0),
            ("B", "D", 0.5),
            ("B", "C", 3.0),
            ("C", "D", 2.0),
        ])

    def test_empty_graph(self):
        """No vertices, empty forest."""
        assert build_spanning_forest(Graph()) == {}

    def test_tree_edge_count(self, weighted_square):
        """A connected graph spans with V - 1 edges."""
        forest = build_spanning_forest(weighted_square)

        assert set(forest) == {"A", "B", "C", "D"}
        assert len(forest_edges(forest)) == 3
        assert _is_acyclic(forest)

    def test_forest_is_symmetric(self, weighted_square):
        """Tree entries are stored in both directions."""
        forest = build_spanning_forest(weighted_square, weighted=False)
        for key, neighbors in forest.items():
            for other, weight in neighbors.items():
                assert forest[other][key] == weight

    def test_weighted_picks_cheapest_edges(self, weighted_square):
        """Weighted mode yields the minimum spanning tree."""
        forest = build_spanning_forest(weighted_square, weighted=True)

        assert forest_weight(forest) == pytest.approx(3.5)
        assert {frozenset((a, b)) for a, b, _ in forest_edges(forest)} == {
            frozenset(("B", "D")), frozenset(("A", "D")), frozenset(("C", "D"))
        }

    def test_unweighted_uses_insertion_order(self, weighted_square):
        """Unweighted mode takes edges as inserted."""
        forest = build_spanning_forest(weighted_square, weighted=False)

        assert {frozenset((a, b)) for a, b, _ in forest_edges(forest)} == {
            frozenset(("A", "B")), frozenset(("A", "D")), frozenset(("B", "C"))
        }

    def test_weighted_is_minimal(self, weighted_square):
        """No other spanning tree of the graph is lighter."""
        forest = build_spanning_forest(weighted_square, weighted=True)
        edges = weighted_square.all_edges()
        keys = list(weighted_square.vertices)

        best = None
        for combo in itertools.combinations(edges, len(keys) - 1):
            uf = UnionFind(keys)
            if all(uf.union(e.a, e.b) for e in combo):
                total = sum(e.weight for e in combo)
                best = total if best is None else min(best, total)

        assert forest_weight(forest) == pytest.approx(best)

    def test_equal_weights_keep_insertion_order(self):
        """Ties are broken by insertion order."""
        graph = _graph([("A", "B", 1.0), ("B", "C", 1.0), ("A", "C", 1.0)])
        forest = build_spanning_forest(graph, weighted=True)

        assert {frozenset((a, b)) for a, b, _ in forest_edges(forest)} == {
            frozenset(("A", "B")), frozenset(("B", "C"))
        }

    def test_one_tree_per_component(self):
        """Disconnected graphs give n - c tree edges."""
        graph = _graph([
            ("A", "B"), ("B", "C"), ("C", "A"),
            ("X", "Y"), ("Y", "Z"), ("Z", "X"), ("Z", "W"),
            ("P", "Q"),
        ])
        forest = build_spanning_forest(graph)

        n = len(graph.vertices)
        c = _components(graph, graph.vertices)
        assert c == 3
        assert len(forest_edges(forest)) == n - c
        assert _is_acyclic(forest)

    def test_subset(self):
        """Only edges inside the subset join the forest."""
        graph = _graph([("A", "B"), ("B", "C"), ("C", "D"), ("D", "A"), ("A", "C")])
        subset = ["A", "B", "D"]
        forest = build_spanning_forest(graph, vertices=subset, weighted=False)

        assert list(forest) == subset
        assert len(forest_edges(forest)) == len(subset) - _components(graph, subset)
        for neighbors in forest.values():
            assert "C" not in neighbors

    def test_subset_accepts_vertices_and_skips_unknown_keys(self):
        """GraphVertex objects and missing keys are handled."""
        graph = _graph([("A", "B"), ("B", "C")])
        vertices = [graph.get_vertex_by_key("C"), "B", "missing", "B"]
        forest = build_spanning_forest(graph, vertices=vertices)

        assert list(forest) == ["C", "B"]
        assert forest["C"] == {"B": 0.0}

    def test_describe_forest(self):
        """Text dump lists tree neighbors."""
        graph = _graph([("A", "B"), ("B", "C"), ("C", "A")])
        forest = build_spanning_forest(graph, weighted=False)

        assert describe_forest(forest).splitlines() == ["A --> B", "B --> A, C", "C --> B"]

    def test_graph_delegate(self):
        """Graph.spanning_forest wraps the builder."""
        graph = _graph([("A", "B", 2.0), ("B", "C", 1.0), ("C", "A", 3.0)])
        assert graph.spanning_forest() == build_spanning_forest(graph)
