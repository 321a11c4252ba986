"""Tests for webgraph_rank/graph.py"""

import numpy as np
import pytest

from webgraph_rank import DirectedGraph

from conftest import REFERENCE_EDGES


class TestConstruction:
    def test_add_vertex_reports_new(self):
        g = DirectedGraph()
        assert g.add_vertex("a") is True
        assert g.add_vertex("a") is False
        assert g.get_number_of_vertexes() == 1
        assert g.get_number_of_edges() == 0

    def test_add_edge_adds_endpoints(self):
        g = DirectedGraph()
        assert g.add_edge("a", "b") is True
        assert g.contains_vertex("a")
        assert g.contains_vertex("b")
        assert g.contains_edge("a", "b")
        assert not g.contains_edge("b", "a")

    def test_readding_edge_replaces_weight(self, reference_graph):
        g = reference_graph
        assert g.get_weight(1, 2) == 1.0
        assert g.add_edge(1, 2, 5.0) is False
        assert g.get_weight(1, 2) == 5.0
        assert g.get_number_of_edges() == 8
        assert g.get_predecessor_vertex_set(2) == {1}

    def test_self_loop(self):
        g = DirectedGraph()
        assert g.add_edge("x", "x", 2.5) is True
        assert g.contains_edge("x", "x")
        assert g.get_in_degree("x") == 1
        assert g.get_out_degree("x") == 1
        assert g.get_number_of_vertexes() == 1

    def test_edge_count_matches_new_edges(self):
        pairs = [(1, 2), (2, 3), (1, 2), (3, 1), (2, 3), (3, 3), (1, 3)]
        g = DirectedGraph()
        added = sum(g.add_edge(v, w) for v, w in pairs)
        assert added == 5
        assert g.get_number_of_edges() == added

    def test_from_edges_with_weights(self):
        g = DirectedGraph.from_edges([("a", "b", 2), ("b", "c")])
        assert g.get_weight("a", "b") == 2.0
        assert g.get_weight("b", "c") == 1.0

    def test_from_edges_rejects_bad_tuple(self):
        with pytest.raises(ValueError):
            DirectedGraph.from_edges([("a",)])


class TestQueries:
    def test_reference_counts(self, reference_graph):
        g = reference_graph
        assert g.get_number_of_vertexes() == 7
        assert g.get_number_of_edges() == 8
        assert list(g.get_vertex_set()) == [1, 2, 3, 4, 5, 6, 7]

    def test_reference_degrees(self, reference_graph):
        g = reference_graph
        assert g.get_out_degree(2) == 2
        assert list(g.get_successor_vertex_set(2)) == [5, 6]
        assert g.get_in_degree(6) == 2
        assert list(g.get_predecessor_vertex_set(6)) == [2, 4]

    def test_index_symmetry(self, reference_graph):
        g = reference_graph
        for v, w in REFERENCE_EDGES:
            assert g.contains_edge(v, w)
            assert w in g.get_successor_vertex_set(v)
            assert v in g.get_predecessor_vertex_set(w)

    def test_missing_edge_weight_raises(self, reference_graph):
        with pytest.raises(ValueError):
            reference_graph.get_weight(2, 1)
        with pytest.raises(ValueError):
            reference_graph.get_weight(1, 99)

    def test_unknown_vertex_degree_raises(self, reference_graph):
        with pytest.raises(ValueError):
            reference_graph.get_in_degree(99)
        with pytest.raises(ValueError):
            reference_graph.get_out_degree(99)

    def test_unknown_vertex_neighbours_empty(self, reference_graph):
        assert len(reference_graph.get_successor_vertex_set(99)) == 0
        assert len(reference_graph.get_predecessor_vertex_set(99)) == 0
        assert not reference_graph.contains_edge(99, 1)

    def test_edges_in_order(self):
        g = DirectedGraph.from_edges([(3, 1), (1, 3), (1, 2)])
        assert list(g.edges()) == [(1, 2, 1.0), (1, 3, 1.0), (3, 1, 1.0)]

    def test_str(self):
        g = DirectedGraph.from_edges([(2, 1), (1, 2, 5.0)])
        assert str(g) == "1 --> 2 weight = 5.0\n2 --> 1 weight = 1.0\n"


class TestViews:
    def test_views_are_read_only(self, reference_graph):
        s = reference_graph.get_successor_vertex_set(2)
        assert not hasattr(s, "remove")
        assert not hasattr(s, "add")
        with pytest.raises(TypeError):
            s[0] = 1  # type: ignore[index]

    def test_views_follow_graph(self):
        g = DirectedGraph()
        g.add_edge("a", "c")
        succ = g.get_successor_vertex_set("a")
        vertices = g.get_vertex_set()
        g.add_edge("a", "b")
        assert list(succ) == ["b", "c"]
        assert list(vertices) == ["a", "b", "c"]

    def test_views_compare_as_sets(self, reference_graph):
        assert reference_graph.get_successor_vertex_set(4) == {3, 6}
        assert reference_graph.get_successor_vertex_set(4) | {9} == {3, 6, 9}

    def test_custom_key_order(self):
        g = DirectedGraph(key=lambda v: -v)
        for v, w in REFERENCE_EDGES:
            g.add_edge(v, w)
        assert list(g.get_vertex_set()) == [7, 6, 5, 4, 3, 2, 1]
        assert list(g.get_successor_vertex_set(2)) == [6, 5]


class TestInvert:
    def test_invert_reverses_edges(self, reference_graph):
        reference_graph.add_edge(1, 2, 5.0)
        inv = reference_graph.invert()
        assert inv.get_weight(2, 1) == 5.0
        assert inv.get_weight(1, 5) == 1.0
        assert not inv.contains_edge(1, 2)
        assert inv.get_number_of_edges() == reference_graph.get_number_of_edges()

    def test_invert_does_not_mutate(self, reference_graph):
        before = list(reference_graph.edges())
        reference_graph.invert()
        assert list(reference_graph.edges()) == before

    def test_invert_twice_round_trip(self, reference_graph):
        reference_graph.add_edge(3, 3, 0.25)
        reference_graph.add_vertex(42)
        assert reference_graph.invert().invert() == reference_graph

    def test_equality_sees_weights(self):
        a = DirectedGraph.from_edges([(1, 2, 1.0)])
        b = DirectedGraph.from_edges([(1, 2, 2.0)])
        assert a != b


class TestCsr:
    def test_to_csr(self):
        g = DirectedGraph.from_edges([("b", "a", 2.0), ("a", "c")])
        A, vertices = g.to_csr()
        assert list(vertices) == ["a", "b", "c"]
        dense = A.toarray()
        expected = np.array([[0, 0, 1.0], [2.0, 0, 0], [0, 0, 0]])
        assert np.array_equal(dense, expected)

    def test_to_csr_empty(self):
        A, vertices = DirectedGraph().to_csr()
        assert A.shape == (0, 0)
        assert len(vertices) == 0
