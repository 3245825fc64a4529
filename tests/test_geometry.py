"""Tests for algorithms/convex_hull.py, closest_pair.py and farthest_pair.py."""

import itertools

import pytest

from graph import Graph
from algorithms import create_algorithm
from algorithms.convex_hull import cross
from conftest import make_point_graph


def square_graph(with_edges: bool = False) -> Graph:
    g = Graph()
    for nid, x, y in (("P1", 0, 0), ("P2", 10, 0), ("P3", 10, 10), ("P4", 0, 10), ("P5", 5, 5)):
        g.create_node(x, y, node_id=nid)
    if with_edges:
        g.create_edge("P1", "P2", edge_id="e12")
        g.create_edge("P3", "P2", edge_id="e32")
        g.create_edge("P1", "P5", edge_id="e15")
    return g


def hull_of(run, graph):
    algo, rec = run("convex_hull", graph)
    return algo, rec, [graph.get_node(nid) for nid in algo.get_state().highlighted_nodes]


class TestConvexHull:
    def test_square(self, run):
        algo, rec, hull = hull_of(run, square_graph())
        assert [n.id for n in hull] == ["P1", "P2", "P3", "P4"]
        assert dict(algo.get_state().node_values) == {"P1": 1, "P2": 2, "P3": 3, "P4": 4}
        # init + 5 lower + transition + 5 upper
        assert len(rec) == 12

    def test_transition_step(self, run):
        _, rec, _ = hull_of(run, square_graph())
        assert "Lower hull completed" in rec[6].description
        assert rec[6].state.current_nodes == ()

    def test_hull_edges_highlighted(self, run):
        g = square_graph(with_edges=True)
        algo, _, _ = hull_of(run, g)
        assert set(algo.get_state().highlighted_edges) == {"e12", "e32"}

    def test_initial_focus_is_leftmost_lowest(self):
        g = square_graph()
        g.move_node("P4", 0, -3)
        algo = create_algorithm("convex_hull")
        algo.initialize(g)
        assert algo.get_state().current_nodes == ["P4"]

    def test_collinear_points_excluded(self, run):
        g = Graph()
        for i, (x, y) in enumerate([(0, 0), (5, 0), (10, 0), (10, 10), (0, 10)]):
            g.create_node(x, y, node_id=f"Q{i}")
        _, _, hull = hull_of(run, g)
        assert "Q1" not in [n.id for n in hull]

    @pytest.mark.parametrize("count", [1, 2])
    def test_tiny_inputs_finish_at_once(self, count, run):
        algo, rec, hull = hull_of(run, make_point_graph(count, seed=count))
        assert len(rec) == 1
        assert len(hull) == count

    @pytest.mark.parametrize("seed", range(10))
    def test_random_hull_is_convex_and_contains_all(self, seed, run):
        g = make_point_graph(6 + seed * 3, seed)
        _, _, hull = hull_of(run, g)
        assert hull[0] is min(g.node_list(), key=lambda n: (n.x, n.y))
        k = len(hull)
        assert k >= 3
        for i in range(k):
            a, b, c = hull[i], hull[(i + 1) % k], hull[(i + 2) % k]
            assert cross(a, b, c) > 0
        for node in g.node_list():
            for i in range(k):
                assert cross(hull[i], hull[(i + 1) % k], node) >= 0


def brute_force(graph: Graph, pick):
    return pick(a.distance_to(b) for a, b in itertools.combinations(graph.node_list(), 2))


class TestPairScans:
    @pytest.mark.parametrize("key,pick", [("closest_pair", min), ("farthest_pair", max)])
    @pytest.mark.parametrize("seed", range(6))
    def test_matches_brute_force(self, key, pick, seed, run):
        g = make_point_graph(3 + seed * 2, seed)
        algo, rec = run(key, g)
        n = g.node_count()
        assert len(rec) == 1 + n * (n - 1) // 2 + 1
        state = algo.get_state()
        a, b = (g.get_node(nid) for nid in state.highlighted_nodes)
        assert a.distance_to(b) == pytest.approx(brute_force(g, pick))
        assert dict(state.node_values) == {a.id: round(a.distance_to(b), 2), b.id: round(a.distance_to(b), 2)}

    def test_first_pair_wins_ties(self, run):
        g = Graph()
        for nid, x in (("A", 0), ("B", 10), ("C", 20)):
            g.create_node(x, 0, node_id=nid)
        algo, _ = run("closest_pair", g)
        assert algo.get_state().highlighted_nodes == ["A", "B"]

    def test_step_shows_current_and_best(self, run):
        g = Graph()
        for nid, x in (("A", 0), ("B", 1), ("C", 50)):
            g.create_node(x, 0, node_id=nid)
        g.create_edge("A", "C", edge_id="AC")
        _, rec = run("closest_pair", g)
        # pairs: (A,B) (A,C) (B,C); record 2 compares A and C while A,B is best
        state = rec[2].state
        assert state.current_nodes == ("A", "C")
        assert set(state.highlighted_nodes) == {"A", "B", "C"}
        assert state.current_edges == ("AC",)

    def test_final_step_presents_winner(self, run):
        g = make_point_graph(4, seed=1)
        _, rec = run("farthest_pair", g)
        last = rec.last
        assert last.state.current_nodes == last.state.highlighted_nodes
        assert "The farthest pair is" in last.description

    def test_initial_focus(self):
        g = make_point_graph(4, seed=2)
        algo = create_algorithm("closest_pair")
        algo.initialize(g)
        assert algo.get_state().current_nodes == ["P1"]

    @pytest.mark.parametrize("key", ["closest_pair", "farthest_pair"])
    def test_single_node(self, key, run):
        algo, rec = run(key, make_point_graph(1, seed=0))
        assert len(rec) == 1
        assert algo.get_state().highlighted_nodes == ["P1"]
        assert "At least two nodes" in rec.last.description
