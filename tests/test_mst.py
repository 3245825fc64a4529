"""Tests for algorithms/kruskal.py, prim.py and union_find.py."""

import heapq

import pytest

from graph import Graph
from algorithms import create_algorithm
from algorithms.union_find import UnionFind


def tree_weight(graph: Graph, edge_ids) -> float:
    return sum(graph.get_edge(eid).weight or 0 for eid in edge_ids)


def reference_mst_weight(graph: Graph) -> float:
    """Lazy heap Prim over the undirected view; graph must be connected."""
    start = graph.node_ids()[0]
    seen, total = {start}, 0
    heap = [(nb.weight, i, nb.node.id) for i, nb in enumerate(graph.neighbours(start))]
    heapq.heapify(heap)
    counter = len(heap)
    while heap:
        w, _, nid = heapq.heappop(heap)
        if nid in seen:
            continue
        seen.add(nid)
        total += w
        for nb in graph.neighbours(nid):
            if nb.node.id not in seen:
                counter += 1
                heapq.heappush(heap, (nb.weight, counter, nb.node.id))
    return total


class TestUnionFind:
    def test_union_and_find(self):
        uf = UnionFind(["a", "b", "c", "d"])
        assert uf.union("a", "b")
        assert uf.union("c", "d")
        assert not uf.connected("a", "c")
        assert uf.union("b", "d")
        assert uf.connected("a", "c")
        assert not uf.union("a", "d")

    def test_lazy_elements(self):
        uf = UnionFind()
        assert uf.find("x") == "x"
        assert uf.union("x", "y")


class TestKruskal:
    def test_sample_tree(self, undirected_sample, run):
        algo, rec = run("kruskal", undirected_sample)
        state = algo.get_state()
        assert state.highlighted_edges == ["AB", "DC", "EF", "AC", "BF"]
        assert tree_weight(undirected_sample, state.highlighted_edges) == 15
        assert len(rec) == 1 + undirected_sample.edge_count()

    def test_initial_focus_is_empty(self, undirected_sample):
        algo = create_algorithm("kruskal")
        algo.initialize(undirected_sample)
        assert algo.get_state().current_nodes == []
        assert algo.get_state().current_edges == []

    def test_one_edge_per_step(self, undirected_sample, run):
        _, rec = run("kruskal", undirected_sample)
        for r in rec.records[1:]:
            assert len(r.state.current_edges) == 1
        assert "Skipped edge D→E" in rec[6].description

    def test_direction_is_ignored(self, sample_graph, run):
        algo, _ = run("kruskal", sample_graph)
        assert tree_weight(sample_graph, algo.get_state().highlighted_edges) == 15

    def test_forest_on_disconnected_graph(self, run):
        g = Graph()
        for nid in "ABCD":
            g.create_node(0, 0, node_id=nid)
        g.create_edge("A", "B", weight=2)
        g.create_edge("C", "D", weight=3)
        algo, _ = run("kruskal", g)
        assert len(algo.get_state().highlighted_edges) == 2

    def test_no_edges(self, run):
        g = Graph()
        g.create_node(0, 0)
        algo, rec = run("kruskal", g)
        assert len(rec) == 1
        assert algo.get_state().highlighted_edges == []

    @pytest.mark.parametrize("seed", range(6))
    def test_minimum_weight(self, seed, run):
        g = Graph.generate_random(num_nodes=10 + seed, edge_probability=0.35, seed=seed)
        algo, _ = run("kruskal", g)
        edges = algo.get_state().highlighted_edges
        assert len(edges) == g.node_count() - 1
        assert tree_weight(g, edges) == reference_mst_weight(g)


class TestPrim:
    def test_sample_tree(self, undirected_sample, run):
        algo, rec = run("prim", undirected_sample)
        state = algo.get_state()
        assert state.highlighted_edges == ["AB", "AC", "DC", "BF", "EF"]
        assert dict(state.node_values) == {"A": 1, "B": 2, "C": 3, "D": 4, "F": 5, "E": 6}
        assert len(rec) == 8

    def test_initial_state(self, undirected_sample):
        algo = create_algorithm("prim")
        algo.initialize(undirected_sample)
        state = algo.get_state()
        assert state.current_nodes == ["A"]
        assert state.node_values == {"A": 1}

    def test_rejected_edges_are_reported(self, undirected_sample, run):
        _, rec = run("prim", undirected_sample)
        assert "both endpoints" in rec[6].description
        assert "both endpoints" in rec[7].description

    def test_directed_follows_outgoing_edges(self, sample_graph, run):
        algo, _ = run("prim", sample_graph)
        assert set(algo.get_state().node_values) == {"A", "B", "C", "F"}

    def test_isolated_start(self, run):
        g = Graph()
        g.create_node(0, 0, node_id="A")
        g.create_node(1, 1, node_id="B")
        algo, rec = run("prim", g)
        assert len(rec) == 1
        assert dict(algo.get_state().node_values) == {"A": 1}

    @pytest.mark.parametrize("seed", range(6))
    def test_agrees_with_kruskal(self, seed, run):
        g = Graph.generate_random(num_nodes=8 + seed, edge_probability=0.4, seed=100 + seed)
        prim, _ = run("prim", g)
        kruskal, _ = run("kruskal", g)
        p_edges = prim.get_state().highlighted_edges
        assert len(p_edges) == g.node_count() - 1
        assert tree_weight(g, p_edges) == tree_weight(g, kruskal.get_state().highlighted_edges)


def mixed_triangle() -> Graph:
    """A-B and B-C weigh 1; A-C carries no weight."""
    g = Graph()
    for nid, x in (("A", 0), ("B", 10), ("C", 20)):
        g.create_node(x, 0, node_id=nid)
    g.create_edge("A", "B", weight=1, edge_id="AB")
    g.create_edge("B", "C", weight=1, edge_id="BC")
    g.create_edge("A", "C", edge_id="AC")
    return g


class TestMissingWeights:
    @pytest.mark.parametrize("key", ["kruskal", "prim"])
    def test_unweighted_edge_is_cheapest(self, key, run):
        g = mixed_triangle()
        algo, rec = run(key, g)
        assert algo.get_state().highlighted_edges == ["AC", "AB"]
        assert tree_weight(g, algo.get_state().highlighted_edges) == 1
        assert "total weight 1." in rec.last.description

    def test_kruskal_reports_zero_cost(self, run):
        _, rec = run("kruskal", mixed_triangle())
        assert rec[1].description == "Added edge A→C (w=0) to the spanning tree."

    def test_both_trees_agree(self, run):
        kruskal, _ = run("kruskal", mixed_triangle())
        prim, _ = run("prim", mixed_triangle())
        assert set(kruskal.get_state().highlighted_edges) == set(prim.get_state().highlighted_edges)
