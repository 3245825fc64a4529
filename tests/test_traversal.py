"""Tests for algorithms/bfs.py, dfs.py and the shared stepping contract."""

import pytest

from algorithms import REGISTRY, create_algorithm, get_algorithm, algorithms_by_family
from conftest import ALL_KEYS


def visit_order(algo):
    values = algo.get_state().node_values
    return sorted(values, key=values.get)


class TestBFS:
    def test_initial_state(self, sample_graph):
        algo = create_algorithm("bfs")
        algo.initialize(sample_graph)
        state = algo.get_state()
        assert state.highlighted_nodes == ["A"]
        assert state.current_nodes == ["A"]
        assert state.node_values == {}
        assert "start node A" in algo.get_step_info()

    def test_first_step_discovers_neighbours(self, sample_graph):
        algo = create_algorithm("bfs")
        algo.initialize(sample_graph)
        assert algo.step() is True
        state = algo.get_state()
        assert state.current_nodes == ["A", "B", "C", "F"]
        assert state.current_edges == ["AB", "AC", "AF"]
        assert state.node_values == {"A": 1}

    def test_full_run_on_sample(self, sample_graph, run):
        algo, rec = run("bfs", sample_graph)
        assert len(rec) == 5
        state = rec.last.state
        assert dict(state.node_values) == {"A": 1, "B": 2, "C": 3, "F": 4}
        assert set(state.highlighted_edges) == {"AB", "AC", "AF"}
        assert "D" not in state.highlighted_nodes
        assert "completed" in rec.last.description

    def test_layer_order(self, chain_graph, run):
        algo, _ = run("bfs", chain_graph)
        assert visit_order(algo) == ["A", "B", "C", "D"]

    def test_each_node_visited_once(self, run):
        from graph import Graph
        g = Graph.generate_random(num_nodes=20, edge_probability=0.3, seed=11)
        algo, rec = run("bfs", g)
        assert sorted(algo.get_state().node_values.values()) == list(range(1, 21))
        assert len(rec) == 21


class TestDFS:
    def test_depth_first_order(self, chain_graph, run):
        algo, _ = run("dfs", chain_graph)
        assert visit_order(algo) == ["A", "B", "D", "C"]

    def test_first_edge_explored_first(self, sample_graph, run):
        algo, rec = run("dfs", sample_graph)
        assert visit_order(algo) == ["A", "B", "C", "F"]
        assert len(rec) == 5

    def test_directed_reachability_only(self, sample_graph, run):
        algo, _ = run("dfs", sample_graph)
        assert set(algo.get_state().highlighted_nodes) == {"A", "B", "C", "F"}


class TestContract:
    @pytest.mark.parametrize("key", ALL_KEYS)
    def test_empty_graph_is_terminal(self, key, empty_graph):
        algo = create_algorithm(key)
        algo.initialize(empty_graph)
        assert algo.is_complete
        state = algo.get_state()
        assert state.current_nodes == [] and state.highlighted_nodes == []
        assert algo.step() is False

    @pytest.mark.parametrize("key", ALL_KEYS)
    def test_step_before_initialize_is_noop(self, key):
        algo = create_algorithm(key)
        assert algo.step() is False
        assert not algo.is_initialized
        assert algo.get_state().highlighted_nodes == []

    @pytest.mark.parametrize("key", ALL_KEYS)
    def test_step_after_completion_changes_nothing(self, key, sample_graph, run):
        algo, rec = run(key, sample_graph)
        before = algo.get_state().freeze()
        info = algo.get_step_info()
        assert algo.step() is False
        assert algo.get_state().freeze() == before
        assert algo.get_step_info() == info

    @pytest.mark.parametrize("key", ALL_KEYS)
    def test_initialize_again_resets(self, key, sample_graph):
        algo = create_algorithm(key, seed=1)
        algo.initialize(sample_graph)
        first = algo.get_state().freeze()
        algo.step()
        algo.step()
        algo.initialize(sample_graph)
        assert algo.get_state().freeze() == first
        assert algo.step_count == 0

    @pytest.mark.parametrize("key", ALL_KEYS)
    def test_every_step_is_described(self, key, undirected_sample, run):
        _, rec = run(key, undirected_sample)
        assert all(r.description.strip() for r in rec.records)

    @pytest.mark.parametrize("key", ALL_KEYS)
    def test_highlights_reference_real_ids(self, key, undirected_sample, run):
        _, rec = run(key, undirected_sample)
        nodes, edges = set(undirected_sample.node_ids()), set(undirected_sample.edges)
        for r in rec.records:
            assert set(r.state.highlighted_nodes) <= nodes
            assert set(r.state.current_nodes) <= nodes
            assert set(r.state.highlighted_edges) <= edges
            assert set(r.state.current_edges) <= edges


class TestRegistry:
    def test_all_nine_registered(self):
        assert list(REGISTRY) == ALL_KEYS

    def test_families(self):
        assert [a.key for a in algorithms_by_family("mst")] == ["kruskal", "prim"]
        assert len(algorithms_by_family("geometry")) == 3

    def test_unknown_key(self):
        assert get_algorithm("nope") is None
        with pytest.raises(ValueError, match="Unknown algorithm"):
            create_algorithm("nope")

    def test_undeclared_options_dropped(self):
        algo = create_algorithm("bfs", target="F", seed=3)
        assert algo.options == {}
        assert create_algorithm("astar", target="F", seed=None).options == {"target": "F"}
