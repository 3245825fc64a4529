"""Tests for engine/ — recorder, stepper navigation, autoplay and workspaces."""

import dataclasses

import pytest

from graph import Graph
from algorithms import create_algorithm
from algorithms.step import AlgorithmState
from engine import Recorder, Stepper, StepperState, Workspace, WorkspaceStore


class CountingAlgorithm:
    """Wraps a StepAlgorithm and counts step() calls."""

    def __init__(self, inner):
        self.inner = inner
        self.calls = 0

    def __getattr__(self, name):
        return getattr(self.inner, name)

    def step(self):
        self.calls += 1
        return self.inner.step()


class SilentAlgorithm:
    """Satisfies the contract but never describes anything."""

    def __init__(self):
        self.state = AlgorithmState()

    def initialize(self, graph):
        self.state = AlgorithmState()

    def step(self):
        return False

    def get_state(self):
        return self.state

    def get_step_info(self):
        return ""


@pytest.fixture
def stepper(sample_graph):
    s = Stepper()
    s.start(CountingAlgorithm(create_algorithm("dijkstra")), sample_graph)
    return s


class TestRecorder:
    def test_snapshots_are_isolated_from_live_state(self, sample_graph):
        algo = create_algorithm("bfs")
        algo.initialize(sample_graph)
        rec = Recorder()
        first = rec.record(algo)
        algo.step()
        algo.step()
        rec.record(algo)
        assert first.state.highlighted_nodes == ("A",)
        assert dict(first.state.node_values) == {}
        assert rec[0] is first

    def test_snapshots_are_frozen(self, sample_graph):
        algo = create_algorithm("dijkstra")
        algo.initialize(sample_graph)
        record = Recorder().record(algo)
        with pytest.raises(dataclasses.FrozenInstanceError):
            record.state.highlighted_nodes = ()
        with pytest.raises(TypeError):
            record.state.node_values["A"] = 5

    def test_blank_descriptions_fall_back(self):
        algo = SilentAlgorithm()
        rec = Recorder()
        rec.record(algo)
        rec.record(algo)
        rec.record(algo)
        assert [r.description for r in rec.records] == ["Algorithm initialized.", "Step 1.", "Step 2."]

    def test_export(self, sample_graph, run):
        _, rec = run("bfs", sample_graph)
        exported = rec.export()
        assert len(exported) == len(rec)
        assert exported[1]["index"] == 1
        assert exported[1]["state"]["node_values"] == {"A": 1}
        assert isinstance(exported[1]["state"]["highlighted_nodes"], list)

    def test_clear(self, sample_graph, run):
        _, rec = run("bfs", sample_graph)
        rec.clear()
        assert len(rec) == 0 and rec.last is None


class TestStepperNavigation:
    def test_start_records_initial_state(self, stepper):
        assert stepper.total == 1
        assert stepper.position == 0
        assert stepper.current.state.current_nodes == ("A",)
        assert stepper.algorithm.calls == 0

    def test_next_at_newest_steps_once(self, stepper):
        assert stepper.next()
        assert stepper.algorithm.calls == 1
        assert (stepper.position, stepper.total) == (1, 2)

    def test_seeking_never_steps(self, stepper):
        stepper.next()
        stepper.next()
        calls = stepper.algorithm.calls
        assert stepper.prev()
        assert stepper.first()
        assert stepper.seek(2)
        assert stepper.last()
        assert stepper.next()       # newest again → this one computes
        assert stepper.algorithm.calls == calls + 1

    def test_replay_returns_identical_records(self, stepper):
        stepper.next()
        second = stepper.current
        stepper.first()
        stepper.next()
        assert stepper.current is second
        assert stepper.algorithm.calls == 1

    def test_out_of_range_seek(self, stepper):
        assert not stepper.seek(5)
        assert not stepper.seek(-1)
        assert stepper.position == 0

    def test_prev_at_start(self, stepper):
        assert not stepper.prev()

    def test_run_to_completion(self, stepper):
        taken = stepper.run_to_completion()
        assert taken == 4
        assert stepper.is_complete
        assert not stepper.can_advance
        assert not stepper.next()
        assert stepper.state == StepperState.FINISHED
        assert dict(stepper.current.state.node_values) == {"A": 0, "B": 1, "C": 4, "F": 6}

    def test_run_to_completion_cap(self, stepper):
        assert stepper.run_to_completion(max_steps=2) == 2
        assert not stepper.is_complete

    def test_reset_replaces_history(self, stepper):
        stepper.run_to_completion()
        stepper.reset()
        assert stepper.total == 1
        assert stepper.position == 0
        assert stepper.can_advance

    def test_graph_is_private_copy(self, sample_graph):
        s = Stepper()
        s.start(create_algorithm("bfs"), sample_graph)
        sample_graph.remove_node("B")
        s.run_to_completion()
        assert "B" in s.current.state.highlighted_nodes

    def test_on_step_callback(self, sample_graph):
        seen = []
        s = Stepper(on_step=seen.append)
        s.start(create_algorithm("bfs"), sample_graph)
        s.next()
        s.prev()
        assert [r.state.node_values.get("A") for r in seen] == [None, 1, None]

    def test_metrics(self, stepper):
        stepper.run_to_completion()
        metrics = stepper.metrics()
        assert metrics.algo_key == "dijkstra"
        assert metrics.total_steps == 4
        assert metrics.completed
        assert metrics.highlighted_nodes == 4

    def test_idle_stepper(self):
        s = Stepper()
        assert not s.next()
        assert s.reset() is None
        assert s.current is None
        assert s.run_to_completion() == 0


class TestAutoplay:
    def test_tick_respects_speed(self, stepper):
        stepper.set_speed("slow")
        stepper.play()
        start = stepper._last_tick
        assert not stepper.tick(now=start + 0.5)
        assert stepper.tick(now=start + 1.0)
        assert stepper.position == 1

    def test_tick_when_paused(self, stepper):
        assert not stepper.tick(now=1e9)

    def test_plays_to_finish(self, stepper):
        stepper.set_speed("turbo")
        stepper.play()
        t = stepper._last_tick
        for _ in range(10):
            t += 1
            stepper.tick(now=t)
        assert stepper.state == StepperState.FINISHED
        assert stepper.is_complete

    def test_play_ignored_when_nothing_left(self, stepper):
        stepper.run_to_completion()
        stepper.play()
        assert not stepper.is_playing

    def test_toggle(self, stepper):
        stepper.toggle_play()
        assert stepper.is_playing
        stepper.toggle_play()
        assert stepper.state == StepperState.PAUSED

    def test_unknown_speed_falls_back(self, stepper):
        stepper.set_speed("warp")
        assert stepper.speed == 0.4


class TestWorkspace:
    def test_run_and_edit_discards(self):
        ws = Workspace("t")
        stepper = ws.run("bfs")
        assert stepper.total == 1
        ws.set_directed(False)
        assert ws.stepper is None
        assert not ws.graph.directed

    def test_unweighted_mode_keeps_stored_weights(self):
        ws = Workspace("t")
        ws.set_weighted(False)
        ws.run("dijkstra").run_to_completion()
        assert ws.graph.get_edge("AF").weight == 9
        assert ws.stepper.current.state.node_values["F"] == 1

    def test_unknown_algorithm(self):
        with pytest.raises(ValueError):
            Workspace("t").run("nope")

    def test_store(self):
        store = WorkspaceStore()
        ws = store.create()
        assert store.get(ws.token) is ws
        assert store.get_or_create(ws.token) is ws
        assert store.get_or_create("missing") is not ws
        assert len(store) == 2
        store.drop(ws.token)
        assert store.get(ws.token) is None
        assert store.get(None) is None

    def test_default_graph_is_sample(self):
        assert Workspace("t").graph.to_dict() == Graph.sample().to_dict()

    def test_store_evicts_least_recently_used(self):
        store = WorkspaceStore(max_workspaces=3)
        first, second, third = store.create(), store.create(), store.create()
        assert store.get(first.token) is first      # refreshes first
        fourth = store.create()
        assert len(store) == 3
        assert store.get(second.token) is None
        assert {store.get(ws.token) for ws in (first, third, fourth)} == {first, third, fourth}

    def test_store_needs_room(self):
        with pytest.raises(ValueError):
            WorkspaceStore(max_workspaces=0)
