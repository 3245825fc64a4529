"""
Pytest configuration and shared fixtures.

Graphs used across the test modules plus a helper that drives an
algorithm to completion and returns every recorded state.
"""

import random
from typing import Callable, List, Tuple

import pytest

from graph import Graph
from algorithms import StepAlgorithm, create_algorithm
from engine import Recorder


@pytest.fixture
def sample_graph() -> Graph:
    """The six-node directed demo graph."""
    return Graph.sample()


@pytest.fixture
def undirected_sample(sample_graph: Graph) -> Graph:
    return sample_graph.clone(directed=False)


@pytest.fixture
def empty_graph() -> Graph:
    return Graph()


@pytest.fixture
def chain_graph() -> Graph:
    """Undirected A-B, A-C, B-D: BFS and DFS orders differ."""
    g = Graph()
    for nid, x in (("A", 0), ("B", 100), ("C", 200), ("D", 300)):
        g.create_node(x, 0, node_id=nid)
    g.create_edge("A", "B", edge_id="AB")
    g.create_edge("A", "C", edge_id="AC")
    g.create_edge("B", "D", edge_id="BD")
    return g


def make_point_graph(count: int, seed: int) -> Graph:
    """Edgeless graph of `count` nodes at seeded random integer positions."""
    rng = random.Random(seed)
    g = Graph()
    for i in range(count):
        g.create_node(rng.randint(0, 500), rng.randint(0, 500), node_id=f"P{i + 1}")
    return g


@pytest.fixture
def point_graph() -> Callable[[int, int], Graph]:
    return make_point_graph


def drive(key: str, graph: Graph, **options) -> Tuple[StepAlgorithm, Recorder]:
    """Initialise, step until terminal, record every state."""
    algo = create_algorithm(key, **options)
    rec = Recorder()
    algo.initialize(graph)
    rec.record(algo)
    guard = 0
    while not algo.is_complete:
        algo.step()
        rec.record(algo)
        guard += 1
        assert guard < 10_000, f"{key} did not terminate"
    return algo, rec


@pytest.fixture
def run() -> Callable[..., Tuple[StepAlgorithm, Recorder]]:
    return drive


ALL_KEYS: List[str] = [
    "bfs", "dfs", "dijkstra", "astar", "kruskal",
    "prim", "convex_hull", "closest_pair", "farthest_pair",
]
