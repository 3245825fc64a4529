"""
closest_pair.py — Closest Pair of Nodes (brute force)
======================================================
Examines every unordered pair (i < j, graph node order) exactly once,
one pair per step, keeping the best pair found so far.  Only a strict
improvement replaces the best pair, so ties keep the first one found.

After the last pair an extra step presents the winner on its own.

Visual conventions:
  highlighted  – the pair being compared and the best pair so far
                 (plus any graph edge joining either pair)
  node_values  – best distance, rounded to 2 decimals, on the best pair

farthest_pair.py reuses `pair_scan` with the comparison flipped.
"""

import operator
from typing import Callable, Iterator, List

from graph import Graph, Node
from algorithms.common import edges_along
from algorithms.step import StepTrace

PRECISION = 2


def pair_scan(
    graph:  Graph,
    trace:  StepTrace,
    better: Callable[[float, float], bool],
    noun:   str,
) -> Iterator[bool]:
    state = trace.state
    nodes = graph.node_list()
    n = len(nodes)
    if n < 2:
        ids = [p.id for p in nodes]
        state.set_highlighted(ids)
        state.focus(ids)
        trace.say(f"At least two nodes are needed to find the {noun}.")
        yield False
        return

    state.focus([nodes[0].id])
    trace.say(f"Initialized {noun} search over {n * (n - 1) // 2} pair(s).")
    yield True

    best: List[Node] = []
    best_distance = 0.0
    for i in range(n - 1):
        for j in range(i + 1, n):
            a, b = nodes[i], nodes[j]
            d = a.distance_to(b)
            trace.say(f"Comparing nodes {a.id} and {b.id}: distance {d:.{PRECISION}f}.")
            if not best or better(d, best_distance):
                best, best_distance = [a, b], d
                trace.say(f"New {noun}: {a.id} and {b.id}.")

            pair_edges = edges_along(graph, [a, b])
            state.set_highlighted(
                [a.id, b.id] + [p.id for p in best],
                pair_edges + edges_along(graph, best),
            )
            state.focus([a.id, b.id], pair_edges)
            _show_best(trace, best, best_distance)
            yield True

    # presentation step
    best_ids   = [p.id for p in best]
    best_edges = edges_along(graph, best)
    state.set_highlighted(best_ids, best_edges)
    state.focus(best_ids, best_edges)
    _show_best(trace, best, best_distance)
    trace.say(
        f"The {noun} is {best_ids[0]} and {best_ids[1]} "
        f"with distance {best_distance:.{PRECISION}f}."
    )
    yield False


def _show_best(trace: StepTrace, best: List[Node], distance: float) -> None:
    values = trace.state.node_values
    values.clear()
    for node in best:
        values[node.id] = round(distance, PRECISION)


def closest_pair(graph: Graph, trace: StepTrace) -> Iterator[bool]:
    return pair_scan(graph, trace, operator.lt, "closest pair")
