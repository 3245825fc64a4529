"""
astar.py — A* Search
=====================
Best-first search from the graph's first node towards a target node,
ordered by f = g + h where h is the straight-line distance between the
node positions on the canvas.

Target selection:
  - `target=<node id>` searches towards that node;
  - otherwise (or when the id is unknown) a target is drawn uniformly at
    random, reproducibly when `seed` is given.

One step = pop the open node with the smallest f (ties: earliest
inserted) into the closed set, then relax its neighbours.  Reaching the
target replaces every highlight with exactly the found path and ends the
run.  The target is highlighted from the start as a marker; an exhausted
open set removes that marker, keeps the target in the final focus and
ends the run with a failure message.

node_values: g-score (cost from the start) of every reached node.
"""

import math
import random
from typing import Dict, Iterator, List, Optional

from graph import Graph, Node
from algorithms.common import edge_text, fmt, reconstruct
from algorithms.step import StepTrace


def euclidean(a: Node, b: Node) -> float:
    return a.distance_to(b)


def astar(
    graph:  Graph,
    trace:  StepTrace,
    target: Optional[str] = None,
    seed:   Optional[int] = None,
) -> Iterator[bool]:
    state = trace.state
    nodes = graph.node_list()
    if not nodes:
        trace.say("Graph has no nodes to search.")
        yield False
        return

    start = nodes[0]
    goal  = graph.get_node(target) if target is not None else None
    if goal is None:
        if target is not None:
            trace.say(f"Unknown target node '{target}'; choosing a random target instead.")
        goal = random.Random(seed).choice(nodes)

    g:         Dict[str, float]         = {start.id: 0}
    f:         Dict[str, float]         = {start.id: euclidean(start, goal)}
    came_from: Dict[str, Optional[str]] = {start.id: None}
    came_by:   Dict[str, str]           = {}
    closed    = set()
    open_set: List[Node] = [start]

    state.highlight_node(start.id)
    state.highlight_node(goal.id)
    state.node_values[start.id] = 0
    state.focus([start.id])
    trace.say(f"Initialized A* search from node {start.id} to target node {goal.id}.")
    yield True

    while open_set:
        node = min(open_set, key=lambda n: f[n.id])
        open_set.remove(node)
        closed.add(node.id)
        state.highlight_node(node.id)
        trace.say(f"Visiting node {node.id} (g={fmt(g[node.id])}, f={fmt(f[node.id])}).")

        if node.id == goal.id:
            path_nodes, path_edges = reconstruct(came_from, came_by, goal.id)
            state.set_highlighted(path_nodes, path_edges)
            state.focus(path_nodes, path_edges)
            trace.say(
                f"Reached target node {goal.id}. Path: {' → '.join(path_nodes)} "
                f"(cost {fmt(g[goal.id])})."
            )
            yield False
            return

        step_nodes, step_edges = [node.id], []
        for nbr, weight, edge in graph.neighbours(node):
            if nbr.id in closed:
                continue
            tentative = g[node.id] + weight
            if tentative < g.get(nbr.id, math.inf):
                previous = came_by.get(nbr.id)
                if previous is not None:
                    state.unhighlight_edge(previous)
                came_from[nbr.id] = node.id
                came_by[nbr.id]   = edge.id
                g[nbr.id] = tentative
                f[nbr.id] = tentative + euclidean(nbr, goal)
                if nbr not in open_set:
                    open_set.append(nbr)
                state.highlight_node(nbr.id)
                state.highlight_edge(edge.id)
                state.node_values[nbr.id] = tentative
                step_nodes.append(nbr.id)
                step_edges.append(edge.id)
                trace.say(
                    f"Updated node {nbr.id} via edge {edge_text(edge)}: "
                    f"g={fmt(tentative)}, f={fmt(f[nbr.id])}."
                )

        if open_set:
            state.focus(step_nodes, step_edges)
        else:
            # the target was only marked, never reached
            state.unhighlight_node(goal.id)
            state.focus(step_nodes + [goal.id], step_edges)
            trace.say(f"Open set exhausted. Target node {goal.id} is unreachable from {start.id}.")
        yield bool(open_set)
