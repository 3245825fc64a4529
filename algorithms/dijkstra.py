"""
dijkstra.py — Dijkstra's Shortest Path
========================================
Single-source shortest distances from the graph's first node.

One step = settle the frontier node with the smallest tentative distance
(ties: earliest inserted), then relax every unsettled neighbour.  A strict
improvement updates the neighbour's distance, swaps its shortest-path
tree edge and (re-)adds it to the frontier.

Visual conventions:
  highlighted_edges  – the current shortest-path tree
  node_values        – tentative (then final) distance of each reached node

Weights are the effective weights (missing / zero → 1), so the
non-negative precondition always holds.
"""

import math
from typing import Dict, Iterator, List

from graph import Graph, Node
from algorithms.common import edge_text, fmt
from algorithms.step import StepTrace


def dijkstra(graph: Graph, trace: StepTrace) -> Iterator[bool]:
    state = trace.state
    nodes = graph.node_list()
    if not nodes:
        trace.say("Graph has no nodes to compute distances for.")
        yield False
        return

    start = nodes[0]
    dist:      Dict[str, float] = {start.id: 0}
    tree_edge: Dict[str, str]   = {}
    settled = set()
    frontier: List[Node] = [start]

    state.highlight_node(start.id)
    state.node_values[start.id] = 0
    state.focus([start.id])
    trace.say(f"Initialized Dijkstra's algorithm with start node {start.id}.")
    yield True

    while frontier:
        # min() keeps the first of equal keys → insertion order breaks ties
        node = min(frontier, key=lambda n: dist[n.id])
        frontier.remove(node)
        settled.add(node.id)
        state.highlight_node(node.id)
        trace.say(f"Selected node {node.id} with distance {fmt(dist[node.id])}.")

        step_nodes, step_edges = [node.id], []
        for nbr, weight, edge in graph.neighbours(node):
            if nbr.id in settled:
                continue
            candidate = dist[node.id] + weight
            if candidate < dist.get(nbr.id, math.inf):
                dist[nbr.id] = candidate
                state.node_values[nbr.id] = candidate
                previous = tree_edge.get(nbr.id)
                if previous is not None:
                    state.unhighlight_edge(previous)
                tree_edge[nbr.id] = edge.id
                state.highlight_edge(edge.id)
                state.highlight_node(nbr.id)
                if nbr not in frontier:
                    frontier.append(nbr)
                step_nodes.append(nbr.id)
                step_edges.append(edge.id)
                trace.say(
                    f"Updated distance of node {nbr.id} to {fmt(candidate)} "
                    f"via edge {edge_text(edge)}."
                )

        state.focus(step_nodes, step_edges)
        if not frontier:
            trace.say("Dijkstra's algorithm completed. All reachable nodes are settled.")
        yield bool(frontier)
