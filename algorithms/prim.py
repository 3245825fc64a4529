"""
prim.py — Prim's Minimum Spanning Tree
=======================================
Grows one tree from the graph's first node.

The candidate boundary starts as the first node's incident edges.  One
step = take the cheapest boundary edge (stable sort by weight, a missing
weight counting as 0);
if both endpoints are already in the tree it is discarded as a cycle,
otherwise it joins the tree together with its new endpoint, whose edges
to unvisited nodes are appended to the boundary.

Only the first node's component is spanned.  On a directed graph the
boundary follows outgoing edges only.

node_values: order in which each node joined the tree (start = 1).
"""

from typing import Iterator, List

from graph import Edge, Graph
from algorithms.common import edge_text, fmt, tree_weight
from algorithms.step import StepTrace


def prim(graph: Graph, trace: StepTrace) -> Iterator[bool]:
    state = trace.state
    nodes = graph.node_list()
    if not nodes:
        trace.say("Graph has no nodes to span.")
        yield False
        return

    start   = nodes[0]
    visited = {start.id}
    boundary: List[Edge] = [nb.edge for nb in graph.neighbours(start)]

    state.highlight_node(start.id)
    state.node_values[start.id] = 1
    state.focus([start.id])
    trace.say(f"Initialized Prim's algorithm with start node {start.id}.")
    if not boundary:
        trace.say(f"Node {start.id} has no edges; the tree is the single node.")
    yield bool(boundary)

    joined, total = 1, 0.0
    while boundary:
        boundary.sort(key=tree_weight)
        edge = boundary.pop(0)
        s, t = edge.source.id, edge.target.id
        cost = tree_weight(edge)
        state.focus([s, t], [edge.id])

        if s in visited and t in visited:
            trace.say(f"Skipped edge {edge_text(edge, cost)}: both endpoints are already in the tree.")
        else:
            new = t if s in visited else s
            visited.add(new)
            joined += 1
            total  += cost
            state.node_values[new] = joined
            state.highlight_edge(edge.id)
            state.highlight_node(s)
            state.highlight_node(t)
            trace.say(f"Added edge {edge_text(edge, cost)}; node {new} joins the tree.")
            for nb in graph.neighbours(new):
                if nb.node.id not in visited:
                    boundary.append(nb.edge)

        if not boundary:
            trace.say(
                f"Prim's algorithm completed: {joined} node(s) in the tree, "
                f"total weight {fmt(total)}."
            )
        yield bool(boundary)
