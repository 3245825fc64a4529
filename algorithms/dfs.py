"""
dfs.py — Depth-First Search
=============================
Stack-based traversal from the graph's first node, using an explicit
stack (no recursion limit issues).

Same seeding and "mark on discovery" discipline as BFS, but the most
recently pushed node is expanded next.  Neighbours are pushed in reverse
edge order so the first edge of a node is the first one explored.

node_values: visiting order (1-based) of every expanded node.
"""

from typing import Iterator

from graph import Graph
from algorithms.common import edge_text
from algorithms.step import StepTrace


def dfs(graph: Graph, trace: StepTrace) -> Iterator[bool]:
    state = trace.state
    nodes = graph.node_list()
    if not nodes:
        trace.say("Graph has no nodes to traverse.")
        yield False
        return

    start   = nodes[0]
    stack   = [start]
    visited = {start.id}

    state.highlight_node(start.id)
    state.focus([start.id])
    trace.say(f"Initialized DFS with start node {start.id}.")
    yield True

    order = 0
    while stack:
        node   = stack.pop()
        order += 1
        state.highlight_node(node.id)
        state.node_values[node.id] = order
        trace.say(f"Visiting node {node.id}.")

        step_nodes, step_edges = [node.id], []
        discovered = []
        for nbr, _, edge in graph.neighbours(node):
            if nbr.id in visited:
                continue
            visited.add(nbr.id)
            discovered.append(nbr)
            state.highlight_node(nbr.id)
            state.highlight_edge(edge.id)
            step_nodes.append(nbr.id)
            step_edges.append(edge.id)
            trace.say(f"Pushed node {nbr.id} via edge {edge_text(edge)}.")
        stack.extend(reversed(discovered))

        state.focus(step_nodes, step_edges)
        if not stack:
            trace.say("DFS traversal completed. All reachable nodes have been visited.")
        yield bool(stack)
