"""
bfs.py — Breadth-First Search
==============================
FIFO traversal from the graph's first node.

One step = dequeue one node, mark it visited, enqueue every unvisited
neighbour (highlighting the connecting edge).  Terminal when the queue
empties.

node_values: visiting order (1-based) of every expanded node.
"""

from collections import deque
from typing import Iterator

from graph import Graph
from algorithms.common import edge_text
from algorithms.step import StepTrace


def bfs(graph: Graph, trace: StepTrace) -> Iterator[bool]:
    state = trace.state
    nodes = graph.node_list()
    if not nodes:
        trace.say("Graph has no nodes to traverse.")
        yield False
        return

    start   = nodes[0]
    queue   = deque([start])
    visited = {start.id}

    # --- initialisation ---
    state.highlight_node(start.id)
    state.focus([start.id])
    trace.say(f"Initialized BFS with start node {start.id}.")
    yield True

    # --- one dequeue per step ---
    order = 0
    while queue:
        node   = queue.popleft()
        order += 1
        state.highlight_node(node.id)
        state.node_values[node.id] = order
        trace.say(f"Visiting node {node.id}.")

        step_nodes, step_edges = [node.id], []
        for nbr, _, edge in graph.neighbours(node):
            if nbr.id in visited:
                continue
            visited.add(nbr.id)
            queue.append(nbr)
            state.highlight_node(nbr.id)
            state.highlight_edge(edge.id)
            step_nodes.append(nbr.id)
            step_edges.append(edge.id)
            trace.say(f"Enqueued node {nbr.id} via edge {edge_text(edge)}.")

        state.focus(step_nodes, step_edges)
        if not queue:
            trace.say("BFS traversal completed. All reachable nodes have been visited.")
        yield bool(queue)
