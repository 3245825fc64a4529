"""
kruskal.py — Kruskal's Minimum Spanning Tree
=============================================
Edges are sorted once by weight (stable, so equal weights keep
insertion order).  One step = consider exactly one edge: accept it when
its endpoints lie in different components (union them), skip it when it
would close a cycle.  Terminal after the last edge.

On a disconnected graph the accepted edges form a minimum spanning
forest.  Edge direction is ignored.  An edge without a weight costs 0.
"""

from typing import Iterator

from graph import Graph
from algorithms.common import edge_text, fmt, tree_weight
from algorithms.step import StepTrace
from algorithms.union_find import UnionFind


def kruskal(graph: Graph, trace: StepTrace) -> Iterator[bool]:
    state = trace.state
    if not graph.node_count():
        trace.say("Graph has no nodes to span.")
        yield False
        return

    edges = sorted(graph.edge_list(), key=tree_weight)
    components = UnionFind(graph.node_ids())

    trace.say(f"Initialized Kruskal's algorithm with {len(edges)} edge(s) sorted by weight.")
    if not edges:
        trace.say("Graph has no edges; the spanning forest is empty.")
    yield bool(edges)

    accepted, total = 0, 0.0
    for index, edge in enumerate(edges):
        s, t = edge.source.id, edge.target.id
        cost = tree_weight(edge)
        state.focus([s, t], [edge.id])
        if components.union(s, t):
            accepted += 1
            total    += cost
            state.highlight_edge(edge.id)
            state.highlight_node(s)
            state.highlight_node(t)
            trace.say(f"Added edge {edge_text(edge, cost)} to the spanning tree.")
        else:
            trace.say(f"Skipped edge {edge_text(edge, cost)}: {s} and {t} are already connected.")

        more = index + 1 < len(edges)
        if not more:
            trace.say(
                f"Kruskal's algorithm completed with {accepted} edge(s), "
                f"total weight {fmt(total)}."
            )
        yield more
