"""
convex_hull.py — Convex Hull (Andrew's monotone chain)
=======================================================
Works on node positions only; edges are merely highlighted where they
happen to lie along the hull.

Steps, one node at a time over the nodes sorted by (x, y):
  1. lower chain  – push each node, popping while the last turn is not
                    strictly counter-clockwise
  2. one transition step ("Lower hull completed")
  3. upper chain  – same, over the nodes in reverse; the last of these
                    steps finalises the hull

Final state: hull nodes in counter-clockwise order starting at the
leftmost-lowest node, node_values = position on the hull (1-based).
Collinear boundary points are not hull vertices.
"""

from typing import Iterator, List

from graph import Graph, Node
from algorithms.common import edges_along
from algorithms.step import StepTrace


def cross(o: Node, a: Node, b: Node) -> float:
    """z-component of (a - o) × (b - o); > 0 means a left (CCW) turn."""
    return (a.x - o.x) * (b.y - o.y) - (a.y - o.y) * (b.x - o.x)


def _push(chain: List[Node], node: Node) -> List[Node]:
    removed = []
    while len(chain) >= 2 and cross(chain[-2], chain[-1], node) <= 0:
        removed.append(chain.pop())
    chain.append(node)
    return removed


def convex_hull(graph: Graph, trace: StepTrace) -> Iterator[bool]:
    state = trace.state
    ordered = sorted(graph.node_list(), key=lambda n: (n.x, n.y))
    n = len(ordered)

    if n == 0:
        trace.say("Graph has no nodes to enclose.")
        yield False
        return
    if n <= 2:
        _finalise(graph, trace, ordered)
        trace.say("Fewer than three nodes: the hull is the node set itself.")
        yield False
        return

    state.focus([ordered[0].id])
    trace.say(f"Initialized convex hull construction over {n} nodes sorted by x, then y.")
    yield True

    # --- lower chain ---
    lower: List[Node] = []
    for node in ordered:
        removed = _push(lower, node)
        _show_chain(graph, trace, lower, [], removed)
        trace.say(f"Processing node {node.id} for the lower hull.")
        if removed:
            trace.say(f"Removed node(s) {', '.join(r.id for r in removed)}: not a left turn.")
        yield True

    state.set_highlighted([p.id for p in lower])
    state.clear_focus()
    trace.say("Lower hull completed. Building the upper hull.")
    yield True

    # --- upper chain ---
    upper: List[Node] = []
    for index, node in enumerate(reversed(ordered)):
        removed = _push(upper, node)
        _show_chain(graph, trace, upper, lower, removed)
        trace.say(f"Processing node {node.id} for the upper hull.")
        if removed:
            trace.say(f"Removed node(s) {', '.join(r.id for r in removed)}: not a left turn.")
        if index == n - 1:
            # lower ends where upper starts and vice versa
            _finalise(graph, trace, lower + upper[1:-1])
            yield False
            return
        yield True


def _show_chain(
    graph:   Graph,
    trace:   StepTrace,
    chain:   List[Node],
    other:   List[Node],
    removed: List[Node],
) -> None:
    state = trace.state
    state.set_highlighted([p.id for p in other] + [p.id for p in chain])
    state.focus(
        [p.id for p in chain[-3:]] + [r.id for r in removed],
        edges_along(graph, chain[-2:], closed=False),
    )


def _finalise(graph: Graph, trace: StepTrace, hull: List[Node]) -> None:
    state = trace.state
    seen, ring = set(), []
    for node in hull:
        if node.id not in seen:
            seen.add(node.id)
            ring.append(node)
    ids   = [p.id for p in ring]
    edges = edges_along(graph, ring, closed=True)
    state.set_highlighted(ids, edges)
    state.focus(ids, edges)
    state.node_values.clear()
    for rank, node_id in enumerate(ids, start=1):
        state.node_values[node_id] = rank
    trace.say(f"Convex hull completed with {len(ids)} node(s): {' → '.join(ids)}.")
