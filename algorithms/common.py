"""
common.py — small helpers shared by the algorithm generators
"""

from typing import Dict, Iterable, List, Optional, Tuple

from graph import Edge, Graph, Node


def edge_text(edge: Edge, weight: Optional[float] = None) -> str:
    """'A→B (w=3)' — the way every description names an edge."""
    shown = edge.effective_weight if weight is None else weight
    return f"{edge.source.id}→{edge.target.id} (w={fmt(shown)})"


def tree_weight(edge: Edge) -> float:
    """Spanning-tree cost of an edge: a missing weight costs nothing."""
    return edge.weight or 0


def fmt(value: float) -> str:
    """Integers without the trailing .0, everything else to 2 decimals."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.2f}"


def reconstruct(
    came_from: Dict[str, Optional[str]],
    came_by: Dict[str, str],
    target: str,
) -> Tuple[List[str], List[str]]:
    """Walk predecessor links back from `target`; returns (node ids, edge ids) start → target."""
    nodes: List[str] = []
    edges: List[str] = []
    cur: Optional[str] = target
    while cur is not None and cur not in nodes:
        nodes.append(cur)
        if cur in came_by:
            edges.append(came_by[cur])
        cur = came_from.get(cur)
    nodes.reverse()
    edges.reverse()
    return nodes, edges


def edges_along(graph: Graph, sequence: Iterable[Node], closed: bool = True) -> List[str]:
    """Ids of the graph edges that happen to join consecutive nodes of `sequence`."""
    seq = list(sequence)
    if len(seq) < 2:
        return []
    pairs = list(zip(seq, seq[1:]))
    if closed:
        pairs.append((seq[-1], seq[0]))
    found = []
    for a, b in pairs:
        if a.id == b.id:
            continue
        edge = graph.get_edge_between(a.id, b.id)
        if edge is not None and edge.id not in found:
            found.append(edge.id)
    return found
