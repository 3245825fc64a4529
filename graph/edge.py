"""
edge.py — Graph Edge
====================
Connects two nodes and carries an optional weight.

Design decisions:
  - `source` and `target` are Node references, not ids.  Inside a Graph
    they always point at the exact node objects the graph owns;
    Graph.add_edge re-resolves them by id so a rebuilt graph never holds
    dangling references to nodes of an older copy.
  - Missing weight is None, not 1.  Traversal and shortest-path code reads
    `effective_weight`, which applies the "no weight means 1" rule.
  - Directedness is a graph-level flag; an edge only knows its endpoints.
"""

from typing import Optional

from graph.node import Node


class Edge:
    """
    Attributes:
        id     : Unique identifier within a graph.
        source : Tail node.
        target : Head node.
        weight : Optional numeric cost.
    """

    __slots__ = ("id", "source", "target", "weight")

    def __init__(
        self,
        edge_id: str,
        source: Node,
        target: Node,
        weight: Optional[float] = None,
    ):
        self.id:     str             = edge_id
        self.source: Node            = source
        self.target: Node            = target
        self.weight: Optional[float] = weight

    @property
    def effective_weight(self) -> float:
        # unweighted graphs store None (or 0 from older exports): both count as 1
        return self.weight if self.weight else 1

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def touches(self, node_id: str) -> bool:
        return self.source.id == node_id or self.target.id == node_id

    def joins(self, a: str, b: str, directed: bool) -> bool:
        if self.source.id == a and self.target.id == b:
            return True
        return not directed and self.source.id == b and self.target.id == a

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        data = {
            "id":     self.id,
            "source": self.source.id,
            "target": self.target.id,
        }
        if self.weight is not None:
            data["weight"] = self.weight
        return data

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Edge({self.source.id} → {self.target.id}, w={self.weight})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Edge) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
