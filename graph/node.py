"""
node.py — Graph Node
====================
A point on the canvas with a stable identity.

Design decisions:
  - `id` is the sole identity key: two Node objects are the same node
    iff their ids match (see __eq__ / __hash__).
  - `label` is optional.  When it is missing the renderer falls back to
    the id, but the model keeps it as None so serialisation round-trips
    exactly.
  - Position doubles as data: A* and the geometric algorithms measure
    Euclidean distance between node positions.
"""

import math
from typing import Optional


class Node:
    """
    Attributes:
        id    : Unique identifier within a graph.
        label : Optional human-readable name.
        x, y  : Canvas coordinates.
    """

    __slots__ = ("id", "label", "x", "y")

    def __init__(
        self,
        node_id: str,
        x: float = 0.0,
        y: float = 0.0,
        label: Optional[str] = None,
    ):
        self.id:    str           = node_id
        self.label: Optional[str] = label
        self.x:     float         = x
        self.y:     float         = y

    @property
    def display_label(self) -> str:
        return self.label or self.id

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------
    def distance_to(self, other: "Node") -> float:
        """Euclidean distance — A* heuristic and pair-search metric."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def copy(self) -> "Node":
        return Node(self.id, self.x, self.y, self.label)

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        data = {"id": self.id}
        if self.label is not None:
            data["label"] = self.label
        data["x"] = self.x
        data["y"] = self.y
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Node":
        label = data.get("label")
        if label is not None and not isinstance(label, str):
            raise ValueError(f"Node label must be a string, got {label!r}.")
        return cls(
            node_id=str(data["id"]),
            x=float(data["x"]),
            y=float(data["y"]),
            label=label,
        )

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Node(id={self.id}, label={self.label}, pos=({self.x:.2f},{self.y:.2f}))"

    def __eq__(self, other) -> bool:
        return isinstance(other, Node) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
