"""
step.py — Live State, Snapshots & Step Records
===============================================
Every algorithm mutates ONE live AlgorithmState in place, step after step.
The history recorder must never keep that object: it keeps Snapshots.

    • AlgorithmState – mutable scratch-pad the algorithm writes to
    • Snapshot       – frozen value copy of an AlgorithmState
    • StepRecord     – Snapshot + description, one history entry
    • StepTrace      – what an algorithm generator receives: the live
                       state plus the description lines of the current step

Design decisions:
  - `highlighted_*` accumulate (persistent marking), `current_*` are
    replaced every step (transient marking).  Both are kept as ordered,
    duplicate-free lists so the renderer and JSON export see a stable
    order.
  - Snapshot holds tuples and a read-only mapping over a private dict, so
    no container is shared with the live state.  That is the whole
    immutability guarantee of the history.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Tuple


# ---------------------------------------------------------------------------
# Snapshot — frozen visualisation state
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Snapshot:
    highlighted_nodes: Tuple[str, ...]      = ()
    highlighted_edges: Tuple[str, ...]      = ()
    current_nodes:     Tuple[str, ...]      = ()
    current_edges:     Tuple[str, ...]      = ()
    node_values:       Mapping[str, float]  = field(default_factory=lambda: MappingProxyType({}))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "highlighted_nodes": list(self.highlighted_nodes),
            "highlighted_edges": list(self.highlighted_edges),
            "current_nodes":     list(self.current_nodes),
            "current_edges":     list(self.current_edges),
            "node_values":       dict(self.node_values),
        }


@dataclass(frozen=True)
class StepRecord:
    state:       Snapshot
    description: str

    @property
    def lines(self) -> List[str]:
        return self.description.splitlines()

    def to_dict(self) -> Dict[str, Any]:
        return {"state": self.state.to_dict(), "description": self.description}


# ---------------------------------------------------------------------------
# AlgorithmState — the live, mutable state
# ---------------------------------------------------------------------------
@dataclass
class AlgorithmState:
    """
    Attributes:
        highlighted_nodes : node ids touched so far (persistent).
        highlighted_edges : edge ids touched so far (persistent).
        current_nodes     : focus of the most recent step only.
        current_edges     : focus of the most recent step only.
        node_values       : {node_id: number} — distance, order, rank, …
    """

    highlighted_nodes: List[str]        = field(default_factory=list)
    highlighted_edges: List[str]        = field(default_factory=list)
    current_nodes:     List[str]        = field(default_factory=list)
    current_edges:     List[str]        = field(default_factory=list)
    node_values:       Dict[str, float] = field(default_factory=dict)

    # -- persistent marking --
    def highlight_node(self, node_id: str) -> None:
        if node_id not in self.highlighted_nodes:
            self.highlighted_nodes.append(node_id)

    def highlight_edge(self, edge_id: str) -> None:
        if edge_id not in self.highlighted_edges:
            self.highlighted_edges.append(edge_id)

    def unhighlight_node(self, node_id: str) -> None:
        if node_id in self.highlighted_nodes:
            self.highlighted_nodes.remove(node_id)

    def unhighlight_edge(self, edge_id: str) -> None:
        if edge_id in self.highlighted_edges:
            self.highlighted_edges.remove(edge_id)

    def set_highlighted(self, nodes: Iterable[str] = (), edges: Iterable[str] = ()) -> None:
        self.highlighted_nodes = _unique(nodes)
        self.highlighted_edges = _unique(edges)

    # -- transient marking --
    def focus(self, nodes: Iterable[str] = (), edges: Iterable[str] = ()) -> None:
        self.current_nodes = _unique(nodes)
        self.current_edges = _unique(edges)

    def clear_focus(self) -> None:
        self.current_nodes = []
        self.current_edges = []

    def freeze(self) -> Snapshot:
        return Snapshot(
            highlighted_nodes=tuple(self.highlighted_nodes),
            highlighted_edges=tuple(self.highlighted_edges),
            current_nodes=tuple(self.current_nodes),
            current_edges=tuple(self.current_edges),
            node_values=MappingProxyType(dict(self.node_values)),
        )


# ---------------------------------------------------------------------------
# StepTrace — handed to every algorithm generator
# ---------------------------------------------------------------------------
class StepTrace:
    """
    Usage inside an algorithm generator:
        trace.state.highlight_node("A")
        trace.say("Visiting node A.")
        yield bool(queue)
    """

    def __init__(self):
        self.state: AlgorithmState = AlgorithmState()
        self._lines: List[str]     = []

    def say(self, line: str) -> None:
        self._lines.append(line)

    def begin_step(self) -> None:
        self._lines = []

    @property
    def description(self) -> str:
        return "\n".join(self._lines)


def _unique(ids: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(ids))
