"""
graph.py — Graph Container
==========================
Single source of truth for graph structure.  The editor mutates it; the
algorithms read a clone of it; the renderer draws it.

Responsibilities:
  1. CRUD on nodes & edges                  (add / move / relabel / remove)
  2. Adjacency queries                      (neighbours, get_edge_between)
  3. Rebuild helpers                        (clone, without_weights)
  4. Factories                              (sample, generate_random)
  5. Serialisation round-trip               (to_dict / from_dict, JSON)

Design decisions:
  - Nodes & edges live in insertion-ordered dicts keyed by id, so lookups
    are O(1) and `node_list()` / `edge_list()` still give the order the
    algorithms rely on ("first node" = start node, edge order = neighbour
    order).
  - Adjacency `_adj[node_id] → [edge_id, …]` is a cache rebuilt from the
    edge dict after any mutation, so neighbour order always equals edge
    insertion order even after an edge is re-pointed.
  - Every structural problem raises GraphError.  Nothing is dropped
    silently.
"""

import json
import math
import random
import uuid
from typing import Dict, List, NamedTuple, Optional, Tuple, Union

from graph.node import Node
from graph.edge import Edge


class GraphError(ValueError):
    """Structural problem: dangling endpoint, duplicate id, malformed data."""


class Neighbour(NamedTuple):
    node:   Node
    weight: float
    edge:   Edge


NodeRef = Union[Node, str]


class Graph:
    """
    Attributes:
        nodes    : {node_id: Node}   (insertion ordered)
        edges    : {edge_id: Edge}   (insertion ordered)
        directed : bool – graph-level directedness
    """

    def __init__(self, directed: bool = False):
        self.nodes:    Dict[str, Node] = {}
        self.edges:    Dict[str, Edge] = {}
        self.directed: bool            = directed
        self._adj:     Optional[Dict[str, List[str]]] = None

    # ==================================================================
    # NODE CRUD
    # ==================================================================
    def add_node(self, node: Node) -> Node:
        if node.id in self.nodes:
            raise GraphError(f"Duplicate node id '{node.id}'.")
        self.nodes[node.id] = node
        if self._adj is not None:
            self._adj[node.id] = []
        return node

    def create_node(
        self,
        x: float,
        y: float,
        label: Optional[str] = None,
        node_id: Optional[str] = None,
    ) -> Node:
        """Convenience: create + add in one call.  Generates N1, N2, … ids."""
        return self.add_node(Node(node_id or self.next_node_id(), x=x, y=y, label=label))

    def next_node_id(self) -> str:
        counter = 1
        while f"N{counter}" in self.nodes:
            counter += 1
        return f"N{counter}"

    def move_node(self, node_id: str, x: float, y: float) -> Node:
        node = self._require_node(node_id)
        node.x, node.y = x, y
        return node

    def relabel_node(self, node_id: str, label: Optional[str]) -> Node:
        node = self._require_node(node_id)
        node.label = label or None
        return node

    def remove_node(self, node_id: str) -> None:
        self._require_node(node_id)
        for eid in [eid for eid, e in self.edges.items() if e.touches(node_id)]:
            del self.edges[eid]
        del self.nodes[node_id]
        self._adj = None

    def get_node(self, node_id: str) -> Optional[Node]:
        return self.nodes.get(node_id)

    # ==================================================================
    # EDGE CRUD
    # ==================================================================
    def add_edge(self, edge: Edge) -> Edge:
        if edge.id in self.edges:
            raise GraphError(f"Duplicate edge id '{edge.id}'.")
        # always point at our own node objects
        edge.source = self._resolve_endpoint(edge.id, edge.source.id)
        edge.target = self._resolve_endpoint(edge.id, edge.target.id)
        self.edges[edge.id] = edge
        if self._adj is not None:
            self._link(self._adj, edge)
        return edge

    def create_edge(
        self,
        source_id: str,
        target_id: str,
        weight: Optional[float] = None,
        edge_id: Optional[str] = None,
    ) -> Edge:
        """Editor path: like add_edge, but refuses self-loops and parallel edges."""
        self._check_connectable(source_id, target_id)
        eid = edge_id or f"E_{source_id}_{target_id}_{uuid.uuid4().hex[:6]}"
        return self.add_edge(Edge(eid, self._require_node(source_id), self._require_node(target_id), weight))

    def update_edge(
        self,
        edge_id: str,
        source_id: Optional[str] = None,
        target_id: Optional[str] = None,
        weight: Optional[float] = None,
        clear_weight: bool = False,
    ) -> Edge:
        edge = self._require_edge(edge_id)
        src  = source_id or edge.source.id
        tgt  = target_id or edge.target.id
        if (src, tgt) != (edge.source.id, edge.target.id):
            self._check_connectable(src, tgt, ignore=edge_id)
            edge.source = self._require_node(src)
            edge.target = self._require_node(tgt)
            self._adj = None
        if clear_weight:
            edge.weight = None
        elif weight is not None:
            edge.weight = weight
        return edge

    def remove_edge(self, edge_id: str) -> None:
        self._require_edge(edge_id)
        del self.edges[edge_id]
        self._adj = None

    def get_edge(self, edge_id: str) -> Optional[Edge]:
        return self.edges.get(edge_id)

    def get_edge_between(self, a: str, b: str) -> Optional[Edge]:
        """First edge (insertion order) joining a → b; either way when undirected."""
        for eid in self._adjacency().get(a, []):
            edge = self.edges[eid]
            if edge.joins(a, b, self.directed):
                return edge
        return None

    # ==================================================================
    # ADJACENCY QUERIES
    # ==================================================================
    def neighbours(self, node: NodeRef) -> List[Neighbour]:
        """
        One Neighbour(node, effective weight, edge) per edge leaving `node`.
        Undirected graphs count every touching edge; directed graphs only
        source → target.
        """
        node_id = node.id if isinstance(node, Node) else node
        result  = []
        for eid in self._adjacency().get(node_id, []):
            edge  = self.edges[eid]
            other = edge.target if edge.source.id == node_id else edge.source
            result.append(Neighbour(other, edge.effective_weight, edge))
        return result

    def _adjacency(self) -> Dict[str, List[str]]:
        if self._adj is None:
            adj: Dict[str, List[str]] = {nid: [] for nid in self.nodes}
            for edge in self.edges.values():
                self._link(adj, edge)
            self._adj = adj
        return self._adj

    def _link(self, adj: Dict[str, List[str]], edge: Edge) -> None:
        adj[edge.source.id].append(edge.id)
        if not self.directed and edge.target.id != edge.source.id:
            adj[edge.target.id].append(edge.id)

    # ==================================================================
    # REBUILD HELPERS
    # ==================================================================
    def clone(self, directed: Optional[bool] = None) -> "Graph":
        """Fresh node objects, every edge re-resolved against them."""
        g = Graph(directed=self.directed if directed is None else directed)
        for node in self.nodes.values():
            g.add_node(node.copy())
        for edge in self.edges.values():
            g.add_edge(Edge(edge.id, edge.source, edge.target, edge.weight))
        return g

    def without_weights(self) -> "Graph":
        g = self.clone()
        for edge in g.edges.values():
            edge.weight = None
        return g

    def is_weighted(self) -> bool:
        return any(e.weight for e in self.edges.values())

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        return {
            "directed": self.directed,
            "nodes":    [n.to_dict() for n in self.nodes.values()],
            "edges":    [e.to_dict() for e in self.edges.values()],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Graph":
        if not isinstance(data, dict):
            raise GraphError("Serialized graph must be an object.")
        nodes = data.get("nodes")
        edges = data.get("edges")
        if not isinstance(nodes, list) or not isinstance(edges, list):
            raise GraphError("Serialized graph needs 'nodes' and 'edges' lists.")

        g = cls(directed=bool(data.get("directed", False)))
        for nd in nodes:
            try:
                node = Node.from_dict(nd)
            except (AttributeError, KeyError, TypeError, ValueError) as exc:
                raise GraphError(f"Malformed node entry {nd!r}.") from exc
            g.add_node(node)
        for ed in edges:
            try:
                eid, src, tgt = str(ed["id"]), str(ed["source"]), str(ed["target"])
            except (KeyError, TypeError) as exc:
                raise GraphError(f"Malformed edge entry {ed!r}.") from exc
            weight = ed.get("weight")
            if weight is not None and (isinstance(weight, bool) or not isinstance(weight, (int, float))):
                raise GraphError(f"Edge '{eid}' has a non-numeric weight {weight!r}.")
            g.add_edge(Edge(eid, g._resolve_endpoint(eid, src), g._resolve_endpoint(eid, tgt), weight))
        return g

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_json(cls, text: str) -> "Graph":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise GraphError(f"Invalid JSON: {exc.msg}.") from exc
        return cls.from_dict(data)

    # ==================================================================
    # FACTORIES
    # ==================================================================
    @classmethod
    def sample(cls) -> "Graph":
        """Six-node directed demo graph (the editor's starting point)."""
        g = cls(directed=True)
        for nid, x, y in (
            ("A", 120, 120), ("B", 320, 120), ("C", 220, 320),
            ("D", 520, 180), ("E", 360, 460), ("F", 260, 620),
        ):
            g.create_node(x, y, label=nid, node_id=nid)
        for src, tgt, w in (
            ("A", "B", 1), ("A", "C", 4), ("D", "C", 2), ("E", "F", 3),
            ("A", "F", 9), ("B", "F", 5), ("D", "E", 8),
        ):
            g.create_edge(src, tgt, weight=w, edge_id=src + tgt)
        return g

    @classmethod
    def generate_random(
        cls,
        num_nodes: int = 10,
        edge_probability: float = 0.3,
        directed: bool = False,
        weighted: bool = True,
        weight_range: Tuple[int, int] = (1, 10),
        seed: Optional[int] = None,
        canvas_w: float = 800,
        canvas_h: float = 600,
    ) -> "Graph":
        """
        Erdős–Rényi style random graph placed on a jittered circle.
        A shuffled spanning backbone is added so every node is reachable
        (in the undirected sense).
        """
        rng    = random.Random(seed)
        g      = cls(directed=directed)
        margin = 40

        def weight() -> Optional[int]:
            return rng.randint(*weight_range) if weighted else None

        ids = []
        for i in range(num_nodes):
            angle  = 2 * math.pi * i / max(num_nodes, 1)
            radius = min(canvas_w, canvas_h) * 0.35
            x = canvas_w / 2 + radius * math.cos(angle) + rng.uniform(-30, 30)
            y = canvas_h / 2 + radius * math.sin(angle) + rng.uniform(-30, 30)
            x = round(max(margin, min(canvas_w - margin, x)), 1)
            y = round(max(margin, min(canvas_h - margin, y)), 1)
            ids.append(g.create_node(x, y, label=f"N{i + 1}", node_id=f"N{i + 1}").id)

        # each pair is drawn once, so the editor's duplicate check is not needed
        for i in range(num_nodes):
            for j in range(i + 1, num_nodes):
                if rng.random() < edge_probability:
                    a, b = (ids[i], ids[j]) if rng.random() < 0.5 or not directed else (ids[j], ids[i])
                    g.add_edge(Edge(f"E_{a}_{b}", g.nodes[a], g.nodes[b], weight()))

        shuffled = list(ids)
        rng.shuffle(shuffled)
        for k in range(1, len(shuffled)):
            a, b = shuffled[k - 1], shuffled[k]
            if not g.get_edge_between(a, b) and not g.get_edge_between(b, a):
                g.add_edge(Edge(f"E_{a}_{b}", g.nodes[a], g.nodes[b], weight()))

        return g

    # ==================================================================
    # UTILITY
    # ==================================================================
    def node_list(self) -> List[Node]:
        return list(self.nodes.values())

    def edge_list(self) -> List[Edge]:
        return list(self.edges.values())

    def node_ids(self) -> List[str]:
        return list(self.nodes.keys())

    def node_count(self) -> int:
        return len(self.nodes)

    def edge_count(self) -> int:
        return len(self.edges)

    def _require_node(self, node_id: str) -> Node:
        node = self.nodes.get(node_id)
        if node is None:
            raise GraphError(f"Unknown node '{node_id}'.")
        return node

    def _require_edge(self, edge_id: str) -> Edge:
        edge = self.edges.get(edge_id)
        if edge is None:
            raise GraphError(f"Unknown edge '{edge_id}'.")
        return edge

    def _resolve_endpoint(self, edge_id: str, node_id: str) -> Node:
        node = self.nodes.get(node_id)
        if node is None:
            raise GraphError(f"Edge '{edge_id}' references unknown node '{node_id}'.")
        return node

    def _check_connectable(self, source_id: str, target_id: str, ignore: Optional[str] = None) -> None:
        self._require_node(source_id)
        self._require_node(target_id)
        if source_id == target_id:
            raise GraphError("Self-loops are not supported.")
        for eid in self._adjacency()[source_id]:
            if eid != ignore and self.edges[eid].joins(source_id, target_id, self.directed):
                raise GraphError(f"An edge between '{source_id}' and '{target_id}' already exists.")

    def __repr__(self) -> str:
        return f"Graph(nodes={self.node_count()}, edges={self.edge_count()}, directed={self.directed})"
