"""
union_find.py — Disjoint Set over node ids
===========================================
Used by Kruskal to tell a tree edge from a cycle edge.

    find(x)     – representative of x's component (path compression)
    union(a, b) – merge two components; False if already joined
"""

from typing import Dict, Iterable


class UnionFind:
    def __init__(self, ids: Iterable[str] = ()):
        self._parent: Dict[str, str] = {i: i for i in ids}

    def find(self, x: str) -> str:
        self._parent.setdefault(x, x)
        root = x
        while self._parent[root] != root:
            root = self._parent[root]
        # compress the walked path onto the root
        while self._parent[x] != root:
            self._parent[x], x = root, self._parent[x]
        return root

    def union(self, a: str, b: str) -> bool:
        ra, rb = self.find(a), self.find(b)
        if ra == rb:
            return False
        self._parent[rb] = ra
        return True

    def connected(self, a: str, b: str) -> bool:
        return self.find(a) == self.find(b)
