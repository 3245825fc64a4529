"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every algorithm the visualizer knows about.

    from algorithms import REGISTRY, create_algorithm

REGISTRY is a dict:
    {
        "bfs": AlgoInfo(key, label, fn, family, tags, …),
        …
    }

The engine and UI only ever see AlgoInfo / StepAlgorithm, never the
concrete generator, so adding an algorithm is: write the generator, add
one entry here.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from algorithms.contract     import Algorithm, Phase, StepAlgorithm, StepGenerator
from algorithms.step         import AlgorithmState, Snapshot, StepRecord, StepTrace

# ---------------------------------------------------------------------------
# Import all algorithm modules
# ---------------------------------------------------------------------------
from algorithms.bfs           import bfs           as _bfs
from algorithms.dfs           import dfs           as _dfs
from algorithms.dijkstra      import dijkstra      as _dijkstra
from algorithms.astar         import astar         as _astar
from algorithms.kruskal       import kruskal       as _kruskal
from algorithms.prim          import prim          as _prim
from algorithms.convex_hull   import convex_hull   as _convex_hull
from algorithms.closest_pair  import closest_pair  as _closest_pair
from algorithms.farthest_pair import farthest_pair as _farthest_pair

logger = logging.getLogger(__name__)

FAMILIES = ("traversal", "mst", "geometry")


# ---------------------------------------------------------------------------
# AlgoInfo — metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:              str                 # registry key, e.g. "bfs"
    label:            str                 # human label, e.g. "Breadth-First Search"
    fn:               StepGenerator       # the generator function
    family:           str                 # one of FAMILIES
    tags:             List[str] = field(default_factory=list)
    complexity_time:  str       = ""
    complexity_space: str       = ""
    description:      str       = ""      # one-liner for the selector
    options:          List[str] = field(default_factory=list)   # accepted keyword options

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key":              self.key,
            "label":            self.label,
            "family":           self.family,
            "tags":             list(self.tags),
            "complexity_time":  self.complexity_time,
            "complexity_space": self.complexity_space,
            "description":      self.description,
            "options":          list(self.options),
        }


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    "bfs": AlgoInfo(
        key="bfs", label="Breadth-First Search", fn=_bfs, family="traversal",
        tags=["unweighted", "traversal"],
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Explores layer by layer from the first node.",
    ),

    "dfs": AlgoInfo(
        key="dfs", label="Depth-First Search", fn=_dfs, family="traversal",
        tags=["unweighted", "traversal"],
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Dives along the first edge before backtracking.",
    ),

    "dijkstra": AlgoInfo(
        key="dijkstra", label="Dijkstra's Algorithm", fn=_dijkstra, family="traversal",
        tags=["weighted", "shortest-path"],
        complexity_time="O(V² + E)", complexity_space="O(V)",
        description="Settles the closest frontier node; grows the shortest-path tree.",
    ),

    "astar": AlgoInfo(
        key="astar", label="A* Search", fn=_astar, family="traversal",
        tags=["weighted", "shortest-path", "heuristic"],
        complexity_time="O(V² + E)", complexity_space="O(V)",
        description="Dijkstra guided by straight-line distance to a target node.",
        options=["target", "seed"],
    ),

    "kruskal": AlgoInfo(
        key="kruskal", label="Kruskal's MST", fn=_kruskal, family="mst",
        tags=["weighted", "spanning-tree", "union-find"],
        complexity_time="O(E log E)", complexity_space="O(V + E)",
        description="Takes edges cheapest first, skipping those that close a cycle.",
    ),

    "prim": AlgoInfo(
        key="prim", label="Prim's MST", fn=_prim, family="mst",
        tags=["weighted", "spanning-tree"],
        complexity_time="O(E² log E)", complexity_space="O(E)",
        description="Grows one tree from the first node through its cheapest boundary edge.",
    ),

    "convex_hull": AlgoInfo(
        key="convex_hull", label="Convex Hull", fn=_convex_hull, family="geometry",
        tags=["geometry", "monotone-chain"],
        complexity_time="O(V log V)", complexity_space="O(V)",
        description="Andrew's monotone chain over node positions: lower then upper hull.",
    ),

    "closest_pair": AlgoInfo(
        key="closest_pair", label="Closest Pair", fn=_closest_pair, family="geometry",
        tags=["geometry", "brute-force"],
        complexity_time="O(V²)", complexity_space="O(1)",
        description="Compares every pair of nodes, keeping the nearest.",
    ),

    "farthest_pair": AlgoInfo(
        key="farthest_pair", label="Farthest Pair", fn=_farthest_pair, family="geometry",
        tags=["geometry", "brute-force"],
        complexity_time="O(V²)", complexity_space="O(1)",
        description="Compares every pair of nodes, keeping the most distant.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


def algorithms_by_family(family: str) -> List[AlgoInfo]:
    return [a for a in REGISTRY.values() if a.family == family]


def create_algorithm(key: str, **options: Any) -> StepAlgorithm:
    """
    Build a fresh, uninitialised StepAlgorithm for `key`.

    Options the algorithm does not declare are dropped; None values are
    treated as "not given".
    """
    info = get_algorithm(key)
    if info is None:
        logger.warning("Unknown algorithm requested: %r", key)
        raise ValueError(f"Unknown algorithm: {key}")

    accepted = {k: v for k, v in options.items() if k in info.options and v is not None}
    ignored  = sorted(set(options) - set(info.options))
    if ignored:
        logger.debug("Ignoring options %s for %s", ignored, key)
    return StepAlgorithm(info.key, info.label, info.fn, **accepted)


__all__ = [
    "Algorithm",
    "AlgorithmState",
    "AlgoInfo",
    "FAMILIES",
    "Phase",
    "REGISTRY",
    "Snapshot",
    "StepAlgorithm",
    "StepRecord",
    "StepTrace",
    "algorithms_by_family",
    "create_algorithm",
    "get_algorithm",
    "list_algorithms",
]
