"""
farthest_pair.py — Farthest Pair of Nodes (brute force)
========================================================
Same pairwise scan as closest_pair.py, keeping the pair with the
strictly greatest distance instead.
"""

import operator
from typing import Iterator

from graph import Graph
from algorithms.closest_pair import pair_scan
from algorithms.step import StepTrace


def farthest_pair(graph: Graph, trace: StepTrace) -> Iterator[bool]:
    return pair_scan(graph, trace, operator.gt, "farthest pair")
