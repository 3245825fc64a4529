"""
graph/
-----
Core data layer.  Public API:

    from graph import Graph, Node, Edge
    from graph import Neighbour, GraphError
"""

from graph.node  import Node
from graph.edge  import Edge
from graph.graph import Graph, GraphError, Neighbour

__all__ = [
    "Node",
    "Edge",
    "Graph",
    "GraphError",
    "Neighbour",
]
