"""Graph model package.

Defines the nodes, weighted undirected edges, and the weight-sorted `Graph`
that graph providers hand to the edge-processing engine.
"""

from mstviz.model.graph import Edge, Graph, Node

__all__ = [
    "Node",
    "Edge",
    "Graph",
]
