"""NetworkX graph conversion utilities.

Converts undirected NetworkX graphs into the weight-sorted `Graph` the engine
consumes, and back again for inspection or drawing.

Example:
    >>> import networkx as nx
    >>> from mstviz.lib.nx import from_networkx, to_networkx
    >>>
    >>> G = nx.Graph()
    >>> G.add_edge("A", "B", weight=1)
    >>> G.add_edge("B", "C", weight=2)
    >>> G.add_edge("A", "C", weight=5)
    >>>
    >>> graph, node_map = from_networkx(G)
    >>> [e.w for e in graph.edges]
    [1, 2, 5]
    >>>
    >>> G_out = to_networkx(graph, node_map)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Hashable, List, Optional, Tuple

from mstviz.model.graph import Graph
from mstviz.types.base import EdgeState, Weight

if TYPE_CHECKING:
    import networkx as nx


@dataclass
class NodeMap:
    """Bidirectional mapping between node names and integer indices.

    Node names (any hashable) are mapped to contiguous indices starting at 0
    in the graph's node iteration order.

    Attributes:
        to_index: Maps original node names to integer indices
        to_name: Maps integer indices back to original node names

    Example:
        >>> node_map = NodeMap.from_names(["A", "B", "C"])
        >>> node_map.to_index["A"]
        0
        >>> node_map.to_name[1]
        'B'
    """

    to_index: Dict[Hashable, int] = field(default_factory=dict)
    to_name: Dict[int, Hashable] = field(default_factory=dict)

    @classmethod
    def from_names(cls, names: List[Hashable]) -> "NodeMap":
        to_index = {name: i for i, name in enumerate(names)}
        to_name = {i: name for i, name in enumerate(names)}
        return cls(to_index=to_index, to_name=to_name)

    def __len__(self) -> int:
        return len(self.to_index)


def from_networkx(
    G: "nx.Graph",
    *,
    weight_attr: str = "weight",
    default_weight: Weight = 1,
    pos_attr: str = "pos",
) -> Tuple[Graph, NodeMap]:
    """Convert an undirected NetworkX graph to a sorted `Graph`.

    Edges are collected in ``G.edges`` order and then sorted by weight with a
    stable sort, so equal-weight edges keep NetworkX's iteration order.

    Args:
        G: Undirected, simple ``networkx.Graph``.
        weight_attr: Edge attribute holding the weight (default: "weight").
        default_weight: Weight used when the attribute is missing.
        pos_attr: Node attribute holding an ``(x, y)`` position, if any.

    Returns:
        Tuple of (graph, node_map).

    Raises:
        TypeError: If G is not an undirected simple NetworkX graph.
        ValueError: If G contains a self-loop.
    """
    import networkx as nx

    if not isinstance(G, nx.Graph) or G.is_directed() or G.is_multigraph():
        raise TypeError(
            f"Expected an undirected simple networkx.Graph, got {type(G).__name__}"
        )

    node_map = NodeMap.from_names(list(G.nodes()))

    positions: Dict[int, Tuple[float, float]] = {}
    for name, data in G.nodes(data=True):
        pos = data.get(pos_attr)
        if pos is not None:
            positions[node_map.to_index[name]] = (float(pos[0]), float(pos[1]))

    triples = []
    for u, v, data in G.edges(data=True):
        if u == v:
            raise ValueError(f"Self-loop on node '{u}' is not allowed")
        triples.append(
            (
                node_map.to_index[u],
                node_map.to_index[v],
                data.get(weight_attr, default_weight),
            )
        )

    graph = Graph.from_weighted_edges(len(node_map), triples, positions=positions)
    return graph, node_map


def to_networkx(
    graph: Graph,
    node_map: Optional[NodeMap] = None,
    *,
    weight_attr: str = "weight",
    accepted_only: bool = False,
) -> "nx.Graph":
    """Convert a `Graph` back to ``networkx.Graph``.

    Each edge carries ``weight_attr``, ``state`` (the verdict value) and
    ``edge_id`` (sorted position); nodes carry ``pos``.

    Args:
        graph: Graph to convert, typically ``engine.graph``.
        node_map: Optional NodeMap restoring original names; integer ids otherwise.
        weight_attr: Edge attribute name for the weight.
        accepted_only: Keep only accepted edges (the spanning forest so far).

    Returns:
        nx.Graph with every node and the selected edges.
    """
    import networkx as nx

    def name(idx: int) -> Any:
        if node_map is None:
            return idx
        return node_map.to_name.get(idx, idx)

    G = nx.Graph()
    for node in graph.nodes:
        G.add_node(name(node.id), pos=(node.x, node.y))

    for edge in graph.edges:
        if accepted_only and edge.state != EdgeState.ACCEPTED:
            continue
        G.add_edge(
            name(edge.u),
            name(edge.v),
            **{weight_attr: edge.w, "state": edge.state.value, "edge_id": edge.id},
        )

    return G
