"""Graph model with Node, Edge and Graph classes.

A `Graph` is the unit a graph provider hands to the engine: nodes numbered
``0..n-1`` and undirected weighted edges already sorted ascending by weight.
The edge order is fixed once the graph is built; the engine indexes into it by
position and never re-sorts.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import (
    Any,
    Dict,
    Iterable,
    List,
    Mapping,
    Optional,
    Set,
    Tuple,
)

from mstviz.logging import get_logger
from mstviz.types.base import EdgeState, NodeId, Weight

LOGGER = get_logger(__name__)

#: Edge input accepted by providers: (u, v, w).
EdgeTriple = Tuple[NodeId, NodeId, Weight]


@dataclass
class Node:
    """A graph node.

    Attributes:
        id (int): Identifier, equal to the node's position in ``Graph.nodes``.
        x (float): Horizontal position, passed through for rendering.
        y (float): Vertical position, passed through for rendering.
    """

    id: NodeId
    x: float = 0.0
    y: float = 0.0


@dataclass
class Edge:
    """An undirected weighted edge.

    Attributes:
        id (int): Position of the edge in the weight-sorted sequence.
        u (int): First endpoint.
        v (int): Second endpoint.
        w (int | float): Weight.
        state (EdgeState): Verdict; owned and mutated by the engine only.
    """

    id: int
    u: NodeId
    v: NodeId
    w: Weight
    state: EdgeState = EdgeState.PENDING

    @property
    def pair(self) -> frozenset:
        return frozenset((self.u, self.v))

    def label(self) -> str:
        return f"{self.u}-{self.v}"


@dataclass
class Graph:
    """Nodes plus a weight-sorted edge sequence.

    Attributes:
        nodes (List[Node]): Nodes in id order.
        edges (List[Edge]): Edges sorted ascending by weight, ties in provider order.
    """

    nodes: List[Node] = field(default_factory=list)
    edges: List[Edge] = field(default_factory=list)

    @classmethod
    def from_weighted_edges(
        cls,
        n: int,
        triples: Iterable[EdgeTriple],
        positions: Optional[Mapping[NodeId, Tuple[float, float]]] = None,
    ) -> Graph:
        """Build a validated graph from ``(u, v, w)`` triples.

        The triples are sorted by weight with a stable sort, so edges of equal
        weight keep the order in which they were supplied. Each edge's ``id``
        becomes its sorted position.

        Args:
            n: Number of nodes; nodes are numbered ``0..n-1``.
            triples: Edges as ``(u, v, w)``.
            positions: Optional ``{node_id: (x, y)}`` layout to pass through.

        Returns:
            Graph ready to load into an engine.

        Raises:
            ValueError: If ``n`` is negative, an entry is not a ``(u, v, w)``
                triple with a numeric weight, or the edges are malformed.
        """
        if n < 0:
            raise ValueError(f"Node count must be non-negative, got {n}")

        positions = positions or {}
        nodes = []
        for i in range(n):
            x, y = positions.get(i, (0.0, 0.0))
            nodes.append(Node(id=i, x=float(x), y=float(y)))

        collected = []
        for pos, triple in enumerate(triples):
            if not isinstance(triple, (tuple, list)) or len(triple) != 3:
                raise ValueError(
                    f"Edge input {pos} must be a (u, v, w) triple, got {triple!r}."
                )
            w = triple[2]
            if isinstance(w, bool) or not isinstance(w, (int, float)):
                raise ValueError(
                    f"Edge input {pos} ({triple[0]}-{triple[1]}) has "
                    f"non-numeric weight {w!r}."
                )
            collected.append(tuple(triple))

        ordered = sorted(collected, key=lambda t: t[2])
        edges = [Edge(id=i, u=u, v=v, w=w) for i, (u, v, w) in enumerate(ordered)]

        graph = cls(nodes=nodes, edges=edges)
        graph.validate()
        LOGGER.debug(f"Built graph with {n} nodes and {len(edges)} edges")
        return graph

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    def validate(self) -> None:
        """Check the structural rules every provided graph must satisfy.

        Raises:
            ValueError: If node ids are not ``0..n-1`` in order, an edge has an
                unknown endpoint or is a self-loop, a pair repeats, an edge id
                differs from its position, or weights are not ascending.
        """
        for pos, node in enumerate(self.nodes):
            if node.id != pos:
                raise ValueError(
                    f"Node at position {pos} has id {node.id}; ids must be 0..n-1 in order."
                )

        n = len(self.nodes)
        seen: Set[frozenset] = set()
        prev_w: Optional[Weight] = None
        for pos, edge in enumerate(self.edges):
            if edge.id != pos:
                raise ValueError(
                    f"Edge at position {pos} has id {edge.id}; ids must follow sorted order."
                )
            for endpoint in (edge.u, edge.v):
                if not 0 <= endpoint < n:
                    raise ValueError(
                        f"Edge {edge.id} references unknown node {endpoint}."
                    )
            if edge.u == edge.v:
                raise ValueError(f"Edge {edge.id} is a self-loop on node {edge.u}.")
            if edge.pair in seen:
                raise ValueError(
                    f"Edge {edge.id} duplicates the pair {edge.u}-{edge.v}."
                )
            seen.add(edge.pair)
            if prev_w is not None and edge.w < prev_w:
                raise ValueError(
                    f"Edge {edge.id} (w={edge.w}) breaks ascending weight order."
                )
            prev_w = edge.w

    def copy(self) -> Graph:
        """Return an independent deep copy."""
        return copy.deepcopy(self)

    def triples(self) -> List[EdgeTriple]:
        """Return the sorted edges as ``(u, v, w)`` triples."""
        return [(e.u, e.v, e.w) for e in self.edges]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize in a node-link style dictionary."""
        return {
            "nodes": [{"id": nd.id, "x": nd.x, "y": nd.y} for nd in self.nodes],
            "edges": [
                {"id": e.id, "u": e.u, "v": e.v, "w": e.w, "state": e.state.value}
                for e in self.edges
            ],
        }

