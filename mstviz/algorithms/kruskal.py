"""Step-wise Kruskal edge-processing engine.

`EdgeProcessingEngine` consumes a weight-sorted edge sequence one edge at a
time. Each step unions the edge's endpoints in a `DisjointSetUnion`; the edge
is accepted when that merges two components and rejected when it would close a
cycle.

Notes:
    Union-find has no undo, so moving the cursor backward rebuilds the run
    from scratch: a fresh DSU replays every edge before the new cursor. A
    backward step therefore costs time proportional to the new cursor
    position rather than constant time. A versioned DSU with rollback logs is
    the alternative if rewinds at large cursors become slow.

    The run is ``COMPLETE`` only once every edge has been considered. Reaching
    ``n - 1`` accepted edges is reported by ``spanning_complete`` but does not
    end the run.
"""

from __future__ import annotations

from typing import Dict, FrozenSet, List, Optional, Set

from mstviz.algorithms.dsu import DisjointSetUnion
from mstviz.logging import get_logger
from mstviz.model.graph import Edge, Graph
from mstviz.types.base import EdgeState, EngineStatus, NodeId, Weight
from mstviz.types.dto import EngineSnapshot, StepRecord

LOGGER = get_logger(__name__)


class EdgeProcessingEngine:
    """Deterministic state machine over a sorted edge sequence.

    The engine owns a private copy of the loaded graph; edge verdicts, the
    cursor, the DSU and the accepted weight change only through ``load``,
    ``step_forward``, ``step_backward``, ``seek`` and ``reset``.

    Commands that are invalid in the current state (stepping while idle or
    past the end, stepping back at cursor 0) leave the state untouched and
    signal it through their return value.

    Args:
        graph: Optional graph to load immediately.
    """

    def __init__(self, graph: Optional[Graph] = None) -> None:
        self._graph: Optional[Graph] = None
        self._dsu: Optional[DisjointSetUnion] = None
        self._cursor: int = 0
        self._total_weight: Weight = 0
        if graph is not None:
            self.load(graph)

    #
    # Commands
    #
    def load(self, graph: Graph) -> None:
        """Replace the loaded graph and start a fresh run.

        Args:
            graph: Graph with edges already sorted by weight.

        Raises:
            ValueError: If the graph fails ``Graph.validate``.
        """
        graph.validate()
        self._graph = graph.copy()
        self._rebuild(0)
        LOGGER.info(
            f"Loaded graph: {self._graph.node_count} nodes, "
            f"{self._graph.edge_count} edges"
        )

    def step_forward(self) -> Optional[Edge]:
        """Consider the edge at the cursor and advance.

        Returns:
            The processed edge with its new verdict, or None when idle or
            complete (nothing changes in that case).
        """
        if self._graph is None or self._cursor >= len(self._graph.edges):
            LOGGER.debug(f"step_forward ignored in state {self.status.name}")
            return None

        edge = self._graph.edges[self._cursor]
        self._consider(edge)
        self._cursor += 1
        LOGGER.debug(
            f"Edge {edge.id} ({edge.label()}, w={edge.w}) {edge.state.value}; "
            f"total={self._total_weight}"
        )
        if __debug__:
            self._check_invariants()
        return edge

    def step_backward(self) -> bool:
        """Move the cursor back one edge by replaying the run up to it.

        Returns:
            True if the cursor moved, False at cursor 0 or when idle.
        """
        if self._graph is None:
            LOGGER.debug("step_backward ignored in state IDLE")
            return False
        if self._cursor == 0:
            LOGGER.debug("step_backward ignored at cursor 0")
            return False
        self._rebuild(self._cursor - 1)
        return True

    def seek(self, index: int) -> bool:
        """Move the cursor to ``index``.

        Forward targets are reached by stepping; backward targets by a single
        replay from scratch.

        Args:
            index: Target cursor position in ``[0, edge_count]``.

        Returns:
            True if the cursor moved.

        Raises:
            ValueError: If ``index`` is out of range for the loaded graph.
        """
        if self._graph is None:
            return False
        if not 0 <= index <= len(self._graph.edges):
            raise ValueError(
                f"Seek target {index} outside [0, {len(self._graph.edges)}]"
            )
        if index == self._cursor:
            return False
        if index < self._cursor:
            self._rebuild(index)
        else:
            while self._cursor < index:
                self.step_forward()
        return True

    def reset(self) -> None:
        """Restart the run on the loaded graph. No-op when idle."""
        if self._graph is None:
            return
        self._rebuild(0)
        LOGGER.debug("Run reset")

    def run_to_completion(self) -> List[Edge]:
        """Step forward until complete and return the edges processed."""
        processed = []
        while True:
            edge = self.step_forward()
            if edge is None:
                return processed
            processed.append(edge)

    #
    # Queries
    #
    @property
    def graph(self) -> Optional[Graph]:
        """The engine-owned graph; read it, do not mutate it."""
        return self._graph

    @property
    def status(self) -> EngineStatus:
        if self._graph is None:
            return EngineStatus.IDLE
        if self._cursor >= len(self._graph.edges):
            return EngineStatus.COMPLETE
        return EngineStatus.RUNNING

    @property
    def is_complete(self) -> bool:
        return self.status == EngineStatus.COMPLETE

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def edge_count(self) -> int:
        return 0 if self._graph is None else len(self._graph.edges)

    @property
    def node_count(self) -> int:
        return 0 if self._graph is None else len(self._graph.nodes)

    @property
    def total_weight(self) -> Weight:
        return self._total_weight

    @property
    def current_edge(self) -> Optional[Edge]:
        """The edge at the cursor, or None when idle or complete."""
        if self.status != EngineStatus.RUNNING:
            return None
        assert self._graph is not None
        return self._graph.edges[self._cursor]

    @property
    def accepted_count(self) -> int:
        return len(self.accepted_edges())

    @property
    def spanning_complete(self) -> bool:
        """True once ``n - 1`` edges are accepted (all nodes connected)."""
        return self._graph is not None and self.accepted_count == max(
            self.node_count - 1, 0
        )

    def edge_state(self, index: int) -> EdgeState:
        """Verdict of the edge at sorted position ``index``.

        Raises:
            IndexError: If no graph is loaded or ``index`` is out of range.
                Negative indices are rejected rather than counted from the end.
        """
        if self._graph is None:
            raise IndexError("No graph loaded")
        if not 0 <= index < len(self._graph.edges):
            raise IndexError(
                f"Edge index {index} outside [0, {len(self._graph.edges)})"
            )
        return self._graph.edges[index].state

    def accepted_edges(self) -> List[Edge]:
        return self._edges_in(EdgeState.ACCEPTED)

    def rejected_edges(self) -> List[Edge]:
        return self._edges_in(EdgeState.REJECTED)

    def groups(self) -> Dict[NodeId, Set[NodeId]]:
        """Component membership keyed by DSU root."""
        if self._dsu is None:
            return {}
        return self._dsu.groups()

    def components(self) -> FrozenSet[FrozenSet[NodeId]]:
        """Component partition independent of which node is the root."""
        return frozenset(frozenset(members) for members in self.groups().values())

    def history(self) -> List[StepRecord]:
        """Return one record per considered edge with the running total."""
        if self._graph is None:
            return []
        records = []
        running: Weight = 0
        for edge in self._graph.edges[: self._cursor]:
            if edge.state == EdgeState.ACCEPTED:
                running += edge.w
            records.append(
                StepRecord(
                    index=edge.id,
                    u=edge.u,
                    v=edge.v,
                    w=edge.w,
                    state=edge.state,
                    total_weight=running,
                )
            )
        return records

    def snapshot(self) -> EngineSnapshot:
        current = self.current_edge
        edges = [] if self._graph is None else self._graph.edges
        return EngineSnapshot(
            status=self.status,
            cursor=self._cursor,
            edge_count=len(edges),
            total_weight=self._total_weight,
            edge_states=tuple(e.state for e in edges),
            components=self.components(),
            current_edge=None if current is None else current.id,
        )

    #
    # Internals
    #
    def _edges_in(self, state: EdgeState) -> List[Edge]:
        if self._graph is None:
            return []
        return [e for e in self._graph.edges if e.state == state]

    def _consider(self, edge: Edge) -> None:
        """Union the edge's endpoints and record the verdict. Sole DSU mutation."""
        assert self._dsu is not None
        merged = self._dsu.union(edge.u, edge.v)
        edge.state = EdgeState.ACCEPTED if merged else EdgeState.REJECTED
        if merged:
            self._total_weight += edge.w

    def _rebuild(self, target: int) -> None:
        """Discard run state and replay edges ``0..target-1`` on a fresh DSU."""
        assert self._graph is not None
        self._dsu = DisjointSetUnion(len(self._graph.nodes))
        self._total_weight = 0
        for edge in self._graph.edges:
            edge.state = EdgeState.PENDING
        for edge in self._graph.edges[:target]:
            self._consider(edge)
        self._cursor = target
        if __debug__:
            self._check_invariants()

    def _check_invariants(self) -> None:
        assert self._graph is not None and self._dsu is not None
        edges = self._graph.edges
        assert 0 <= self._cursor <= len(edges), "cursor out of range"

        total: Weight = 0
        accepted = 0
        for i, edge in enumerate(edges):
            if i < self._cursor:
                assert edge.state != EdgeState.PENDING, f"edge {i} left pending"
            else:
                assert edge.state == EdgeState.PENDING, f"edge {i} decided early"
            if edge.state == EdgeState.ACCEPTED:
                total += edge.w
                accepted += 1
                assert self._dsu.connected(edge.u, edge.v), f"edge {i} not merged"

        assert total == self._total_weight, "accepted weight mismatch"
        assert self._dsu.count == len(self._graph.nodes) - accepted, (
            "component count does not match accepted edges"
        )
