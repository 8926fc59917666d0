"""Immutable containers handed to readers of engine state.

The rendering layer only ever sees these values; it never touches the engine's
DSU or edge objects directly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Optional, Tuple

from mstviz.types.base import EdgeState, EngineStatus, NodeId, Weight


@dataclass(frozen=True)
class StepRecord:
    """Outcome of considering one edge.

    Attributes:
        index: Position of the edge in the sorted sequence.
        u: First endpoint.
        v: Second endpoint.
        w: Edge weight.
        state: Verdict assigned to the edge.
        total_weight: Accepted weight after this step.
    """

    index: int
    u: NodeId
    v: NodeId
    w: Weight
    state: EdgeState
    total_weight: Weight


@dataclass(frozen=True)
class EngineSnapshot:
    """Point-in-time view of an engine run.

    Two snapshots compare equal when cursor, verdicts, total weight and the
    component partition all match; DSU root choice is not part of equality.

    Attributes:
        status: Engine lifecycle state.
        cursor: Index of the next edge to consider.
        edge_count: Number of edges in the sorted sequence.
        total_weight: Sum of accepted edge weights.
        edge_states: Verdict per edge, in sorted order.
        components: Partition of node ids into connected components.
        current_edge: Index of the edge under consideration, or None.
    """

    status: EngineStatus
    cursor: int
    edge_count: int
    total_weight: Weight
    edge_states: Tuple[EdgeState, ...]
    components: FrozenSet[FrozenSet[NodeId]]
    current_edge: Optional[int] = None

    @property
    def is_complete(self) -> bool:
        return self.status == EngineStatus.COMPLETE

    @property
    def accepted_count(self) -> int:
        return sum(1 for s in self.edge_states if s == EdgeState.ACCEPTED)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-friendly dictionary."""
        return {
            "status": self.status.name.lower(),
            "cursor": self.cursor,
            "edge_count": self.edge_count,
            "total_weight": self.total_weight,
            "edge_states": [s.value for s in self.edge_states],
            "components": sorted(sorted(c) for c in self.components),
            "current_edge": self.current_edge,
        }
