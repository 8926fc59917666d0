"""Base enums and aliases for the edge-processing engine."""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Union

#: Numeric edge weight (integer or float, taken as given).
Weight = Union[int, float]

#: Node identifier; nodes are numbered ``0..n-1``.
NodeId = int


class EdgeState(str, Enum):
    """Verdict of a single edge in the sorted sequence."""

    #: Not yet considered (index at or past the cursor).
    PENDING = "pending"
    #: Joined two components and belongs to the spanning forest.
    ACCEPTED = "accepted"
    #: Both endpoints already shared a component; would close a cycle.
    REJECTED = "rejected"


class EngineStatus(IntEnum):
    """Lifecycle state of an ``EdgeProcessingEngine``."""

    #: No graph loaded.
    IDLE = 0
    #: Graph loaded and at least one edge left to consider.
    RUNNING = 1
    #: Cursor reached the end of the edge sequence.
    COMPLETE = 2

