"""mstviz: step-through engine for Kruskal's minimum spanning tree.

mstviz drives the edge-by-edge construction of a minimum spanning tree so a
rendering layer can show accept/reject verdicts and component merges one step
at a time, forward or backward.

Primary API:
    EdgeProcessingEngine - Cursor-driven Kruskal state machine
    PlaybackScheduler - Serialized command surface with timed auto-stepping
    DisjointSetUnion - Union-find with union by rank and path compression
    Graph, Node, Edge - Weight-sorted graph model
    from_networkx() - Build a Graph from a NetworkX graph
    load_graph_yaml() - Build a Graph from a YAML document

Example:
    from mstviz import EdgeProcessingEngine, Graph

    graph = Graph.from_weighted_edges(3, [(0, 1, 1), (1, 2, 2), (0, 2, 5)])
    engine = EdgeProcessingEngine(graph)
    engine.step_forward()      # edge 0-1 accepted
    engine.step_backward()     # back to the initial state
    engine.run_to_completion()
    engine.total_weight        # 3
"""

from __future__ import annotations

from mstviz import cli, logging
from mstviz._version import __version__
from mstviz.algorithms.dsu import DisjointSetUnion
from mstviz.algorithms.kruskal import EdgeProcessingEngine
from mstviz.config import GRAPH_BOUNDS, PLAYBACK_CONFIG, GraphBounds, PlaybackConfig
from mstviz.dsl.loader import load_graph_file, load_graph_yaml
from mstviz.lib.nx import NodeMap, from_networkx, to_networkx
from mstviz.model.graph import Edge, Graph, Node
from mstviz.playback import PlaybackScheduler
from mstviz.types.base import EdgeState, EngineStatus
from mstviz.types.dto import EngineSnapshot, StepRecord

__all__ = [
    # Version
    "__version__",
    # Model
    "Graph",
    "Node",
    "Edge",
    # Engine
    "DisjointSetUnion",
    "EdgeProcessingEngine",
    "PlaybackScheduler",
    # Types
    "EdgeState",
    "EngineStatus",
    "EngineSnapshot",
    "StepRecord",
    # Configuration
    "PlaybackConfig",
    "GraphBounds",
    "PLAYBACK_CONFIG",
    "GRAPH_BOUNDS",
    # Providers
    "load_graph_yaml",
    "load_graph_file",
    "NodeMap",
    "from_networkx",
    "to_networkx",
    # Utilities
    "cli",
    "logging",
]
