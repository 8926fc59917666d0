"""YAML loader + schema validation for graph files.

A graph file lists nodes (a count, or entries with optional positions) and
undirected weighted edges in any order:

    nodes: 3
    edges:
      - {u: 0, v: 1, w: 1}
      - [1, 2, 2]
      - {u: 0, v: 2, w: 5}

Edges are sorted by weight on load; equal weights keep file order.
"""

from __future__ import annotations

import json
from importlib import resources
from pathlib import Path
from typing import Any, Dict, List, Tuple, Union

import jsonschema
import yaml

from mstviz.logging import get_logger
from mstviz.model.graph import EdgeTriple, Graph

LOGGER = get_logger(__name__)


def _load_schema() -> Dict[str, Any]:
    with (
        resources.files("mstviz.schemas")
        .joinpath("graph.json")
        .open("r", encoding="utf-8")
    ) as f:
        return json.load(f)


def parse_graph_dict(data: Dict[str, Any]) -> Graph:
    """Validate a graph mapping against the schema and build a sorted `Graph`.

    Raises:
        jsonschema.ValidationError: If the mapping does not match the schema.
        ValueError: If node entries are out of order or edges are malformed.
    """
    jsonschema.validate(data, _load_schema())

    nodes_section = data["nodes"]
    positions: Dict[int, Tuple[float, float]] = {}
    if isinstance(nodes_section, int):
        n = nodes_section
    else:
        n = len(nodes_section)
        for pos, entry in enumerate(nodes_section):
            if entry["id"] != pos:
                raise ValueError(
                    f"Node entry {pos} has id {entry['id']}; list nodes in id order 0..n-1"
                )
            positions[pos] = (float(entry.get("x", 0.0)), float(entry.get("y", 0.0)))

    triples: List[EdgeTriple] = []
    for entry in data["edges"]:
        if isinstance(entry, dict):
            triples.append((entry["u"], entry["v"], entry["w"]))
        else:
            u, v, w = entry
            triples.append((u, v, w))

    return Graph.from_weighted_edges(n, triples, positions=positions)


def load_graph_yaml(yaml_str: str) -> Graph:
    """Load, validate and sort a graph from a YAML string.

    Raises:
        ValueError: If the YAML does not map to a dictionary, or the graph is
            structurally invalid.
        jsonschema.ValidationError: If the document does not match the schema.
    """
    data = yaml.safe_load(yaml_str)
    if not isinstance(data, dict):
        raise ValueError("The provided YAML must map to a dictionary at top-level.")

    # Early shape checks give clearer messages than the schema error would
    if "nodes" not in data or "edges" not in data:
        raise ValueError("Graph YAML must define both 'nodes' and 'edges'")
    if not isinstance(data["edges"], list):
        raise ValueError("'edges' must be a list")

    graph = parse_graph_dict(data)
    LOGGER.debug(
        f"Parsed graph YAML: {graph.node_count} nodes, {graph.edge_count} edges"
    )
    return graph


def load_graph_file(path: Union[str, Path]) -> Graph:
    """Read a YAML graph file from disk."""
    text = Path(path).read_text(encoding="utf-8")
    return load_graph_yaml(text)
