"""Command-line interface for mstviz."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from time import perf_counter
from typing import Any, List, Optional

from mstviz.algorithms.dsu import count_components
from mstviz.algorithms.kruskal import EdgeProcessingEngine
from mstviz.dsl.loader import load_graph_file
from mstviz.logging import get_logger, level_for_flags, set_global_log_level
from mstviz.model.graph import Graph
from mstviz.types.dto import EngineSnapshot

logger = get_logger(__name__)


def _format_table(
    headers: List[str],
    rows: List[List[str]],
    min_width: int = 4,
) -> str:
    """Format data as a simple ASCII table.

    Args:
        headers: Column headers
        rows: Data rows
        min_width: Minimum column width

    Returns:
        Formatted table string
    """
    if not rows:
        return ""

    all_data = [headers] + rows
    col_widths = []
    for col_idx in range(len(headers)):
        max_width = max(len(str(row[col_idx])) for row in all_data)
        col_widths.append(max(max_width, min_width))

    def format_row(row_data: List[str]) -> str:
        return "   " + " | ".join(
            f"{str(item):<{col_widths[i]}}" for i, item in enumerate(row_data)
        )

    lines = [format_row(headers)]
    lines.append("   " + "-+-".join("-" * width for width in col_widths))
    for row in rows:
        lines.append(format_row(row))
    return "\n".join(lines)


def _format_weight(value: Any) -> str:
    """Return a weight without a trailing ``.0`` for whole numbers.

    Examples:
        3 -> "3"; 3.0 -> "3"; 2.5 -> "2.5".
    """
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _format_duration(seconds: float) -> str:
    """Return a concise human-readable duration string.

    Examples:
        0.123 -> "123.0 ms"; 1.234 -> "1.23 s".
    """
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f} ms"
    return f"{seconds:.2f} s"


def _plural(n: int, singular: str, plural: Optional[str] = None) -> str:
    if n == 1:
        return singular
    return plural or (singular + "s")


def _format_components(snapshot: EngineSnapshot) -> str:
    groups = sorted(sorted(c) for c in snapshot.components)
    return " ".join("[" + ",".join(str(n) for n in g) + "]" for g in groups)


def _inspect_graph(path: Path) -> None:
    """Print node/edge counts and the sorted edge table for a graph file."""
    try:
        graph = load_graph_file(path)
    except FileNotFoundError:
        logger.error(f"Graph file not found: {path}")
        print(f"❌ ERROR: Graph file not found: {path}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Failed to load graph: {type(e).__name__}: {e}")
        print(f"❌ ERROR: Failed to load graph: {type(e).__name__}: {e}")
        sys.exit(1)

    n = graph.node_count
    m = graph.edge_count
    components = count_components(n, [(e.u, e.v) for e in graph.edges])

    print(f"Graph: {path}")
    print(f"   Nodes: {n}")
    print(f"   Edges: {m}")
    print(f"   Connected components: {components}")
    if components > 1:
        print(
            f"   ⚠️  Disconnected: the result is a spanning forest with "
            f"{n - components} {_plural(n - components, 'edge')}"
        )

    rows = [[str(e.id), e.label(), _format_weight(e.w)] for e in graph.edges]
    if rows:
        print("\nSorted edges:")
        print(_format_table(["#", "Edge", "Weight"], rows))


def _run_graph(
    path: Path,
    steps: Optional[int],
    stdout: bool,
    output: Optional[Path],
) -> None:
    """Step Kruskal's algorithm over a graph file and report each verdict."""
    _start_time = perf_counter()
    logger.info(f"Loading graph: {path}")

    try:
        graph: Graph = load_graph_file(path)
        engine = EdgeProcessingEngine(graph)

        if steps is None:
            engine.run_to_completion()
        else:
            if steps < 0:
                raise ValueError(f"--steps must be non-negative, got {steps}")
            for _ in range(steps):
                if engine.step_forward() is None:
                    break

        snapshot = engine.snapshot()
        history = engine.history()
        rows = []
        for record in history:
            rows.append(
                [
                    str(record.index),
                    f"{record.u}-{record.v}",
                    _format_weight(record.w),
                    record.state.value,
                    _format_weight(record.total_weight),
                ]
            )

        if rows:
            print(_format_table(["#", "Edge", "Weight", "Verdict", "Total"], rows))
            print()
        print(f"Considered: {snapshot.cursor}/{snapshot.edge_count}")
        print(f"Status: {snapshot.status.name.lower()}")
        print(f"Accepted edges: {snapshot.accepted_count}")
        print(f"Total weight: {_format_weight(snapshot.total_weight)}")
        print(f"Components: {_format_components(snapshot)}")

        result = snapshot.to_dict()
        result["history"] = [
            {
                "index": r.index,
                "u": r.u,
                "v": r.v,
                "w": r.w,
                "state": r.state.value,
                "total_weight": r.total_weight,
            }
            for r in history
        ]
        result["graph"] = engine.graph.to_dict()
        json_str = json.dumps(result, indent=2)

        if output is not None:
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(json_str, encoding="utf-8")
            logger.info(f"Results written to {output}")
            print(f"✅ Results written to: {output}")

        if stdout:
            print(json_str)

        _elapsed = perf_counter() - _start_time
        logger.info(f"Run completed in {_format_duration(_elapsed)}")

    except FileNotFoundError:
        logger.error(f"Graph file not found: {path}")
        print(f"❌ ERROR: Graph file not found: {path}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Failed to run graph: {type(e).__name__}: {e}")
        print(f"❌ ERROR: Failed to run graph: {type(e).__name__}: {e}")
        sys.exit(1)


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``mstviz`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = argparse.ArgumentParser(
        prog="mstviz",
        description="Step through Kruskal's minimum spanning tree on a graph file.",
    )

    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Suppress console output (logs only)"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="Available commands",
        metavar="{run,inspect}",
        help="Available commands",
    )

    run_parser = subparsers.add_parser("run", help="Run Kruskal over a graph file")
    run_parser.add_argument("graph", type=Path, help="Path to graph YAML")
    run_parser.add_argument(
        "--steps",
        "-n",
        type=int,
        default=None,
        help="Consider only the first N edges (default: all)",
    )
    run_parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print the final snapshot as JSON",
    )
    run_parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Write the final snapshot JSON to this file",
    )

    inspect_parser = subparsers.add_parser(
        "inspect", help="Validate a graph file and list its sorted edges"
    )
    inspect_parser.add_argument("graph", type=Path, help="Path to graph YAML")

    effective_args = sys.argv[1:] if argv is None else argv

    if not effective_args:
        parser.print_help()
        raise SystemExit(0)

    args = parser.parse_args(effective_args)

    set_global_log_level(level_for_flags(verbose=args.verbose, quiet=args.quiet))
    if args.verbose:
        logger.debug("Debug logging enabled")

    if args.command == "run":
        _run_graph(
            path=args.graph,
            steps=args.steps,
            stdout=args.stdout,
            output=args.output,
        )
    elif args.command == "inspect":
        _inspect_graph(args.graph)


if __name__ == "__main__":
    main()
