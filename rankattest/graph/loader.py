"""
Edge-list ingestion with fallback to the built-in default graph.
"""

import logging
import re
from typing import Iterable, List, Optional, Tuple

from .model import Graph, ParallelEdgePolicy

logger = logging.getLogger(__name__)

DEFAULT_EDGES: Tuple[Tuple[str, str], ...] = (
    ("PageA", "PageB"),
    ("PageA", "PageC"),
    ("PageB", "PageC"),
    ("PageC", "PageA"),
    ("PageD", "PageC"),
)

_SEPARATORS = re.compile(r"[,\t\s]+")


def parse_edge_lines(lines: Iterable[str]) -> List[Tuple[str, str]]:
    """Parse "from to" lines. Blank lines, '#' comments and short lines are skipped."""
    edges: List[Tuple[str, str]] = []
    for raw in lines:
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        parts = [p for p in _SEPARATORS.split(line) if p]
        if len(parts) < 2:
            logger.debug(f"Skipping edge line with fewer than two tokens: {line!r}")
            continue
        edges.append((parts[0], parts[1]))
    return edges


def default_graph(parallel_edges: ParallelEdgePolicy = ParallelEdgePolicy.COLLAPSE) -> Graph:
    """Return the built-in 4-node, 5-edge sample graph."""
    graph = Graph(parallel_edges=parallel_edges)
    for src, dst in DEFAULT_EDGES:
        graph.add_edge(src, dst)
    return graph


def load_edge_list(path: str, parallel_edges: ParallelEdgePolicy = ParallelEdgePolicy.COLLAPSE) -> Graph:
    """Build a graph from an edge-list file. I/O errors propagate."""
    with open(path, "r", encoding="utf-8") as f:
        edges = parse_edge_lines(f)
    graph = Graph(parallel_edges=parallel_edges)
    for src, dst in edges:
        graph.add_edge(src, dst)
    logger.info(f"Loaded {len(edges)} edges from {path}")
    return graph


def build_graph(
    data_file: Optional[str],
    parallel_edges: ParallelEdgePolicy = ParallelEdgePolicy.COLLAPSE,
) -> Tuple[Graph, bool]:
    """Load data_file, falling back to the default graph.

    Returns the graph and whether the default graph was used. The fallback
    applies when no file is given, the file cannot be read, or it holds no
    valid edges.
    """
    if not data_file:
        logger.info("No data file specified, using default graph")
        return default_graph(parallel_edges), True

    try:
        graph = load_edge_list(data_file, parallel_edges)
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Failed to load edges from {data_file}: {e}; falling back to default graph")
        return default_graph(parallel_edges), True

    if graph.node_count() == 0:
        logger.warning(f"No valid edges found in {data_file}; using default graph")
        return default_graph(parallel_edges), True

    return graph, False
