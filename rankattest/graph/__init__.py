"""
Graph model and edge-list loading.
"""

from .model import Graph, NodeView, ParallelEdgePolicy
from .loader import (
    DEFAULT_EDGES,
    build_graph,
    default_graph,
    load_edge_list,
    parse_edge_lines,
)

__all__ = [
    'Graph',
    'NodeView',
    'ParallelEdgePolicy',
    'DEFAULT_EDGES',
    'build_graph',
    'default_graph',
    'load_edge_list',
    'parse_edge_lines',
]
