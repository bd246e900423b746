"""
PageRank engine and canonical result formatting.
"""

from .engine import (
    DEFAULT_DAMPING,
    DEFAULT_ITERATIONS,
    DanglingPolicy,
    PageRankEngine,
    validate_parameters,
)
from .formatter import format_rank, format_result, parse_result, ranked_result

__all__ = [
    'DEFAULT_DAMPING',
    'DEFAULT_ITERATIONS',
    'DanglingPolicy',
    'PageRankEngine',
    'validate_parameters',
    'format_rank',
    'format_result',
    'parse_result',
    'ranked_result',
]
