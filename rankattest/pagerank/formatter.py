"""Canonical result string for a ranked graph."""

import re
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Tuple

from ..errors import ResultFormatError
from ..graph.model import NodeView

RANK_DECIMALS = 4
_QUANTUM = Decimal(1).scaleb(-RANK_DECIMALS)
_FIXED_POINT = re.compile(r"-?\d+\.\d+")


def format_rank(rank: float) -> str:
    """Render a rank with exactly four decimals.

    Rounds half-up on the shortest decimal form of the float, so a rank
    printed as 0.14375 becomes 0.1438 regardless of its binary expansion.
    """
    return str(Decimal(repr(float(rank))).quantize(_QUANTUM, rounding=ROUND_HALF_UP))


def ranked_result(nodes: Iterable[NodeView]) -> List[Tuple[str, float]]:
    """Name-sorted (name, rank) pairs rounded to four decimals."""
    return [(name, float(format_rank(rank))) for name, rank in _sorted_pairs(nodes)]


def format_result(nodes: Iterable[NodeView]) -> str:
    """Return "name:rank;" for each node in name order."""
    return "".join(f"{name}:{format_rank(rank)};" for name, rank in _sorted_pairs(nodes))


def parse_result(text: str) -> List[Tuple[str, float]]:
    """Inverse of format_result."""
    if not text:
        return []
    if not text.endswith(";"):
        raise ResultFormatError("result string must end with ';'")
    pairs: List[Tuple[str, float]] = []
    for item in text[:-1].split(";"):
        name, sep, value = item.rpartition(":")
        if not sep or not name:
            raise ResultFormatError(f"malformed entry: {item!r}")
        if not _FIXED_POINT.fullmatch(value):
            raise ResultFormatError(f"malformed rank in entry: {item!r}")
        pairs.append((name, float(value)))
    return pairs


def _sorted_pairs(nodes: Iterable[NodeView]) -> List[Tuple[str, float]]:
    return sorted(((n.name, n.rank) for n in nodes), key=lambda pair: pair[0])
