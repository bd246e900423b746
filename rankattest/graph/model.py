"""
Directed graph with named nodes stored as a flat index table.

Nodes are identified by a stable integer index assigned on first sight.
Adjacency is kept as index lists in both directions, so the incoming lists
are always the exact transpose of the outgoing lists without nodes holding
references to each other.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

from ..errors import GraphError, GraphFrozenError


class ParallelEdgePolicy(Enum):
    """How a repeated (src, dst) pair is stored."""
    COLLAPSE = "collapse"      # set semantics, repeats are ignored
    ACCUMULATE = "accumulate"  # multiset, each repeat adds weight


@dataclass(frozen=True)
class NodeView:
    """Read-only snapshot of a node."""
    index: int
    name: str
    rank: float
    outgoing: Tuple[str, ...]
    incoming: Tuple[str, ...]

    @property
    def out_degree(self) -> int:
        return len(self.outgoing)


class Graph:
    """Directed graph keyed by case-sensitive node name."""

    def __init__(self, parallel_edges: ParallelEdgePolicy = ParallelEdgePolicy.COLLAPSE):
        self.parallel_edges = ParallelEdgePolicy(parallel_edges)
        self._index: Dict[str, int] = {}
        self._names: List[str] = []
        self._outgoing: List[List[int]] = []
        self._incoming: List[List[int]] = []
        self._ranks: List[float] = []
        self._frozen = False

    def add_node(self, name: str) -> int:
        """Return the index of name, creating the node if needed."""
        existing = self._index.get(name)
        if existing is not None:
            return existing
        self._check_mutable()
        if not isinstance(name, str) or not name:
            raise GraphError(f"invalid node name: {name!r}")
        idx = len(self._names)
        self._index[name] = idx
        self._names.append(name)
        self._outgoing.append([])
        self._incoming.append([])
        self._ranks.append(0.0)
        return idx

    def add_edge(self, src: str, dst: str) -> None:
        """Add src -> dst, creating either endpoint if absent."""
        self._check_mutable()
        u = self.add_node(src)
        v = self.add_node(dst)
        if self.parallel_edges is ParallelEdgePolicy.COLLAPSE and v in self._outgoing[u]:
            return
        self._outgoing[u].append(v)
        self._incoming[v].append(u)

    def has_node(self, name: str) -> bool:
        return name in self._index

    def index_of(self, name: str) -> int:
        try:
            return self._index[name]
        except KeyError:
            raise GraphError(f"unknown node: {name}") from None

    def name_of(self, idx: int) -> str:
        return self._names[idx]

    def node_count(self) -> int:
        return len(self._names)

    def edge_count(self) -> int:
        return sum(len(targets) for targets in self._outgoing)

    def out_degree(self, idx: int) -> int:
        return len(self._outgoing[idx])

    def incoming(self, idx: int) -> List[int]:
        return self._incoming[idx]

    def outgoing(self, idx: int) -> List[int]:
        return self._outgoing[idx]

    def dangling(self) -> List[int]:
        """Indices of nodes with no outgoing edges."""
        return [i for i, targets in enumerate(self._outgoing) if not targets]

    # Ranks

    def ranks(self) -> List[float]:
        return list(self._ranks)

    def set_ranks(self, ranks: List[float]) -> None:
        if len(ranks) != len(self._names):
            raise GraphError(f"expected {len(self._names)} ranks, got {len(ranks)}")
        self._ranks = list(ranks)

    def rank(self, name: str) -> float:
        return self._ranks[self.index_of(name)]

    # Topology lifecycle

    def freeze(self) -> None:
        """Disallow further topology changes."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def _check_mutable(self) -> None:
        if self._frozen:
            raise GraphFrozenError("graph topology is frozen once ranking has started")

    # Snapshots

    def get_node(self, name: str) -> Optional[NodeView]:
        idx = self._index.get(name)
        if idx is None:
            return None
        return self._view(idx)

    def get_all_nodes(self) -> List[NodeView]:
        """Snapshot of all nodes in insertion order."""
        return [self._view(i) for i in range(len(self._names))]

    def _view(self, idx: int) -> NodeView:
        return NodeView(
            index=idx,
            name=self._names[idx],
            rank=self._ranks[idx],
            outgoing=tuple(self._names[v] for v in self._outgoing[idx]),
            incoming=tuple(self._names[u] for u in self._incoming[idx]),
        )

    def __len__(self) -> int:
        return len(self._names)

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def __repr__(self) -> str:
        return f"Graph(nodes={self.node_count()}, edges={self.edge_count()})"
