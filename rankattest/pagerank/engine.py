"""
Fixed-iteration PageRank over a Graph.

Every pass reads the ranks as they stood at the start of the pass and writes
into a separate buffer, so the outcome does not depend on node order.
"""

import logging
from enum import Enum
from typing import Callable, List, Optional

from ..errors import ConfigError, EmptyGraphError
from ..graph.model import Graph

logger = logging.getLogger(__name__)

DEFAULT_ITERATIONS = 100
DEFAULT_DAMPING = 0.85


class DanglingPolicy(Enum):
    """What happens to the rank held by nodes without outgoing edges."""
    REDISTRIBUTE = "redistribute"  # spread uniformly over all nodes
    DROP = "drop"                  # discarded, total mass shrinks


def validate_parameters(iterations: int, damping_factor: float) -> None:
    if isinstance(iterations, bool) or not isinstance(iterations, int) or iterations < 0:
        raise ConfigError(f"iterations must be a non-negative integer, got {iterations!r}")
    if isinstance(damping_factor, bool) or not isinstance(damping_factor, (int, float)):
        raise ConfigError(f"damping factor must be a number, got {damping_factor!r}")
    if not 0.0 <= damping_factor <= 1.0:
        raise ConfigError(f"damping factor must be within [0, 1], got {damping_factor}")


class PageRankEngine:
    """Runs PageRank in place on a graph."""

    def __init__(self, dangling_policy: DanglingPolicy = DanglingPolicy.REDISTRIBUTE):
        self.dangling_policy = DanglingPolicy(dangling_policy)

    def run(
        self,
        graph: Graph,
        iterations: int = DEFAULT_ITERATIONS,
        damping_factor: float = DEFAULT_DAMPING,
        on_iteration: Optional[Callable[[int, List[float]], None]] = None,
    ) -> None:
        """Run exactly `iterations` passes and store the ranks in the graph.

        Args:
            graph: Graph to rank. Its topology is frozen by this call.
            iterations: Number of passes, no early stop.
            damping_factor: Probability of following an edge.
            on_iteration: Optional observer called with (pass number, ranks)
                after each completed pass.
        """
        validate_parameters(iterations, damping_factor)

        n = graph.node_count()
        if n == 0:
            raise EmptyGraphError()

        graph.freeze()
        d = float(damping_factor)
        out_degree = [graph.out_degree(i) for i in range(n)]
        incoming = [graph.incoming(i) for i in range(n)]
        dangling = [i for i in range(n) if out_degree[i] == 0]
        if dangling:
            names = ", ".join(graph.name_of(i) for i in dangling)
            logger.info(f"{len(dangling)} dangling node(s), policy={self.dangling_policy.value}: {names}")

        base = (1.0 - d) / n
        current = [1.0 / n] * n

        for step in range(iterations):
            if dangling and self.dangling_policy is DanglingPolicy.REDISTRIBUTE:
                dangling_share = d * sum(current[i] for i in dangling) / n
            else:
                dangling_share = 0.0

            following = [0.0] * n
            for v in range(n):
                rank_sum = 0.0
                for u in incoming[v]:
                    rank_sum += current[u] / out_degree[u]
                following[v] = base + d * rank_sum + dangling_share
            current = following

            if on_iteration is not None:
                on_iteration(step + 1, list(current))

        graph.set_ranks(current)
        logger.debug(f"PageRank finished: nodes={n} iterations={iterations} damping={d}")
