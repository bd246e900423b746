"""
rankattest

PageRank over a small directed graph with a two-hop (Delta/Sigma)
cryptographic attestation of the canonical result.
"""

__version__ = "0.1.0"

from .config import RunConfig
from .errors import (
    RankAttestError,
    ConfigError,
    EmptyGraphError,
    UnsupportedSchemeError,
    VerificationFailure,
)
from .graph import Graph, ParallelEdgePolicy, build_graph, default_graph
from .pagerank import DanglingPolicy, PageRankEngine, format_result, parse_result
from .attestation import (
    AttestationChain,
    AttestationRecord,
    AttestationStatus,
    CryptoContext,
    SignatureSchemeProvider,
)
from .service import PipelineResult, run_from_config, run_pipeline

__all__ = [
    "RunConfig",
    "RankAttestError",
    "ConfigError",
    "EmptyGraphError",
    "UnsupportedSchemeError",
    "VerificationFailure",
    "Graph",
    "ParallelEdgePolicy",
    "build_graph",
    "default_graph",
    "DanglingPolicy",
    "PageRankEngine",
    "format_result",
    "parse_result",
    "AttestationChain",
    "AttestationRecord",
    "AttestationStatus",
    "CryptoContext",
    "SignatureSchemeProvider",
    "PipelineResult",
    "run_from_config",
    "run_pipeline",
]
