"""
Exception hierarchy for rankattest.

Graph and engine errors are structural and propagate to the caller.
Signature errors are raised by the scheme provider and contained by the
attestation chain, which turns them into a FAILED record.
"""


class RankAttestError(Exception):
    """Base class for all rankattest errors."""


class ConfigError(RankAttestError, ValueError):
    """Invalid run configuration."""


class GraphError(RankAttestError):
    """Structural problem with a graph."""


class EmptyGraphError(GraphError):
    """PageRank was requested on a graph without nodes."""

    def __init__(self, message: str = "graph has no nodes"):
        super().__init__(message)


class GraphFrozenError(GraphError):
    """Topology change attempted after ranking started."""


class ResultFormatError(RankAttestError, ValueError):
    """A canonical result string could not be parsed."""


class SignatureError(RankAttestError):
    """Base class for signing failures."""


class UnsupportedSchemeError(SignatureError):
    """Scheme is unknown, a stub, or lacks curve support in this runtime."""

    def __init__(self, scheme: str, reason: str = ""):
        self.scheme = scheme
        self.reason = reason
        message = f"unsupported signature scheme: {scheme}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class KeyMismatchError(SignatureError):
    """A key was used with a scheme other than the one it belongs to."""


class VerificationFailure(SignatureError):
    """Raised by callers that require a fully verified attestation."""

    def __init__(self, message: str, verified_delta: bool = False, verified_sigma: bool = False):
        self.verified_delta = verified_delta
        self.verified_sigma = verified_sigma
        super().__init__(message)


__all__ = [
    "RankAttestError",
    "ConfigError",
    "GraphError",
    "EmptyGraphError",
    "GraphFrozenError",
    "ResultFormatError",
    "SignatureError",
    "UnsupportedSchemeError",
    "KeyMismatchError",
    "VerificationFailure",
]
