"""
Run configuration.

Values come from the environment (SIG_SCHEME, DATA_FILE, PR_ITERS, PR_DAMP)
and can be overridden field by field by the command line.
"""

import os
from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional

from .errors import ConfigError
from .graph.model import ParallelEdgePolicy
from .pagerank.engine import DEFAULT_DAMPING, DEFAULT_ITERATIONS, DanglingPolicy, validate_parameters

DEFAULT_SCHEME = "ecdsa-k1"

ENV_SCHEME = "SIG_SCHEME"
ENV_DATA_FILE = "DATA_FILE"
ENV_ITERATIONS = "PR_ITERS"
ENV_DAMPING = "PR_DAMP"


@dataclass(frozen=True)
class RunConfig:
    """Configuration of one batch run."""
    scheme: str = DEFAULT_SCHEME
    iterations: int = DEFAULT_ITERATIONS
    damping_factor: float = DEFAULT_DAMPING
    data_file: Optional[str] = None
    dangling_policy: DanglingPolicy = DanglingPolicy.REDISTRIBUTE
    parallel_edges: ParallelEdgePolicy = ParallelEdgePolicy.COLLAPSE
    strict_verification: bool = False

    def __post_init__(self):
        # Accept the string values of the enums, e.g. from argparse
        try:
            object.__setattr__(self, "dangling_policy", DanglingPolicy(self.dangling_policy))
            object.__setattr__(self, "parallel_edges", ParallelEdgePolicy(self.parallel_edges))
        except ValueError as e:
            raise ConfigError(str(e)) from None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "RunConfig":
        env = os.environ if environ is None else environ
        config = cls(
            scheme=env.get(ENV_SCHEME) or DEFAULT_SCHEME,
            iterations=_parse_int(ENV_ITERATIONS, env.get(ENV_ITERATIONS), DEFAULT_ITERATIONS),
            damping_factor=_parse_float(ENV_DAMPING, env.get(ENV_DAMPING), DEFAULT_DAMPING),
            data_file=env.get(ENV_DATA_FILE) or None,
        )
        config.validate()
        return config

    def with_overrides(self, **overrides: Any) -> "RunConfig":
        """Copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        config = replace(self, **changes)
        config.validate()
        return config

    def validate(self) -> None:
        if not self.scheme or not self.scheme.strip():
            raise ConfigError("scheme must not be empty")
        validate_parameters(self.iterations, self.damping_factor)


def _parse_int(name: str, raw: Optional[str], default: int) -> int:
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None


def _parse_float(name: str, raw: Optional[str], default: float) -> float:
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from None
