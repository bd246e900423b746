"""
Explicit context shared by the scheme provider and the attestation chain.

It replaces process-wide provider registration and a global logger: the
scheme registry, logger, metrics and clocks are built once and handed to the
components that need them.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

from ..monitoring.metrics_exporter import AttestationMetrics
from .registry import SchemeRegistry, default_registry


@dataclass
class CryptoContext:
    """Holds the collaborators of signing and attestation."""
    registry: SchemeRegistry = field(default_factory=lambda: default_registry())
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger("rankattest.attestation"))
    metrics: AttestationMetrics = field(default_factory=AttestationMetrics)
    monotonic_ns: Callable[[], int] = field(default_factory=lambda: time.perf_counter_ns)
    now_millis: Callable[[], int] = field(default_factory=lambda: _unix_millis)


def _unix_millis() -> int:
    return time.time_ns() // 1_000_000


def new_context(
    registry: Optional[SchemeRegistry] = None,
    logger: Optional[logging.Logger] = None,
    metrics: Optional[AttestationMetrics] = None,
) -> CryptoContext:
    """Build a context, filling in defaults for anything not supplied."""
    ctx = CryptoContext()
    if registry is not None:
        ctx.registry = registry
    if logger is not None:
        ctx.logger = logger
    if metrics is not None:
        ctx.metrics = metrics
    return ctx
