"""Prometheus metrics for PageRank runs and attestation chains.

Each AttestationMetrics owns its CollectorRegistry, so several instances
(one per test, one per CLI run) never collide on metric names.
"""
from __future__ import annotations

from typing import Dict, Optional

from prometheus_client import CollectorRegistry, Counter, Histogram, generate_latest

_SIGN_VERIFY_BUCKETS = (0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0)


class AttestationMetrics:
    def __init__(self, registry: Optional[CollectorRegistry] = None):
        self.registry = registry or CollectorRegistry()
        self.attestations = Counter(
            "rankattest_attestations_total",
            "Attestation chains by outcome",
            ["scheme", "status"],
            registry=self.registry,
        )
        self.verification_failures = Counter(
            "rankattest_verification_failures_total",
            "Signatures that failed verification",
            ["scheme", "hop"],
            registry=self.registry,
        )
        self.signature_seconds = Histogram(
            "rankattest_signature_seconds",
            "Time spent in a sign or verify step",
            ["scheme", "step"],
            buckets=_SIGN_VERIFY_BUCKETS,
            registry=self.registry,
        )
        self.pagerank_seconds = Histogram(
            "rankattest_pagerank_seconds",
            "Time spent computing PageRank",
            registry=self.registry,
        )

    def observe_step(self, scheme: str, step: str, elapsed_ns: int) -> None:
        self.signature_seconds.labels(scheme=scheme, step=step).observe(elapsed_ns / 1e9)

    def observe_pagerank(self, elapsed_ns: int) -> None:
        self.pagerank_seconds.observe(elapsed_ns / 1e9)

    def record_attestation(self, scheme: str, status: str) -> None:
        self.attestations.labels(scheme=scheme, status=status).inc()

    def record_verification_failure(self, scheme: str, hop: str) -> None:
        self.verification_failures.labels(scheme=scheme, hop=hop).inc()

    def snapshot(self) -> Dict[str, int]:
        """Return totals of the counters, summed over labels."""
        totals = {
            "attestations_total": 0,
            "verification_failures_total": 0,
            "pagerank_runs_total": 0,
        }
        for metric in self.registry.collect():
            for sample in metric.samples:
                if sample.name == "rankattest_attestations_total":
                    totals["attestations_total"] += int(sample.value)
                    key = f"attestations_{sample.labels['status']}_total"
                    totals[key] = totals.get(key, 0) + int(sample.value)
                elif sample.name == "rankattest_verification_failures_total":
                    totals["verification_failures_total"] += int(sample.value)
                elif sample.name == "rankattest_pagerank_seconds_count":
                    totals["pagerank_runs_total"] += int(sample.value)
        return totals

    def exposition(self) -> str:
        """Prometheus text format for the whole registry."""
        return generate_latest(self.registry).decode("utf-8")


__all__ = ["AttestationMetrics"]
