"""End-to-end pipeline tests."""

import pytest

from rankattest.attestation import AttestationStatus, Ed25519Scheme
from rankattest.config import RunConfig
from rankattest.errors import EmptyGraphError
from rankattest.graph import Graph, default_graph
from rankattest.pagerank import parse_result
from rankattest.service import run_from_config, run_pipeline, run_schemes

BASELINE = "PageA:0.3725;PageB:0.1958;PageC:0.3941;PageD:0.0375;"


def test_single_iteration_ecdsa_r1(graph, context):
    result = run_pipeline(RunConfig(scheme="ecdsa-r1", iterations=1, damping_factor=0.85), graph, context)

    ranks = {n.name: n.rank for n in result.nodes}
    assert ranks["PageA"] == pytest.approx((1 - 0.85) / 4 + 0.85 * 0.25)
    assert ranks["PageB"] == pytest.approx((1 - 0.85) / 4 + 0.85 * 0.125)
    assert ranks["PageC"] == pytest.approx((1 - 0.85) / 4 + 0.85 * 0.625)
    assert ranks["PageD"] == pytest.approx((1 - 0.85) / 4)
    assert result.result_string == "PageA:0.2500;PageB:0.1438;PageC:0.5688;PageD:0.0375;"
    assert result.attestation.status is AttestationStatus.ATTESTED


def test_default_run_matches_baseline(graph, context):
    result = run_pipeline(RunConfig(scheme="ed25519"), graph, context)
    assert result.result_string == BASELINE
    assert result.result_bytes == BASELINE.encode()
    assert result.iterations == 100
    assert result.attestation.trusted


def test_broken_attestation_keeps_result(graph, context):
    result = run_pipeline(RunConfig(scheme="bls12-381"), graph, context)
    assert result.result_string == BASELINE
    record = result.attestation
    assert record.status is AttestationStatus.FAILED
    assert record.delta_signature == b"" and record.sigma_signature == b""
    assert record.timings.is_zero()


def test_pagerank_timing(fixed_context, graph):
    result = run_pipeline(RunConfig(scheme="ed25519", iterations=10), graph, fixed_context)
    timing = result.pagerank_timing
    assert timing.compute_ns == 1_500_000
    assert timing.compute_us == 1_500
    assert timing.per_iter_us == 150
    assert fixed_context.metrics.snapshot()["pagerank_runs_total"] == 1


def test_zero_iterations_per_iter_guard():
    from rankattest.service import PageRankTiming
    assert PageRankTiming(compute_ns=5_000, iterations=0).per_iter_us == 5


def test_empty_graph_is_fatal(context):
    with pytest.raises(EmptyGraphError):
        run_pipeline(RunConfig(scheme="ed25519"), Graph(), context)


def test_run_from_config_falls_back_to_default(tmp_path, context):
    config = RunConfig(scheme="ecdsa-r1", data_file=str(tmp_path / "missing.txt"))
    result = run_from_config(config, context)
    assert result.used_default_graph
    assert result.result_string == BASELINE


def test_run_from_config_reads_file(tmp_path, context):
    path = tmp_path / "edges.txt"
    path.write_text("# triangle\nx y\ny z\nz x\n")
    result = run_from_config(RunConfig(scheme="ed25519", data_file=str(path)), context)
    assert not result.used_default_graph
    assert parse_result(result.result_string) == [("x", 0.3333), ("y", 0.3333), ("z", 0.3333)]


def test_run_schemes_uses_fresh_graphs(context):
    built = []

    def factory():
        g = default_graph()
        built.append(g)
        return g

    results = run_schemes(RunConfig(), ["ecdsa-r1", "ed25519", "bls12-381"], factory, context)
    assert len(built) == 3
    assert len({id(g) for g in built}) == 3
    assert {r.result_string for r in results.values()} == {BASELINE}
    assert results["ecdsa-r1"].attestation.trusted
    assert results["ed25519"].attestation.trusted
    assert results["bls12-381"].attestation.status is AttestationStatus.FAILED
    assert results["ecdsa-r1"].attestation.delta_public_key != results["ed25519"].attestation.delta_public_key


def test_scheme_crash_keeps_result(graph, context):
    class CrashingScheme(Ed25519Scheme):
        scheme_id = "crashing"

        def sign(self, private_key, message):
            raise RuntimeError("signer crashed")

    context.registry.register(CrashingScheme())
    result = run_pipeline(RunConfig(scheme="crashing"), graph, context)
    assert result.result_string == BASELINE
    assert result.attestation.status is AttestationStatus.FAILED
    assert result.attestation.error == "signer crashed"
