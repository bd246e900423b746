"""Tests for the harness report and recorded-run verification."""

import base64
import json

import pytest

from rankattest.attestation import AttestationRecord, AttestationPayload
from rankattest.config import RunConfig
from rankattest.service import (
    RunEntry,
    append_run_entry,
    parse_run_entries,
    render_report,
    run_pipeline,
    verify_run_entry,
)

REPORT_KEYS = [
    "PageRank Result String: ",
    "Delta Payload: ",
    "Delta Signature (Base64): ",
    "Sigma Signature (Base64): ",
    "PR_compute_us:",
    "PR_per_iter_us:",
    "Delta_Sign_ms:",
    "Delta_Verify_ms:",
    "Sigma_Sign_ms:",
    "Sigma_Verify_ms:",
    "Delta_Sig_base64_bytes:",
    "Sigma_Sig_base64_bytes:",
]


@pytest.fixture
def attested(graph, fixed_context):
    return run_pipeline(RunConfig(scheme="ecdsa-r1"), graph, fixed_context)


@pytest.fixture
def entry(attested):
    return RunEntry.from_result(attested)


def _replace(entry, **changes):
    data = entry.to_dict()
    data.update(changes)
    return RunEntry.from_dict(data)


class TestRenderReport:

    def test_line_order(self, attested):
        lines = render_report(attested)
        for line, key in zip(lines, REPORT_KEYS):
            assert line.startswith(key)
        assert lines[12] == "Final PageRank values after 100 iterations:"
        assert lines[13:] == [
            "- PageA: 0.3725",
            "- PageB: 0.1958",
            "- PageC: 0.3941",
            "- PageD: 0.0375",
        ]

    def test_values(self, attested):
        lines = dict(line.split(":", 1) for line in render_report(attested)[4:12])
        # fixed clock advances 1.5 ms per read
        assert lines["PR_compute_us"] == "1500"
        assert lines["PR_per_iter_us"] == "15"
        assert lines["Delta_Sign_ms"] == "1"
        assert lines["Sigma_Verify_ms"] == "1"
        delta_b64 = render_report(attested)[2].split(": ", 1)[1]
        assert lines["Delta_Sig_base64_bytes"] == str(len(delta_b64))
        base64.b64decode(delta_b64, validate=True)

    def test_failed_attestation_report(self, attested):
        failed = type(attested)(
            result_string=attested.result_string,
            attestation=AttestationRecord.failed("bls12-381", error="not implemented"),
            pagerank_timing=attested.pagerank_timing,
            nodes=attested.nodes,
            iterations=attested.iterations,
        )
        lines = render_report(failed)
        assert lines[0] == "PageRank Result String: PageA:0.3725;PageB:0.1958;PageC:0.3941;PageD:0.0375;"
        assert lines[1] == "Delta Payload: "
        assert lines[2] == "Delta Signature (Base64): "
        assert lines[3] == "Sigma Signature (Base64): "
        assert lines[6:12] == [
            "Delta_Sign_ms:0",
            "Delta_Verify_ms:0",
            "Sigma_Sign_ms:0",
            "Sigma_Verify_ms:0",
            "Delta_Sig_base64_bytes:0",
            "Sigma_Sig_base64_bytes:0",
        ]


class TestRunEntry:

    def test_json_uses_camel_case(self, entry):
        obj = json.loads(entry.to_json())
        assert set(obj) == {
            "scheme", "data", "deltaPayload", "deltaBase64Sig", "sigmaBase64Sig",
            "deltaPublicKeyBase64", "sigmaPublicKeyBase64",
        }
        assert obj["scheme"] == "ecdsa-r1"
        assert RunEntry.from_dict(obj) == entry

    def test_missing_field(self, entry):
        obj = entry.to_dict()
        del obj["sigmaBase64Sig"]
        with pytest.raises(ValueError, match="sigmaBase64Sig"):
            RunEntry.from_dict(obj)

    def test_failed_run_is_incomplete(self, graph, context):
        result = run_pipeline(RunConfig(scheme="bls12-381"), graph, context)
        assert not RunEntry.from_result(result).is_complete()

    def test_append_and_parse(self, tmp_path, entry):
        path = tmp_path / "runs.jsonl"
        append_run_entry(str(path), entry)
        append_run_entry(str(path), entry)
        assert parse_run_entries(path.read_text()) == [entry, entry]

    def test_parse_skips_bad_lines(self, entry, caplog):
        text = "\n".join([
            entry.to_json(),
            "{not json",
            json.dumps({"scheme": "ed25519"}),
            "[1, 2]",
            "",
            entry.to_json(),
        ])
        assert parse_run_entries(text) == [entry, entry]
        assert "failed to parse" in caplog.text
        assert "malformed line" in caplog.text


class TestVerifyRunEntry:

    def test_valid(self, entry):
        outcome = verify_run_entry(entry)
        assert outcome.valid
        assert outcome.errors == []
        assert outcome.warnings == []

    @pytest.mark.parametrize("scheme", ["ecdsa-k1", "ed25519"])
    def test_valid_other_schemes(self, scheme, context):
        from rankattest.graph import default_graph
        result = run_pipeline(RunConfig(scheme=scheme, iterations=5), default_graph(), context)
        assert verify_run_entry(RunEntry.from_result(result)).valid

    def test_approximated_scheme_warns(self, graph, context):
        result = run_pipeline(RunConfig(scheme="schnorr-k1", iterations=5), graph, context)
        outcome = verify_run_entry(RunEntry.from_result(result))
        assert outcome.valid
        assert outcome.warnings == ["approximated_scheme:schnorr-k1"]

    def test_tampered_data(self, entry):
        outcome = verify_run_entry(_replace(entry, data="PageA:1.0000;"))
        assert not outcome.valid
        assert "result_hash_mismatch" in outcome.errors
        assert "delta_signature_invalid" in outcome.errors

    def test_tampered_payload(self, entry):
        payload = AttestationPayload.parse(entry.delta_payload)
        later = AttestationPayload(payload.result_hash_hex, payload.delta_sig_hash_hex, payload.timestamp_millis + 1)
        outcome = verify_run_entry(_replace(entry, deltaPayload=later.encode()))
        assert outcome.errors == ["sigma_signature_invalid"]

    def test_malformed_payload(self, entry):
        outcome = verify_run_entry(_replace(entry, deltaPayload="TSv9|x"))
        assert "payload_malformed" in outcome.errors
        assert "sigma_signature_invalid" in outcome.errors

    def test_swapped_keys(self, entry):
        outcome = verify_run_entry(_replace(
            entry,
            deltaPublicKeyBase64=entry.sigma_public_key_base64,
            sigmaPublicKeyBase64=entry.delta_public_key_base64,
        ))
        assert outcome.errors == ["delta_signature_invalid", "sigma_signature_invalid"]

    def test_undecodable_signature(self, entry):
        outcome = verify_run_entry(_replace(entry, deltaBase64Sig="***"))
        assert not outcome.valid
        assert outcome.errors[0].startswith("decode_error:")

    def test_scheme_key_mismatch(self, entry):
        outcome = verify_run_entry(_replace(entry, scheme="ed25519"))
        assert not outcome.valid
        assert outcome.errors[0].startswith("scheme_error:")

    def test_unknown_scheme(self, entry):
        outcome = verify_run_entry(_replace(entry, scheme="bls12-381"))
        assert not outcome.valid
        assert outcome.errors[0].startswith("scheme_error:")
