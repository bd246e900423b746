"""
Line-based report and JSONL run entries for an external harness.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..attestation.encoding import to_base64
from ..attestation.provider import SignatureSchemeProvider
from ..attestation.verification import VerificationOutcome, verify_recorded_chain
from ..pagerank.formatter import format_rank
from .pipeline import PipelineResult

logger = logging.getLogger(__name__)


def render_report(result: PipelineResult) -> List[str]:
    """Report lines in the order the harness parses them."""
    record = result.attestation
    timing = result.pagerank_timing
    delta_b64 = to_base64(record.delta_signature)
    sigma_b64 = to_base64(record.sigma_signature)

    lines = [
        f"PageRank Result String: {result.result_string}",
        f"Delta Payload: {record.delta_payload}",
        f"Delta Signature (Base64): {delta_b64}",
        f"Sigma Signature (Base64): {sigma_b64}",
        f"PR_compute_us:{timing.compute_us}",
        f"PR_per_iter_us:{timing.per_iter_us}",
        f"Delta_Sign_ms:{record.timings.delta_sign_ms}",
        f"Delta_Verify_ms:{record.timings.delta_verify_ms}",
        f"Sigma_Sign_ms:{record.timings.sigma_sign_ms}",
        f"Sigma_Verify_ms:{record.timings.sigma_verify_ms}",
        f"Delta_Sig_base64_bytes:{len(delta_b64)}",
        f"Sigma_Sig_base64_bytes:{len(sigma_b64)}",
        f"Final PageRank values after {result.iterations} iterations:",
    ]
    lines.extend(f"- {node.name}: {format_rank(node.rank)}" for node in result.nodes)
    return lines


_JSON_FIELDS = {
    "scheme": "scheme",
    "data": "data",
    "delta_payload": "deltaPayload",
    "delta_base64_sig": "deltaBase64Sig",
    "sigma_base64_sig": "sigmaBase64Sig",
    "delta_public_key_base64": "deltaPublicKeyBase64",
    "sigma_public_key_base64": "sigmaPublicKeyBase64",
}


@dataclass(frozen=True)
class RunEntry:
    """One attested run, as exchanged with on-chain verification tooling."""
    scheme: str
    data: str
    delta_payload: str
    delta_base64_sig: str
    sigma_base64_sig: str
    delta_public_key_base64: str
    sigma_public_key_base64: str

    @classmethod
    def from_result(cls, result: PipelineResult) -> "RunEntry":
        record = result.attestation
        return cls(
            scheme=record.scheme,
            data=result.result_string,
            delta_payload=record.delta_payload,
            delta_base64_sig=to_base64(record.delta_signature),
            sigma_base64_sig=to_base64(record.sigma_signature),
            delta_public_key_base64=to_base64(record.delta_public_key),
            sigma_public_key_base64=to_base64(record.sigma_public_key),
        )

    @classmethod
    def from_dict(cls, obj: Dict[str, Any]) -> "RunEntry":
        """Build from the camelCase JSON form. Raises ValueError on missing or empty fields."""
        values = {}
        for attr, key in _JSON_FIELDS.items():
            value = obj.get(key)
            if not isinstance(value, str) or not value:
                raise ValueError(f"missing field: {key}")
            values[attr] = value
        return cls(**values)

    def to_dict(self) -> Dict[str, str]:
        return {key: getattr(self, attr) for attr, key in _JSON_FIELDS.items()}

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), separators=(",", ":"))

    def is_complete(self) -> bool:
        return all(getattr(self, attr) for attr in _JSON_FIELDS)


def parse_run_entries(text: str) -> List[RunEntry]:
    """Parse JSONL, skipping blank, unparsable and incomplete lines."""
    entries: List[RunEntry] = []
    for line in text.splitlines():
        if not line.strip():
            continue
        try:
            entries.append(RunEntry.from_dict(json.loads(line)))
        except json.JSONDecodeError as e:
            logger.warning(f"Skipping a line that failed to parse in JSONL: {e}")
        except (ValueError, AttributeError) as e:
            logger.warning(f"Skipping a malformed line in JSONL: {e}")
    return entries


def append_run_entry(path: str, entry: RunEntry) -> None:
    with open(path, "a", encoding="utf-8") as f:
        f.write(entry.to_json() + "\n")


def verify_run_entry(entry: RunEntry, provider: Optional[SignatureSchemeProvider] = None) -> VerificationOutcome:
    return verify_recorded_chain(
        scheme=entry.scheme,
        data=entry.data,
        delta_payload=entry.delta_payload,
        delta_base64_sig=entry.delta_base64_sig,
        sigma_base64_sig=entry.sigma_base64_sig,
        delta_public_key_base64=entry.delta_public_key_base64,
        sigma_public_key_base64=entry.sigma_public_key_base64,
        provider=provider,
    )
