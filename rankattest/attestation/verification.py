"""Offline re-verification of a recorded run."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from ..errors import SignatureError
from .encoding import from_base64, load_public_key
from .provider import SignatureSchemeProvider
from .types import AttestationPayload, sha256_hex


@dataclass
class VerificationOutcome:
    valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


def verify_recorded_chain(
    scheme: str,
    data: str,
    delta_payload: str,
    delta_base64_sig: str,
    sigma_base64_sig: str,
    delta_public_key_base64: str,
    sigma_public_key_base64: str,
    provider: Optional[SignatureSchemeProvider] = None,
) -> VerificationOutcome:
    """Check both hops of a recorded chain using the recorded public keys.

    Args:
        scheme: Scheme id the run used
        data: Canonical result string signed by Delta
        delta_payload: TSv1 payload signed by Sigma
        delta_base64_sig / sigma_base64_sig: Signatures, standard base64
        delta_public_key_base64 / sigma_public_key_base64: DER public keys, base64
    Returns:
        VerificationOutcome listing every problem found.
    """
    provider = provider or SignatureSchemeProvider()
    errors: List[str] = []
    warnings: List[str] = []

    try:
        delta_sig = from_base64(delta_base64_sig)
        sigma_sig = from_base64(sigma_base64_sig)
        delta_key = load_public_key(from_base64(delta_public_key_base64))
        sigma_key = load_public_key(from_base64(sigma_public_key_base64))
    except ValueError as e:
        return VerificationOutcome(valid=False, errors=[f"decode_error:{e}"])

    data_bytes = data.encode("utf-8")

    # Payload binding
    try:
        payload = AttestationPayload.parse(delta_payload)
    except ValueError:
        errors.append("payload_malformed")
        payload = None
    if payload is not None:
        if payload.result_hash_hex != sha256_hex(data_bytes):
            errors.append("result_hash_mismatch")
        if payload.delta_sig_hash_hex != sha256_hex(delta_sig):
            errors.append("delta_hash_mismatch")

    # Signatures
    try:
        if not provider.verify(scheme, delta_key, data_bytes, delta_sig):
            errors.append("delta_signature_invalid")
        if not provider.verify(scheme, sigma_key, delta_payload.encode("utf-8"), sigma_sig):
            errors.append("sigma_signature_invalid")
        if provider.info(scheme).approximated:
            warnings.append(f"approximated_scheme:{scheme}")
    except SignatureError as e:
        errors.append(f"scheme_error:{e}")

    return VerificationOutcome(valid=not errors, errors=errors, warnings=warnings)


__all__ = [
    "VerificationOutcome",
    "verify_recorded_chain",
]
