"""
Package attestation provides pluggable signature schemes and the two-hop
Delta/Sigma attestation chain over a canonical PageRank result.

Delta is the result producer's signature over the result bytes. Sigma is an
independent attester's signature over a TSv1 payload binding the result hash
and the Delta hash.
"""

from .types import (
    PAYLOAD_VERSION,
    AttestationPayload,
    AttestationRecord,
    AttestationStatus,
    AttestationTimings,
    CurveFallback,
    KeyPair,
    SchemeInfo,
    SignatureScheme,
    sha256_hex,
)
from .schemes import (
    EcdsaScheme,
    Ed25519Scheme,
    UnimplementedScheme,
    bls12_381,
    ecdsa_k1,
    ecdsa_r1,
    schnorr_k1,
)
from .registry import SchemeRegistry, default_registry
from .context import CryptoContext, new_context
from .provider import SignatureSchemeProvider
from .chain import AttestationChain
from .encoding import (
    der_to_rs,
    from_base64,
    load_public_key,
    public_key_bytes,
    rs_hex,
    to_base64,
)
from .verification import VerificationOutcome, verify_recorded_chain

__all__ = [
    'PAYLOAD_VERSION',
    'AttestationPayload',
    'AttestationRecord',
    'AttestationStatus',
    'AttestationTimings',
    'CurveFallback',
    'KeyPair',
    'SchemeInfo',
    'SignatureScheme',
    'sha256_hex',
    'EcdsaScheme',
    'Ed25519Scheme',
    'UnimplementedScheme',
    'bls12_381',
    'ecdsa_k1',
    'ecdsa_r1',
    'schnorr_k1',
    'SchemeRegistry',
    'default_registry',
    'CryptoContext',
    'new_context',
    'SignatureSchemeProvider',
    'AttestationChain',
    'der_to_rs',
    'from_base64',
    'load_public_key',
    'public_key_bytes',
    'rs_hex',
    'to_base64',
    'VerificationOutcome',
    'verify_recorded_chain',
]
