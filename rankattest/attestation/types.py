"""
Core types for signature schemes and the Delta/Sigma attestation chain.
"""

import hashlib
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Protocol

from ..errors import VerificationFailure

PAYLOAD_VERSION = "TSv1"


@dataclass(frozen=True)
class CurveFallback:
    """Reports that a requested curve was replaced by another one."""
    requested: str
    substituted: str


@dataclass(frozen=True)
class SchemeInfo:
    """Capability metadata for a scheme.

    `approximated` is True when the primitive actually used differs from the
    one the scheme id names (schnorr-k1 signs with ECDSA).
    """
    scheme_id: str
    algorithm: str
    curve: str = ""
    hash_name: str = ""
    approximated: bool = False
    implemented: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "scheme_id": self.scheme_id,
            "algorithm": self.algorithm,
            "curve": self.curve,
            "hash": self.hash_name,
            "approximated": self.approximated,
            "implemented": self.implemented,
        }


@dataclass
class KeyPair:
    """Key pair bound to the scheme that generated it."""
    scheme: str
    public: Any
    private: Any
    key_id: str
    curve: str = ""
    fallback: Optional[CurveFallback] = None


class SignatureScheme(Protocol):
    """Capability set every registered scheme implements."""

    scheme_id: str

    def info(self) -> SchemeInfo:
        ...  # pragma: no cover - interface placeholder

    def generate_key_pair(self) -> KeyPair:
        ...  # pragma: no cover - interface placeholder

    def sign(self, private_key: Any, message: bytes) -> bytes:
        ...  # pragma: no cover - interface placeholder

    def verify(self, public_key: Any, message: bytes, signature: bytes) -> bool:
        ...  # pragma: no cover - interface placeholder


def sha256_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


@dataclass(frozen=True)
class AttestationPayload:
    """Binds the result and the Delta signature for the Sigma signer."""
    result_hash_hex: str
    delta_sig_hash_hex: str
    timestamp_millis: int

    @classmethod
    def build(cls, result_bytes: bytes, delta_signature: bytes, timestamp_millis: int) -> "AttestationPayload":
        return cls(
            result_hash_hex=sha256_hex(result_bytes),
            delta_sig_hash_hex=sha256_hex(delta_signature),
            timestamp_millis=int(timestamp_millis),
        )

    @classmethod
    def parse(cls, text: str) -> "AttestationPayload":
        parts = text.split("|")
        if len(parts) != 4 or parts[0] != PAYLOAD_VERSION:
            raise ValueError(f"not a {PAYLOAD_VERSION} payload: {text!r}")
        try:
            timestamp = int(parts[3])
        except ValueError:
            raise ValueError(f"invalid payload timestamp: {parts[3]!r}") from None
        return cls(result_hash_hex=parts[1], delta_sig_hash_hex=parts[2], timestamp_millis=timestamp)

    def encode(self) -> str:
        return f"{PAYLOAD_VERSION}|{self.result_hash_hex}|{self.delta_sig_hash_hex}|{self.timestamp_millis}"

    def to_bytes(self) -> bytes:
        return self.encode().encode("utf-8")


@dataclass(frozen=True)
class AttestationTimings:
    """Elapsed monotonic time of each sign/verify step, in nanoseconds."""
    delta_sign_ns: int = 0
    delta_verify_ns: int = 0
    sigma_sign_ns: int = 0
    sigma_verify_ns: int = 0

    @property
    def delta_sign_ms(self) -> int:
        return self.delta_sign_ns // 1_000_000

    @property
    def delta_verify_ms(self) -> int:
        return self.delta_verify_ns // 1_000_000

    @property
    def sigma_sign_ms(self) -> int:
        return self.sigma_sign_ns // 1_000_000

    @property
    def sigma_verify_ms(self) -> int:
        return self.sigma_verify_ns // 1_000_000

    def is_zero(self) -> bool:
        return not (self.delta_sign_ns or self.delta_verify_ns or self.sigma_sign_ns or self.sigma_verify_ns)


class AttestationStatus(Enum):
    """Outcome of an attestation chain run."""
    ATTESTED = "attested"  # both signatures produced and verified
    DEGRADED = "degraded"  # chain completed, at least one verification failed
    FAILED = "failed"      # chain aborted, no usable signatures


@dataclass(frozen=True)
class AttestationRecord:
    """Everything the chain produced, for reporting."""
    scheme: str
    status: AttestationStatus
    delta_signature: bytes = b""
    delta_payload: str = ""
    sigma_signature: bytes = b""
    verified_delta: bool = False
    verified_sigma: bool = False
    timings: AttestationTimings = field(default_factory=AttestationTimings)
    delta_public_key: bytes = b""
    sigma_public_key: bytes = b""
    scheme_info: Optional[SchemeInfo] = None
    curve_fallback: Optional[CurveFallback] = None
    error: str = ""

    @classmethod
    def failed(cls, scheme: str, error: str = "") -> "AttestationRecord":
        """Empty record used when the chain could not run."""
        return cls(scheme=scheme, status=AttestationStatus.FAILED, error=error)

    @property
    def trusted(self) -> bool:
        return self.status is AttestationStatus.ATTESTED

    def require_trusted(self) -> "AttestationRecord":
        """Return self, or raise VerificationFailure unless both hops verified."""
        if not self.trusted:
            reason = self.error or f"delta verified={self.verified_delta}, sigma verified={self.verified_sigma}"
            raise VerificationFailure(
                f"attestation {self.status.value} for scheme {self.scheme}: {reason}",
                verified_delta=self.verified_delta,
                verified_sigma=self.verified_sigma,
            )
        return self
