"""
Delta/Sigma attestation chain.

The result producer signs the canonical result bytes (Delta). An independent
attester verifies Delta, then signs a payload that binds the result hash and
the Delta hash (Sigma), which the producer verifies in turn.
"""

from typing import Callable, Optional, Tuple, TypeVar

from .context import CryptoContext
from .encoding import public_key_bytes
from .provider import SignatureSchemeProvider
from .types import (
    AttestationPayload,
    AttestationRecord,
    AttestationStatus,
    AttestationTimings,
)

T = TypeVar("T")


class AttestationChain:
    """Runs the two-hop sign/verify protocol for one scheme."""

    def __init__(self, scheme: str, provider: Optional[SignatureSchemeProvider] = None,
                 context: Optional[CryptoContext] = None):
        if provider is None:
            provider = SignatureSchemeProvider(context)
        self.scheme = scheme
        self.provider = provider
        self.context = provider.context

    def attest(self, result_bytes: bytes) -> AttestationRecord:
        """Attest result_bytes. Never raises for signing problems.

        Returns an ATTESTED or DEGRADED record when the chain completes, and
        an empty FAILED record when any step raised.
        """
        logger = self.context.logger
        try:
            record = self._run(result_bytes)
        except Exception as e:
            logger.error(f"Signature generation failed for scheme {self.scheme}: {e}", exc_info=True)
            record = AttestationRecord.failed(self.scheme, error=str(e))

        self.context.metrics.record_attestation(self.scheme, record.status.value)
        return record

    def _run(self, result_bytes: bytes) -> AttestationRecord:
        logger = self.context.logger
        provider = self.provider
        scheme = self.scheme

        producer = provider.generate_key_pair(scheme)
        attester = provider.generate_key_pair(scheme)

        delta, delta_sign_ns = self._timed("delta_sign", lambda: provider.sign(scheme, producer, result_bytes))

        delta_ok, delta_verify_ns = self._timed(
            "delta_verify", lambda: provider.verify(scheme, producer, result_bytes, delta)
        )
        if not delta_ok:
            logger.warning("Attester failed to verify delta signature")
            self.context.metrics.record_verification_failure(scheme, "delta")

        payload = AttestationPayload.build(result_bytes, delta, self.context.now_millis())
        payload_bytes = payload.to_bytes()

        sigma, sigma_sign_ns = self._timed("sigma_sign", lambda: provider.sign(scheme, attester, payload_bytes))

        sigma_ok, sigma_verify_ns = self._timed(
            "sigma_verify", lambda: provider.verify(scheme, attester, payload_bytes, sigma)
        )
        if not sigma_ok:
            logger.warning("Producer failed to verify sigma signature")
            self.context.metrics.record_verification_failure(scheme, "sigma")

        status = AttestationStatus.ATTESTED if delta_ok and sigma_ok else AttestationStatus.DEGRADED
        logger.info(f"Sig_Scheme: {scheme} status={status.value}")

        return AttestationRecord(
            scheme=scheme,
            status=status,
            delta_signature=delta,
            delta_payload=payload.encode(),
            sigma_signature=sigma,
            verified_delta=delta_ok,
            verified_sigma=sigma_ok,
            timings=AttestationTimings(
                delta_sign_ns=delta_sign_ns,
                delta_verify_ns=delta_verify_ns,
                sigma_sign_ns=sigma_sign_ns,
                sigma_verify_ns=sigma_verify_ns,
            ),
            delta_public_key=public_key_bytes(producer.public),
            sigma_public_key=public_key_bytes(attester.public),
            scheme_info=provider.info(scheme),
            curve_fallback=producer.fallback,
        )

    def _timed(self, step: str, fn: Callable[[], T]) -> Tuple[T, int]:
        clock = self.context.monotonic_ns
        start = clock()
        value = fn()
        elapsed = clock() - start
        self.context.metrics.observe_step(self.scheme, step, elapsed)
        return value, elapsed
