"""
Signature schemes built on the `cryptography` package.

  - ecdsa-k1    ECDSA/SHA-256 on secp256k1, falls back to secp256r1
  - ecdsa-r1    ECDSA/SHA-256 on secp256r1
  - ed25519     Ed25519
  - schnorr-k1  ECDSA/SHA-256 on secp256k1, labelled "ECDSA-fallback"
  - bls12-381   registered stub, every operation raises
"""

import hashlib
from typing import Any, Optional

from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec, ed25519

from ..errors import KeyMismatchError, UnsupportedSchemeError
from .encoding import public_key_bytes
from .types import CurveFallback, KeyPair, SchemeInfo


def _key_id(scheme_id: str, public_key: Any) -> str:
    digest = hashlib.sha256(public_key_bytes(public_key)).hexdigest()
    return f"{scheme_id}-{digest[:8]}"


class EcdsaScheme:
    """ECDSA with SHA-256 on a named curve, optionally with a fallback curve."""

    def __init__(
        self,
        scheme_id: str,
        curve: ec.EllipticCurve,
        fallback_curve: Optional[ec.EllipticCurve] = None,
        algorithm: str = "ECDSA",
        approximated: bool = False,
    ):
        self.scheme_id = scheme_id
        self.curve = curve
        self.fallback_curve = fallback_curve
        self.algorithm = algorithm
        self.approximated = approximated

    def info(self) -> SchemeInfo:
        return SchemeInfo(
            scheme_id=self.scheme_id,
            algorithm=self.algorithm,
            curve=self.curve.name,
            hash_name="sha256",
            approximated=self.approximated,
        )

    def generate_key_pair(self) -> KeyPair:
        fallback = None
        try:
            private_key = self._generate(self.curve)
        except UnsupportedAlgorithm as e:
            if self.fallback_curve is None:
                raise UnsupportedSchemeError(self.scheme_id, f"curve {self.curve.name} not supported") from e
            try:
                private_key = self._generate(self.fallback_curve)
            except UnsupportedAlgorithm as e2:
                raise UnsupportedSchemeError(
                    self.scheme_id,
                    f"neither {self.curve.name} nor {self.fallback_curve.name} is supported",
                ) from e2
            fallback = CurveFallback(requested=self.curve.name, substituted=self.fallback_curve.name)

        public_key = private_key.public_key()
        return KeyPair(
            scheme=self.scheme_id,
            public=public_key,
            private=private_key,
            key_id=_key_id(self.scheme_id, public_key),
            curve=private_key.curve.name,
            fallback=fallback,
        )

    def sign(self, private_key: Any, message: bytes) -> bytes:
        if not isinstance(private_key, ec.EllipticCurvePrivateKey) or not self._accepts(private_key.curve):
            raise KeyMismatchError(f"{self.scheme_id} cannot sign with {type(private_key).__name__}")
        return private_key.sign(message, ec.ECDSA(hashes.SHA256()))

    def verify(self, public_key: Any, message: bytes, signature: bytes) -> bool:
        if not isinstance(public_key, ec.EllipticCurvePublicKey) or not self._accepts(public_key.curve):
            raise KeyMismatchError(f"{self.scheme_id} cannot verify with {type(public_key).__name__}")
        try:
            public_key.verify(signature, message, ec.ECDSA(hashes.SHA256()))
        except (InvalidSignature, ValueError):
            return False
        return True

    def _generate(self, curve: ec.EllipticCurve) -> ec.EllipticCurvePrivateKey:
        return ec.generate_private_key(curve)

    def _accepts(self, curve: ec.EllipticCurve) -> bool:
        names = {self.curve.name}
        if self.fallback_curve is not None:
            names.add(self.fallback_curve.name)
        return curve.name in names


class Ed25519Scheme:
    """Edwards-curve signatures over Ed25519."""

    scheme_id = "ed25519"

    def info(self) -> SchemeInfo:
        return SchemeInfo(scheme_id=self.scheme_id, algorithm="Ed25519", curve="ed25519", hash_name="sha512")

    def generate_key_pair(self) -> KeyPair:
        try:
            private_key = ed25519.Ed25519PrivateKey.generate()
        except UnsupportedAlgorithm as e:
            raise UnsupportedSchemeError(self.scheme_id, "Ed25519 not supported by the OpenSSL backend") from e
        public_key = private_key.public_key()
        return KeyPair(
            scheme=self.scheme_id,
            public=public_key,
            private=private_key,
            key_id=_key_id(self.scheme_id, public_key),
            curve="ed25519",
        )

    def sign(self, private_key: Any, message: bytes) -> bytes:
        if not isinstance(private_key, ed25519.Ed25519PrivateKey):
            raise KeyMismatchError(f"ed25519 cannot sign with {type(private_key).__name__}")
        return private_key.sign(message)

    def verify(self, public_key: Any, message: bytes, signature: bytes) -> bool:
        if not isinstance(public_key, ed25519.Ed25519PublicKey):
            raise KeyMismatchError(f"ed25519 cannot verify with {type(public_key).__name__}")
        try:
            public_key.verify(signature, message)
        except (InvalidSignature, ValueError):
            return False
        return True


class UnimplementedScheme:
    """Placeholder that keeps an id reserved but refuses every operation."""

    def __init__(self, scheme_id: str, algorithm: str, reason: str = "not yet implemented"):
        self.scheme_id = scheme_id
        self.algorithm = algorithm
        self.reason = reason

    def info(self) -> SchemeInfo:
        return SchemeInfo(scheme_id=self.scheme_id, algorithm=self.algorithm, implemented=False)

    def generate_key_pair(self) -> KeyPair:
        raise UnsupportedSchemeError(self.scheme_id, self.reason)

    def sign(self, private_key: Any, message: bytes) -> bytes:
        raise UnsupportedSchemeError(self.scheme_id, self.reason)

    def verify(self, public_key: Any, message: bytes, signature: bytes) -> bool:
        raise UnsupportedSchemeError(self.scheme_id, self.reason)


def ecdsa_k1() -> EcdsaScheme:
    return EcdsaScheme("ecdsa-k1", ec.SECP256K1(), fallback_curve=ec.SECP256R1())


def ecdsa_r1() -> EcdsaScheme:
    return EcdsaScheme("ecdsa-r1", ec.SECP256R1())


def schnorr_k1() -> EcdsaScheme:
    # Not a Schnorr signature: ECDSA on the same curve, and labelled as such.
    return EcdsaScheme("schnorr-k1", ec.SECP256K1(), algorithm="ECDSA-fallback", approximated=True)


def bls12_381() -> UnimplementedScheme:
    return UnimplementedScheme("bls12-381", "BLS", "BLS12-381 signature scheme not yet implemented")
