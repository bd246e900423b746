"""Registry of signature schemes keyed by scheme id.

New schemes are added by registering an object that implements the
SignatureScheme protocol; nothing that consumes the registry needs to change.
"""

from __future__ import annotations

from typing import Dict, List

from ..errors import UnsupportedSchemeError
from .schemes import Ed25519Scheme, bls12_381, ecdsa_k1, ecdsa_r1, schnorr_k1
from .types import SchemeInfo, SignatureScheme


class SchemeRegistry:
    """Maps scheme ids to implementations."""

    def __init__(self):
        self._schemes: Dict[str, SignatureScheme] = {}

    def register(self, scheme: SignatureScheme) -> None:
        if scheme.scheme_id in self._schemes:
            raise ValueError(f"Scheme with id '{scheme.scheme_id}' already registered")
        self._schemes[scheme.scheme_id] = scheme

    def get(self, scheme_id: str) -> SignatureScheme:
        try:
            return self._schemes[scheme_id]
        except KeyError:
            raise UnsupportedSchemeError(scheme_id, "unknown scheme id") from None

    def ids(self) -> List[str]:
        return list(self._schemes)

    def list(self) -> List[SchemeInfo]:
        return [s.info() for s in self._schemes.values()]

    def __contains__(self, scheme_id: object) -> bool:
        return scheme_id in self._schemes


def default_registry() -> SchemeRegistry:
    """Registry with every built-in scheme, including the bls12-381 stub."""
    registry = SchemeRegistry()
    for scheme in (ecdsa_k1(), ecdsa_r1(), Ed25519Scheme(), schnorr_k1(), bls12_381()):
        registry.register(scheme)
    return registry


__all__ = ["SchemeRegistry", "default_registry"]
