"""
Scheme-polymorphic signing front end.
"""

from typing import Any, Optional

from ..errors import KeyMismatchError
from .context import CryptoContext
from .types import KeyPair, SchemeInfo, SignatureScheme


class SignatureSchemeProvider:
    """Dispatches key generation, signing and verification by scheme id.

    Keys may be passed either raw or as the KeyPair they came from; a
    KeyPair generated under another scheme id is refused.
    """

    def __init__(self, context: Optional[CryptoContext] = None):
        self.context = context or CryptoContext()

    @property
    def logger(self):
        return self.context.logger

    def scheme(self, scheme_id: str) -> SignatureScheme:
        return self.context.registry.get(scheme_id)

    def info(self, scheme_id: str) -> SchemeInfo:
        return self.scheme(scheme_id).info()

    def generate_key_pair(self, scheme_id: str) -> KeyPair:
        scheme = self.scheme(scheme_id)
        self.logger.info(f"Generating key pair for scheme: {scheme_id}")
        info = scheme.info()
        if info.approximated:
            self.logger.warning(f"Scheme {scheme_id} is approximated with {info.algorithm} on {info.curve}")
        key_pair = scheme.generate_key_pair()
        if key_pair.fallback is not None:
            self.logger.warning(
                f"{key_pair.fallback.requested} curve not supported, falling back to {key_pair.fallback.substituted}"
            )
        return key_pair

    def sign(self, scheme_id: str, private_key: Any, message: bytes) -> bytes:
        scheme = self.scheme(scheme_id)
        return scheme.sign(self._unwrap(scheme_id, private_key, "private"), message)

    def verify(self, scheme_id: str, public_key: Any, message: bytes, signature: bytes) -> bool:
        """Return False for a wrong or malformed signature, never raise for it."""
        scheme = self.scheme(scheme_id)
        key = self._unwrap(scheme_id, public_key, "public")
        if not isinstance(signature, (bytes, bytearray)) or not signature:
            return False
        return scheme.verify(key, message, bytes(signature))

    @staticmethod
    def _unwrap(scheme_id: str, key: Any, attr: str) -> Any:
        if isinstance(key, KeyPair):
            if key.scheme != scheme_id:
                raise KeyMismatchError(f"key pair {key.key_id} belongs to {key.scheme}, not {scheme_id}")
            return getattr(key, attr)
        return key
