"""Signature and key encodings used in reports and run entries."""

import base64
import binascii
from typing import Any, Tuple

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.utils import decode_dss_signature


def to_base64(data: bytes) -> str:
    """Standard-alphabet base64 with padding."""
    return base64.b64encode(data).decode("ascii")


def from_base64(text: str) -> bytes:
    try:
        return base64.b64decode(text, validate=True)
    except binascii.Error as e:
        raise ValueError(f"invalid base64: {e}") from None


def public_key_bytes(public_key: Any) -> bytes:
    """DER SubjectPublicKeyInfo for any supported public key."""
    return public_key.public_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )


def load_public_key(der: bytes) -> Any:
    return serialization.load_der_public_key(der)


def der_to_rs(der: bytes) -> Tuple[bytes, bytes]:
    """Split a DER ECDSA signature into 32-byte big-endian r and s."""
    r, s = decode_dss_signature(der)
    return _pad32(r, "r"), _pad32(s, "s")


def rs_hex(der: bytes) -> Tuple[str, str]:
    """r and s as 0x-prefixed hex strings."""
    r, s = der_to_rs(der)
    return "0x" + r.hex(), "0x" + s.hex()


def _pad32(value: int, label: str) -> bytes:
    if value.bit_length() > 256:
        raise ValueError(f"{label} value too long: {value:x}")
    return value.to_bytes(32, "big")
